"""
Catalog: лента, публикация и admin capability.
"""

from slenderhub.catalog.admin import (
    AdminCapability,
    AdminDirectory,
    AdminLookupError,
    StaticAdminDirectory,
)
from slenderhub.catalog.feed import FeedConfig, matches_query, search_scripts, trending_scripts
from slenderhub.catalog.publish import (
    PublishDraft,
    PublishValidationError,
    new_task,
    thumbnail_path,
)

__all__ = [
    "AdminCapability",
    "AdminDirectory",
    "AdminLookupError",
    "StaticAdminDirectory",
    "FeedConfig",
    "matches_query",
    "search_scripts",
    "trending_scripts",
    "PublishDraft",
    "PublishValidationError",
    "new_task",
    "thumbnail_path",
]
