"""
SlenderHub: catalog domain models and the gated unlock flow for scripts.
"""

__version__ = "0.1.0"
