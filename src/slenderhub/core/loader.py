"""
Loader: генерация loader-строки для скрипта.

Loader-строка загружает исходник по HTTP GET и сразу исполняет его.
URL подставляется как есть: ни парсинга, ни валидации не выполняется.
"""

from typing import Final

LOADER_TEMPLATE: Final[str] = 'loadstring(game:HttpGet("{raw_link}"))()'


def generate_loader(raw_link: str) -> str:
    """
    Loader-строка для raw source URL.

    Args:
        raw_link: URL сырого исходника

    Returns:
        loadstring(game:HttpGet("<raw_link>"))()
    """
    return LOADER_TEMPLATE.format(raw_link=raw_link)
