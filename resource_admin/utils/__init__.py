# ================================
# UTILITIES PACKAGE (utils/__init__.py)
# ================================

import logging

from resource_admin.utils.imports import import_string, resolve_optional
from resource_admin.utils.strings import snake_case, kebab_case, title_case, pluralize


def setup_logging(level: str = "INFO") -> None:
    """
    Setup application logging configuration

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


__all__ = [
    "import_string",
    "resolve_optional",
    "snake_case",
    "kebab_case",
    "title_case",
    "pluralize",
    "setup_logging",
]
