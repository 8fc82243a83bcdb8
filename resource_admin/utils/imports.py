# ================================
# IMPORT UTILITIES (utils/imports.py)
# ================================

from importlib import import_module
from typing import Any, Optional
import logging

logger = logging.getLogger(__name__)


def import_string(dotted_path: str) -> Any:
    """
    Import an attribute from a dotted module path

    Args:
        dotted_path: e.g. "resource_admin.models.user.User"

    Raises:
        ImportError: if the module or attribute does not exist
    """
    try:
        module_path, attribute = dotted_path.rsplit('.', 1)
    except ValueError as e:
        raise ImportError(f"'{dotted_path}' is not a dotted module path") from e

    module = import_module(module_path)
    try:
        return getattr(module, attribute)
    except AttributeError as e:
        raise ImportError(f"Module '{module_path}' has no attribute '{attribute}'") from e


def resolve_optional(dotted_path: Optional[str]) -> Optional[Any]:
    """Import an optional class; None when unset or not importable"""
    if not dotted_path:
        return None

    try:
        return import_string(dotted_path)
    except ImportError as e:
        logger.debug(f"Optional import '{dotted_path}' unavailable: {e}")
        return None
