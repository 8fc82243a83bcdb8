# ================================
# RESOURCE REGISTRY (resources/registry.py)
# ================================

from importlib import import_module
from typing import Dict, Iterable, List, Optional, Type
import logging

from resource_admin.resources.resource import Resource

logger = logging.getLogger(__name__)


class ResourceRegistry:
    """
    Explicit registry of admin resources, keyed by slug.

    Resources register themselves with ``@registry.register``; the modules
    holding them are imported at startup through ``load_modules``.
    """

    def __init__(self):
        self._resources: Dict[str, Type[Resource]] = {}

    def register(self, resource_cls: Type[Resource]) -> Type[Resource]:
        slug = resource_cls.get_slug()
        existing = self._resources.get(slug)
        if existing is not None and existing is not resource_cls:
            logger.warning(
                f"Resource slug '{slug}' registered twice: "
                f"{existing.__name__} replaced by {resource_cls.__name__}"
            )
        self._resources[slug] = resource_cls
        logger.debug(f"Registered resource '{slug}' ({resource_cls.__name__})")
        return resource_cls

    def get(self, slug: str) -> Optional[Type[Resource]]:
        return self._resources.get(slug)

    def all(self) -> List[Type[Resource]]:
        return list(self._resources.values())

    def load_modules(self, module_paths: Iterable[str]) -> None:
        """Import resource modules so their register decorators run"""
        for module_path in module_paths:
            try:
                import_module(module_path)
            except ImportError as e:
                logger.warning(f"Could not import resource module '{module_path}': {e}")

    def register_module(self, module_path: str) -> None:
        """Register the resources a module lists in its ``RESOURCES`` attribute"""
        try:
            module = import_module(module_path)
        except ImportError as e:
            logger.warning(f"Could not import resource module '{module_path}': {e}")
            return

        resources = getattr(module, "RESOURCES", None)
        if not resources:
            logger.warning(f"Resource module '{module_path}' declares no RESOURCES")
            return

        for resource_cls in resources:
            self.register(resource_cls)

    def __contains__(self, slug: str) -> bool:
        return slug in self._resources

    def __len__(self) -> int:
        return len(self._resources)


# Default registry used by @register when no explicit registry is passed around
registry = ResourceRegistry()
register = registry.register
