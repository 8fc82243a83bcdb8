# ================================
# PRESET VIEWS (resources/presets.py)
# ================================

"""
Named query modifiers selectable from the index page.

Definitions may be given as ``PresetView`` objects, dicts or bare strings;
``normalize_presets`` turns any mix of them into an ordered ``{key: PresetView}``
mapping.
"""

from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union
import logging

from resource_admin.utils.strings import title_case

logger = logging.getLogger(__name__)

PresetCallback = Callable[[Any, Any], Any]

UNGROUPED = "ungrouped"
UNGROUPED_LABEL = "Other"

DISPLAY_KEYS = ("description", "icon", "color", "badge")


class PresetView:
    def __init__(
        self,
        key: str,
        label: Optional[str] = None,
        query: Optional[PresetCallback] = None,
        group: Optional[str] = None,
        group_label: Optional[str] = None,
        description: Optional[str] = None,
        icon: Optional[str] = None,
        color: Optional[str] = None,
        badge: Any = None,
    ):
        self.key = key
        self.label = label or title_case(key)
        self.callback = query
        self.group = group
        self.group_label = group_label
        self.description = description
        self.icon = icon
        self.color = color
        self.badge = badge

    @classmethod
    def make(cls, key: str, label: Optional[str] = None) -> "PresetView":
        return cls(key, label)

    def query(self, callback: PresetCallback) -> "PresetView":
        self.callback = callback
        return self

    def in_group(self, group: str, label: Optional[str] = None) -> "PresetView":
        self.group = group
        self.group_label = label
        return self

    def with_display(self, **display: Any) -> "PresetView":
        """Set description / icon / color / badge"""
        for key, value in display.items():
            if key in DISPLAY_KEYS:
                setattr(self, key, value)
        return self

    def apply(self, query: Any, request: Any = None) -> Any:
        """Run the transform; no callback (or a None result) leaves the query as is"""
        if self.callback is None:
            return query
        result = self.callback(query, request)
        return query if result is None else result

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"key": self.key, "label": self.label}
        for key in DISPLAY_KEYS:
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data

    def __repr__(self):
        return f"<PresetView(key='{self.key}')>"


def _from_dict(key: Optional[str], definition: Mapping[str, Any]) -> Optional[PresetView]:
    key = definition.get("key", key)
    if not key:
        return None
    return PresetView(
        key=key,
        label=definition.get("label"),
        query=definition.get("query") or definition.get("apply"),
        group=definition.get("group"),
        group_label=definition.get("group_label"),
        description=definition.get("description"),
        icon=definition.get("icon"),
        color=definition.get("color"),
        badge=definition.get("badge"),
    )


def _normalize_one(key: Optional[str], definition: Any) -> Optional[PresetView]:
    if isinstance(definition, PresetView):
        return definition
    if isinstance(definition, Mapping):
        return _from_dict(key, definition)
    if isinstance(definition, str):
        return PresetView(definition)
    if hasattr(definition, "key"):
        key_attr = definition.key
        preset_key = key_attr() if callable(key_attr) else key_attr
        callback = getattr(definition, "apply", None) or getattr(definition, "query", None)
        return PresetView(
            key=preset_key,
            label=getattr(definition, "label", None),
            query=callback if callable(callback) else None,
            group=getattr(definition, "group", None),
        )
    return None


def normalize_presets(
    definitions: Union[Mapping[str, Any], Iterable[Any], None]
) -> Dict[str, PresetView]:
    """Resolve preset definitions into an insertion-ordered key -> PresetView map"""
    if not definitions:
        return {}

    if isinstance(definitions, Mapping):
        items = list(definitions.items())
    else:
        items = [(None, definition) for definition in definitions]

    presets: Dict[str, PresetView] = {}
    for key, definition in items:
        preset = _normalize_one(key, definition)
        if preset is None:
            logger.debug(f"Skipping unrecognized preset definition: {definition!r}")
            continue
        presets[preset.key] = preset
    return presets


def group_presets(presets: Mapping[str, PresetView]) -> List[Dict[str, Any]]:
    """
    Group presets for the index toolbar.

    Groups appear in first-seen order with the synthetic "Other" group last.
    """
    groups: Dict[str, Dict[str, Any]] = {}
    ungrouped: List[Dict[str, Any]] = []

    for preset in presets.values():
        if not preset.group:
            ungrouped.append(preset.to_dict())
            continue

        if preset.group not in groups:
            groups[preset.group] = {
                "name": preset.group,
                "label": preset.group_label or title_case(preset.group),
                "presets": [],
            }
        groups[preset.group]["presets"].append(preset.to_dict())

    result = list(groups.values())
    if ungrouped:
        result.append({"name": UNGROUPED, "label": UNGROUPED_LABEL, "presets": ungrouped})
    return result
