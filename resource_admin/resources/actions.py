# ================================
# ROW & BULK ACTIONS (resources/actions.py)
# ================================

from typing import Any, Dict, Optional


class AjaxAction:
    """Row action that calls back into the admin over XHR"""

    def __init__(self, type: str, data: Any = None):
        self.type = type
        self._data = data
        self._color = "primary"
        self._icon = "mdi-plus"
        self._parameters: Dict[str, Any] = {}

    @classmethod
    def make(cls, type: str, data: Any = None) -> "AjaxAction":
        return cls(type, data)

    def color(self, color: str) -> "AjaxAction":
        self._color = color
        return self

    def icon(self, icon: str) -> "AjaxAction":
        self._icon = icon
        return self

    def parameters(self, parameters: Dict[str, Any]) -> "AjaxAction":
        self._parameters = parameters
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "data": self._data,
            "color": self._color,
            "icon": self._icon,
            "parameters": self._parameters,
        }


class ArchiveAction:
    """Row delete action"""

    type = "delete"

    def __init__(self, data: Any = None):
        self._data = data
        self._color = "primary"
        self._icon = "mdi-pencil"

    @classmethod
    def make(cls, data: Any = None) -> "ArchiveAction":
        return cls(data)

    def color(self, color: str) -> "ArchiveAction":
        self._color = color
        return self

    def icon(self, icon: str) -> "ArchiveAction":
        self._icon = icon
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "data": self._data,
            "color": self._color,
            "icon": self._icon,
        }


class BulkAction:
    """Operation applied to a selected set of record ids"""

    def __init__(self, name: str, label: str):
        self.name = name
        self.label = label
        self._color = "primary"
        self._icon: Optional[str] = None
        self._requires_confirmation = False
        self._confirmation_message: Optional[str] = None

    @classmethod
    def make(cls, name: str, label: str) -> "BulkAction":
        return cls(name, label)

    def color(self, color: str) -> "BulkAction":
        self._color = color
        return self

    def icon(self, icon: str) -> "BulkAction":
        self._icon = icon
        return self

    def requires_confirmation(self, message: str = "Are you sure?") -> "BulkAction":
        self._requires_confirmation = True
        self._confirmation_message = message
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "label": self.label,
            "color": self._color,
            "icon": self._icon,
            "requiresConfirmation": self._requires_confirmation,
            "confirmationMessage": self._confirmation_message,
        }


def serialize_action(action: Any) -> Dict[str, Any]:
    return action.to_dict() if hasattr(action, "to_dict") else dict(action)
