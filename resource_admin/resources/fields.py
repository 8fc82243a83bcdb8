# ================================
# FORM FIELDS (resources/fields.py)
# ================================

"""
Form field declarations.

The envelope always carries min/max/step/after/before (None when unset) so the
frontend can read them without guarding; conditional visibility keys are only
emitted when configured.
"""

from typing import Any, Callable, Dict, List, Optional

OPERATOR_ALIASES = {
    "=": "equals",
    "==": "equals",
    "!=": "not_equals",
    "<>": "not_equals",
    ">": "greater_than",
    "<": "less_than",
    ">=": "greater_than_or_equal",
    "<=": "less_than_or_equal",
}


def normalize_operator(operator: str) -> str:
    return OPERATOR_ALIASES.get(operator, operator)


def normalize_condition(field: str, operator: str, value: Any) -> Dict[str, Any]:
    return {
        "field": field,
        "operator": normalize_operator(operator),
        "value": value,
    }


class Field:
    """Common form field envelope"""

    type: str = "text"

    def __init__(self, name: str, label: str):
        self.name = name
        self.label = label
        self._type = self.type
        self._required = False
        self._rules: List[str] = []
        self._value: Any = None
        self._options: List[Any] = []
        self._placeholder = ""
        self._disabled = False
        self._validation_messages: Dict[str, str] = {}
        self._show_when: Optional[Dict[str, Any]] = None
        self._hide_when: Optional[Dict[str, Any]] = None
        self._show_when_conditions: Dict[str, Any] = {}
        self._hide_when_conditions: Dict[str, Any] = {}
        self._min: Any = None
        self._max: Any = None
        self._step: Any = None
        self._after: Any = None
        self._before: Any = None
        self._default: Any = None
        self._column_span = 12

    @classmethod
    def make(cls, name: str, label: str) -> "Field":
        return cls(name, label)

    def field_type(self, type_name: str) -> "Field":
        self._type = type_name
        return self

    def required(self, required: bool = True) -> "Field":
        self._required = required
        if required and "required" not in self._rules:
            self._rules.append("required")
        return self

    def rules(self, rules: List[str]) -> "Field":
        self._rules.extend(rules)
        return self

    def value(self, value: Any) -> "Field":
        self._value = value
        return self

    def default(self, default: Any) -> "Field":
        self._default = default
        return self

    def options(self, options: List[Any]) -> "Field":
        self._options = options
        return self

    def placeholder(self, placeholder: str) -> "Field":
        self._placeholder = placeholder
        return self

    def disabled(self, disabled: bool = True) -> "Field":
        self._disabled = disabled
        return self

    def validation_messages(self, messages: Dict[str, str]) -> "Field":
        self._validation_messages = messages
        return self

    def show_when(self, field: str, operator: str, value: Any) -> "Field":
        self._show_when = normalize_condition(field, operator, value)
        return self

    visible_when = show_when

    def hide_when(self, field: str, operator: str, value: Any) -> "Field":
        self._hide_when = normalize_condition(field, operator, value)
        return self

    hidden_when = hide_when

    def show_when_all(self, conditions: List[Dict[str, Any]]) -> "Field":
        self._show_when_conditions = self._compound("AND", conditions)
        return self

    def show_when_any(self, conditions: List[Dict[str, Any]]) -> "Field":
        self._show_when_conditions = self._compound("OR", conditions)
        return self

    def hide_when_all(self, conditions: List[Dict[str, Any]]) -> "Field":
        self._hide_when_conditions = self._compound("AND", conditions)
        return self

    def hide_when_any(self, conditions: List[Dict[str, Any]]) -> "Field":
        self._hide_when_conditions = self._compound("OR", conditions)
        return self

    def column_span(self, span: int) -> "Field":
        self._column_span = span
        return self

    @staticmethod
    def _compound(kind: str, conditions: List[Dict[str, Any]]) -> Dict[str, Any]:
        return {
            "type": kind,
            "conditions": [
                normalize_condition(c["field"], c["operator"], c["value"])
                for c in conditions
            ],
        }

    def _extra(self) -> Dict[str, Any]:
        """Type specific keys merged over the envelope"""
        return {}

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "name": self.name,
            "label": self.label,
            "type": self._type,
            "required": self._required,
            "rules": list(self._rules),
            "value": self._value,
            "options": self._options,
            "placeholder": self._placeholder,
            "disabled": self._disabled,
            "validationMessages": self._validation_messages,
            "min": self._min,
            "max": self._max,
            "step": self._step,
            "after": self._after,
            "before": self._before,
            "default": self._default,
            "columnSpan": self._column_span,
        }

        if self._show_when is not None:
            data["show_when"] = self._show_when
        if self._hide_when is not None:
            data["hide_when"] = self._hide_when
        if self._show_when_conditions:
            data["show_when_conditions"] = self._show_when_conditions
        if self._hide_when_conditions:
            data["hide_when_conditions"] = self._hide_when_conditions

        data.update(self._extra())
        return data

    def __repr__(self):
        return f"<{type(self).__name__}(name='{self.name}')>"


class TextField(Field):
    type = "text"


class TextareaField(Field):
    type = "textarea"

    def __init__(self, name: str, label: str):
        super().__init__(name, label)
        self._rows = 3

    def rows(self, rows: int) -> "TextareaField":
        self._rows = rows
        return self

    def _extra(self) -> Dict[str, Any]:
        return {"rows": self._rows}


class NumberField(Field):
    type = "number"

    def step(self, step: float) -> "NumberField":
        self._step = step
        return self

    def min(self, minimum: float) -> "NumberField":
        self._min = minimum
        return self

    def max(self, maximum: float) -> "NumberField":
        self._max = maximum
        return self


class CheckboxField(Field):
    type = "checkbox"

    def __init__(self, name: str, label: str):
        super().__init__(name, label)
        self._default_value: Optional[bool] = False
        self._help_text: Optional[str] = None
        self._color: Optional[str] = None
        self._bg_color: Optional[str] = None
        self._density: Optional[str] = None

    def default_value(self, value: Optional[bool]) -> "CheckboxField":
        self._default_value = value
        return self

    def help_text(self, text: Optional[str]) -> "CheckboxField":
        self._help_text = text
        return self

    def color(self, color: Optional[str]) -> "CheckboxField":
        self._color = color
        return self

    def bg_color(self, color: Optional[str]) -> "CheckboxField":
        self._bg_color = color
        return self

    def density(self, density: Optional[str]) -> "CheckboxField":
        self._density = density
        return self

    def _extra(self) -> Dict[str, Any]:
        return {
            "defaultValue": self._default_value,
            "helpText": self._help_text,
            "color": self._color,
            "bgColor": self._bg_color,
            "density": self._density,
        }


class DateField(Field):
    type = "date"

    def min(self, minimum: str) -> "DateField":
        self._min = minimum
        return self

    def max(self, maximum: str) -> "DateField":
        self._max = maximum
        return self

    def after(self, field: str) -> "DateField":
        self._after = field
        return self

    def before(self, field: str) -> "DateField":
        self._before = field
        return self


class DateTimeField(DateField):
    type = "datetime"


class TimeField(Field):
    type = "time"


class ToggleField(Field):
    type = "toggle"

    def default(self, default: Any) -> "ToggleField":
        self._default = bool(default)
        return self


class SelectField(Field):
    type = "select"

    def __init__(self, name: str, label: str):
        super().__init__(name, label)
        self._relationship: Optional[str] = None
        self._title_attribute: Optional[str] = None
        self._multiple = False

    def relationship(self, relationship: str, title_attribute: str = "name") -> "SelectField":
        self._relationship = relationship
        self._title_attribute = title_attribute
        return self

    def multiple(self, multiple: bool = True) -> "SelectField":
        self._multiple = multiple
        return self

    def _extra(self) -> Dict[str, Any]:
        extra: Dict[str, Any] = {"multiple": self._multiple}
        if self._relationship is not None:
            extra["relationship"] = self._relationship
            extra["titleAttribute"] = self._title_attribute or "name"
        return extra


class RelationshipField(SelectField):
    """Select backed by a related model; modify_query_using is server-side only"""

    def __init__(self, name: str, label: str):
        super().__init__(name, label)
        self._searchable: Optional[bool] = None
        self.query_modifier: Optional[Callable] = None

    def searchable(self, searchable: bool = True) -> "RelationshipField":
        self._searchable = searchable
        return self

    def modify_query_using(self, callback: Callable) -> "RelationshipField":
        self.query_modifier = callback
        return self

    def _extra(self) -> Dict[str, Any]:
        extra = super()._extra()
        extra["searchable"] = self._searchable
        return extra


class MultiSelectField(Field):
    type = "multi-select"

    def __init__(self, name: str, label: str):
        super().__init__(name, label)
        self._item_title = "label"
        self._item_value = "value"
        self._relationship: Optional[str] = None
        self._title_attribute: Optional[str] = None

    def items(self, items: List[Any]) -> "MultiSelectField":
        self._options = items
        return self

    def item_title(self, item_title: str) -> "MultiSelectField":
        self._item_title = item_title
        return self

    def item_value(self, item_value: str) -> "MultiSelectField":
        self._item_value = item_value
        return self

    def relationship(self, relationship: str, title_attribute: str = "name") -> "MultiSelectField":
        self._relationship = relationship
        self._title_attribute = title_attribute
        return self

    def _extra(self) -> Dict[str, Any]:
        extra: Dict[str, Any] = {
            "itemTitle": self._item_title,
            "itemValue": self._item_value,
        }
        if self._relationship is not None:
            extra["relationship"] = self._relationship
            extra["titleAttribute"] = self._title_attribute or "name"
        return extra


class MaskedField(Field):
    type = "masked"

    def __init__(self, name: str, label: str):
        super().__init__(name, label)
        self._mask = ""
        self._show_format = True

    def mask(self, mask: str) -> "MaskedField":
        self._mask = mask
        return self

    def show_format(self, show: bool = True) -> "MaskedField":
        self._show_format = show
        return self

    def _extra(self) -> Dict[str, Any]:
        return {"mask": self._mask, "showFormat": self._show_format}


class RichEditorField(Field):
    type = "rich_editor"

    def __init__(self, name: str, label: str):
        super().__init__(name, label)
        self._toolbar_buttons: List[str] = []
        self._disable_toolbar_buttons = False
        self._max_length: Optional[int] = None

    def toolbar_buttons(self, buttons: List[str]) -> "RichEditorField":
        self._toolbar_buttons = buttons
        return self

    def disable_toolbar_buttons(self, buttons: List[str] = None) -> "RichEditorField":
        self._disable_toolbar_buttons = True
        self._toolbar_buttons = buttons or []
        return self

    def max_length(self, length: int) -> "RichEditorField":
        self._max_length = length
        return self

    def _extra(self) -> Dict[str, Any]:
        return {
            "toolbarButtons": self._toolbar_buttons,
            "disableToolbarButtons": self._disable_toolbar_buttons,
            "maxLength": self._max_length,
        }


class FileUploadField(Field):
    type = "file_upload"

    def __init__(self, name: str, label: str):
        super().__init__(name, label)
        self._max_size: Optional[int] = None
        self._accepted_file_types: List[str] = []
        self._multiple = False
        self._max_files: Optional[int] = None
        self._image = False
        self._image_preview = True
        self._directory: Optional[str] = None
        self._disk: Optional[str] = None
        self._visibility: Optional[str] = None

    def max_size(self, kilobytes: int) -> "FileUploadField":
        self._max_size = kilobytes
        return self

    def accepted_file_types(self, types: List[str]) -> "FileUploadField":
        self._accepted_file_types = types
        return self

    def multiple(self, multiple: bool = True) -> "FileUploadField":
        self._multiple = multiple
        return self

    def max_files(self, count: int) -> "FileUploadField":
        self._max_files = count
        return self

    def image(self) -> "FileUploadField":
        self._image = True
        self._accepted_file_types = ["image/*"]
        return self

    def image_preview(self, preview: bool = True) -> "FileUploadField":
        self._image_preview = preview
        return self

    def directory(self, directory: str) -> "FileUploadField":
        self._directory = directory
        return self

    def disk(self, disk: str) -> "FileUploadField":
        self._disk = disk
        return self

    def visibility(self, visibility: str) -> "FileUploadField":
        self._visibility = visibility
        return self

    def _extra(self) -> Dict[str, Any]:
        return {
            "maxSize": self._max_size,
            "acceptedFileTypes": self._accepted_file_types,
            "multiple": self._multiple,
            "maxFiles": self._max_files,
            "image": self._image,
            "imagePreview": self._image_preview,
            "directory": self._directory,
            "disk": self._disk,
            "visibility": self._visibility,
        }


class RepeaterField(Field):
    type = "repeater"

    def __init__(self, name: str, label: str):
        super().__init__(name, label)
        self._schema: List[Any] = []
        self._min_items: Optional[int] = None
        self._max_items: Optional[int] = None
        self._collapsible = False
        self._reorderable = True
        self._deletable = True
        self._addable = True

    def schema(self, schema: List[Any]) -> "RepeaterField":
        self._schema = schema
        return self

    def min_items(self, min_items: int) -> "RepeaterField":
        self._min_items = min_items
        return self

    def max_items(self, max_items: int) -> "RepeaterField":
        self._max_items = max_items
        return self

    def collapsible(self, collapsible: bool = True) -> "RepeaterField":
        self._collapsible = collapsible
        return self

    def reorderable(self, reorderable: bool = True) -> "RepeaterField":
        self._reorderable = reorderable
        return self

    def deletable(self, deletable: bool = True) -> "RepeaterField":
        self._deletable = deletable
        return self

    def addable(self, addable: bool = True) -> "RepeaterField":
        self._addable = addable
        return self

    def _extra(self) -> Dict[str, Any]:
        return {
            "schema": [serialize_field(field) for field in self._schema],
            "minItems": self._min_items,
            "maxItems": self._max_items,
            "collapsible": self._collapsible,
            "reorderable": self._reorderable,
            "deletable": self._deletable,
            "addable": self._addable,
        }


class AnchorTagField(Field):
    type = "anchor_tag"

    VALID_BUTTON_COLORS = (
        "primary", "secondary", "success", "danger",
        "warning", "info", "light", "dark",
    )

    def __init__(self, name: str, label: str):
        super().__init__(name, label)
        self._url = ""
        self._open_in_new_tab = False
        self._button_color = "primary"

    def url(self, url: str) -> "AnchorTagField":
        self._url = url
        return self

    def open_in_new_tab(self, open_in_new_tab: bool = True) -> "AnchorTagField":
        self._open_in_new_tab = open_in_new_tab
        return self

    def button_color(self, color: str) -> "AnchorTagField":
        # Unknown colors are ignored
        if color in self.VALID_BUTTON_COLORS:
            self._button_color = color
        return self

    def _extra(self) -> Dict[str, Any]:
        return {
            "url": self._url,
            "open_in_new_tab": self._open_in_new_tab,
            "button_color": self._button_color,
            "valid_button_colors": list(self.VALID_BUTTON_COLORS),
        }


class GoogleMapsField(Field):
    type = "google-maps"

    def __init__(self, name: str, label: str):
        super().__init__(name, label)
        self._map_options: Dict[str, Any] = {}
        self._show_map = True
        self._show_coordinates = True
        self._map_height = 300
        self._api_key = ""
        self._autocomplete_options: Dict[str, Any] = {}

    def map_options(self, options: Dict[str, Any]) -> "GoogleMapsField":
        self._map_options = options
        return self

    def show_map(self, show: bool = True) -> "GoogleMapsField":
        self._show_map = show
        return self

    def show_coordinates(self, show: bool = True) -> "GoogleMapsField":
        self._show_coordinates = show
        return self

    def map_height(self, height: int) -> "GoogleMapsField":
        self._map_height = height
        return self

    def api_key(self, api_key: str) -> "GoogleMapsField":
        self._api_key = api_key
        return self

    def autocomplete_options(self, options: Dict[str, Any]) -> "GoogleMapsField":
        self._autocomplete_options = options
        return self

    def _extra(self) -> Dict[str, Any]:
        return {
            "mapOptions": self._map_options,
            "showMap": self._show_map,
            "showCoordinates": self._show_coordinates,
            "mapHeight": self._map_height,
            "apiKey": self._api_key,
            "autocompleteOptions": self._autocomplete_options,
        }


def serialize_field(field: Any) -> Dict[str, Any]:
    """Field object or pre-built dict -> flat record"""
    return field.to_dict() if hasattr(field, "to_dict") else dict(field)
