# ================================
# RESOURCE DECLARATIONS (resources/__init__.py)
# ================================

from resource_admin.resources.actions import AjaxAction, ArchiveAction, BulkAction
from resource_admin.resources.columns import (
    ArrayColumn,
    BadgeColumn,
    BooleanColumn,
    Column,
    DateColumn,
    JsonColumn,
    LinkColumn,
    MoneyColumn,
    PercentageColumn,
    TextColumn,
)
from resource_admin.resources.fields import (
    AnchorTagField,
    CheckboxField,
    DateField,
    DateTimeField,
    Field,
    FileUploadField,
    GoogleMapsField,
    MaskedField,
    MultiSelectField,
    NumberField,
    RelationshipField,
    RepeaterField,
    RichEditorField,
    SelectField,
    TextareaField,
    TextField,
    TimeField,
    ToggleField,
)
from resource_admin.resources.filters import (
    BooleanFilter,
    CustomFilter,
    DateFilter,
    Filter,
    NumberFilter,
    SelectFilter,
    TrashedFilter,
)
from resource_admin.resources.presets import PresetView
from resource_admin.resources.registry import ResourceRegistry, register, registry
from resource_admin.resources.resource import Resource
from resource_admin.resources.visibility import is_field_visible, visible_fields

__all__ = [
    "AjaxAction", "ArchiveAction", "BulkAction",
    "Column", "TextColumn", "BadgeColumn", "BooleanColumn", "DateColumn",
    "MoneyColumn", "PercentageColumn", "JsonColumn", "LinkColumn", "ArrayColumn",
    "Field", "TextField", "TextareaField", "NumberField", "CheckboxField",
    "DateField", "DateTimeField", "TimeField", "ToggleField", "SelectField",
    "RelationshipField", "MultiSelectField", "MaskedField", "RichEditorField",
    "FileUploadField", "RepeaterField", "AnchorTagField", "GoogleMapsField",
    "Filter", "SelectFilter", "BooleanFilter", "DateFilter", "NumberFilter",
    "CustomFilter", "TrashedFilter",
    "PresetView",
    "Resource", "ResourceRegistry", "registry", "register",
    "is_field_visible", "visible_fields",
]
