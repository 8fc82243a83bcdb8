from resource_admin.schemas.base import (
    BaseSchema,
    BulkActionResponse,
    ErrorResponse,
    MessageResponse,
    PageResponse,
    WriteResponse,
)
from resource_admin.schemas.bulk_action import BulkActionRequest
from resource_admin.schemas.column_preferences import ColumnPreferenceResponse, ColumnPreferences

__all__ = [
    "BaseSchema",
    "BulkActionResponse",
    "ErrorResponse",
    "MessageResponse",
    "PageResponse",
    "WriteResponse",
    "BulkActionRequest",
    "ColumnPreferenceResponse",
    "ColumnPreferences",
]
