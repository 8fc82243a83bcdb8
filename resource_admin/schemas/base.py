# ================================
# BASE SCHEMAS (schemas/base.py)
# ================================

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional


class BaseSchema(BaseModel):
    """Base schema with shared configuration"""
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_assignment=True,
        arbitrary_types_allowed=True,
    )


# ================================
# ERROR RESPONSE SCHEMAS
# ================================

class ErrorResponse(BaseSchema):
    """Standard Error Response Schema"""
    detail: str = Field(..., description="Error message")
    error_code: Optional[str] = Field(None, description="Application-specific error code")
    request_id: Optional[str] = Field(None, description="Request id for log correlation")
    field_errors: Optional[Dict[str, List[str]]] = Field(None, description="Validation errors by field")


class MessageResponse(BaseSchema):
    """Standard Success Response Schema"""
    message: str = Field(..., description="Success message")


# ================================
# WRITE RESPONSE SCHEMAS
# ================================

class WriteResponse(MessageResponse):
    """store / update / destroy result with the follow-up location"""
    redirect: str = Field(..., description="URL the client should navigate to")
    id: Optional[Any] = Field(None, description="Id of the written record")


class BulkActionResponse(MessageResponse):
    redirect: str
    count: int = Field(..., description="Number of records the action was applied to")


# ================================
# PAGE SCHEMAS
# ================================

class PageResponse(BaseSchema):
    """Inertia-style page object"""
    component: str
    props: Dict[str, Any]
    url: str
    version: Optional[str] = None
