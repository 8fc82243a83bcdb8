# ================================
# BULK ACTION SCHEMAS (schemas/bulk_action.py)
# ================================

from typing import Any, List
from pydantic import BaseModel, Field


class BulkActionRequest(BaseModel):
    action: str = Field(..., min_length=1, description="Bulk action name, e.g. 'delete'")
    ids: List[Any] = Field(..., description="Ids of the selected records")
