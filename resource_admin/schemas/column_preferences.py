# ================================
# COLUMN PREFERENCE SCHEMAS (schemas/column_preferences.py)
# ================================

from typing import List, Optional
from pydantic import BaseModel, Field


class ColumnPreferences(BaseModel):
    """Stored column order and hidden set for one resource"""
    order: List[str] = Field(..., description="Column keys in display order")
    hidden: List[str] = Field(..., description="Column keys hidden from the table")


class ColumnPreferenceResponse(BaseModel):
    preferences: Optional[ColumnPreferences] = None
