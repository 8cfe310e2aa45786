# /intake/models/api.py

from datetime import datetime
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field

from intake.models.flow import FieldErrors

# This file contains Pydantic models that define the structure of data for
# API requests and responses, ensuring type safety and validation.


class PageActionRequest(BaseModel):
    action: str = Field(..., min_length=1, max_length=32)
    data: Optional[Any] = None
    section: Optional[str] = None


class PageResponse(BaseModel):
    state: str
    tab_id: str
    section: Optional[str] = None
    form_values: Optional[Any] = None
    form_errors: Optional[FieldErrors] = None
    context: Optional[Dict[str, Any]] = None


class APIResponse(BaseModel):
    success: bool
    message: str
    data: Optional[Dict] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    version: str
