"""
Description:
Schema for JSON error bodies returned by every endpoint.

Dependencies:
- pydantic: For data validation and settings management.
"""
from typing import Any, Optional
from pydantic import BaseModel

class ErrorResponse(BaseModel):
    error: str
    details: Optional[Any] = None
