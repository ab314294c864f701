"""
Description:
Schema for the health check response.

Dependencies:
- pydantic: For data validation and settings management.
"""
from typing import Literal
from pydantic import BaseModel

class HealthResponse(BaseModel):
    status: Literal["ok"]
