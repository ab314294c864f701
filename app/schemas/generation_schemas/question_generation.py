"""
Description:
Schemas for the question generation endpoint.

The request model is deliberately loose: every field is optional so that missing
values reach the request validator and produce a 400 with a fixed message instead
of a framework validation error. years and numQuestions are strict so that JSON
booleans are rejected instead of being coerced to 1 or "True".

Dependencies:
- pydantic: For data validation and settings management.
"""
from typing import List, Optional, Union
from pydantic import BaseModel, Field, StrictInt, StrictStr

class QuestionGenerationRequest(BaseModel):
    role: Optional[str] = None
    type: Optional[str] = None
    years: Optional[Union[StrictStr, StrictInt]] = None
    numQuestions: Optional[Union[StrictInt, StrictStr]] = None

class QuestionGenerationResponse(BaseModel):
    questions: List[str] = Field(description="Generated interview questions")
