"""
Description:
Validated request structures handed to the prompt builder.

These are produced by the request validator once presence and shape checks pass,
so downstream code never sees missing fields.

Dependencies:
- pydantic: For data validation and settings management.
"""
from typing import List
from pydantic import BaseModel, Field
from app.schemas.generation_schemas.interview_type import InterviewType

class GenerationRequest(BaseModel):
    role: str
    interview_type: InterviewType
    experience_years: str
    question_count: int = Field(gt=0)

class FeedbackRequest(BaseModel):
    role: str
    interview_type: InterviewType
    questions: List[str]
    answers: List[str]
