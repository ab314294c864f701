"""
Description:
Schemas for the interview feedback endpoint.

Dependencies:
- pydantic: For data validation and settings management.
"""
from typing import List, Optional, Union
from pydantic import BaseModel, Field

class InterviewFeedbackRequest(BaseModel):
    role: Optional[str] = None
    type: Optional[str] = None
    questions: Optional[List[str]] = None
    answers: Optional[List[str]] = None

class QuestionFeedback(BaseModel):
    question: str = Field(default="", description="Question text")
    answer: str = Field(default="", description="Candidate's answer")
    score: Union[int, float] = Field(ge=0, le=100, description="Score between 0 and 100")
    betterAnswer: str = Field(default="", description="Improved answer demonstrating best practices")
    feedback: str = Field(default="", description="What was good and what could be improved")

class InterviewFeedbackResponse(BaseModel):
    overallScore: Union[int, float] = Field(ge=0, le=100, description="Overall interview score between 0 and 100")
    questionFeedback: List[QuestionFeedback] = Field(default=[], description="Per-question feedback")
    overallFeedback: str = Field(default="", description="Feedback for the entire interview")
