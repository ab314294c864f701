from .interview_type import InterviewType
from .question_generation import QuestionGenerationRequest, QuestionGenerationResponse
from .interview_feedback import InterviewFeedbackRequest, InterviewFeedbackResponse, QuestionFeedback
from .validated_requests import GenerationRequest, FeedbackRequest

__all__ = [
    "InterviewType",
    "QuestionGenerationRequest",
    "QuestionGenerationResponse",
    "InterviewFeedbackRequest",
    "InterviewFeedbackResponse",
    "QuestionFeedback",
    "GenerationRequest",
    "FeedbackRequest",
]
