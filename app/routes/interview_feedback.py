"""
Interview Feedback API Route

Description:
This module defines a FastAPI route that scores a completed interview and returns
per-question feedback with improved answers.

Arguments:
- payload: An instance of InterviewFeedbackRequest with questions, answers, role and type.

Returns:
- An instance of InterviewFeedbackResponse containing structured feedback data.

Errors:
- 400: Missing fields, or questions and answers of different lengths.
- 500: Missing API key, provider error, or unparseable reply.
- 503: Provider overloaded after all retry attempts.

Dependencies:
- fastapi: For creating the FastAPI application and defining routes.
- app.core.route_limiters: For rate limiting functionality.
- app.core.ai_client_manager: For the shared generation client and API key lookup.
- app.services.generation: For validation and orchestration.
- loguru: For logging errors.
"""
from fastapi import APIRouter, Depends, Request
from loguru import logger
from app.core.route_limiters import limiter, GENERATION_RATE_LIMIT
from app.core.ai_client_manager import get_generation_client, get_gemini_api_key
from app.errors.exceptions import GenerationError, InternalServerError
from app.schemas.error_response import ErrorResponse
from app.schemas.generation_schemas import InterviewFeedbackRequest, InterviewFeedbackResponse
from app.services.generation.generation_client import GenerationClient
from app.services.generation.interview_generation_service import InterviewGenerationService
from app.services.generation.request_validator import validate_feedback_request

router = APIRouter(
    tags=["interview-feedback"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        500: {"model": ErrorResponse, "description": "Generation failed"},
        503: {"model": ErrorResponse, "description": "Provider temporarily overloaded"},
    }
)


@router.post("/generate-feedback", response_model=InterviewFeedbackResponse)
@limiter.limit(GENERATION_RATE_LIMIT)
async def generate_feedback(
    request: Request,
    payload: InterviewFeedbackRequest,
    client: GenerationClient = Depends(get_generation_client),
):
    """
    Get interview feedback for a set of questions and answers.
    """
    feedback_request = validate_feedback_request(payload)
    api_key = get_gemini_api_key()
    try:
        service = InterviewGenerationService(client)
        return await service.generate_feedback(feedback_request, api_key)
    except GenerationError:
        raise
    except Exception as e:
        logger.error(f"Feedback generation error: {e}")
        raise InternalServerError("Failed to generate feedback") from e
