"""
Question Generation API Route

Description:
This module defines a FastAPI route that generates AI-written interview questions
for a role, interview type and experience range.

Arguments:
- payload: An instance of QuestionGenerationRequest with role, type, years and numQuestions.

Returns:
- An instance of QuestionGenerationResponse with the generated questions.

Errors:
- 400: Missing or invalid fields.
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
from app.schemas.generation_schemas import QuestionGenerationRequest, QuestionGenerationResponse
from app.services.generation.generation_client import GenerationClient
from app.services.generation.interview_generation_service import InterviewGenerationService
from app.services.generation.request_validator import validate_question_request

router = APIRouter(
    tags=["question-generation"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        500: {"model": ErrorResponse, "description": "Generation failed"},
        503: {"model": ErrorResponse, "description": "Provider temporarily overloaded"},
    }
)


@router.post("/generate-questions", response_model=QuestionGenerationResponse)
@limiter.limit(GENERATION_RATE_LIMIT)
async def generate_questions(
    request: Request,
    payload: QuestionGenerationRequest,
    client: GenerationClient = Depends(get_generation_client),
):
    """
    Generate interview questions. Request parameter is required for rate limiting.
    """
    generation_request = validate_question_request(payload)
    api_key = get_gemini_api_key()
    try:
        service = InterviewGenerationService(client)
        return await service.generate_questions(generation_request, api_key)
    except GenerationError:
        raise
    except Exception as e:
        logger.error(f"Question generation error: {e}")
        raise InternalServerError("Failed to generate questions") from e
