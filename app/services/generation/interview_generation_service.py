"""
Interview Generation Service Module

This module orchestrates the two generation operations: it builds the prompt,
sends it through the GenerationClient and parses the reply into a response model.
Each call is independent; nothing is cached or shared between requests.

Dependencies:
- loguru: For request logging.
- app.core.secure_prompt_manager: For prompt building.
- app.services.generation.generation_client: For talking to the endpoint.
- app.helper.extract_json_payload: For parsing replies.
"""

from loguru import logger
from app.core.secure_prompt_manager import SecurePromptManager, secure_prompt_manager
from app.services.generation.generation_client import GenerationClient
from app.helper.extract_json_payload import parse_question_list, parse_feedback
from app.schemas.generation_schemas import (
    GenerationRequest,
    FeedbackRequest,
    QuestionGenerationResponse,
    InterviewFeedbackResponse,
)

class InterviewGenerationService:
    """
    Service class for generating interview questions and answer feedback.
    """

    def __init__(self, client: GenerationClient, prompt_manager: SecurePromptManager = secure_prompt_manager):
        """
        Initialize the service with a generation client.

        Args:
            client (GenerationClient): Client for the generation endpoint.
            prompt_manager (SecurePromptManager): Prompt builder, shared by default.
        """
        self.client = client
        self.prompt_manager = prompt_manager

    async def generate_questions(self, request: GenerationRequest, api_key: str) -> QuestionGenerationResponse:
        """
        Generate interview questions for a role.

        The provider may return more or fewer questions than requested; the list
        is returned as-is.
        """
        logger.info(
            f"Generating {request.question_count} {request.interview_type.value} questions "
            f"for role '{request.role}'"
        )
        prompt = self.prompt_manager.build_question_prompt(request)
        text = await self.client.generate(prompt, api_key)
        questions = parse_question_list(text)
        if len(questions) != request.question_count:
            logger.info(f"Requested {request.question_count} questions, received {len(questions)}")
        return QuestionGenerationResponse(questions=questions)

    async def generate_feedback(self, request: FeedbackRequest, api_key: str) -> InterviewFeedbackResponse:
        """Score question/answer pairs and return structured feedback."""
        logger.info(
            f"Generating feedback for {len(request.questions)} answers "
            f"({request.interview_type.value}, role '{request.role}')"
        )
        prompt = self.prompt_manager.build_feedback_prompt(request)
        text = await self.client.generate(prompt, api_key)
        return parse_feedback(text)
