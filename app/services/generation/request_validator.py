"""
Request Validator Utility Module

This module performs the presence and shape checks on incoming generation payloads
and converts them into validated request structures. All failures are raised as
ValidationError (HTTP 400) before any prompt is built or any network call is made.

Values are cleaned the same way the prompt builder sanitizes them (control
characters removed, surrounding whitespace stripped), so a value that passes here
can always be rendered into a prompt without being emptied or truncated.

Dependencies:
- app.errors.exceptions: For custom exception handling.
- app.schemas.generation_schemas: For the raw and validated request models.
- app.core.secure_prompt_manager: For the prompt length limits.
"""

from typing import Any, List, Union
from app.constants.regex_patterns import REGEX_PATTERNS
from app.core.secure_prompt_manager import MAX_QUESTION_LENGTH, MAX_ROLE_LENGTH, MAX_YEARS_LENGTH
from app.errors.exceptions import ValidationError
from app.schemas.generation_schemas import (
    InterviewType,
    QuestionGenerationRequest,
    InterviewFeedbackRequest,
    GenerationRequest,
    FeedbackRequest,
)

MISSING_FIELDS_MESSAGE = "Missing required fields"
INVALID_QA_MESSAGE = "Invalid questions or answers data"

def _clean(value: Any) -> str:
    return REGEX_PATTERNS['control_chars'].sub('', str(value)).strip()

def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not _clean(value)

def _check_length(name: str, value: str, max_length: int) -> str:
    if len(value) > max_length:
        raise ValidationError(f"{name} must be at most {max_length} characters")
    return value

def _parse_interview_type(value: str) -> InterviewType:
    interview_type = InterviewType.parse(_clean(value))
    if interview_type is None:
        expected = ", ".join(member.value for member in InterviewType)
        raise ValidationError(f"Invalid interview type: {value}. Expected one of {expected}")
    return interview_type

def _parse_question_count(value: Union[int, str]) -> int:
    """
    Parse numQuestions into a positive integer.

    Example:
        >>> _parse_question_count("3")
        3
        >>> _parse_question_count(0)  # Raises ValidationError
    """
    try:
        count = int(_clean(value))
    except ValueError as e:
        raise ValidationError("numQuestions must be a positive integer") from e
    if count <= 0:
        raise ValidationError("numQuestions must be a positive integer")
    return count

def _clean_questions(questions: List[str]) -> List[str]:
    cleaned = [_clean(question) for question in questions]
    for question in cleaned:
        _check_length("Each question", question, MAX_QUESTION_LENGTH)
    return cleaned

def validate_question_request(payload: QuestionGenerationRequest) -> GenerationRequest:
    """
    Validate a question generation payload.

    Raises:
        ValidationError: If role, type, years or numQuestions is missing, role or
            years is too long, the interview type is unknown, or numQuestions is
            not a positive integer.
    """
    fields = (payload.role, payload.type, payload.years, payload.numQuestions)
    if any(_is_blank(value) for value in fields):
        raise ValidationError(MISSING_FIELDS_MESSAGE)

    return GenerationRequest(
        role=_check_length("role", _clean(payload.role), MAX_ROLE_LENGTH),
        interview_type=_parse_interview_type(payload.type),
        experience_years=_check_length("years", _clean(payload.years), MAX_YEARS_LENGTH),
        question_count=_parse_question_count(payload.numQuestions),
    )

def validate_feedback_request(payload: InterviewFeedbackRequest) -> FeedbackRequest:
    """
    Validate a feedback payload.

    Raises:
        ValidationError: If questions or answers are missing or empty, their lengths
            differ, a question is blank or too long, or role/type is missing, too
            long or unknown.
    """
    questions, answers = payload.questions, payload.answers
    if not questions or not answers or len(questions) != len(answers):
        raise ValidationError(INVALID_QA_MESSAGE)
    if any(_is_blank(question) for question in questions):
        raise ValidationError(INVALID_QA_MESSAGE)
    if _is_blank(payload.role) or _is_blank(payload.type):
        raise ValidationError(MISSING_FIELDS_MESSAGE)

    return FeedbackRequest(
        role=_check_length("role", _clean(payload.role), MAX_ROLE_LENGTH),
        interview_type=_parse_interview_type(payload.type),
        questions=_clean_questions(questions),
        answers=list(answers),
    )
