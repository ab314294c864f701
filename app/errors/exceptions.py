"""
Description:
Custom exceptions for the interview generation service.

HTTP-level errors subclass FastAPI's HTTPException so they can be raised directly
from route handlers. Failures raised while talking to the generation endpoint
derive from GenerationError, which carries its own status code, a user-facing
message and optional diagnostic details.

Dependencies:
- fastapi: For HTTPException.
- starlette.status: For HTTP status code constants.
"""
from typing import Any, Optional
from fastapi import HTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_503_SERVICE_UNAVAILABLE,
)

class BadRequest(HTTPException):
    def __init__(self, detail: str = "Bad request"):
        super().__init__(status_code=HTTP_400_BAD_REQUEST, detail=detail)

class InternalServerError(HTTPException):
    def __init__(self, detail: str = "Internal server error"):
        super().__init__(status_code=HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)

class ValidationError(BadRequest):
    def __init__(self, detail: str = "Validation error"):
        super().__init__(detail=detail)


class GenerationError(Exception):
    """
    Base class for failures in the prompt -> generate -> parse pipeline.

    Attributes:
        status_code (int): HTTP status the failure maps to.
        message (str): User-facing error message.
        details (Any): Optional diagnostic payload (raw text, provider error body).
    """
    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Generation failed"

    def __init__(self, message: Optional[str] = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

class ConfigurationError(GenerationError):
    default_message = "Missing Gemini API key"

class TransientProviderError(GenerationError):
    status_code = HTTP_503_SERVICE_UNAVAILABLE
    default_message = "The AI service is temporarily overloaded. Please try again in a few minutes."

class PermanentProviderError(GenerationError):
    default_message = "Gemini API error"

class ParseError(GenerationError):
    default_message = "Failed to parse Gemini response"

    def __init__(self, message: Optional[str] = None, raw_text: str = ""):
        self.raw_text = raw_text
        super().__init__(message=message, details=raw_text)

class PayloadShapeError(ParseError):
    default_message = "Gemini response did not match the expected structure"
