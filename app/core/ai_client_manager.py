"""
AI Client Manager

This module owns the environment configuration of the generation endpoint and the
shared GenerationClient instance used by the routes.

The credential is deliberately not read when the client is built: it is looked up
per request with get_gemini_api_key(), so a missing key fails that request with a
ConfigurationError instead of breaking application startup.

Dependencies:
- dotenv: For loading .env files.
- loguru: For logging client initialization.
- app.services.generation.generation_client: For the GenerationClient.
"""

import os
import threading
from typing import Optional
from dotenv import load_dotenv
from loguru import logger
from app.errors.exceptions import ConfigurationError
from app.services.generation.generation_client import (
    GenerationClient,
    DEFAULT_BASE_URL,
    DEFAULT_MODEL,
    DEFAULT_TIMEOUT_SECONDS,
)

# Ensure .env is loaded
load_dotenv()

_generation_client: Optional[GenerationClient] = None
_client_lock = threading.Lock()

def get_gemini_api_key() -> str:
    """
    Return the Gemini API key from the environment.

    Raises:
        ConfigurationError: If GEMINI_API_KEY is unset or blank.
    """
    api_key = os.getenv("GEMINI_API_KEY", "").strip()
    if not api_key:
        logger.error("GEMINI_API_KEY environment variable is not set")
        raise ConfigurationError()
    return api_key

def _read_timeout() -> float:
    raw = os.getenv("GEMINI_TIMEOUT_SECONDS")
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Invalid GEMINI_TIMEOUT_SECONDS={raw!r}, using {DEFAULT_TIMEOUT_SECONDS}")
        return DEFAULT_TIMEOUT_SECONDS

def create_generation_client() -> GenerationClient:
    """Build a GenerationClient from GEMINI_BASE_URL, GEMINI_MODEL and GEMINI_TIMEOUT_SECONDS."""
    client = GenerationClient(
        model=os.getenv("GEMINI_MODEL") or DEFAULT_MODEL,
        base_url=os.getenv("GEMINI_BASE_URL") or DEFAULT_BASE_URL,
        timeout=_read_timeout(),
    )
    logger.info(f"Initialized generation client (model={client.model})")
    return client

def get_generation_client() -> GenerationClient:
    """
    Get the shared GenerationClient, creating it on first use.

    Used as a FastAPI dependency so tests can override it.
    """
    global _generation_client

    if _generation_client is None:
        with _client_lock:
            # Double-check locking pattern
            if _generation_client is None:
                _generation_client = create_generation_client()

    return _generation_client
