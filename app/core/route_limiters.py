"""
Description: 
This module sets up a rate limiter for the application using SlowAPI.
It initializes a Limiter instance keyed by client IP address with a default limit,
and exposes the limit applied to the generation endpoints.

Environment:
- RATE_LIMIT_ENABLED: "false" disables all limits (used by the test suite).
- GENERATION_RATE_LIMIT: Per-IP limit for the generation endpoints (default "10/minute").

Dependencies:
- slowapi: For rate limiting functionality.
- slowapi.util: For utility functions like get_remote_address to retrieve the client's IP address.
- loguru: For logging information about the rate limiter initialization.
"""
import os
from dotenv import load_dotenv
from slowapi import Limiter
from slowapi.util import get_remote_address
from loguru import logger

load_dotenv()

RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").strip().lower() != "false"
GENERATION_RATE_LIMIT = os.getenv("GENERATION_RATE_LIMIT", "10/minute")

limiter = Limiter(key_func=get_remote_address, default_limits=["30/minute"], enabled=RATE_LIMIT_ENABLED)
logger.info(f"Rate limiter initialized (enabled={RATE_LIMIT_ENABLED})")
