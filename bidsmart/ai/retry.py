"""Retry policy for calls to the AI gateway.

The OpenAI client is built with ``max_retries=0`` so this decorator is the
only place that decides how often a completion is attempted.
"""

import logging

from openai import APIConnectionError, APITimeoutError, InternalServerError, RateLimitError
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from bidsmart.core.logging import get_logger

logger = get_logger("ai.retry")

LLM_MAX_ATTEMPTS = 3

# Transient gateway failures; 4xx other than 429 are not retried
RETRYABLE_ERRORS = (
    RateLimitError,
    APITimeoutError,
    APIConnectionError,
    InternalServerError,
)

llm_retry = retry(
    stop=stop_after_attempt(LLM_MAX_ATTEMPTS),
    wait=wait_exponential(multiplier=1, min=2, max=30),
    retry=retry_if_exception_type(RETRYABLE_ERRORS),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
