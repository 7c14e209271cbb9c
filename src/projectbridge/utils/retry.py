# src/projectbridge/utils/retry.py
import functools
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, TypeVar

import openai

from projectbridge.utils.config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

RATE_LIMIT_MARKERS = ("Rate limit", "429", "Too Many Requests", "tokens per minute")


@dataclass
class RetryOptions:
    max_retries: int = 3          # total attempts, first call included
    initial_delay: float = 1.0    # seconds
    max_delay: float = 10.0
    backoff_factor: float = 2.0

    @classmethod
    def from_settings(cls) -> "RetryOptions":
        return cls(
            max_retries=settings.RETRY_MAX,
            initial_delay=settings.RETRY_INITIAL_DELAY,
            max_delay=settings.RETRY_MAX_DELAY,
            backoff_factor=settings.RETRY_BACKOFF,
        )


class RetryError(RuntimeError):
    """Raised when a call fails for good; `last_error` is the final underlying exception."""

    def __init__(self, message: str, last_error: BaseException, attempts: int):
        super().__init__(message)
        self.last_error = last_error
        self.attempts = attempts


def is_rate_limit_error(exc: BaseException) -> bool:
    if isinstance(exc, openai.RateLimitError):
        return True
    if getattr(exc, "status_code", None) == 429:
        return True
    message = str(exc)
    return any(marker in message for marker in RATE_LIMIT_MARKERS)


def with_retry(fn: Callable[[], T], options: Optional[RetryOptions] = None,
               sleep: Callable[[float], None] = time.sleep) -> T:
    """
    Call `fn`, retrying only rate-limit errors with exponential backoff
    (delay *= backoff_factor, capped at max_delay). Any other error, or the
    last failed attempt, raises RetryError chained to the original.
    """
    opts = options or RetryOptions()
    attempts = max(1, opts.max_retries)
    delay = opts.initial_delay
    attempt = 0
    while True:
        attempt += 1
        try:
            return fn()
        except Exception as e:
            if attempt >= attempts or not is_rate_limit_error(e):
                raise RetryError(
                    f"Failed after {attempt} attempt(s). Last error: {type(e).__name__}: {e}", e, attempt
                ) from e
            logger.warning("[retry] attempt %d/%d rate limited, retrying in %.1fs", attempt, attempts, delay)
            sleep(delay)
            delay = min(delay * opts.backoff_factor, opts.max_delay)


def with_model_fallback(fn: Callable[[str], T], models: Sequence[str], options: Optional[RetryOptions] = None,
                        sleep: Callable[[float], None] = time.sleep) -> T:
    """Try `fn(model)` for each model in order (each under `with_retry`); re-raise the last failure."""
    if not models:
        raise ValueError("with_model_fallback needs at least one model")
    last: Optional[RetryError] = None
    for model in models:
        logger.info("[llm] trying model %s", model)
        start = time.perf_counter()
        try:
            result = with_retry(functools.partial(fn, model), options, sleep=sleep)
        except RetryError as e:
            logger.warning("[llm] model %s failed: %s", model, e.last_error)
            last = e
            continue
        logger.info("[llm] model %s succeeded in %.0fms", model, (time.perf_counter() - start) * 1000)
        return result
    logger.error("[llm] all models failed: %s", ", ".join(models))
    raise last
