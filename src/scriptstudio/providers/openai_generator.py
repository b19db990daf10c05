"""
OpenAI Script Provider for Script Studio

Chat-completion backed implementation of the ScriptGenerator protocol.
Transient errors are retried with exponential backoff; HTTP status errors
that survive the retries are returned as failed GenerationResults.
"""

import os
import time
import random
from typing import Optional

# Optional import for OpenAI - gracefully handle if not available
try:
    from openai import OpenAI
    import openai
    OPENAI_AVAILABLE = True
except ImportError:
    OPENAI_AVAILABLE = False
    OpenAI = None
    openai = None

from ..core.types import GenerationResult
from ..core.abc import Logger

class OpenAIGenerator:
    """
    OpenAI chat provider for Script Studio.

    Follows the dependency injection pattern - the provider is injected by
    the host application rather than being a hard dependency.
    """

    def __init__(self,
                 model: str = "gpt-4o-mini",
                 api_key: Optional[str] = None,
                 max_retries: int = 3,
                 api_key_env: str = "OPENAI_API_KEY",
                 timeout: float = 120.0,
                 logger: Optional[Logger] = None,
                 client=None):
        """
        Initialize OpenAI generator.

        Args:
            model: OpenAI chat model to use
            api_key: OpenAI API key (if None, uses ``api_key_env``)
            max_retries: Maximum number of retry attempts for API calls
            api_key_env: Environment variable consulted when api_key is None
            timeout: Request timeout in seconds
            logger: Optional structured logger for retry notices
            client: Pre-built client (skips SDK and key checks)
        """
        self.model = model
        self.max_retries = max_retries
        self.log = logger

        if client is not None:
            self.client = client
            return

        if not OPENAI_AVAILABLE:
            raise ImportError(
                "OpenAI package is not installed. Install it with: pip install openai"
            )

        if api_key is None:
            api_key = os.environ.get(api_key_env)

        if not api_key:
            raise ValueError(
                "OpenAI API key is required. Provide via api_key parameter "
                f"or set {api_key_env} environment variable."
            )

        self.client = OpenAI(api_key=str(api_key), timeout=timeout)

    def generate(self, prompt: str) -> GenerationResult:
        """
        Generate script text with retry logic.

        Args:
            prompt: Complete prompt string

        Returns:
            GenerationResult: Completion text, or failure with upstream status
        """
        for attempt in range(self.max_retries + 1):  # max_retries + 1 total attempts
            try:
                response = self.client.chat.completions.create(
                    model=self.model,
                    messages=[{"role": "user", "content": prompt}],
                )
                choices = response.choices or []
                text = (choices[0].message.content or "") if choices else ""
                return GenerationResult(ok=True, text=text, status_code=200)

            except Exception as e:
                is_retryable = self._is_retryable_error(e)

                if attempt >= self.max_retries or not is_retryable:
                    status = getattr(e, "status_code", None)
                    if status is not None:
                        return GenerationResult(ok=False, status_code=int(status), detail=str(e)[:500])
                    raise RuntimeError(
                        f"Failed to generate script after {attempt + 1} attempts: {e}"
                    ) from e

                # Exponential backoff with jitter
                delay = 2 ** attempt + random.uniform(0.1, 0.5)
                if self.log:
                    self.log.warn("openai_retry", attempt=attempt + 1, delay=round(delay, 1), error=str(e))
                time.sleep(delay)

        raise RuntimeError(f"Failed to generate script after {self.max_retries + 1} attempts")

    def _is_retryable_error(self, error: Exception) -> bool:
        """
        Determine if an error is retryable (transient) or permanent.

        Args:
            error: The exception that occurred

        Returns:
            True if the error should be retried, False otherwise
        """
        if openai is not None:
            if isinstance(error, (openai.RateLimitError, openai.APIConnectionError,
                                  openai.APITimeoutError, openai.InternalServerError)):
                return True
            if isinstance(error, (openai.AuthenticationError, openai.PermissionDeniedError,
                                  openai.BadRequestError, openai.NotFoundError)):
                return False

        # Fallback: pattern matching on error messages for common transient issues
        error_str = str(error).lower()
        retryable_patterns = [
            "rate limit", "too many requests",
            "connection", "timeout", "network",
            "502", "503", "504",
            "internal server error", "service unavailable", "gateway timeout"
        ]
        return any(pattern in error_str for pattern in retryable_patterns)

    def __repr__(self) -> str:
        return f"OpenAIGenerator(model='{self.model}', max_retries={self.max_retries})"

def is_openai_available(api_key_env: str = "OPENAI_API_KEY") -> bool:
    """Check if OpenAI package and API key are available."""
    return OPENAI_AVAILABLE and bool(os.environ.get(api_key_env))
