"""
Gemini Script Provider for Script Studio

Calls the Gemini ``generateContent`` REST endpoint and implements the
ScriptGenerator protocol. Upstream failures are reported as a failed
GenerationResult carrying the HTTP status, never retried here.
"""

import os
from typing import Any, Dict, Optional

import requests

from ..core.types import GenerationResult

DEFAULT_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models"

class GeminiGenerator:
    """
    Gemini REST provider.

    The HTTP session is injectable so hosts can share connection pools and
    tests can substitute a fake transport.
    """

    def __init__(self,
                 model: str = "gemini-2.5-flash",
                 api_key: Optional[str] = None,
                 endpoint: str = DEFAULT_ENDPOINT,
                 timeout: float = 120.0,
                 api_key_env: str = "GEMINI_API_KEY",
                 session: Optional[requests.Session] = None):
        """
        Initialize Gemini generator.

        Args:
            model: Gemini model name
            api_key: API key (if None, read from ``api_key_env``)
            endpoint: Base URL of the models collection
            timeout: Request timeout in seconds
            api_key_env: Environment variable consulted when api_key is None
            session: Optional requests session
        """
        if api_key is None:
            api_key = os.environ.get(api_key_env)

        if not api_key:
            raise ValueError(
                f"Gemini API key is required. Provide via api_key parameter "
                f"or set {api_key_env} environment variable."
            )

        self.model = model
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout
        self._api_key = api_key
        self.session = session or requests.Session()

    @property
    def url(self) -> str:
        return f"{self.endpoint}/{self.model}:generateContent"

    def generate(self, prompt: str) -> GenerationResult:
        """
        Generate script text for a prompt.

        Args:
            prompt: Complete prompt string

        Returns:
            GenerationResult: Joined candidate text, or failure with status code

        Raises:
            requests.RequestException: On transport failures (no HTTP response)
        """
        payload = {
            "contents": [
                {"role": "user", "parts": [{"text": prompt}]},
            ],
        }
        response = self.session.post(
            self.url,
            params={"key": self._api_key},
            headers={"Content-Type": "application/json"},
            json=payload,
            timeout=self.timeout,
        )

        if response.status_code < 200 or response.status_code >= 300:
            return GenerationResult(ok=False, status_code=response.status_code,
                                    detail=response.text[:500])

        return GenerationResult(ok=True, text=extract_text(response.json()),
                                status_code=response.status_code)

    def __repr__(self) -> str:
        return f"GeminiGenerator(model='{self.model}', timeout={self.timeout})"

def extract_text(data: Any) -> str:
    """Join the text of every part of the first candidate; empty string when absent."""
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates") or []
    if not candidates or not isinstance(candidates[0], dict):
        return ""
    content: Dict[str, Any] = candidates[0].get("content") or {}
    parts = content.get("parts") or []
    return "".join((p.get("text") or "") for p in parts if isinstance(p, dict))
