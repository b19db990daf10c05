"""Protocol interfaces for dependency injection from the host application."""

from typing import Protocol, List, Optional, Any
from .types import GenerationResult, ScriptRecord, Segmentation, UserRecord

class Segmenter(Protocol):
    """Host-injected script segmenter (optional). If None, use the scene cascade."""

    def split(self, text: str, count: Optional[int] = None) -> Segmentation:
        """
        Segment text into ordered parts (scenes, paragraphs, sentences).

        Args:
            text: Raw script to segment
            count: Requested number of parts; None or <= 0 means no limit

        Returns:
            Segmentation: Strategy that produced the parts, and the parts
        """
        ...

class ScriptGenerator(Protocol):
    """Host-injected generation provider. Implement with Gemini, OpenAI, a local model, etc."""

    def generate(self, prompt: str) -> GenerationResult:
        """
        Produce script text for a fully built prompt.

        Args:
            prompt: Complete prompt string, instructions included

        Returns:
            GenerationResult: ok with text, or failure with the upstream status code
        """
        ...

class ScriptStore(Protocol):
    """Script history store keyed by an opaque owner identifier."""

    def add(self, owner_id: Optional[str], idea: str, amount: int, content: str) -> ScriptRecord:
        """Persist a script and return the stored record."""
        ...

    def list(self, owner_id: Optional[str], limit: int = 100) -> List[ScriptRecord]:
        """Return the owner's records, newest first."""
        ...

    def get(self, record_id: str, owner_id: Optional[str] = None) -> Optional[ScriptRecord]:
        """Return one record if it exists and belongs to the owner."""
        ...

class UserStore(Protocol):
    """Account store used by the identity layer."""

    def find_by_email(self, email: str) -> Optional[UserRecord]:
        """Look up an account by normalized email."""
        ...

    def create(self, name: str, email: str, password_hash: str) -> UserRecord:
        """Create an account. Raises DuplicateUserError if the email is taken."""
        ...

class Logger(Protocol):
    """Optional structured logging interface."""

    def info(self, msg: str, **kv: Any) -> None:
        """Log info level message with optional key-value context."""
        ...

    def warn(self, msg: str, **kv: Any) -> None:
        """Log warning level message with optional key-value context."""
        ...

    def error(self, msg: str, **kv: Any) -> None:
        """Log error level message with optional key-value context."""
        ...

class Meter(Protocol):
    """Optional metrics collection interface."""

    def inc(self, name: str, amount: int = 1, **tags: str) -> None:
        """Increment a counter metric with optional tags."""
        ...

    def observe(self, name: str, value: float, **tags: str) -> None:
        """Record an observation metric with optional tags."""
        ...
