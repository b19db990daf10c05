"""Data types and result structures for Script Studio operations."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Dict, Any

@dataclass
class ScenePart:
    """One unit of segmented script text."""
    index: int                  # 1-based position in the output sequence
    text: str                   # trimmed, never empty
    start: int                  # offset of text in the raw script
    end: int

@dataclass
class Segmentation:
    """Result of running the segmentation cascade over a raw script."""
    strategy: str               # "markers" | "paragraphs" | "sentences"
    parts: List[ScenePart]

    @property
    def texts(self) -> List[str]:
        """Plain part strings in source order."""
        return [p.text for p in self.parts]

@dataclass
class GenerationResult:
    """Response of a script generation provider."""
    ok: bool
    text: str = ""
    status_code: Optional[int] = None    # upstream HTTP status on failure
    detail: Optional[str] = None

@dataclass
class ScriptRecord:
    """A persisted script history entry."""
    id: str
    idea: str
    amount: int
    content: str
    created_at: datetime
    owner_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "idea": self.idea,
            "amount": self.amount,
            "content": self.content,
            "createdAt": self.created_at.isoformat(),
        }

@dataclass
class UserRecord:
    """A registered account."""
    id: str
    name: str
    email: str
    password_hash: str
    created_at: datetime

    def public_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "email": self.email}

@dataclass
class StudioResult:
    """Outcome of a service call, shaped like an HTTP response."""
    ok: bool
    status: int                                   # HTTP-style status code
    message: Optional[str] = None
    errors: Dict[str, List[str]] = field(default_factory=dict)
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """JSON body: ``{ok, ...data, message?, errors?}``."""
        body: Dict[str, Any] = {"ok": self.ok}
        body.update(self.data)
        if self.message is not None:
            body["message"] = self.message
        if self.errors:
            body["errors"] = self.errors
        return body
