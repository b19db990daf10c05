"""In-memory script history and user stores."""

import threading
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

from ..core.types import ScriptRecord, UserRecord
from .errors import DuplicateUserError

def _now() -> datetime:
    return datetime.now(timezone.utc)

class InMemoryScriptStore:
    """Process-local ScriptStore. Records are lost on restart."""

    def __init__(self):
        self._records: Dict[str, ScriptRecord] = {}
        self._order: List[str] = []
        self._lock = threading.Lock()

    def add(self, owner_id: Optional[str], idea: str, amount: int, content: str) -> ScriptRecord:
        record = ScriptRecord(id=uuid.uuid4().hex, idea=idea.strip(), amount=amount,
                              content=content, created_at=_now(), owner_id=owner_id)
        with self._lock:
            self._records[record.id] = record
            self._order.append(record.id)
        return record

    def list(self, owner_id: Optional[str], limit: int = 100) -> List[ScriptRecord]:
        with self._lock:
            # Insertion order breaks ties between identical timestamps.
            newest_first = [self._records[rid] for rid in reversed(self._order)]
        return [r for r in newest_first if r.owner_id == owner_id][:limit]

    def get(self, record_id: str, owner_id: Optional[str] = None) -> Optional[ScriptRecord]:
        with self._lock:
            record = self._records.get(record_id)
        if record is None or record.owner_id != owner_id:
            return None
        return record

    def __len__(self) -> int:
        return len(self._records)

class InMemoryUserStore:
    """Process-local UserStore keyed by normalized email."""

    def __init__(self):
        self._users: Dict[str, UserRecord] = {}
        self._lock = threading.Lock()

    def find_by_email(self, email: str) -> Optional[UserRecord]:
        with self._lock:
            return self._users.get(email.strip().lower())

    def create(self, name: str, email: str, password_hash: str) -> UserRecord:
        email = email.strip().lower()
        with self._lock:
            if email in self._users:
                raise DuplicateUserError(f"User already exists: {email}")
            user = UserRecord(id=uuid.uuid4().hex, name=name.strip(), email=email,
                              password_hash=password_hash, created_at=_now())
            self._users[email] = user
        return user
