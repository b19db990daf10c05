"""Request payload schemas validated at the service boundary."""

import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError, ValidationInfo, field_validator

from ..config.schema import LimitsCfg

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

def _limits(info: ValidationInfo) -> LimitsCfg:
    context = info.context or {}
    return context.get("limits") or LimitsCfg()

class GenerateRequest(BaseModel):
    """Idea plus desired scene count."""
    idea: str = Field(strict=True)
    amount: int = Field(strict=True)

    @field_validator("idea")
    @classmethod
    def _idea_length(cls, v: str, info: ValidationInfo) -> str:
        minimum = _limits(info).min_idea_length
        if len(v.strip()) < minimum:
            raise ValueError(f"Idea should be at least {minimum} characters")
        return v.strip()

    @field_validator("amount")
    @classmethod
    def _amount_bounds(cls, v: int, info: ValidationInfo) -> int:
        limits = _limits(info)
        if v < limits.min_count:
            raise ValueError(f"Amount must be at least {limits.min_count} scene")
        if v > limits.max_count:
            raise ValueError(f"Amount cannot be more than {limits.max_count} scenes")
        return v

class SaveRequest(GenerateRequest):
    """A generated script to keep in history."""
    content: str = Field(strict=True)

    @field_validator("content")
    @classmethod
    def _content_present(cls, v: str) -> str:
        if not v:
            raise ValueError("Content is required")
        return v

class SplitRequest(BaseModel):
    """Raw text to segment. No bounds on amount: the engine tolerates any value."""
    script: str = Field(strict=True)
    amount: Optional[int] = Field(default=None, strict=True)

class SignupRequest(BaseModel):
    name: str = Field(strict=True)
    email: str = Field(strict=True)
    password: str = Field(strict=True)

    @field_validator("name")
    @classmethod
    def _name_length(cls, v: str) -> str:
        if len(v.strip()) < 2:
            raise ValueError("Name must be at least 2 characters")
        return v.strip()

    @field_validator("email")
    @classmethod
    def _email_shape(cls, v: str) -> str:
        v = v.strip().lower()
        if not EMAIL_RE.match(v):
            raise ValueError("Invalid email address")
        return v

    @field_validator("password")
    @classmethod
    def _password_length(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v

class LoginRequest(BaseModel):
    email: str = Field(strict=True)
    password: str = Field(strict=True)

    @field_validator("email")
    @classmethod
    def _email_shape(cls, v: str) -> str:
        v = v.strip().lower()
        if not EMAIL_RE.match(v):
            raise ValueError("Invalid email address")
        return v

    @field_validator("password")
    @classmethod
    def _password_present(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required")
        return v

def field_errors(exc: ValidationError) -> Dict[str, List[str]]:
    """Flatten a ValidationError into ``{field: [messages]}``."""
    errors: Dict[str, List[str]] = {}
    for err in exc.errors():
        loc = err.get("loc") or ()
        key = str(loc[0]) if loc else "body"
        msg = err.get("msg", "Invalid value")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        errors.setdefault(key, []).append(msg)
    return errors

def parse(model: type, payload: Any, limits: Optional[LimitsCfg] = None):
    """Validate a payload against a request model with the configured limits."""
    return model.model_validate(payload, context={"limits": limits})
