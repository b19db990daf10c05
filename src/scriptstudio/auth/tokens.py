"""Signed session tokens resolving to an owner identifier."""

import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

ALGORITHM = "HS256"

class TokenSigner:
    """Issues and verifies HS256 JWTs carrying ``userId`` and ``email``."""

    def __init__(self, secret: str, ttl_days: int = 7):
        if not secret:
            raise ValueError("Token secret is required.")
        self._secret = secret
        self.ttl = timedelta(days=ttl_days)

    def sign(self, payload: Dict[str, Any]) -> str:
        """
        Sign a payload with an expiry ``ttl_days`` from now.

        Args:
            payload: Claims, normally ``{"userId": ..., "email": ...}``

        Returns:
            str: Encoded token
        """
        now = datetime.now(timezone.utc)
        claims = dict(payload)
        claims["iat"] = now
        claims["exp"] = now + self.ttl
        return jwt.encode(claims, self._secret, algorithm=ALGORITHM)

    def verify(self, token: Optional[str]) -> Optional[Dict[str, Any]]:
        """Return the claims of a valid token, or None if it is missing, forged or expired."""
        if not token:
            return None
        try:
            return jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except jwt.InvalidTokenError:
            return None

def signer_from_env(secret_env: str = "JWT_SECRET", ttl_days: int = 7) -> TokenSigner:
    """
    Build a signer from an environment variable.

    Raises:
        ValueError: If the variable is unset or empty
    """
    secret = os.environ.get(secret_env)
    if not secret:
        raise ValueError(f"{secret_env} is not set. Please add it to your environment.")
    return TokenSigner(secret, ttl_days=ttl_days)
