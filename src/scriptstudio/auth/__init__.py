"""Identity helpers: password hashing and session tokens."""

from .passwords import hash_password, check_password
from .tokens import TokenSigner, signer_from_env

__all__ = ['hash_password', 'check_password', 'TokenSigner', 'signer_from_env']
