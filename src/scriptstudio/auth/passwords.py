"""Password hashing with bcrypt."""

import bcrypt

def hash_password(password: str, rounds: int = 10) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")

def check_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison; malformed hashes count as a mismatch."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False
