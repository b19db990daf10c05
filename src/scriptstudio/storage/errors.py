"""Storage exceptions."""

class DuplicateUserError(Exception):
    """Raised when an account already exists for an email."""
    pass
