"""Account signup, login and owner resolution."""

from typing import Any, Optional

from pydantic import ValidationError

from ..auth.passwords import check_password, hash_password
from ..auth.tokens import TokenSigner
from ..config.schema import StudioConfig
from ..core.abc import Logger, UserStore
from ..core.types import StudioResult
from ..storage.errors import DuplicateUserError
from .schemas import LoginRequest, SignupRequest, field_errors, parse

GENERIC_FAILURE = "Something went wrong. Please try again."
INVALID_CREDENTIALS = "Invalid email or password."

class AccountService:
    """Issues session tokens for registered users and resolves tokens back to owners."""

    def __init__(self, *, users: UserStore, signer: TokenSigner, config: StudioConfig,
                 logger: Optional[Logger] = None):
        self.users = users
        self.signer = signer
        self.config = config
        self.log = logger

    def signup(self, payload: Any) -> StudioResult:
        """Create an account from ``{name, email, password}``."""
        try:
            request = parse(SignupRequest, payload)
        except ValidationError as e:
            return StudioResult(ok=False, status=400, errors=field_errors(e))

        try:
            if self.users.find_by_email(request.email):
                return StudioResult(ok=False, status=409, message="A user with this email already exists.")

            password_hash = hash_password(request.password, rounds=self.config.auth.bcrypt_rounds)
            try:
                user = self.users.create(request.name, request.email, password_hash)
            except DuplicateUserError:
                # Lost a race with a concurrent signup for the same email.
                return StudioResult(ok=False, status=409, message="A user with this email already exists.")

            token = self.signer.sign({"userId": user.id, "email": user.email})
        except Exception as e:
            if self.log:
                self.log.error("signup_error", error=str(e))
            return StudioResult(ok=False, status=500, message=GENERIC_FAILURE)

        if self.log:
            self.log.info("user_signed_up", user_id=user.id)
        return StudioResult(ok=True, status=201, message="Account created successfully.",
                            data={"token": token})

    def login(self, payload: Any) -> StudioResult:
        """Verify ``{email, password}`` and issue a token."""
        try:
            request = parse(LoginRequest, payload)
        except ValidationError as e:
            return StudioResult(ok=False, status=400, errors=field_errors(e))

        try:
            user = self.users.find_by_email(request.email)
            if user is None or not check_password(request.password, user.password_hash):
                if self.log:
                    self.log.warn("login_rejected", email=request.email)
                return StudioResult(ok=False, status=401, message=INVALID_CREDENTIALS)

            token = self.signer.sign({"userId": user.id, "email": user.email})
        except Exception as e:
            if self.log:
                self.log.error("login_error", error=str(e))
            return StudioResult(ok=False, status=500, message=GENERIC_FAILURE)

        return StudioResult(ok=True, status=200, message="Login successful.",
                            data={"user": user.public_dict(), "token": token})

    def owner_from_token(self, token: Optional[str]) -> Optional[str]:
        """Resolve a session token to its user id; None when absent or invalid."""
        claims = self.signer.verify(token)
        if not claims:
            return None
        return claims.get("userId")
