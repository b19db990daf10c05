"""Test identity helpers and the account service."""

import jwt
import pytest
from scriptstudio.auth.passwords import check_password, hash_password
from scriptstudio.auth.tokens import TokenSigner, signer_from_env
from scriptstudio.storage.errors import DuplicateUserError


SIGNUP = {"name": "Ada Lovelace", "email": "Ada@Example.com", "password": "engine42"}


class TestPasswords:

    def test_hash_and_check(self):
        hashed = hash_password("s3cret!", rounds=4)

        assert hashed != "s3cret!"
        assert check_password("s3cret!", hashed)
        assert not check_password("wrong", hashed)

    def test_malformed_hash_is_mismatch(self):
        assert not check_password("anything", "not-a-bcrypt-hash")


class TestTokenSigner:

    def test_round_trip_claims(self, signer):
        token = signer.sign({"userId": "u1", "email": "a@b.co"})
        claims = signer.verify(token)

        assert claims["userId"] == "u1"
        assert claims["exp"] > claims["iat"]

    def test_rejects_foreign_token(self, signer):
        forged = TokenSigner("another-secret").sign({"userId": "u1"})

        assert signer.verify(forged) is None
        assert signer.verify("garbage") is None
        assert signer.verify(None) is None

    def test_rejects_expired_token(self, signer):
        expired = jwt.encode({"userId": "u1", "exp": 1}, "test-secret-value", algorithm="HS256")

        assert signer.verify(expired) is None

    def test_empty_secret(self):
        with pytest.raises(ValueError):
            TokenSigner("")

    def test_signer_from_env(self, monkeypatch):
        monkeypatch.delenv("SCRIPTSTUDIO_TEST_SECRET", raising=False)
        with pytest.raises(ValueError, match="SCRIPTSTUDIO_TEST_SECRET is not set"):
            signer_from_env("SCRIPTSTUDIO_TEST_SECRET")

        monkeypatch.setenv("SCRIPTSTUDIO_TEST_SECRET", "abc")
        assert isinstance(signer_from_env("SCRIPTSTUDIO_TEST_SECRET"), TokenSigner)


class TestAccountService:
    """Signup, login and token resolution."""

    def test_signup(self, accounts, user_store):
        result = accounts.signup(SIGNUP)

        assert result.ok
        assert result.status == 201
        assert result.message == "Account created successfully."
        user = user_store.find_by_email("ada@example.com")
        assert accounts.owner_from_token(result.data["token"]) == user.id
        assert user.password_hash != SIGNUP["password"]

    def test_signup_validation(self, accounts):
        result = accounts.signup({"name": "A", "email": "not-an-email", "password": "123"})

        assert result.status == 400
        assert result.errors["name"] == ["Name must be at least 2 characters"]
        assert result.errors["email"] == ["Invalid email address"]
        assert result.errors["password"] == ["Password must be at least 6 characters"]

    def test_signup_duplicate(self, accounts):
        accounts.signup(SIGNUP)
        result = accounts.signup(dict(SIGNUP, email="ada@example.com"))

        assert result.status == 409
        assert result.message == "A user with this email already exists."

    def test_signup_race_maps_to_conflict(self, accounts, user_store, monkeypatch):
        def racing_create(name, email, password_hash):
            raise DuplicateUserError(email)
        monkeypatch.setattr(user_store, "create", racing_create)

        assert accounts.signup(SIGNUP).status == 409

    def test_signup_store_failure(self, accounts, user_store, monkeypatch, test_logger):
        def broken(email):
            raise RuntimeError("disk full")
        monkeypatch.setattr(user_store, "find_by_email", broken)

        result = accounts.signup(SIGNUP)

        assert result.status == 500
        assert result.message == "Something went wrong. Please try again."
        assert "signup_error" in test_logger.names("error")

    def test_login(self, accounts):
        accounts.signup(SIGNUP)

        result = accounts.login({"email": "ADA@example.com", "password": "engine42"})

        assert result.ok
        assert result.status == 200
        assert result.data["user"]["email"] == "ada@example.com"
        assert "password_hash" not in result.data["user"]
        assert accounts.owner_from_token(result.data["token"]) == result.data["user"]["id"]

    @pytest.mark.parametrize("payload", [
        {"email": "ada@example.com", "password": "wrong-password"},
        {"email": "ghost@example.com", "password": "engine42"},
    ])
    def test_login_rejected(self, accounts, test_logger, payload):
        accounts.signup(SIGNUP)

        result = accounts.login(payload)

        assert result.status == 401
        assert result.message == "Invalid email or password."
        assert "login_rejected" in test_logger.names("warn")

    def test_login_validation(self, accounts):
        result = accounts.login({"email": "ada@example.com", "password": ""})

        assert result.status == 400
        assert result.errors == {"password": ["Password is required"]}

    def test_login_non_object_body(self, accounts):
        result = accounts.login(["not", "an", "object"])

        assert result.status == 400
        assert "body" in result.errors

    def test_owner_from_invalid_token(self, accounts):
        assert accounts.owner_from_token("nope") is None
        assert accounts.owner_from_token(None) is None
