"""Tests for caller identity resolution."""

import time

import jwt
import pytest

from grouphub.utils import config
from grouphub.utils.errors import AuthError
from grouphub.utils.identity import resolve_identity
from grouphub.utils.jwts import VerifyToken, extract_bearer_token
from grouphub.utils.logs import ErrorLogger

SECRET = "test-secret-for-identity-tokens-0001"


def create_jwt_token(payload: dict, secret_key: str) -> str:
    return jwt.encode(payload, secret_key, algorithm="HS256")


def test_header_wins_over_body_and_query() -> None:
    identity = resolve_identity(
        {"x-user-id": "from-header"}, {"user_id": "from-body"}, {"user_id": "from-query"}
    )
    assert identity == "from-header"


def test_body_wins_over_query() -> None:
    assert resolve_identity({}, {"user_id": "from-body"}, {"user_id": "from-query"}) == "from-body"


def test_query_is_last_resort() -> None:
    assert resolve_identity({}, None, {"user_id": "from-query"}) == "from-query"


def test_blank_values_are_skipped() -> None:
    identity = resolve_identity({"x-user-id": "  "}, {"user_id": ""}, {"user_id": " q "})
    assert identity == "q"


def test_non_object_body_is_ignored() -> None:
    assert resolve_identity({}, ["user_id"], {}) is None
    assert resolve_identity({}, {"user_id": {"nested": 1}}, {}) is None


def test_numeric_body_identity_is_stringified() -> None:
    assert resolve_identity({}, {"user_id": 42}) == "42"


def test_nothing_present() -> None:
    assert resolve_identity({}, None, None) is None


def test_custom_header_name() -> None:
    assert resolve_identity({"x-actor": "bob"}, header_name="x-actor") == "bob"


class TestBearerTokens:
    def test_extract_bearer_token(self) -> None:
        assert extract_bearer_token("Bearer abc.def") == "abc.def"

    @pytest.mark.parametrize("header", [None, "", "abc", "Basic abc", "Bearer  "])
    def test_extract_rejects_bad_headers(self, header) -> None:
        with pytest.raises(AuthError):
            extract_bearer_token(header)

    def test_valid_token(self) -> None:
        token = create_jwt_token({"sub": "alice", "exp": int(time.time()) + 60}, SECRET)
        data = VerifyToken(ErrorLogger(), SECRET)(token)
        assert data.user_id == "alice"

    def test_expired_token(self) -> None:
        token = create_jwt_token({"sub": "alice", "exp": int(time.time()) - 60}, SECRET)
        with pytest.raises(AuthError, match="expired"):
            VerifyToken(ErrorLogger(), SECRET)(token)

    def test_wrong_secret(self) -> None:
        token = create_jwt_token({"sub": "alice"}, "another-secret-for-identity-tokens-9999")
        with pytest.raises(AuthError):
            VerifyToken(ErrorLogger(), SECRET)(token)

    def test_missing_subject(self) -> None:
        token = jwt.encode({"role": "member"}, SECRET, algorithm="HS256")
        with pytest.raises(AuthError, match="sub"):
            VerifyToken(ErrorLogger(), SECRET)(token)


class TestIdentityOverHttp:
    def test_jwt_mode_uses_token_subject(self, client, db, monkeypatch) -> None:
        monkeypatch.setattr(config, "IDENTITY_MODE", "jwt")
        monkeypatch.setattr(config, "JWT_SECRET", SECRET)
        token = create_jwt_token({"sub": "alice", "exp": int(time.time()) + 60}, SECRET)

        r = client.get("/my-groups", headers={"Authorization": f"Bearer {token}"})

        assert r.status_code == 200
        assert db.fetch.await_args.args[1] == "alice"

    def test_jwt_mode_rejects_overlong_subject(self, client, db, monkeypatch) -> None:
        monkeypatch.setattr(config, "IDENTITY_MODE", "jwt")
        monkeypatch.setattr(config, "JWT_SECRET", SECRET)
        token = create_jwt_token({"sub": "a" * 300, "exp": int(time.time()) + 60}, SECRET)

        r = client.get("/my-groups", headers={"Authorization": f"Bearer {token}"})

        assert r.status_code == 400
        assert r.json()["error"]["code"] == "VALIDATION_ERROR"
        db.fetch.assert_not_awaited()

    def test_jwt_mode_ignores_asserted_header(self, client, monkeypatch) -> None:
        monkeypatch.setattr(config, "IDENTITY_MODE", "jwt")
        monkeypatch.setattr(config, "JWT_SECRET", SECRET)

        r = client.get("/my-groups", headers={"x-user-id": "mallory"})

        assert r.status_code == 401
        assert r.json()["error"]["code"] == "AUTH_REQUIRED"

    def test_jwt_mode_without_secret_is_a_server_error(self, client, monkeypatch) -> None:
        monkeypatch.setattr(config, "IDENTITY_MODE", "jwt")
        monkeypatch.setattr(config, "JWT_SECRET", "")
        token = create_jwt_token({"sub": "alice"}, SECRET)

        r = client.get("/my-groups", headers={"Authorization": f"Bearer {token}"})

        assert r.status_code == 500
        assert r.json()["error"]["message"] == "Internal server error"
