from datetime import timedelta

import jwt
import pytest
from src.core.auth import Role, TokenClaims, TokenError, create_access_token, decode_access_token
from src.core.config import SEVEN_DAYS_SECONDS, get_settings


def test_create_and_decode_token_roundtrip() -> None:
    settings = get_settings()
    token = create_access_token("user-123", role=Role.EMPLOYEE, settings=settings)

    claims = decode_access_token(token, settings=settings)

    assert claims == TokenClaims(user_id="user-123", role=Role.EMPLOYEE)


def test_token_carries_only_identity_and_timing_claims() -> None:
    settings = get_settings()
    token = create_access_token("admin-1", role=Role.ADMIN, settings=settings)

    payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])

    assert set(payload) == {"id", "role", "iat", "exp"}
    assert payload["role"] == "admin"


def test_default_expiry_is_seven_days() -> None:
    settings = get_settings()
    assert settings.access_token_ttl_seconds == SEVEN_DAYS_SECONDS

    token = create_access_token("user-1", role=Role.EMPLOYEE, settings=settings)
    payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])

    assert payload["exp"] - payload["iat"] == SEVEN_DAYS_SECONDS


def test_expiry_follows_configuration() -> None:
    settings = get_settings().model_copy(update={"access_token_ttl_seconds": 60})
    token = create_access_token("user-1", role=Role.EMPLOYEE, settings=settings)
    payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])

    assert payload["exp"] - payload["iat"] == 60


def test_expired_token_is_rejected() -> None:
    settings = get_settings()
    token = create_access_token(
        "user-1", role=Role.EMPLOYEE, settings=settings, expires_delta=timedelta(seconds=-5)
    )

    with pytest.raises(TokenError, match="expired"):
        decode_access_token(token, settings=settings)


def test_token_signed_with_other_secret_is_rejected() -> None:
    settings = get_settings()
    forged = create_access_token(
        "user-1",
        role=Role.ADMIN,
        settings=settings.model_copy(update={"jwt_secret": "someone-else"}),
    )

    with pytest.raises(TokenError):
        decode_access_token(forged, settings=settings)


def test_malformed_token_is_rejected() -> None:
    with pytest.raises(TokenError):
        decode_access_token("not.a.jwt", settings=get_settings())


def test_unknown_role_is_rejected() -> None:
    settings = get_settings()
    token = jwt.encode(
        {"id": "user-1", "role": "superuser", "exp": 9999999999},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )

    with pytest.raises(TokenError, match="Unsupported role"):
        decode_access_token(token, settings=settings)


def test_token_missing_id_is_rejected() -> None:
    settings = get_settings()
    token = jwt.encode(
        {"role": "employee", "exp": 9999999999},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )

    with pytest.raises(TokenError):
        decode_access_token(token, settings=settings)
