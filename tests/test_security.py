from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from app.auth.security import (
    create_access_token,
    decode_access_token,
    get_bearer_token,
    get_password_hash,
    verify_password,
)
from app.core.config import ALGORITHM, SECRET_KEY
from app.core.errors import (
    MalformedHeaderError,
    MissingTokenError,
    TokenExpiredError,
    TokenInvalidError,
)

IDENTITY = {"id": 7, "email": "wanjiru@shamba.co.ke", "name": "Wanjiru", "role": "farmer"}
ISSUED_AT = datetime(2025, 3, 1, 8, 0, tzinfo=timezone.utc)


def test_token_carries_identity_claims():
    token = create_access_token(IDENTITY, now=ISSUED_AT)
    claims = decode_access_token(token, now=ISSUED_AT + timedelta(minutes=1))

    assert claims.id == 7
    assert claims.email == "wanjiru@shamba.co.ke"
    assert claims.name == "Wanjiru"
    assert claims.role == "farmer"
    assert claims.exp - claims.iat == 24 * 3600
    assert claims.jti


def test_token_accepted_just_before_expiry():
    token = create_access_token(IDENTITY, now=ISSUED_AT)
    claims = decode_access_token(token, now=ISSUED_AT + timedelta(hours=23, minutes=59))
    assert claims.id == 7


def test_token_rejected_just_after_expiry():
    token = create_access_token(IDENTITY, now=ISSUED_AT)
    with pytest.raises(TokenExpiredError):
        decode_access_token(token, now=ISSUED_AT + timedelta(hours=24, minutes=1))


def test_each_token_gets_its_own_id():
    first = decode_access_token(create_access_token(IDENTITY, now=ISSUED_AT), now=ISSUED_AT)
    second = decode_access_token(create_access_token(IDENTITY, now=ISSUED_AT), now=ISSUED_AT)
    assert first.jti != second.jti


def test_tampered_token_is_invalid():
    token = create_access_token(IDENTITY, now=ISSUED_AT)
    header, payload, signature = token.split(".")
    forged = jwt.encode({**IDENTITY, "role": "admin", "iat": 0, "exp": 2 ** 31, "jti": "x"},
                        "not-the-secret", algorithm=ALGORITHM)
    tampered = ".".join([header, forged.split(".")[1], signature])

    with pytest.raises(TokenInvalidError):
        decode_access_token(tampered, now=ISSUED_AT)


def test_token_signed_with_another_secret_is_invalid():
    token = jwt.encode({**IDENTITY, "iat": 0, "exp": 2 ** 31, "jti": "abc"}, "other", algorithm=ALGORITHM)
    with pytest.raises(TokenInvalidError):
        decode_access_token(token)


def test_token_missing_claims_is_invalid():
    token = jwt.encode({"sub": "someone", "exp": 2 ** 31}, SECRET_KEY, algorithm=ALGORITHM)
    with pytest.raises(TokenInvalidError):
        decode_access_token(token)


def test_garbage_token_is_invalid():
    with pytest.raises(TokenInvalidError):
        decode_access_token("not.a.jwt")


def test_password_hash_is_salted_and_verifies():
    first = get_password_hash("kilimo123")
    second = get_password_hash("kilimo123")

    assert first != "kilimo123"
    assert first != second
    assert verify_password("kilimo123", first)
    assert not verify_password("kilimo124", first)


@pytest.mark.parametrize("header", ["Token abc", "Bearer", "Bearer ", "bearer abc", "Bearer a b", ""])
def test_bearer_header_must_be_exact(header):
    with pytest.raises(MalformedHeaderError):
        get_bearer_token(header)


def test_missing_bearer_header():
    with pytest.raises(MissingTokenError):
        get_bearer_token(None)


def test_bearer_header_yields_token():
    assert get_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"
