import jwt
import pytest

from nuschedule.core.security import (
    TokenError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def test_password_hash_roundtrip():
    hashed = hash_password("supersecret")
    assert hashed != "supersecret"
    assert verify_password(hashed, "supersecret")
    assert not verify_password(hashed, "supersecret!")


def test_token_claims(settings):
    token = create_access_token(settings, 42, "aliya.nurlanova@nu.edu.kz")
    claims = decode_access_token(settings, token)
    assert claims["user_id"] == 42
    assert claims["email"] == "aliya.nurlanova@nu.edu.kz"
    assert claims["exp"] > claims["iat"]


def test_token_signed_with_other_key(settings):
    other = settings.model_copy(update={"jwt_secret": "another-secret-key-that-is-long-enough-too"})
    token = create_access_token(other, 42, "aliya.nurlanova@nu.edu.kz")
    with pytest.raises(TokenError, match="invalid token"):
        decode_access_token(settings, token)


def test_token_without_expiry(settings):
    token = jwt.encode({"user_id": 42}, settings.jwt_secret, algorithm="HS256")
    with pytest.raises(TokenError):
        decode_access_token(settings, token)


def test_token_without_user_id(settings):
    token = create_access_token(settings, 42, "aliya.nurlanova@nu.edu.kz")
    claims = jwt.decode(token, settings.jwt_secret, algorithms=["HS256"])
    claims["user_id"] = "42"
    forged = jwt.encode(claims, settings.jwt_secret, algorithm="HS256")
    with pytest.raises(TokenError):
        decode_access_token(settings, forged)


def test_missing_secret(settings):
    unset = settings.model_copy(update={"jwt_secret": ""})
    with pytest.raises(TokenError):
        create_access_token(unset, 42, "aliya.nurlanova@nu.edu.kz")
