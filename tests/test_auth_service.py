import jwt
import pytest

from backend.services.auth_service import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

SECRET = "unit-test-secret"


def test_hash_is_salted_and_verifiable():
    first = hash_password("secret1", rounds=4)
    second = hash_password("secret1", rounds=4)
    assert first != "secret1"
    assert first != second
    assert verify_password("secret1", first)
    assert not verify_password("secret2", first)


def test_verify_rejects_non_bcrypt_value():
    assert not verify_password("secret1", "secret1")


def test_token_round_trip_carries_user_id():
    token = create_access_token("user-123", SECRET)
    claims = decode_access_token(token, SECRET)
    assert claims["id"] == "user-123"
    assert claims["exp"] - claims["iat"] == 30 * 24 * 60 * 60


def test_token_with_wrong_secret_is_rejected():
    token = create_access_token("user-123", SECRET)
    with pytest.raises(jwt.InvalidSignatureError):
        decode_access_token(token, "another-secret")


def test_expired_token_is_rejected():
    token = create_access_token("user-123", SECRET, expire_days=-1)
    with pytest.raises(jwt.ExpiredSignatureError):
        decode_access_token(token, SECRET)


def test_token_without_id_claim_is_rejected():
    token = jwt.encode({"sub": "user-123", "exp": 4102444800}, SECRET, algorithm="HS256")
    with pytest.raises(jwt.MissingRequiredClaimError):
        decode_access_token(token, SECRET)


def test_garbage_token_is_rejected():
    with pytest.raises(jwt.DecodeError):
        decode_access_token("not-a-jwt", SECRET)
