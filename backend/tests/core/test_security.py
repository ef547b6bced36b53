"""Password hashing and purpose-scoped JWTs."""

from datetime import timedelta

import pytest

from src.shared.utils.security import (
    PURPOSE_ACTIVATION,
    PURPOSE_RESET,
    SecurityUtils,
)

SECRET = "unit-test-secret"


def test_password_hash_roundtrip():
    hashed = SecurityUtils.hash_password("hunter22")
    assert hashed != "hunter22"
    assert SecurityUtils.verify_password("hunter22", hashed)
    assert not SecurityUtils.verify_password("hunter23", hashed)


def test_access_token_carries_claims():
    token = SecurityUtils.create_access_token({"user_id": 7, "email": "a@b.c"}, SECRET)
    payload = SecurityUtils.decode_access_token(token, SECRET)
    assert payload["user_id"] == 7
    assert payload["email"] == "a@b.c"
    assert payload["purpose"] == "access"


def test_expired_token_rejected():
    token = SecurityUtils.create_access_token(
        {"user_id": 1}, SECRET, expires_delta=timedelta(seconds=-1)
    )
    with pytest.raises(ValueError, match="expired"):
        SecurityUtils.decode_access_token(token, SECRET)


def test_wrong_secret_rejected():
    token = SecurityUtils.create_access_token({"user_id": 1}, SECRET)
    with pytest.raises(ValueError, match="Invalid token"):
        SecurityUtils.decode_access_token(token, "other-secret")


@pytest.mark.parametrize("purpose", [PURPOSE_RESET, PURPOSE_ACTIVATION])
def test_purpose_tokens_are_not_access_tokens(purpose):
    token = SecurityUtils.create_access_token({"user_id": 1}, SECRET, purpose=purpose)
    with pytest.raises(ValueError, match="wrong purpose"):
        SecurityUtils.decode_access_token(token, SECRET)
    assert SecurityUtils.decode_access_token(token, SECRET, purpose=purpose)["user_id"] == 1


def test_digest_is_stable_and_nonces_differ():
    assert SecurityUtils.digest("abc") == SecurityUtils.digest("abc")
    assert len(SecurityUtils.digest("abc")) == 64
    assert SecurityUtils.generate_nonce() != SecurityUtils.generate_nonce()
