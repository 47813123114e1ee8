import pytest

from storefront_api.app.core.exceptions import AuthError
from storefront_api.app.core.security import (
    ADMIN_ROLE,
    create_access_token,
    decode_access_token,
    hash_password,
    require_admin,
    verify_password,
)
from fastapi.security import HTTPAuthorizationCredentials


def _bearer(token):
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


def test_password_hash_is_salted_and_verifiable():
    first = hash_password("hunter2")
    second = hash_password("hunter2")
    assert first != second
    assert "hunter2" not in first
    assert verify_password("hunter2", first)
    assert verify_password("hunter2", second)
    assert not verify_password("hunter3", first)


def test_verify_password_rejects_malformed_hash():
    assert not verify_password("anything", "plaintext-password")
    assert not verify_password("anything", "zz$zz")


def test_token_round_trip():
    token = create_access_token({"sub": "operator", "role": ADMIN_ROLE})
    payload = decode_access_token(token)
    assert payload["sub"] == "operator"
    assert payload["exp"] > payload["iat"]


def test_expired_token_is_rejected():
    token = create_access_token({"sub": "operator", "role": ADMIN_ROLE}, expires_delta=-10)
    assert decode_access_token(token) is None


def test_tampered_token_is_rejected():
    header, payload, signature = create_access_token({"sub": "operator", "role": ADMIN_ROLE}).split(".")
    forged = create_access_token({"sub": "intruder", "role": ADMIN_ROLE}).split(".")[1]
    assert decode_access_token(f"{header}.{forged}.{signature}") is None
    assert decode_access_token("not-a-token") is None
    assert decode_access_token("a.b.c") is None


def test_require_admin():
    assert require_admin(_bearer(create_access_token({"sub": "op", "role": ADMIN_ROLE})))["sub"] == "op"
    with pytest.raises(AuthError):
        require_admin(None)
    with pytest.raises(AuthError):
        require_admin(_bearer(create_access_token({"sub": "someone", "role": "customer"})))
