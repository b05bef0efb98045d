import uuid

import pytest
from jose import JWTError
from pydantic import ValidationError

from brandkeeper.core.auth.schemas import ChangePasswordRequest
from brandkeeper.core.auth.security import (
    DIGITS,
    LOWERCASE,
    PASSWORD_ALPHABET,
    SYMBOLS,
    UPPERCASE,
    create_access_token,
    decode_access_token,
    generate_random_password,
    generate_refresh_token,
    hash_password,
    hash_refresh_token,
    verify_password,
)


def test_password_hash_roundtrip():
    plain = "MyS3cure!Pass"
    hashed = hash_password(plain)
    assert verify_password(plain, hashed)
    assert not verify_password("wrong", hashed)


def test_access_token_carries_role_and_company():
    user_id, company_id = uuid.uuid4(), uuid.uuid4()
    payload = decode_access_token(create_access_token(user_id, "admin", company_id))
    assert payload["sub"] == str(user_id)
    assert payload["role"] == "admin"
    assert payload["company_id"] == str(company_id)


def test_decode_rejects_garbage():
    with pytest.raises(JWTError):
        decode_access_token("not-a-token")


def test_refresh_token_hash():
    raw, hashed = generate_refresh_token()
    assert hashed == hash_refresh_token(raw)
    assert raw != hashed


def test_generated_password_has_every_class():
    for _ in range(50):
        password = generate_random_password()
        assert len(password) == 12
        assert any(ch in UPPERCASE for ch in password)
        assert any(ch in LOWERCASE for ch in password)
        assert any(ch in DIGITS for ch in password)
        assert any(ch in SYMBOLS for ch in password)
        assert all(ch in PASSWORD_ALPHABET for ch in password)


def test_generated_password_length():
    assert len(generate_random_password(4)) == 4
    assert len(generate_random_password(32)) == 32
    with pytest.raises(ValueError):
        generate_random_password(3)


def test_change_password_confirmation_must_match():
    with pytest.raises(ValidationError) as exc:
        ChangePasswordRequest(current_password="old-pass", new_password="nueva123", confirm_password="otra123")
    errors = exc.value.errors()
    assert errors[0]["loc"] == ("confirm_password",)
    assert errors[0]["msg"] == "Las contraseñas no coinciden"


def test_change_password_rejects_short_password():
    with pytest.raises(ValidationError) as exc:
        ChangePasswordRequest(current_password="old-pass", new_password="abc", confirm_password="abc")
    assert exc.value.errors()[0]["msg"] == "La contraseña debe tener al menos 6 caracteres"
