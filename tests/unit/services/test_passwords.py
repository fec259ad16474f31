import string

from admin_panel.app.services.passwords import (
    hash_password,
    random_alphanumeric,
    validate_new_password,
    verify_password,
)


def test_random_alphanumeric():
    value = random_alphanumeric(12)

    assert len(value) == 12
    assert set(value) <= set(string.ascii_letters + string.digits)


def test_hash_and_verify():
    password_hash = hash_password("Secret123")

    assert password_hash.startswith("$2b$12$")
    assert verify_password("Secret123", password_hash) is True
    assert verify_password("secret123", password_hash) is False


def test_verify_with_malformed_hash():
    assert verify_password("Secret123", "not-a-bcrypt-hash") is False


def test_mismatch_is_reported_before_policy():
    result = validate_new_password("short", "other", 8)

    assert result.is_err()
    assert result.error.code == "PASSWORD_MISMATCH"
    assert result.error.message == "Passwords did not match"


def test_policy_minimum_length():
    assert validate_new_password("1234567", "1234567", 8).error.code == "PASSWORD_POLICY"
    assert validate_new_password("12345678", "12345678", 8).is_ok()
