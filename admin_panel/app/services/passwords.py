import secrets
import string

import bcrypt

from admin_panel.app.errors import ValidationError
from admin_panel.libs.result import Result, Return

ALPHANUMERIC = string.ascii_letters + string.digits


def random_alphanumeric(length: int) -> str:
    """Cryptographically secure alphanumeric string"""
    return "".join(secrets.choice(ALPHANUMERIC) for _ in range(length))


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(12)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        # Malformed hash in storage
        return False


def validate_new_password(password: str, password_repeat: str, min_length: int) -> Result[None]:
    """Confirmation must match, then the length policy applies"""
    if password != password_repeat:
        return Return.err(ValidationError("PASSWORD_MISMATCH", "Passwords did not match"))

    if len(password) < min_length:
        return Return.err(
            ValidationError("PASSWORD_POLICY", "Passwords did not match requirement")
        )

    return Return.ok(None)
