from datetime import UTC, datetime, timedelta
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from admin_panel.config import AdminPanelConfig

ALGORITHM = "HS256"


def encode_session(data: Dict[str, Any], config: AdminPanelConfig) -> str:
    """
    Sign session data for the session cookie

    Args:
        data: JSON-serializable session contents
        config: Provides SESSION_SECRET and SESSION_MAX_AGE_SECONDS

    Returns:
        JWT string (HS256)
    """
    now = datetime.now(UTC)
    payload = {
        "data": data,
        "exp": now + timedelta(seconds=config.SESSION_MAX_AGE_SECONDS),
        "iat": now,
    }
    return jwt.encode(payload, config.SESSION_SECRET, algorithm=ALGORITHM)


def decode_session(token: str, config: AdminPanelConfig) -> Optional[Dict[str, Any]]:
    """
    Verify and decode a session cookie

    Returns:
        Session data, or None if the signature is bad or the cookie expired
    """
    try:
        payload = jwt.decode(token, config.SESSION_SECRET, algorithms=[ALGORITHM])
    except JWTError:
        return None
    data = payload.get("data")
    return data if isinstance(data, dict) else None
