"""Mock authentication helpers: demo credential check and session tokens."""

import base64
import binascii
import hmac
import time
from typing import Optional

from components.core.config import get_settings
from components.core.schemas import AuthUser

DEMO_USER_ID = "user-001"


def demo_user() -> AuthUser:
    """Return the single demo administrator."""
    settings = get_settings()
    return AuthUser(
        id=DEMO_USER_ID,
        name=settings.DEMO_USER_NAME,
        email=settings.DEMO_EMAIL,
    )


def verify_credentials(email: str, password: str) -> bool:
    """Compare against the demo credential pair, email case-insensitively."""
    settings = get_settings()
    email_ok = email.strip().lower() == settings.DEMO_EMAIL.lower()
    password_ok = hmac.compare_digest(password.encode(), settings.DEMO_PASSWORD.encode())
    return email_ok and password_ok


def create_access_token(email: str, timestamp_ms: Optional[int] = None) -> str:
    """Create a session token: base64 of "<email>:<timestamp in ms>"."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    raw = f"{email}:{timestamp_ms}"
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def verify_token(token: str) -> Optional[AuthUser]:
    """Decode a session token and return the user it belongs to."""
    try:
        raw = base64.b64decode(token, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None

    email, sep, timestamp = raw.rpartition(":")
    if not sep or not timestamp.isdigit():
        return None

    user = demo_user()
    if email.lower() != user.email.lower():
        return None
    return user
