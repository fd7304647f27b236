"""
core/security.py
----------------
Session token and room password utilities.

Design decisions:
  - Sessions are JWTs signed by the identity provider with the shared
    SECRET_KEY. The payload carries sub (user id) plus profile claims
    (email, first_name, last_name, profile_image_url).
  - create_access_token mints the same shape of token; it is used by the
    identity bridge and by the test-suite.
  - Room passwords are compared against a passlib hash, never stored in
    plain text.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt
from passlib.context import CryptContext

from dealhub.core.config import settings

DEFAULT_SESSION_LIFETIME = timedelta(hours=12)

# pbkdf2_sha256 keeps the whole passphrase (no 72 byte truncation)
room_password_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


# ── Room password utilities ───────────────────────────────────────────────────

def hash_room_password(plain: str) -> str:
    return room_password_context.hash(plain)


def verify_room_password(plain: Optional[str], hashed: str) -> bool:
    """Constant-time comparison of a submitted room password against its hash."""
    if plain is None:
        return False
    return room_password_context.verify(plain, hashed)


# ── Session token utilities ───────────────────────────────────────────────────

def create_access_token(
    subject: str,
    email: Optional[str] = None,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    profile_image_url: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Mint a session token.

    Args:
        subject: Identity provider user id (stored in 'sub' claim).
        email / first_name / last_name / profile_image_url: profile claims
            copied onto the local users table on each request.
        expires_delta: Optional custom expiry; defaults to 12 hours.

    Returns:
        Signed JWT string.
    """
    now = datetime.now(timezone.utc)
    payload: Dict[str, Any] = {
        "sub": subject,
        "email": email,
        "first_name": first_name,
        "last_name": last_name,
        "profile_image_url": profile_image_url,
        "exp": now + (expires_delta or DEFAULT_SESSION_LIFETIME),
        "iat": now,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate a session token.

    Raises:
        JWTError: If the token is invalid, expired, or tampered with.

    Returns:
        Raw payload dict.
    """
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
