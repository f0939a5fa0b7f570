"""Password hashing and bearer-token encoding."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple
import secrets

import bcrypt
import jwt

from adfluence.config import settings

# bcrypt only reads the first 72 bytes of a password
BCRYPT_MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt with a fresh per-password salt.

    Args:
        password: Plain text password

    Returns:
        Bcrypt hash string
    """
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify a password against its bcrypt hash.

    Args:
        password: Plain text password to verify
        password_hash: Stored hash

    Returns:
        True if password matches, False otherwise
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash or over-long password
        return False


_dummy_hash: Optional[str] = None


def dummy_password_hash() -> str:
    """
    Hash to verify against when no account matches.

    Unknown emails then cost the same bcrypt work as wrong passwords.
    """
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = hash_password(secrets.token_urlsafe(16))
    return _dummy_hash


def validate_password_strength(password: str) -> Tuple[bool, str]:
    """
    Check password length limits.

    Args:
        password: Password to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not password or len(password) < 8:
        return False, "Password must be at least 8 characters long"

    if len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        return False, f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes long"

    return True, ""


def create_access_token(data: Dict[str, Any], expires_minutes: Optional[int] = None) -> str:
    """
    Create a signed JWT.

    A random jti makes every token unique, so two logins in the same second
    still yield distinct sessions.

    Args:
        data: Claims to encode; "sub" must be a string
        expires_minutes: Lifetime override; 0 means no exp claim

    Returns:
        Encoded token
    """
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    to_encode.update({"iat": now, "jti": secrets.token_hex(16)})

    lifetime = settings.ACCESS_TOKEN_EXPIRE_MINUTES if expires_minutes is None else expires_minutes
    if lifetime > 0:
        to_encode["exp"] = now + timedelta(minutes=lifetime)

    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Verify signature and expiry of a JWT.

    Returns:
        Claims, or None if the token is not acceptable
    """
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except jwt.PyJWTError:
        return None


def token_expiry(claims: Dict[str, Any]) -> Optional[datetime]:
    """Naive UTC expiry of decoded claims, if they carry one."""
    exp = claims.get("exp")
    if exp is None:
        return None
    return datetime.fromtimestamp(exp, tz=timezone.utc).replace(tzinfo=None)
