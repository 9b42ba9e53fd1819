"""
Password hashing and access token handling.

Hashes are bcrypt strings, so the salt and cost factor travel with the
digest. Tokens are HS256 JWTs carrying the user's id (``sub``) and email.
"""

import logging
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from errors import InvalidToken, TokenExpired

logger = logging.getLogger(__name__)

# bcrypt ignores input past 72 bytes, so longer passwords are refused
BCRYPT_MAX_BYTES = 72
DEFAULT_ROUNDS = 12


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > BCRYPT_MAX_BYTES


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    if password_too_long(password):
        raise ValueError(f"password exceeds {BCRYPT_MAX_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        if password_too_long(password):
            return False
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False


def create_access_token(
    data: dict, secret: str, expires_in: int, algorithm: str = "HS256"
) -> str:
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    to_encode.update({"iat": now, "exp": now + timedelta(seconds=expires_in)})
    return jwt.encode(to_encode, secret, algorithm=algorithm)


def decode_access_token(token: str, secret: str, algorithm: str = "HS256") -> dict:
    """Return the token's claims.

    Raises TokenExpired when the signature is good but ``exp`` has passed,
    and InvalidToken for anything else (bad signature, garbage input).
    """
    try:
        return jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired access token")
        raise TokenExpired()
    except jwt.InvalidTokenError as exc:
        logger.warning("Rejected invalid access token: %s", exc)
        raise InvalidToken()
