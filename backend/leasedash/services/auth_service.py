"""
Authentication Service
JWT-based auth with bcrypt password hashing.
"""
import logging
import time
import bcrypt
import jwt
from typing import Optional, Dict, Any

from leasedash.config import get_settings
from leasedash.models import CallerSession

logger = logging.getLogger(__name__)

# User registry: passwords are bcrypt hashed, NEVER stored in plaintext
USERS: Dict[str, Dict[str, Any]] = {}


def hash_password(plain_password: str) -> str:
    return bcrypt.hashpw(plain_password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plaintext password against a bcrypt hash."""
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))


def register_user(username: str, password: str, display_name: str = "") -> None:
    """Add (or replace) a user in the registry."""
    USERS[username] = {
        "password_hash": hash_password(password),
        "display_name": display_name or username,
    }


def load_users(settings=None) -> int:
    """Seed the registry from the configured accounts. Returns how many were loaded."""
    settings = settings or get_settings()
    for username, entry in settings.users.items():
        USERS[username] = {
            "password_hash": entry["password_hash"],
            "display_name": entry.get("display_name") or username,
        }
    if settings.users:
        logger.info(f"[AUTH] Loaded {len(settings.users)} configured users")
    return len(settings.users)


def authenticate_user(username: str, password: str) -> Optional[Dict[str, Any]]:
    """Authenticate a user. Returns user info dict or None."""
    user = USERS.get(username)
    if not user:
        return None
    if not verify_password(password, user["password_hash"]):
        return None
    return {
        "username": username,
        "display_name": user["display_name"],
    }


def create_token(user_info: Dict[str, Any]) -> str:
    """Create a JWT token for an authenticated user."""
    settings = get_settings()
    now = int(time.time())
    payload = {
        "sub": user_info["username"],
        "display_name": user_info["display_name"],
        "iat": now,
        "exp": now + settings.jwt_expiration_seconds,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> Optional[Dict[str, Any]]:
    """Verify a JWT token. Returns decoded payload or None."""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


def session_from_payload(payload: Dict[str, Any]) -> CallerSession:
    return CallerSession(
        user_id=payload.get("sub") or "",
        display_name=payload.get("display_name") or "",
    )


load_users()
