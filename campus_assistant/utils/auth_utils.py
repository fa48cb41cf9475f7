import datetime
from typing import Any, Dict, Optional

import jwt

from campus_assistant.config import Config

SECRET_KEY = Config.SECRET_KEY
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60


def create_access_token(
    data: Dict[str, Any], expires_delta: Optional[datetime.timedelta] = None
) -> str:
    """Create a new JWT access token.

    Tokens are normally issued by the campus auth backend, which shares
    SECRET_KEY with this service. Kept here for scripts and tests.
    """
    to_encode = data.copy()
    expire = datetime.datetime.now(datetime.timezone.utc) + (
        expires_delta or datetime.timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Decode and verify a JWT token."""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        return payload
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


def user_key_from_payload(payload: Optional[Dict[str, Any]]) -> str:
    """Storage scope for a decoded token; guests share the `guest` scope."""
    if not payload:
        return "guest"
    subject = str(payload.get("sub") or payload.get("id") or "").strip()
    return f"user:{subject}" if subject else "guest"
