import bcrypt
import jwt
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

BCRYPT_ROUNDS = 10
DEFAULT_ALGORITHM = "HS256"


# ---------------- PASSWORD HASHING ----------------

def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a password using bcrypt."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password hash."""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # stored value is not a bcrypt hash
        return False


# ---------------- JWT TOKENS ----------------

def create_access_token(
    user_id: str,
    secret: str,
    expire_days: int = 30,
    algorithm: str = DEFAULT_ALGORITHM,
) -> str:
    """Generate JWT token for a user."""
    issued_at = datetime.now(timezone.utc)
    payload = {
        "id": str(user_id),
        "iat": issued_at,
        "exp": issued_at + timedelta(days=expire_days),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(token: str, secret: str, algorithm: str = DEFAULT_ALGORITHM) -> Dict[str, Any]:
    """
    Verify signature and expiry and return the claims.
    Raises jwt.PyJWTError (ExpiredSignatureError, InvalidSignatureError, DecodeError...)
    """
    return jwt.decode(token, secret, algorithms=[algorithm], options={"require": ["id", "exp"]})
