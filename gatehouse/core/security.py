"""Password hashing and session cookie signing."""

import bcrypt
import jwt

# Bcrypt cost (rounds).
BCRYPT_ROUNDS = 10

SESSION_COOKIE_ALGORITHM = "HS256"


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors.
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Malformed hashes never match."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False


def sign_session_id(session_id: str, secret: str) -> str:
    """Return the cookie value for a session id, signed with the session secret."""
    return jwt.encode({"sid": session_id}, secret, algorithm=SESSION_COOKIE_ALGORITHM)


def unsign_session_id(token: str | None, secret: str) -> str | None:
    """
    Return the session id carried by a cookie value, or None.

    Missing, tampered, or foreign cookies all decode to None; callers treat that as anonymous.
    """
    if not token:
        return None
    try:
        payload = jwt.decode(token, secret, algorithms=[SESSION_COOKIE_ALGORITHM])
    except jwt.PyJWTError:
        return None
    sid = payload.get("sid")
    if not isinstance(sid, str) or not sid:
        return None
    return sid
