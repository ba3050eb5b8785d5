"""Security helpers for hashing, token generation and credential verification."""

from datetime import datetime, timedelta, timezone
from hashlib import sha256
import secrets

from jose import JWTError, jwt
from passlib.context import CryptContext

from teamhub.config import get_settings
from teamhub.domain.entities import Principal, User
from teamhub.domain.errors import UnauthenticatedError

pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__rounds=310_000,
)

_ALGORITHM = "HS256"


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def password_signature(user: User) -> str:
    """Fingerprint of the stored hash; tokens issued before a password change stop matching."""

    return sha256(f"{user.id}:{user.password or ''}".encode()).hexdigest()


def create_access_token(user: User, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(tz=timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    claims = {
        "sub": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role.value,
        "pwd_sig": password_signature(user),
        "exp": expire,
    }
    return jwt.encode(claims, settings.secret_key, algorithm=_ALGORITHM)


def decode_access_token(token: str) -> dict:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[_ALGORITHM])
    except JWTError as exc:
        raise UnauthenticatedError("Invalid or expired token") from exc


def verify_credential(token: str | None) -> Principal:
    """Decode a bearer ``token`` into the :class:`Principal` it was issued to."""

    if not token:
        raise UnauthenticatedError("Authentication required")
    claims = decode_access_token(token)
    user_id = claims.get("sub")
    email = claims.get("email")
    if not isinstance(user_id, str) or not user_id or not isinstance(email, str):
        raise UnauthenticatedError("Invalid or expired token")
    return Principal(
        id=user_id,
        email=email,
        name=str(claims.get("name") or ""),
        role=str(claims.get("role") or ""),
    )


def generate_invitation_token() -> str:
    """Return a random 64 character hex token for team invitations."""

    return secrets.token_hex(32)


__all__ = [
    "create_access_token",
    "decode_access_token",
    "generate_invitation_token",
    "get_password_hash",
    "password_signature",
    "verify_credential",
    "verify_password",
]
