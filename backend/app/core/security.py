from datetime import datetime, timedelta
from typing import Optional, Dict, Any
from jose import ExpiredSignatureError, JWTError, jwt
import bcrypt

from app.core.config import settings
from app.core.exceptions import AuthenticationError


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password"""
    # Bcrypt has a 72 byte limit - truncate password if necessary
    password_bytes = plain_password.encode('utf-8')[:72]
    try:
        return bcrypt.checkpw(password_bytes, hashed_password.encode('utf-8'))
    except ValueError:
        # Malformed stored hash
        return False


def get_password_hash(password: str) -> str:
    """Hash password with configurable rounds (BCRYPT_ROUNDS in .env)"""
    password_bytes = password.encode('utf-8')[:72]
    hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS))
    return hashed.decode('utf-8')


def _encode(data: Dict[str, Any], expire: datetime, token_type: str) -> str:
    to_encode = data.copy()
    to_encode.update({"exp": expire, "type": token_type})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token"""
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    return _encode(data, expire, "access")


def create_refresh_token(data: Dict[str, Any]) -> str:
    """Create JWT refresh token"""
    expire = datetime.utcnow() + timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    return _encode(data, expire, "refresh")


def decode_token(token: str, expected_type: str = "access") -> Dict[str, Any]:
    """Decode a JWT and check its type claim"""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        error = AuthenticationError("Token has expired")
        error.code = "TOKEN_EXPIRED"
        raise error
    except JWTError:
        error = AuthenticationError("Could not validate credentials")
        error.code = "INVALID_TOKEN"
        raise error

    if payload.get("type") != expected_type:
        error = AuthenticationError("Invalid token type")
        error.code = "INVALID_TOKEN"
        raise error

    return payload
