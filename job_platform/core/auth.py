"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt
- JWT token creation/verification (1 hour validity, no refresh, no revocation)
- FastAPI dependency for protected routes
- Ownership check for job mutations
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from job_platform.core.config import get_settings
from job_platform.core.errors import ForbiddenError, InvalidTokenError, UnauthorizedError
from job_platform.core.logging import get_logger

settings = get_settings()
logger = get_logger(__name__)

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Bearer token extractor (missing header is reported as 401 by us, not by FastAPI)
bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(employer_id: str, email: str, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token carrying the employer id and email."""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode = {"sub": str(employer_id), "email": email, "exp": expire}
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict:
    """
    Decode and verify JWT token.

    Returns {"employer_id", "email"}. Raises InvalidTokenError when the
    signature is wrong, the token is malformed or expired, or has no subject.
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.info("JWT verification failed: %s", e)
        raise InvalidTokenError()

    employer_id = payload.get("sub")
    if not employer_id:
        raise InvalidTokenError()

    return {"employer_id": employer_id, "email": payload.get("email")}


async def get_current_employer(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> dict:
    """
    FastAPI dependency - Get current authenticated employer.

    Usage:
        @router.put("/{job_id}")
        async def route(employer: dict = Depends(get_current_employer)):
            return employer
    """
    if credentials is None:
        raise UnauthorizedError()
    return decode_token(credentials.credentials)


def ensure_owner(job: dict, employer: dict) -> None:
    """Only the employer that posted a job may change it."""
    if str(job.get("employerId")) != str(employer["employer_id"]):
        raise ForbiddenError("Forbidden: You are not authorized to modify this job posting.")
