"""
Authentication Routes

POST /auth/register - Register new employer
POST /auth/login - Login and get JWT token
GET /auth/me - Get current employer from token
"""

from fastapi import APIRouter, Depends

from job_platform.api.deps import get_employer_store
from job_platform.core.auth import hash_password, verify_password, create_access_token, get_current_employer
from job_platform.core.errors import UnauthorizedError
from job_platform.core.logging import get_logger
from job_platform.services.mongo_service import EmployerStore
from job_platform.schemas.schemas import (
    RegisterRequest, LoginRequest, TokenResponse, EmployerResponse, MessageResponse
)

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


@router.post("/register", response_model=MessageResponse, status_code=201)
def register(request: RegisterRequest, employers: EmployerStore = Depends(get_employer_store)):
    """
    Register a new employer account.

    After registration, login to get an access token.
    """
    employer = employers.create(
        name=request.name,
        email=request.email,
        password_hash=hash_password(request.password)
    )
    logger.info("Employer registered: %s", employer["_id"])
    return MessageResponse(message="Employer registered successfully")


@router.post("/login", response_model=TokenResponse)
def login(request: LoginRequest, employers: EmployerStore = Depends(get_employer_store)):
    """
    Login and receive JWT access token (valid for 1 hour).

    Include token in requests: Authorization: Bearer <token>
    """
    employer = employers.find_by_email(request.email)

    # Same answer for unknown email and wrong password
    if not employer or not verify_password(request.password, employer["password"]):
        raise UnauthorizedError(INVALID_CREDENTIALS)

    token = create_access_token(employer_id=employer["_id"], email=employer["email"])
    return TokenResponse(token=token)


@router.get("/me", response_model=EmployerResponse)
async def get_me(employer: dict = Depends(get_current_employer)):
    """Identity carried by the current access token."""
    return EmployerResponse(employer_id=employer["employer_id"], email=employer["email"])
