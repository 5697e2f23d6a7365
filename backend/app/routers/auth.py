"""
Authentication router: email/password login and registration.

Both endpoints are public. The returned token goes in the Authorization header
of later requests as "Bearer <token>".
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from skillshare.db import get_db
from skillshare.logging import get_logger
from skillshare.services import AuthenticationService

from ..auth.dependencies import get_auth_service, get_current_subject
from ..schemas import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from ..services import user_service

logger = get_logger("auth")

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    auth: AuthenticationService = Depends(get_auth_service),
) -> AuthResponse:
    result = auth.login(payload.email, payload.password)
    return AuthResponse.model_validate(result, from_attributes=True)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    auth: AuthenticationService = Depends(get_auth_service),
) -> AuthResponse:
    result = auth.register(
        email=payload.email,
        password=payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
        address=payload.address,
        birthday=payload.birthday,
        avatar_url=payload.avatar_url,
    )
    return AuthResponse.model_validate(result, from_attributes=True)


@router.get("/me", response_model=UserResponse)
def me(
    subject_id: str = Depends(get_current_subject),
    db: Session = Depends(get_db),
) -> UserResponse:
    """Private profile of the caller."""
    return UserResponse.model_validate(user_service.get_user(db, subject_id))
