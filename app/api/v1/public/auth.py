# ============================================================================
# FILE: app/api/v1/public/auth.py
# Public authentication endpoints - login and current user
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from pydantic import BaseModel
import logging

from app.api.dependencies import (
    get_db,
    get_current_active_user,
    create_access_token,
)
from app.services.user.user_service import UserService
from app.models.user import User

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["Authentication"])


# ============================================================================
# Pydantic Schemas
# ============================================================================

class LoginRequest(BaseModel):
    """Request body for login. `username` also accepts an email address."""
    username: str
    password: str

    class Config:
        json_schema_extra = {
            "example": {
                "username": "admin",
                "password": "SecurePass123!"
            }
        }


class UserResponse(BaseModel):
    id: str
    username: str
    email: str
    role: str
    is_active: bool


class TokenResponse(BaseModel):
    """Response with the bearer token and the signed-in user."""
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


def _user_to_response(user: User) -> UserResponse:
    return UserResponse(
        id=str(user.id),
        username=user.username,
        email=user.email,
        role=user.role,
        is_active=user.is_active,
    )


# ============================================================================
# Endpoints
# ============================================================================

@router.post("/login", response_model=TokenResponse)
async def login(
        request: LoginRequest,
        db: Session = Depends(get_db)
):
    """Exchange username (or email) and password for an access token."""
    user = UserService.authenticate_user(db, request.username, request.password)

    if not user:
        logger.info(f"Failed login attempt for {request.username}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_access_token({"sub": str(user.id), "role": user.role})

    return TokenResponse(access_token=access_token, user=_user_to_response(user))


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_active_user)):
    """Currently authenticated user."""
    return _user_to_response(current_user)
