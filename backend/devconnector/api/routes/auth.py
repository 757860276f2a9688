from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session
from devconnector.core.database import get_db
from devconnector.core.security import TokenService
from devconnector.api.dependencies import get_current_user_id, get_token_service
from devconnector.services.auth_service import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


class LoginRequest(BaseModel):
    # Fields are optional here so that every missing or invalid one is
    # reported together by the service-level rules
    email: Optional[str] = None
    password: Optional[str] = None


class TokenResponse(BaseModel):
    token: str


class UserResponse(BaseModel):
    """Public view of a user - never includes the password hash"""
    id: int
    name: str
    email: str
    avatar: Optional[str] = None
    date: Optional[datetime] = Field(default=None, validation_alias="created_at")

    model_config = ConfigDict(from_attributes=True)


@router.get("", response_model=UserResponse)
def get_authenticated_user(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Profile of the user owning the token"""
    return auth_service.get_profile(db, user_id)


@router.post("", response_model=TokenResponse)
def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Authenticate user and get token"""
    token = auth_service.login(db, credentials.model_dump(), tokens)
    return {"token": token}
