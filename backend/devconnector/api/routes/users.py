from typing import Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session
from devconnector.core.database import get_db
from devconnector.core.security import TokenService
from devconnector.api.dependencies import get_token_service
from devconnector.api.routes.auth import TokenResponse
from devconnector.services.auth_service import auth_service

router = APIRouter(prefix="/users", tags=["users"])


class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


@router.post("", response_model=TokenResponse)
def register(
    user_data: RegisterRequest,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Register a new user and log them in"""
    token = auth_service.register(db, user_data.model_dump(), tokens)
    return {"token": token}
