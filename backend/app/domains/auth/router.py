from __future__ import annotations

import secrets

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field, field_validator
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.core.security import verify_password
from app.db.session import get_session
from app.models.user import User

router = APIRouter(prefix="/auth", tags=["auth"])
logger = get_logger(__name__)


class LoginRequest(BaseModel):
    username: str
    password: str = Field(..., min_length=1)

    @field_validator("username")
    @classmethod
    def normalize_username(cls, value: str) -> str:
        username = value.strip()
        if not username:
            raise ValueError("Username is required")
        return username


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    username: str
    full_name: str
    role: str


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: Session = Depends(get_session)) -> LoginResponse:
    logger.info("login_attempt", username=payload.username)
    user = (
        db.query(User)
        .filter(func.lower(User.username) == payload.username.lower())
        .one_or_none()
    )

    if not user or not verify_password(payload.password, user.hashed_password):
        logger.info("login_failed", username=payload.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid username or password")

    token = secrets.token_urlsafe(32)
    logger.info("login_success", username=user.username, role=user.role)

    return LoginResponse(access_token=token, username=user.username, full_name=user.full_name, role=user.role)
