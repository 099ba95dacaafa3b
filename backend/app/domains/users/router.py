from __future__ import annotations

from datetime import datetime
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, field_validator
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.core.security import hash_password
from app.db.session import get_session
from app.models.user import User

router = APIRouter(prefix="/users", tags=["users"])
logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 4


class UserCreate(BaseModel):
    username: str
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)
    full_name: str = Field(..., min_length=1)
    role: Literal["admin", "user"] = "user"

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        username = value.strip()
        if not username or " " in username:
            raise ValueError("Username must be a single word")
        return username


class PasswordUpdate(BaseModel):
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)


class UserOut(BaseModel):
    id: int
    username: str
    full_name: str
    role: Literal["admin", "user"]
    created_at: datetime


def _sanitize(user: User) -> UserOut:
    return UserOut(
        id=user.id,
        username=user.username,
        full_name=user.full_name,
        role=user.role,
        created_at=user.created_at or datetime.utcnow(),
    )


def _find(db: Session, username: str) -> User | None:
    return db.query(User).filter(func.lower(User.username) == username.strip().lower()).one_or_none()


@router.get("", response_model=list[UserOut])
def list_users(db: Session = Depends(get_session)) -> list[UserOut]:
    users = db.query(User).order_by(User.full_name.asc(), User.id.asc()).all()
    return [_sanitize(user) for user in users]


@router.post("", response_model=UserOut, status_code=201)
def create_user(payload: UserCreate, db: Session = Depends(get_session)) -> UserOut:
    if _find(db, payload.username):
        raise HTTPException(status_code=400, detail="User already exists")

    user = User(
        username=payload.username,
        hashed_password=hash_password(payload.password),
        full_name=payload.full_name.strip(),
        role=payload.role,
    )

    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("user_created", username=user.username, role=user.role)
    return _sanitize(user)


@router.put("/{username}/password", response_model=UserOut)
def update_password(username: str, payload: PasswordUpdate, db: Session = Depends(get_session)) -> UserOut:
    user = _find(db, username)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")

    user.hashed_password = hash_password(payload.password)
    db.commit()
    db.refresh(user)

    logger.info("password_updated", username=user.username)
    return _sanitize(user)
