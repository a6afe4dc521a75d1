# app/api/routes/auth.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.schemas.user import (
    UserCreate, UserLogin, UserProfilePatch, UserResponse, SignupResponse, LoginResponse
)
from app.services import user_service

router = APIRouter(tags=["인증"])

@router.post("/signup", response_model=SignupResponse)
def signup(user_data: UserCreate, db: Session = Depends(get_db)):
    """회원가입"""
    user = user_service.signup(db, user_data)
    return SignupResponse(user_id=user.id)

@router.post("/login", response_model=LoginResponse)
def login(user_data: UserLogin, db: Session = Depends(get_db)):
    """로그인 (username 또는 email)"""
    user, token = user_service.login(db, user_data)
    return LoginResponse(
        token=token,
        user_id=user.id,
        category_id=user.category_id,
        expires_in=settings.access_token_expire_minutes * 60
    )

@router.get("/users/{user_id}", response_model=UserResponse)
def get_profile(user_id: int, db: Session = Depends(get_db)):
    """프로필 조회"""
    return user_service.get_user(db, user_id)

@router.patch("/users/{user_id}", response_model=UserResponse)
def update_profile(user_id: int, patch: UserProfilePatch, db: Session = Depends(get_db)):
    """프로필 수정 (닉네임 / 성별 / 선호 카테고리)"""
    return user_service.update_profile(db, user_id, patch)
