# app/schemas/user.py
from pydantic import BaseModel, EmailStr, Field, model_validator
from datetime import datetime
from typing import Optional

class UserCreate(BaseModel):
    """회원가입 요청"""
    username: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=4, max_length=100)
    nickname: Optional[str] = Field(None, max_length=50)
    gender: Optional[str] = Field(None, max_length=10)
    category_id: Optional[int] = None

class UserLogin(BaseModel):
    """로그인 요청 (username 또는 email 중 하나)"""
    username: Optional[str] = None
    email: Optional[str] = None
    password: str

    @model_validator(mode="after")
    def require_identifier(self):
        if not self.username and not self.email:
            raise ValueError("username 또는 email 이 필요합니다")
        return self

class UserProfilePatch(BaseModel):
    """프로필 수정 (보낸 필드만 반영)"""
    nickname: Optional[str] = Field(None, max_length=50)
    gender: Optional[str] = Field(None, max_length=10)
    category_id: Optional[int] = None

class UserResponse(BaseModel):
    """유저 프로필 응답"""
    id: int
    username: str
    email: str
    nickname: Optional[str] = None
    gender: Optional[str] = None
    category_id: Optional[int] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class SignupResponse(BaseModel):
    ok: bool = True
    user_id: int
    message: str = "회원가입이 완료되었습니다."

class LoginResponse(BaseModel):
    """로그인 응답"""
    token: str
    user_id: int
    category_id: Optional[int] = None
    expires_in: int
