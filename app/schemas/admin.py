# app/schemas/admin.py
from pydantic import BaseModel
from typing import Optional

from app.models.user import AdminRole

class AdminLogin(BaseModel):
    """관리자 로그인 요청"""
    username: str
    password: str

class AdminToken(BaseModel):
    """관리자 로그인 응답"""
    token: str
    role: AdminRole
    name: Optional[str] = None
