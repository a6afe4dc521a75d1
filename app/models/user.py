# app/models/user.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
import enum

class AdminRole(str, enum.Enum):
    """관리자 권한 (viewer < editor < super)"""
    VIEWER = "viewer"
    EDITOR = "editor"
    SUPER = "super"

    @property
    def level(self) -> int:
        return list(AdminRole).index(self)

class User(Base):
    """앱 사용자"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)

    # 프로필
    nickname = Column(String(50))
    gender = Column(String(10))
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)  # 선호 식단 카테고리

    created_at = Column(DateTime, server_default=func.now())

    category = relationship("Category")

    def __repr__(self):
        return f"<User {self.username}>"

class AdminUser(Base):
    """백오피스 관리자"""
    __tablename__ = "admin_users"

    admin_id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(50))
    role = Column(
        SQLEnum(AdminRole, values_callable=lambda e: [m.value for m in e], native_enum=False, length=10),
        nullable=False,
        default=AdminRole.VIEWER
    )

    created_at = Column(DateTime, server_default=func.now())

    def __repr__(self):
        return f"<AdminUser {self.username} ({self.role})>"

class AdminLog(Base):
    """관리자 작업 기록"""
    __tablename__ = "admin_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    admin_id = Column(Integer, ForeignKey("admin_users.admin_id", ondelete="CASCADE"), nullable=False)
    action_type = Column(String(20), nullable=False)  # LOGIN, INSERT ...
    target_table = Column(String(50))
    target_id = Column(Integer)
    description = Column(String(500))
    created_at = Column(DateTime, server_default=func.now())
