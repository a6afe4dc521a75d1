# app/services/user_service.py
from datetime import datetime
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.logger import logger
from app.core.security import hash_password, verify_password, create_access_token
from app.exceptions import (
    AuthenticationError, DuplicateKeyError, NotFoundError, ValidationError
)
from app.models.user import User, AdminUser, AdminLog
from app.models.progress import WeightRecord
from app.schemas.user import UserCreate, UserLogin, UserProfilePatch

def _taken_constraint(db: Session, username: str, email: str):
    """이미 사용 중인 컬럼 (없으면 None)"""
    if db.query(User.id).filter(User.username == username).first():
        return "users.username"
    if db.query(User.id).filter(User.email == email).first():
        return "users.email"
    return None

def signup(db: Session, data: UserCreate) -> User:
    """회원가입 (아이디/이메일 중복 시 DuplicateKeyError)"""
    taken = _taken_constraint(db, data.username, data.email)
    if taken:
        raise DuplicateKeyError(taken)

    user = User(
        username=data.username,
        email=data.email,
        password_hash=hash_password(data.password),
        nickname=data.nickname,
        gender=data.gender,
        category_id=data.category_id
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # 동시 가입으로 확인과 저장 사이에 선점된 경우
        db.rollback()
        raise DuplicateKeyError(_taken_constraint(db, data.username, data.email) or "users")

    db.refresh(user)
    logger.info(f"회원가입: user={user.id} ({user.username})")
    return user

def login(db: Session, data: UserLogin) -> tuple[User, str]:
    """로그인: (유저, 토큰)"""
    query = db.query(User)
    if data.username:
        query = query.filter(User.username == data.username)
    else:
        query = query.filter(User.email == data.email)
    user = query.first()

    if not user or not verify_password(data.password, user.password_hash):
        raise AuthenticationError("아이디 또는 비밀번호가 올바르지 않습니다.")

    token = create_access_token(data={"sub": str(user.id), "user_id": user.id, "role": "user"})
    return user, token

def get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("사용자를 찾을 수 없습니다.")
    return user

def update_profile(db: Session, user_id: int, patch: UserProfilePatch) -> User:
    """보낸 필드만 수정"""
    changes = patch.model_dump(exclude_unset=True)
    if not changes:
        raise ValidationError("수정할 항목이 없습니다.")

    user = get_user(db, user_id)
    for field, value in changes.items():
        setattr(user, field, value)

    db.commit()
    db.refresh(user)
    return user

def admin_login(db: Session, username: str, password: str) -> tuple[AdminUser, str]:
    """관리자 로그인 + 로그인 기록"""
    admin = db.query(AdminUser).filter(AdminUser.username == username).first()
    if not admin:
        raise AuthenticationError("존재하지 않는 관리자 계정입니다.")
    if not verify_password(password, admin.password_hash):
        raise AuthenticationError("비밀번호가 일치하지 않습니다.")

    token = create_access_token(data={
        "sub": admin.username,
        "admin_id": admin.admin_id,
        "username": admin.username,
        "role": admin.role.value
    })

    db.add(AdminLog(
        admin_id=admin.admin_id,
        action_type="LOGIN",
        target_table="admin_users",
        description=f"관리자 {admin.username} 로그인 성공"
    ))
    db.commit()

    logger.info(f"관리자 로그인: {admin.username} ({admin.role.value})")
    return admin, token

def add_weight_record(
    db: Session, user_id: int, height_cm: float, weight_kg: float, now: datetime
) -> WeightRecord:
    record = WeightRecord(user_id=user_id, height_cm=height_cm, weight_kg=weight_kg, recorded_at=now)
    db.add(record)
    db.commit()
    db.refresh(record)
    return record

def list_weight_records(db: Session, user_id: int) -> List[WeightRecord]:
    """체중 기록 (최신순)"""
    return db.query(WeightRecord)\
        .filter(WeightRecord.user_id == user_id)\
        .order_by(WeightRecord.recorded_at.desc(), WeightRecord.id.desc())\
        .all()
