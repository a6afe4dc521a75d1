# app/api/deps.py
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.database import get_db
from app.exceptions import AuthenticationError, AuthorizationError
from app.models.user import AdminUser, AdminRole
from app.core.security import decode_access_token

# JWT Bearer 토큰 스킴 (헤더가 없으면 직접 401 처리)
security = HTTPBearer(auto_error=False)

def require_admin(required_role: AdminRole = AdminRole.EDITOR):
    """관리자 토큰 검증 + 권한 확인 (viewer < editor < super)"""

    def dependency(
        token: Optional[HTTPAuthorizationCredentials] = Depends(security),
        db: Session = Depends(get_db)
    ) -> AdminUser:
        if token is None:
            raise AuthenticationError("인증 토큰이 필요합니다.")

        payload = decode_access_token(token.credentials)
        admin_id = payload.get("admin_id")
        if admin_id is None:
            raise AuthenticationError("유효하지 않은 토큰입니다.")

        admin = db.query(AdminUser).filter(AdminUser.admin_id == admin_id).first()
        if admin is None:
            raise AuthenticationError("존재하지 않는 관리자 계정입니다.")

        if admin.role.level < required_role.level:
            raise AuthorizationError()

        return admin

    return dependency
