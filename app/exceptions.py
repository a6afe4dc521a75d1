"""
사용자 정의 예외 클래스들

서비스 계층은 HTTP를 모르고 아래 예외만 발생시킨다.
main.py 에 등록된 핸들러가 status_code / code 로 응답을 만든다.
"""
from typing import Optional


class BaseAPIException(Exception):
    """기본 API 예외 클래스"""

    status_code = 500
    code = "INTERNAL_ERROR"
    default_message = "서버 내부 오류가 발생했습니다."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(BaseAPIException):
    """필수 값 누락 / 형식 오류"""
    status_code = 400
    code = "VALIDATION_ERROR"
    default_message = "입력 데이터가 올바르지 않습니다."


class InvalidStateError(BaseAPIException):
    """현재 상태에서 허용되지 않는 전이 (예: 이미 종료된 챌린지 포기)"""
    status_code = 400
    code = "INVALID_STATE"
    default_message = "이미 종료되었거나 존재하지 않는 챌린지입니다."


class AuthenticationError(BaseAPIException):
    """인증 실패"""
    status_code = 401
    code = "AUTHENTICATION_ERROR"
    default_message = "인증에 실패했습니다."


class TokenExpiredError(AuthenticationError):
    """토큰 만료"""
    code = "TOKEN_EXPIRED"
    default_message = "토큰이 만료되었습니다."


class AuthorizationError(BaseAPIException):
    """권한 부족"""
    status_code = 403
    code = "AUTHORIZATION_ERROR"
    default_message = "권한이 부족합니다."


class NotFoundError(BaseAPIException):
    """리소스 없음"""
    status_code = 404
    code = "NOT_FOUND"
    default_message = "요청한 리소스를 찾을 수 없습니다."


class DuplicateKeyError(BaseAPIException):
    """유니크 제약 위반. constraint 는 "테이블.컬럼" 형태 (예: users.username)"""
    status_code = 409
    code = "DUPLICATE_KEY"

    MESSAGES = {
        "users.username": "이미 사용 중인 아이디입니다.",
        "users.email": "이미 사용 중인 이메일입니다.",
    }

    def __init__(self, constraint: str, message: Optional[str] = None):
        self.constraint = constraint
        super().__init__(message or self.MESSAGES.get(constraint, f"중복된 값입니다: {constraint}"))
