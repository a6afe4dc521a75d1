# app/core/exception_handlers.py
from fastapi import FastAPI, Request, HTTPException, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.logger import logger
from app.exceptions import BaseAPIException

def error_body(message: str, code: str, **extra) -> dict:
    return {"error": message, "code": code, **extra}

async def api_exception_handler(request: Request, exc: BaseAPIException) -> JSONResponse:
    """도메인 예외 -> 상태 코드"""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(f"{request.method} {request.url.path} - {exc.code}: {exc.message}")

    content = error_body(exc.message, exc.code)
    constraint = getattr(exc, "constraint", None)
    if constraint:
        content["constraint"] = constraint
    return JSONResponse(status_code=exc.status_code, content=content)

async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """필수 값 누락 / 형식 오류는 400"""
    fields = [".".join(str(p) for p in err["loc"] if p != "body") for err in exc.errors()]
    logger.warning(f"{request.method} {request.url.path} - 입력 오류: {fields}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(
            f"필수 값이 없거나 형식이 올바르지 않습니다: {', '.join(f for f in fields if f)}",
            "VALIDATION_ERROR",
            fields=fields
        )
    )

async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail), "HTTP_ERROR"),
        headers=getattr(exc, "headers", None)
    )

async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """분류되지 않은 DB 오류는 500 (메시지 그대로 노출)"""
    logger.opt(exception=exc).error(f"{request.method} {request.url.path} - DB 오류")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(str(exc), "DATABASE_ERROR")
    )

def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(BaseAPIException, api_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
