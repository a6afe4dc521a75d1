# app/core/logging_middleware.py
from fastapi import Request
from app.core.logger import logger
import time

# 로그에서 제외할 경로 (헬스체크, 이미지)
QUIET_PREFIXES = ("/health", "/images")

async def log_requests(request: Request, call_next):
    """요청/응답 로깅"""
    path = request.url.path
    if path.startswith(QUIET_PREFIXES):
        return await call_next(request)

    started = time.perf_counter()
    client = request.client.host if request.client else "-"

    try:
        response = await call_next(request)
    except Exception as e:
        elapsed = (time.perf_counter() - started) * 1000
        logger.exception(f"{request.method} {path} ({client}) 처리 실패: {e} - {elapsed:.1f}ms")
        raise

    elapsed = (time.perf_counter() - started) * 1000
    log = logger.warning if response.status_code >= 500 else logger.info
    log(f"{request.method} {path} ({client}) -> {response.status_code} - {elapsed:.1f}ms")

    return response
