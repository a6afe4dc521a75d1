# main.py
import os

from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles
from fastapi.middleware.cors import CORSMiddleware
from app.config import settings
from app.database import Base, engine
from app.models import user, meal, challenge, progress, qna  # noqa: F401  (테이블 등록)
from app.api.routes import auth, meals, challenges, records, admin
from app.api.routes import qna as qna_routes
from app.core.exception_handlers import register_exception_handlers
from app.core.logging_middleware import log_requests
from app.core.logger import logger
from app.services import scheduler

app = FastAPI(
    title=settings.app_name,
    debug=settings.debug
)

register_exception_handlers(app)

# ===== 로깅 미들웨어 =====
@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    return await log_requests(request, call_next)

# CORS 설정 (모바일 앱 / 관리자 페이지)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 라우터 등록
app.include_router(auth.router)
app.include_router(meals.router)
app.include_router(challenges.router)
app.include_router(records.router)
app.include_router(admin.router)
app.include_router(qna_routes.router)

# 식단 이미지 서빙
os.makedirs(settings.images_dir, exist_ok=True)
app.mount("/images", StaticFiles(directory=settings.images_dir), name="images")

@app.on_event("startup")
async def startup_event():
    Base.metadata.create_all(bind=engine)
    app.state.cron_tasks = scheduler.start_jobs() if settings.scheduler_enabled else []
    logger.info(f"{settings.app_name} 서버 시작")

@app.on_event("shutdown")
async def shutdown_event():
    await scheduler.stop_jobs(getattr(app.state, "cron_tasks", []))
    logger.info(f"{settings.app_name} 서버 종료")

@app.get("/")
def root():
    return {"message": "서버 연결 성공!"}

@app.get("/health")
def health_check():
    """헬스체크"""
    return {
        "status": "healthy",
        "service": settings.app_name
    }

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.port)
