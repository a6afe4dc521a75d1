# app/core/logger.py
from loguru import logger
import sys
import os

from app.config import settings

LOG_DIR = settings.log_dir
os.makedirs(LOG_DIR, exist_ok=True)

LINE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"

# 기본 로거 제거
logger.remove()

# 콘솔 출력
logger.add(
    sys.stdout,
    colorize=True,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
    level="INFO"
)

# 전체 로그 (요청, 챌린지, CRON 작업)
logger.add(
    os.path.join(LOG_DIR, "nutrition.log"),
    rotation="10 MB",
    retention="30 days",
    compression="zip",
    format=LINE_FORMAT,
    level="DEBUG",
    enqueue=True
)

# 에러 전용 파일
logger.add(
    os.path.join(LOG_DIR, "error.log"),
    rotation="10 MB",
    retention="30 days",
    compression="zip",
    format=LINE_FORMAT,
    level="ERROR",
    enqueue=True
)
