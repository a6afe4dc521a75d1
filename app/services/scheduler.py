# app/services/scheduler.py
import asyncio
from typing import Callable, List

from app.config import settings
from app.core.clock import today_local
from app.core.logger import logger
from app.database import SessionLocal
from app.services import grading_service

def run_auto_fail() -> int:
    """자동 실패 처리 1회"""
    db = SessionLocal()
    try:
        count = grading_service.auto_fail_elapsed_slots(db, today_local())
    finally:
        db.close()
    logger.info(f"[CRON] 자동 실패 처리: {count}건" if count else "[CRON] 자동 실패 처리: 대상 없음")
    return count

def run_verdicts() -> int:
    """최종 판정 1회"""
    db = SessionLocal()
    try:
        count = grading_service.decide_verdicts(db)
    finally:
        db.close()
    logger.info(f"[CRON] 최종 판정 업데이트: {count}건" if count else "[CRON] 최종 판정: 변경 없음")
    return count

async def run_periodically(name: str, interval_seconds: int, job: Callable[[], int]):
    """interval 마다 job 실행. 실패해도 다음 주기는 계속"""
    while True:
        try:
            await asyncio.to_thread(job)
        except Exception as e:
            logger.error(f"[CRON] {name} 에러: {e}")
        await asyncio.sleep(interval_seconds)

def start_jobs() -> List[asyncio.Task]:
    """백그라운드 작업 시작 (startup 에서 호출)"""
    tasks = [
        asyncio.create_task(run_periodically("자동 실패", settings.auto_fail_interval_seconds, run_auto_fail)),
        asyncio.create_task(run_periodically("최종 판정", settings.verdict_interval_seconds, run_verdicts)),
    ]
    logger.info(
        f"[CRON] 시작: 자동 실패 {settings.auto_fail_interval_seconds}초, "
        f"최종 판정 {settings.verdict_interval_seconds}초 ({settings.timezone})"
    )
    return tasks

async def stop_jobs(tasks: List[asyncio.Task]):
    for task in tasks:
        task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)
