# app/core/clock.py
from datetime import datetime, date
import pytz

from app.config import settings

LOCAL_TZ = pytz.timezone(settings.timezone)

def now_local() -> datetime:
    """설정된 타임존 기준 현재 시각 (DB 저장용 naive datetime)"""
    return datetime.now(LOCAL_TZ).replace(tzinfo=None)

def today_local() -> date:
    """설정된 타임존 기준 오늘 날짜"""
    return now_local().date()
