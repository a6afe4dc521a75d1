# app/services/sticker_service.py
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.logger import logger
from app.models.progress import UserWeekSuccess, UserSticker

# 주간 성공 기준 (%)
WEEK_SUCCESS_THRESHOLD = 80

# 누적 성공 주차 수 -> 스티커. 0번은 사용하지 않음
ORDERED_STICKERS = [
    None,
    "sprout",
    "apple",
    "carrot",
    "broccoli",
    "avocado",
    "salad_bowl",
    "chef_hat",
    "golden_spoon",
    "trophy",
]

def sticker_for_success_count(success_count: int) -> Optional[str]:
    """누적 성공 횟수에 해당하는 스티커 (목록 범위를 넘으면 None)"""
    if success_count < 1 or success_count >= len(ORDERED_STICKERS):
        return None
    return ORDERED_STICKERS[success_count]

def _find_week(db: Session, user_id: int, week_number: int) -> Optional[UserWeekSuccess]:
    return db.query(UserWeekSuccess)\
        .filter(UserWeekSuccess.user_id == user_id, UserWeekSuccess.week_number == week_number)\
        .first()

def record_week_result(
    db: Session,
    user_id: int,
    week_number: int,
    success_rate: float,
    most_successful_meal: Optional[str],
    now: datetime
) -> Tuple[bool, Optional[str]]:
    """
    주간 결과 저장 + 스티커 해금

    같은 주차를 다시 제출하면 기록만 덮어쓰고, 이미 받은 스티커는 다시 주지 않는다.
    반환: (is_success, 이번에 새로 해금된 스티커 또는 None)
    """
    is_success = success_rate >= WEEK_SUCCESS_THRESHOLD

    week = _find_week(db, user_id, week_number)
    if not week:
        try:
            with db.begin_nested():
                week = UserWeekSuccess(
                    user_id=user_id,
                    week_number=week_number,
                    success_rate=success_rate,
                    is_success=is_success,
                    most_successful_meal=most_successful_meal
                )
                db.add(week)
        except IntegrityError:
            # 같은 주차가 동시에 제출된 경우 -> 덮어쓰기
            week = _find_week(db, user_id, week_number)

    week.success_rate = success_rate
    week.is_success = is_success
    week.most_successful_meal = most_successful_meal
    db.flush()

    if not is_success:
        db.commit()
        return False, None

    success_count = db.query(UserWeekSuccess)\
        .filter(UserWeekSuccess.user_id == user_id, UserWeekSuccess.is_success.is_(True))\
        .count()
    sticker = sticker_for_success_count(success_count)

    unlocked = None
    if sticker:
        already = db.query(UserSticker)\
            .filter(UserSticker.user_id == user_id, UserSticker.sticker_code == sticker)\
            .first()
        if not already:
            try:
                with db.begin_nested():
                    db.add(UserSticker(user_id=user_id, sticker_code=sticker, unlocked_at=now))
                unlocked = sticker
            except IntegrityError:
                unlocked = None

    db.commit()

    if unlocked:
        logger.info(f"스티커 해금: user={user_id} sticker={unlocked} (누적 성공 {success_count}주)")
    return True, unlocked

def list_stickers(db: Session, user_id: int) -> List[str]:
    """해금한 스티커 (해금 순)"""
    rows = db.query(UserSticker.sticker_code)\
        .filter(UserSticker.user_id == user_id)\
        .order_by(UserSticker.unlocked_at.asc(), UserSticker.id.asc())\
        .all()
    return [row[0] for row in rows]
