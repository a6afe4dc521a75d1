# app/services/grading_service.py
from datetime import date, timedelta

from sqlalchemy import func, case
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.challenge import (
    Challenge, UserChallenge, ChallengeMeal, ChallengeResult, ChallengeStatus, ResultStatus
)

SLOTS_PER_DAY = 3

def slot_date(started_at, day_index: int) -> date:
    """슬롯의 달력 날짜 = 시작일 + (day_index - 1)"""
    return started_at.date() + timedelta(days=day_index - 1)

def auto_fail_elapsed_slots(db: Session, today: date) -> int:
    """
    자동 실패 처리
    - 진행 중인 챌린지의 끼니 중 날짜가 지났는데 결과가 없는 슬롯을 '실패'로 기록
    - 이미 결과가 있으면 건너뜀 (몇 번 실행해도 결과 동일)
    - 챌린지 상태 자체는 바꾸지 않음

    반환: 새로 기록한 건수
    """
    missing = db.query(ChallengeMeal, UserChallenge.started_at)\
        .join(UserChallenge, UserChallenge.user_challenge_id == ChallengeMeal.user_challenge_id)\
        .outerjoin(
            ChallengeResult,
            (ChallengeResult.user_challenge_id == ChallengeMeal.user_challenge_id)
            & (ChallengeResult.day_index == ChallengeMeal.day_index)
            & (ChallengeResult.meal_time == ChallengeMeal.meal_time)
        )\
        .filter(
            UserChallenge.status == ChallengeStatus.IN_PROGRESS,
            ChallengeResult.id.is_(None)
        )\
        .order_by(ChallengeMeal.user_challenge_id, ChallengeMeal.day_index)\
        .all()

    inserted = 0
    for slot, started_at in missing:
        if slot_date(started_at, slot.day_index) >= today:
            continue

        # 다른 작업이 먼저 기록했으면 유니크 제약에 걸림 -> 건너뜀
        try:
            with db.begin_nested():
                db.add(ChallengeResult(
                    user_challenge_id=slot.user_challenge_id,
                    meal_id=slot.meal_id,
                    day_index=slot.day_index,
                    meal_time=slot.meal_time,
                    status=ResultStatus.FAIL
                ))
            inserted += 1
        except IntegrityError:
            continue

    db.commit()
    return inserted

def decide_verdicts(db: Session) -> int:
    """
    최종 판정
    - 진행 중인 챌린지 중 결과가 day_count * 3 건 이상 쌓인 것만 판정
    - 실패가 하나라도 있으면 '실패', 아니면 '성공'
    - 이미 종료된 챌린지는 건드리지 않음

    반환: 상태가 바뀐 건수
    """
    fail_count = func.sum(case((ChallengeResult.status == ResultStatus.FAIL, 1), else_=0))
    rows = db.query(
            UserChallenge,
            Challenge.day_count,
            func.count(ChallengeResult.id),
            fail_count
        )\
        .join(Challenge, Challenge.challenge_id == UserChallenge.challenge_id)\
        .join(ChallengeResult, ChallengeResult.user_challenge_id == UserChallenge.user_challenge_id)\
        .filter(UserChallenge.status == ChallengeStatus.IN_PROGRESS)\
        .group_by(UserChallenge.user_challenge_id, Challenge.day_count)\
        .all()

    changed = 0
    for uc, day_count, total, fails in rows:
        if total < day_count * SLOTS_PER_DAY:
            continue
        uc.status = ChallengeStatus.FAIL if (fails or 0) > 0 else ChallengeStatus.SUCCESS
        changed += 1

    db.commit()
    return changed
