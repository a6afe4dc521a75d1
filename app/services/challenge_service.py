# app/services/challenge_service.py
import random
from decimal import Decimal, ROUND_HALF_UP
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import func, case
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.logger import logger
from app.exceptions import NotFoundError, InvalidStateError
from app.models.meal import Meal, MealCategory, MealTime
from app.models.challenge import (
    Challenge, UserChallenge, ChallengeMeal, ChallengeResult, ChallengeStatus, ResultStatus
)

ALL_MEAL_TIMES = [MealTime.BREAKFAST, MealTime.LUNCH, MealTime.DINNER]

# 1일차: 이 시각 이후에는 해당 끼니를 배정하지 않음
LUNCH_ONLY_FROM_HOUR = 10
DINNER_ONLY_FROM_HOUR = 15

def meal_times_for_day(day_index: int, current_hour: int) -> List[MealTime]:
    """배정할 끼니 목록. 1일차는 이미 지난 끼니를 제외"""
    if day_index != 1:
        return list(ALL_MEAL_TIMES)
    if current_hour >= DINNER_ONLY_FROM_HOUR:
        return [MealTime.DINNER]
    if current_hour >= LUNCH_ONLY_FROM_HOUR:
        return [MealTime.LUNCH, MealTime.DINNER]
    return list(ALL_MEAL_TIMES)

def get_candidate_meal_ids(db: Session, category_id: int, meal_time: MealTime) -> List[int]:
    """카테고리 + 끼니에 해당하는 식단 id 목록"""
    rows = db.query(Meal.meal_id)\
        .join(MealCategory, MealCategory.meal_id == Meal.meal_id)\
        .filter(
            MealCategory.category_id == category_id,
            Meal.meal_time == meal_time
        )\
        .distinct()\
        .order_by(Meal.meal_id)\
        .all()
    return [row[0] for row in rows]

def build_meal_plan(
    day_count: int,
    current_hour: int,
    candidates: dict,
    rng: random.Random
) -> List[Tuple[int, MealTime, int]]:
    """(day_index, meal_time, meal_id) 목록 생성. 후보가 없는 끼니는 건너뜀"""
    plan = []
    for day in range(1, day_count + 1):
        for meal_time in meal_times_for_day(day, current_hour):
            meal_ids = candidates.get(meal_time) or []
            if not meal_ids:
                continue
            plan.append((day, meal_time, rng.choice(meal_ids)))
    return plan

def get_day_meals(db: Session, user_challenge_id: int, day_index: int) -> List[ChallengeMeal]:
    """하루 끼니 (아침 -> 점심 -> 저녁)"""
    rows = db.query(ChallengeMeal)\
        .filter(
            ChallengeMeal.user_challenge_id == user_challenge_id,
            ChallengeMeal.day_index == day_index
        )\
        .all()
    return sorted(rows, key=lambda cm: MealTime(cm.meal_time).order)

def create_user_challenge(
    db: Session,
    user_id: int,
    challenge_id: int,
    now: datetime,
    rng: Optional[random.Random] = None
) -> Tuple[UserChallenge, List[ChallengeMeal]]:
    """챌린지 시작: 사용자 챌린지 생성 + 전체 기간 끼니 랜덤 배정 (하나의 트랜잭션)"""
    rng = rng or random.Random()

    challenge = db.query(Challenge).filter(Challenge.challenge_id == challenge_id).first()
    if not challenge:
        raise NotFoundError("챌린지를 찾을 수 없습니다.")

    candidates = {
        meal_time: get_candidate_meal_ids(db, challenge.category_id, meal_time)
        for meal_time in ALL_MEAL_TIMES
    }
    plan = build_meal_plan(challenge.day_count, now.hour, candidates, rng)

    try:
        user_challenge = UserChallenge(
            user_id=user_id,
            challenge_id=challenge.challenge_id,
            started_at=now,
            status=ChallengeStatus.IN_PROGRESS
        )
        db.add(user_challenge)
        db.flush()

        for day_index, meal_time, meal_id in plan:
            db.add(ChallengeMeal(
                user_challenge_id=user_challenge.user_challenge_id,
                challenge_id=challenge.challenge_id,
                meal_id=meal_id,
                day_index=day_index,
                meal_time=meal_time
            ))

        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(user_challenge)
    logger.info(
        f"챌린지 시작: user={user_id} challenge={challenge_id} "
        f"user_challenge={user_challenge.user_challenge_id} 배정 끼니={len(plan)}"
    )

    return user_challenge, get_day_meals(db, user_challenge.user_challenge_id, 1)

def success_rate(successes: int, assigned: int) -> Optional[int]:
    """성공률 (%), 0.5 는 올림"""
    if not assigned:
        return None
    rate = Decimal(successes * 100) / Decimal(assigned)
    return int(rate.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

def clean_title(title: str) -> str:
    """줄바꿈만 정리 (\\r 제거, \\n 은 공백)"""
    return title.replace("\r", "").replace("\n", " ").strip()

def list_user_challenges(db: Session, user_id: Optional[int] = None) -> List[dict]:
    """사용자 챌린지 목록 + 성공률 (분모: 실제 배정된 끼니 수)"""
    success_count = db.query(func.count(ChallengeResult.id))\
        .filter(
            ChallengeResult.user_challenge_id == UserChallenge.user_challenge_id,
            ChallengeResult.status == ResultStatus.SUCCESS
        )\
        .correlate(UserChallenge)\
        .scalar_subquery()
    assigned_count = db.query(func.count(ChallengeMeal.id))\
        .filter(ChallengeMeal.user_challenge_id == UserChallenge.user_challenge_id)\
        .correlate(UserChallenge)\
        .scalar_subquery()

    query = db.query(UserChallenge, Challenge, success_count, assigned_count)\
        .join(Challenge, Challenge.challenge_id == UserChallenge.challenge_id)
    if user_id is not None:
        query = query.filter(UserChallenge.user_id == user_id)
    rows = query.order_by(UserChallenge.user_challenge_id.desc()).all()

    items = []
    for uc, challenge, successes, assigned in rows:
        items.append({
            "user_challenge_id": uc.user_challenge_id,
            "user_id": uc.user_id,
            "challenge_id": uc.challenge_id,
            "started_at": uc.started_at,
            "status": uc.status,
            "challenge_title": clean_title(challenge.title),
            "day_count": challenge.day_count,
            "success_rate": success_rate(successes, assigned)
        })
    return items

def _find_result(db: Session, user_challenge_id: int, day_index: int, meal_time: MealTime) -> Optional[ChallengeResult]:
    return db.query(ChallengeResult)\
        .filter(
            ChallengeResult.user_challenge_id == user_challenge_id,
            ChallengeResult.day_index == day_index,
            ChallengeResult.meal_time == meal_time
        )\
        .first()

def record_result(
    db: Session,
    user_challenge_id: int,
    day_index: int,
    meal_time: MealTime,
    status: ResultStatus,
    meal_id: int,
    rating: Optional[int] = None,
    review: Optional[str] = None
) -> ChallengeResult:
    """끼니 결과 기록 (같은 슬롯이면 덮어쓰기)"""
    uc = db.query(UserChallenge).filter(UserChallenge.user_challenge_id == user_challenge_id).first()
    if not uc:
        raise NotFoundError("챌린지를 찾을 수 없습니다.")

    result = _find_result(db, user_challenge_id, day_index, meal_time)
    if not result:
        try:
            with db.begin_nested():
                result = ChallengeResult(
                    user_challenge_id=user_challenge_id,
                    meal_id=meal_id,
                    day_index=day_index,
                    meal_time=meal_time,
                    status=status,
                    rating=rating,
                    review=review
                )
                db.add(result)
        except IntegrityError:
            # 자동 실패 처리나 다른 요청이 먼저 기록한 경우 -> 덮어쓰기
            result = _find_result(db, user_challenge_id, day_index, meal_time)

    result.status = status
    result.rating = rating
    result.review = review

    db.commit()
    db.refresh(result)
    return result

def cancel_user_challenge(db: Session, user_challenge_id: int) -> None:
    """중도 포기: 진행 중인 챌린지만 가능"""
    updated = db.query(UserChallenge)\
        .filter(
            UserChallenge.user_challenge_id == user_challenge_id,
            UserChallenge.status == ChallengeStatus.IN_PROGRESS
        )\
        .update({UserChallenge.status: ChallengeStatus.ABANDONED}, synchronize_session=False)

    if not updated:
        db.rollback()
        raise InvalidStateError()

    db.commit()
    logger.info(f"챌린지 포기: user_challenge={user_challenge_id}")

def list_results(db: Session) -> List[dict]:
    """전체 결과 목록 (디버깅용)"""
    meal_order = case(
        {mt: mt.order for mt in ALL_MEAL_TIMES},
        value=ChallengeResult.meal_time
    )
    rows = db.query(ChallengeResult, Meal.name)\
        .join(Meal, Meal.meal_id == ChallengeResult.meal_id)\
        .order_by(ChallengeResult.user_challenge_id, ChallengeResult.day_index, meal_order)\
        .all()
    return [
        {
            "id": r.id,
            "user_challenge_id": r.user_challenge_id,
            "meal_id": r.meal_id,
            "meal_name": name,
            "day_index": r.day_index,
            "meal_time": r.meal_time,
            "status": r.status,
            "rating": r.rating,
            "review": r.review
        }
        for r, name in rows
    ]
