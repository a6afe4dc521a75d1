# tests/test_grading_service.py
from datetime import date, datetime

import pytest

from app.models.challenge import (
    Challenge, ChallengeMeal, ChallengeResult, UserChallenge, ChallengeStatus, ResultStatus
)
from app.models.meal import MealTime
from app.services import grading_service

START = datetime(2025, 10, 1, 8, 0)

@pytest.fixture
def started(db, catalog, member):
    """10/1 시작, 3일 x 3끼 배정된 챌린지"""
    challenge = catalog["challenge"]
    uc = UserChallenge(user_id=member.id, challenge_id=challenge.challenge_id, started_at=START)
    db.add(uc)
    db.flush()
    for day in (1, 2, 3):
        for meal_time in MealTime:
            db.add(ChallengeMeal(
                user_challenge_id=uc.user_challenge_id,
                challenge_id=challenge.challenge_id,
                meal_id=catalog["meals"][meal_time][0].meal_id,
                day_index=day,
                meal_time=meal_time
            ))
    db.commit()
    return uc

def results_for(db, uc):
    return db.query(ChallengeResult).filter(ChallengeResult.user_challenge_id == uc.user_challenge_id).all()

def add_result(db, uc, day, meal_time, status, meal_id):
    db.add(ChallengeResult(
        user_challenge_id=uc.user_challenge_id,
        meal_id=meal_id,
        day_index=day,
        meal_time=meal_time,
        status=status
    ))
    db.commit()

def test_slot_date_counts_from_start_date():
    assert grading_service.slot_date(START, 1) == date(2025, 10, 1)
    assert grading_service.slot_date(START, 3) == date(2025, 10, 3)

def test_nothing_fails_on_the_same_day(db, started):
    assert grading_service.auto_fail_elapsed_slots(db, date(2025, 10, 1)) == 0
    assert results_for(db, started) == []

def test_elapsed_days_are_marked_failed(db, started, catalog):
    breakfast = catalog["meals"][MealTime.BREAKFAST][0]
    add_result(db, started, 1, MealTime.BREAKFAST, ResultStatus.SUCCESS, breakfast.meal_id)

    inserted = grading_service.auto_fail_elapsed_slots(db, date(2025, 10, 3))

    # 1일차 점심/저녁 + 2일차 3끼, 3일차(오늘)는 제외
    assert inserted == 5
    rows = {(r.day_index, r.meal_time): r.status for r in results_for(db, started)}
    assert rows[(1, MealTime.BREAKFAST)] == ResultStatus.SUCCESS
    assert all(rows[(2, mt)] == ResultStatus.FAIL for mt in MealTime)
    assert not any(day == 3 for day, _ in rows)

def test_sweep_is_idempotent(db, started):
    first = grading_service.auto_fail_elapsed_slots(db, date(2025, 10, 10))
    second = grading_service.auto_fail_elapsed_slots(db, date(2025, 10, 10))

    assert first == 9
    assert second == 0
    assert len(results_for(db, started)) == 9

def test_sweep_never_touches_finished_challenges(db, started):
    started.status = ChallengeStatus.ABANDONED
    db.commit()

    assert grading_service.auto_fail_elapsed_slots(db, date(2025, 10, 10)) == 0
    assert results_for(db, started) == []

def test_sweep_leaves_challenge_status_alone(db, started):
    grading_service.auto_fail_elapsed_slots(db, date(2025, 10, 10))
    db.expire_all()
    assert db.get(UserChallenge, started.user_challenge_id).status == ChallengeStatus.IN_PROGRESS

def test_verdict_waits_until_every_slot_is_graded(db, started, catalog):
    grading_service.auto_fail_elapsed_slots(db, date(2025, 10, 3))
    assert grading_service.decide_verdicts(db) == 0
    db.expire_all()
    assert db.get(UserChallenge, started.user_challenge_id).status == ChallengeStatus.IN_PROGRESS

def test_verdict_fails_when_any_slot_failed(db, started):
    grading_service.auto_fail_elapsed_slots(db, date(2025, 10, 10))

    assert grading_service.decide_verdicts(db) == 1
    db.expire_all()
    assert db.get(UserChallenge, started.user_challenge_id).status == ChallengeStatus.FAIL

def test_verdict_succeeds_when_every_slot_succeeded(db, started, catalog):
    for day in (1, 2, 3):
        for meal_time in MealTime:
            add_result(db, started, day, meal_time, ResultStatus.SUCCESS, catalog["meals"][meal_time][0].meal_id)

    assert grading_service.decide_verdicts(db) == 1
    db.expire_all()
    assert db.get(UserChallenge, started.user_challenge_id).status == ChallengeStatus.SUCCESS

    # 종료된 챌린지는 다시 판정하지 않음
    assert grading_service.decide_verdicts(db) == 0

def test_verdict_threshold_assumes_three_slots_per_day(db, catalog, member):
    """1일차가 저녁만 배정돼도 기준은 day_count * 3"""
    short = Challenge(category_id=2, day_count=1, title="1일 체험")
    db.add(short)
    db.flush()
    uc = UserChallenge(user_id=member.id, challenge_id=short.challenge_id, started_at=datetime(2025, 10, 1, 16, 0))
    db.add(uc)
    db.flush()
    dinner = catalog["meals"][MealTime.DINNER][0]
    db.add(ChallengeMeal(
        user_challenge_id=uc.user_challenge_id,
        challenge_id=short.challenge_id,
        meal_id=dinner.meal_id,
        day_index=1,
        meal_time=MealTime.DINNER
    ))
    db.commit()
    add_result(db, uc, 1, MealTime.DINNER, ResultStatus.SUCCESS, dinner.meal_id)

    assert grading_service.decide_verdicts(db) == 0
