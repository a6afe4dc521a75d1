# tests/test_challenge_service.py
import random
from collections import Counter
from datetime import datetime

import pytest
from sqlalchemy.exc import IntegrityError

from app.exceptions import NotFoundError, InvalidStateError
from app.models.challenge import (
    Challenge, ChallengeMeal, ChallengeResult, UserChallenge, ChallengeStatus, ResultStatus
)
from app.models.meal import MealTime
from app.services import challenge_service

B, L, D = MealTime.BREAKFAST, MealTime.LUNCH, MealTime.DINNER

@pytest.mark.parametrize("hour, expected", [
    (0, [B, L, D]),
    (9, [B, L, D]),
    (10, [L, D]),
    (12, [L, D]),
    (14, [L, D]),
    (15, [D]),
    (16, [D]),
    (23, [D]),
])
def test_first_day_skips_past_meal_times(hour, expected):
    assert challenge_service.meal_times_for_day(1, hour) == expected

def test_later_days_always_get_three_meals():
    for day in (2, 3, 10):
        assert challenge_service.meal_times_for_day(day, 16) == [B, L, D]

def test_build_meal_plan_uses_seeded_choice_and_skips_empty_slots():
    candidates = {B: [1, 2, 3], L: [], D: [7]}
    plan = challenge_service.build_meal_plan(4, 12, candidates, random.Random(42))

    slots = [(day, mt) for day, mt, _ in plan]
    assert len(slots) == len(set(slots))
    assert all(mt != L for _, mt in slots)
    assert [mt for day, mt in slots if day == 1] == [D]
    assert all(meal_id in candidates[mt] for _, mt, meal_id in plan)

    again = challenge_service.build_meal_plan(4, 12, candidates, random.Random(42))
    assert again == plan

def test_create_user_challenge_before_ten_assigns_every_slot(db, catalog, member, morning):
    uc, preview = challenge_service.create_user_challenge(
        db, member.id, catalog["challenge"].challenge_id, now=morning, rng=random.Random(1)
    )

    assert uc.status == ChallengeStatus.IN_PROGRESS
    assert uc.started_at == morning

    rows = db.query(ChallengeMeal).filter(ChallengeMeal.user_challenge_id == uc.user_challenge_id).all()
    assert len(rows) == 9
    assert max(Counter((r.day_index, r.meal_time) for r in rows).values()) == 1
    assert [cm.meal_time for cm in preview] == [B, L, D]

    allowed = {mt: {m.meal_id for m in meals} for mt, meals in catalog["meals"].items()}
    assert all(r.meal_id in allowed[r.meal_time] for r in rows)

def test_create_user_challenge_in_afternoon_only_schedules_dinner_on_day_one(db, catalog, member):
    uc, preview = challenge_service.create_user_challenge(
        db, member.id, catalog["challenge"].challenge_id, now=datetime(2025, 10, 1, 16, 30)
    )

    assert [cm.meal_time for cm in preview] == [D]
    total = db.query(ChallengeMeal).filter(ChallengeMeal.user_challenge_id == uc.user_challenge_id).count()
    assert total == 1 + 3 + 3

def test_meal_times_without_candidates_are_skipped(db, catalog, member, morning):
    challenge = Challenge(category_id=5, day_count=2, title="지중해식 2일")
    db.add(challenge)
    db.commit()

    uc, preview = challenge_service.create_user_challenge(db, member.id, challenge.challenge_id, now=morning)

    # 5번 카테고리에는 점심 식단이 없음
    assert [cm.meal_time for cm in preview] == [B, D]
    rows = db.query(ChallengeMeal).filter(ChallengeMeal.user_challenge_id == uc.user_challenge_id).all()
    assert all(r.meal_time != L for r in rows)
    assert len(rows) == 4

def test_unknown_challenge_raises_not_found(db, catalog, member, morning):
    with pytest.raises(NotFoundError):
        challenge_service.create_user_challenge(db, member.id, 999, now=morning)
    assert db.query(UserChallenge).count() == 0

def test_failure_mid_assignment_rolls_back_everything(db, catalog, member, morning, monkeypatch):
    real = challenge_service.ChallengeMeal
    calls = {"n": 0}

    def flaky(**kwargs):
        calls["n"] += 1
        if calls["n"] == 4:
            raise RuntimeError("db down")
        return real(**kwargs)

    monkeypatch.setattr(challenge_service, "ChallengeMeal", flaky)

    with pytest.raises(RuntimeError):
        challenge_service.create_user_challenge(db, member.id, catalog["challenge"].challenge_id, now=morning)

    assert db.query(UserChallenge).count() == 0
    assert db.query(real).count() == 0

def test_cancel_only_once(db, catalog, member, morning):
    uc, _ = challenge_service.create_user_challenge(db, member.id, catalog["challenge"].challenge_id, now=morning)

    challenge_service.cancel_user_challenge(db, uc.user_challenge_id)
    db.expire_all()
    assert db.get(UserChallenge, uc.user_challenge_id).status == ChallengeStatus.ABANDONED

    with pytest.raises(InvalidStateError):
        challenge_service.cancel_user_challenge(db, uc.user_challenge_id)
    db.expire_all()
    assert db.get(UserChallenge, uc.user_challenge_id).status == ChallengeStatus.ABANDONED

def test_cancel_unknown_challenge_is_client_error(db):
    with pytest.raises(InvalidStateError):
        challenge_service.cancel_user_challenge(db, 12345)

def test_success_rate_uses_assigned_meal_count(db, catalog, member):
    uc, preview = challenge_service.create_user_challenge(
        db, member.id, catalog["challenge"].challenge_id, now=datetime(2025, 10, 1, 16, 0)
    )
    dinner = preview[0]
    challenge_service.record_result(db, uc.user_challenge_id, 1, D, ResultStatus.SUCCESS, dinner.meal_id)

    [item] = challenge_service.list_user_challenges(db, member.id)
    assert item["success_rate"] == 14
    assert item["challenge_title"] == "3일 저탄고지 챌린지"

def test_success_rate_rounds_half_up(db, catalog, member):
    # 정오 시작: 1일차 점심/저녁 + 2, 3일차 3끼 = 8끼
    uc, preview = challenge_service.create_user_challenge(
        db, member.id, catalog["challenge"].challenge_id, now=datetime(2025, 10, 1, 12, 0)
    )
    lunch, dinner = preview
    challenge_service.record_result(db, uc.user_challenge_id, 1, D, ResultStatus.SUCCESS, dinner.meal_id)

    [item] = challenge_service.list_user_challenges(db, member.id)
    assert item["success_rate"] == 13

@pytest.mark.parametrize("successes, assigned, expected", [
    (1, 8, 13),
    (5, 8, 63),
    (3, 8, 38),
    (1, 3, 33),
    (2, 3, 67),
    (0, 9, 0),
    (9, 9, 100),
    (0, 0, None),
])
def test_success_rate_values(successes, assigned, expected):
    assert challenge_service.success_rate(successes, assigned) == expected

def test_challenge_title_only_loses_line_breaks(db, catalog, member, morning):
    challenge = Challenge(category_id=2, day_count=1, title="  주말  저탄고지\r\n챌린지\n")
    db.add(challenge)
    db.commit()
    challenge_service.create_user_challenge(db, member.id, challenge.challenge_id, now=morning)

    [item] = challenge_service.list_user_challenges(db, member.id)
    assert item["challenge_title"] == "주말  저탄고지 챌린지"

def test_challenge_needs_at_least_one_day(db, catalog):
    db.add(Challenge(category_id=2, day_count=0, title="0일"))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()

def test_record_result_overwrites_row_written_concurrently(db, catalog, member, morning, monkeypatch):
    uc, preview = challenge_service.create_user_challenge(db, member.id, catalog["challenge"].challenge_id, now=morning)
    breakfast = preview[0]

    # 조회 직후 자동 실패 처리가 먼저 기록한 상황
    real_find = challenge_service._find_result
    calls = {"n": 0}

    def find_after_sweep(*args):
        calls["n"] += 1
        if calls["n"] == 1:
            db.add(ChallengeResult(
                user_challenge_id=uc.user_challenge_id,
                meal_id=breakfast.meal_id,
                day_index=1,
                meal_time=B,
                status=ResultStatus.FAIL
            ))
            db.commit()
            return None
        return real_find(*args)

    monkeypatch.setattr(challenge_service, "_find_result", find_after_sweep)

    result = challenge_service.record_result(
        db, uc.user_challenge_id, 1, B, ResultStatus.SUCCESS, breakfast.meal_id, rating=5
    )

    assert result.status == ResultStatus.SUCCESS
    assert result.rating == 5
    rows = db.query(ChallengeResult).filter(ChallengeResult.user_challenge_id == uc.user_challenge_id).all()
    assert len(rows) == 1
    assert rows[0].status == ResultStatus.SUCCESS
