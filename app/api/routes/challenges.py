# app/api/routes/challenges.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.clock import now_local
from app.database import get_db
from app.exceptions import NotFoundError
from app.models.challenge import Challenge
from app.schemas.challenge import (
    ChallengeResponse,
    UserChallengeCreate,
    UserChallengeCreated,
    UserChallengeResponse,
    PreviewMeal,
    DayMeal,
    ResultRecord,
    ResultResponse,
    MessageResponse
)
from app.services import challenge_service

router = APIRouter(tags=["챌린지"])

@router.get("/challenges", response_model=List[ChallengeResponse])
def list_challenges(db: Session = Depends(get_db)):
    """챌린지 템플릿 목록"""
    return db.query(Challenge).order_by(Challenge.challenge_id).all()

@router.post("/user-challenges", response_model=UserChallengeCreated)
def create_user_challenge(data: UserChallengeCreate, db: Session = Depends(get_db)):
    """챌린지 시작 (1일차는 현재 시각 기준으로 지난 끼니 제외)"""
    user_challenge, day1 = challenge_service.create_user_challenge(
        db, data.user_id, data.challenge_id, now=now_local()
    )
    return UserChallengeCreated(
        user_challenge_id=user_challenge.user_challenge_id,
        preview_day1=[
            PreviewMeal(
                day_index=cm.day_index,
                meal_time=cm.meal_time,
                meal_id=cm.meal_id,
                meal_name=cm.meal.name,
                meal_desc=cm.meal.description
            ) for cm in day1
        ]
    )

@router.get("/user-challenges", response_model=List[UserChallengeResponse])
def list_user_challenges(
    user_id: Optional[int] = Query(None),
    db: Session = Depends(get_db)
):
    """사용자 챌린지 목록 (성공률 포함)"""
    items = challenge_service.list_user_challenges(db, user_id)
    if not items:
        raise NotFoundError("진행한 챌린지가 없습니다.")
    return items

@router.get("/user-challenges/{uc_id}/days/{day_index}", response_model=List[DayMeal])
def get_day_meals(uc_id: int, day_index: int, db: Session = Depends(get_db)):
    """하루 3끼 조회"""
    rows = challenge_service.get_day_meals(db, uc_id, day_index)
    if not rows:
        raise NotFoundError("데이터가 없습니다.")
    return [
        DayMeal(
            day_index=cm.day_index,
            meal_time=cm.meal_time,
            meal_id=cm.meal_id,
            name=cm.meal.name,
            description=cm.meal.description,
            image_url=cm.meal.image_url
        ) for cm in rows
    ]

@router.patch("/user-challenges/{uc_id}/results", response_model=MessageResponse)
def record_result(uc_id: int, data: ResultRecord, db: Session = Depends(get_db)):
    """끼니 결과 기록 (같은 슬롯은 덮어쓰기)"""
    challenge_service.record_result(
        db,
        uc_id,
        day_index=data.day_index,
        meal_time=data.meal_time,
        status=data.status,
        meal_id=data.meal_id,
        rating=data.rating,
        review=data.review
    )
    return MessageResponse(message="결과가 저장되었습니다.")

@router.patch("/user-challenges/{uc_id}/cancel", response_model=MessageResponse)
def cancel_user_challenge(uc_id: int, db: Session = Depends(get_db)):
    """중도 포기"""
    challenge_service.cancel_user_challenge(db, uc_id)
    return MessageResponse(message="챌린지가 중도 포기 처리되었습니다.")

@router.get("/results", response_model=List[ResultResponse])
def list_results(db: Session = Depends(get_db)):
    """전체 결과 목록 (디버깅용)"""
    return challenge_service.list_results(db)
