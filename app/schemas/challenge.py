# app/schemas/challenge.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Optional

from app.models.meal import MealTime
from app.models.challenge import ChallengeStatus, ResultStatus

class ChallengeResponse(BaseModel):
    """챌린지 템플릿"""
    challenge_id: int
    category_id: int
    day_count: int
    title: str
    description: Optional[str] = None

    class Config:
        from_attributes = True

class UserChallengeCreate(BaseModel):
    """챌린지 시작 요청"""
    user_id: int
    challenge_id: int

class PreviewMeal(BaseModel):
    """1일차 미리보기 항목"""
    day_index: int
    meal_time: MealTime
    meal_id: int
    meal_name: str
    meal_desc: Optional[str] = None

class UserChallengeCreated(BaseModel):
    user_challenge_id: int
    preview_day1: List[PreviewMeal]

class UserChallengeResponse(BaseModel):
    """사용자 챌린지 목록 항목"""
    user_challenge_id: int
    user_id: int
    challenge_id: int
    started_at: datetime
    status: ChallengeStatus
    challenge_title: str
    day_count: int
    success_rate: Optional[int] = None  # 배정된 끼니 대비 성공 비율 (%)

class DayMeal(BaseModel):
    """하루 끼니 조회 항목"""
    day_index: int
    meal_time: MealTime
    meal_id: int
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None

class ResultRecord(BaseModel):
    """끼니 결과 기록 요청"""
    day_index: int = Field(..., ge=1)
    meal_time: MealTime
    status: ResultStatus
    meal_id: int
    rating: Optional[int] = Field(None, ge=1, le=5)
    review: Optional[str] = None

class ResultResponse(BaseModel):
    """결과 목록 항목 (디버깅용)"""
    id: int
    user_challenge_id: int
    meal_id: int
    meal_name: str
    day_index: int
    meal_time: MealTime
    status: ResultStatus
    rating: Optional[int] = None
    review: Optional[str] = None

class MessageResponse(BaseModel):
    ok: bool = True
    message: str
