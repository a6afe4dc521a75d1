# app/schemas/progress.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Optional

class WeightRecordCreate(BaseModel):
    """체중 기록 요청"""
    user_id: int
    height_cm: float = Field(..., gt=0)
    weight_kg: float = Field(..., gt=0)

class WeightRecordResponse(BaseModel):
    id: int
    user_id: int
    height_cm: float
    weight_kg: float
    bmi: float
    recorded_at: datetime

    class Config:
        from_attributes = True

class WeightRecordCreated(BaseModel):
    ok: bool = True
    record: WeightRecordResponse
    message: str = "체중이 기록되었습니다."

class WeekResultCreate(BaseModel):
    """주간 결과 제출"""
    user_id: int
    week_number: int = Field(..., ge=1)
    success_rate: float = Field(..., ge=0, le=100)
    most_successful_meal: Optional[str] = None

class WeekResultResponse(BaseModel):
    ok: bool = True
    is_success: bool
    unlocked_sticker: Optional[str] = None

class StickerListResponse(BaseModel):
    unlocked_stickers: List[str]
