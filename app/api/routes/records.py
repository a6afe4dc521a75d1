# app/api/routes/records.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.clock import now_local
from app.database import get_db
from app.schemas.progress import (
    WeightRecordCreate,
    WeightRecordCreated,
    WeightRecordResponse,
    WeekResultCreate,
    WeekResultResponse,
    StickerListResponse
)
from app.services import user_service, sticker_service

router = APIRouter(tags=["기록"])

@router.post("/weight-records", response_model=WeightRecordCreated, status_code=status.HTTP_201_CREATED)
def add_weight_record(data: WeightRecordCreate, db: Session = Depends(get_db)):
    """체중/BMI 기록"""
    record = user_service.add_weight_record(db, data.user_id, data.height_cm, data.weight_kg, now_local())
    return WeightRecordCreated(record=WeightRecordResponse.model_validate(record))

@router.get("/weight-records/{user_id}", response_model=List[WeightRecordResponse])
def list_weight_records(user_id: int, db: Session = Depends(get_db)):
    """체중 기록 목록 (최신순)"""
    return user_service.list_weight_records(db, user_id)

@router.post("/challenge/week-result", response_model=WeekResultResponse)
def submit_week_result(data: WeekResultCreate, db: Session = Depends(get_db)):
    """주간 결과 제출 + 스티커 해금"""
    is_success, sticker = sticker_service.record_week_result(
        db,
        data.user_id,
        data.week_number,
        data.success_rate,
        data.most_successful_meal,
        now=now_local()
    )
    return WeekResultResponse(is_success=is_success, unlocked_sticker=sticker)

@router.get("/stickers/{user_id}", response_model=StickerListResponse)
def list_stickers(user_id: int, db: Session = Depends(get_db)):
    """해금한 스티커 목록"""
    return StickerListResponse(unlocked_stickers=sticker_service.list_stickers(db, user_id))
