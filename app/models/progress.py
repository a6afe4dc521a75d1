# app/models/progress.py
from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from app.database import Base

class WeightRecord(Base):
    """체중/BMI 기록 (추가만 가능)"""
    __tablename__ = "weight_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    height_cm = Column(Float, nullable=False)
    weight_kg = Column(Float, nullable=False)
    recorded_at = Column(DateTime, nullable=False)

    @property
    def bmi(self) -> float:
        meters = self.height_cm / 100
        return round(self.weight_kg / (meters * meters), 1)

class UserWeekSuccess(Base):
    """주차별 성공 기록"""
    __tablename__ = "user_week_success"
    __table_args__ = (
        UniqueConstraint("user_id", "week_number", name="uq_user_week"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    week_number = Column(Integer, nullable=False)
    success_rate = Column(Float, nullable=False)
    is_success = Column(Boolean, nullable=False, default=False)
    most_successful_meal = Column(String(100))

    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

class UserSticker(Base):
    """해금된 스티커"""
    __tablename__ = "user_stickers"
    __table_args__ = (
        UniqueConstraint("user_id", "sticker_code", name="uq_user_sticker"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    sticker_code = Column(String(50), nullable=False)
    unlocked_at = Column(DateTime, nullable=False)
