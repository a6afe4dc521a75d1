# app/models/challenge.py
from sqlalchemy import (
    Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint, CheckConstraint, Enum as SQLEnum
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
from app.models.meal import meal_time_column
import enum

class ChallengeStatus(str, enum.Enum):
    """사용자 챌린지 상태 (DB에는 한글 문자열 그대로 저장)"""
    IN_PROGRESS = "진행 중"
    SUCCESS = "성공"
    FAIL = "실패"
    ABANDONED = "포기"

class ResultStatus(str, enum.Enum):
    """끼니별 결과"""
    SUCCESS = "성공"
    FAIL = "실패"

def _values(e):
    return [m.value for m in e]

class Challenge(Base):
    """챌린지 템플릿: 카테고리 C 의 N일 식단"""
    __tablename__ = "challenges"
    __table_args__ = (
        CheckConstraint("day_count >= 1", name="ck_challenges_day_count"),
    )

    challenge_id = Column(Integer, primary_key=True, autoincrement=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False)
    day_count = Column(Integer, nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(Text)

    category = relationship("Category")

    def __repr__(self):
        return f"<Challenge {self.title} ({self.day_count}일)>"

class UserChallenge(Base):
    """사용자 한 명의 챌린지 진행"""
    __tablename__ = "user_challenges"

    user_challenge_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    challenge_id = Column(Integer, ForeignKey("challenges.challenge_id", ondelete="CASCADE"), nullable=False)
    started_at = Column(DateTime, nullable=False)
    status = Column(
        SQLEnum(ChallengeStatus, values_callable=_values, native_enum=False, length=10),
        nullable=False,
        default=ChallengeStatus.IN_PROGRESS,
        index=True
    )

    challenge = relationship("Challenge")
    meals = relationship("ChallengeMeal", back_populates="user_challenge", cascade="all, delete-orphan")
    results = relationship("ChallengeResult", back_populates="user_challenge", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<UserChallenge {self.user_challenge_id} - {self.status}>"

class ChallengeMeal(Base):
    """배정된 끼니 슬롯 (day_index, meal_time) -> meal"""
    __tablename__ = "challenge_meals"
    __table_args__ = (
        UniqueConstraint("user_challenge_id", "day_index", "meal_time", name="uq_challenge_meals_slot"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_challenge_id = Column(
        Integer, ForeignKey("user_challenges.user_challenge_id", ondelete="CASCADE"), nullable=False, index=True
    )
    challenge_id = Column(Integer, ForeignKey("challenges.challenge_id", ondelete="CASCADE"), nullable=False)
    meal_id = Column(Integer, ForeignKey("meals.meal_id", ondelete="CASCADE"), nullable=False)
    day_index = Column(Integer, nullable=False)
    meal_time = meal_time_column(nullable=False)

    user_challenge = relationship("UserChallenge", back_populates="meals")
    meal = relationship("Meal")

class ChallengeResult(Base):
    """끼니 슬롯별 기록 결과"""
    __tablename__ = "challenge_results"
    __table_args__ = (
        UniqueConstraint("user_challenge_id", "day_index", "meal_time", name="uq_challenge_results_slot"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_challenge_id = Column(
        Integer, ForeignKey("user_challenges.user_challenge_id", ondelete="CASCADE"), nullable=False, index=True
    )
    meal_id = Column(Integer, ForeignKey("meals.meal_id", ondelete="CASCADE"), nullable=False)
    day_index = Column(Integer, nullable=False)
    meal_time = meal_time_column(nullable=False)
    status = Column(SQLEnum(ResultStatus, values_callable=_values, native_enum=False, length=10), nullable=False)
    rating = Column(Integer)
    review = Column(Text)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user_challenge = relationship("UserChallenge", back_populates="results")
    meal = relationship("Meal")
