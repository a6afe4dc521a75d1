# app/models/meal.py
from sqlalchemy import Column, Integer, String, Text, Float, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from app.database import Base
import enum

class MealTime(str, enum.Enum):
    """끼니 (정렬 순서 = 선언 순서)"""
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"

    @property
    def order(self) -> int:
        return list(MealTime).index(self)

def meal_time_column(**kwargs) -> Column:
    return Column(
        SQLEnum(MealTime, values_callable=lambda e: [m.value for m in e], native_enum=False, length=10),
        **kwargs
    )

class Category(Base):
    """식단 카테고리 (예: 저탄고지)"""
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False)
    description = Column(Text)

    guides = relationship("CategoryGuide", back_populates="category", cascade="all, delete-orphan")

class CategoryGuide(Base):
    """카테고리별 라이프스타일 가이드 이미지"""
    __tablename__ = "category_guides"

    id = Column(Integer, primary_key=True, autoincrement=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True)
    image_url = Column(String(500), nullable=False)

    category = relationship("Category", back_populates="guides")

class Meal(Base):
    """식단 (요리 하나)"""
    __tablename__ = "meals"

    meal_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    image_url = Column(String(500))
    meal_time = meal_time_column(nullable=False, index=True)

    ingredients = relationship("MealIngredient", cascade="all, delete-orphan")
    recipes = relationship("MealRecipe", order_by="MealRecipe.step_number", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Meal {self.name} ({self.meal_time})>"

class MealCategory(Base):
    """식단 <-> 카테고리 연결"""
    __tablename__ = "meal_categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    meal_id = Column(Integer, ForeignKey("meals.meal_id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True)

class MealIngredient(Base):
    """재료"""
    __tablename__ = "meal_ingredients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    meal_id = Column(Integer, ForeignKey("meals.meal_id", ondelete="CASCADE"), nullable=False, index=True)
    ingredient = Column(String(100), nullable=False)
    use_g = Column(Float)  # API 에서는 amount 로 노출
    unit = Column(String(20))

class MealRecipe(Base):
    """조리 단계"""
    __tablename__ = "meal_recipes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    meal_id = Column(Integer, ForeignKey("meals.meal_id", ondelete="CASCADE"), nullable=False, index=True)
    step_number = Column(Integer, nullable=False)
    instruction = Column(Text, nullable=False)
