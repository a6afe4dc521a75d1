# app/schemas/meal.py
from pydantic import BaseModel, Field
from typing import List, Optional

from app.models.meal import MealTime

class CategoryResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None

    class Config:
        from_attributes = True

class CategoryGuideResponse(BaseModel):
    id: int
    image_url: str

    class Config:
        from_attributes = True

class MealSummary(BaseModel):
    """식단 목록 항목"""
    meal_id: int
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    meal_time: MealTime

    class Config:
        from_attributes = True

class IngredientResponse(BaseModel):
    ingredient: str
    amount: Optional[float] = None
    unit: Optional[str] = None

class RecipeStepResponse(BaseModel):
    step_number: int
    instruction: str

    class Config:
        from_attributes = True

class MealDetail(MealSummary):
    """식단 상세 (재료 + 레시피)"""
    ingredients: List[IngredientResponse]
    recipes: List[RecipeStepResponse]

class AdminMealCreate(BaseModel):
    """관리자 식단 추가 요청"""
    name: str = Field(..., min_length=1, max_length=100)
    meal_time: MealTime
    category_ids: List[int] = Field(..., min_length=1)
    description: Optional[str] = None
    image_url: Optional[str] = None

class AdminMealCreated(BaseModel):
    ok: bool = True
    meal_id: int
    message: str = "새 식단이 성공적으로 추가되었습니다."
