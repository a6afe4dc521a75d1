# app/api/routes/meals.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.exceptions import NotFoundError
from app.models.meal import Category, CategoryGuide, Meal, MealTime
from app.schemas.meal import CategoryResponse, CategoryGuideResponse, MealSummary, MealDetail
from app.services import meal_service

router = APIRouter(tags=["식단"])

@router.get("/categories", response_model=List[CategoryResponse])
def list_categories(db: Session = Depends(get_db)):
    """카테고리 목록"""
    categories = db.query(Category).order_by(Category.id).all()
    if not categories:
        raise NotFoundError("카테고리가 없습니다.")
    return categories

@router.get("/category-guides/{category_id}", response_model=List[CategoryGuideResponse])
def list_category_guides(category_id: int, db: Session = Depends(get_db)):
    """라이프스타일 가이드"""
    guides = db.query(CategoryGuide)\
        .filter(CategoryGuide.category_id == category_id)\
        .order_by(CategoryGuide.id)\
        .all()
    if not guides:
        raise NotFoundError("해당 카테고리의 가이드를 찾을 수 없습니다.")
    return guides

@router.get("/meals", response_model=List[MealSummary])
def list_meals(db: Session = Depends(get_db)):
    """전체 식단"""
    meals = db.query(Meal).order_by(Meal.meal_id).all()
    if not meals:
        raise NotFoundError("식단이 없습니다.")
    return meals

# /meals/{meal_id} 보다 먼저 등록해야 함
@router.get("/meals/today", response_model=MealSummary)
def today_meal(
    time: MealTime = Query(..., description="breakfast, lunch, dinner"),
    category_id: Optional[int] = Query(None),
    db: Session = Depends(get_db)
):
    """오늘의 추천 식단"""
    return meal_service.pick_today_meal(db, time, category_id)

@router.get("/meals/category/{category_id}", response_model=List[MealSummary])
def list_meals_by_category(
    category_id: int,
    meal_time: Optional[MealTime] = Query(None),
    db: Session = Depends(get_db)
):
    """카테고리별 식단 (끼니 필터 선택)"""
    meals = meal_service.list_meals_by_category(db, category_id, meal_time)
    if not meals:
        raise NotFoundError("해당 카테고리의 식단이 없습니다.")
    return meals

@router.get("/meals/{meal_id}", response_model=MealDetail)
def get_meal(meal_id: int, db: Session = Depends(get_db)):
    """식단 상세 (재료 + 레시피)"""
    return meal_service.get_meal_detail(db, meal_id)
