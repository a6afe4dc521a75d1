# app/services/meal_service.py
import random
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.logger import logger
from app.exceptions import NotFoundError, ValidationError
from app.models.meal import Meal, MealCategory, MealTime, Category
from app.models.user import AdminUser, AdminLog

def get_meal_detail(db: Session, meal_id: int) -> dict:
    """식단 상세 (재료 + 레시피 순서대로)"""
    meal = db.query(Meal).filter(Meal.meal_id == meal_id).first()
    if not meal:
        raise NotFoundError("식단을 찾을 수 없습니다.")

    return {
        "meal_id": meal.meal_id,
        "name": meal.name,
        "description": meal.description,
        "image_url": meal.image_url,
        "meal_time": meal.meal_time,
        "ingredients": [
            {"ingredient": i.ingredient, "amount": i.use_g, "unit": i.unit}
            for i in meal.ingredients
        ],
        "recipes": [
            {"step_number": r.step_number, "instruction": r.instruction}
            for r in meal.recipes
        ]
    }

def list_meals_by_category(
    db: Session,
    category_id: int,
    meal_time: Optional[MealTime] = None
) -> List[Meal]:
    """카테고리별 식단 (끼니 필터 선택)"""
    query = db.query(Meal)\
        .join(MealCategory, MealCategory.meal_id == Meal.meal_id)\
        .filter(MealCategory.category_id == category_id)
    if meal_time:
        query = query.filter(Meal.meal_time == meal_time)
    return query.distinct().order_by(Meal.meal_id).all()

def pick_today_meal(
    db: Session,
    meal_time: MealTime,
    category_id: Optional[int] = None,
    rng: Optional[random.Random] = None
) -> Meal:
    """오늘의 추천 식단 (끼니 + 카테고리 중 무작위 하나)"""
    rng = rng or random.Random()
    if category_id is not None:
        candidates = list_meals_by_category(db, category_id, meal_time)
    else:
        candidates = db.query(Meal).filter(Meal.meal_time == meal_time).order_by(Meal.meal_id).all()

    if not candidates:
        raise NotFoundError("추천할 식단이 없습니다.")
    return rng.choice(candidates)

def create_meal(
    db: Session,
    admin: AdminUser,
    name: str,
    meal_time: MealTime,
    category_ids: List[int],
    description: Optional[str] = None,
    image_url: Optional[str] = None
) -> Meal:
    """관리자 식단 추가: 식단 + 카테고리 연결 + 작업 로그를 한 트랜잭션으로"""
    category_ids = list(dict.fromkeys(category_ids))
    found = db.query(Category.id).filter(Category.id.in_(category_ids)).count()
    if found != len(category_ids):
        raise ValidationError("존재하지 않는 카테고리가 포함되어 있습니다.")

    try:
        meal = Meal(name=name, meal_time=meal_time, description=description, image_url=image_url)
        db.add(meal)
        db.flush()

        db.add_all([MealCategory(meal_id=meal.meal_id, category_id=cid) for cid in category_ids])
        db.add(AdminLog(
            admin_id=admin.admin_id,
            action_type="INSERT",
            target_table="meals",
            target_id=meal.meal_id,
            description=f"새 식단 '{name}' ({meal_time.value}) 추가 (카테고리: {','.join(map(str, category_ids))})"
        ))

        db.commit()
    except Exception:
        db.rollback()
        logger.exception(f"관리자 식단 추가 실패: admin={admin.username} name={name}")
        raise

    db.refresh(meal)
    logger.info(f"식단 추가: meal={meal.meal_id} by admin={admin.username}")
    return meal
