# app/api/routes/admin.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import require_admin
from app.database import get_db
from app.models.user import AdminUser, AdminRole
from app.schemas.admin import AdminLogin, AdminToken
from app.schemas.meal import AdminMealCreate, AdminMealCreated
from app.services import user_service, meal_service

router = APIRouter(prefix="/admin", tags=["관리자"])

@router.post("/login", response_model=AdminToken)
def admin_login(data: AdminLogin, db: Session = Depends(get_db)):
    """관리자 로그인 (토큰 12시간)"""
    admin, token = user_service.admin_login(db, data.username, data.password)
    return AdminToken(token=token, role=admin.role, name=admin.name)

@router.post("/meals", response_model=AdminMealCreated, status_code=status.HTTP_201_CREATED)
def create_meal(
    data: AdminMealCreate,
    admin: AdminUser = Depends(require_admin(AdminRole.EDITOR)),
    db: Session = Depends(get_db)
):
    """새 식단 추가 (editor 이상)"""
    meal = meal_service.create_meal(
        db,
        admin,
        name=data.name,
        meal_time=data.meal_time,
        category_ids=data.category_ids,
        description=data.description,
        image_url=data.image_url
    )
    return AdminMealCreated(meal_id=meal.meal_id)
