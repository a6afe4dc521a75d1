# tests/conftest.py
import os

# app.config 는 import 시점에 환경변수를 읽으므로 가장 먼저 설정
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-that-is-long-enough-1234"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["DEBUG"] = "false"

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from main import app
from app.core.security import hash_password
from app.database import Base, engine, SessionLocal
from app.models.user import User, AdminUser, AdminRole
from app.models.meal import Category, Meal, MealCategory, MealTime, MealIngredient, MealRecipe
from app.models.challenge import Challenge

@pytest.fixture
def db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture
def client(db):
    return TestClient(app)

def add_meal(db, name, meal_time, category_ids):
    meal = Meal(name=name, description=f"{name} 설명", meal_time=meal_time)
    db.add(meal)
    db.flush()
    for category_id in category_ids:
        db.add(MealCategory(meal_id=meal.meal_id, category_id=category_id))
    return meal

@pytest.fixture
def catalog(db):
    """카테고리 2개(2: 저탄고지, 5: 지중해식) + 끼니별 식단 + 3일 챌린지"""
    low_carb = Category(id=2, name="저탄고지", description="탄수화물을 줄인 식단")
    mediterranean = Category(id=5, name="지중해식", description="올리브유 중심 식단")
    db.add_all([low_carb, mediterranean])
    db.flush()

    meals = {
        MealTime.BREAKFAST: [add_meal(db, "달걀 스크램블", MealTime.BREAKFAST, [2]),
                             add_meal(db, "그릭 요거트", MealTime.BREAKFAST, [2, 5])],
        MealTime.LUNCH: [add_meal(db, "닭가슴살 샐러드", MealTime.LUNCH, [2])],
        MealTime.DINNER: [add_meal(db, "연어 스테이크", MealTime.DINNER, [2, 5]),
                          add_meal(db, "소고기 구이", MealTime.DINNER, [2])],
    }

    salad = meals[MealTime.LUNCH][0]
    db.add_all([
        MealIngredient(meal_id=salad.meal_id, ingredient="닭가슴살", use_g=150, unit="g"),
        MealIngredient(meal_id=salad.meal_id, ingredient="양상추", use_g=80, unit="g"),
        MealRecipe(meal_id=salad.meal_id, step_number=2, instruction="채소와 함께 담는다"),
        MealRecipe(meal_id=salad.meal_id, step_number=1, instruction="닭가슴살을 굽는다"),
    ])

    challenge = Challenge(category_id=2, day_count=3, title="3일 저탄고지 챌린지")
    db.add(challenge)
    db.commit()

    return {"categories": [low_carb, mediterranean], "meals": meals, "challenge": challenge}

@pytest.fixture
def member(db):
    user = User(username="tester", email="tester@nutri.kr", password_hash=hash_password("pass1234"))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user

@pytest.fixture
def make_admin(db):
    def _make(username="editor", role=AdminRole.EDITOR, password="admin1234"):
        admin = AdminUser(username=username, password_hash=hash_password(password), name=f"{username} 관리자", role=role)
        db.add(admin)
        db.commit()
        db.refresh(admin)
        return admin
    return _make

@pytest.fixture
def morning():
    return datetime(2025, 10, 1, 9, 0, 0)
