# app/api/routes/qna.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.qna import QnA
from app.schemas.qna import QnACreate, QnAResponse, QnACreated

router = APIRouter(prefix="/qna", tags=["QnA"])

@router.get("/list", response_model=List[QnAResponse])
def list_qna(db: Session = Depends(get_db)):
    return db.query(QnA).order_by(QnA.id.desc()).all()

@router.post("/add", response_model=QnACreated, status_code=status.HTTP_201_CREATED)
def add_qna(data: QnACreate, db: Session = Depends(get_db)):
    qna = QnA(question=data.question, user_id=data.user_id, answer=data.answer)
    db.add(qna)
    db.commit()
    db.refresh(qna)
    return QnACreated(id=qna.id)
