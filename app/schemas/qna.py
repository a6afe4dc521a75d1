# app/schemas/qna.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

class QnACreate(BaseModel):
    question: str = Field(..., min_length=1)
    user_id: Optional[int] = None
    answer: Optional[str] = None

class QnAResponse(BaseModel):
    id: int
    user_id: Optional[int] = None
    question: str
    answer: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class QnACreated(BaseModel):
    ok: bool = True
    id: int
