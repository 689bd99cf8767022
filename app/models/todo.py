# app/models/todo.py
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from sqlmodel import SQLModel, Field
from sqlalchemy import Column, Text


def utcnow() -> datetime:
    # tz 정보가 있는 UTC로 저장
    return datetime.now(timezone.utc)


class Todo(SQLModel, table=True):
    __tablename__ = "todo"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    title: str
    description: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )
    completed: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: datetime = Field(default_factory=utcnow)
