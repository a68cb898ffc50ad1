from __future__ import annotations

from sqlalchemy import Boolean, Column, Date, DateTime, Integer, String

from .db import Base


class TaskModel(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=False)
    title = Column(String(200), nullable=False)
    category = Column(String(50), nullable=False, default="other", index=True)
    priority = Column(String(10), nullable=False, default="medium")
    due_date = Column(Date, nullable=True)
    completed = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime, nullable=False)
    completed_at = Column(DateTime, nullable=True)
