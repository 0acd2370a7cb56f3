from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field
from typing import Optional
from uuid import UUID
from datetime import datetime
from enum import Enum


class CategoryType(str, Enum):
    income = "income"
    expense = "expense"


class Category(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: UUID = Field(foreign_key="user.id", index=True)
    name: str
    type: CategoryType = Field(default=CategoryType.expense)  # fijo por categoría
    color: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow, sa_type=DateTime())
