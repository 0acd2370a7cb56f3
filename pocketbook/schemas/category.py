from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from pocketbook.models.category import CategoryType


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1)
    type: CategoryType
    color: Optional[str] = None


class CategoryRead(BaseModel):
    id: int
    name: str
    type: CategoryType
    color: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
