from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import date, datetime
from pocketbook.models.enums import TransactionType
from pocketbook.utils.money import Amount, Money


class TransactionCreate(BaseModel):
    category_id: int
    amount: Amount
    description: str = Field(min_length=1)
    transaction_date: date
    type: TransactionType


class TransactionUpdate(BaseModel):
    """
    Actualización parcial. La presencia de cada campo se lee de
    `model_fields_set`: ausente = no tocar, null explícito = error.
    """
    category_id: Optional[int] = None
    amount: Optional[Amount] = None
    description: Optional[str] = Field(default=None, min_length=1)
    transaction_date: Optional[date] = None
    type: Optional[TransactionType] = None


class TransactionRead(BaseModel):
    id: int
    category_id: int
    amount: Money
    description: str
    transaction_date: date
    type: TransactionType
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TransactionFilter(BaseModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    category_id: Optional[int] = None
    type: Optional[TransactionType] = None
    limit: Optional[int] = Field(default=None, gt=0)
    offset: Optional[int] = Field(default=None, ge=0)
