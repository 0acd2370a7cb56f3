from uuid import UUID
from decimal import Decimal
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import date, datetime

from pocketbook.models.enums import TransactionType
from pocketbook.models.category import Category  # noqa: F401  registra la tabla category antes de la FK


class Transaction(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: UUID = Field(foreign_key="user.id", index=True)
    category_id: int = Field(foreign_key="category.id")
    # Siempre positivo; el signo lo da `type`
    amount: Decimal = Field(max_digits=15, decimal_places=2)
    description: str
    transaction_date: date = Field(index=True)
    # Se guarda aparte del tipo de la categoría y puede no coincidir con él
    type: TransactionType
    # UTC sin zona horaria
    created_at: datetime = Field(default_factory=datetime.utcnow, sa_type=DateTime(), index=True)
    updated_at: datetime = Field(default_factory=datetime.utcnow, sa_type=DateTime())
