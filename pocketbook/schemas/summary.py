# pocketbook/schemas/summary.py

from pydantic import BaseModel
from typing import List

from pocketbook.schemas.category import CategoryRead
from pocketbook.schemas.transaction import TransactionRead
from pocketbook.utils.money import Money


class MonthlySummary(BaseModel):
    month: int
    year: int
    total_income: Money
    total_expenses: Money
    remaining_balance: Money
    transaction_count: int


class CategoryBreakdownEntry(BaseModel):
    category: CategoryRead
    total_amount: Money
    transaction_count: int


class TrendPoint(BaseModel):
    month: int
    year: int
    income: Money
    expenses: Money


class DashboardView(BaseModel):
    current_month_summary: MonthlySummary
    recent_transactions: List[TransactionRead]
    categories_summary: List[CategoryBreakdownEntry]
    monthly_trend: List[TrendPoint]
