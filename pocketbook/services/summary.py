# pocketbook/services/summary.py

from typing import Iterable
from uuid import UUID

from pocketbook.core.logging import get_logger
from pocketbook.models.enums import TransactionType
from pocketbook.models.transaction import Transaction
from pocketbook.schemas.summary import MonthlySummary
from pocketbook.services.store import TransactionStore
from pocketbook.utils.money import ZERO
from pocketbook.utils.periods import in_calendar_range, month_bounds, validate_month

logger = get_logger(__name__)


def build_summary(month: int, year: int, transactions: Iterable[Transaction]) -> MonthlySummary:
    """Totales por tipo para un conjunto ya filtrado al mes."""
    total_income = ZERO
    total_expenses = ZERO
    count = 0

    for tx in transactions:
        count += 1
        if tx.type == TransactionType.income:
            total_income += tx.amount
        elif tx.type == TransactionType.expense:
            total_expenses += tx.amount

    return MonthlySummary(
        month=month,
        year=year,
        total_income=total_income,
        total_expenses=total_expenses,
        remaining_balance=total_income - total_expenses,
        transaction_count=count,
    )


def get_monthly_summary(store: TransactionStore, user_id: UUID, month: int, year: int) -> MonthlySummary:
    """
    Resumen de ingresos y gastos del mes `month`/`year` para `user_id`.

    Usa el intervalo semiabierto [día 1 del mes, día 1 del mes siguiente).
    Un mes sin transacciones devuelve todo en cero.
    """
    validate_month(month)
    if not in_calendar_range(year):
        # Ningún registro puede tener una fecha fuera del calendario
        return build_summary(month, year, [])

    start, end = month_bounds(month, year)
    transactions = store.find_transactions(user_id, start_date=start, end_before=end)
    summary = build_summary(month, year, transactions)

    logger.info(
        "monthly_summary_computed",
        user_id=str(user_id),
        month=month,
        year=year,
        transaction_count=summary.transaction_count,
    )
    return summary
