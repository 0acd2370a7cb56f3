# pocketbook/services/dashboard.py

from collections import defaultdict
from datetime import date, datetime
from typing import Dict, List, Tuple
from uuid import UUID

from pocketbook.core.logging import get_logger
from pocketbook.models.category import Category
from pocketbook.models.enums import TransactionType
from pocketbook.models.transaction import Transaction
from pocketbook.schemas.category import CategoryRead
from pocketbook.schemas.summary import CategoryBreakdownEntry, DashboardView, TrendPoint
from pocketbook.schemas.transaction import TransactionRead
from pocketbook.services.store import TransactionStore
from pocketbook.services.summary import get_monthly_summary
from pocketbook.utils.money import ZERO
from pocketbook.utils.periods import month_bounds, trailing_months

logger = get_logger(__name__)

RECENT_TRANSACTIONS_LIMIT = 10
TREND_MONTHS = 6


def build_categories_summary(rows: List[Tuple[Transaction, Category]]) -> List[CategoryBreakdownEntry]:
    """
    Agrupa por id de categoría. Ingresos y gastos de la misma categoría se
    suman entre sí, no se compensan.
    """
    categories: Dict[int, Category] = {}
    totals = defaultdict(lambda: ZERO)
    counts = defaultdict(int)

    for tx, category in rows:
        categories[category.id] = category
        totals[category.id] += tx.amount
        counts[category.id] += 1

    entries = [
        CategoryBreakdownEntry(
            category=CategoryRead.model_validate(categories[cat_id]),
            total_amount=totals[cat_id],
            transaction_count=counts[cat_id],
        )
        for cat_id in categories
    ]
    entries.sort(key=lambda e: (-e.total_amount, e.category.id))
    return entries


def build_monthly_trend(
    transactions: List[Transaction],
    months: List[Tuple[int, int]],
    zero_fill: bool = False,
) -> List[TrendPoint]:
    """
    Un punto por (año, mes) con transacciones dentro de `months`, ascendente.
    Con `zero_fill` se devuelve un punto por cada mes de la ventana.
    """
    window = set(months)
    income = defaultdict(lambda: ZERO)
    expenses = defaultdict(lambda: ZERO)
    seen = set()

    for tx in transactions:
        key = (tx.transaction_date.year, tx.transaction_date.month)
        if key not in window:
            continue
        seen.add(key)
        if tx.type == TransactionType.income:
            income[key] += tx.amount
        elif tx.type == TransactionType.expense:
            expenses[key] += tx.amount

    keys = months if zero_fill else sorted(seen)
    return [
        TrendPoint(month=month, year=year, income=income[(year, month)], expenses=expenses[(year, month)])
        for year, month in keys
    ]


def get_dashboard_data(
    store: TransactionStore,
    user_id: UUID,
    now: datetime,
    zero_fill: bool = False,
) -> DashboardView:
    """
    Vista compuesta del tablero para el mes de `now`.

    Cualquier error de lectura se propaga; nunca se devuelve una vista parcial.
    """
    current_month_summary = get_monthly_summary(store, user_id, now.month, now.year)

    recent = store.find_transactions(
        user_id, order_by="created_at", limit=RECENT_TRANSACTIONS_LIMIT
    )

    month_start, month_end = month_bounds(now.month, now.year)
    month_rows = store.find_transactions_with_category(
        user_id, start_date=month_start, end_before=month_end
    )

    months = trailing_months(now.month, now.year, TREND_MONTHS)
    first_year, first_month = months[0]
    trend_transactions = store.find_transactions(
        user_id, start_date=date(first_year, first_month, 1), end_before=month_end
    )

    view = DashboardView(
        current_month_summary=current_month_summary,
        recent_transactions=[TransactionRead.model_validate(tx) for tx in recent],
        categories_summary=build_categories_summary(month_rows),
        monthly_trend=build_monthly_trend(trend_transactions, months, zero_fill),
    )

    logger.info(
        "dashboard_built",
        user_id=str(user_id),
        month=now.month,
        year=now.year,
        recent_count=len(view.recent_transactions),
        category_count=len(view.categories_summary),
        trend_points=len(view.monthly_trend),
    )
    return view
