# pocketbook/services/filters.py

from typing import Any, Dict, List
from uuid import UUID

from pocketbook.core.errors import ValidationError
from pocketbook.core.logging import get_logger
from pocketbook.models.transaction import Transaction
from pocketbook.schemas.transaction import TransactionFilter
from pocketbook.services.store import TransactionStore

logger = get_logger(__name__)


def _criteria(filters: TransactionFilter) -> Dict[str, Any]:
    if filters.start_date and filters.end_date and filters.start_date > filters.end_date:
        raise ValidationError("La fecha inicial no puede ser posterior a la final.")
    return {
        "start_date": filters.start_date,
        "end_date": filters.end_date,
        "category_id": filters.category_id,
        "type": filters.type,
    }


def list_transactions(store: TransactionStore, user_id: UUID, filters: TransactionFilter) -> List[Transaction]:
    """
    Transacciones de `user_id` que cumplen todos los filtros dados.

    Orden: `transaction_date` descendente y luego id descendente. `offset` se
    aplica después de filtrar y ordenar, antes de `limit`; cada uno funciona
    sin el otro.
    """
    if filters.limit is not None and filters.limit <= 0:
        raise ValidationError("limit debe ser mayor a cero.")
    if filters.offset is not None and filters.offset < 0:
        raise ValidationError("offset no puede ser negativo.")

    transactions = store.find_transactions(
        user_id,
        limit=filters.limit,
        offset=filters.offset,
        **_criteria(filters),
    )
    logger.info(
        "transactions_listed",
        user_id=str(user_id),
        returned=len(transactions),
        limit=filters.limit,
        offset=filters.offset,
    )
    return transactions


def count_transactions(store: TransactionStore, user_id: UUID, filters: TransactionFilter) -> int:
    """Total de coincidencias ignorando la paginación."""
    return store.count_transactions(user_id, **_criteria(filters))
