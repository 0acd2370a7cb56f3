# pocketbook/services/store.py

from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from pocketbook.core.errors import NotFoundError, StoreReadError, StoreWriteError, ValidationError
from pocketbook.core.logging import get_logger
from pocketbook.models.category import Category, CategoryType
from pocketbook.models.enums import TransactionType
from pocketbook.models.transaction import Transaction
from pocketbook.schemas.category import CategoryCreate
from pocketbook.schemas.transaction import TransactionCreate, TransactionUpdate

logger = get_logger(__name__)

_ORDER_COLUMNS = {
    "transaction_date": Transaction.transaction_date,
    "created_at": Transaction.created_at,
}


class TransactionStore:
    """
    Acceso a categorías y transacciones de un usuario sobre una `Session`.

    Todas las consultas llevan `user_id == owner`. Los errores de SQLAlchemy se
    convierten en StoreReadError / StoreWriteError y nunca se reintentan aquí.
    """

    def __init__(self, session: Session):
        self.session = session

    @contextmanager
    def _reading(self, operation: str, owner: UUID):
        try:
            yield
        except SQLAlchemyError as exc:
            logger.error("store_read_failed", operation=operation, user_id=str(owner), error=str(exc))
            raise StoreReadError(f"No fue posible consultar {operation}") from exc

    @contextmanager
    def _writing(self, operation: str, owner: UUID):
        try:
            yield
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("store_write_failed", operation=operation, user_id=str(owner), error=str(exc))
            raise StoreWriteError(f"No fue posible guardar {operation}") from exc

    # Lecturas

    def _transaction_query(
        self,
        query,
        owner: UUID,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        end_before: Optional[date] = None,
        category_id: Optional[int] = None,
        type: Optional[TransactionType] = None,
    ):
        query = query.where(Transaction.user_id == owner)
        if start_date is not None:
            query = query.where(Transaction.transaction_date >= start_date)
        if end_date is not None:
            query = query.where(Transaction.transaction_date <= end_date)
        if end_before is not None:
            query = query.where(Transaction.transaction_date < end_before)
        if category_id is not None:
            query = query.where(Transaction.category_id == category_id)
        if type is not None:
            query = query.where(Transaction.type == type)
        return query

    def find_transactions(
        self,
        owner: UUID,
        *,
        order_by: str = "transaction_date",
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        **filters: Any,
    ) -> List[Transaction]:
        """
        Transacciones del usuario, descendentes por `order_by` y luego por id.

        `start_date` y `end_date` son inclusivos; `end_before` es exclusivo.
        """
        column = _ORDER_COLUMNS[order_by]
        query = self._transaction_query(select(Transaction), owner, **filters)
        query = query.order_by(column.desc(), Transaction.id.desc())
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        with self._reading("transacciones", owner):
            return list(self.session.exec(query).all())

    def count_transactions(self, owner: UUID, **filters: Any) -> int:
        query = self._transaction_query(select(Transaction.id), owner, **filters)
        with self._reading("conteo de transacciones", owner):
            return self.session.exec(select(func.count()).select_from(query.subquery())).one()

    def find_transactions_with_category(self, owner: UUID, **filters: Any) -> List[Tuple[Transaction, Category]]:
        """Igual que find_transactions pero unida con la categoría (del mismo usuario)."""
        query = (
            select(Transaction, Category)
            .join(Category, Transaction.category_id == Category.id)
            .where(Category.user_id == owner)
        )
        query = self._transaction_query(query, owner, **filters)
        query = query.order_by(Transaction.transaction_date.desc(), Transaction.id.desc())

        with self._reading("transacciones con categoría", owner):
            return [(tx, category) for tx, category in self.session.exec(query).all()]

    def get_transaction(self, owner: UUID, transaction_id: int) -> Transaction:
        with self._reading("transacción", owner):
            tx = self.session.exec(
                select(Transaction).where(
                    Transaction.id == transaction_id,
                    Transaction.user_id == owner,
                )
            ).first()
        if not tx:
            raise NotFoundError("Transacción no encontrada")
        return tx

    def get_category(self, owner: UUID, category_id: int) -> Category:
        with self._reading("categoría", owner):
            category = self.session.exec(
                select(Category).where(
                    Category.id == category_id,
                    Category.user_id == owner,
                )
            ).first()
        if not category:
            raise NotFoundError("Categoría no encontrada")
        return category

    def list_categories(self, owner: UUID, type: Optional[CategoryType] = None) -> List[Category]:
        query = select(Category).where(Category.user_id == owner)
        if type:
            query = query.where(Category.type == type)
        query = query.order_by(Category.name, Category.id)
        with self._reading("categorías", owner):
            return list(self.session.exec(query).all())

    # Escrituras

    def add_category(self, owner: UUID, data: CategoryCreate) -> Category:
        category = Category(**data.model_dump(), user_id=owner)
        with self._writing("categoría", owner):
            self.session.add(category)
            self.session.commit()
            self.session.refresh(category)
        logger.info("category_created", user_id=str(owner), category_id=category.id)
        return category

    def add_transaction(self, owner: UUID, data: TransactionCreate) -> Transaction:
        # La categoría debe ser del mismo usuario
        self.get_category(owner, data.category_id)

        transaction = Transaction(**data.model_dump(), user_id=owner)
        with self._writing("transacción", owner):
            self.session.add(transaction)
            self.session.commit()
            self.session.refresh(transaction)
        logger.info("transaction_created", user_id=str(owner), transaction_id=transaction.id)
        return transaction

    def update_transaction(self, owner: UUID, transaction_id: int, data: TransactionUpdate) -> Transaction:
        changes: Dict[str, Any] = data.model_dump(exclude_unset=True)
        if not changes:
            raise ValidationError("Nada para actualizar.")
        nulls = sorted(field for field, value in changes.items() if value is None)
        if nulls:
            raise ValidationError(f"Campos que no pueden ser nulos: {', '.join(nulls)}")

        tx = self.get_transaction(owner, transaction_id)
        if "category_id" in changes:
            self.get_category(owner, changes["category_id"])

        for field, value in changes.items():
            setattr(tx, field, value)
        tx.updated_at = datetime.utcnow()

        with self._writing("transacción", owner):
            self.session.add(tx)
            self.session.commit()
            self.session.refresh(tx)
        logger.info("transaction_updated", user_id=str(owner), transaction_id=tx.id, fields=sorted(changes))
        return tx

    def delete_transaction(self, owner: UUID, transaction_id: int) -> None:
        tx = self.get_transaction(owner, transaction_id)
        with self._writing("transacción", owner):
            self.session.delete(tx)
            self.session.commit()
        logger.info("transaction_deleted", user_id=str(owner), transaction_id=transaction_id)
