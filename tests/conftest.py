from datetime import date, datetime, timedelta
from decimal import Decimal
from itertools import count

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from pocketbook.models.category import Category, CategoryType
from pocketbook.models.enums import TransactionType
from pocketbook.models.transaction import Transaction
from pocketbook.models.user import User
from pocketbook.services.store import TransactionStore


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def store(session):
    return TransactionStore(session)


def _make_user(session, email):
    user = User(email=email, hashed_password="not-a-real-hash", full_name=email.split("@")[0])
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def owner(session):
    return _make_user(session, "ana@example.com").id


@pytest.fixture
def other_owner(session):
    return _make_user(session, "beto@example.com").id


@pytest.fixture
def make_category(session):
    def factory(user_id, name="Comida", type=CategoryType.expense, color=None):
        category = Category(user_id=user_id, name=name, type=type, color=color)
        session.add(category)
        session.commit()
        session.refresh(category)
        return category

    return factory


@pytest.fixture
def make_transaction(session):
    """Inserta transacciones con created_at creciente salvo que se indique otro."""
    clock = count()

    def factory(
        user_id,
        category,
        amount="100",
        transaction_date=date(2024, 1, 15),
        type=TransactionType.expense,
        description="Compra",
        created_at=None,
    ):
        if created_at is None:
            created_at = datetime(2024, 1, 1, 8, 0, 0) + timedelta(seconds=next(clock))
        tx = Transaction(
            user_id=user_id,
            category_id=category.id,
            amount=Decimal(str(amount)),
            description=description,
            transaction_date=transaction_date,
            type=type,
            created_at=created_at,
            updated_at=created_at,
        )
        session.add(tx)
        session.commit()
        session.refresh(tx)
        return tx

    return factory
