from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from pocketbook.api.deps import get_store
from pocketbook.core.security import get_current_user
from pocketbook.models.enums import TransactionType
from pocketbook.schemas.transaction import TransactionCreate, TransactionFilter, TransactionRead, TransactionUpdate
from pocketbook.services.filters import count_transactions, list_transactions
from pocketbook.services.store import TransactionStore

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.post("", response_model=TransactionRead, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=TransactionRead, status_code=status.HTTP_201_CREATED)
def create_transaction(
    transaction_data: TransactionCreate,
    user_id: UUID = Depends(get_current_user),
    store: TransactionStore = Depends(get_store),
):
    return store.add_transaction(user_id, transaction_data)


@router.get("", response_model=List[TransactionRead])
@router.get("/", response_model=List[TransactionRead])
def get_transactions(
    response: Response,
    user_id: UUID = Depends(get_current_user),
    store: TransactionStore = Depends(get_store),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    category_id: Optional[int] = Query(None),
    type: Optional[TransactionType] = Query(None),
    limit: Optional[int] = Query(None, gt=0),
    offset: Optional[int] = Query(None, ge=0),
):
    filters = TransactionFilter(
        start_date=start_date,
        end_date=end_date,
        category_id=category_id,
        type=type,
        limit=limit,
        offset=offset,
    )
    transactions = list_transactions(store, user_id, filters)
    response.headers["X-Total-Count"] = str(count_transactions(store, user_id, filters))
    return transactions


@router.get("/{transaction_id}", response_model=TransactionRead)
def get_transaction(
    transaction_id: int,
    user_id: UUID = Depends(get_current_user),
    store: TransactionStore = Depends(get_store),
):
    return store.get_transaction(user_id, transaction_id)


@router.patch("/{transaction_id}", response_model=TransactionRead)
def update_transaction(
    transaction_id: int,
    data: TransactionUpdate,
    user_id: UUID = Depends(get_current_user),
    store: TransactionStore = Depends(get_store),
):
    return store.update_transaction(user_id, transaction_id, data)


@router.delete("/{transaction_id}")
def delete_transaction(
    transaction_id: int,
    user_id: UUID = Depends(get_current_user),
    store: TransactionStore = Depends(get_store),
):
    store.delete_transaction(user_id, transaction_id)
    return {"message": "Transacción eliminada correctamente"}
