# pocketbook/api/categories.py

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from pocketbook.api.deps import get_store
from pocketbook.core.security import get_current_user
from pocketbook.models.category import CategoryType
from pocketbook.schemas.category import CategoryCreate, CategoryRead
from pocketbook.services.store import TransactionStore

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post("", response_model=CategoryRead)
@router.post("/", response_model=CategoryRead)
def create_category(
    category_data: CategoryCreate,
    user_id: UUID = Depends(get_current_user),
    store: TransactionStore = Depends(get_store),
):
    return store.add_category(user_id, category_data)


@router.get("", response_model=List[CategoryRead])
@router.get("/", response_model=List[CategoryRead])
def list_categories(
    user_id: UUID = Depends(get_current_user),
    store: TransactionStore = Depends(get_store),
    type: Optional[CategoryType] = Query(None),
):
    """Lista categorías del usuario, opcionalmente por tipo."""
    return store.list_categories(user_id, type)
