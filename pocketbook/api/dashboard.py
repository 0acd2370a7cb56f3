# pocketbook/api/dashboard.py

from fastapi import APIRouter, Depends, Query
from datetime import datetime
from uuid import UUID

from pocketbook.api.deps import get_store
from pocketbook.core.security import get_current_user
from pocketbook.schemas.summary import DashboardView
from pocketbook.services.dashboard import get_dashboard_data
from pocketbook.services.store import TransactionStore

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def get_now() -> datetime:
    return datetime.utcnow()


@router.get("", response_model=DashboardView)
@router.get("/", response_model=DashboardView)
def dashboard(
    zero_fill: bool = Query(False, description="Incluir en la tendencia los meses sin transacciones"),
    user_id: UUID = Depends(get_current_user),
    store: TransactionStore = Depends(get_store),
    now: datetime = Depends(get_now),
):
    return get_dashboard_data(store, user_id, now, zero_fill=zero_fill)
