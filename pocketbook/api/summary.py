from uuid import UUID

from fastapi import APIRouter, Depends, Query

from pocketbook.api.deps import get_store
from pocketbook.core.security import get_current_user
from pocketbook.schemas.summary import MonthlySummary
from pocketbook.services.store import TransactionStore
from pocketbook.services.summary import get_monthly_summary

router = APIRouter(prefix="/summary", tags=["summary"])


@router.get("/monthly", response_model=MonthlySummary)
def monthly_summary(
    month: int = Query(..., ge=1, le=12),
    year: int = Query(...),
    user_id: UUID = Depends(get_current_user),
    store: TransactionStore = Depends(get_store),
):
    return get_monthly_summary(store, user_id, month, year)
