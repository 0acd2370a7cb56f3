from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from pocketbook.api.deps import get_store
from pocketbook.core.security import get_current_user
from pocketbook.schemas.report import ExportFormat, ExportRequest
from pocketbook.services.export import CONTENT_TYPES, export_filename, export_transactions
from pocketbook.services.store import TransactionStore

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/export")
def export_report(
    start_date: date = Query(...),
    end_date: date = Query(...),
    format: ExportFormat = Query(ExportFormat.csv),
    user_id: UUID = Depends(get_current_user),
    store: TransactionStore = Depends(get_store),
):
    request = ExportRequest(start_date=start_date, end_date=end_date, format=format)
    document = export_transactions(store, user_id, request)
    return Response(
        content=document,
        media_type=CONTENT_TYPES[request.format],
        headers={"Content-Disposition": f'attachment; filename="{export_filename(request)}"'},
    )
