# pocketbook/services/export.py

"""
Exportación de transacciones a CSV o JSON.

El texto devuelto es el archivo descargable tal cual; su formato exacto es
una interfaz pública:

- CSV: encabezado fijo, líneas terminadas en "\\n" (también la última) y
  comillas sólo en campos con coma, comillas o salto de línea.
- JSON: arreglo con sangría de dos espacios; `[]` cuando no hay filas. El
  monto es un número JSON escrito desde el Decimal, sin pasar por float.
"""

import csv
import io
import json
from datetime import datetime, timezone
from typing import List, Tuple
from uuid import UUID

from pocketbook.core.errors import ValidationError
from pocketbook.core.logging import get_logger
from pocketbook.models.category import Category
from pocketbook.models.transaction import Transaction
from pocketbook.schemas.report import ExportFormat, ExportRequest
from pocketbook.services.store import TransactionStore
from pocketbook.utils.money import format_amount

logger = get_logger(__name__)

CSV_HEADER = [
    "ID",
    "Amount",
    "Description",
    "Transaction Date",
    "Type",
    "Category Name",
    "Category Type",
    "Created At",
]

CONTENT_TYPES = {
    ExportFormat.csv: "text/csv",
    ExportFormat.json: "application/json",
}

Row = Tuple[Transaction, Category]


def format_instant(value: datetime) -> str:
    """ISO con milisegundos y sufijo Z. Los datetimes naive se tratan como UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat(timespec="milliseconds") + "Z"


def render_csv(rows: List[Row]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(CSV_HEADER)
    for tx, category in rows:
        writer.writerow([
            str(tx.id),
            format_amount(tx.amount),
            tx.description,
            tx.transaction_date.isoformat(),
            tx.type.value,
            category.name,
            category.type.value,
            format_instant(tx.created_at),
        ])
    return buffer.getvalue()


def _json_object(tx: Transaction, category: Category) -> str:
    fields = [
        ("id", str(tx.id)),
        ("amount", format_amount(tx.amount)),
        ("description", json.dumps(tx.description, ensure_ascii=False)),
        ("transaction_date", json.dumps(tx.transaction_date.isoformat())),
        ("type", json.dumps(tx.type.value)),
        ("category_name", json.dumps(category.name, ensure_ascii=False)),
        ("category_type", json.dumps(category.type.value)),
        ("created_at", json.dumps(format_instant(tx.created_at))),
    ]
    body = ",\n".join(f"    {json.dumps(key)}: {value}" for key, value in fields)
    return "  {\n" + body + "\n  }"


def render_json(rows: List[Row]) -> str:
    # Mismo diseño que json.dumps(..., indent=2), pero con el monto escrito literal
    if not rows:
        return "[]"
    return "[\n" + ",\n".join(_json_object(tx, category) for tx, category in rows) + "\n]"


def export_filename(request: ExportRequest) -> str:
    return f"transactions_{request.start_date.isoformat()}_{request.end_date.isoformat()}.{request.format.value}"


def export_transactions(store: TransactionStore, user_id: UUID, request: ExportRequest) -> str:
    """
    Reporte de las transacciones de `user_id` entre `start_date` y `end_date`
    (ambas inclusive), de la más reciente a la más antigua.

    El documento se arma completo en memoria; si la lectura falla no se
    devuelve nada.
    """
    if request.start_date > request.end_date:
        raise ValidationError("La fecha inicial no puede ser posterior a la final.")

    rows = store.find_transactions_with_category(
        user_id, start_date=request.start_date, end_date=request.end_date
    )

    if request.format == ExportFormat.json:
        document = render_json(rows)
    else:
        document = render_csv(rows)

    logger.info(
        "report_exported",
        user_id=str(user_id),
        format=request.format.value,
        rows=len(rows),
        start_date=request.start_date.isoformat(),
        end_date=request.end_date.isoformat(),
    )
    return document
