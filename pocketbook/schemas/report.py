from datetime import date
from enum import Enum
from pydantic import BaseModel


class ExportFormat(str, Enum):
    csv = "csv"
    json = "json"


class ExportRequest(BaseModel):
    start_date: date
    end_date: date
    format: ExportFormat = ExportFormat.csv
