from datetime import MAXYEAR, MINYEAR, date
from typing import List, Optional, Tuple

from pocketbook.core.errors import ValidationError


def validate_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise ValidationError("El mes debe estar entre 1 y 12.")


def in_calendar_range(year: int) -> bool:
    return MINYEAR <= year <= MAXYEAR


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Desplaza (year, month) `delta` meses; cruza los límites de año."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_bounds(month: int, year: int) -> Tuple[date, Optional[date]]:
    """
    Intervalo semiabierto [primer día del mes, primer día del mes siguiente).

    El límite superior es None sólo para diciembre de MAXYEAR, que no tiene
    mes siguiente representable.
    """
    validate_month(month)
    if not in_calendar_range(year):
        raise ValidationError(f"Año fuera del calendario soportado: {year}")
    next_year, next_month = shift_month(year, month, 1)
    end = date(next_year, next_month, 1) if in_calendar_range(next_year) else None
    return date(year, month, 1), end


def trailing_months(month: int, year: int, count: int) -> List[Tuple[int, int]]:
    """Los `count` meses que terminan en (year, month), inclusive, en orden ascendente."""
    validate_month(month)
    return [shift_month(year, month, -offset) for offset in range(count - 1, -1, -1)]
