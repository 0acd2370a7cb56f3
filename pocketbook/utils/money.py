"""
Helpers de dinero.

Todos los montos viajan como `Decimal` desde la API hasta la exportación.
Nunca se usa `float`: las sumas deben conservar exactamente los centavos
guardados en la columna NUMERIC(15, 2).
"""

from decimal import Decimal
from typing import Annotated

from pydantic import Field

# Totales y saldos: pueden ser cero o negativos
Money = Decimal

# Monto de una transacción tal como llega a la API
Amount = Annotated[Money, Field(gt=0, max_digits=15, decimal_places=2)]

ZERO = Money("0")


def format_amount(value: Money) -> str:
    """
    Decimal plano, sin símbolo ni separador de miles ni exponente.

    Los ceros finales de la parte fraccionaria se eliminan:
    150000.00 -> "150000", 200000.50 -> "200000.5", 123.45 -> "123.45".
    """
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("", "-0"):
        return "0"
    return text
