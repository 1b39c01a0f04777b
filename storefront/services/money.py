# storefront/services/money.py
"""
Conversión y formato de importes.

Todo el cliente trabaja con enteros en unidades menores (kobo, céntimos).
Este módulo es el único punto donde se convierte desde/hacia unidades
mayores, y solo lo usan los servicios.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

MINOR_UNITS_PER_MAJOR = 100

CURRENCY_SYMBOLS = {
    "ngn": "₦",
    "usd": "$",
    "eur": "€",
    "gbp": "£",
}


def to_minor_units(amount: Union[Decimal, int, float, str]) -> int:
    """
    Convierte un importe en unidades mayores a unidades menores, redondeando
    al entero más cercano (medio hacia arriba).

    >>> to_minor_units(Decimal("25.50"))
    2550
    """
    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        raise ValueError(f"Importe no válido: {amount!r}")
    if value < 0:
        raise ValueError("El importe no puede ser negativo")
    minor = (value * MINOR_UNITS_PER_MAJOR).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(minor)


def to_major_units(amount: int) -> Decimal:
    """Convierte unidades menores a un Decimal con dos decimales."""
    return (Decimal(amount) / MINOR_UNITS_PER_MAJOR).quantize(Decimal("0.01"))


def format_money(amount: int, currency: str = "ngn") -> str:
    """
    Formatea un importe en unidades menores para mostrarlo.

    >>> format_money(150000, "ngn")
    '₦1,500.00'
    """
    symbol = CURRENCY_SYMBOLS.get(currency.lower())
    major = to_major_units(amount)
    if symbol:
        return f"{symbol}{major:,.2f}"
    return f"{currency.upper()} {major:,.2f}"
