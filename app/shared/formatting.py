# app/shared/formatting.py
"""Formateo de montos y fechas para comprobantes (formato argentino)"""
from datetime import datetime
from typing import Optional

from .pricing import Number, round_money


def format_price(price: Optional[Number]) -> str:
    """
    Formatear un precio en pesos argentinos

    Ejemplo: format_price(1500) -> "$1.500,00"
    """
    if price is None:
        return "$0,00"

    amount = round_money(price)
    sign = "-" if amount < 0 else ""
    integer_part, decimal_part = f"{abs(amount):,.2f}".split(".")
    return f"{sign}${integer_part.replace(',', '.')},{decimal_part}"


def format_datetime(value: Optional[datetime]) -> str:
    """Ejemplo: format_datetime(datetime(2024, 8, 15, 9, 5)) -> "15/08/2024 09:05" """
    if value is None:
        return ""
    return value.strftime("%d/%m/%Y %H:%M")
