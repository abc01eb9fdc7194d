# app/shared/pricing.py
"""
Motor de precios y descuentos

Funciones puras sin acceso a datos. Los montos se calculan con Decimal y se
redondean a 2 decimales (mitad hacia arriba); las funciones públicas
devuelven float para que los esquemas de respuesta los serialicen directo.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import NamedTuple, Optional, Union

Number = Union[int, float, Decimal]

CENT = Decimal("0.01")


class DiscountResult(NamedTuple):
    discount_amount: float
    final_total: float


def to_decimal(value: Optional[Number]) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value: Optional[Number]) -> Decimal:
    """Redondear a 2 decimales"""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def compute_profit_percentage(buy_price: Optional[Number], sell_price: Optional[Number]) -> float:
    """
    Porcentaje de ganancia entre precio de compra y venta

    Ejemplo: compute_profit_percentage(100, 150) -> 50.0
    """
    buy = to_decimal(buy_price)
    sell = to_decimal(sell_price)
    if buy <= 0 or sell <= 0:
        return 0.0

    percentage = (sell - buy) / buy * 100
    return float(round_money(percentage))


def apply_discount(total: Optional[Number], discount_value: Optional[Number], is_percentage: bool = True) -> DiscountResult:
    """
    Aplicar un descuento porcentual o de monto fijo sobre un total

    El descuento nunca supera al total. El total final se obtiene restando el
    descuento ya redondeado, así total == subtotal - descuento se cumple exacto.
    """
    amount = to_decimal(total)
    value = to_decimal(discount_value)

    if amount <= 0:
        return DiscountResult(0.0, 0.0)
    if value <= 0:
        return DiscountResult(0.0, float(round_money(amount)))

    if is_percentage:
        discount = amount * value / 100
    else:
        discount = value

    discount = round_money(min(discount, amount))
    final_total = round_money(amount) - discount
    return DiscountResult(float(discount), float(final_total))
