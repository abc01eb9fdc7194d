# app/modules/sales/receipt.py
"""Comprobante de venta en texto plano para impresoras de tickets"""
from typing import List, Optional
from zoneinfo import ZoneInfo

from app.shared.clock import to_local
from app.shared.database.models import Sale
from app.shared.formatting import format_datetime, format_price

RECEIPT_WIDTH = 40

PAYMENT_LABELS = {
    "cash": "EFECTIVO",
    "transfer": "TRANSFERENCIA",
    "debit": "DÉBITO",
    "credit": "CRÉDITO",
}


def _row(label: str, value: str, width: int = RECEIPT_WIDTH) -> str:
    space = max(width - len(label) - len(value), 1)
    return f"{label}{' ' * space}{value}"


def render_receipt(
    sale: Sale,
    store_name: str,
    tz: Optional[ZoneInfo] = None,
    footer: Optional[str] = None
) -> str:
    """
    Proyección de solo lectura de una venta ya registrada.
    La misma venta produce siempre el mismo texto.
    """
    separator = "-" * RECEIPT_WIDTH
    lines: List[str] = [
        store_name.upper().center(RECEIPT_WIDTH).rstrip(),
        "Recibo de Venta".center(RECEIPT_WIDTH).rstrip(),
        f"ID: {sale.id}",
        format_datetime(to_local(sale.created_at, tz)),
    ]

    if sale.customer_name:
        lines.append(f"Cliente: {sale.customer_name}")
    if sale.is_exchange:
        lines.append("CAMBIO")

    lines.append(separator)
    for item in sale.items:
        lines.append(_row(f"{item.name} x{item.quantity}", format_price(item.subtotal)))
    lines.append(separator)

    lines.append(_row("Subtotal:", format_price(sale.subtotal)))
    if sale.discount_amount and sale.discount_amount > 0:
        lines.append(_row("Descuento:", f"-{format_price(sale.discount_amount)}"))
    lines.append(_row("TOTAL:", format_price(sale.total)))
    lines.append(_row("Pago:", PAYMENT_LABELS.get(sale.payment_method, sale.payment_method.upper())))

    if footer:
        lines.append(separator)
        lines.append(footer.center(RECEIPT_WIDTH).rstrip())

    return "\n".join(lines) + "\n"
