# app/modules/statistics/service.py
"""
Estadísticas de ventas e inventario

Las funciones de agregación son puras: reciben ventas y productos ya
cargados (objetos con los atributos de los modelos) y no guardan estado.
El inventario siempre es una foto actual, sin importar el período.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Sequence
from zoneinfo import ZoneInfo
from sqlalchemy.orm import Session

from app.config.settings import ProfitCostBasis, settings
from app.modules.catalog.repository import CatalogRepository
from app.modules.sales.repository import SalesRepository
from app.shared.clock import as_utc, local_timezone, to_local, utc_now
from app.shared.pricing import round_money, to_decimal
from .date_range import DateRangeKey, resolve_date_range
from .schemas import DailySales, Metrics, PaymentMethodStats, StatisticsResponse, TopProduct

DEFAULT_PAYMENT_METHOD = "cash"

ZERO = Decimal("0")


def _money(value: Decimal) -> float:
    return float(round_money(value))


def compute_metrics(
    sales: Sequence[Any],
    products: Sequence[Any],
    low_stock_threshold: int = 5,
    cost_basis: ProfitCostBasis = ProfitCostBasis.current
) -> Metrics:
    """
    Ganancia: (precio unitario - precio de compra) * cantidad por item.
    Con cost_basis=current se usa el precio de compra actual del catálogo y se
    ignoran items cuyo producto ya no existe o no tiene precio de compra.
    Con historical se usa el costo capturado en la venta si es mayor a cero;
    si no, se recurre al catálogo actual con las mismas reglas.
    """
    products_by_id = {product.id: product for product in products}

    total_sales = len(sales)
    total_revenue = sum((to_decimal(sale.total) for sale in sales), ZERO)
    average_ticket = total_revenue / total_sales if total_sales else ZERO

    total_profit = ZERO
    for sale in sales:
        for item in sale.items or []:
            buy_price = None
            if cost_basis == ProfitCostBasis.historical and item.unit_cost:
                buy_price = item.unit_cost
            else:
                product = products_by_id.get(item.product_id)
                if product is not None and product.buy_price:
                    buy_price = product.buy_price

            if buy_price is None:
                continue
            total_profit += (to_decimal(item.unit_price) - to_decimal(buy_price)) * item.quantity

    low_stock = [p for p in products if (p.stock or 0) <= low_stock_threshold]
    total_assets = sum((to_decimal(p.sell_price) * (p.stock or 0) for p in products), ZERO)
    total_invested = sum((to_decimal(p.buy_price) * (p.stock or 0) for p in products), ZERO)

    return Metrics(
        total_sales=total_sales,
        total_revenue=_money(total_revenue),
        total_profit=_money(total_profit),
        average_ticket=_money(average_ticket),
        total_products=len(products),
        low_stock_products=len(low_stock),
        total_assets=_money(total_assets),
        total_invested=_money(total_invested)
    )


def sales_by_day(sales: Iterable[Any], tz: Optional[ZoneInfo] = None) -> List[DailySales]:
    """Ventas agrupadas por fecha local, de la más antigua a la más reciente"""
    days: Dict[date, Dict[str, Any]] = {}

    for sale in sales:
        day = to_local(sale.created_at, tz).date()
        bucket = days.setdefault(day, {"sales_count": 0, "revenue": ZERO})
        bucket["sales_count"] += 1
        bucket["revenue"] += to_decimal(sale.total)

    return [
        DailySales(date=day, sales_count=data["sales_count"], revenue=_money(data["revenue"]))
        for day, data in sorted(days.items())
    ]


def top_products(sales: Iterable[Any], limit: int = 5) -> List[TopProduct]:
    """Productos más vendidos por cantidad"""
    totals: Dict[int, Dict[str, Any]] = {}

    for sale in sales:
        for item in sale.items or []:
            entry = totals.setdefault(item.product_id, {"name": item.name, "quantity": 0, "revenue": ZERO})
            entry["quantity"] += item.quantity
            entry["revenue"] += to_decimal(item.subtotal)

    ranked = sorted(totals.items(), key=lambda pair: pair[1]["quantity"], reverse=True)
    return [
        TopProduct(product_id=product_id, name=data["name"], quantity=data["quantity"], revenue=_money(data["revenue"]))
        for product_id, data in ranked[:limit]
    ]


def payment_method_breakdown(sales: Iterable[Any]) -> List[PaymentMethodStats]:
    """Cantidad y recaudación por medio de pago, el más usado primero"""
    methods: Dict[str, Dict[str, Any]] = {}

    for sale in sales:
        method = sale.payment_method or DEFAULT_PAYMENT_METHOD
        entry = methods.setdefault(method, {"count": 0, "revenue": ZERO})
        entry["count"] += 1
        entry["revenue"] += to_decimal(sale.total)

    ranked = sorted(methods.items(), key=lambda pair: pair[1]["count"], reverse=True)
    return [
        PaymentMethodStats(method=method, count=data["count"], revenue=_money(data["revenue"]))
        for method, data in ranked
    ]


class StatisticsService:
    """
    Reportes del panel de estadísticas
    """

    def __init__(self, db: Session):
        self.db = db
        self.sales = SalesRepository(db)
        self.catalog = CatalogRepository(db)

    async def get_report(
        self,
        range_key: DateRangeKey,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        now: Optional[datetime] = None
    ) -> StatisticsResponse:
        tz = local_timezone()
        now = (now or utc_now()).astimezone(tz)

        date_range = resolve_date_range(range_key, now, start_date, end_date)
        if date_range is None:
            return StatisticsResponse(success=True, range=range_key, has_range=False)

        sales = self.sales.query_sales(as_utc(date_range.start), as_utc(date_range.end))
        products = self.catalog.list_products()

        return StatisticsResponse(
            success=True,
            range=range_key,
            has_range=True,
            start=date_range.start,
            end=date_range.end,
            metrics=compute_metrics(
                sales,
                products,
                low_stock_threshold=settings.low_stock_threshold,
                cost_basis=settings.profit_cost_basis
            ),
            sales_by_day=sales_by_day(sales, tz),
            top_products=top_products(sales, settings.top_products_limit),
            payment_methods=payment_method_breakdown(sales)
        )
