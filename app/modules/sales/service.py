# app/modules/sales/service.py
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from app.config.settings import settings
from app.core.auth.schemas import CurrentUser
from app.core.exceptions import (
    CheckoutInProgressError, NotFoundError, PersistenceError, POSError,
    StockConflictError, ValidationError
)
from app.modules.catalog.repository import CatalogRepository
from app.shared.clock import local_timezone, local_to_utc, utc_now
from app.shared.database.models import Product, Sale
from app.shared.pricing import round_money
from .cart import Cart, CartSession, CartTotals, CheckoutState
from .receipt import render_receipt
from .repository import SalesRepository
from .schemas import (
    CartDetailsRequest, CartItemResponse, CartResponse, CheckoutResponse,
    SaleResponse, SaleStatus, SalesListResponse
)

logger = logging.getLogger(__name__)

EMPTY_CART = "El carrito está vacío"
ZERO_TOTAL = "El total debe ser mayor a cero"

class SalesService:
    """
    Servicio principal para el carrito y el registro de ventas
    """

    def __init__(self, db: Session):
        self.db = db
        self.repository = SalesRepository(db)
        self.catalog = CatalogRepository(db)

    # ==================== CARRITO ====================

    async def get_cart(self, session: CartSession) -> CartResponse:
        return self._cart_response(session)

    async def add_to_cart(self, session: CartSession, product_id: int) -> CartResponse:
        """
        Agregar una unidad validando contra el stock actual del catálogo
        """
        self._ensure_not_processing(session)
        product = self._get_product_or_404(product_id)

        result = session.cart.add_item(product, product.stock)
        if not result.success:
            raise ValidationError(result.message)

        return self._cart_response(session)

    async def update_cart_item(self, session: CartSession, product_id: int, quantity: int) -> CartResponse:
        self._ensure_not_processing(session)

        stock = 0
        if quantity > 0:
            stock = self._get_product_or_404(product_id).stock

        result = session.cart.update_quantity(product_id, quantity, stock)
        if not result.success:
            raise ValidationError(result.message)

        return self._cart_response(session)

    async def remove_from_cart(self, session: CartSession, product_id: int) -> CartResponse:
        self._ensure_not_processing(session)
        session.cart.remove_item(product_id)
        return self._cart_response(session)

    async def update_cart_details(self, session: CartSession, details: CartDetailsRequest) -> CartResponse:
        """
        Datos del formulario de venta: cliente, descuento, medio de pago y cambio
        """
        self._ensure_not_processing(session)
        cart = session.cart
        cart.customer_name = details.customer_name or ""
        cart.set_discount(details.discount_value, details.discount_type)
        cart.payment_method = details.payment_method
        cart.is_exchange = details.is_exchange

        return self._cart_response(session)

    async def clear_cart(self, session: CartSession) -> CartResponse:
        self._ensure_not_processing(session)
        session.cart.clear()
        return self._cart_response(session)

    # ==================== CHECKOUT ====================

    async def checkout(self, session: CartSession, current_user: CurrentUser) -> CheckoutResponse:
        """
        Registrar la venta del carrito.

        La venta y el descuento de stock de todos los items se confirman en
        una única transacción. Cada descuento revalida el stock en la misma
        sentencia que lo modifica; si algún item no alcanza, se revierte todo
        y el carrito queda intacto para reintentar.
        """
        self._ensure_not_processing(session)
        cart = session.cart

        try:
            self._set_state(session, CheckoutState.validating)
            totals = self._validate_cart(cart)

            self._set_state(session, CheckoutState.persisting)
            timestamp = utc_now()
            sale = self._persist_sale(cart, totals, current_user, timestamp)

            self._set_state(session, CheckoutState.updating_stock)
            self._decrement_stock(cart, timestamp)

            self.db.commit()

        except POSError:
            self.db.rollback()
            self._set_state(session, CheckoutState.idle)
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            self._set_state(session, CheckoutState.idle)
            logger.error(f"Error registrando venta de {current_user.id}: {e}")
            raise PersistenceError("Error al procesar la venta. Intenta nuevamente.") from e

        self._set_state(session, CheckoutState.completed)
        cart.clear()

        sale = self.repository.get_sale_by_id(sale.id)
        logger.info(f"Venta {sale.id} registrada por {current_user.id}: total {sale.total}")

        return CheckoutResponse(
            success=True,
            sale_id=sale.id,
            message=f"Venta procesada exitosamente. ID: {sale.id}",
            sale=SaleResponse.model_validate(sale)
        )

    def _validate_cart(self, cart: Cart) -> CartTotals:
        if cart.is_empty():
            raise ValidationError(EMPTY_CART)

        totals = cart.compute_totals()
        if totals.total <= 0:
            raise ValidationError(ZERO_TOTAL)

        return totals

    def _persist_sale(
        self,
        cart: Cart,
        totals: CartTotals,
        current_user: CurrentUser,
        timestamp: datetime
    ) -> Sale:
        products = self.catalog.get_products_by_ids(item.product_id for item in cart.items)

        items: List[Dict[str, Any]] = []
        for item in cart.items:
            product = products.get(item.product_id)
            items.append({
                "product_id": item.product_id,
                "name": item.name,
                "code": item.code,
                "quantity": item.quantity,
                "unit_price": item.unit_price,
                "subtotal": round_money(item.subtotal),
                "unit_cost": product.buy_price if product is not None else None
            })

        sale_data = {
            "subtotal": totals.subtotal,
            "discount_amount": totals.discount_amount,
            "discount_type": cart.discount_type.value,
            "total": totals.total,
            "payment_method": cart.payment_method.value,
            "customer_name": cart.customer_name.strip() or None,
            "is_exchange": cart.is_exchange,
            "seller_id": current_user.id,
            "seller_name": current_user.name,
            "created_at": timestamp,
            "status": SaleStatus.completed.value
        }

        return self.repository.create_sale(sale_data, items)

    def _decrement_stock(self, cart: Cart, timestamp: datetime):
        for item in cart.items:
            updated = self.catalog.update_product_stock(
                item.product_id,
                -item.quantity,
                timestamp,
                mark_sold=True,
                commit=False
            )
            if not updated:
                logger.warning(f"Conflicto de stock en producto {item.product_id} ({item.code})")
                raise StockConflictError(
                    f"Stock insuficiente para {item.name}. El stock cambió, revise el carrito."
                )

    # ==================== CONSULTAS ====================

    async def list_sales(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> SalesListResponse:
        start_utc = local_to_utc(start) if start else None
        end_utc = local_to_utc(end) if end else None
        sales = self.repository.query_sales(start_utc, end_utc)

        return SalesListResponse(
            success=True,
            start=start_utc,
            end=end_utc,
            count=len(sales),
            total_amount=float(sum((round_money(sale.total) for sale in sales), round_money(0))),
            sales=[SaleResponse.model_validate(sale) for sale in sales]
        )

    async def get_sale(self, sale_id: int) -> SaleResponse:
        return SaleResponse.model_validate(self._get_sale_or_404(sale_id))

    async def get_receipt(self, sale_id: int) -> str:
        sale = self._get_sale_or_404(sale_id)
        return render_receipt(
            sale,
            store_name=settings.store_name,
            tz=local_timezone(),
            footer=settings.receipt_footer
        )

    # ==================== UTILIDADES ====================

    def _set_state(self, session: CartSession, state: CheckoutState):
        logger.debug(f"Checkout {session.seller_id}: {session.state.value} -> {state.value}")
        session.state = state

    def _ensure_not_processing(self, session: CartSession):
        if session.processing:
            raise CheckoutInProgressError()

    def _get_product_or_404(self, product_id: int) -> Product:
        product = self.catalog.get_product_by_id(product_id)
        if not product:
            raise NotFoundError(f"Producto {product_id} no encontrado")
        return product

    def _get_sale_or_404(self, sale_id: int) -> Sale:
        sale = self.repository.get_sale_by_id(sale_id)
        if not sale:
            raise NotFoundError(f"Venta {sale_id} no encontrada")
        return sale

    def _cart_response(self, session: CartSession) -> CartResponse:
        cart = session.cart
        totals = cart.compute_totals()

        return CartResponse(
            seller_id=session.seller_id,
            items=[
                CartItemResponse(
                    product_id=item.product_id,
                    name=item.name,
                    code=item.code,
                    unit_price=float(item.unit_price),
                    quantity=item.quantity,
                    subtotal=float(item.subtotal)
                )
                for item in cart.items
            ],
            items_count=sum(item.quantity for item in cart.items),
            customer_name=cart.customer_name,
            discount_value=float(cart.discount_value),
            discount_type=cart.discount_type,
            payment_method=cart.payment_method,
            is_exchange=cart.is_exchange,
            subtotal=totals.subtotal,
            discount_amount=totals.discount_amount,
            total=totals.total,
            processing=session.processing
        )
