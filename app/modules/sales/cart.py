# app/modules/sales/cart.py
"""
Carrito de compras en memoria

Un carrito por vendedor autenticado. Las operaciones de carrito nunca lanzan
excepciones por reglas de stock: devuelven un CartResult con el mensaje a
mostrar. No toca la base de datos.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional

from app.shared.pricing import Number, apply_discount, round_money, to_decimal
from .schemas import DiscountType, PaymentMethodType

NO_STOCK = "Producto sin stock disponible"
INSUFFICIENT_STOCK = "No hay suficiente stock disponible"
QUANTITY_EXCEEDS_STOCK = "Cantidad excede el stock disponible"
NOT_IN_CART = "El producto no está en el carrito"


@dataclass
class CartLineItem:
    product_id: int
    name: str
    code: str
    unit_price: Decimal
    quantity: int = 1

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass
class CartResult:
    success: bool
    message: Optional[str] = None


class CartTotals(NamedTuple):
    subtotal: float
    discount_amount: float
    total: float


class Cart:
    """Líneas del carrito (una por producto) y campos del formulario de venta"""

    def __init__(self):
        self._items: Dict[int, CartLineItem] = {}
        self.customer_name: str = ""
        self.discount_value: Decimal = Decimal("0")
        self.discount_type: DiscountType = DiscountType.percentage
        self.payment_method: PaymentMethodType = PaymentMethodType.cash
        self.is_exchange: bool = False

    @property
    def items(self) -> List[CartLineItem]:
        return list(self._items.values())

    def is_empty(self) -> bool:
        return not self._items

    def get_item(self, product_id: int) -> Optional[CartLineItem]:
        return self._items.get(product_id)

    def add_item(self, product: Any, catalog_stock: Optional[int] = None) -> CartResult:
        """Agregar una unidad del producto; catalog_stock por defecto es product.stock"""
        stock = product.stock if catalog_stock is None else catalog_stock
        if (stock or 0) <= 0:
            return CartResult(False, NO_STOCK)

        existing = self._items.get(product.id)
        if existing:
            if existing.quantity + 1 > stock:
                return CartResult(False, INSUFFICIENT_STOCK)
            existing.quantity += 1
            return CartResult(True)

        self._items[product.id] = CartLineItem(
            product_id=product.id,
            name=product.name,
            code=product.code,
            unit_price=round_money(product.sell_price),
            quantity=1
        )
        return CartResult(True)

    def update_quantity(self, product_id: int, new_quantity: int, catalog_stock: int) -> CartResult:
        if new_quantity <= 0:
            self.remove_item(product_id)
            return CartResult(True)

        item = self._items.get(product_id)
        if item is None:
            return CartResult(False, NOT_IN_CART)

        if new_quantity > catalog_stock:
            return CartResult(False, QUANTITY_EXCEEDS_STOCK)

        item.quantity = new_quantity
        return CartResult(True)

    def remove_item(self, product_id: int) -> None:
        self._items.pop(product_id, None)

    def clear(self) -> None:
        """Vaciar el carrito y resetear cliente, descuento y cambio"""
        self._items.clear()
        self.customer_name = ""
        self.discount_value = Decimal("0")
        self.is_exchange = False

    def set_discount(self, value: Number, discount_type: DiscountType) -> None:
        self.discount_value = to_decimal(value)
        self.discount_type = discount_type

    def compute_subtotal(self) -> Decimal:
        return sum((item.subtotal for item in self._items.values()), Decimal("0"))

    def compute_totals(self) -> CartTotals:
        subtotal = self.compute_subtotal()
        discount = apply_discount(
            subtotal,
            self.discount_value,
            self.discount_type == DiscountType.percentage
        )
        return CartTotals(
            subtotal=float(round_money(subtotal)),
            discount_amount=discount.discount_amount,
            total=discount.final_total
        )


class CheckoutState(str, Enum):
    idle = "idle"
    validating = "validating"
    persisting = "persisting"
    updating_stock = "updating_stock"
    completed = "completed"


@dataclass
class CartSession:
    seller_id: str
    cart: Cart = field(default_factory=Cart)
    state: CheckoutState = CheckoutState.idle

    @property
    def processing(self) -> bool:
        return self.state not in (CheckoutState.idle, CheckoutState.completed)


class CartRegistry:
    """Carritos activos por vendedor (memoria del proceso)"""

    def __init__(self):
        self._sessions: Dict[str, CartSession] = {}

    def get(self, seller_id: str) -> CartSession:
        session = self._sessions.get(seller_id)
        if session is None:
            session = CartSession(seller_id=seller_id)
            self._sessions[seller_id] = session
        return session

    def __len__(self) -> int:
        return len(self._sessions)


cart_registry = CartRegistry()


def get_cart_registry() -> CartRegistry:
    """Dependency para FastAPI"""
    return cart_registry
