from decimal import Decimal
from types import SimpleNamespace

from app.modules.sales.cart import (
    INSUFFICIENT_STOCK, NO_STOCK, NOT_IN_CART, QUANTITY_EXCEEDS_STOCK,
    Cart, CartRegistry, CartSession, CheckoutState
)
from app.modules.sales.schemas import DiscountType, PaymentMethodType


def product(product_id=1, stock=5, sell_price=500, name="Remera lisa", code="REM001"):
    return SimpleNamespace(id=product_id, name=name, code=code, sell_price=Decimal(str(sell_price)), stock=stock)


def test_add_item_creates_line_and_increments():
    cart = Cart()
    item = product()

    assert cart.add_item(item).success
    assert cart.add_item(item).success

    assert len(cart.items) == 1
    assert cart.get_item(1).quantity == 2
    assert cart.compute_totals().subtotal == 1000.0


def test_add_item_without_stock():
    cart = Cart()
    result = cart.add_item(product(stock=0))

    assert not result.success
    assert result.message == NO_STOCK
    assert cart.is_empty()


def test_add_item_beyond_stock():
    cart = Cart()
    item = product(stock=1)

    assert cart.add_item(item).success
    result = cart.add_item(item)

    assert not result.success
    assert result.message == INSUFFICIENT_STOCK
    assert cart.get_item(1).quantity == 1


def test_add_item_uses_explicit_catalog_stock():
    cart = Cart()
    result = cart.add_item(product(stock=10), catalog_stock=0)
    assert result.message == NO_STOCK


def test_update_quantity():
    cart = Cart()
    cart.add_item(product())

    assert cart.update_quantity(1, 4, catalog_stock=5).success
    assert cart.get_item(1).quantity == 4

    result = cart.update_quantity(1, 6, catalog_stock=5)
    assert not result.success
    assert result.message == QUANTITY_EXCEEDS_STOCK
    assert cart.get_item(1).quantity == 4


def test_update_quantity_zero_removes_line():
    cart = Cart()
    cart.add_item(product())

    assert cart.update_quantity(1, 0, catalog_stock=5).success
    assert cart.is_empty()


def test_update_quantity_missing_line():
    result = Cart().update_quantity(99, 2, catalog_stock=5)
    assert result.message == NOT_IN_CART


def test_totals_with_percentage_discount():
    cart = Cart()
    item = product(sell_price=500)
    cart.add_item(item)
    cart.add_item(item)
    cart.set_discount(10, DiscountType.percentage)

    totals = cart.compute_totals()

    assert totals.subtotal == 1000.0
    assert totals.discount_amount == 100.0
    assert totals.total == 900.0


def test_totals_with_fixed_discount_clamped():
    cart = Cart()
    cart.add_item(product(sell_price=500))
    cart.set_discount(800, DiscountType.fixed)

    totals = cart.compute_totals()

    assert totals.discount_amount == 500.0
    assert totals.total == 0.0


def test_clear_resets_form_but_keeps_payment_method():
    cart = Cart()
    cart.add_item(product())
    cart.customer_name = "Lucía"
    cart.is_exchange = True
    cart.payment_method = PaymentMethodType.debit
    cart.set_discount(15, DiscountType.fixed)

    cart.clear()

    assert cart.is_empty()
    assert cart.customer_name == ""
    assert cart.discount_value == 0
    assert not cart.is_exchange
    assert cart.payment_method == PaymentMethodType.debit


def test_session_processing_flag():
    session = CartSession(seller_id="seller-1")
    assert not session.processing

    for state in (CheckoutState.validating, CheckoutState.persisting, CheckoutState.updating_stock):
        session.state = state
        assert session.processing

    session.state = CheckoutState.completed
    assert not session.processing


def test_registry_one_cart_per_seller():
    registry = CartRegistry()

    first = registry.get("seller-1")
    assert registry.get("seller-1") is first
    assert registry.get("seller-2") is not first
    assert len(registry) == 2
