from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import (
    CheckoutInProgressError, NotFoundError, PersistenceError, StockConflictError, ValidationError
)
from app.modules.sales.cart import CartSession, CheckoutState
from app.modules.sales.schemas import CartDetailsRequest, DiscountType, PaymentMethodType
from app.modules.sales.service import EMPTY_CART, ZERO_TOTAL, SalesService
from app.shared.database.models import Product, Sale


async def fill_cart(service, session, product_id, quantity):
    for _ in range(quantity):
        await service.add_to_cart(session, product_id)


async def test_checkout_with_percentage_discount(db_session, make_product, seller):
    product = make_product(sell_price=500, buy_price=300, stock=10)
    service = SalesService(db_session)
    session = CartSession(seller_id=seller.id)

    await fill_cart(service, session, product.id, 2)
    await service.update_cart_details(session, CartDetailsRequest(
        customer_name="  Lucía ",
        discount_value=10,
        discount_type=DiscountType.percentage,
        payment_method=PaymentMethodType.transfer
    ))

    response = await service.checkout(session, seller)

    assert response.success
    assert response.message == f"Venta procesada exitosamente. ID: {response.sale_id}"
    assert response.sale.subtotal == 1000.0
    assert response.sale.discount_amount == 100.0
    assert response.sale.total == 900.0
    assert response.sale.customer_name == "Lucía"
    assert response.sale.payment_method == PaymentMethodType.transfer
    assert response.sale.seller_id == seller.id
    assert [(i.product_id, i.quantity, i.unit_price) for i in response.sale.items] == [(product.id, 2, 500.0)]

    db_session.expire_all()
    stored = db_session.get(Product, product.id)
    assert stored.stock == 8
    assert stored.last_sold_at is not None

    sale = db_session.get(Sale, response.sale_id)
    assert sale.items[0].unit_cost == Decimal("300.00")

    assert session.cart.is_empty()
    assert session.state == CheckoutState.completed


async def test_sale_total_matches_subtotal_minus_discount(db_session, make_product, seller):
    product = make_product(sell_price=333.33, buy_price=100, stock=10)
    service = SalesService(db_session)
    session = CartSession(seller_id=seller.id)

    await fill_cart(service, session, product.id, 3)
    await service.update_cart_details(session, CartDetailsRequest(discount_value=7, discount_type=DiscountType.percentage))

    sale = (await service.checkout(session, seller)).sale

    assert Decimal(str(sale.total)) == Decimal(str(sale.subtotal)) - Decimal(str(sale.discount_amount))


async def test_checkout_empty_cart_does_not_touch_database(seller):
    db = MagicMock()
    service = SalesService(db)
    session = CartSession(seller_id=seller.id)

    with pytest.raises(ValidationError) as exc_info:
        await service.checkout(session, seller)

    assert exc_info.value.message == EMPTY_CART
    db.add.assert_not_called()
    db.execute.assert_not_called()
    db.commit.assert_not_called()
    assert session.state == CheckoutState.idle


async def test_checkout_zero_total_rejected(db_session, make_product, seller):
    product = make_product(sell_price=500, stock=3)
    service = SalesService(db_session)
    session = CartSession(seller_id=seller.id)

    await service.add_to_cart(session, product.id)
    await service.update_cart_details(session, CartDetailsRequest(discount_value=100))

    with pytest.raises(ValidationError) as exc_info:
        await service.checkout(session, seller)

    assert exc_info.value.message == ZERO_TOTAL
    assert db_session.query(Sale).count() == 0
    assert not session.cart.is_empty()


async def test_concurrent_checkouts_against_stale_stock(db_session, make_product, seller, other_seller):
    product = make_product(stock=5)
    service = SalesService(db_session)
    first = CartSession(seller_id=seller.id)
    second = CartSession(seller_id=other_seller.id)

    # Ambos carritos validan contra el mismo stock de 5
    await fill_cart(service, first, product.id, 3)
    await fill_cart(service, second, product.id, 3)

    await service.checkout(first, seller)

    with pytest.raises(StockConflictError):
        await service.checkout(second, other_seller)

    db_session.expire_all()
    assert db_session.get(Product, product.id).stock == 2
    assert db_session.query(Sale).count() == 1

    assert second.state == CheckoutState.idle
    assert second.cart.get_item(product.id).quantity == 3


async def test_stock_conflict_rolls_back_every_line(db_session, make_product, seller):
    remera = make_product(code="REM001", stock=5)
    jean = make_product(code="JEA001", name="Jean", sell_price=900, buy_price=600, stock=2)
    service = SalesService(db_session)
    session = CartSession(seller_id=seller.id)

    await fill_cart(service, session, remera.id, 2)
    await fill_cart(service, session, jean.id, 2)

    # Alguien vende un jean mientras tanto
    db_session.query(Product).filter(Product.id == jean.id).update({"stock": 1})
    db_session.commit()

    with pytest.raises(StockConflictError):
        await service.checkout(session, seller)

    db_session.expire_all()
    assert db_session.get(Product, remera.id).stock == 5
    assert db_session.get(Product, jean.id).stock == 1
    assert db_session.query(Sale).count() == 0


async def test_persistence_failure_keeps_cart(db_session, make_product, seller, monkeypatch):
    product = make_product(stock=5)
    service = SalesService(db_session)
    session = CartSession(seller_id=seller.id)
    await fill_cart(service, session, product.id, 2)

    def fail(*args, **kwargs):
        raise SQLAlchemyError("database is locked")

    monkeypatch.setattr(service.repository, "create_sale", fail)

    with pytest.raises(PersistenceError):
        await service.checkout(session, seller)

    assert session.state == CheckoutState.idle
    assert session.cart.get_item(product.id).quantity == 2

    db_session.expire_all()
    assert db_session.get(Product, product.id).stock == 5


async def test_cart_locked_while_processing(db_session, make_product, seller):
    product = make_product(stock=5)
    service = SalesService(db_session)
    session = CartSession(seller_id=seller.id)
    session.state = CheckoutState.persisting

    with pytest.raises(CheckoutInProgressError):
        await service.add_to_cart(session, product.id)

    with pytest.raises(CheckoutInProgressError):
        await service.checkout(session, seller)


async def test_add_to_cart_rejects_missing_or_exhausted_product(db_session, make_product, seller):
    product = make_product(stock=1)
    service = SalesService(db_session)
    session = CartSession(seller_id=seller.id)

    with pytest.raises(NotFoundError):
        await service.add_to_cart(session, 999)

    await service.add_to_cart(session, product.id)
    with pytest.raises(ValidationError):
        await service.add_to_cart(session, product.id)


async def test_list_sales_newest_first(db_session, make_product, seller):
    product = make_product(stock=10)
    service = SalesService(db_session)
    session = CartSession(seller_id=seller.id)

    ids = []
    for _ in range(2):
        await service.add_to_cart(session, product.id)
        ids.append((await service.checkout(session, seller)).sale_id)

    listing = await service.list_sales()

    assert listing.count == 2
    assert listing.total_amount == 1000.0
    assert [sale.id for sale in listing.sales] == list(reversed(ids))
