"""
Fixtures compartidos

Las variables de entorno se definen antes de importar la aplicación porque
app.config.settings lee la configuración al importarse.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("TIMEZONE", "America/Argentina/Buenos_Aires")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.config.database import Base, SessionLocal, engine
from app.core.auth.permissions import Role
from app.core.auth.schemas import CurrentUser
from app.core.auth.security import create_access_token
from app.main import app
from app.modules.sales.cart import cart_registry
from app.shared.database.models import Product


@pytest.fixture(autouse=True)
def database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def reset_carts():
    cart_registry._sessions.clear()
    yield
    cart_registry._sessions.clear()


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


def auth_headers(user_id: str, role: Role, name: str = None, active: bool = True):
    token = create_access_token(user_id, name or user_id, role.value, active=active)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    return auth_headers("admin-1", Role.administrador, "Admin")


@pytest.fixture
def seller_headers():
    return auth_headers("seller-1", Role.vendedor, "Vendedora")


@pytest.fixture
def seller():
    return CurrentUser(id="seller-1", name="Vendedora", role=Role.vendedor)


@pytest.fixture
def other_seller():
    return CurrentUser(id="seller-2", name="Vendedor 2", role=Role.vendedor)


@pytest.fixture
def make_product(db_session):
    def _make(code="REM001", name="Remera lisa", buy_price=300, sell_price=500, stock=10, category="Remeras"):
        product = Product(
            name=name,
            code=code,
            category=category,
            buy_price=Decimal(str(buy_price)),
            sell_price=Decimal(str(sell_price)),
            profit_percentage=Decimal("0"),
            stock=stock,
            tags=[],
            sizes=[],
            images=[]
        )
        db_session.add(product)
        db_session.commit()
        db_session.refresh(product)
        return product

    return _make


@pytest.fixture
def make_headers():
    return auth_headers
