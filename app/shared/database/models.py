from sqlalchemy import Column, Integer, String, Boolean, DateTime, Date, Text, ForeignKey, Numeric, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.config.database import Base

class TimestampMixin:
    """Mixin para timestamps automáticos"""
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

class AuditMixin:
    """Usuario que creó / modificó el registro (id del proveedor de identidad)"""
    created_by = Column(String(128))
    updated_by = Column(String(128))

# ===== CATÁLOGO =====

class Supplier(Base, TimestampMixin, AuditMixin):
    """Modelo de Proveedor"""
    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    whatsapp_numbers = Column(JSON, nullable=False, default=list)
    address = Column(String(255))
    gallery = Column(String(255))
    local_number = Column(String(50))
    area = Column(String(255), nullable=False)
    tags = Column(JSON, nullable=False, default=list)
    website = Column(String(255))
    social_media = Column(JSON, nullable=False, default=dict)
    cuit = Column(String(20))
    quality_rating = Column(Integer, default=5, nullable=False)
    notes = Column(Text)

    # Relationships
    products = relationship("Product", back_populates="supplier")

class Product(Base, TimestampMixin, AuditMixin):
    """Modelo de Producto"""
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    code = Column(String(100), nullable=False, unique=True, index=True)
    description = Column(Text)
    category = Column(String(100), nullable=False, index=True)
    tags = Column(JSON, nullable=False, default=list)
    sizes = Column(JSON, nullable=False, default=list)
    images = Column(JSON, nullable=False, default=list)
    buy_price = Column(Numeric(12, 2), nullable=False, default=0)
    sell_price = Column(Numeric(12, 2), nullable=False, default=0)
    profit_percentage = Column(Numeric(10, 2), nullable=False, default=0)
    stock = Column(Integer, nullable=False, default=0)
    supplier_id = Column(Integer, ForeignKey("suppliers.id", ondelete="SET NULL"), nullable=True)
    last_sold_at = Column(DateTime(timezone=True))

    # Relationships
    supplier = relationship("Supplier", back_populates="products")

# ===== VENTAS =====

class Sale(Base):
    """Modelo de Venta - inmutable una vez registrada"""
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)
    subtotal = Column(Numeric(12, 2), nullable=False)
    discount_amount = Column(Numeric(12, 2), nullable=False, default=0)
    discount_type = Column(String(20), nullable=False, default="percentage")
    total = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(String(20), nullable=False, default="cash")
    customer_name = Column(String(255))
    is_exchange = Column(Boolean, nullable=False, default=False)
    seller_id = Column(String(128), nullable=False, index=True)
    seller_name = Column(String(255), nullable=False)
    status = Column(String(20), nullable=False, default="completed")
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)

    # Relationships
    items = relationship(
        "SaleItem",
        back_populates="sale",
        order_by="SaleItem.position",
        cascade="all, delete-orphan"
    )

class SaleItem(Base):
    """Item de venta: snapshot del producto al momento de la venta"""
    __tablename__ = "sale_items"

    id = Column(Integer, primary_key=True, index=True)
    sale_id = Column(Integer, ForeignKey("sales.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    # Sin FK: la venta conserva su historial aunque el producto se elimine
    product_id = Column(Integer, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    code = Column(String(100), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(12, 2), nullable=False)
    subtotal = Column(Numeric(12, 2), nullable=False)
    unit_cost = Column(Numeric(12, 2))

    # Relationships
    sale = relationship("Sale", back_populates="items")

# ===== FACTURAS =====

class Invoice(Base, TimestampMixin, AuditMixin):
    """Factura de proveedor archivada (el archivo vive en el almacenamiento externo)"""
    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True, index=True)
    invoice_number = Column(String(100), nullable=False, index=True)
    supplier_name = Column(String(255), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    date = Column(Date, nullable=False, index=True)
    type = Column(String(20), nullable=False, default="factura")
    description = Column(Text)
    file = Column(JSON)
