# app/modules/catalog/repository.py
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import func, or_, update

from app.shared.database.models import Product, Supplier

class CatalogRepository:
    """
    Repositorio de productos y proveedores
    """

    def __init__(self, db: Session):
        self.db = db

    # ==================== PRODUCTOS ====================

    def list_products(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        max_stock: Optional[int] = None
    ) -> List[Product]:
        """
        Listar productos filtrando por nombre, código o categoría
        """
        query = self.db.query(Product)

        if search:
            term = f"%{search.strip().lower()}%"
            query = query.filter(or_(
                func.lower(Product.name).like(term),
                func.lower(Product.code).like(term),
                func.lower(Product.category).like(term)
            ))

        if category:
            query = query.filter(func.lower(Product.category) == category.strip().lower())

        if max_stock is not None:
            query = query.filter(Product.stock <= max_stock)

        return query.order_by(Product.name).all()

    def get_product_by_id(self, product_id: int) -> Optional[Product]:
        return self.db.query(Product).filter(Product.id == product_id).first()

    def get_product_by_code(self, code: str) -> Optional[Product]:
        return self.db.query(Product).filter(Product.code == code).first()

    def get_products_by_ids(self, product_ids: Iterable[int]) -> Dict[int, Product]:
        ids = list(set(product_ids))
        if not ids:
            return {}
        products = self.db.query(Product).filter(Product.id.in_(ids)).all()
        return {product.id: product for product in products}

    def create_product(self, data: Dict[str, Any], user_id: str) -> Product:
        product = Product(**data, created_by=user_id, updated_by=user_id)

        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)

        return product

    def update_product(self, product: Product, data: Dict[str, Any], user_id: str) -> Product:
        for key, value in data.items():
            setattr(product, key, value)
        product.updated_by = user_id

        self.db.commit()
        self.db.refresh(product)

        return product

    def delete_product(self, product: Product):
        self.db.delete(product)
        self.db.commit()

    def update_product_stock(
        self,
        product_id: int,
        delta: int,
        timestamp: datetime,
        mark_sold: bool = False,
        commit: bool = True
    ) -> bool:
        """
        Sumar delta al stock en una sola sentencia condicionada.

        El WHERE exige que el stock resultante no sea negativo, de modo que
        leer, validar y descontar ocurren juntos en la base de datos.
        Devuelve False si el producto no existe o no alcanza el stock.
        """
        values: Dict[str, Any] = {"stock": Product.stock + delta, "updated_at": timestamp}
        if mark_sold:
            values["last_sold_at"] = timestamp

        result = self.db.execute(
            update(Product)
            .where(Product.id == product_id, Product.stock + delta >= 0)
            .values(**values)
            .execution_options(synchronize_session=False)
        )

        if commit:
            self.db.commit()

        return result.rowcount == 1

    # ==================== PROVEEDORES ====================

    def list_suppliers(self, search: Optional[str] = None) -> List[Supplier]:
        query = self.db.query(Supplier)

        if search:
            term = f"%{search.strip().lower()}%"
            query = query.filter(or_(
                func.lower(Supplier.name).like(term),
                func.lower(Supplier.area).like(term)
            ))

        return query.order_by(Supplier.name).all()

    def get_supplier_by_id(self, supplier_id: int) -> Optional[Supplier]:
        return self.db.query(Supplier).filter(Supplier.id == supplier_id).first()

    def create_supplier(self, data: Dict[str, Any], user_id: str) -> Supplier:
        supplier = Supplier(**data, created_by=user_id, updated_by=user_id)

        self.db.add(supplier)
        self.db.commit()
        self.db.refresh(supplier)

        return supplier

    def update_supplier(self, supplier: Supplier, data: Dict[str, Any], user_id: str) -> Supplier:
        for key, value in data.items():
            setattr(supplier, key, value)
        supplier.updated_by = user_id

        self.db.commit()
        self.db.refresh(supplier)

        return supplier

    def delete_supplier(self, supplier: Supplier):
        """Los productos del proveedor quedan sin proveedor asignado"""
        for product in supplier.products:
            product.supplier_id = None
        self.db.delete(supplier)
        self.db.commit()
