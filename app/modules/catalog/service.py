# app/modules/catalog/service.py
import logging
from typing import Any, Dict, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from app.config.settings import settings
from app.core.auth.schemas import CurrentUser
from app.core.exceptions import ConflictError, NotFoundError, PersistenceError, ValidationError
from app.shared.clock import utc_now
from app.shared.database.models import Product, Supplier
from app.shared.pricing import compute_profit_percentage
from .repository import CatalogRepository
from .schemas import (
    ProductCreateRequest, ProductUpdateRequest, ProductResponse, ProductListResponse,
    StockAdjustmentResponse, SupplierCreateRequest, SupplierUpdateRequest,
    SupplierResponse, SupplierListResponse
)

logger = logging.getLogger(__name__)

class CatalogService:
    """
    Servicio de catálogo: productos, stock y proveedores
    """

    def __init__(self, db: Session):
        self.db = db
        self.repository = CatalogRepository(db)

    # ==================== PRODUCTOS ====================

    async def list_products(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        low_stock_only: bool = False
    ) -> ProductListResponse:
        products = self.repository.list_products(
            search=search,
            category=category,
            max_stock=settings.low_stock_threshold if low_stock_only else None
        )

        return ProductListResponse(
            success=True,
            count=len(products),
            products=[ProductResponse.model_validate(p) for p in products]
        )

    async def get_product(self, product_id: int) -> ProductResponse:
        return ProductResponse.model_validate(self._get_product_or_404(product_id))

    async def create_product(self, product_data: ProductCreateRequest, current_user: CurrentUser) -> ProductResponse:
        if self.repository.get_product_by_code(product_data.code):
            raise ConflictError(f"Ya existe un producto con el código {product_data.code}")

        data = self._product_values(product_data)

        try:
            product = self.repository.create_product(data, current_user.id)
        except SQLAlchemyError as e:
            raise self._persistence_error("creando producto", e) from e

        logger.info(f"Producto {product.code} creado por {current_user.id}")
        return ProductResponse.model_validate(product)

    async def update_product(
        self,
        product_id: int,
        product_data: ProductUpdateRequest,
        current_user: CurrentUser
    ) -> ProductResponse:
        product = self._get_product_or_404(product_id)

        existing = self.repository.get_product_by_code(product_data.code)
        if existing and existing.id != product.id:
            raise ConflictError(f"Ya existe un producto con el código {product_data.code}")

        data = self._product_values(product_data)

        try:
            product = self.repository.update_product(product, data, current_user.id)
        except SQLAlchemyError as e:
            raise self._persistence_error("actualizando producto", e) from e

        return ProductResponse.model_validate(product)

    async def delete_product(self, product_id: int) -> Dict[str, Any]:
        product = self._get_product_or_404(product_id)

        try:
            self.repository.delete_product(product)
        except SQLAlchemyError as e:
            raise self._persistence_error("eliminando producto", e) from e

        return {"success": True, "message": "Producto eliminado exitosamente", "product_id": product_id}

    async def adjust_stock(self, product_id: int, delta: int, current_user: CurrentUser) -> StockAdjustmentResponse:
        """
        Ajuste manual de stock (ingreso de mercadería o corrección)
        """
        product = self._get_product_or_404(product_id)

        try:
            updated = self.repository.update_product_stock(product_id, delta, utc_now())
        except SQLAlchemyError as e:
            raise self._persistence_error("ajustando stock", e) from e

        if not updated:
            raise ValidationError(f"El ajuste dejaría stock negativo para {product.name}")

        product = self._get_product_or_404(product_id)
        logger.info(f"Stock de {product.code} ajustado en {delta:+d} por {current_user.id}")

        return StockAdjustmentResponse(
            success=True,
            product_id=product.id,
            stock=product.stock,
            message="Stock actualizado exitosamente"
        )

    # ==================== PROVEEDORES ====================

    async def list_suppliers(self, search: Optional[str] = None) -> SupplierListResponse:
        suppliers = self.repository.list_suppliers(search)

        return SupplierListResponse(
            success=True,
            count=len(suppliers),
            suppliers=[SupplierResponse.model_validate(s) for s in suppliers]
        )

    async def get_supplier(self, supplier_id: int) -> SupplierResponse:
        return SupplierResponse.model_validate(self._get_supplier_or_404(supplier_id))

    async def create_supplier(self, supplier_data: SupplierCreateRequest, current_user: CurrentUser) -> SupplierResponse:
        try:
            supplier = self.repository.create_supplier(supplier_data.model_dump(), current_user.id)
        except SQLAlchemyError as e:
            raise self._persistence_error("creando proveedor", e) from e

        return SupplierResponse.model_validate(supplier)

    async def update_supplier(
        self,
        supplier_id: int,
        supplier_data: SupplierUpdateRequest,
        current_user: CurrentUser
    ) -> SupplierResponse:
        supplier = self._get_supplier_or_404(supplier_id)

        try:
            supplier = self.repository.update_supplier(supplier, supplier_data.model_dump(), current_user.id)
        except SQLAlchemyError as e:
            raise self._persistence_error("actualizando proveedor", e) from e

        return SupplierResponse.model_validate(supplier)

    async def delete_supplier(self, supplier_id: int) -> Dict[str, Any]:
        supplier = self._get_supplier_or_404(supplier_id)

        try:
            self.repository.delete_supplier(supplier)
        except SQLAlchemyError as e:
            raise self._persistence_error("eliminando proveedor", e) from e

        return {"success": True, "message": "Proveedor eliminado exitosamente", "supplier_id": supplier_id}

    # ==================== UTILIDADES ====================

    def _product_values(self, product_data: ProductCreateRequest) -> Dict[str, Any]:
        if product_data.supplier_id is not None and not self.repository.get_supplier_by_id(product_data.supplier_id):
            raise ValidationError(f"Proveedor {product_data.supplier_id} no encontrado")

        data = product_data.model_dump()
        data["profit_percentage"] = compute_profit_percentage(product_data.buy_price, product_data.sell_price)
        return data

    def _get_product_or_404(self, product_id: int) -> Product:
        product = self.repository.get_product_by_id(product_id)
        if not product:
            raise NotFoundError(f"Producto {product_id} no encontrado")
        return product

    def _get_supplier_or_404(self, supplier_id: int) -> Supplier:
        supplier = self.repository.get_supplier_by_id(supplier_id)
        if not supplier:
            raise NotFoundError(f"Proveedor {supplier_id} no encontrado")
        return supplier

    def _persistence_error(self, action: str, error: SQLAlchemyError) -> PersistenceError:
        self.db.rollback()
        logger.error(f"Error {action}: {error}")
        return PersistenceError()
