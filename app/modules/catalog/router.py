# app/modules/catalog/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from app.config.database import get_db
from app.core.auth.dependencies import require_permission
from app.core.auth.permissions import Capability
from app.core.auth.schemas import CurrentUser
from .service import CatalogService
from .schemas import (
    ProductCreateRequest, ProductUpdateRequest, ProductResponse, ProductListResponse,
    StockAdjustmentRequest, StockAdjustmentResponse,
    SupplierCreateRequest, SupplierUpdateRequest, SupplierResponse, SupplierListResponse
)

router = APIRouter(prefix="/catalog", tags=["Catalog"])

# ==================== PRODUCTOS ====================

@router.get("/products", response_model=ProductListResponse)
async def list_products(
    search: Optional[str] = Query(None, description="Buscar por nombre, código o categoría"),
    category: Optional[str] = None,
    low_stock: bool = Query(False, description="Solo productos con stock bajo"),
    current_user: CurrentUser = Depends(require_permission(Capability.view_products)),
    db: Session = Depends(get_db)
):
    service = CatalogService(db)
    return await service.list_products(search=search, category=category, low_stock_only=low_stock)

@router.get("/products/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int,
    current_user: CurrentUser = Depends(require_permission(Capability.view_products)),
    db: Session = Depends(get_db)
):
    service = CatalogService(db)
    return await service.get_product(product_id)

@router.post("/products", response_model=ProductResponse, status_code=201)
async def create_product(
    product_data: ProductCreateRequest,
    current_user: CurrentUser = Depends(require_permission(Capability.manage_products)),
    db: Session = Depends(get_db)
):
    """
    Crear producto; el porcentaje de ganancia se calcula automáticamente
    """
    service = CatalogService(db)
    return await service.create_product(product_data, current_user)

@router.put("/products/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: int,
    product_data: ProductUpdateRequest,
    current_user: CurrentUser = Depends(require_permission(Capability.manage_products)),
    db: Session = Depends(get_db)
):
    service = CatalogService(db)
    return await service.update_product(product_id, product_data, current_user)

@router.delete("/products/{product_id}")
async def delete_product(
    product_id: int,
    current_user: CurrentUser = Depends(require_permission(Capability.delete_product)),
    db: Session = Depends(get_db)
):
    service = CatalogService(db)
    return await service.delete_product(product_id)

@router.post("/products/{product_id}/stock", response_model=StockAdjustmentResponse)
async def adjust_product_stock(
    product_id: int,
    adjustment: StockAdjustmentRequest,
    current_user: CurrentUser = Depends(require_permission(Capability.adjust_stock)),
    db: Session = Depends(get_db)
):
    """
    Sumar o restar unidades al stock sin pasar por una venta
    """
    service = CatalogService(db)
    return await service.adjust_stock(product_id, adjustment.delta, current_user)

# ==================== PROVEEDORES ====================

@router.get("/suppliers", response_model=SupplierListResponse)
async def list_suppliers(
    search: Optional[str] = Query(None, description="Buscar por nombre o rubro"),
    current_user: CurrentUser = Depends(require_permission(Capability.view_suppliers)),
    db: Session = Depends(get_db)
):
    service = CatalogService(db)
    return await service.list_suppliers(search)

@router.get("/suppliers/{supplier_id}", response_model=SupplierResponse)
async def get_supplier(
    supplier_id: int,
    current_user: CurrentUser = Depends(require_permission(Capability.view_suppliers)),
    db: Session = Depends(get_db)
):
    service = CatalogService(db)
    return await service.get_supplier(supplier_id)

@router.post("/suppliers", response_model=SupplierResponse, status_code=201)
async def create_supplier(
    supplier_data: SupplierCreateRequest,
    current_user: CurrentUser = Depends(require_permission(Capability.manage_suppliers)),
    db: Session = Depends(get_db)
):
    service = CatalogService(db)
    return await service.create_supplier(supplier_data, current_user)

@router.put("/suppliers/{supplier_id}", response_model=SupplierResponse)
async def update_supplier(
    supplier_id: int,
    supplier_data: SupplierUpdateRequest,
    current_user: CurrentUser = Depends(require_permission(Capability.manage_suppliers)),
    db: Session = Depends(get_db)
):
    service = CatalogService(db)
    return await service.update_supplier(supplier_id, supplier_data, current_user)

@router.delete("/suppliers/{supplier_id}")
async def delete_supplier(
    supplier_id: int,
    current_user: CurrentUser = Depends(require_permission(Capability.delete_supplier)),
    db: Session = Depends(get_db)
):
    service = CatalogService(db)
    return await service.delete_supplier(supplier_id)
