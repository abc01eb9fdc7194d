# app/modules/sales/router.py
from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session
from typing import Optional
from datetime import datetime

from app.config.database import get_db
from app.core.auth.dependencies import require_permission
from app.core.auth.permissions import Capability
from app.core.auth.schemas import CurrentUser
from .cart import CartRegistry, get_cart_registry
from .service import SalesService
from .schemas import (
    CartItemAddRequest, CartItemUpdateRequest, CartDetailsRequest, CartResponse,
    CheckoutResponse, SaleResponse, SalesListResponse
)

router = APIRouter(prefix="/sales", tags=["Sales"])

# ==================== CARRITO ====================

@router.get("/cart", response_model=CartResponse)
async def get_cart(
    current_user: CurrentUser = Depends(require_permission(Capability.create_sale)),
    registry: CartRegistry = Depends(get_cart_registry),
    db: Session = Depends(get_db)
):
    """
    Carrito actual del vendedor con subtotal, descuento y total
    """
    service = SalesService(db)
    return await service.get_cart(registry.get(current_user.id))

@router.post("/cart/items", response_model=CartResponse)
async def add_cart_item(
    item: CartItemAddRequest,
    current_user: CurrentUser = Depends(require_permission(Capability.create_sale)),
    registry: CartRegistry = Depends(get_cart_registry),
    db: Session = Depends(get_db)
):
    service = SalesService(db)
    return await service.add_to_cart(registry.get(current_user.id), item.product_id)

@router.put("/cart/items/{product_id}", response_model=CartResponse)
async def update_cart_item(
    product_id: int,
    item: CartItemUpdateRequest,
    current_user: CurrentUser = Depends(require_permission(Capability.create_sale)),
    registry: CartRegistry = Depends(get_cart_registry),
    db: Session = Depends(get_db)
):
    """
    Cambiar la cantidad; 0 o menos quita el producto del carrito
    """
    service = SalesService(db)
    return await service.update_cart_item(registry.get(current_user.id), product_id, item.quantity)

@router.delete("/cart/items/{product_id}", response_model=CartResponse)
async def remove_cart_item(
    product_id: int,
    current_user: CurrentUser = Depends(require_permission(Capability.create_sale)),
    registry: CartRegistry = Depends(get_cart_registry),
    db: Session = Depends(get_db)
):
    service = SalesService(db)
    return await service.remove_from_cart(registry.get(current_user.id), product_id)

@router.put("/cart/details", response_model=CartResponse)
async def update_cart_details(
    details: CartDetailsRequest,
    current_user: CurrentUser = Depends(require_permission(Capability.create_sale)),
    registry: CartRegistry = Depends(get_cart_registry),
    db: Session = Depends(get_db)
):
    service = SalesService(db)
    return await service.update_cart_details(registry.get(current_user.id), details)

@router.delete("/cart", response_model=CartResponse)
async def clear_cart(
    current_user: CurrentUser = Depends(require_permission(Capability.create_sale)),
    registry: CartRegistry = Depends(get_cart_registry),
    db: Session = Depends(get_db)
):
    service = SalesService(db)
    return await service.clear_cart(registry.get(current_user.id))

# ==================== CHECKOUT ====================

@router.post("/checkout", response_model=CheckoutResponse, status_code=201)
async def checkout(
    current_user: CurrentUser = Depends(require_permission(Capability.create_sale)),
    registry: CartRegistry = Depends(get_cart_registry),
    db: Session = Depends(get_db)
):
    """
    Registrar la venta del carrito y descontar el stock

    - Rechaza carritos vacíos o con total cero
    - Venta y stock se confirman juntos; si algo falla no queda nada registrado
    - Al terminar, el carrito se vacía
    """
    service = SalesService(db)
    return await service.checkout(registry.get(current_user.id), current_user)

# ==================== CONSULTAS ====================

@router.get("", response_model=SalesListResponse)
async def list_sales(
    start: Optional[datetime] = Query(None, description="Desde (inclusive); sin zona = hora local"),
    end: Optional[datetime] = Query(None, description="Hasta (exclusivo); sin zona = hora local"),
    current_user: CurrentUser = Depends(require_permission(Capability.view_sales)),
    db: Session = Depends(get_db)
):
    service = SalesService(db)
    return await service.list_sales(start=start, end=end)

@router.get("/{sale_id}", response_model=SaleResponse)
async def get_sale(
    sale_id: int,
    current_user: CurrentUser = Depends(require_permission(Capability.view_sales)),
    db: Session = Depends(get_db)
):
    service = SalesService(db)
    return await service.get_sale(sale_id)

@router.get("/{sale_id}/receipt", response_class=PlainTextResponse)
async def get_sale_receipt(
    sale_id: int,
    current_user: CurrentUser = Depends(require_permission(Capability.view_sales)),
    db: Session = Depends(get_db)
):
    """
    Comprobante imprimible de una venta registrada
    """
    service = SalesService(db)
    return await service.get_receipt(sale_id)
