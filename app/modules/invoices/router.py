# app/modules/invoices/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from app.config.database import get_db
from app.core.auth.dependencies import require_permission
from app.core.auth.permissions import Capability
from app.core.auth.schemas import CurrentUser
from .service import InvoicesService
from .schemas import (
    InvoiceCreateRequest, InvoiceUpdateRequest, InvoiceResponse,
    InvoiceListResponse, InvoiceType
)

router = APIRouter(prefix="/invoices", tags=["Invoices"])

@router.get("", response_model=InvoiceListResponse)
async def list_invoices(
    type: Optional[InvoiceType] = Query(None, description="factura, nota_credito o nota_debito"),
    search: Optional[str] = Query(None, description="Buscar por número o proveedor"),
    current_user: CurrentUser = Depends(require_permission(Capability.view_invoices)),
    db: Session = Depends(get_db)
):
    service = InvoicesService(db)
    return await service.list_invoices(invoice_type=type, search=search)

@router.get("/{invoice_id}", response_model=InvoiceResponse)
async def get_invoice(
    invoice_id: int,
    current_user: CurrentUser = Depends(require_permission(Capability.view_invoices)),
    db: Session = Depends(get_db)
):
    service = InvoicesService(db)
    return await service.get_invoice(invoice_id)

@router.post("", response_model=InvoiceResponse, status_code=201)
async def create_invoice(
    invoice_data: InvoiceCreateRequest,
    current_user: CurrentUser = Depends(require_permission(Capability.manage_invoices)),
    db: Session = Depends(get_db)
):
    """
    Registrar factura; el archivo se sube antes al almacenamiento externo
    y aquí solo se guarda su referencia
    """
    service = InvoicesService(db)
    return await service.create_invoice(invoice_data, current_user)

@router.put("/{invoice_id}", response_model=InvoiceResponse)
async def update_invoice(
    invoice_id: int,
    invoice_data: InvoiceUpdateRequest,
    current_user: CurrentUser = Depends(require_permission(Capability.manage_invoices)),
    db: Session = Depends(get_db)
):
    service = InvoicesService(db)
    return await service.update_invoice(invoice_id, invoice_data, current_user)

@router.delete("/{invoice_id}")
async def delete_invoice(
    invoice_id: int,
    current_user: CurrentUser = Depends(require_permission(Capability.delete_invoice)),
    db: Session = Depends(get_db)
):
    service = InvoicesService(db)
    return await service.delete_invoice(invoice_id)
