# app/modules/invoices/__init__.py
"""
Módulo de Facturas - Archivo de comprobantes de proveedores

Arquitectura:
- router.py: Endpoints FastAPI
- service.py: Lógica de negocio
- repository.py: Acceso a datos
- schemas.py: Modelos Pydantic de request/response
"""

from .router import router as invoices_router
from .service import InvoicesService
from .repository import InvoicesRepository

__all__ = [
    "invoices_router",
    "InvoicesService",
    "InvoicesRepository"
]
