# app/modules/sales/__init__.py
"""
Módulo de Ventas - Carrito y registro de ventas

- Carrito por vendedor con control de stock y descuentos
- Registro de venta y descuento de stock en una sola transacción
- Consulta de ventas y comprobante imprimible

Arquitectura:
- router.py: Endpoints FastAPI
- service.py: Lógica de negocio
- repository.py: Acceso a datos
- schemas.py: Modelos Pydantic de request/response
- cart.py: Carrito en memoria
- receipt.py: Comprobante en texto plano
"""

from .router import router as sales_router
from .service import SalesService
from .repository import SalesRepository

__all__ = [
    "sales_router",
    "SalesService",
    "SalesRepository"
]
