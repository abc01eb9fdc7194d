# app/api/v1/router.py
from fastapi import APIRouter

from app.config.settings import settings
from app.modules.catalog import catalog_router
from app.modules.sales import sales_router
from app.modules.statistics import statistics_router
from app.modules.invoices import invoices_router

# Crear router principal de la API v1
api_router = APIRouter()

# ==================== MÓDULOS ====================

api_router.include_router(catalog_router)
api_router.include_router(sales_router)
api_router.include_router(statistics_router)
api_router.include_router(invoices_router)

# ==================== ENDPOINTS RAÍZ ====================

@api_router.get("/")
async def api_root():
    """Root endpoint de la API"""
    return {
        "message": f"{settings.app_name} v1",
        "version": settings.version,
        "status": "active",
        "available_endpoints": {
            "catalog": "/api/v1/catalog",
            "sales": "/api/v1/sales",
            "statistics": "/api/v1/statistics",
            "invoices": "/api/v1/invoices"
        }
    }

@api_router.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.version,
        "architecture": "modular_monolith"
    }
