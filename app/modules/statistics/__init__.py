# app/modules/statistics/__init__.py
"""
Módulo de Estadísticas - Métricas de ventas e inventario por período

Arquitectura:
- router.py: Endpoints FastAPI
- service.py: Agregaciones y servicio de reportes
- date_range.py: Resolución de períodos en hora local
- schemas.py: Modelos Pydantic de response
"""

from .router import router as statistics_router
from .service import StatisticsService

__all__ = [
    "statistics_router",
    "StatisticsService"
]
