# app/modules/statistics/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from datetime import date

from app.config.database import get_db
from app.core.auth.dependencies import require_permission
from app.core.auth.permissions import Capability
from app.core.auth.schemas import CurrentUser
from .date_range import DateRangeKey
from .service import StatisticsService
from .schemas import StatisticsResponse

router = APIRouter(prefix="/statistics", tags=["Statistics"])

@router.get("", response_model=StatisticsResponse)
async def get_statistics(
    range_key: DateRangeKey = Query(DateRangeKey.week, alias="range", description="today, week, month, year o custom"),
    start_date: Optional[date] = Query(None, description="Inicio del rango personalizado"),
    end_date: Optional[date] = Query(None, description="Fin del rango personalizado (inclusive)"),
    current_user: CurrentUser = Depends(require_permission(Capability.view_statistics)),
    db: Session = Depends(get_db)
):
    """
    Métricas del período, ventas por día, productos más vendidos y medios de pago.

    El inventario (productos, stock bajo, activos) es siempre el actual.
    Con range=custom sin fechas se devuelve has_range=false sin métricas.
    """
    service = StatisticsService(db)
    return await service.get_report(range_key, start_date, end_date)
