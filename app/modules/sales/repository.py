# app/modules/sales/repository.py
from datetime import datetime
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import desc

from app.shared.database.models import Sale, SaleItem

class SalesRepository:
    """
    Repositorio para todas las operaciones de datos relacionadas con ventas
    """

    def __init__(self, db: Session):
        self.db = db

    # ==================== VENTAS ====================

    def create_sale(self, sale_data: Dict[str, Any], items: List[Dict[str, Any]]) -> Sale:
        """
        Agregar la venta con sus items a la transacción actual.

        No hace commit: el servicio confirma la venta junto con el descuento
        de stock. El flush asigna el ID.
        """
        sale = Sale(**sale_data)
        sale.items = [
            SaleItem(position=position, **item_data)
            for position, item_data in enumerate(items)
        ]

        self.db.add(sale)
        self.db.flush()

        return sale

    def get_sale_by_id(self, sale_id: int) -> Optional[Sale]:
        return self.db.query(Sale).options(
            selectinload(Sale.items)
        ).filter(Sale.id == sale_id).first()

    def query_sales(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> List[Sale]:
        """
        Ventas con created_at en [start, end), más recientes primero
        """
        query = self.db.query(Sale).options(selectinload(Sale.items))

        if start is not None:
            query = query.filter(Sale.created_at >= start)
        if end is not None:
            query = query.filter(Sale.created_at < end)

        return query.order_by(desc(Sale.created_at), desc(Sale.id)).all()
