# app/modules/invoices/repository.py
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import func, or_

from app.shared.database.models import Invoice

class InvoicesRepository:
    """
    Repositorio de facturas de proveedores
    """

    def __init__(self, db: Session):
        self.db = db

    def list_invoices(self, invoice_type: Optional[str] = None, search: Optional[str] = None) -> List[Invoice]:
        """
        Facturas de la más reciente a la más antigua
        """
        query = self.db.query(Invoice)

        if invoice_type:
            query = query.filter(Invoice.type == invoice_type)

        if search:
            term = f"%{search.strip().lower()}%"
            query = query.filter(or_(
                func.lower(Invoice.invoice_number).like(term),
                func.lower(Invoice.supplier_name).like(term)
            ))

        return query.order_by(Invoice.date.desc(), Invoice.id.desc()).all()

    def get_invoice_by_id(self, invoice_id: int) -> Optional[Invoice]:
        return self.db.query(Invoice).filter(Invoice.id == invoice_id).first()

    def create_invoice(self, data: Dict[str, Any], user_id: str) -> Invoice:
        invoice = Invoice(**data, created_by=user_id, updated_by=user_id)

        self.db.add(invoice)
        self.db.commit()
        self.db.refresh(invoice)

        return invoice

    def update_invoice(self, invoice: Invoice, data: Dict[str, Any], user_id: str) -> Invoice:
        for key, value in data.items():
            setattr(invoice, key, value)
        invoice.updated_by = user_id

        self.db.commit()
        self.db.refresh(invoice)

        return invoice

    def delete_invoice(self, invoice: Invoice):
        self.db.delete(invoice)
        self.db.commit()
