# app/modules/invoices/service.py
import logging
from typing import Any, Dict, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from app.core.auth.schemas import CurrentUser
from app.core.exceptions import NotFoundError, PersistenceError
from app.shared.database.models import Invoice
from app.shared.pricing import round_money
from .repository import InvoicesRepository
from .schemas import (
    InvoiceCreateRequest, InvoiceUpdateRequest, InvoiceResponse,
    InvoiceListResponse, InvoiceType
)

logger = logging.getLogger(__name__)

class InvoicesService:
    """
    Archivo de facturas, notas de crédito y notas de débito de proveedores
    """

    def __init__(self, db: Session):
        self.db = db
        self.repository = InvoicesRepository(db)

    async def list_invoices(
        self,
        invoice_type: Optional[InvoiceType] = None,
        search: Optional[str] = None
    ) -> InvoiceListResponse:
        invoices = self.repository.list_invoices(
            invoice_type=invoice_type.value if invoice_type else None,
            search=search
        )

        return InvoiceListResponse(
            success=True,
            count=len(invoices),
            total_amount=float(sum((round_money(i.amount) for i in invoices), round_money(0))),
            invoices=[InvoiceResponse.model_validate(i) for i in invoices]
        )

    async def get_invoice(self, invoice_id: int) -> InvoiceResponse:
        return InvoiceResponse.model_validate(self._get_invoice_or_404(invoice_id))

    async def create_invoice(self, invoice_data: InvoiceCreateRequest, current_user: CurrentUser) -> InvoiceResponse:
        try:
            invoice = self.repository.create_invoice(self._invoice_values(invoice_data), current_user.id)
        except SQLAlchemyError as e:
            raise self._persistence_error("creando factura", e) from e

        logger.info(f"Factura {invoice.invoice_number} ({invoice.type}) registrada por {current_user.id}")
        return InvoiceResponse.model_validate(invoice)

    async def update_invoice(
        self,
        invoice_id: int,
        invoice_data: InvoiceUpdateRequest,
        current_user: CurrentUser
    ) -> InvoiceResponse:
        invoice = self._get_invoice_or_404(invoice_id)

        try:
            invoice = self.repository.update_invoice(invoice, self._invoice_values(invoice_data), current_user.id)
        except SQLAlchemyError as e:
            raise self._persistence_error("actualizando factura", e) from e

        return InvoiceResponse.model_validate(invoice)

    async def delete_invoice(self, invoice_id: int) -> Dict[str, Any]:
        invoice = self._get_invoice_or_404(invoice_id)

        try:
            self.repository.delete_invoice(invoice)
        except SQLAlchemyError as e:
            raise self._persistence_error("eliminando factura", e) from e

        return {"success": True, "message": "Factura eliminada exitosamente", "invoice_id": invoice_id}

    def _invoice_values(self, invoice_data: InvoiceCreateRequest) -> Dict[str, Any]:
        data = invoice_data.model_dump(mode="json")
        data["date"] = invoice_data.date
        data["amount"] = round_money(invoice_data.amount)
        return data

    def _get_invoice_or_404(self, invoice_id: int) -> Invoice:
        invoice = self.repository.get_invoice_by_id(invoice_id)
        if not invoice:
            raise NotFoundError(f"Factura {invoice_id} no encontrada")
        return invoice

    def _persistence_error(self, action: str, error: SQLAlchemyError) -> PersistenceError:
        self.db.rollback()
        logger.error(f"Error {action}: {error}")
        return PersistenceError()
