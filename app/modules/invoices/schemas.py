from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import List, Optional
from datetime import date as Date, datetime
from enum import Enum

from app.shared.validators import CommonValidators

class InvoiceType(str, Enum):
    factura = "factura"
    nota_credito = "nota_credito"
    nota_debito = "nota_debito"

class InvoiceFile(BaseModel):
    """Referencia al archivo subido al almacenamiento externo"""
    url: str
    name: Optional[str] = None
    path: Optional[str] = None
    content_type: Optional[str] = None
    size: Optional[int] = Field(None, ge=0)

class InvoiceCreateRequest(BaseModel):
    invoice_number: str = Field(..., min_length=1, max_length=100)
    supplier_name: str = Field(..., min_length=2, max_length=255)
    amount: float = Field(..., gt=0, description="Monto de la factura")
    date: Date
    type: InvoiceType = InvoiceType.factura
    description: Optional[str] = None
    file: Optional[InvoiceFile] = None

    @field_validator('invoice_number', 'supplier_name')
    @classmethod
    def validate_required_text(cls, v: str):
        return CommonValidators.validate_non_empty_string(v)

    @field_validator('description')
    @classmethod
    def validate_description(cls, v: Optional[str]):
        return CommonValidators.normalize_optional_string(v)

class InvoiceUpdateRequest(InvoiceCreateRequest):
    pass

class InvoiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    invoice_number: str
    supplier_name: str
    amount: float
    date: Date
    type: InvoiceType
    description: Optional[str]
    file: Optional[InvoiceFile]
    created_by: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

class InvoiceListResponse(BaseModel):
    success: bool
    count: int
    total_amount: float
    invoices: List[InvoiceResponse]
