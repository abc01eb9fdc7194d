from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import List, Optional
from datetime import datetime
from enum import Enum

# ==================== ENUMS ====================

class PaymentMethodType(str, Enum):
    cash = "cash"
    transfer = "transfer"
    debit = "debit"
    credit = "credit"

class DiscountType(str, Enum):
    percentage = "percentage"
    fixed = "fixed"

class SaleStatus(str, Enum):
    completed = "completed"

# ==================== CLASE BASE PARA RESPUESTAS (Pydantic v2) ====================

class SalesBaseModel(BaseModel):
    """
    Clase base para todos los esquemas de respuesta,
    con configuración de Pydantic v2.
    """
    model_config = ConfigDict(from_attributes=True)

# ==================== REQUEST SCHEMAS ====================

class CartItemAddRequest(BaseModel):
    product_id: int = Field(..., description="ID del producto a agregar")

class CartItemUpdateRequest(BaseModel):
    quantity: int = Field(..., description="Nueva cantidad; 0 o menos elimina el item")

class CartDetailsRequest(BaseModel):
    customer_name: Optional[str] = Field(None, max_length=255, description="Nombre del cliente")
    discount_value: float = Field(0, ge=0, description="Porcentaje o monto fijo de descuento")
    discount_type: DiscountType = DiscountType.percentage
    payment_method: PaymentMethodType = PaymentMethodType.cash
    is_exchange: bool = Field(False, description="La venta es un cambio")

    @field_validator('customer_name')
    @classmethod
    def strip_customer_name(cls, v: Optional[str]):
        return v.strip() if v else ""

# ==================== RESPONSE SCHEMAS ====================

class CartItemResponse(SalesBaseModel):
    product_id: int
    name: str
    code: str
    unit_price: float
    quantity: int
    subtotal: float

class CartResponse(SalesBaseModel):
    seller_id: str
    items: List[CartItemResponse]
    items_count: int
    customer_name: str
    discount_value: float
    discount_type: DiscountType
    payment_method: PaymentMethodType
    is_exchange: bool
    subtotal: float
    discount_amount: float
    total: float
    processing: bool

class SaleItemResponse(SalesBaseModel):
    product_id: int
    name: str
    code: str
    quantity: int
    unit_price: float
    subtotal: float

class SaleResponse(SalesBaseModel):
    id: int
    items: List[SaleItemResponse]
    subtotal: float
    discount_amount: float
    discount_type: DiscountType
    total: float
    payment_method: PaymentMethodType
    customer_name: Optional[str]
    is_exchange: bool
    seller_id: str
    seller_name: str
    created_at: datetime
    status: SaleStatus

class CheckoutResponse(SalesBaseModel):
    success: bool
    sale_id: int
    message: str
    sale: SaleResponse

class SalesListResponse(SalesBaseModel):
    success: bool
    start: Optional[datetime]
    end: Optional[datetime]
    count: int
    total_amount: float
    sales: List[SaleResponse]
