from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator
from typing import List, Optional, Union
from datetime import datetime

from app.shared.validators import CommonValidators, is_valid_cuit, is_valid_phone

# ==================== CLASE BASE ====================

class CatalogBaseModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

def split_list(v: Union[str, List[str], None]) -> List[str]:
    """Acepta "a, b, c" o una lista; descarta vacíos"""
    if v is None:
        return []
    if isinstance(v, str):
        v = v.split(",")
    return [item.strip() for item in v if item and item.strip()]

# ==================== PRODUCTOS ====================

class ProductImage(BaseModel):
    url: str = Field(..., description="URL pública en el almacenamiento externo")
    path: Optional[str] = Field(None, description="Ruta del archivo en el almacenamiento")

class ProductCreateRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    code: str = Field(..., max_length=100, description="Código único del producto")
    buy_price: float = Field(..., ge=0, description="Precio de compra")
    sell_price: float = Field(..., ge=0, description="Precio de venta")
    category: str = Field(..., max_length=100)
    tags: List[str] = Field(default_factory=list)
    sizes: List[str] = Field(default_factory=list)
    description: Optional[str] = None
    stock: int = Field(..., ge=0, description="Unidades disponibles")
    supplier_id: Optional[int] = None
    images: List[ProductImage] = Field(default_factory=list)

    @field_validator('name', 'category')
    @classmethod
    def validate_required_text(cls, v: str):
        return CommonValidators.validate_non_empty_string(v)

    @field_validator('code')
    @classmethod
    def validate_code(cls, v: str):
        return CommonValidators.validate_product_code(v)

    @field_validator('tags', 'sizes', mode='before')
    @classmethod
    def validate_list(cls, v):
        return split_list(v)

    @field_validator('description')
    @classmethod
    def validate_description(cls, v: Optional[str]):
        return CommonValidators.normalize_optional_string(v)

    @model_validator(mode='after')
    def validate_prices(self):
        if self.sell_price <= self.buy_price:
            raise ValueError('El precio de venta debe ser mayor al precio de compra')
        return self

class ProductUpdateRequest(ProductCreateRequest):
    pass

class StockAdjustmentRequest(BaseModel):
    delta: int = Field(..., description="Unidades a sumar (positivo) o restar (negativo)")

    @field_validator('delta')
    @classmethod
    def validate_delta(cls, v: int):
        if v == 0:
            raise ValueError('El ajuste debe ser distinto de cero')
        return v

class ProductResponse(CatalogBaseModel):
    id: int
    name: str
    code: str
    buy_price: float
    sell_price: float
    profit_percentage: float
    category: str
    tags: List[str]
    sizes: List[str]
    description: Optional[str]
    stock: int
    supplier_id: Optional[int]
    images: List[ProductImage]
    last_sold_at: Optional[datetime]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

class ProductListResponse(CatalogBaseModel):
    success: bool
    count: int
    products: List[ProductResponse]

class StockAdjustmentResponse(CatalogBaseModel):
    success: bool
    product_id: int
    stock: int
    message: str

# ==================== PROVEEDORES ====================

class SocialMedia(BaseModel):
    instagram: Optional[str] = None
    facebook: Optional[str] = None
    twitter: Optional[str] = None

class SupplierCreateRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    whatsapp_numbers: List[str] = Field(default_factory=list, max_length=3)
    address: Optional[str] = None
    gallery: Optional[str] = None
    local_number: Optional[str] = None
    area: str = Field(..., max_length=255)
    tags: List[str] = Field(default_factory=list)
    website: Optional[str] = None
    social_media: SocialMedia = Field(default_factory=SocialMedia)
    cuit: Optional[str] = None
    quality_rating: int = Field(5, ge=1, le=5)
    notes: Optional[str] = None

    @field_validator('name', 'area')
    @classmethod
    def validate_required_text(cls, v: str):
        return CommonValidators.validate_non_empty_string(v)

    @field_validator('whatsapp_numbers', mode='before')
    @classmethod
    def validate_whatsapp(cls, v):
        numbers = split_list(v)
        for number in numbers:
            if not is_valid_phone(number):
                raise ValueError(f'Teléfono inválido: {number}')
        return numbers

    @field_validator('tags', mode='before')
    @classmethod
    def validate_tags(cls, v):
        return split_list(v)

    @field_validator('cuit')
    @classmethod
    def validate_cuit(cls, v: Optional[str]):
        v = CommonValidators.normalize_optional_string(v)
        if v is not None and not is_valid_cuit(v):
            raise ValueError('Debe ser un CUIT válido')
        return v

    @field_validator('address', 'gallery', 'local_number', 'website', 'notes')
    @classmethod
    def validate_optional_text(cls, v: Optional[str]):
        return CommonValidators.normalize_optional_string(v)

class SupplierUpdateRequest(SupplierCreateRequest):
    pass

class SupplierResponse(CatalogBaseModel):
    id: int
    name: str
    whatsapp_numbers: List[str]
    address: Optional[str]
    gallery: Optional[str]
    local_number: Optional[str]
    area: str
    tags: List[str]
    website: Optional[str]
    social_media: SocialMedia
    cuit: Optional[str]
    quality_rating: int
    notes: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

class SupplierListResponse(CatalogBaseModel):
    success: bool
    count: int
    suppliers: List[SupplierResponse]
