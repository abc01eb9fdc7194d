from enum import Enum
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class ProfitCostBasis(str, Enum):
    current = "current"
    historical = "historical"


class Settings(BaseSettings):
    # App Info
    app_name: str = "Rosema POS API"
    version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str
    create_tables: bool = False

    # Security (tokens emitidos por el proveedor de identidad externo)
    secret_key: str
    algorithm: str = "HS256"

    # CORS
    allowed_origins: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Negocio
    store_name: str = "ROSEMA"
    timezone: str = Field(
        default="America/Argentina/Buenos_Aires",
        description="Zona horaria usada para agrupar ventas por día y resolver rangos"
    )
    low_stock_threshold: int = Field(default=5, ge=0, description="Stock igual o menor se considera bajo")
    top_products_limit: int = Field(default=5, gt=0)
    profit_cost_basis: ProfitCostBasis = Field(
        default=ProfitCostBasis.current,
        description="Precio de compra usado para calcular ganancia: actual del catálogo o capturado en la venta"
    )
    receipt_footer: Optional[str] = "¡Gracias por su compra!"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    class Config:
        env_file = ".env"
        case_sensitive = False

settings = Settings()
