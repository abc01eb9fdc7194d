from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from datetime import date as Date, datetime

from .date_range import DateRangeKey

class StatisticsBaseModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

class Metrics(StatisticsBaseModel):
    total_sales: int = 0
    total_revenue: float = 0.0
    total_profit: float = 0.0
    average_ticket: float = 0.0
    total_products: int = 0
    low_stock_products: int = 0
    total_assets: float = 0.0
    total_invested: float = 0.0

class DailySales(StatisticsBaseModel):
    date: Date
    sales_count: int
    revenue: float

class TopProduct(StatisticsBaseModel):
    product_id: int
    name: str
    quantity: int
    revenue: float

class PaymentMethodStats(StatisticsBaseModel):
    method: str
    count: int
    revenue: float

class StatisticsResponse(StatisticsBaseModel):
    success: bool
    range: DateRangeKey
    has_range: bool
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    metrics: Optional[Metrics] = None
    sales_by_day: List[DailySales] = []
    top_products: List[TopProduct] = []
    payment_methods: List[PaymentMethodStats] = []
