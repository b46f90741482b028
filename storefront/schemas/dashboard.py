from decimal import Decimal
from pydantic import BaseModel
from typing import List, Dict, Optional

from .orders import OrderResponse
from .products import ProductResponse


class HomeResponse(BaseModel):
    total_customers: int
    total_products: int
    total_orders: int
    total_revenue: Decimal
    featured_products: List[ProductResponse]
    greeting: Optional[str] = None
    messages: List[Dict[str, str]] = []


class AdminDashboardResponse(BaseModel):
    total_customers: int
    total_products: int
    total_orders: int
    pending_orders: int
    total_revenue: Decimal
    recent_orders: List[OrderResponse]
    low_stock_products: List[ProductResponse]
