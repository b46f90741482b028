from decimal import Decimal
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from .customers import CustomerResponse
from .orders import OrderResponse


class AddToCartRequest(BaseModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(1, ge=1)


class CartItemResponse(BaseModel):
    id: int
    product_id: str
    product_name: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal
    added_at: datetime

    class Config:
        from_attributes = True


class CartResponse(BaseModel):
    items: List[CartItemResponse]
    item_count: int
    total: Decimal


class CheckoutPreviewResponse(BaseModel):
    items: List[CartItemResponse]
    total: Decimal
    customer: Optional[CustomerResponse] = None


class CheckoutResponse(BaseModel):
    success: bool = True
    message: str
    orders: List[OrderResponse]
    redirect: str
