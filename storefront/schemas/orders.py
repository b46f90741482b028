from decimal import Decimal
from pydantic import BaseModel, Field
from datetime import datetime


class CreateOrderRequest(BaseModel):
    customer_id: str = Field(..., min_length=1)
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(1, ge=1)


class OrderStatusUpdate(BaseModel):
    # Any value is accepted; Pending and Completed are the ones the storefront sets itself
    status: str = Field(..., min_length=1, max_length=50)


class OrderResponse(BaseModel):
    id: str
    customer_id: str
    customer_name: str
    product_id: str
    product_name: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    status: str
    order_date: datetime

    class Config:
        from_attributes = True
