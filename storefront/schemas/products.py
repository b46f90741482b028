from decimal import Decimal
from pydantic import BaseModel, Field
from typing import Optional


class ProductCreate(BaseModel):
    id: Optional[str] = Field(None, max_length=50)
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field("", max_length=1000)
    price: Decimal = Field(..., ge=0, max_digits=18, decimal_places=2)
    stock_available: int = Field(0, ge=0)


class ProductUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field("", max_length=1000)
    price: Decimal = Field(..., ge=0, max_digits=18, decimal_places=2)
    stock_available: int = Field(..., ge=0)


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str
    price: Decimal
    stock_available: int

    class Config:
        from_attributes = True
