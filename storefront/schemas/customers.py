from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class CustomerCreate(BaseModel):
    # Generated when omitted
    id: Optional[str] = Field(None, max_length=50)
    name: str = Field(..., min_length=1, max_length=100)
    surname: str = Field(..., min_length=1, max_length=100)
    username: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    shipping_address: str = Field("", max_length=500)


class CustomerUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    surname: str = Field(..., min_length=1, max_length=100)
    username: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    shipping_address: str = Field("", max_length=500)
    is_active: bool = True


class CustomerResponse(BaseModel):
    id: str
    name: str
    surname: str
    full_name: str
    username: str
    email: str
    shipping_address: str
    is_active: bool

    class Config:
        from_attributes = True
