import uuid

from sqlalchemy import Column, String, Boolean

from ..database.core import Base


class Customer(Base):
    __tablename__ = "customers"

    id = Column(String(50), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    surname = Column(String(100), nullable=False)
    username = Column(String(100), nullable=False, index=True)
    email = Column(String(255), nullable=False)
    shipping_address = Column(String(500), nullable=False, default="")
    is_active = Column(Boolean, nullable=False, default=True)

    @property
    def full_name(self) -> str:
        return f"{self.name} {self.surname}"

    def __repr__(self):
        return f"<Customer(username='{self.username}', name='{self.full_name}')>"
