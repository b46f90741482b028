import uuid

from sqlalchemy import Column, String, Integer, Numeric

from ..database.core import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(String(50), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    description = Column(String(1000), nullable=False, default="")
    price = Column(Numeric(18, 2), nullable=False, default=0)
    stock_available = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<Product(name='{self.name}', price={self.price})>"
