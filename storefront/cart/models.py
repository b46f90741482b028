from sqlalchemy import Column, Integer, String, Numeric, DateTime
from ..database.core import Base
from datetime import datetime, timezone


class CartItem(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_username = Column(String(100), nullable=False, index=True)
    product_id = Column(String(50), nullable=False)
    product_name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(Numeric(18, 2), nullable=False)
    added_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    @property
    def line_total(self):
        return self.unit_price * self.quantity
