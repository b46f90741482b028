from sqlalchemy import Column, String, Integer, Numeric, DateTime
from ..database.core import Base
import uuid
from datetime import datetime, timezone

ORDER_STATUS_PENDING = "Pending"
ORDER_STATUS_COMPLETED = "Completed"


class Order(Base):
    __tablename__ = "orders"

    id = Column(String(50), primary_key=True, default=lambda: str(uuid.uuid4()))
    # Customer and product names are snapshots taken when the order is placed;
    # later edits to either record never change historical orders.
    customer_id = Column(String(50), nullable=False, index=True)
    customer_name = Column(String(255), nullable=False)
    product_id = Column(String(50), nullable=False)
    product_name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(18, 2), nullable=False)
    total_price = Column(Numeric(18, 2), nullable=False)
    # Open string: admins may set any value
    status = Column(String(50), nullable=False, default=ORDER_STATUS_PENDING)
    order_date = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    def __repr__(self):
        return f"<Order(id='{self.id}', customer='{self.customer_name}', status='{self.status}')>"
