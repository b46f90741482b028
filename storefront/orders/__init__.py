from .controller import router
from .models import Order
from .service import OrderService

__all__ = ["router", "Order", "OrderService"]
