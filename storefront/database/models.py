# Central models file: importing it registers every table with Base.metadata

from .core import Base

from ..users.models import User
from ..customers.models import Customer
from ..products.models import Product
from ..orders.models import Order
from ..cart.models import CartItem
from ..uploads.models import FileUpload

# Export all models
__all__ = [
    "Base",
    "User",
    "Customer",
    "Product",
    "Order",
    "CartItem",
    "FileUpload",
]
