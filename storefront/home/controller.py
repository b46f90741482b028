from fastapi import APIRouter, Request

from ..auth.authorization import OptionalUser
from ..core.config import settings
from ..core.exceptions import UnexpectedError
from ..core.flash import pop_flashes
from ..customers.service import CustomerService
from ..database.core import DbSession
from ..orders.service import OrderService
from ..products.service import ProductService
from ..schemas.dashboard import HomeResponse
from ..schemas.products import ProductResponse
from ..logging import logger

router = APIRouter(tags=["Home"])


@router.get("/", response_model=HomeResponse)
async def home(request: Request, current_user: OptionalUser, db: DbSession):
    try:
        customers = CustomerService.get_all_customers(db)
        products = ProductService.get_all_products(db)
        orders = OrderService.get_all_orders(db)
        revenue = OrderService.total_revenue(db)
    except Exception as e:
        logger.exception("Error loading home page data")
        raise UnexpectedError("load the home page", str(e)) from e

    logger.info(
        f"Successfully loaded: {len(customers)} customers, {len(products)} products, {len(orders)} orders"
    )
    greeting = f"Welcome back, {current_user.first_name}!" if current_user else None

    return HomeResponse(
        total_customers=len(customers),
        total_products=len(products),
        total_orders=len(orders),
        total_revenue=revenue,
        featured_products=[ProductResponse.model_validate(p) for p in products[:settings.FEATURED_PRODUCT_COUNT]],
        greeting=greeting,
        messages=pop_flashes(request),
    )
