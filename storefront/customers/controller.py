from typing import List
from fastapi import APIRouter, Request, status

from ..auth.authorization import AdminUser, CustomerOrAdmin
from ..auth.models import MessageResponse
from ..core.exceptions import StorefrontError, UnexpectedError
from ..core.flash import flash
from ..database.core import DbSession
from ..schemas.customers import CustomerCreate, CustomerUpdate, CustomerResponse
from ..logging import logger
from .service import CustomerService

router = APIRouter(prefix="/customers", tags=["Customers"])


@router.get("/", response_model=List[CustomerResponse])
async def list_customers(current_user: CustomerOrAdmin, db: DbSession):
    """Active customers"""
    try:
        customers = CustomerService.get_active_customers(db)
    except Exception as e:
        logger.exception("Error loading customers")
        raise UnexpectedError("load customers", str(e)) from e
    logger.info(f"User {current_user.username} listed {len(customers)} customers")
    return customers


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(customer_id: str, current_user: AdminUser, db: DbSession):
    try:
        return CustomerService.get_customer_by_id(db, customer_id)
    except StorefrontError:
        raise
    except Exception as e:
        logger.exception(f"Error loading customer {customer_id}")
        raise UnexpectedError("load the customer", str(e)) from e


@router.post("/", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
async def create_customer(
    request: Request,
    customer_data: CustomerCreate,
    current_user: AdminUser,
    db: DbSession
):
    try:
        customer = CustomerService.create_customer(db, customer_data)
    except StorefrontError:
        raise
    except Exception as e:
        db.rollback()
        logger.exception(f"Error creating customer {customer_data.username}")
        raise UnexpectedError("create the customer", str(e)) from e

    logger.info(f"Admin {current_user.username} created customer {customer.id}")
    flash(request, "success", "Customer created successfully!")
    return customer


@router.put("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    request: Request,
    customer_id: str,
    customer_data: CustomerUpdate,
    current_user: AdminUser,
    db: DbSession
):
    try:
        customer = CustomerService.update_customer(db, customer_id, customer_data)
    except StorefrontError:
        raise
    except Exception as e:
        db.rollback()
        logger.exception(f"Error updating customer {customer_id}")
        raise UnexpectedError("update the customer", str(e)) from e

    logger.info(f"Admin {current_user.username} updated customer {customer_id}")
    flash(request, "success", "Customer updated successfully!")
    return customer


@router.delete("/{customer_id}", response_model=MessageResponse)
async def delete_customer(
    request: Request,
    customer_id: str,
    current_user: AdminUser,
    db: DbSession
):
    try:
        CustomerService.delete_customer(db, customer_id)
    except StorefrontError:
        raise
    except Exception as e:
        db.rollback()
        logger.exception(f"Error deleting customer {customer_id}")
        raise UnexpectedError("delete the customer", str(e)) from e

    logger.info(f"Admin {current_user.username} deleted customer {customer_id}")
    message = "Customer deleted successfully!"
    flash(request, "success", message)
    return MessageResponse(message=message, redirect="/customers")
