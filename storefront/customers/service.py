from typing import List, Optional
from uuid import uuid4

from sqlalchemy import func
from sqlalchemy.orm import Session

from .models import Customer
from ..schemas.customers import CustomerCreate, CustomerUpdate
from ..core.exceptions import NotFoundError
from ..logging import logger


class CustomerService:

    @staticmethod
    def get_all_customers(db: Session) -> List[Customer]:
        return db.query(Customer).order_by(Customer.name, Customer.surname).all()

    @staticmethod
    def get_active_customers(db: Session) -> List[Customer]:
        """Customers shown on the public customer list"""
        return db.query(Customer).filter(Customer.is_active.is_(True))\
                 .order_by(Customer.name, Customer.surname).all()

    @staticmethod
    def get_customer_by_id(db: Session, customer_id: str) -> Customer:
        customer = db.query(Customer).filter(Customer.id == customer_id).first()
        if not customer:
            logger.warning(f"Customer not found with ID: {customer_id}")
            raise NotFoundError("Customer", customer_id, redirect="/customers")
        return customer

    @staticmethod
    def find_active_by_username(db: Session, username: str) -> Optional[Customer]:
        """Case-insensitive exact match on username among active customers"""
        return db.query(Customer).filter(
            func.lower(Customer.username) == username.lower(),
            Customer.is_active.is_(True),
        ).first()

    @staticmethod
    def create_customer(db: Session, customer_data: CustomerCreate) -> Customer:
        customer = Customer(
            id=customer_data.id or str(uuid4()),
            name=customer_data.name,
            surname=customer_data.surname,
            username=customer_data.username,
            email=customer_data.email,
            shipping_address=customer_data.shipping_address,
            is_active=True,
        )
        db.add(customer)
        db.commit()
        db.refresh(customer)
        logger.info(f"Customer created: {customer.id} ({customer.username})")
        return customer

    @staticmethod
    def update_customer(db: Session, customer_id: str, customer_data: CustomerUpdate) -> Customer:
        customer = CustomerService.get_customer_by_id(db, customer_id)
        for field, value in customer_data.model_dump().items():
            setattr(customer, field, value)
        db.commit()
        db.refresh(customer)
        logger.info(f"Customer updated: {customer.id}")
        return customer

    @staticmethod
    def delete_customer(db: Session, customer_id: str) -> None:
        """Existing orders keep their name snapshot and are left in place"""
        customer = CustomerService.get_customer_by_id(db, customer_id)
        db.delete(customer)
        db.commit()
        logger.info(f"Customer deleted: {customer_id}")
