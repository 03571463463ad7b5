"""
Customer registration and lookup
"""

from sqlalchemy.orm import Session
import logging

from app.models.customer import Customer
from app.models.user import User
from app.schemas.customer import CustomerCreate
from app.utils.error_handler import ConflictError, NotFoundError, TransactionScope, ValidationError
from app.utils.validation import format_nigerian_phone, validate_nigerian_phone

logger = logging.getLogger(__name__)

class CustomerService:
    """Service for the customers orders are placed for"""

    def __init__(self, db: Session):
        self.db = db

    async def create_customer(self, tenant: User, customer_data: CustomerCreate) -> Customer:
        """Register a customer under the tenant"""
        if not validate_nigerian_phone(customer_data.phone):
            raise ValidationError(
                "Invalid Nigerian phone number. Format: 080XXXXXXXX, +234XXXXXXXXXX, or 234XXXXXXXXXX"
            )
        phone = format_nigerian_phone(customer_data.phone)

        existing = self.db.query(Customer).filter(
            Customer.user_id == tenant.id,
            Customer.phone == phone
        ).first()
        if existing:
            raise ConflictError("A customer with this phone number already exists")

        with TransactionScope(self.db):
            customer = Customer(
                name=customer_data.name,
                phone=phone,
                email=customer_data.email.lower() if customer_data.email else None,
                address=customer_data.address,
                notes=customer_data.notes,
                user_id=tenant.id,
            )
            self.db.add(customer)

        self.db.refresh(customer)
        logger.info(f"Created customer with ID: {customer.id}")
        return customer

    async def get_customer(self, tenant: User, customer_id: int) -> Customer:
        customer = self.db.query(Customer).filter(
            Customer.id == customer_id,
            Customer.user_id == tenant.id
        ).first()
        if not customer:
            raise NotFoundError("Customer not found")
        return customer
