"""
Order service: creation, update, payment recording and deletion of orders

Every multi-row write runs inside a single TransactionScope so an order, its
items and its payments are committed together or not at all.
"""

from sqlalchemy.orm import Session
from typing import Optional
import logging

from app.models.customer import Customer
from app.models.order import Order, OrderItem, Payment
from app.models.user import User
from app.schemas.order import OrderCreate, OrderUpdate
from app.services.status_policy import ensure_valid_transition
from app.utils.error_handler import (
    ConflictError, DatabaseError, NotFoundError, TransactionScope
)
from app.utils.orders import compute_balance, generate_order_number, validate_order_items

logger = logging.getLogger(__name__)

ORDER_NUMBER_ATTEMPTS = 5

def has_payment(amount: Optional[float], method: Optional[str]) -> bool:
    """A payment is recorded only for a positive amount with a method"""
    return bool(amount and amount > 0 and method)

class OrderService:
    """Service for order lifecycle operations, scoped to one tenant"""

    def __init__(self, db: Session):
        self.db = db

    async def get_order(self, tenant: User, order_id: int) -> Order:
        """Get an order with its items and payments"""
        order = self.db.query(Order).filter(
            Order.id == order_id,
            Order.user_id == tenant.id
        ).first()
        if not order:
            raise NotFoundError("Order not found")
        return order

    async def create_order(self, tenant: User, order_data: OrderCreate) -> Order:
        """
        Create an order, its items and an optional first payment.

        Raises:
            ValidationError: malformed items
            NotFoundError: customer missing or owned by another tenant
            DatabaseError: persistence failed; nothing was committed
        """
        items, total_amount = validate_order_items(order_data.items)

        customer = self.db.query(Customer).filter(
            Customer.id == order_data.customer_id,
            Customer.user_id == tenant.id
        ).first()
        if not customer:
            raise NotFoundError("Customer not found")

        order_number = self._generate_unique_order_number()

        with TransactionScope(self.db):
            order = Order(
                order_number=order_number,
                status="received",
                total_amount=total_amount,
                paid_amount=0,
                due_date=order_data.due_date,
                notes=order_data.notes or None,
                customer_id=customer.id,
                user_id=tenant.id,
                items=[
                    OrderItem(
                        item_type=item.item_type.strip(),
                        service_type=item.service_type,
                        quantity=item.quantity,
                        price=item.price,
                        notes=item.notes or None,
                    )
                    for item in items
                ],
            )
            self.db.add(order)
            self.db.flush()

            if has_payment(order_data.payment_amount, order_data.payment_method):
                self._check_overpayment(order, order_data.payment_amount)
                self._record_payment(order, tenant, order_data.payment_amount, order_data.payment_method)
                self._increment_paid_amount(order, order_data.payment_amount)

        self.db.refresh(order)
        logger.info(
            f"Created order {order.order_number} (ID: {order.id}) for customer {customer.id}, "
            f"total {order.total_amount}, paid {order.paid_amount}"
        )
        return order

    async def update_order(self, tenant: User, order_id: int, order_update: OrderUpdate) -> Order:
        """
        Apply a status change, a notes replacement and/or a new payment.

        Raises:
            NotFoundError: order missing or owned by another tenant
            InvalidTransitionError: status change breaks the workflow
            DatabaseError: persistence failed; nothing was committed
        """
        order = await self.get_order(tenant, order_id)
        update_data = order_update.dict(exclude_unset=True)

        new_status = update_data.get("status")
        if new_status == order.status:
            new_status = None
        if new_status:
            ensure_valid_transition(order.status, new_status)

        payment_amount = update_data.get("payment_amount")
        payment_method = update_data.get("payment_method")

        with TransactionScope(self.db):
            if new_status:
                logger.info(f"Order {order.order_number}: {order.status} -> {new_status}")
                order.status = new_status
            if "notes" in update_data:
                order.notes = update_data["notes"]

            if has_payment(payment_amount, payment_method):
                self._check_overpayment(order, payment_amount)
                self._record_payment(order, tenant, payment_amount, payment_method)
                self._increment_paid_amount(order, payment_amount)

        self.db.refresh(order)
        logger.info(f"Updated order with ID: {order.id}")
        return order

    async def delete_order(self, tenant: User, order_id: int) -> None:
        """
        Delete an order together with its items and payments.

        Raises:
            NotFoundError: order missing or owned by another tenant
            ConflictError: order was already delivered
        """
        order = await self.get_order(tenant, order_id)
        if order.status == "delivered":
            logger.warning(f"Refused to delete delivered order {order.order_number}")
            raise ConflictError("Cannot delete delivered orders")

        with TransactionScope(self.db):
            self.db.delete(order)

        logger.info(f"Deleted order with ID: {order_id}")

    def _generate_unique_order_number(self) -> str:
        for _ in range(ORDER_NUMBER_ATTEMPTS):
            order_number = generate_order_number()
            exists = self.db.query(Order.id).filter(Order.order_number == order_number).first()
            if not exists:
                return order_number
        raise DatabaseError("Could not allocate a unique order number")

    def _check_overpayment(self, order: Order, amount: float) -> None:
        balance = compute_balance(order.total_amount, order.paid_amount or 0)
        if amount > balance:
            logger.warning(
                f"Payment of {amount} on order {order.order_number} exceeds balance {balance}"
            )

    def _record_payment(self, order: Order, tenant: User, amount: float, method: str) -> Payment:
        payment = Payment(order_id=order.id, user_id=tenant.id, amount=amount, method=method)
        self.db.add(payment)
        self.db.flush()
        logger.info(f"Recorded {method} payment of {amount} on order {order.order_number}")
        return payment

    def _increment_paid_amount(self, order: Order, amount: float) -> None:
        # Single UPDATE expression so concurrent payments cannot lose an increment
        self.db.query(Order).filter(Order.id == order.id).update(
            {Order.paid_amount: Order.paid_amount + amount},
            synchronize_session=False
        )
