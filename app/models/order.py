"""
Order, order item and payment models
"""

from sqlalchemy import Column, Integer, String, DateTime, Text, Float, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
from app.services import status_policy
from app.utils import orders as order_utils

class Order(Base):
    """One laundry job for one customer"""
    __tablename__ = "orders"
    
    id = Column(Integer, primary_key=True, index=True)
    order_number = Column(String(50), unique=True, index=True, nullable=False)
    status = Column(String(30), default="received", nullable=False)
    total_amount = Column(Float, default=0, nullable=False)
    paid_amount = Column(Float, default=0, nullable=False)
    due_date = Column(DateTime(timezone=True), nullable=False)
    notes = Column(Text, nullable=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), index=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    
    customer = relationship("Customer", back_populates="orders")
    user = relationship("User", back_populates="orders")
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )
    payments = relationship(
        "Payment",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="Payment.date.desc()",
    )
    
    @property
    def balance(self) -> float:
        return order_utils.compute_balance(self.total_amount or 0, self.paid_amount or 0)
    
    @property
    def payment_status(self) -> str:
        return order_utils.payment_status(self.total_amount or 0, self.paid_amount or 0)
    
    @property
    def next_status(self):
        return status_policy.next_status(self.status)
    
    def __repr__(self):
        return f"<Order(id={self.id}, order_number='{self.order_number}', status='{self.status}')>"

class OrderItem(Base):
    """Priced line within an order"""
    __tablename__ = "order_items"
    
    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), index=True, nullable=False)
    item_type = Column(String(100), nullable=False)
    service_type = Column(String(50), nullable=True)
    quantity = Column(Integer, nullable=False)
    price = Column(Float, nullable=False)  # unit price
    notes = Column(Text, nullable=True)
    
    order = relationship("Order", back_populates="items")
    
    def __repr__(self):
        return f"<OrderItem(id={self.id}, item_type='{self.item_type}', quantity={self.quantity})>"

class Payment(Base):
    """Money applied against an order's balance, append-only"""
    __tablename__ = "payments"
    
    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), index=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    amount = Column(Float, nullable=False)
    method = Column(String(30), nullable=False)
    date = Column(DateTime(timezone=True), server_default=func.now())
    
    order = relationship("Order", back_populates="payments")
    
    def __repr__(self):
        return f"<Payment(id={self.id}, order_id={self.order_id}, amount={self.amount}, method='{self.method}')>"
