"""
Pydantic schemas for Order operations
"""

from pydantic import BaseModel, Field, validator
from typing import List, Optional
from datetime import datetime

from app.services.status_policy import ORDER_STATUSES
from app.utils.orders import PAYMENT_METHODS

def _check_payment_method(v):
    if v is None:
        return v
    if v not in PAYMENT_METHODS:
        raise ValueError(f'Payment method must be one of: {", ".join(PAYMENT_METHODS)}')
    return v

class OrderItemCreate(BaseModel):
    """
    Proposed line item.

    Fields are loosely typed on purpose: item rules (non-blank type, positive
    quantity and price) are enforced by validate_order_items so that clients
    get the same messages whichever way the order is submitted.
    """
    item_type: Optional[str] = Field(None, max_length=100, description="Garment or item type, e.g. Shirt")
    service_type: Optional[str] = Field(None, description="Per-item service, e.g. dry_cleaning")
    quantity: Optional[int] = Field(None, description="Number of pieces")
    price: Optional[float] = Field(None, description="Unit price")
    notes: Optional[str] = Field(None, description="Item notes")

class OrderCreate(BaseModel):
    """Schema for creating a new order"""
    customer_id: int = Field(..., description="Owning customer")
    items: List[OrderItemCreate] = Field(default_factory=list, description="Line items")
    due_date: datetime = Field(..., description="Promised delivery date")
    notes: Optional[str] = Field(None, description="Additional notes")
    payment_amount: Optional[float] = Field(None, ge=0, description="Initial payment")
    payment_method: Optional[str] = Field(None, description="Initial payment method")

    @validator('payment_method')
    def validate_payment_method(cls, v):
        return _check_payment_method(v)

class OrderUpdate(BaseModel):
    """Schema for updating an existing order"""
    status: Optional[str] = Field(None)
    notes: Optional[str] = Field(None)
    payment_amount: Optional[float] = Field(None, ge=0)
    payment_method: Optional[str] = Field(None)

    @validator('status')
    def validate_status(cls, v):
        if v is None:
            return v
        if v not in ORDER_STATUSES:
            raise ValueError(f'Status must be one of: {", ".join(ORDER_STATUSES)}')
        return v

    @validator('payment_method')
    def validate_payment_method(cls, v):
        return _check_payment_method(v)

class OrderItemResponse(BaseModel):
    id: int
    item_type: str
    service_type: Optional[str]
    quantity: int
    price: float
    notes: Optional[str]

    class Config:
        from_attributes = True

class PaymentResponse(BaseModel):
    id: int
    amount: float
    method: str
    date: Optional[datetime]

    class Config:
        from_attributes = True

class CustomerSummary(BaseModel):
    id: int
    name: str
    phone: str

    class Config:
        from_attributes = True

class OrderResponse(BaseModel):
    """Schema for order responses, including derived balance fields"""
    id: int
    order_number: str
    status: str
    total_amount: float
    paid_amount: float
    balance: float
    payment_status: str
    next_status: Optional[str]
    due_date: datetime
    notes: Optional[str]
    customer_id: int
    customer: Optional[CustomerSummary] = None
    items: List[OrderItemResponse] = []
    payments: List[PaymentResponse] = []
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True
