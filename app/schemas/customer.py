"""
Pydantic schemas for Customer operations
"""

from pydantic import BaseModel, Field, validator, EmailStr
from typing import Optional
from datetime import datetime

class CustomerCreate(BaseModel):
    """Schema for registering a customer"""
    name: str = Field(..., max_length=100, description="Customer name")
    phone: str = Field(..., max_length=20, description="Nigerian phone number")
    email: Optional[EmailStr] = Field(None, description="Email address")
    address: Optional[str] = Field(None, description="Pickup / delivery address")
    notes: Optional[str] = Field(None, description="Additional notes")

    @validator('name')
    def validate_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Customer name is required')
        return v

    @validator('address', 'notes')
    def blank_to_none(cls, v):
        if v is None:
            return v
        return v.strip() or None

class CustomerResponse(BaseModel):
    """Schema for customer responses"""
    id: int
    name: str
    phone: str
    email: Optional[str]
    address: Optional[str]
    notes: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True
