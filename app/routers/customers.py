"""
Customer endpoints
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from slowapi import Limiter
from slowapi.util import get_remote_address
import logging

from app.config import RATE_LIMIT_ENABLED
from app.database import get_db
from app.models.user import User
from app.schemas.customer import CustomerCreate, CustomerResponse
from app.services.customer_service import CustomerService
from app.auth.auth_handler import get_current_tenant
from app.utils.error_handler import OrderServiceError, to_http_exception

logger = logging.getLogger(__name__)
limiter = Limiter(key_func=get_remote_address, enabled=RATE_LIMIT_ENABLED)

router = APIRouter()

@router.post("/", response_model=CustomerResponse, status_code=201)
@limiter.limit("10/minute")
async def create_customer(
    request: Request,
    customer: CustomerCreate,
    tenant: User = Depends(get_current_tenant),
    db: Session = Depends(get_db)
):
    """Register a new customer"""
    try:
        customer_service = CustomerService(db)
        return await customer_service.create_customer(tenant, customer)
    except OrderServiceError as e:
        logger.warning(f"Failed to create customer: {e}")
        raise to_http_exception(e)

@router.get("/{customer_id}", response_model=CustomerResponse)
@limiter.limit("30/minute")
async def get_customer(
    request: Request,
    customer_id: int,
    tenant: User = Depends(get_current_tenant),
    db: Session = Depends(get_db)
):
    """Get a specific customer by ID"""
    try:
        customer_service = CustomerService(db)
        return await customer_service.get_customer(tenant, customer_id)
    except OrderServiceError as e:
        raise to_http_exception(e)
