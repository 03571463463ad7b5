"""
Order management endpoints
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from slowapi import Limiter
from slowapi.util import get_remote_address
import logging

from app.config import RATE_LIMIT_ENABLED
from app.database import get_db
from app.models.user import User
from app.schemas.order import OrderCreate, OrderUpdate, OrderResponse
from app.services.order_service import OrderService
from app.auth.auth_handler import get_current_tenant
from app.utils.error_handler import OrderServiceError, to_http_exception

logger = logging.getLogger(__name__)
limiter = Limiter(key_func=get_remote_address, enabled=RATE_LIMIT_ENABLED)

router = APIRouter()

@router.post("/", response_model=OrderResponse, status_code=201)
@limiter.limit("10/minute")
async def create_order(
    request: Request,
    order: OrderCreate,
    tenant: User = Depends(get_current_tenant),
    db: Session = Depends(get_db)
):
    """Create an order with its items and an optional first payment"""
    try:
        order_service = OrderService(db)
        return await order_service.create_order(tenant, order)
    except OrderServiceError as e:
        logger.warning(f"Failed to create order: {e}")
        raise to_http_exception(e)

@router.get("/{order_id}", response_model=OrderResponse)
@limiter.limit("30/minute")
async def get_order(
    request: Request,
    order_id: int,
    tenant: User = Depends(get_current_tenant),
    db: Session = Depends(get_db)
):
    """Get a specific order by ID"""
    try:
        order_service = OrderService(db)
        return await order_service.get_order(tenant, order_id)
    except OrderServiceError as e:
        raise to_http_exception(e)

@router.put("/{order_id}", response_model=OrderResponse)
@limiter.limit("10/minute")
async def update_order(
    request: Request,
    order_id: int,
    order_update: OrderUpdate,
    tenant: User = Depends(get_current_tenant),
    db: Session = Depends(get_db)
):
    """Change status, replace notes and/or add a payment"""
    try:
        order_service = OrderService(db)
        return await order_service.update_order(tenant, order_id, order_update)
    except OrderServiceError as e:
        logger.warning(f"Failed to update order {order_id}: {e}")
        raise to_http_exception(e)

@router.delete("/{order_id}")
@limiter.limit("10/minute")
async def delete_order(
    request: Request,
    order_id: int,
    tenant: User = Depends(get_current_tenant),
    db: Session = Depends(get_db)
):
    """Delete an order that has not been delivered"""
    try:
        order_service = OrderService(db)
        await order_service.delete_order(tenant, order_id)
        return {"message": "Order deleted successfully"}
    except OrderServiceError as e:
        logger.warning(f"Failed to delete order {order_id}: {e}")
        raise to_http_exception(e)
