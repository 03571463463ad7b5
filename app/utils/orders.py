"""
Order arithmetic, item validation and order number generation

Everything here is pure: no database access and no hidden state.
"""

import random
import time
from typing import Any, Iterable, List, Optional, Tuple

from app.config import ORDER_NUMBER_PREFIX
from app.utils.error_handler import ValidationError

SERVICE_TYPES = {
    "wash_and_iron": "Wash & Iron",
    "dry_cleaning": "Dry Cleaning",
    "iron_only": "Iron Only",
    "starching": "Starching",
    "wash_and_fold": "Wash & Fold",
}

PAYMENT_METHODS = {
    "cash": "Cash",
    "bank_transfer": "Bank Transfer",
    "card": "Card",
    "mobile_money": "Mobile Money",
    "pos": "POS",
}

PAYMENT_STATUS_LABELS = {
    "paid": "Fully Paid",
    "partial": "Partially Paid",
    "pending": "Pending Payment",
}

def _field(item: Any, name: str) -> Any:
    """Read a field from a dict or an attribute-style object"""
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)

def generate_order_number(prefix: str = ORDER_NUMBER_PREFIX) -> str:
    """Build a human-facing order number: PREFIX-<timestamp suffix>-<random3>"""
    timestamp = str(int(time.time() * 1000))[-8:]
    suffix = f"{random.randint(0, 999):03d}"
    return f"{prefix}-{timestamp}-{suffix}"

def compute_total(items: Iterable[Any]) -> float:
    """Sum of quantity * price over all items"""
    return sum(_field(item, "quantity") * _field(item, "price") for item in items)

def compute_balance(total_amount: float, paid_amount: float) -> float:
    """Amount still owed; negative only when an order was overpaid"""
    return total_amount - paid_amount

def payment_status(total_amount: float, paid_amount: float) -> str:
    """Classify an order as paid, partial or pending"""
    if paid_amount >= total_amount:
        return "paid"
    elif paid_amount > 0:
        return "partial"
    return "pending"

def validate_order_items(items: Optional[List[Any]]) -> Tuple[List[Any], float]:
    """
    Validate proposed line items.

    Args:
        items: sequence of dicts or objects with item_type, quantity, price
            and an optional service_type

    Returns:
        The unchanged items and their computed total

    Raises:
        ValidationError: on the first malformed item, in iteration order
    """
    if not items:
        raise ValidationError("At least one item is required")

    for item in items:
        item_type = _field(item, "item_type")
        if not item_type or not str(item_type).strip():
            raise ValidationError("Item type is required for all items")

        quantity = _field(item, "quantity")
        if quantity is None:
            raise ValidationError("Quantity must be greater than 0")
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise ValidationError("Quantity must be a whole number")
        if quantity <= 0:
            raise ValidationError("Quantity must be greater than 0")

        price = _field(item, "price")
        if price is None or price <= 0:
            raise ValidationError("Price must be greater than 0")

        service_type = _field(item, "service_type")
        if service_type and service_type not in SERVICE_TYPES:
            raise ValidationError(f"Unknown service type: {service_type}")

    return items, compute_total(items)
