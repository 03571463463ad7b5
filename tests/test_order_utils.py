"""
Unit tests for order arithmetic, item validation and order numbers
"""

import re

import pytest

from app.schemas.order import OrderItemCreate
from app.utils.error_handler import ValidationError
from app.utils.orders import (
    PAYMENT_STATUS_LABELS,
    compute_balance,
    compute_total,
    generate_order_number,
    payment_status,
    validate_order_items,
)

class TestTotals:
    """Test cases for total and balance arithmetic"""

    def test_compute_total(self):
        items = [{"quantity": 2, "price": 200}, {"quantity": 1, "price": 500}]
        assert compute_total(items) == 900

    def test_compute_total_accepts_schema_objects(self):
        items = [
            OrderItemCreate(item_type="Shirt", quantity=3, price=150.5),
            OrderItemCreate(item_type="Suit", quantity=1, price=1000),
        ]
        assert compute_total(items) == pytest.approx(1451.5)

    def test_compute_total_is_repeatable(self):
        items = [{"quantity": 4, "price": 250}, {"quantity": 2, "price": 800}]
        first = compute_total(items)
        second = compute_total(items)
        assert first == second == 2600
        assert items == [{"quantity": 4, "price": 250}, {"quantity": 2, "price": 800}]

    def test_compute_balance(self):
        assert compute_balance(1000, 400) == 600
        assert compute_balance(1000, 1000) == 0
        assert compute_balance(1000, 1200) == -200

    def test_payment_status_boundaries(self):
        assert payment_status(1000, 1000) == "paid"
        assert payment_status(1000, 1500) == "paid"
        assert payment_status(1000, 400) == "partial"
        assert payment_status(1000, 0.01) == "partial"
        assert payment_status(1000, 0) == "pending"

    def test_payment_status_labels(self):
        assert PAYMENT_STATUS_LABELS[payment_status(500, 0)] == "Pending Payment"
        assert PAYMENT_STATUS_LABELS[payment_status(500, 500)] == "Fully Paid"

class TestItemValidation:
    """Test cases for line item validation"""

    def test_valid_items_return_total(self):
        items = [
            {"item_type": "Shirt", "quantity": 2, "price": 200},
            {"item_type": "Duvet", "quantity": 1, "price": 800, "service_type": "dry_cleaning"},
        ]
        validated, total = validate_order_items(items)
        assert validated is items
        assert total == 1200

    @pytest.mark.parametrize("items", [None, []])
    def test_empty_items_rejected(self, items):
        with pytest.raises(ValidationError, match="At least one item is required"):
            validate_order_items(items)

    @pytest.mark.parametrize("item_type", [None, "", "   "])
    def test_blank_item_type_rejected(self, item_type):
        with pytest.raises(ValidationError, match="Item type is required"):
            validate_order_items([{"item_type": item_type, "quantity": 1, "price": 100}])

    @pytest.mark.parametrize("quantity", [None, 0, -2])
    def test_non_positive_quantity_rejected(self, quantity):
        with pytest.raises(ValidationError, match="Quantity must be greater than 0"):
            validate_order_items([{"item_type": "Shirt", "quantity": quantity, "price": 100}])

    @pytest.mark.parametrize("price", [None, 0, -50])
    def test_non_positive_price_rejected(self, price):
        with pytest.raises(ValidationError, match="Price must be greater than 0"):
            validate_order_items([{"item_type": "Shirt", "quantity": 1, "price": price}])

    @pytest.mark.parametrize("quantity", [1.5, 2.0, "3", True])
    def test_non_integer_quantity_rejected(self, quantity):
        with pytest.raises(ValidationError, match="Quantity must be a whole number"):
            validate_order_items([{"item_type": "Shirt", "quantity": quantity, "price": 100}])

    def test_unknown_service_type_rejected(self):
        with pytest.raises(ValidationError, match="Unknown service type"):
            validate_order_items([
                {"item_type": "Shirt", "quantity": 1, "price": 100, "service_type": "teleport"}
            ])

    def test_first_violation_wins(self):
        items = [
            {"item_type": "Shirt", "quantity": 0, "price": 100},
            {"item_type": "", "quantity": 1, "price": 100},
        ]
        with pytest.raises(ValidationError, match="Quantity"):
            validate_order_items(items)

def test_order_number_format():
    order_number = generate_order_number()
    assert re.match(r"^LDY-\d{8}-\d{3}$", order_number)

def test_order_number_custom_prefix():
    assert generate_order_number("WSH").startswith("WSH-")
