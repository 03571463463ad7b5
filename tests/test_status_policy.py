"""
Unit tests for the order status workflow
"""

import pytest

from app.services.status_policy import (
    ORDER_STATUSES,
    WORKFLOW,
    ensure_valid_transition,
    is_valid_transition,
    next_status,
)
from app.utils.error_handler import InvalidTransitionError

@pytest.mark.parametrize("from_status", WORKFLOW[:-1])
@pytest.mark.parametrize("to_status", WORKFLOW)
def test_forward_or_stay_only(from_status, to_status):
    expected = WORKFLOW.index(to_status) >= WORKFLOW.index(from_status)
    assert is_valid_transition(from_status, to_status) is expected

def test_examples():
    assert is_valid_transition("received", "ready")
    assert not is_valid_transition("ready", "received")
    assert is_valid_transition("in_progress", "in_progress")

@pytest.mark.parametrize("to_status", ORDER_STATUSES)
def test_delivered_is_terminal(to_status):
    assert not is_valid_transition("delivered", to_status)

@pytest.mark.parametrize("to_status", ORDER_STATUSES)
def test_cancelled_is_terminal(to_status):
    assert not is_valid_transition("cancelled", to_status)

@pytest.mark.parametrize("from_status", ["received", "in_progress", "ready"])
def test_cancellation_reachable(from_status):
    assert is_valid_transition(from_status, "cancelled")

def test_unknown_states_rejected():
    assert not is_valid_transition("received", "lost")
    assert not is_valid_transition("lost", "ready")

def test_ensure_valid_transition_carries_states():
    with pytest.raises(InvalidTransitionError) as exc_info:
        ensure_valid_transition("ready", "received")
    assert exc_info.value.from_status == "ready"
    assert exc_info.value.to_status == "received"
    assert "Cannot change status from ready to received" in str(exc_info.value)

def test_ensure_valid_transition_passes_silently():
    assert ensure_valid_transition("received", "in_progress") is None

def test_next_status():
    assert next_status("received") == "in_progress"
    assert next_status("in_progress") == "ready"
    assert next_status("ready") == "delivered"
    assert next_status("delivered") is None
    assert next_status("cancelled") is None
