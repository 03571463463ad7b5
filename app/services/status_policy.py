"""
Order status workflow

received -> in_progress -> ready -> delivered, with cancelled reachable from
any state that is not terminal. delivered and cancelled are terminal.
"""

from typing import Optional

from app.utils.error_handler import InvalidTransitionError

WORKFLOW = ["received", "in_progress", "ready", "delivered"]
CANCELLED = "cancelled"
ORDER_STATUSES = WORKFLOW + [CANCELLED]
TERMINAL_STATUSES = {"delivered", CANCELLED}

def is_valid_transition(from_status: str, to_status: str) -> bool:
    """Return True if an order may move from from_status to to_status"""
    if from_status in TERMINAL_STATUSES:
        return False
    if to_status == CANCELLED:
        return from_status in WORKFLOW
    if from_status not in WORKFLOW or to_status not in WORKFLOW:
        return False
    # Advance or stay, never regress
    return WORKFLOW.index(to_status) >= WORKFLOW.index(from_status)

def ensure_valid_transition(from_status: str, to_status: str) -> None:
    """Raise InvalidTransitionError if the transition is not allowed"""
    if not is_valid_transition(from_status, to_status):
        raise InvalidTransitionError(from_status, to_status)

def next_status(current_status: str) -> Optional[str]:
    """Next state in the workflow, or None at the end of it"""
    if current_status not in WORKFLOW:
        return None
    index = WORKFLOW.index(current_status)
    if index == len(WORKFLOW) - 1:
        return None
    return WORKFLOW[index + 1]
