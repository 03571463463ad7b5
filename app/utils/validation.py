"""
Contact detail validation helpers
"""

import re
from typing import Optional

_PHONE_SEPARATORS = re.compile(r"[\s\-()]")

# +234XXXXXXXXXX, 234XXXXXXXXXX, 0XXXXXXXXXX or XXXXXXXXXX
_NIGERIAN_PHONE_PATTERNS = [
    re.compile(r"^\+234[7-9][0-9]{9}$"),
    re.compile(r"^234[7-9][0-9]{9}$"),
    re.compile(r"^0[7-9][0-9]{9}$"),
    re.compile(r"^[7-9][0-9]{9}$"),
]

def validate_nigerian_phone(phone: Optional[str]) -> bool:
    """Return True if phone is a Nigerian mobile number in any accepted format"""
    if not phone:
        return False
    cleaned = _PHONE_SEPARATORS.sub("", phone)
    return any(pattern.match(cleaned) for pattern in _NIGERIAN_PHONE_PATTERNS)

def format_nigerian_phone(phone: str) -> str:
    """Normalise a Nigerian phone number to 0XXXXXXXXXX"""
    cleaned = _PHONE_SEPARATORS.sub("", phone)
    if cleaned.startswith("+234"):
        return "0" + cleaned[4:]
    elif cleaned.startswith("234"):
        return "0" + cleaned[3:]
    elif cleaned.startswith("0"):
        return cleaned
    elif re.match(r"^[7-9]", cleaned):
        return "0" + cleaned
    return cleaned
