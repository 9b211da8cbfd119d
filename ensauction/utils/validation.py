"""
Input Validation - sanitization of caller-supplied values.

Provides validation for external inputs before they reach the ledger:
- Address format
- Amount bounds
- Salts
"""

from typing import Any, Tuple

from ensauction.crypto import ADDRESS_SIZE, is_valid_address

# =============================================================================
# Constants
# =============================================================================

MIN_AMOUNT = 0
MAX_AMOUNT = 2**256 - 1
MAX_SALT_LENGTH = 1024


# =============================================================================
# Validation Functions
# =============================================================================


def validate_integer(
    value: Any,
    name: str,
    min_val: int = MIN_AMOUNT,
    max_val: int = MAX_AMOUNT,
) -> Tuple[bool, str]:
    """
    Validate integer within bounds.

    Args:
        value: Value to validate
        name: Field name for errors
        min_val: Minimum allowed value
        max_val: Maximum allowed value

    Returns:
        (is_valid, error_message)
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return False, f"{name} must be int, got {type(value).__name__}"

    if value < min_val:
        return False, f"{name} must be >= {min_val}, got {value}"

    if value > max_val:
        return False, f"{name} must be <= {max_val}, got {value}"

    return True, ""


def validate_amount(amount: Any, name: str = "amount") -> Tuple[bool, str]:
    """Validate a wei amount."""
    return validate_integer(amount, name, MIN_AMOUNT, MAX_AMOUNT)


def validate_address(address: Any, name: str = "address") -> Tuple[bool, str]:
    """Validate a 0x-prefixed address."""
    if not isinstance(address, str):
        return False, f"{name} must be str, got {type(address).__name__}"
    if not is_valid_address(address):
        return False, f"{name} must be 0x followed by {2 * ADDRESS_SIZE} hex characters"
    return True, ""


def validate_salt(salt: Any) -> Tuple[bool, str]:
    """Validate a salt phrase (emptiness is reported separately)."""
    if not isinstance(salt, str):
        return False, f"salt must be str, got {type(salt).__name__}"
    if len(salt) > MAX_SALT_LENGTH:
        return False, f"salt exceeds max length {MAX_SALT_LENGTH}"
    return True, ""


# =============================================================================
# Module Exports
# =============================================================================

__all__ = [
    "validate_integer",
    "validate_amount",
    "validate_address",
    "validate_salt",
    "MIN_AMOUNT",
    "MAX_AMOUNT",
]
