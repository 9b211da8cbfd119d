"""
Amount parsing and formatting.

Amounts travel as integers in wei. Human input such as "0.01 ether" or
"4 gwei" is converted here; a bare number is read as wei.
"""

from decimal import Decimal, InvalidOperation

UNITS = {
    "wei": 0,
    "kwei": 3,
    "mwei": 6,
    "gwei": 9,
    "szabo": 12,
    "finney": 15,
    "ether": 18,
    "eth": 18,
}


def parse_amount(text: str) -> int:
    """
    Parse an amount into wei.

    Raises:
        ValueError: unknown unit, malformed number, negative or fractional wei
    """
    parts = text.strip().split()
    if len(parts) == 1:
        number, unit = parts[0], "wei"
    elif len(parts) == 2:
        number, unit = parts
    else:
        raise ValueError(f"Cannot parse amount {text!r}")

    unit = unit.lower()
    if unit not in UNITS:
        raise ValueError(f"Unknown unit {unit!r}")

    try:
        value = Decimal(number) * (Decimal(10) ** UNITS[unit])
    except InvalidOperation as e:
        raise ValueError(f"Invalid number {number!r}") from e

    if value < 0:
        raise ValueError("Amount cannot be negative")
    if value != value.to_integral_value():
        raise ValueError(f"{text!r} is not a whole number of wei")
    return int(value)


def format_amount(wei: int) -> str:
    """Render wei as ether, trimming trailing zeros."""
    ether = Decimal(wei) / (Decimal(10) ** UNITS["ether"])
    text = format(ether.normalize(), "f")
    return f"{text} Ether"
