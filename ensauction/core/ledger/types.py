"""
Ledger data types.

These mirror what the registrar exposes for a top-level name. The locked
value is a tagged type: the ledger stores zero to mean "the minimum price
applies", which is decoded here into MinimumValue instead of being carried
around as a magic number.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Union

from ensauction.crypto import ZERO_ADDRESS, is_zero_address


# =============================================================================
# Enums
# =============================================================================


class RegistrarStatus(IntEnum):
    """Raw mode stored by the registrar for a name."""
    OPEN = 0               # Never auctioned, or auction lapsed
    AUCTION = 1            # Auction started
    OWNED = 2              # Auction concluded with a winning deed
    FORBIDDEN = 3          # Invalidated
    REVEAL = 4             # Reveal window
    NOT_YET_AVAILABLE = 5  # Not released for auction yet


# =============================================================================
# Locked value
# =============================================================================


@dataclass(frozen=True)
class MinimumValue:
    """The registrar's minimum price applies."""

    def amount(self, min_price: int) -> int:
        return min_price

    @property
    def is_minimum(self) -> bool:
        return True


@dataclass(frozen=True)
class ExplicitValue:
    """An explicit locked amount in wei."""
    wei: int

    def amount(self, min_price: int) -> int:
        return self.wei

    @property
    def is_minimum(self) -> bool:
        return False


LockedValue = Union[MinimumValue, ExplicitValue]


def locked_value_from_raw(raw: int) -> LockedValue:
    """Decode the ledger's zero-as-minimum encoding."""
    if raw < 0:
        raise ValueError("Locked value cannot be negative")
    return MinimumValue() if raw == 0 else ExplicitValue(raw)


def locked_value_to_raw(value: LockedValue) -> int:
    """Encode back to the ledger representation."""
    return 0 if value.is_minimum else value.wei


# =============================================================================
# Data Structures
# =============================================================================


@dataclass(frozen=True)
class AuctionEntry:
    """
    The ledger's view of one top-level name.

    Attributes:
        status: Raw registrar mode
        deed_address: Deed holding the winning deposit (zero if none)
        registration_date: Unix time the auction ends (0 if never started)
        value: Settlement price locked in the deed
        highest_bid: Highest revealed bid
    """
    status: RegistrarStatus = RegistrarStatus.OPEN
    deed_address: str = ZERO_ADDRESS
    registration_date: int = 0
    value: LockedValue = MinimumValue()
    highest_bid: int = 0

    @classmethod
    def from_raw(
        cls,
        status: int,
        deed_address: str,
        registration_date: int,
        value: int,
        highest_bid: int,
    ) -> "AuctionEntry":
        """Build from the raw (state, deed, date, value, highestBid) tuple."""
        return cls(
            status=RegistrarStatus(status),
            deed_address=deed_address,
            registration_date=registration_date,
            value=locked_value_from_raw(value),
            highest_bid=highest_bid,
        )

    @property
    def has_deed(self) -> bool:
        return not is_zero_address(self.deed_address)

    @property
    def auction_started(self) -> bool:
        return self.registration_date > 0


@dataclass(frozen=True)
class Deed:
    """A locked stake backing a name."""
    address: str
    owner: str


@dataclass(frozen=True)
class TransactionRef:
    """Opaque reference to a submitted ledger operation."""
    tx_id: str
    operation: str

    def __str__(self) -> str:
        return self.tx_id
