"""
Name State Resolver - lifecycle state derived from ledger facts.

Nothing is cached: every query re-reads the ledger and recomputes the
state as a pure function of (now, raw ledger facts).

    AVAILABLE --first sealed bid--> BIDDING
    BIDDING   --reveal deadline---> REVEALING   (registration_date - reveal_period)
    REVEALING --registration date-> WON
    WON       --finish-----------> OWNED
    WON/OWNED --invalidate-------> INVALID

A reveal window that closes without any valid bid falls back to AVAILABLE.
Subdomains are not auctioned: they are OWNED when the registry has an
owner for them and AVAILABLE otherwise.
"""

import time
from enum import Enum
from typing import Callable, Optional

from ensauction.core.config import RegistrarConfig, config as default_config
from ensauction.core.ledger.client import LedgerClient
from ensauction.core.ledger.types import AuctionEntry, RegistrarStatus
from ensauction.core.names.namehash import name_hash
from ensauction.core.names.validator import NameValidator
from ensauction.crypto import is_zero_address
from ensauction.utils.logger import get_logger

logger = get_logger("state")


class NameState(Enum):
    """Lifecycle state of a name."""
    AVAILABLE = "Available"
    BIDDING = "Bidding"
    REVEALING = "Revealing"
    WON = "Won"
    OWNED = "Owned"
    INVALID = "Invalid"
    UNAVAILABLE = "Unavailable"  # Not released for auction yet

    def __str__(self) -> str:
        return self.value


def reveal_deadline(entry: AuctionEntry, reveal_period: int) -> int:
    """Unix time at which bidding closes and revealing opens."""
    return entry.registration_date - reveal_period


def derive_state(
    entry: AuctionEntry,
    owner: str,
    now: int,
    reveal_period: int,
) -> NameState:
    """
    Map raw ledger facts to a lifecycle state.

    Args:
        entry: Registrar entry of the top-level name
        owner: Registry owner of the name (zero address if unset)
        now: Current unix time
        reveal_period: Length of the reveal window in seconds
    """
    if entry.status == RegistrarStatus.FORBIDDEN:
        return NameState.INVALID
    if entry.status == RegistrarStatus.NOT_YET_AVAILABLE:
        return NameState.UNAVAILABLE
    if not entry.auction_started:
        return NameState.AVAILABLE

    if now < reveal_deadline(entry, reveal_period):
        return NameState.BIDDING
    if now < entry.registration_date:
        return NameState.REVEALING

    if not entry.has_deed:
        return NameState.AVAILABLE
    if is_zero_address(owner):
        return NameState.WON
    return NameState.OWNED


def derive_subdomain_state(owner: str) -> NameState:
    """Subdomains only distinguish assigned from unassigned."""
    return NameState.AVAILABLE if is_zero_address(owner) else NameState.OWNED


class NameStateResolver:
    """
    Resolves the current state of a name against the ledger.

    Attributes:
        ledger: Bounded ledger client
        config: Registrar parameters
        clock: Source of the current unix time
    """

    def __init__(
        self,
        ledger: LedgerClient,
        config: Optional[RegistrarConfig] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.ledger = ledger
        self.config = config or default_config
        self.clock = clock or time.time
        self.validator = NameValidator(self.config)

    def now(self) -> int:
        return int(self.clock())

    def entry(self, name: str) -> AuctionEntry:
        """Auction entry of the top-level name that `name` belongs to."""
        return self.ledger.entry(self.validator.registrar_name(name))

    def resolve(self, name: str, now: Optional[int] = None) -> NameState:
        """
        Current state of a name.

        Raises:
            InvalidNameError: malformed name
            LedgerUnavailableError: the ledger could not be queried
        """
        name = self.validator.canonical(name)
        now = self.now() if now is None else now
        owner = self.ledger.owner(name_hash(name))

        if self.validator.is_subdomain(name):
            state = derive_subdomain_state(owner)
        else:
            entry = self.ledger.entry(self.validator.registrar_name(name))
            state = derive_state(entry, owner, now, self.config.reveal_period)

        logger.debug(f"{name} is {state}")
        return state

    def in_state(self, name: str, *states: NameState) -> bool:
        return self.resolve(name) in states
