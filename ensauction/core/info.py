"""
Name information reports.

Collects what the ledger knows about a name into a NameInfo: lifecycle
state, auction deadlines, locked value (with the minimum price substituted),
highest bid, deed owner, registry owner and resolver.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from ensauction.core.config import RegistrarConfig, config as default_config
from ensauction.core.errors import ResolverNotSetError
from ensauction.core.ledger.client import LedgerClient
from ensauction.core.names.namehash import name_hash
from ensauction.core.state.resolver import NameState, NameStateResolver, reveal_deadline
from ensauction.crypto import is_zero_address


@dataclass(frozen=True)
class NameInfo:
    """Everything known about a name at one point in time."""
    name: str
    state: NameState
    restricted: bool = False
    bidding_until: Optional[datetime] = None
    revealing_until: Optional[datetime] = None
    registration_date: Optional[datetime] = None
    locked_value: Optional[int] = None
    highest_bid: Optional[int] = None
    deed_owner: Optional[str] = None
    owner: Optional[str] = None
    resolver: Optional[str] = None

    @property
    def available(self) -> bool:
        return self.state == NameState.AVAILABLE and not self.restricted


def _timestamp(seconds: int) -> datetime:
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


class NameInfoService:
    """Builds NameInfo reports from the ledger."""

    def __init__(
        self,
        ledger: LedgerClient,
        resolver: NameStateResolver,
        config: Optional[RegistrarConfig] = None,
    ) -> None:
        self.ledger = ledger
        self.resolver = resolver
        self.config = config or default_config
        self.validator = resolver.validator

    def availability(self, name: str) -> NameState:
        """State of a name for availability checks."""
        return self.resolver.resolve(name)

    def _registry_fields(self, node: bytes) -> dict:
        owner = self.ledger.owner(node)
        if is_zero_address(owner):
            return {}
        try:
            resolver = self.ledger.resolver(node)
        except ResolverNotSetError:
            resolver = None
        return {"owner": owner, "resolver": resolver}

    def describe(self, name: str) -> NameInfo:
        """
        Full report for a name.

        Raises:
            LedgerUnavailableError: the ledger could not be queried
        """
        name = self.validator.canonical(name)
        state = self.resolver.resolve(name)
        node = name_hash(name)

        if self.validator.is_subdomain(name):
            return NameInfo(name=name, state=state, **self._registry_fields(node))

        if state in (NameState.AVAILABLE, NameState.UNAVAILABLE, NameState.INVALID):
            return NameInfo(name=name, state=state, restricted=not self.validator.is_valid(name))

        entry = self.resolver.entry(name)
        fields = {"registration_date": _timestamp(entry.registration_date)}

        if state == NameState.BIDDING:
            fields["bidding_until"] = _timestamp(reveal_deadline(entry, self.config.reveal_period))
            return NameInfo(name=name, state=state, **fields)

        fields["locked_value"] = entry.value.amount(self.config.min_price)
        fields["highest_bid"] = entry.highest_bid
        if state == NameState.REVEALING:
            fields["revealing_until"] = _timestamp(entry.registration_date)
            return NameInfo(name=name, state=state, **fields)

        fields["deed_owner"] = self.ledger.deed_owner(entry.deed_address)
        if state == NameState.OWNED:
            fields.update(self._registry_fields(node))
        return NameInfo(name=name, state=state, **fields)
