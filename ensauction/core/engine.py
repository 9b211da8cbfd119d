"""
AuctionEngine - wires the components around one gateway.

Every component gets the same ledger client, config and clock; nothing is
held in module-level state.
"""

import time
from typing import Callable, Optional

from ensauction.core.auction.finalizer import AuctionFinalizer
from ensauction.core.auction.revealer import BidRevealer
from ensauction.core.auction.sealer import BidSealer
from ensauction.core.config import RegistrarConfig, config as default_config
from ensauction.core.info import NameInfoService
from ensauction.core.invalidator import Invalidator
from ensauction.core.ledger.client import LedgerClient
from ensauction.core.ledger.gateway import LedgerGateway
from ensauction.core.registry import Registry
from ensauction.core.state.resolver import NameStateResolver


class AuctionEngine:
    """Entry point for callers driving the name auction."""

    def __init__(
        self,
        gateway: LedgerGateway,
        config: Optional[RegistrarConfig] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.config = config or default_config
        self.clock = clock or time.time

        self.ledger = LedgerClient(gateway, self.config)
        self.resolver = NameStateResolver(self.ledger, self.config, self.clock)
        self.sealer = BidSealer(self.ledger, self.resolver, self.config)
        self.revealer = BidRevealer(self.ledger, self.resolver, self.config)
        self.finalizer = AuctionFinalizer(self.ledger, self.resolver, self.config)
        self.invalidator = Invalidator(self.ledger, self.resolver, self.config)
        self.registry = Registry(self.ledger, self.resolver, self.config)
        self.info = NameInfoService(self.ledger, self.resolver, self.config)

    def close(self) -> None:
        self.ledger.close()

    def __enter__(self) -> "AuctionEngine":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # Shortcuts for the common operations
    def state(self, name: str):
        return self.resolver.resolve(name)

    def bid(self, name: str, bidder: str, value: int, salt: str, mask: Optional[int] = None):
        return self.sealer.place_bid(name, bidder, value, salt, mask)

    def reveal(self, name: str, bidder: str, value: int, salt: str):
        return self.revealer.reveal(name, bidder, value, salt)

    def finish(self, name: str, sender: Optional[str] = None):
        return self.finalizer.finish(name, sender)

    def invalidate(self, name: str, sender: str):
        return self.invalidator.invalidate(name, sender)
