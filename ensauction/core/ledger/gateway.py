"""
LedgerGateway - the read/write façade this engine consumes.

Implementations talk to the registration ledger (registrar, registry and
deed contracts). Signing and transport are theirs; every submit returns an
opaque TransactionRef and never waits for confirmation.

Addresses are 0x-prefixed hex strings, hashes are raw 32-byte values and
amounts are integers in wei.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ensauction.core.ledger.types import AuctionEntry, TransactionRef


class LedgerGateway(ABC):
    """Abstract registration ledger."""

    # =========================================================================
    # Reads
    # =========================================================================

    @abstractmethod
    def get_auction_entry(self, name: str) -> AuctionEntry:
        """Auction entry of a top-level name."""

    @abstractmethod
    def get_owner(self, node: bytes) -> str:
        """Registry owner of a namehash; zero address when unset."""

    @abstractmethod
    def get_resolver(self, node: bytes) -> str:
        """Resolver of a namehash; zero address when unset."""

    @abstractmethod
    def get_deed_owner(self, deed_address: str) -> str:
        """Owner of a deed."""

    @abstractmethod
    def get_sealed_bid(self, bidder: str, sealed_hash: bytes) -> Optional[int]:
        """Deposit recorded for a sealed bid, or None if there is none."""

    # =========================================================================
    # Writes
    # =========================================================================

    @abstractmethod
    def submit_sealed_bid(
        self, name: str, sealed_hash: bytes, deposit: int, sender: str
    ) -> TransactionRef:
        """Record a sealed bid, starting the auction if the name is open."""

    @abstractmethod
    def submit_reveal(
        self, name: str, bidder: str, bid_value: int, salt: str, sender: str
    ) -> TransactionRef:
        """Reveal a sealed bid."""

    @abstractmethod
    def submit_finish(self, name: str, sender: str) -> TransactionRef:
        """Finalize a won auction, assigning registry ownership."""

    @abstractmethod
    def submit_invalidate(self, name: str, sender: str) -> TransactionRef:
        """Invalidate a non-conforming name."""

    @abstractmethod
    def submit_set_subdomain_owner(
        self, domain: str, subdomain: str, owner: str, sender: str
    ) -> TransactionRef:
        """Assign the owner of subdomain.domain."""

    @abstractmethod
    def submit_transfer(self, name: str, new_owner: str, sender: str) -> TransactionRef:
        """Transfer the deed of an owned name."""
