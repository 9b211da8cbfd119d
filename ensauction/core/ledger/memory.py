"""
InMemoryLedger - a synthetic registration ledger.

Implements LedgerGateway with registrar semantics so the engine can be
exercised without a network:

1. **Bidding**: the first sealed bid on an open name starts its auction
2. **Reveal**: openings are checked against stored seals; the highest
   revealed bid holds the deed and the runner-up sets the price
3. **Finish**: the deed owner claims registry ownership
4. **Invalidate**: too-short names are forbidden, the deed is released

Rejected operations raise TransactionReverted, as a failed transaction
would. Time comes from an injectable clock.
"""

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from ensauction.core.auction.commitment import compute_seal
from ensauction.core.config import RegistrarConfig, config as default_config
from ensauction.core.ledger.gateway import LedgerGateway
from ensauction.core.ledger.types import AuctionEntry, RegistrarStatus, TransactionRef
from ensauction.core.names.namehash import label_hash, name_hash, split_labels
from ensauction.crypto import ZERO_ADDRESS, keccak256, normalize_address
from ensauction.utils.logger import get_logger

logger = get_logger("ledger.memory")


class TransactionReverted(RuntimeError):
    """A submitted operation was rejected by the ledger."""


@dataclass
class _DeedRecord:
    owner: str
    balance: int


@dataclass
class _EntryRecord:
    status: RegistrarStatus = RegistrarStatus.OPEN
    registration_date: int = 0
    value: int = 0
    highest_bid: int = 0
    deed: str = ZERO_ADDRESS
    reveals: List[Tuple[str, int]] = field(default_factory=list)


class InMemoryLedger(LedgerGateway):
    """
    Registrar, registry and deeds held in dictionaries.

    Attributes:
        entries: label hash -> auction entry
        deeds: deed address -> deed record
        owners: namehash -> registry owner
        resolvers: namehash -> resolver address
        sealed_bids: (bidder, seal) -> deposit
        refunds: address -> total refunded wei
    """

    def __init__(
        self,
        config: Optional[RegistrarConfig] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.config = config or default_config
        self.clock = clock or time.time

        self.entries: Dict[bytes, _EntryRecord] = {}
        self.deeds: Dict[str, _DeedRecord] = {}
        self.owners: Dict[bytes, str] = {}
        self.resolvers: Dict[bytes, str] = {}
        self.sealed_bids: Dict[Tuple[str, bytes], int] = {}
        self.refunds: Dict[str, int] = {}

        self._lock = threading.Lock()
        self._nonce = 0

    # =========================================================================
    # Internals
    # =========================================================================

    def now(self) -> int:
        return int(self.clock())

    def _label(self, name: str) -> str:
        labels = split_labels(name)
        if len(labels) != 2 or labels[1] != self.config.root_suffix:
            raise TransactionReverted(f"{name} is not a top-level name")
        return labels[0]

    def _entry(self, name: str) -> _EntryRecord:
        return self.entries.setdefault(label_hash(self._label(name)), _EntryRecord())

    def _mode(self, record: _EntryRecord) -> RegistrarStatus:
        if record.status in (RegistrarStatus.FORBIDDEN, RegistrarStatus.NOT_YET_AVAILABLE):
            return record.status
        now = self.now()
        if now < record.registration_date:
            if now < record.registration_date - self.config.reveal_period:
                return RegistrarStatus.AUCTION
            return RegistrarStatus.REVEAL
        if record.registration_date and record.deed != ZERO_ADDRESS:
            return RegistrarStatus.OWNED
        return RegistrarStatus.OPEN

    def _tx(self, operation: str) -> TransactionRef:
        self._nonce += 1
        digest = keccak256(f"{operation}:{self._nonce}".encode())
        return TransactionRef(tx_id="0x" + digest.hex(), operation=operation)

    def _refund(self, address: str, amount: int) -> None:
        if amount > 0:
            self.refunds[address] = self.refunds.get(address, 0) + amount

    def _new_deed(self, label: str, owner: str, balance: int) -> str:
        self._nonce += 1
        digest = keccak256(label_hash(label) + owner.encode() + self._nonce.to_bytes(8, "big"))
        address = "0x" + digest[-20:].hex()
        self.deeds[address] = _DeedRecord(owner=owner, balance=balance)
        return address

    def _close_deed(self, address: str) -> None:
        deed = self.deeds.pop(address, None)
        if deed is not None:
            self._refund(deed.owner, deed.balance)

    # =========================================================================
    # Reads
    # =========================================================================

    def get_auction_entry(self, name: str) -> AuctionEntry:
        with self._lock:
            record = self.entries.get(label_hash(self._label(name)), _EntryRecord())
            return AuctionEntry.from_raw(
                status=self._mode(record),
                deed_address=record.deed,
                registration_date=record.registration_date,
                value=record.value,
                highest_bid=record.highest_bid,
            )

    def get_owner(self, node: bytes) -> str:
        return self.owners.get(node, ZERO_ADDRESS)

    def get_resolver(self, node: bytes) -> str:
        return self.resolvers.get(node, ZERO_ADDRESS)

    def get_deed_owner(self, deed_address: str) -> str:
        deed = self.deeds.get(normalize_address(deed_address))
        if deed is None:
            raise TransactionReverted(f"No deed at {deed_address}")
        return deed.owner

    def get_sealed_bid(self, bidder: str, sealed_hash: bytes) -> Optional[int]:
        return self.sealed_bids.get((normalize_address(bidder), sealed_hash))

    def revealed_bids(self, name: str) -> List[Tuple[str, int]]:
        """(bidder, value) pairs in reveal order."""
        record = self.entries.get(label_hash(self._label(name)))
        return list(record.reveals) if record else []

    # =========================================================================
    # Writes
    # =========================================================================

    def submit_sealed_bid(self, name: str, sealed_hash: bytes, deposit: int, sender: str) -> TransactionRef:
        sender = normalize_address(sender)
        with self._lock:
            record = self._entry(name)
            mode = self._mode(record)
            if mode == RegistrarStatus.OPEN:
                record.status = RegistrarStatus.AUCTION
                record.registration_date = self.now() + self.config.total_auction_length
                record.value = 0
                record.highest_bid = 0
                record.deed = ZERO_ADDRESS
                record.reveals = []
                logger.debug(f"Auction started for {name} until {record.registration_date}")
            elif mode != RegistrarStatus.AUCTION:
                raise TransactionReverted(f"{name} is not accepting bids ({mode.name})")

            key = (sender, sealed_hash)
            if key in self.sealed_bids:
                raise TransactionReverted("Bid already placed")
            self.sealed_bids[key] = deposit
            return self._tx("sealed_bid")

    def submit_reveal(self, name: str, bidder: str, bid_value: int, salt: str, sender: str) -> TransactionRef:
        bidder = normalize_address(bidder)
        with self._lock:
            label = self._label(name)
            record = self._entry(name)
            if self._mode(record) != RegistrarStatus.REVEAL:
                raise TransactionReverted(f"{name} is not in its reveal window")

            seal = compute_seal(label, bidder, bid_value, salt)
            deposit = self.sealed_bids.pop((bidder, seal), None)
            if deposit is None:
                raise TransactionReverted("No sealed bid matches the reveal")

            if bid_value > deposit or bid_value < self.config.min_price:
                # Invalid or under-priced bid, nothing counts
                self._refund(bidder, deposit)
            elif bid_value > record.highest_bid:
                if record.deed != ZERO_ADDRESS:
                    self._close_deed(record.deed)
                record.value = record.highest_bid
                record.highest_bid = bid_value
                record.deed = self._new_deed(label, bidder, bid_value)
                self._refund(bidder, deposit - bid_value)
                record.reveals.append((bidder, bid_value))
            else:
                if bid_value > record.value:
                    record.value = bid_value
                self._refund(bidder, deposit)
                record.reveals.append((bidder, bid_value))
            return self._tx("reveal")

    def submit_finish(self, name: str, sender: str) -> TransactionRef:
        sender = normalize_address(sender)
        with self._lock:
            record = self._entry(name)
            node = name_hash(name)
            if self._mode(record) != RegistrarStatus.OWNED or node in self.owners:
                raise TransactionReverted(f"{name} has no auction to finish")
            deed = self.deeds[record.deed]
            if deed.owner != sender:
                raise TransactionReverted("Only the deed owner can finish the auction")

            price = max(record.value, self.config.min_price)
            self._refund(deed.owner, deed.balance - price)
            deed.balance = price
            record.value = price
            record.status = RegistrarStatus.OWNED
            self.owners[node] = deed.owner
            return self._tx("finish")

    def submit_invalidate(self, name: str, sender: str) -> TransactionRef:
        with self._lock:
            label = self._label(name)
            record = self._entry(name)
            if self._mode(record) != RegistrarStatus.OWNED:
                raise TransactionReverted(f"{name} is not owned")
            if len(label) >= self.config.min_label_length:
                raise TransactionReverted(f"{name} conforms to the length policy")

            self._close_deed(record.deed)
            record.status = RegistrarStatus.FORBIDDEN
            record.deed = ZERO_ADDRESS
            record.value = 0
            record.highest_bid = 0
            self.owners.pop(name_hash(name), None)
            return self._tx("invalidate")

    def submit_set_subdomain_owner(self, domain: str, subdomain: str, owner: str, sender: str) -> TransactionRef:
        with self._lock:
            parent = name_hash(domain)
            if self.owners.get(parent) != normalize_address(sender):
                raise TransactionReverted(f"{sender} does not own {domain}")
            self.owners[name_hash(f"{subdomain}.{domain}")] = normalize_address(owner)
            return self._tx("set_subdomain_owner")

    def submit_transfer(self, name: str, new_owner: str, sender: str) -> TransactionRef:
        sender = normalize_address(sender)
        new_owner = normalize_address(new_owner)
        with self._lock:
            record = self._entry(name)
            if self._mode(record) != RegistrarStatus.OWNED:
                raise TransactionReverted(f"{name} is not owned")
            deed = self.deeds[record.deed]
            if deed.owner != sender:
                raise TransactionReverted("Only the deed owner can transfer")
            deed.owner = new_owner
            self.owners[name_hash(name)] = new_owner
            return self._tx("transfer")

    # =========================================================================
    # Fixture helpers
    # =========================================================================

    def set_resolver(self, name: str, resolver: str) -> None:
        self.resolvers[name_hash(name)] = normalize_address(resolver)

    def set_owner(self, name: str, owner: str) -> None:
        self.owners[name_hash(name)] = normalize_address(owner)

    def release_later(self, name: str) -> None:
        """Mark a name as not yet released for auction."""
        self._entry(name).status = RegistrarStatus.NOT_YET_AVAILABLE
