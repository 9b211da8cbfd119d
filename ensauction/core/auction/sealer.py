"""
Bid Sealer - builds and submits sealed bids.

The bid value is never sent in the clear during bidding: only the seal and
a deposit are visible. The deposit may be raised with a mask to hide the
size of the bid, but it is never allowed below the bid itself.
"""

from dataclasses import dataclass
from typing import Optional

from ensauction.core.auction.commitment import SealedBid, compute_seal
from ensauction.core.config import RegistrarConfig, config as default_config
from ensauction.core.errors import MissingSaltError, PreconditionError, ValidationError
from ensauction.core.ledger.client import LedgerClient
from ensauction.core.ledger.types import TransactionRef
from ensauction.core.names.validator import NameValidator
from ensauction.core.state.resolver import NameState, NameStateResolver
from ensauction.crypto import normalize_address
from ensauction.utils.logger import get_logger
from ensauction.utils.validation import validate_address, validate_amount, validate_salt

logger = get_logger("auction.sealer")


def check_bid_inputs(bidder: str, value: int, salt: str) -> None:
    """
    Reject malformed bid inputs.

    Raises:
        MissingSaltError: empty salt
        ValidationError: bad address, value or salt
    """
    if salt is None or salt == "":
        raise MissingSaltError("Salt is required")
    valid, err = validate_salt(salt)
    if not valid:
        raise ValidationError(err)

    for valid, err in (validate_address(bidder, "bidder"), validate_amount(value, "bid")):
        if not valid:
            raise ValidationError(err)


def deposit_for(value: int, mask: Optional[int] = None) -> int:
    """
    Deposit to send with a bid.

    A mask below the bid is clamped up to the bid; no mask means the
    deposit is exactly the bid.
    """
    if mask is None:
        return value
    valid, err = validate_amount(mask, "mask")
    if not valid:
        raise ValidationError(err)
    return max(mask, value)


@dataclass(frozen=True)
class BidReceipt:
    """A submitted sealed bid."""
    bid: SealedBid
    tx: TransactionRef
    started_auction: bool


class BidSealer:
    """
    Seals bids and submits them while a name accepts bids.

    Attributes:
        ledger: Bounded ledger client
        resolver: State resolver sharing the same ledger
    """

    def __init__(
        self,
        ledger: LedgerClient,
        resolver: NameStateResolver,
        config: Optional[RegistrarConfig] = None,
    ) -> None:
        self.ledger = ledger
        self.resolver = resolver
        self.config = config or default_config
        self.validator = NameValidator(self.config)

    def seal(self, name: str, bidder: str, value: int, salt: str) -> bytes:
        """
        Commitment for a bid on `name`.

        Deterministic in (name, bidder, value, salt).
        """
        check_bid_inputs(bidder, value, salt)
        label = self.validator.registrar_label(self.validator.canonical(name))
        return compute_seal(label, normalize_address(bidder), value, salt)

    def sealed_bid(
        self,
        name: str,
        bidder: str,
        value: int,
        salt: str,
        mask: Optional[int] = None,
    ) -> SealedBid:
        """Build the sealed bid without submitting it."""
        name = self.validator.canonical(name)
        return SealedBid(
            name=name,
            bidder=normalize_address(bidder),
            sealed_hash=self.seal(name, bidder, value, salt),
            deposit=deposit_for(value, mask),
        )

    def place_bid(
        self,
        name: str,
        bidder: str,
        value: int,
        salt: str,
        mask: Optional[int] = None,
    ) -> BidReceipt:
        """
        Seal and submit a bid.

        An AVAILABLE name is only bid on if it passes the length policy;
        the first bid starts its auction.

        Raises:
            PreconditionError: the name is not accepting bids
            ValidationError / MissingSaltError: bad inputs
        """
        bid = self.sealed_bid(name, bidder, value, salt, mask)
        if self.validator.is_subdomain(bid.name):
            raise PreconditionError(f"{bid.name} is a subdomain and cannot be auctioned")

        state = self.resolver.resolve(bid.name)
        if state == NameState.AVAILABLE:
            self.validator.validate(bid.name)
        elif state != NameState.BIDDING:
            raise PreconditionError(
                f"{bid.name} is not in a suitable state to bid ({state})",
                details={"name": bid.name, "state": state.value},
            )

        tx = self.ledger.submit_sealed_bid(bid.name, bid.sealed_hash, bid.deposit, bid.bidder)
        logger.info(f"Sealed bid on {bid.name} by {bid.bidder} seal={bid.sealed_hex} deposit={bid.deposit}")
        return BidReceipt(bid=bid, tx=tx, started_auction=state == NameState.AVAILABLE)
