"""
Bid Revealer - opens sealed bids during the reveal window.

The opening is checked locally against the commitment the ledger holds
for the bidder before any reveal is submitted. A mismatch is reported and
nothing is sent; what happens to an unrevealed deposit is up to the ledger.
"""

from dataclasses import dataclass
from typing import Optional

from ensauction.core.auction.commitment import RevealedBid, SealedBid
from ensauction.core.auction.sealer import BidSealer
from ensauction.core.config import RegistrarConfig, config as default_config
from ensauction.core.errors import MismatchError, PreconditionError, ValidationError
from ensauction.core.ledger.client import LedgerClient
from ensauction.core.ledger.types import TransactionRef
from ensauction.core.state.resolver import NameState, NameStateResolver
from ensauction.crypto import bytes_to_hex
from ensauction.utils.logger import get_logger

logger = get_logger("auction.revealer")


@dataclass(frozen=True)
class RevealOutcome:
    """
    Result of a reveal.

    Attributes:
        bid: The opened bid
        leading: Whether the bid takes the lead over the previous highest bid
        previous_highest: Highest bid before this reveal
        refund: Part of the deposit returned to the bidder
        tx: Submitted reveal, None when only checked
    """
    bid: RevealedBid
    leading: bool
    previous_highest: int
    refund: int
    tx: Optional[TransactionRef] = None

    @property
    def locked(self) -> int:
        """Amount kept in the deed for this bid."""
        return self.bid.commitment.deposit - self.refund


def reconcile(bid: RevealedBid, highest_bid: int, min_price: int) -> RevealOutcome:
    """
    Work out the deposit delta of an opened bid.

    A leading bid keeps its value locked and gets the mask back; any other
    bid is refunded in full.
    """
    leading = bid.value >= min_price and bid.value > highest_bid
    refund = bid.excess if leading else bid.commitment.deposit
    return RevealOutcome(bid=bid, leading=leading, previous_highest=highest_bid, refund=refund)


class BidRevealer:
    """
    Matches reveals to commitments and submits them.

    Attributes:
        ledger: Bounded ledger client
        resolver: State resolver
        sealer: Computes the expected commitment
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
        self.sealer = BidSealer(ledger, resolver, self.config)

    def match(self, name: str, bidder: str, value: int, salt: str) -> RevealedBid:
        """
        Find the commitment opened by (bidder, value, salt).

        Raises:
            MismatchError: no commitment recorded for this opening
            ValidationError: the bid exceeds its deposit
        """
        bid = self.sealer.sealed_bid(name, bidder, value, salt)
        deposit = self.ledger.sealed_bid(bid.bidder, bid.sealed_hash)
        if deposit is None:
            logger.warning(f"Reveal mismatch on {bid.name} for {bid.bidder}: no seal {bid.sealed_hex}")
            raise MismatchError(
                "Reveal does not match any sealed bid",
                details={"name": bid.name, "bidder": bid.bidder, "seal": bytes_to_hex(bid.sealed_hash)},
            )

        commitment = SealedBid(
            name=bid.name,
            bidder=bid.bidder,
            sealed_hash=bid.sealed_hash,
            deposit=deposit,
        )
        opened = commitment.open(value, salt)
        if opened.excess < 0:
            raise ValidationError(
                f"Bid of {value} exceeds its deposit of {deposit}",
                details={"name": bid.name, "bid": value, "deposit": deposit},
            )
        return opened

    def check(self, name: str, bidder: str, value: int, salt: str) -> RevealOutcome:
        """Match and reconcile without submitting."""
        opened = self.match(name, bidder, value, salt)
        entry = self.resolver.entry(opened.commitment.name)
        return reconcile(opened, entry.highest_bid, self.config.min_price)

    def reveal(
        self,
        name: str,
        bidder: str,
        value: int,
        salt: str,
        sender: Optional[str] = None,
    ) -> RevealOutcome:
        """
        Reveal a bid.

        Raises:
            PreconditionError: the name is not in its reveal window
            MismatchError: the opening matches no commitment
        """
        name = self.resolver.validator.canonical(name)
        state = self.resolver.resolve(name)
        if state != NameState.REVEALING:
            raise PreconditionError(
                f"{name} is not in a suitable state for bids to be revealed ({state})",
                details={"name": name, "state": state.value},
            )

        outcome = self.check(name, bidder, value, salt)
        tx = self.ledger.submit_reveal(
            outcome.bid.commitment.name,
            outcome.bid.bidder,
            value,
            salt,
            sender or outcome.bid.bidder,
        )
        logger.info(
            f"Revealed bid on {name} by {outcome.bid.bidder}: value={value} "
            f"leading={outcome.leading} refund={outcome.refund}"
        )
        return RevealOutcome(
            bid=outcome.bid,
            leading=outcome.leading,
            previous_highest=outcome.previous_highest,
            refund=outcome.refund,
            tx=tx,
        )
