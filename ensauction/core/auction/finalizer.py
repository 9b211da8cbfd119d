"""
Auction Finalizer - winner and second-price settlement.

Among revealed bids the highest value wins and pays the second-highest
value (never less than the minimum price). The ledger performs this as
bids are revealed; `settle` reproduces the rule over a list of bids and
`result` reads what the ledger concluded. `finish` turns a WON name into
an OWNED one.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from ensauction.core.config import RegistrarConfig, config as default_config
from ensauction.core.errors import PreconditionError
from ensauction.core.ledger.client import LedgerClient
from ensauction.core.ledger.types import Deed, TransactionRef
from ensauction.core.state.resolver import NameState, NameStateResolver
from ensauction.utils.logger import get_logger

logger = get_logger("auction.finalizer")


@dataclass(frozen=True)
class AuctionResult:
    """
    Outcome of an auction.

    Attributes:
        winner: Address holding the winning bid (None if no valid bid)
        highest_bid: Winning bid value
        price: Second-price settlement amount
    """
    winner: Optional[str]
    highest_bid: int
    price: int

    @property
    def has_winner(self) -> bool:
        return self.winner is not None


@dataclass(frozen=True)
class FinishOutcome:
    """A submitted finish."""
    name: str
    deed: Deed
    price: int
    tx: TransactionRef


def settle(bids: Iterable[Tuple[str, int]], min_price: int) -> AuctionResult:
    """
    Apply the second-price rule to (bidder, value) pairs in reveal order.

    Bids under the minimum price are ignored. On a tie the earlier reveal
    keeps the lead and pays its own value.
    """
    winner = None
    highest = 0
    second = 0
    for bidder, value in bids:
        if value < min_price:
            continue
        if value > highest:
            winner, second, highest = bidder, highest, value
        elif value > second:
            second = value

    if winner is None:
        return AuctionResult(winner=None, highest_bid=0, price=0)
    return AuctionResult(winner=winner, highest_bid=highest, price=max(second, min_price))


class AuctionFinalizer:
    """
    Reads auction results and finishes won auctions.

    Attributes:
        ledger: Bounded ledger client
        resolver: State resolver
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

    def deed(self, name: str) -> Optional[Deed]:
        """Deed backing the current highest bid, if any."""
        entry = self.resolver.entry(name)
        if not entry.has_deed:
            return None
        return Deed(address=entry.deed_address, owner=self.ledger.deed_owner(entry.deed_address))

    def result(self, name: str) -> AuctionResult:
        """The ledger's view of the auction for `name`."""
        entry = self.resolver.entry(name)
        if not entry.has_deed:
            return AuctionResult(winner=None, highest_bid=0, price=0)
        return AuctionResult(
            winner=self.ledger.deed_owner(entry.deed_address),
            highest_bid=entry.highest_bid,
            price=entry.value.amount(self.config.min_price),
        )

    def finish(self, name: str, sender: Optional[str] = None) -> FinishOutcome:
        """
        Finish a won auction.

        Args:
            name: Name whose auction is finished
            sender: Account sending the transaction (defaults to the deed owner)

        Raises:
            PreconditionError: the name is not WON
        """
        name = self.resolver.validator.canonical(name)
        state = self.resolver.resolve(name)
        if state != NameState.WON:
            raise PreconditionError(
                f"{name} is not in a suitable state to finish ({state})",
                details={"name": name, "state": state.value},
            )

        deed = self.deed(name)
        result = self.result(name)
        tx = self.ledger.submit_finish(name, sender or deed.owner)
        logger.info(f"Finished auction for {name}: owner={deed.owner} price={result.price}")
        return FinishOutcome(name=name, deed=deed, price=result.price, tx=tx)
