"""Shared fixtures: a controllable clock, an in-memory ledger and an engine."""

import pytest

from ensauction.core.config import RegistrarConfig
from ensauction.core.engine import AuctionEngine
from ensauction.core.ledger.memory import InMemoryLedger

ETHER = 10**18

ALICE = "0x" + "aa" * 20
BOB = "0x" + "bb" * 20
CAROL = "0x" + "cc" * 20

START = 1_500_000_000


class Clock:
    """Manually advanced unix clock."""

    def __init__(self, now: int = START) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


@pytest.fixture
def config():
    return RegistrarConfig()


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def ledger(config, clock):
    return InMemoryLedger(config, clock)


@pytest.fixture
def engine(ledger, config, clock):
    engine = AuctionEngine(ledger, config, clock)
    yield engine
    engine.close()


def to_reveal(clock, config):
    """Move from the start of an auction into its reveal window."""
    clock.advance(config.total_auction_length - config.reveal_period)


def to_end(clock, config):
    """Move from the start of the reveal window past the registration date."""
    clock.advance(config.reveal_period)
