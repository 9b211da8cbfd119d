"""
End-to-end auction scenarios against the in-memory ledger.

Tests cover:
1. A two-bidder second-price auction from AVAILABLE to OWNED
2. Unrevealed and invalid bids
3. Re-auction after a lapsed auction
4. Invalidation of a short name followed by a fresh auction attempt
"""

import pytest

from conftest import ALICE, BOB, CAROL, ETHER, to_end, to_reveal
from ensauction.core.auction import compute_seal
from ensauction.core.errors import MismatchError, PreconditionError
from ensauction.core.state import NameState

NAME = "verylongname.eth"


class TestSecondPriceAuction:
    """1 ETH vs 2 ETH: the 2 ETH bidder wins and pays 1 ETH."""

    def test_full_auction(self, engine, ledger, clock, config):
        assert engine.state(NAME) == NameState.AVAILABLE

        first = engine.bid(NAME, ALICE, 1 * ETHER, "alice secret", mask=3 * ETHER)
        second = engine.bid(NAME, BOB, 2 * ETHER, "bob secret")
        assert first.started_auction and not second.started_auction
        assert engine.state(NAME) == NameState.BIDDING

        to_reveal(clock, config)
        assert engine.state(NAME) == NameState.REVEALING

        alice = engine.reveal(NAME, ALICE, 1 * ETHER, "alice secret")
        bob = engine.reveal(NAME, BOB, 2 * ETHER, "bob secret")
        assert alice.leading and bob.leading
        assert alice.refund == 2 * ETHER

        to_end(clock, config)
        assert engine.state(NAME) == NameState.WON

        entry = engine.resolver.entry(NAME)
        assert entry.highest_bid == 2 * ETHER
        assert entry.value.amount(config.min_price) == 1 * ETHER

        outcome = engine.finish(NAME)
        assert outcome.deed.owner == BOB
        assert outcome.price == 1 * ETHER
        assert engine.state(NAME) == NameState.OWNED

        # Alice got everything back; Bob got back all but the price
        assert ledger.refunds[ALICE] == 3 * ETHER
        assert ledger.refunds[BOB] == 1 * ETHER

        info = engine.info.describe(NAME)
        assert info.owner == BOB
        assert info.locked_value == 1 * ETHER


class TestBadReveals:

    def test_unrevealed_bid_does_not_count(self, engine, clock, config):
        engine.bid(NAME, ALICE, 1 * ETHER, "alice")
        engine.bid(NAME, BOB, 5 * ETHER, "bob")
        to_reveal(clock, config)
        engine.reveal(NAME, ALICE, 1 * ETHER, "alice")
        to_end(clock, config)

        result = engine.finalizer.result(NAME)
        assert result.winner == ALICE
        assert result.price == config.min_price

    def test_wrong_salt_leaves_auction_untouched(self, engine, ledger, clock, config):
        engine.bid(NAME, ALICE, 1 * ETHER, "alice")
        to_reveal(clock, config)
        with pytest.raises(MismatchError):
            engine.reveal(NAME, ALICE, 1 * ETHER, "bob")
        to_end(clock, config)
        assert engine.state(NAME) == NameState.AVAILABLE

    def test_under_minimum_bid_refunded(self, engine, ledger, clock, config):
        small = config.min_price - 1
        engine.bid(NAME, ALICE, small, "alice")
        to_reveal(clock, config)
        outcome = engine.reveal(NAME, ALICE, small, "alice")
        assert not outcome.leading
        to_end(clock, config)
        assert engine.state(NAME) == NameState.AVAILABLE
        assert ledger.refunds[ALICE] == small


class TestReauction:

    def test_lapsed_auction_can_restart(self, engine, clock, config):
        engine.bid(NAME, ALICE, ETHER, "alice")
        to_reveal(clock, config)
        to_end(clock, config)
        assert engine.state(NAME) == NameState.AVAILABLE

        receipt = engine.bid(NAME, BOB, ETHER, "bob")
        assert receipt.started_auction
        assert engine.state(NAME) == NameState.BIDDING


class TestInvalidation:

    def test_short_name_lifecycle(self, engine, ledger, clock, config):
        short = "ab.eth"
        # The ledger itself accepts short names; only the engine refuses them
        ledger.submit_sealed_bid(short, compute_seal("ab", ALICE, ETHER, "s"), ETHER, ALICE)
        to_reveal(clock, config)
        ledger.submit_reveal(short, ALICE, ETHER, "s", ALICE)
        to_end(clock, config)
        engine.finish(short)
        assert engine.state(short) == NameState.OWNED

        engine.invalidate(short, CAROL)
        assert engine.state(short) == NameState.INVALID
        assert engine.registry.owner(short) == "0x" + "00" * 20

        with pytest.raises(PreconditionError):
            engine.bid(short, BOB, ETHER, "b")
