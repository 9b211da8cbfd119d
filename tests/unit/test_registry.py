"""
Tests for transfers and subdomain assignment.
"""

import pytest

from conftest import ALICE, BOB, CAROL, ETHER, to_end, to_reveal
from ensauction.core.errors import PreconditionError, ValidationError
from ensauction.core.ledger.memory import TransactionReverted
from ensauction.core.state import NameState
from ensauction.crypto import ZERO_ADDRESS

NAME = "verylongname.eth"


@pytest.fixture
def owned(engine, clock, config):
    engine.bid(NAME, BOB, ETHER, "bob")
    to_reveal(clock, config)
    engine.reveal(NAME, BOB, ETHER, "bob")
    to_end(clock, config)
    engine.finish(NAME)
    return engine


class TestTransfer:

    def test_transfer(self, owned):
        owned.registry.transfer(NAME, CAROL, BOB)
        assert owned.registry.owner(NAME) == CAROL
        assert owned.finalizer.deed(NAME).owner == CAROL

    def test_transfer_unqualified(self, owned):
        owned.registry.transfer("verylongname", CAROL, BOB)
        assert owned.registry.owner(NAME) == CAROL

    def test_not_owner_reverted(self, owned):
        with pytest.raises(TransactionReverted):
            owned.registry.transfer(NAME, CAROL, ALICE)

    def test_zero_address(self, owned):
        with pytest.raises(ValidationError):
            owned.registry.transfer(NAME, ZERO_ADDRESS, BOB)

    def test_subdomain(self, owned):
        with pytest.raises(ValidationError):
            owned.registry.transfer("sub." + NAME, CAROL, BOB)

    def test_won_not_owned(self, engine, clock, config):
        engine.bid(NAME, BOB, ETHER, "bob")
        to_reveal(clock, config)
        engine.reveal(NAME, BOB, ETHER, "bob")
        to_end(clock, config)
        with pytest.raises(PreconditionError):
            engine.registry.transfer(NAME, CAROL, BOB)


class TestSubdomainOwner:

    def test_assign(self, owned):
        sub = "sub." + NAME
        assert owned.state(sub) == NameState.AVAILABLE
        owned.registry.set_subdomain_owner(sub, CAROL)
        assert owned.state(sub) == NameState.OWNED
        assert owned.registry.owner(sub) == CAROL

    def test_short_subdomain_label_allowed(self, owned):
        owned.registry.set_subdomain_owner("a." + NAME, CAROL)
        assert owned.registry.owner("a." + NAME) == CAROL

    def test_top_level_rejected(self, owned):
        with pytest.raises(ValidationError):
            owned.registry.set_subdomain_owner(NAME, CAROL)

    def test_parent_not_owned(self, engine):
        with pytest.raises(PreconditionError):
            engine.registry.set_subdomain_owner("sub." + NAME, CAROL)

    def test_wrong_sender_reverted(self, owned):
        with pytest.raises(TransactionReverted):
            owned.registry.set_subdomain_owner("sub." + NAME, CAROL, sender=ALICE)
