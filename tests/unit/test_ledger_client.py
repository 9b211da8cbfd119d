"""
Tests for the timeout-bounded ledger client.

Tests cover:
1. Reads pass through
2. Slow calls fail with LedgerUnavailableError instead of hanging
3. Transport errors are wrapped, other errors propagate unchanged
4. Unset resolver
"""

import threading
import time

import pytest

from conftest import ALICE
from ensauction.core.config import RegistrarConfig
from ensauction.core.errors import LedgerUnavailableError, ResolverNotSetError
from ensauction.core.ledger import LedgerClient
from ensauction.core.ledger.memory import InMemoryLedger, TransactionReverted
from ensauction.core.names import name_hash


class SlowLedger(InMemoryLedger):
    """Ledger that blocks until released."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.release = threading.Event()

    def get_owner(self, node):
        self.release.wait(5)
        return super().get_owner(node)


@pytest.fixture
def fast_config():
    return RegistrarConfig(ledger_timeout=0.1)


class TestReads:
    """Pass-through reads."""

    def test_owner_unset(self, ledger, config):
        with LedgerClient(ledger, config) as client:
            assert int(client.owner(name_hash("foo.eth")), 16) == 0

    def test_owner_set(self, ledger, config):
        ledger.set_owner("foo.eth", ALICE)
        with LedgerClient(ledger, config) as client:
            assert client.owner(name_hash("foo.eth")) == ALICE

    def test_resolver_not_set(self, ledger, config):
        with LedgerClient(ledger, config) as client:
            with pytest.raises(ResolverNotSetError):
                client.resolver(name_hash("foo.eth"))

    def test_resolver_set(self, ledger, config):
        resolver = "0x" + "12" * 20
        ledger.set_resolver("foo.eth", resolver)
        with LedgerClient(ledger, config) as client:
            assert client.resolver(name_hash("foo.eth")) == resolver


class TestFailures:
    """Failures are explicit."""

    def test_timeout(self, fast_config):
        ledger = SlowLedger(fast_config)
        client = LedgerClient(ledger, fast_config)
        started = time.monotonic()
        try:
            with pytest.raises(LedgerUnavailableError) as exc_info:
                client.owner(name_hash("foo.eth"))
        finally:
            ledger.release.set()
            client.close()

        assert time.monotonic() - started < 2
        assert exc_info.value.retryable
        assert exc_info.value.details["operation"] == "get_owner"

    def test_os_error_wrapped(self, config):
        class Down(InMemoryLedger):
            def get_owner(self, node):
                raise OSError("network unreachable")

        with LedgerClient(Down(config), config) as client:
            with pytest.raises(LedgerUnavailableError):
                client.owner(name_hash("foo.eth"))

    def test_revert_propagates_unchanged(self, ledger, config):
        with LedgerClient(ledger, config) as client:
            with pytest.raises(TransactionReverted):
                client.submit_finish("verylongname.eth", ALICE)

    def test_error_to_dict(self):
        error = LedgerUnavailableError("down", details={"operation": "get_owner"})
        data = error.to_dict()
        assert data["code"] == "ledger_unavailable"
        assert data["error_type"] == "LedgerUnavailableError"
