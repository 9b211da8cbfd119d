"""
LedgerClient - bounded access to a LedgerGateway.

Every gateway call runs on a worker thread and is abandoned after
`ledger_timeout` seconds. Timeouts and transport failures surface as
LedgerUnavailableError so that callers can tell "the name is available"
apart from "the ledger could not be asked". Nothing is retried here.
"""

from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from typing import Any, Callable, Optional

from ensauction.core.config import RegistrarConfig, config as default_config
from ensauction.core.errors import LedgerUnavailableError, ResolverNotSetError
from ensauction.core.ledger.gateway import LedgerGateway
from ensauction.core.ledger.types import AuctionEntry, TransactionRef
from ensauction.crypto import bytes_to_hex, is_zero_address
from ensauction.utils.logger import get_logger

logger = get_logger("ledger")


class LedgerClient:
    """
    Timeout-bounded wrapper around a gateway.

    Attributes:
        gateway: The injected ledger gateway
        timeout: Seconds before a call is reported as unavailable
    """

    def __init__(
        self,
        gateway: LedgerGateway,
        config: Optional[RegistrarConfig] = None,
        max_workers: int = 4,
    ) -> None:
        self.gateway = gateway
        self.config = config or default_config
        self.timeout = self.config.ledger_timeout
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="ledger",
        )

    def close(self) -> None:
        """Release worker threads without waiting for stuck calls."""
        self._executor.shutdown(wait=False, cancel_futures=True)

    def __enter__(self) -> "LedgerClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _call(self, operation: str, fn: Callable[..., Any], *args) -> Any:
        future = self._executor.submit(fn, *args)
        try:
            return future.result(timeout=self.timeout)
        except FutureTimeoutError as e:
            future.cancel()
            logger.warning(f"Ledger call {operation} timed out after {self.timeout}s")
            raise LedgerUnavailableError(
                f"Ledger did not answer {operation} within {self.timeout} seconds",
                details={"operation": operation, "timeout": self.timeout},
            ) from e
        except OSError as e:
            logger.warning(f"Ledger call {operation} failed: {e}")
            raise LedgerUnavailableError(
                f"Ledger transport failure during {operation}: {e}",
                details={"operation": operation},
            ) from e

    # =========================================================================
    # Reads
    # =========================================================================

    def entry(self, name: str) -> AuctionEntry:
        return self._call("get_auction_entry", self.gateway.get_auction_entry, name)

    def owner(self, node: bytes) -> str:
        return self._call("get_owner", self.gateway.get_owner, node)

    def resolver(self, node: bytes) -> str:
        """
        Resolver address of a namehash.

        Raises:
            ResolverNotSetError: if no resolver is configured
        """
        address = self._call("get_resolver", self.gateway.get_resolver, node)
        if is_zero_address(address):
            raise ResolverNotSetError(
                "Resolver not configured",
                details={"node": bytes_to_hex(node)},
            )
        return address

    def deed_owner(self, deed_address: str) -> str:
        return self._call("get_deed_owner", self.gateway.get_deed_owner, deed_address)

    def sealed_bid(self, bidder: str, sealed_hash: bytes) -> Optional[int]:
        return self._call("get_sealed_bid", self.gateway.get_sealed_bid, bidder, sealed_hash)

    # =========================================================================
    # Writes
    # =========================================================================

    def _submitted(self, tx: TransactionRef, **fields) -> TransactionRef:
        detail = " ".join(f"{k}={v}" for k, v in fields.items())
        logger.info(f"Submitted {tx.operation} tx={tx.tx_id} {detail}")
        return tx

    def submit_sealed_bid(self, name: str, sealed_hash: bytes, deposit: int, sender: str) -> TransactionRef:
        tx = self._call(
            "submit_sealed_bid", self.gateway.submit_sealed_bid, name, sealed_hash, deposit, sender
        )
        return self._submitted(tx, name=name, sender=sender, deposit=deposit)

    def submit_reveal(self, name: str, bidder: str, bid_value: int, salt: str, sender: str) -> TransactionRef:
        tx = self._call(
            "submit_reveal", self.gateway.submit_reveal, name, bidder, bid_value, salt, sender
        )
        return self._submitted(tx, name=name, bidder=bidder, bid=bid_value)

    def submit_finish(self, name: str, sender: str) -> TransactionRef:
        tx = self._call("submit_finish", self.gateway.submit_finish, name, sender)
        return self._submitted(tx, name=name, sender=sender)

    def submit_invalidate(self, name: str, sender: str) -> TransactionRef:
        tx = self._call("submit_invalidate", self.gateway.submit_invalidate, name, sender)
        return self._submitted(tx, name=name, sender=sender)

    def submit_set_subdomain_owner(
        self, domain: str, subdomain: str, owner: str, sender: str
    ) -> TransactionRef:
        tx = self._call(
            "submit_set_subdomain_owner",
            self.gateway.submit_set_subdomain_owner,
            domain, subdomain, owner, sender,
        )
        return self._submitted(tx, name=f"{subdomain}.{domain}", owner=owner)

    def submit_transfer(self, name: str, new_owner: str, sender: str) -> TransactionRef:
        tx = self._call("submit_transfer", self.gateway.submit_transfer, name, new_owner, sender)
        return self._submitted(tx, name=name, owner=new_owner)
