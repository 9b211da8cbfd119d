"""Ledger access: gateway interface, bounded client and data types"""
from ensauction.core.ledger.types import (
    AuctionEntry,
    Deed,
    ExplicitValue,
    LockedValue,
    MinimumValue,
    RegistrarStatus,
    TransactionRef,
    locked_value_from_raw,
    locked_value_to_raw,
)
from ensauction.core.ledger.gateway import LedgerGateway
from ensauction.core.ledger.client import LedgerClient

__all__ = [
    "AuctionEntry",
    "Deed",
    "ExplicitValue",
    "LockedValue",
    "MinimumValue",
    "RegistrarStatus",
    "TransactionRef",
    "locked_value_from_raw",
    "locked_value_to_raw",
    "LedgerGateway",
    "LedgerClient",
]
