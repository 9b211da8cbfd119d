"""Name auction protocol engine"""
from ensauction.core.config import RegistrarConfig, load_config
from ensauction.core.engine import AuctionEngine
from ensauction.core.errors import (
    EnsAuctionError,
    InvalidNameError,
    LedgerUnavailableError,
    MismatchError,
    MissingSaltError,
    PreconditionError,
    ResolverNotSetError,
    ValidationError,
)
from ensauction.core.state.resolver import NameState

__all__ = [
    "RegistrarConfig",
    "load_config",
    "AuctionEngine",
    "EnsAuctionError",
    "InvalidNameError",
    "LedgerUnavailableError",
    "MismatchError",
    "MissingSaltError",
    "PreconditionError",
    "ResolverNotSetError",
    "ValidationError",
    "NameState",
]
