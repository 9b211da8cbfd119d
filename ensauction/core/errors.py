"""
Exception classes for the name auction engine.

All exceptions inherit from EnsAuctionError and carry a stable code,
a human-readable message and optional structured details.
"""

from typing import Optional


class EnsAuctionError(Exception):
    """Base exception for all ensauction errors."""

    code = "error"

    def __init__(self, message: str, details: Optional[dict] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class InvalidNameError(EnsAuctionError):
    """Raised when a name has malformed label structure (empty labels, bad code points)."""

    code = "invalid_name"


class ValidationError(EnsAuctionError):
    """Raised when a name or input fails length/format policy."""

    code = "validation_failed"


class PreconditionError(EnsAuctionError):
    """Raised when an operation is attempted in the wrong lifecycle state."""

    code = "precondition_failed"


class MissingSaltError(EnsAuctionError):
    """Raised when a bid is sealed or revealed without a salt."""

    code = "missing_salt"


class MismatchError(EnsAuctionError):
    """Raised when a reveal does not match any recorded commitment."""

    code = "reveal_mismatch"


class LedgerUnavailableError(EnsAuctionError):
    """Raised on ledger timeout or transport failure. Retryable."""

    code = "ledger_unavailable"
    retryable = True


class ResolverNotSetError(EnsAuctionError):
    """Raised when a name has no resolver configured."""

    code = "resolver_not_set"


__all__ = [
    "EnsAuctionError",
    "InvalidNameError",
    "ValidationError",
    "PreconditionError",
    "MissingSaltError",
    "MismatchError",
    "LedgerUnavailableError",
    "ResolverNotSetError",
]
