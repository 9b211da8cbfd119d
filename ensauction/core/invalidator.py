"""
Invalidator - permissionless cleanup of non-conforming names.

Names shorter than the minimum length can still win an auction on the
ledger. Once WON or OWNED, anyone may invalidate them; the deed is released
and the name becomes INVALID for good.
"""

from dataclasses import dataclass
from typing import Optional

from ensauction.core.config import RegistrarConfig, config as default_config
from ensauction.core.errors import PreconditionError
from ensauction.core.ledger.client import LedgerClient
from ensauction.core.ledger.types import TransactionRef
from ensauction.core.state.resolver import NameState, NameStateResolver
from ensauction.utils.logger import get_logger

logger = get_logger("invalidator")

INVALIDATABLE_STATES = (NameState.WON, NameState.OWNED)


@dataclass(frozen=True)
class InvalidateOutcome:
    """A submitted invalidation."""
    name: str
    previous_state: NameState
    sender: str
    tx: TransactionRef


class Invalidator:
    """Invalidates won or owned names that break the length policy."""

    def __init__(
        self,
        ledger: LedgerClient,
        resolver: NameStateResolver,
        config: Optional[RegistrarConfig] = None,
    ) -> None:
        self.ledger = ledger
        self.resolver = resolver
        self.config = config or default_config
        self.validator = resolver.validator

    def invalidate(self, name: str, sender: str) -> InvalidateOutcome:
        """
        Invalidate a name.

        Args:
            name: Name to invalidate
            sender: Any account; no ownership is required

        Raises:
            PreconditionError: wrong state, or the name conforms to the policy
        """
        name = self.validator.canonical(name)
        if self.validator.is_subdomain(name):
            raise PreconditionError(f"{name} is a subdomain and cannot be invalidated")

        state = self.resolver.resolve(name)
        if state not in INVALIDATABLE_STATES:
            raise PreconditionError(
                f"{name} is not in a suitable state to invalidate ({state})",
                details={"name": name, "state": state.value},
            )
        if self.validator.is_valid(name):
            raise PreconditionError(
                f"{name} meets the minimum length of {self.config.min_label_length}",
                details={"name": name},
            )

        tx = self.ledger.submit_invalidate(name, sender)
        logger.info(f"Invalidated {name} (was {state}) by {sender}")
        return InvalidateOutcome(name=name, previous_state=state, sender=sender, tx=tx)
