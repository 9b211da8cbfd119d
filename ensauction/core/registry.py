"""
Registry operations on owned names.

- Transfer: hand the deed (and registry ownership) of an owned top-level
  name to another address
- Subdomain owner: the owner of a name assigns subdomains freely, with no
  auction involved
"""

from typing import Optional

from ensauction.core.config import RegistrarConfig, config as default_config
from ensauction.core.errors import PreconditionError, ValidationError
from ensauction.core.ledger.client import LedgerClient
from ensauction.core.ledger.types import TransactionRef
from ensauction.core.names.namehash import name_hash
from ensauction.core.state.resolver import NameState, NameStateResolver
from ensauction.crypto import is_zero_address, normalize_address
from ensauction.utils.logger import get_logger
from ensauction.utils.validation import validate_address

logger = get_logger("registry")


def _require_address(address: str, name: str) -> str:
    valid, err = validate_address(address, name)
    if not valid:
        raise ValidationError(err)
    if is_zero_address(address):
        raise ValidationError(f"{name} must not be the zero address")
    return normalize_address(address)


class Registry:
    """Ownership changes that do not go through an auction."""

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

    def owner(self, name: str) -> str:
        """Registry owner of a name (zero address when unset)."""
        return self.ledger.owner(name_hash(self.validator.canonical(name)))

    def transfer(self, name: str, new_owner: str, sender: str) -> TransactionRef:
        """
        Transfer an owned top-level name.

        Raises:
            ValidationError: bad address, subdomain or too-short name
            PreconditionError: the name is not OWNED or has no owner
        """
        new_owner = _require_address(new_owner, "new_owner")
        name = self.validator.canonical(name)
        if self.validator.domain_level(name) != 1:
            raise ValidationError(f"{name} must not contain . (except for ending in .{self.validator.suffix})")
        self.validator.validate(name)

        state = self.resolver.resolve(name)
        if state != NameState.OWNED:
            raise PreconditionError(f"{name} is not in a suitable state to transfer ({state})")

        tx = self.ledger.submit_transfer(name, new_owner, sender)
        logger.info(f"Transfer of {name} to {new_owner} submitted")
        return tx

    def set_subdomain_owner(self, name: str, owner: str, sender: Optional[str] = None) -> TransactionRef:
        """
        Assign the owner of a subdomain such as 'sub.domain.eth'.

        Args:
            name: Full subdomain name
            owner: New owner of the subdomain
            sender: Account sending the transaction (defaults to the parent owner)

        Raises:
            ValidationError: fewer than three labels, or bad owner address
            PreconditionError: the parent is not OWNED or has no registry owner
        """
        owner = _require_address(owner, "owner")
        name = self.validator.canonical(name)
        labels = name.split(".")
        if len(labels) < 3:
            raise ValidationError(f"{name} is not a subdomain", details={"name": name})
        subdomain, domain = labels[0], ".".join(labels[1:])

        state = self.resolver.resolve(domain)
        if state != NameState.OWNED:
            raise PreconditionError(f"{domain} is not in a suitable state to set a subdomain owner ({state})")
        parent_owner = self.ledger.owner(name_hash(domain))
        if is_zero_address(parent_owner):
            raise PreconditionError(f"Owner of {domain} is not set")

        tx = self.ledger.submit_set_subdomain_owner(domain, subdomain, owner, sender or parent_owner)
        logger.info(f"Owner of {name} set to {owner}")
        return tx
