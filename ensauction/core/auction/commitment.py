"""
Bid commitments.

A sealed bid binds the auctioned label, the bidder, the bid value and a
secret salt:

    seal = keccak256(label_hash || bidder (20 bytes) || value (uint256) || keccak256(salt))

The bid is modelled as a tagged variant. A RevealedBid can only be built
by opening a SealedBid, so a reveal without a prior seal cannot exist.
"""

from dataclasses import dataclass
from typing import Union

from ensauction.crypto import (
    address_to_bytes,
    bytes_to_hex,
    keccak256,
    keccak256_text,
    uint256_to_bytes,
)
from ensauction.core.errors import MissingSaltError
from ensauction.core.names.namehash import label_hash


def salt_hash(salt: str) -> bytes:
    """Hash a memorable salt phrase into the 32-byte value that is sealed."""
    if not salt:
        raise MissingSaltError("Salt is required")
    return keccak256_text(salt)


def compute_seal(label: str, bidder: str, value: int, salt: str) -> bytes:
    """
    Compute the commitment for a bid on `label`.

    Args:
        label: Auctioned label (without the root suffix)
        bidder: 0x-prefixed bidder address
        value: Bid value in wei
        salt: Secret phrase needed to reveal

    Returns:
        32-byte sealed hash
    """
    return keccak256(
        label_hash(label)
        + address_to_bytes(bidder)
        + uint256_to_bytes(value)
        + salt_hash(salt)
    )


@dataclass(frozen=True)
class SealedBid:
    """
    A committed bid as visible on the ledger.

    Attributes:
        name: Auctioned name
        bidder: Address the bid was sealed for
        sealed_hash: Commitment
        deposit: Value sent with the bid (never below the bid itself)
    """
    name: str
    bidder: str
    sealed_hash: bytes
    deposit: int

    @property
    def sealed_hex(self) -> str:
        return bytes_to_hex(self.sealed_hash)

    def open(self, value: int, salt: str) -> "RevealedBid":
        """Pair this commitment with its opening."""
        return RevealedBid(commitment=self, value=value, salt=salt)


@dataclass(frozen=True)
class RevealedBid:
    """A sealed bid together with the value and salt that open it."""
    commitment: SealedBid
    value: int
    salt: str

    @property
    def bidder(self) -> str:
        return self.commitment.bidder

    @property
    def excess(self) -> int:
        """Part of the deposit that only masked the bid."""
        return self.commitment.deposit - self.value


Bid = Union[SealedBid, RevealedBid]
