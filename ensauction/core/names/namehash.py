"""
Name hashing.

A name is identified on the ledger by its namehash, a recursive digest over
its dot-separated labels:

    name_hash("")    = 0x00 * 32
    name_hash("a.b") = keccak256(name_hash("b") || label_hash("a"))

A label hash is the flat digest of a single label, independent of position.
The auction itself is keyed on the label hash of the registrar label.
"""

from typing import List

from ensauction.crypto import ZERO_HASH, keccak256, keccak256_text
from ensauction.core.errors import InvalidNameError


def split_labels(name: str) -> List[str]:
    """
    Split a name into labels, rejecting empty ones.

    The empty name is the root and has no labels.
    """
    if name == "":
        return []

    labels = name.split(".")
    if any(label == "" for label in labels):
        raise InvalidNameError(
            f"Name {name!r} contains an empty label",
            details={"name": name},
        )
    return labels


def label_hash(label: str) -> bytes:
    """Keccak-256 of a single label."""
    return keccak256_text(label)


def name_hash(name: str) -> bytes:
    """
    Compute the namehash of a name.

    The string is hashed as given; normalize it first.

    Raises:
        InvalidNameError: if any label is empty
    """
    node = ZERO_HASH
    for label in reversed(split_labels(name)):
        node = keccak256(node + label_hash(label))
    return node
