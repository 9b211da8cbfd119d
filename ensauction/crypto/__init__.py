"""
Cryptographic primitives for the name auction.

This module provides:
- Keccak-256 hashing (the registrar's one-way primitive)
- Address and hex conversion helpers

Design Notes:
-------------
Every digest in the protocol is Keccak-256, as on the registration ledger:
label hashes, name hashes, sealed bids and salt hashes. Addresses are the
20-byte account identifiers used by the ledger, written as 0x-prefixed hex.
"""

from Crypto.Hash import keccak


# =============================================================================
# Constants
# =============================================================================

HASH_SIZE = 32
ADDRESS_SIZE = 20

# Digest of the empty (root) name
ZERO_HASH = bytes(HASH_SIZE)

# Unset owner / deed / resolver
ZERO_ADDRESS = "0x" + "00" * ADDRESS_SIZE


# =============================================================================
# Hashing
# =============================================================================


def keccak256(data: bytes) -> bytes:
    """
    Compute Keccak-256 hash (Ethereum-style).

    Used for: label hashes, name hashes, bid seals, salt hashes.
    """
    k = keccak.new(digest_bits=256)
    k.update(data)
    return k.digest()


def keccak256_text(text: str) -> bytes:
    """Keccak-256 of the UTF-8 encoding of a string."""
    return keccak256(text.encode("utf-8"))


# =============================================================================
# Utility Functions
# =============================================================================


def bytes_to_hex(data: bytes) -> str:
    """Convert bytes to hex string with 0x prefix."""
    return "0x" + data.hex()


def hex_to_bytes(hex_str: str) -> bytes:
    """Convert hex string (with or without 0x prefix) to bytes."""
    if hex_str.startswith("0x") or hex_str.startswith("0X"):
        hex_str = hex_str[2:]
    return bytes.fromhex(hex_str)


def is_valid_address(address: str) -> bool:
    """Check if string is a valid address format."""
    if not isinstance(address, str):
        return False
    if not address.startswith("0x"):
        return False
    if len(address) != 2 + 2 * ADDRESS_SIZE:
        return False
    try:
        int(address, 16)
        return True
    except ValueError:
        return False


def normalize_address(address: str) -> str:
    """Lower-case form used for comparisons and map keys."""
    return "0x" + address[2:].lower()


def is_zero_address(address: str) -> bool:
    """Whether an address is the unset sentinel."""
    return int(address, 16) == 0


def address_to_bytes(address: str) -> bytes:
    """Decode a 0x-prefixed address into its 20 raw bytes."""
    raw = hex_to_bytes(address)
    if len(raw) != ADDRESS_SIZE:
        raise ValueError(f"Address must be {ADDRESS_SIZE} bytes, got {len(raw)}")
    return raw


def uint256_to_bytes(value: int) -> bytes:
    """Big-endian 32-byte encoding of an unsigned integer."""
    if value < 0 or value >= 2**256:
        raise ValueError("Value out of uint256 range")
    return value.to_bytes(32, byteorder="big")


__all__ = [
    "HASH_SIZE",
    "ADDRESS_SIZE",
    "ZERO_HASH",
    "ZERO_ADDRESS",
    "keccak256",
    "keccak256_text",
    "bytes_to_hex",
    "hex_to_bytes",
    "is_valid_address",
    "normalize_address",
    "is_zero_address",
    "address_to_bytes",
    "uint256_to_bytes",
]
