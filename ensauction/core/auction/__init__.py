"""
Auction Module.

This module provides the sealed-bid auction workflow:
- Bid commitments (seal) and deposits
- Reveal matching and deposit reconciliation
- Second-price settlement and finishing
"""

from ensauction.core.auction.commitment import (
    Bid,
    RevealedBid,
    SealedBid,
    compute_seal,
    salt_hash,
)

from ensauction.core.auction.sealer import (
    BidReceipt,
    BidSealer,
    check_bid_inputs,
    deposit_for,
)

from ensauction.core.auction.revealer import (
    BidRevealer,
    RevealOutcome,
    reconcile,
)

from ensauction.core.auction.finalizer import (
    AuctionFinalizer,
    AuctionResult,
    FinishOutcome,
    settle,
)

__all__ = [
    # Commitments
    "Bid",
    "RevealedBid",
    "SealedBid",
    "compute_seal",
    "salt_hash",
    # Sealing
    "BidReceipt",
    "BidSealer",
    "check_bid_inputs",
    "deposit_for",
    # Revealing
    "BidRevealer",
    "RevealOutcome",
    "reconcile",
    # Finalization
    "AuctionFinalizer",
    "AuctionResult",
    "FinishOutcome",
    "settle",
]
