"""
ensauction

A protocol engine for sealed-bid name auctions on a registration ledger:
- Namehash / labelhash over dot-separated names
- Name normalization and length policy
- Lifecycle state derived from ledger facts
- Commit-reveal bids with second-price settlement
- Invalidation of non-conforming names
"""

__version__ = "0.1.0"
