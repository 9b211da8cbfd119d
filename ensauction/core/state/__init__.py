"""Name lifecycle state derivation"""
from ensauction.core.state.resolver import (
    NameState,
    NameStateResolver,
    derive_state,
    derive_subdomain_state,
    reveal_deadline,
)

__all__ = [
    "NameState",
    "NameStateResolver",
    "derive_state",
    "derive_subdomain_state",
    "reveal_deadline",
]
