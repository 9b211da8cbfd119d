"""Name hashing, normalization and validation"""
from ensauction.core.names.namehash import label_hash, name_hash, split_labels
from ensauction.core.names.validator import NameValidator, normalize, normalize_label

__all__ = [
    "label_hash",
    "name_hash",
    "split_labels",
    "NameValidator",
    "normalize",
    "normalize_label",
]
