"""
Name normalization and validation.

Normalization maps each label through UTS-46 (case folding, compatibility
and confusable mapping, NFC) without ever changing the number of labels.

Validation enforces the registrar's minimum label length: once the trailing
root suffix (".eth") is stripped, the auctioned label must be at least
`min_label_length` characters. Shorter names can still be auctioned on the
ledger but are open to invalidation afterwards.
"""

from typing import List, Optional, Tuple

import idna

from ensauction.core.config import RegistrarConfig, config as default_config
from ensauction.core.errors import InvalidNameError, ValidationError
from ensauction.core.names.namehash import split_labels


def normalize_label(label: str) -> str:
    """
    Normalize a single label.

    Raises:
        InvalidNameError: if the label holds disallowed code points, maps to
            nothing, or would be split by the mapping
    """
    try:
        mapped = idna.uts46_remap(label, std3_rules=False, transitional=False)
    except idna.IDNAError as e:
        raise InvalidNameError(
            f"Label {label!r} contains disallowed characters: {e}",
            details={"label": label},
        ) from e

    if mapped == "":
        raise InvalidNameError(f"Label {label!r} normalizes to nothing", details={"label": label})
    if "." in mapped:
        raise InvalidNameError(
            f"Label {label!r} normalizes to more than one label",
            details={"label": label},
        )
    return mapped


def normalize(name: str) -> str:
    """
    Normalize a name label by label.

    Idempotent: normalize(normalize(n)) == normalize(n).
    """
    return ".".join(normalize_label(label) for label in split_labels(name))


class NameValidator:
    """
    Applies the registrar's name policy.

    Handles:
    - Qualification with the root suffix
    - Domain level (top-level names are auctioned, subdomains are not)
    - Minimum length of the auctioned label
    """

    def __init__(self, config: Optional[RegistrarConfig] = None) -> None:
        self.config = config or default_config

    @property
    def suffix(self) -> str:
        return self.config.root_suffix

    def qualify(self, name: str) -> str:
        """
        Append the root suffix when missing.

        The last label is compared in normalized form, so 'foo.ETH' is
        already qualified.
        """
        try:
            last = normalize_label(name.rsplit(".", 1)[-1])
        except InvalidNameError:
            last = None  # normalize() reports the malformed label later
        if last == self.suffix:
            return name
        return f"{name}.{self.suffix}"

    def canonical(self, name: str) -> str:
        """Normalized, suffix-qualified form used for every ledger query."""
        return self.qualify(normalize(name))

    def _split(self, name: str) -> Tuple[List[str], bool]:
        labels = normalize(name).split(".") if name else []
        if labels and labels[-1] == self.suffix:
            return labels[:-1], True
        return labels, False

    def domain_level(self, name: str) -> int:
        """Number of labels below the root suffix (1 for 'foo.eth')."""
        labels, _ = self._split(name)
        return len(labels)

    def is_subdomain(self, name: str) -> bool:
        return self.domain_level(name) > 1

    def registrar_label(self, name: str) -> str:
        """The label the auction is held for ('foo' in 'sub.foo.eth')."""
        labels, _ = self._split(name)
        if not labels:
            raise ValidationError(
                f"Name {name!r} has no label below the root",
                details={"name": name},
            )
        return labels[-1]

    def registrar_name(self, name: str) -> str:
        """The auctioned top-level name ('foo.eth' for 'sub.foo.eth')."""
        return f"{self.registrar_label(name)}.{self.suffix}"

    def validate(self, name: str) -> None:
        """
        Check the name against the length policy.

        Raises:
            InvalidNameError: malformed label structure
            ValidationError: auctioned label too short
        """
        label = self.registrar_label(name)
        if len(label) < self.config.min_label_length:
            raise ValidationError(
                f"Name must be at least {self.config.min_label_length} characters long",
                details={"name": name, "label": label, "length": len(label)},
            )

    def is_valid(self, name: str) -> bool:
        """Non-raising variant of validate()."""
        try:
            self.validate(name)
        except (InvalidNameError, ValidationError):
            return False
        return True
