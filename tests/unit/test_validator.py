"""
Tests for name normalization and the length policy.

Uses Hypothesis for the idempotence property.
"""

import string

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from ensauction.core.config import RegistrarConfig
from ensauction.core.errors import InvalidNameError, ValidationError
from ensauction.core.names import NameValidator, name_hash, normalize


# Characters that survive UTS-46 mapping (some are mapped, none disallowed)
LABEL_CHARS = string.ascii_letters + string.digits + "-_" + "ÄÖÜäöüßéÉñÑ" + "ＡＢｃｄ"


def labels() -> st.SearchStrategy[str]:
    return st.text(alphabet=LABEL_CHARS, min_size=1, max_size=16)


def names() -> st.SearchStrategy[str]:
    return st.lists(labels(), min_size=1, max_size=4).map(".".join)


@pytest.fixture
def validator():
    return NameValidator(RegistrarConfig())


class TestNormalize:
    """Normalization behaviour."""

    def test_lowercases(self):
        assert normalize("FooBar.ETH") == "foobar.eth"

    def test_fullwidth_mapped(self):
        assert normalize("ＡＢＣ.eth") == "abc.eth"

    def test_empty_name(self):
        assert normalize("") == ""

    def test_empty_label_rejected(self):
        with pytest.raises(InvalidNameError):
            normalize("foo..eth")

    def test_disallowed_code_point(self):
        with pytest.raises(InvalidNameError):
            normalize("foo\ue000bar.eth")

    def test_mapping_cannot_add_labels(self):
        """A fullwidth full stop inside a label would split it."""
        with pytest.raises(InvalidNameError):
            normalize("foo．bar.eth")

    @settings(max_examples=200)
    @given(names())
    def test_idempotent(self, name):
        once = normalize(name)
        assert normalize(once) == once
        assert name_hash(normalize(once)) == name_hash(once)

    @given(names())
    def test_label_count_preserved(self, name):
        assert len(normalize(name).split(".")) == len(name.split("."))


class TestValidate:
    """Minimum length of the auctioned label."""

    def test_long_name_valid(self, validator):
        validator.validate("verylongname.eth")

    def test_short_name_invalid(self, validator):
        with pytest.raises(ValidationError):
            validator.validate("ab.eth")

    def test_boundary(self, validator):
        validator.validate("abcdefg.eth")
        with pytest.raises(ValidationError):
            validator.validate("abcdef.eth")

    def test_without_suffix(self, validator):
        validator.validate("verylongname")
        with pytest.raises(ValidationError):
            validator.validate("ab")

    def test_length_counts_characters(self, validator):
        """Seven non-ASCII characters are enough."""
        validator.validate("ééééééé.eth")

    def test_normalized_before_check(self, validator):
        validator.validate("VERYLONGNAME.ETH")

    def test_root_only(self, validator):
        with pytest.raises(ValidationError):
            validator.validate("eth")

    def test_subdomain_checks_registrar_label(self, validator):
        validator.validate("a.verylongname.eth")
        with pytest.raises(ValidationError):
            validator.validate("verylongname.ab.eth")

    def test_is_valid(self, validator):
        assert validator.is_valid("verylongname.eth")
        assert not validator.is_valid("ab.eth")
        assert not validator.is_valid("..")

    def test_configurable_minimum(self):
        validator = NameValidator(RegistrarConfig(min_label_length=3))
        validator.validate("abc.eth")


class TestStructure:
    """Qualification and levels."""

    def test_qualify(self, validator):
        assert validator.qualify("foo") == "foo.eth"
        assert validator.qualify("foo.eth") == "foo.eth"

    def test_qualify_suffix_any_case(self, validator):
        assert validator.qualify("foo.ETH") == "foo.ETH"
        assert validator.qualify("foo.ｅｔｈ") == "foo.ｅｔｈ"
        assert validator.canonical("VeryLongName.ETH") == "verylongname.eth"

    def test_domain_level(self, validator):
        assert validator.domain_level("foo.eth") == 1
        assert validator.domain_level("sub.foo.eth") == 2
        assert not validator.is_subdomain("foo.eth")
        assert validator.is_subdomain("sub.foo.eth")

    def test_registrar_name(self, validator):
        assert validator.registrar_label("sub.foo.eth") == "foo"
        assert validator.registrar_name("sub.foo.eth") == "foo.eth"

    def test_canonical(self, validator):
        assert validator.canonical("FOO") == "foo.eth"
