"""Coverage for alias parsing and rendering."""

from __future__ import annotations

import pytest

from tabletop.aliases import (
    MAX_ALIAS_NUMBER,
    InvalidAliasFormatError,
    ParsedAlias,
    format_alias,
    is_valid_alias,
    parse_alias,
)


@pytest.mark.parametrize(
    "alias, prefix, number",
    [
        ("Gob", "Gob", 0),
        ("Gob1", "Gob", 1),
        ("KoAr12", "KoAr", 12),
        ("x0", "x", 0),
    ],
)
def test_parse_alias_splits_prefix_and_number(alias: str, prefix: str, number: int) -> None:
    assert parse_alias(alias) == ParsedAlias(prefix=prefix, number=number)


@pytest.mark.parametrize("alias", ["", "12", "Go1b", "Gob 1", "Gob-1", "1Gob"])
def test_parse_alias_rejects_malformed_text(alias: str) -> None:
    with pytest.raises(InvalidAliasFormatError):
        parse_alias(alias)
    assert is_valid_alias(alias) is False


def test_format_alias_hides_number_zero() -> None:
    assert format_alias("Gob", 0) == "Gob"
    assert format_alias("Gob", 3) == "Gob3"
    assert str(parse_alias("Gob3")) == "Gob3"


def test_parse_alias_rejects_numbers_out_of_range() -> None:
    assert parse_alias(f"Gob{MAX_ALIAS_NUMBER}").number == MAX_ALIAS_NUMBER
    for alias in (f"Gob{MAX_ALIAS_NUMBER + 1}", "Gob" + "1" * 5000):
        with pytest.raises(InvalidAliasFormatError):
            parse_alias(alias)
        assert is_valid_alias(alias) is False
