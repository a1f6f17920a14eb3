from __future__ import annotations

import pytest

from catalog_api.utils.validation import (
    fits_integer_column,
    is_non_empty_string,
    is_positive_integer,
    parse_boolean,
    parse_int,
)


@pytest.mark.parametrize("value", [1, 2, 10_000])
def test_is_positive_integer_accepts_positive_ints(value: int) -> None:
    assert is_positive_integer(value) is True


@pytest.mark.parametrize("value", [0, -1, 1.0, "1", None, True, False])
def test_is_positive_integer_rejects_everything_else(value: object) -> None:
    assert is_positive_integer(value) is False


def test_is_non_empty_string() -> None:
    assert is_non_empty_string("shirt") is True
    assert is_non_empty_string("  x  ") is True
    assert is_non_empty_string("") is False
    assert is_non_empty_string("   ") is False
    assert is_non_empty_string(None) is False
    assert is_non_empty_string(5) is False


def test_parse_boolean_is_case_insensitive() -> None:
    assert parse_boolean("true") is True
    assert parse_boolean("TRUE") is True
    assert parse_boolean("False") is False


def test_parse_boolean_returns_none_for_unrecognized_values() -> None:
    assert parse_boolean("yes") is None
    assert parse_boolean("1") is None
    assert parse_boolean("") is None
    assert parse_boolean(True) is None


def test_parse_int() -> None:
    assert parse_int("12") == 12
    assert parse_int(" 7 ") == 7
    assert parse_int("-3") == -3
    assert parse_int("+4") == 4
    assert parse_int("abc") is None
    assert parse_int("1.5") is None
    assert parse_int("") is None
    assert parse_int("-") is None
    assert parse_int(None) is None


def test_fits_integer_column() -> None:
    assert fits_integer_column(1) is True
    assert fits_integer_column(2**31 - 1) is True
    assert fits_integer_column(2**31) is False
    assert fits_integer_column(parse_int("99999999999999999999")) is False
