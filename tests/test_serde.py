"""Tests for shared validation helpers."""

import pytest

from memstream.errors import InvalidArgumentError
from memstream.serde import as_str_object_dict, optional_string, parse_int_string, require_non_negative_int


def test_as_str_object_dict_stringifies_keys() -> None:
    assert as_str_object_dict({1: "a"}, field_name="f") == {"1": "a"}


def test_optional_string() -> None:
    assert optional_string(None, field_name="f") is None
    assert optional_string("x", field_name="f") == "x"
    with pytest.raises(InvalidArgumentError, match="f must be a string or None"):
        optional_string(1, field_name="f")


def test_require_non_negative_int() -> None:
    assert require_non_negative_int(0, field_name="n") == 0
    with pytest.raises(InvalidArgumentError, match="n must be an int"):
        require_non_negative_int(False, field_name="n")
    with pytest.raises(InvalidArgumentError, match="n must be >= 0"):
        require_non_negative_int(-3, field_name="n")


def test_parse_int_string() -> None:
    assert parse_int_string(" 12 ", field_name="N") == 12
    with pytest.raises(InvalidArgumentError, match="N must be an integer"):
        parse_int_string("1.5", field_name="N")
