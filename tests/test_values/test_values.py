"""Tests for typed path lookups."""

from datetime import date

import pytest

from layerconf.values import ConfValue, ValueKind, kind_of, lookup

TREE = {
    "server": {"port": 8080, "hosts": ["a", "b"], "tls": None},
    "released": date(2024, 1, 31),
    "flag": True,
}


class TestKindOf:
    """Test value classification."""

    @pytest.mark.parametrize(
        ("value", "kind"),
        [
            ("x", ValueKind.STRING),
            (3, ValueKind.NUMBER),
            (2.5, ValueKind.NUMBER),
            (False, ValueKind.BOOL),
            ({}, ValueKind.MAPPING),
            ([], ValueKind.SEQUENCE),
            (None, ValueKind.NULL),
            (date(2024, 1, 1), ValueKind.OTHER),
        ],
    )
    def test_kinds(self, value: object, kind: ValueKind) -> None:
        """Test each value maps to its kind, with bool kept apart from number."""
        assert kind_of(value) is kind


class TestLookup:
    """Test lookups over a plain tree."""

    def test_found(self) -> None:
        """Test a present value carries its path and kind."""
        result = lookup(TREE, ["server", "port"])

        assert result == ConfValue(path=("server", "port"), kind=ValueKind.NUMBER, value=8080)
        assert bool(result) is True

    def test_absent(self) -> None:
        """Test absence is a value."""
        result = lookup(TREE, ["server", "missing", "deeper"])

        assert result.is_absent
        assert bool(result) is False
        assert result.get() is None
        assert result.path == ("server", "missing", "deeper")

    def test_negative_index(self) -> None:
        """Test negative indexes count from the end."""
        assert lookup(TREE, ["server", "hosts", -1]).value == "b"

    def test_bool_segment_is_not_an_index(self) -> None:
        """Test True does not select element 1."""
        assert lookup(TREE, ["server", "hosts", True]).is_absent

    def test_through_null(self) -> None:
        """Test a null value cannot be descended into."""
        assert lookup(TREE, ["server", "tls", "cert"]).is_absent

    def test_non_tree(self) -> None:
        """Test a scalar tree only answers the empty path."""
        assert lookup("scalar", []).value == "scalar"
        assert lookup("scalar", ["a"]).is_absent

    def test_other_kind(self) -> None:
        """Test timestamps are reported as other."""
        result = lookup(TREE, ["released"])

        assert result.kind is ValueKind.OTHER
        assert result.as_str() is None
