"""Tests for the layered YAML store."""

from pathlib import Path

import pytest

from layerconf.errors import ConfigParseError
from layerconf.store import LayeredStore, deep_merge, namespaced_path, stringify_keys


class TestDeepMerge:
    """Test recursive merging."""

    def test_nested_mappings_merge(self) -> None:
        """Test keys from both sides survive in nested mappings."""
        base = {"db": {"host": "localhost", "port": 5432}, "debug": False}
        updates = {"db": {"host": "db.internal"}, "debug": True}

        assert deep_merge(base, updates) == {
            "db": {"host": "db.internal", "port": 5432},
            "debug": True,
        }

    def test_sequences_are_replaced(self) -> None:
        """Test lists from later layers replace earlier ones."""
        assert deep_merge({"hosts": ["a", "b"]}, {"hosts": ["c"]}) == {"hosts": ["c"]}

    def test_scalar_replaces_mapping(self) -> None:
        """Test a scalar overrides a mapping wholesale."""
        assert deep_merge({"cache": {"ttl": 5}}, {"cache": None}) == {"cache": None}

    def test_originals_untouched(self) -> None:
        """Test inputs are not mutated."""
        base = {"a": {"b": 1}}
        deep_merge(base, {"a": {"c": 2}})

        assert base == {"a": {"b": 1}}


class TestHelpers:
    """Test key normalization and namespaced paths."""

    def test_stringify_keys(self) -> None:
        """Test keys are stringified recursively, including inside lists."""
        tree = {1: "one", "nested": {True: "yes"}, "items": [{2: "two"}]}

        assert stringify_keys(tree) == {
            "1": "one",
            "nested": {"true": "yes"},
            "items": [{"2": "two"}],
        }

    def test_boolean_and_null_keys_use_yaml_spelling(self) -> None:
        """Test bool and null keys become true, false and null."""
        assert stringify_keys({True: 1, False: 2, None: 3}) == {"true": 1, "false": 2, "null": 3}

    def test_namespaced_path(self) -> None:
        """Test the namespace value is inserted before the suffix."""
        assert namespaced_path(Path("/srv/app/defaults.yml"), "production") == Path(
            "/srv/app/defaults-production.yml"
        )

    def test_expand_orders_layers(self) -> None:
        """Test each source is followed by its namespaced variant."""
        layers = LayeredStore.expand(
            [Path("/a/defaults.yml"), Path("/etc/demo.yml")], {"environment": "staging"}
        )

        assert layers == [
            Path("/a/defaults.yml"),
            Path("/a/defaults-staging.yml"),
            Path("/etc/demo.yml"),
            Path("/etc/demo-staging.yml"),
        ]


class TestLayeredStoreLoad:
    """Test loading and merging source files."""

    def test_later_sources_override(self, tmp_path: Path) -> None:
        """Test precedence follows the order of sources."""
        first = tmp_path / "first.yml"
        second = tmp_path / "second.yml"
        first.write_text("k: 1\nonly_first: true\n")
        second.write_text("k: 2\n")

        data = LayeredStore().load([first, second])

        assert data == {"k": 2, "only_first": True}

    def test_namespaced_variant_overrides_its_base(self, tmp_path: Path) -> None:
        """Test the namespaced file of a source is applied right after it."""
        (tmp_path / "defaults.yml").write_text("level: base\n")
        (tmp_path / "defaults-production.yml").write_text("level: production\n")
        (tmp_path / "defaults-staging.yml").write_text("level: staging\n")

        data = LayeredStore().load(
            [tmp_path / "defaults.yml"], namespaces={"environment": "production"}
        )

        assert data == {"level": "production"}

    def test_missing_files_are_skipped(self, tmp_path: Path) -> None:
        """Test absent sources contribute nothing and raise nothing."""
        present = tmp_path / "present.yml"
        present.write_text("a: 1\n")

        store = LayeredStore()
        data = store.load([tmp_path / "absent.yml", present])

        assert data == {"a": 1}
        assert store.loaded_files == (present,)

    def test_parse_error(self, tmp_path: Path) -> None:
        """Test malformed YAML raises ConfigParseError with the parser message."""
        broken = tmp_path / "broken.yml"
        broken.write_text("a: [unclosed\n")

        with pytest.raises(ConfigParseError, match="broken.yml"):
            LayeredStore().load([broken])

    def test_failed_load_keeps_previous_tree(self, tmp_path: Path) -> None:
        """Test a failing load does not replace the current tree."""
        source = tmp_path / "source.yml"
        source.write_text("a: 1\n")
        store = LayeredStore()
        store.load([source])

        source.write_text("a: [unclosed\n")
        with pytest.raises(ConfigParseError):
            store.load([source])

        assert store.data == {"a": 1}
        assert store.loaded_files == (source,)

    def test_each_load_replaces_the_tree(self, tmp_path: Path) -> None:
        """Test keys from a previous load do not linger."""
        first = tmp_path / "first.yml"
        second = tmp_path / "second.yml"
        first.write_text("a: 1\n")
        second.write_text("b: 2\n")
        store = LayeredStore()
        store.load([first])

        store.load([second])

        assert store.data == {"b": 2}
