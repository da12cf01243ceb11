#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for metadata flattening and YAML loading."""

from datetime import date
from io import BytesIO, StringIO

import pytest

from ast2jats.exceptions import ParsingError
from ast2jats.utils.metadata import flatten_metadata, load_metadata, split_front_matter


@pytest.mark.unit
class TestFlattenMetadata:
    """Tests for flatten_metadata."""

    def test_nested_groups(self):
        """Nested mappings become composite keys."""
        metadata = {
            "title": "T",
            "journal": {"title": "J", "issn": {"print": "1", "online": "2"}},
        }
        assert flatten_metadata(metadata) == {
            "title": "T",
            "journal_title": "J",
            "journal_issn_print": "1",
            "journal_issn_online": "2",
        }

    def test_lists_preserved(self):
        """Positional lists are kept whole."""
        assert flatten_metadata({"author": ["A", "B"]}) == {"author": ["A", "B"]}

    def test_integer_keyed_mapping_preserved_as_list(self):
        """A mapping keyed 1..N is positional and kept whole, in key order."""
        assert flatten_metadata({"tags": {2: "b", 1: "a", 3: "c"}}) == {"tags": ["a", "b", "c"]}

    @pytest.mark.parametrize("mapping", [{1: "a", 3: "c"}, {0: "a", 1: "b"}, {True: "a"}, {"1": "a"}])
    def test_non_dense_keys_flattened(self, mapping):
        """Gapped, zero-based, boolean or string keys are associative."""
        result = flatten_metadata({"m": mapping})
        assert "m" not in result
        assert len(result) == len(mapping)

    def test_lists_of_mappings_not_flattened(self):
        """List elements are left untouched."""
        authors = [{"name": "A"}, {"name": "B"}]
        assert flatten_metadata({"author": authors}) == {"author": authors}

    def test_group_kept_only_as_leaves(self):
        """The group key itself is not emitted."""
        assert "copyright" not in flatten_metadata({"copyright": {"statement": "S"}})

    @pytest.mark.parametrize("value", [None, {}])
    def test_empty(self, value):
        """Empty or missing metadata flattens to nothing."""
        assert flatten_metadata(value) == {}


@pytest.mark.unit
class TestSplitFrontMatter:
    """Tests for split_front_matter."""

    def test_dashes(self):
        """A block between --- lines is split off."""
        assert split_front_matter("---\na: 1\n---\nbody\n") == ("a: 1\n", "body\n")

    def test_dots_terminator(self):
        """A block may end with ... as in Pandoc."""
        assert split_front_matter("---\na: 1\n...\nbody") == ("a: 1\n", "body")

    def test_no_front_matter(self):
        """Text without a leading --- has no front matter."""
        assert split_front_matter("a: 1\n") == ("", "a: 1\n")

    def test_unterminated(self):
        """An unterminated block is not front matter."""
        assert split_front_matter("---\na: 1\n") == ("", "---\na: 1\n")


@pytest.mark.unit
class TestLoadMetadata:
    """Tests for load_metadata."""

    def test_yaml_file(self, tmp_path):
        """A plain YAML file is loaded."""
        path = tmp_path / "meta.yaml"
        path.write_text("title: T\narticle:\n  pub-date: 2024-01-15\n", encoding="utf-8")
        assert load_metadata(path) == {"title": "T", "article": {"pub-date": date(2024, 1, 15)}}

    def test_front_matter_file(self, tmp_path):
        """Front matter of a Markdown file is loaded, the body ignored."""
        path = tmp_path / "paper.md"
        path.write_text("---\ntitle: T\n---\n# Heading: not yaml: [\n", encoding="utf-8")
        assert load_metadata(str(path)) == {"title": "T"}

    def test_bytes_and_streams(self):
        """Raw bytes and file-like objects are accepted."""
        assert load_metadata(b"a: 1") == {"a": 1}
        assert load_metadata(BytesIO(b"a: 1")) == {"a": 1}
        assert load_metadata(StringIO("a: 1")) == {"a": 1}

    def test_empty_document(self):
        """An empty document loads as empty metadata."""
        assert load_metadata(b"") == {}

    def test_non_mapping_ignored(self, caplog):
        """A YAML list is not metadata."""
        assert load_metadata(b"- a\n- b\n") == {}
        assert "not a mapping" in caplog.text

    def test_invalid_yaml(self):
        """Malformed YAML raises ParsingError."""
        with pytest.raises(ParsingError) as exc_info:
            load_metadata(b"a: [1, 2\n")
        assert exc_info.value.parsing_stage == "metadata"
        assert exc_info.value.original_error is not None

    def test_safe_loading(self):
        """Python object tags are rejected."""
        with pytest.raises(ParsingError):
            load_metadata(b"a: !!python/object/apply:os.getcwd []\n")
