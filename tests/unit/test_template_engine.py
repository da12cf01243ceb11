#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the dollar-delimited template language."""

import re

import pytest
from hypothesis import given
from hypothesis import strategies as st

from ast2jats.templates.engine import (
    Conditional,
    Loop,
    Text,
    Variable,
    is_truthy,
    lookup,
    parse_template,
    render_template,
    stringify,
)

NO_DOLLAR = st.text(alphabet=st.characters(blacklist_characters="$", blacklist_categories=("Cs",)))


@pytest.mark.unit
class TestVariables:
    """Tests for $name$ substitution."""

    def test_substitution(self):
        """A present variable is substituted."""
        assert render_template("<t>$title$</t>", {"title": "X"}) == "<t>X</t>"

    def test_absent_variable_is_empty(self):
        """An absent variable becomes the empty string."""
        assert render_template("<t>$title$</t>", {}) == "<t></t>"

    def test_values_not_escaped(self):
        """Values are inserted verbatim, markup included."""
        assert render_template("$body$", {"body": "<p>a & b</p>"}) == "<p>a & b</p>"

    def test_non_string_values(self):
        """Numbers, booleans and lists are stringified."""
        data = {"year": 2024, "flag": True, "off": False, "parts": ["a", "b"]}
        assert render_template("$year$|$flag$|$off$|$parts$", data) == "2024|true||ab"

    def test_dotted_name_walks_mappings(self):
        """A dotted name resolves through nested mappings."""
        assert render_template("$journal.title$", {"journal": {"title": "J"}}) == "J"

    def test_literal_dotted_key_wins(self):
        """A literal key containing dots takes precedence."""
        data = {"journal.title": "literal", "journal": {"title": "nested"}}
        assert render_template("$journal.title$", data) == "literal"

    @given(NO_DOLLAR)
    def test_values_inserted_exactly(self, value):
        """Substituted values are never altered, whitespace included."""
        assert render_template("$v$", {"v": value}) == value


@pytest.mark.unit
class TestConditionals:
    """Tests for $if(name)$ blocks."""

    @pytest.mark.parametrize("value", ["yes", ["a"], {"k": "v"}, 0, True])
    def test_truthy_keeps_body(self, value):
        """Non-empty values keep the body."""
        assert render_template("[$if(x)$A$endif$]", {"x": value}) == "[A]"

    @pytest.mark.parametrize("value", ["", None, False, [], {}])
    def test_falsy_drops_body(self, value):
        """Empty, absent and false values drop the body."""
        assert render_template("[$if(x)$A$endif$]", {"x": value}) == "[]"

    def test_missing_drops_body(self):
        """A missing name drops the body."""
        assert render_template("[$if(x)$A$endif$]", {}) == "[]"

    def test_newline_after_opening_tag_consumed(self):
        """A newline directly after the opening tag belongs to the tag."""
        template = "<a>\n$if(x)$\n<b>$x$</b>\n$endif$\n</a>"
        assert render_template(template, {"x": "1"}) == "<a>\n<b>1</b>\n</a>"
        assert render_template(template, {}) == "<a>\n</a>"

    def test_nested_conditionals(self):
        """Conditionals nest."""
        template = "$if(a)$A$if(b)$B$endif$$endif$"
        assert render_template(template, {"a": 1, "b": 1}) == "AB"
        assert render_template(template, {"a": 1}) == "A"
        assert render_template(template, {"b": 1}) == ""


@pytest.mark.unit
class TestLoops:
    """Tests for $for(name)$ blocks."""

    def test_loop_over_list(self):
        """The body is repeated per element with the name rebound."""
        template = "$for(author)$<name>$author$</name>$endfor$"
        assert render_template(template, {"author": ["A", "B"]}) == "<name>A</name><name>B</name>"

    def test_non_list_produces_nothing(self):
        """A scalar value is not iterated."""
        assert render_template("$for(x)$<i>$x$</i>$endfor$", {"x": "abc"}) == ""

    def test_missing_produces_nothing(self):
        """A missing name produces nothing."""
        assert render_template("$for(x)$<i>$x$</i>$endfor$", {}) == ""

    def test_outer_scope_visible(self):
        """Other names stay visible inside the loop body."""
        data = {"a": ["1", "2"], "sep": "s"}
        assert render_template("$for(a)$$a$-$sep$;$endfor$", data) == "1-s;2-s;"

    def test_loop_does_not_leak_binding(self):
        """After the loop the name refers to the whole list again."""
        assert render_template("$for(a)$$a$$endfor$|$a$", {"a": ["x", "y"]}) == "xy|xy"

    def test_conditional_inside_loop(self):
        """Conditionals inside a loop test the current element."""
        template = "$for(a)$$if(a)$[$a$]$endif$$endfor$"
        assert render_template(template, {"a": ["x", "", "y"]}) == "[x][y]"

    def test_loop_over_mappings(self):
        """Dotted names reach into the current element."""
        data = {"author": [{"name": "A"}, {"name": "B"}]}
        assert render_template("$for(author)$$author.name$;$endfor$", data) == "A;B;"


@pytest.mark.unit
class TestWhitespaceNormalization:
    """Tests for blank-run collapsing."""

    def test_blank_lines_collapse(self):
        """Runs of whitespace ending in a newline collapse to one newline."""
        assert render_template("a  \n\n\t\nb", {}) == "a\nb"

    def test_removed_blocks_leave_no_blank_lines(self):
        """Dropped blocks do not leave blank lines behind."""
        template = "<a>\n$if(x)$\n<x/>\n$endif$\n$if(y)$\n<y/>\n$endif$\n</a>"
        assert render_template(template, {}) == "<a>\n</a>"

    def test_values_not_normalized(self):
        """Whitespace inside substituted values is preserved."""
        assert render_template("<a>\n$v$\n</a>", {"v": "x  \n\ny"}) == "<a>\nx  \n\ny\n</a>"

    @given(NO_DOLLAR)
    def test_plain_text_only_normalized(self, value):
        """Text without tags is returned with only blank runs collapsed."""
        assert render_template(value, {}) == re.sub(r"[ \t\n]+\n", "\n", value)


@pytest.mark.unit
class TestMalformedTemplates:
    """Tests for the never-raise error policy."""

    @pytest.mark.parametrize(
        "template",
        [
            "cost $ 5",
            "$5$",
            "$if(x y)$",
            "$if(x)",
            "$for()$",
            "trailing $",
        ],
    )
    def test_malformed_tags_kept_literally(self, template):
        """Unrecognized tags stay literal text."""
        assert render_template(template, {"x": "1"}) == template

    def test_unclosed_block_kept_literally(self):
        """An opener without its closer is literal."""
        assert render_template("$if(x)$A", {"x": ""}) == "$if(x)$A"

    def test_unmatched_closers_kept_literally(self):
        """Closers without openers are literal."""
        assert render_template("A$endif$B$endfor$", {}) == "A$endif$B$endfor$"

    def test_mismatched_closer_inside_block(self):
        """A closer of the wrong kind is literal inside the open block."""
        assert render_template("$if(x)$A$endfor$B$endif$", {"x": "1"}) == "A$endfor$B"

    @given(st.text())
    def test_never_raises(self, template):
        """Any template renders without raising."""
        render_template(template, {"x": ["a"], "y": "b"})

    def test_referentially_transparent(self):
        """Rendering the same input twice gives the same output."""
        template = "$for(a)$$a$$endfor$ $if(b)$B$endif$"
        data = {"a": ["1", "2"], "b": "x"}
        assert render_template(template, data) == render_template(template, data)


@pytest.mark.unit
class TestParseTemplate:
    """Tests for the parse tree."""

    def test_tree_shape(self):
        """Blocks hold their bodies."""
        nodes = parse_template("a$if(x)$$for(y)$$y$$endfor$$endif$")
        assert nodes == [
            Text("a"),
            Conditional(name="x", body=[Loop(name="y", body=[Variable("y")])]),
        ]

    def test_parsed_tree_renders(self):
        """A pre-parsed tree can be rendered repeatedly."""
        nodes = parse_template("<$tag$/>")
        assert render_template(nodes, {"tag": "a"}) == "<a/>"
        assert render_template(nodes, {"tag": "b"}) == "<b/>"


@pytest.mark.unit
class TestValueHelpers:
    """Tests for lookup, is_truthy and stringify."""

    def test_lookup_missing_path(self):
        """A broken dotted path resolves to None."""
        assert lookup({"a": {"b": 1}}, "a.c") is None
        assert lookup({"a": "x"}, "a.b") is None

    def test_is_truthy_zero(self):
        """Zero is a value, not an absence."""
        assert is_truthy(0)

    def test_stringify_none(self):
        """None stringifies to the empty string."""
        assert stringify(None) == ""
