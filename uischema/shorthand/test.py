"""Unit tests for the shorthand parser."""

import pytest

from .lib import (
    MAX_DEPTH,
    ShorthandNode,
    ShorthandSyntaxError,
    parse_shorthand,
    split_top_level,
)


class TestIdentifier:
    """Leading identifier handling."""

    @pytest.mark.unit
    def test_bare_identifier(self):
        assert parse_shorthand("sp") == ShorthandNode(type="sp")

    @pytest.mark.unit
    def test_identifier_charset(self):
        """Letters, digits, underscores and hyphens form one identifier."""
        assert parse_shorthand("my_widget-2[a:b]").type == "my_widget-2"

    @pytest.mark.unit
    def test_surrounding_whitespace_ignored(self):
        assert parse_shorthand("  txt[text:Hi]  ").props == {"text": "Hi"}

    @pytest.mark.unit
    @pytest.mark.parametrize("source", ["", "   ", "\n"])
    def test_empty_input(self, source):
        with pytest.raises(ShorthandSyntaxError, match="empty"):
            parse_shorthand(source)

    @pytest.mark.unit
    @pytest.mark.parametrize("source", ["[text:Hi]", ":x", "|btn"])
    def test_missing_identifier(self, source):
        with pytest.raises(ShorthandSyntaxError, match="identifier") as exc_info:
            parse_shorthand(source)
        assert exc_info.value.position == 0


class TestProps:
    """Property-list attributes."""

    @pytest.mark.unit
    def test_semicolon_pairs(self):
        node = parse_shorthand("btn[text:OK;ariaLabel:Confirm]")
        assert node.props == {"text": "OK", "ariaLabel": "Confirm"}

    @pytest.mark.unit
    def test_colon_in_value_preserved(self):
        """Only the first colon splits key from value."""
        node = parse_shorthand("link[href:https://example.com:8080/a]")
        assert node.props == {"href": "https://example.com:8080/a"}

    @pytest.mark.unit
    @pytest.mark.parametrize("quoted", ['"Hello, world"', "'Hello, world'"])
    def test_quotes_stripped(self, quoted):
        node = parse_shorthand(f"txt[text:{quoted}]")
        assert node.props == {"text": "Hello, world"}

    @pytest.mark.unit
    def test_mismatched_quotes_kept(self):
        node = parse_shorthand("""txt[text:"Hi']""")
        assert node.props == {"text": "\"Hi'"}

    @pytest.mark.unit
    def test_values_stay_strings(self):
        node = parse_shorthand("slider[min:0;max:10;tabIndex:0]")
        assert node.props == {"min": "0", "max": "10", "tabIndex": "0"}

    @pytest.mark.unit
    def test_multiple_brackets_merge(self):
        """Repeated keys keep the last value in declaration order."""
        node = parse_shorthand("in[ariaLabel:Email][placeholder:you@site.com;ariaLabel:Mail]")
        assert node.props == {"ariaLabel": "Mail", "placeholder": "you@site.com"}

    @pytest.mark.unit
    def test_blank_segments_and_keys_skipped(self):
        node = parse_shorthand("txt[ ; text : Hi ;;:orphan]")
        assert node.props == {"text": "Hi"}

    @pytest.mark.unit
    def test_key_without_value(self):
        node = parse_shorthand("chk[checked]")
        assert node.props == {"checked": ""}


class TestChildren:
    """The children attribute."""

    @pytest.mark.unit
    def test_scenario_tree(self):
        node = parse_shorthand(
            "c[ariaLabel:Demo][children:txt[text:Hi]|btn[text:OK;ariaLabel:Confirm]]"
        )
        assert node == ShorthandNode(
            type="c",
            props={"ariaLabel": "Demo"},
            children=[
                ShorthandNode(type="txt", props={"text": "Hi"}),
                ShorthandNode(type="btn", props={"text": "OK", "ariaLabel": "Confirm"}),
            ],
        )

    @pytest.mark.unit
    def test_nested_children_not_split(self):
        """Pipes inside nested brackets belong to the nested node."""
        node = parse_shorthand("c[children:row[children:txt|btn]|grid[children:card|card]]")
        assert [child.type for child in node.children] == ["row", "grid"]
        assert [c.type for c in node.children[0].children] == ["txt", "btn"]
        assert [c.type for c in node.children[1].children] == ["card", "card"]

    @pytest.mark.unit
    def test_empty_children(self):
        """An empty children attribute yields zero children."""
        assert parse_shorthand("c[children:]").children == []
        assert parse_shorthand("c[children:  ]").children == []

    @pytest.mark.unit
    def test_empty_siblings_dropped(self):
        node = parse_shorthand("row[children:txt||btn|]")
        assert [child.type for child in node.children] == ["txt", "btn"]

    @pytest.mark.unit
    def test_children_key_tolerates_spaces(self):
        node = parse_shorthand("c[ children : txt ]")
        assert [child.type for child in node.children] == ["txt"]


class TestBrackets:
    """Bracket matching."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "source",
        [
            "btn[text:OK",
            "c[children:txt[text:Hi]",
            "c[children:row[children:txt[text:a]|btn]",
        ],
    )
    def test_unmatched_bracket(self, source):
        with pytest.raises(ShorthandSyntaxError, match="Unmatched bracket"):
            parse_shorthand(source)

    @pytest.mark.unit
    def test_invalid_child_fails_whole_parse(self):
        """No partial tree is returned when one child is malformed."""
        with pytest.raises(ShorthandSyntaxError, match="identifier"):
            parse_shorthand("c[children:txt|[x]]")

    @pytest.mark.unit
    def test_unmatched_position(self):
        with pytest.raises(ShorthandSyntaxError) as exc_info:
            parse_shorthand("txt[a:b][c:d")
        assert exc_info.value.position == 8

    @pytest.mark.unit
    def test_text_between_brackets_ignored(self):
        node = parse_shorthand("txt[a:b] [c:d]")
        assert node.props == {"a": "b", "c": "d"}


def _nested(depth: int) -> str:
    return "c[children:" * depth + "txt" + "]" * depth


class TestNestingLimit:
    """Children nest at most MAX_DEPTH levels below the root."""

    @pytest.mark.unit
    def test_at_limit(self):
        node = parse_shorthand(_nested(MAX_DEPTH))
        for _ in range(MAX_DEPTH):
            node = node.children[0]
        assert node == ShorthandNode(type="txt")

    @pytest.mark.unit
    @pytest.mark.parametrize("depth", [MAX_DEPTH + 1, 2000])
    def test_too_deep(self, depth):
        """Deep input fails with a syntax error, not a RecursionError."""
        with pytest.raises(ShorthandSyntaxError, match="nesting exceeds"):
            parse_shorthand(_nested(depth))


class TestSplitTopLevel:
    """Depth-aware splitting helper."""

    @pytest.mark.unit
    def test_split(self):
        assert split_top_level("a[children:b|c]|d") == ["a[children:b|c]", "d"]

    @pytest.mark.unit
    def test_custom_separator(self):
        assert split_top_level("a;b[x;y];c", ";") == ["a", "b[x;y]", "c"]

    @pytest.mark.unit
    def test_empty(self):
        assert split_top_level("") == []
