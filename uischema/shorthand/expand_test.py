"""Unit tests for shorthand expansion."""

import pytest

from uischema.a11y import validate_a11y
from uischema.schema import COMPONENT_REGISTRY, ComponentType, resolve_component_type
from uischema.validation import validate_node

from .expand import TYPE_MAP, expand_shorthand, expand_type
from .lib import ShorthandNode, ShorthandSyntaxError, parse_shorthand


class TestTypeMap:
    """Abbreviation table."""

    @pytest.mark.unit
    def test_covers_every_core_type(self):
        assert set(TYPE_MAP.values()) == set(ComponentType)
        assert len(TYPE_MAP) == len(COMPONENT_REGISTRY)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            ("c", "Container"),
            ("txt", "Text"),
            ("btn", "Button"),
            ("in", "Input"),
            ("sw", "Switch"),
            ("li", "ListItem"),
            ("radio", "RadioGroup"),
            ("div", "Divider"),
            ("sp", "Spacer"),
        ],
    )
    def test_known_tokens(self, token, expected):
        assert expand_type(token) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize("token", ["chart", "Button", "BTN", "x-map"])
    def test_unknown_tokens_become_custom(self, token):
        """Full names and unknown tokens are not in the table."""
        assert expand_type(token) == f"custom:{token}"


class TestExpandShorthand:
    """Full expansion."""

    @pytest.mark.unit
    def test_scenario_tree(self):
        expanded = expand_shorthand(
            "c[ariaLabel:Demo][children:txt[text:Hi]|btn[text:OK;ariaLabel:Confirm]]"
        )
        assert expanded == {
            "type": "Container",
            "props": {"ariaLabel": "Demo"},
            "children": [
                {"type": "Text", "props": {"text": "Hi"}},
                {"type": "Button", "props": {"text": "OK", "ariaLabel": "Confirm"}},
            ],
        }

    @pytest.mark.unit
    def test_empty_collections_omitted(self):
        """Absent props and children are left out, not emitted empty."""
        assert expand_shorthand("c[children:]") == {"type": "Container"}
        assert expand_shorthand("div") == {"type": "Divider"}

    @pytest.mark.unit
    def test_accepts_parsed_tree(self):
        tree = ShorthandNode(type="row", children=[ShorthandNode(type="sp")])
        assert expand_shorthand(tree) == {
            "type": "Row",
            "children": [{"type": "Spacer"}],
        }

    @pytest.mark.unit
    def test_props_not_coerced(self):
        expanded = expand_shorthand("slider[ariaLabel:Volume;min:0;tabIndex:1]")
        assert expanded["props"] == {"ariaLabel": "Volume", "min": "0", "tabIndex": "1"}

    @pytest.mark.unit
    def test_props_copied(self):
        """The expanded props map is independent of the parse tree."""
        tree = parse_shorthand("txt[text:Hi]")
        expanded = expand_shorthand(tree)
        expanded["props"]["text"] = "Bye"
        assert tree.props == {"text": "Hi"}

    @pytest.mark.unit
    def test_syntax_errors_propagate(self):
        with pytest.raises(ShorthandSyntaxError):
            expand_shorthand("c[children:txt")

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "source",
        [
            "c[ariaLabel:Dashboard][children:row[children:txt[text:Metrics]|btn[text:Refresh;ariaLabel:Refresh metrics]]|grid[children:card[ariaLabel:Card]|card[ariaLabel:Card]]]",
            "c[children:chart|map[children:pin|pin]]",
            "form[children:in[ariaLabel:Email]|unknown_thing]",
        ],
    )
    def test_types_always_resolvable(self, source):
        """Every expanded type is a core member or a custom extension."""

        def walk(node):
            assert resolve_component_type(node["type"]) is not None
            assert node["type"] not in TYPE_MAP
            for child in node.get("children", []):
                walk(child)

        walk(expand_shorthand(source))


class TestExpandedTreesDownstream:
    """Expanded trees feed the validators unchanged."""

    @pytest.mark.unit
    def test_structurally_valid(self):
        result = validate_node(
            expand_shorthand(
                "c[ariaLabel:Signup][children:txt[text:Create account]|form[children:in[ariaLabel:Email;placeholder:you@site.com]|btn[text:Submit;ariaLabel:Submit form]]]"
            )
        )
        assert result.success, result.errors

    @pytest.mark.unit
    def test_a11y_on_expanded_tree(self):
        """The accessibility check runs on unvalidated expanded trees."""
        issues = validate_a11y(expand_shorthand("row[children:txt[text:Hi]|sw]"))
        assert [issue.path for issue in issues] == ["root.children[1].props.ariaLabel"]
