"""Unit tests for accessibility heuristics."""

import pytest

from uischema.a11y import A11yIssue, validate_a11y
from uischema.schema import (
    IMPLICIT_ROLES,
    INTERACTIVE_TYPES,
    ComponentType,
    Document,
    Node,
)
from uischema.validation import validate_document


def _paths(issues: list[A11yIssue]) -> list[str]:
    return [issue.path for issue in issues]


class TestCleanTrees:
    """Trees without findings."""

    @pytest.mark.unit
    def test_canonical_document(self, sample_document_dict):
        """The canonical document yields no issues."""
        assert validate_a11y(sample_document_dict["root"]) == []

    @pytest.mark.unit
    def test_typed_document_and_node(self, sample_document_dict):
        """Typed models are accepted as well as raw dicts."""
        doc = validate_document(sample_document_dict).document
        assert validate_a11y(doc) == []
        assert validate_a11y(doc.root) == []

    @pytest.mark.unit
    def test_slots_and_extensions(self, rich_document_dict):
        """Labelled slot content and extension nodes produce no findings."""
        assert validate_a11y(rich_document_dict["root"]) == []

    @pytest.mark.unit
    def test_tab_index_zero_and_minus_one(self):
        node = {
            "type": "Row",
            "children": [
                {"type": "Text", "props": {"tabIndex": 0}},
                {"type": "Text", "props": {"tabIndex": -1}},
            ],
        }
        assert validate_a11y(node) == []

    @pytest.mark.unit
    def test_matching_role(self):
        node = {"type": "Input", "props": {"ariaLabel": "Name", "role": "textbox"}}
        assert validate_a11y(node) == []


class TestAriaLabel:
    """Interactive components need a label."""

    @pytest.mark.unit
    def test_missing_label_path(self, sample_document_dict):
        """Missing label is reported at its position in the tree."""
        del sample_document_dict["root"]["children"][1]["props"]["ariaLabel"]
        issues = validate_a11y(sample_document_dict["root"])
        assert _paths(issues) == ["root.children[1].props.ariaLabel"]
        assert "ariaLabel" in issues[0].message

    @pytest.mark.unit
    @pytest.mark.parametrize("ct", sorted(ct.value for ct in INTERACTIVE_TYPES))
    def test_each_interactive_type_reported_once(self, ct):
        """Every interactive type is reported exactly once per occurrence."""
        node = {
            "type": "Container",
            "children": [{"type": ct}, {"type": "Text"}, {"type": ct, "props": {}}],
        }
        assert _paths(validate_a11y(node)) == [
            "root.children[0].props.ariaLabel",
            "root.children[2].props.ariaLabel",
        ]

    @pytest.mark.unit
    def test_whitespace_label(self):
        issues = validate_a11y({"type": "Checkbox", "props": {"ariaLabel": "  "}})
        assert _paths(issues) == ["root.props.ariaLabel"]

    @pytest.mark.unit
    def test_independent_of_structural_validation(self):
        """Trees built without validation are still checked."""
        node = Node.model_validate({"type": "Button"})
        assert _paths(validate_a11y(node)) == ["root.props.ariaLabel"]


class TestRoleAndTabIndex:
    """Role mismatches and positive tab indices."""

    @pytest.mark.unit
    def test_role_mismatch(self):
        node = {"type": "Button", "props": {"ariaLabel": "Go", "role": "link"}}
        issues = validate_a11y(node)
        assert _paths(issues) == ["root.props.role"]
        assert issues[0].message == 'Role should be "button" for Button.'

    @pytest.mark.unit
    def test_role_on_type_without_implicit_role(self):
        """Types without an implicit role accept any role."""
        node = {"type": "Container", "props": {"role": "region"}}
        assert ComponentType.CONTAINER not in IMPLICIT_ROLES
        assert validate_a11y(node) == []

    @pytest.mark.unit
    def test_positive_tab_index(self):
        node = {"type": "Text", "props": {"tabIndex": 3}}
        assert _paths(validate_a11y(node)) == ["root.props.tabIndex"]

    @pytest.mark.unit
    def test_string_tab_index_not_checked(self):
        """Shorthand props stay strings and are not coerced."""
        node = {"type": "Text", "props": {"tabIndex": "3"}}
        assert validate_a11y(node) == []

    @pytest.mark.unit
    def test_issue_order_within_node(self):
        node = {"type": "Link", "props": {"role": "button", "tabIndex": 2}}
        assert _paths(validate_a11y(node)) == [
            "root.props.ariaLabel",
            "root.props.role",
            "root.props.tabIndex",
        ]


class TestTraversal:
    """Children first, then slots, in declaration order."""

    @pytest.mark.unit
    def test_slots_single_and_list(self):
        node = {
            "type": "Card",
            "children": [{"type": "Select"}],
            "slots": {
                "header": {"type": "Link"},
                "actions": [{"type": "Text"}, {"type": "Switch"}],
            },
        }
        assert _paths(validate_a11y(node)) == [
            "root.children[0].props.ariaLabel",
            "root.slots.header.props.ariaLabel",
            "root.slots.actions[1].props.ariaLabel",
        ]

    @pytest.mark.unit
    def test_nested_slot_inside_children(self):
        node = {
            "type": "List",
            "children": [
                {"type": "ListItem", "slots": {"trailing": [{"type": "Button"}]}}
            ],
        }
        assert _paths(validate_a11y(node)) == [
            "root.children[0].slots.trailing[0].props.ariaLabel"
        ]

    @pytest.mark.unit
    def test_extension_types_skipped(self):
        node = {"type": "x-widget", "children": [{"type": "Button"}]}
        assert _paths(validate_a11y(node)) == ["root.children[0].props.ariaLabel"]


class TestDefensiveInput:
    """Malformed trees never raise."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "node",
        [
            None,
            "Button",
            [],
            {},
            {"type": 7},
            {"type": "Button", "props": "label"},
            {"type": "Row", "children": "oops"},
            {"type": "Row", "children": [None, 3, {"type": "Text"}]},
            {"type": "Card", "slots": ["header"]},
            {"type": "Card", "slots": {"header": None, "body": "text"}},
        ],
    )
    def test_no_crash(self, node):
        assert isinstance(validate_a11y(node), list)

    @pytest.mark.unit
    def test_empty_document_root(self):
        """An empty document still walks its root."""
        doc = Document(root=Node(type="Container"))
        assert validate_a11y(doc) == []

    @pytest.mark.unit
    def test_deep_tree(self):
        """Nesting deeper than the interpreter stack is walked without error."""
        depth = 5000
        node = {"type": "Button"}
        for _ in range(depth):
            node = {"type": "Container", "children": [node]}
        issues = validate_a11y(node)
        assert _paths(issues) == ["root" + ".children[0]" * depth + ".props.ariaLabel"]
