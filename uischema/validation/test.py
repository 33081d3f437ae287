"""Unit tests for structural validation."""

import copy

import pytest

from uischema.a11y import validate_a11y
from uischema.schema import INTERACTIVE_TYPES, Document
from uischema.validation import (
    SchemaError,
    ValidationResult,
    is_valid,
    validate_document,
    validate_node,
)


def _paths(result: ValidationResult) -> list[tuple]:
    return [err.path for err in result.errors]


class TestValidDocuments:
    """Documents that must pass."""

    @pytest.mark.unit
    def test_container_text_button(self, sample_document_dict):
        """The canonical three-node document passes."""
        result = validate_document(sample_document_dict)
        assert result.success
        assert isinstance(result.document, Document)
        assert result.document.schema_version == "0.1.0"
        assert result.errors == []

    @pytest.mark.unit
    def test_full_feature_document(self, rich_document_dict):
        """Slots, bindings, events, meta and ext are all accepted."""
        result = validate_document(rich_document_dict)
        assert result.success, result.errors
        assert result.document.to_dict() == rich_document_dict

    @pytest.mark.unit
    def test_extension_types_accepted(self):
        doc = {"root": {"type": "x-chart", "children": [{"type": "custom:map"}]}}
        assert is_valid(doc)

    @pytest.mark.unit
    def test_props_passthrough(self):
        """Unrecognized prop keys are not errors."""
        doc = {"root": {"type": "Text", "props": {"text": "Hi", "variant": "lead"}}}
        result = validate_document(doc)
        assert result.success
        assert result.document.root.props.extras == {"variant": "lead"}

    @pytest.mark.unit
    @pytest.mark.parametrize("key", ["aria_label", "class_name", "tab_index"])
    def test_snake_case_prop_keys_pass_through(self, key):
        """Snake-case prop keys stay opaque extras and round-trip unchanged."""
        doc = {"root": {"type": "Text", "props": {key: 3}}}
        result = validate_document(doc)
        assert result.success, result.errors
        assert result.document.root.props.extras == {key: 3}
        assert result.document.to_dict() == doc

    @pytest.mark.unit
    def test_input_not_mutated(self, sample_document_dict):
        snapshot = copy.deepcopy(sample_document_dict)
        validate_document(sample_document_dict)
        assert sample_document_dict == snapshot


class TestAriaLabelRule:
    """Interactive components require an ariaLabel."""

    @pytest.mark.unit
    def test_missing_label_on_button(self, sample_document_dict):
        """A missing label is one error pointing at the label."""
        del sample_document_dict["root"]["children"][1]["props"]["ariaLabel"]
        result = validate_document(sample_document_dict)

        assert not result.success
        assert result.document is None
        assert _paths(result) == [("root", "children", 1, "props", "ariaLabel")]
        assert result.errors[0].error_type == "aria_label_required"

    @pytest.mark.unit
    @pytest.mark.parametrize("ct", sorted(ct.value for ct in INTERACTIVE_TYPES))
    def test_every_interactive_type(self, ct):
        """Each interactive type fails without props at all."""
        result = validate_document({"root": {"type": ct}})
        assert _paths(result) == [("root", "props", "ariaLabel")]

    @pytest.mark.unit
    def test_blank_label_rejected(self):
        doc = {"root": {"type": "Switch", "props": {"ariaLabel": "   "}}}
        assert _paths(validate_document(doc)) == [("root", "props", "ariaLabel")]

    @pytest.mark.unit
    def test_snake_case_label_does_not_count(self):
        """Structural and accessibility checks agree on which key labels a node."""
        root = {"type": "Button", "props": {"aria_label": "Go"}}
        result = validate_document({"root": root})
        assert _paths(result) == [("root", "props", "ariaLabel")]
        assert [issue.path for issue in validate_a11y(root)] == ["root.props.ariaLabel"]

    @pytest.mark.unit
    def test_label_in_slot(self):
        """Slot nodes are checked and slot paths carry no union tags."""
        doc = {
            "root": {
                "type": "Card",
                "slots": {
                    "header": {"type": "Link"},
                    "actions": [{"type": "Text"}, {"type": "Button"}],
                },
            }
        }
        assert _paths(validate_document(doc)) == [
            ("root", "slots", "header", "props", "ariaLabel"),
            ("root", "slots", "actions", 1, "props", "ariaLabel"),
        ]

    @pytest.mark.unit
    def test_non_interactive_types_need_no_label(self):
        doc = {"root": {"type": "Image", "props": {"src": "a.png"}}}
        assert is_valid(doc)

    @pytest.mark.unit
    def test_extension_types_need_no_label(self):
        assert is_valid({"root": {"type": "x-button"}})


class TestStructuralErrors:
    """Malformed input is reported, never raised."""

    @pytest.mark.unit
    @pytest.mark.parametrize("data", [None, [], "root", 42])
    def test_non_object_input(self, data):
        result = validate_document(data)
        assert not result.success
        assert _paths(result) == [()]
        assert result.errors[0].format_path() == "<document>"

    @pytest.mark.unit
    def test_missing_root(self):
        result = validate_document({"schemaVersion": "0.1.0"})
        assert _paths(result) == [("root",)]
        assert result.errors[0].error_type == "missing"

    @pytest.mark.unit
    def test_unknown_top_level_key(self):
        """Strict objects reject unknown keys instead of dropping them."""
        result = validate_document({"root": {"type": "Text"}, "title": "x"})
        assert _paths(result) == [("title",)]
        assert result.errors[0].error_type == "extra_forbidden"

    @pytest.mark.unit
    def test_python_field_name_is_unknown_key(self):
        """Only the camelCase wire name is accepted."""
        result = validate_document({"schema_version": "0.1.0", "root": {"type": "Text"}})
        assert _paths(result) == [("schema_version",)]
        assert result.errors[0].error_type == "extra_forbidden"

    @pytest.mark.unit
    def test_unknown_type(self):
        result = validate_document({"root": {"type": "Widget"}})
        assert _paths(result) == [("root", "type")]
        assert "Widget" in result.errors[0].message

    @pytest.mark.unit
    def test_nested_type_error_path(self):
        doc = {
            "root": {
                "type": "Container",
                "children": [{"type": "Text"}, {"type": "Row", "children": [{}]}],
            }
        }
        assert _paths(validate_document(doc)) == [
            ("root", "children", 1, "children", 0, "type")
        ]

    @pytest.mark.unit
    def test_tab_index_out_of_range(self):
        doc = {"root": {"type": "Text", "props": {"tabIndex": 40000}}}
        assert _paths(validate_document(doc)) == [("root", "props", "tabIndex")]

    @pytest.mark.unit
    def test_bad_event_type(self):
        doc = {
            "root": {
                "type": "Text",
                "events": {"onClick": {"type": "hover", "name": "x"}},
            }
        }
        assert _paths(validate_document(doc)) == [
            ("root", "events", "onClick", "type")
        ]

    @pytest.mark.unit
    def test_binding_requires_path(self):
        doc = {"root": {"type": "Text", "bindings": {"text": {"type": "string"}}}}
        assert _paths(validate_document(doc)) == [
            ("root", "bindings", "text", "path")
        ]

    @pytest.mark.unit
    def test_invalid_slot_value(self):
        doc = {"root": {"type": "Card", "slots": {"header": "Title"}}}
        result = validate_document(doc)
        assert _paths(result) == [("root", "slots", "header")]
        assert result.errors[0].error_type == "invalid_slot"

    @pytest.mark.unit
    def test_multiple_errors_are_ordered(self):
        doc = {
            "root": {
                "type": "Container",
                "children": [{"type": "Nope"}, {"type": "Text", "oops": 1}],
            }
        }
        assert _paths(validate_document(doc)) == [
            ("root", "children", 0, "type"),
            ("root", "children", 1, "oops"),
        ]


class TestValidateNode:
    """Tests for bare node validation."""

    @pytest.mark.unit
    def test_paths_start_at_node(self):
        result = validate_node({"type": "Row", "children": [{"type": "Slider"}]})
        assert _paths(result) == [("children", 0, "props", "ariaLabel")]

    @pytest.mark.unit
    def test_valid_node(self):
        result = validate_node({"type": "Text", "props": {"text": "Hi"}})
        assert result.success
        assert result.document.type == "Text"


class TestSchemaError:
    """Tests for SchemaError dataclass."""

    @pytest.mark.unit
    def test_format_path(self):
        err = SchemaError(("root", "children", 1), "bad", "custom")
        assert err.format_path() == "root.children.1"
