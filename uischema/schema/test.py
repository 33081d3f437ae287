"""Unit tests for the document model."""

import json

import pytest
from pydantic import ValidationError

from uischema.schema import (
    COMPONENT_REGISTRY,
    IMPLICIT_ROLES,
    INTERACTIVE_TYPES,
    ComponentCategory,
    ComponentType,
    Document,
    ExtensionType,
    Node,
    Props,
    export_component_catalog,
    export_json_schema,
    get_component_meta,
    get_components_by_category,
    implicit_role,
    is_interactive,
    resolve_component_type,
)


class TestComponentRegistry:
    """Tests for COMPONENT_REGISTRY completeness."""

    @pytest.mark.unit
    def test_all_component_types_registered(self):
        """Every ComponentType has metadata in registry."""
        for ct in ComponentType:
            assert ct in COMPONENT_REGISTRY, f"Missing metadata for {ct}"

    @pytest.mark.unit
    def test_registry_has_23_entries(self):
        """Registry contains exactly 23 core component definitions."""
        assert len(COMPONENT_REGISTRY) == 23

    @pytest.mark.unit
    def test_shorthand_tokens_unique(self):
        """No two core types share a shorthand token."""
        tokens = [meta.shorthand for meta in COMPONENT_REGISTRY.values()]
        assert len(tokens) == len(set(tokens))

    @pytest.mark.unit
    def test_meta_to_dict(self):
        """ComponentMeta converts to dictionary correctly."""
        d = get_component_meta(ComponentType.BUTTON).to_dict()
        assert d["type"] == "Button"
        assert d["category"] == "control"
        assert d["shorthand"] == "btn"
        assert d["implicit_role"] == "button"
        assert d["interactive"] is True

    @pytest.mark.unit
    def test_catalog_export(self):
        """Catalog is keyed by wire type name."""
        catalog = export_component_catalog()
        assert catalog["Container"]["shorthand"] == "c"
        assert len(catalog) == 23


class TestInteractiveTypes:
    """Tests for the interactive type set and implicit roles."""

    @pytest.mark.unit
    def test_interactive_set(self):
        """Exactly the nine control types are interactive."""
        assert {ct.value for ct in INTERACTIVE_TYPES} == {
            "Button",
            "Link",
            "Input",
            "Textarea",
            "Select",
            "Checkbox",
            "RadioGroup",
            "Switch",
            "Slider",
        }

    @pytest.mark.unit
    def test_controls_category_matches_interactive(self):
        """Control category and interactive set agree."""
        controls = set(get_components_by_category(ComponentCategory.CONTROL))
        assert controls == set(INTERACTIVE_TYPES)

    @pytest.mark.unit
    def test_implicit_roles(self):
        """Canonical roles follow ARIA naming."""
        assert IMPLICIT_ROLES[ComponentType.INPUT] == "textbox"
        assert IMPLICIT_ROLES[ComponentType.TEXTAREA] == "textbox"
        assert IMPLICIT_ROLES[ComponentType.SELECT] == "combobox"
        assert IMPLICIT_ROLES[ComponentType.RADIO_GROUP] == "radiogroup"
        assert ComponentType.CONTAINER not in IMPLICIT_ROLES

    @pytest.mark.unit
    def test_helpers_on_raw_strings(self):
        """Raw-string helpers handle extension and unknown types."""
        assert is_interactive("Button")
        assert not is_interactive("Text")
        assert not is_interactive("x-button")
        assert not is_interactive(None)
        assert implicit_role("Link") == "link"
        assert implicit_role("custom:link") is None
        assert implicit_role("Nope") is None


class TestResolveComponentType:
    """Tests for type classification."""

    @pytest.mark.unit
    def test_core_type(self):
        assert resolve_component_type("Slider") is ComponentType.SLIDER

    @pytest.mark.unit
    def test_extension_types(self):
        """Both extension prefixes yield an ExtensionType."""
        x = resolve_component_type("x-chart")
        custom = resolve_component_type("custom:map")
        assert x == ExtensionType(prefix="x-", name="chart")
        assert custom == ExtensionType(prefix="custom:", name="map")
        assert custom.raw == "custom:map"

    @pytest.mark.unit
    def test_unknown_types(self):
        """Plain unknown strings and non-strings are rejected."""
        assert resolve_component_type("button") is None
        assert resolve_component_type("Chart") is None
        assert resolve_component_type(42) is None


class TestNodeModel:
    """Tests for the Node pydantic model."""

    @pytest.mark.unit
    def test_minimal_node(self):
        """Only type is required."""
        node = Node(type="Container")
        assert node.children is None
        assert node.component is ComponentType.CONTAINER
        assert node.to_dict() == {"type": "Container"}

    @pytest.mark.unit
    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            Node(type="Widget")

    @pytest.mark.unit
    def test_extension_component(self):
        node = Node(type="x-chart")
        assert isinstance(node.component, ExtensionType)

    @pytest.mark.unit
    def test_unvalidated_unknown_component(self):
        """Nodes built without validation report a bad type as ValueError."""
        node = Node.model_construct(type="Widget")
        with pytest.raises(ValueError, match="Unknown component type"):
            node.component

    @pytest.mark.unit
    def test_unknown_node_key_rejected(self):
        """Nodes are strict objects."""
        with pytest.raises(ValidationError):
            Node.model_validate({"type": "Text", "label": "Hi"})

    @pytest.mark.unit
    def test_button_without_label_allowed_without_context(self):
        """The ariaLabel rule only applies through the structural validator."""
        node = Node.model_validate({"type": "Button"})
        assert node.props is None

    @pytest.mark.unit
    def test_slots_single_and_list(self):
        """Slots accept a single node or a list of nodes."""
        node = Node.model_validate(
            {
                "type": "Card",
                "slots": {
                    "header": {"type": "Text"},
                    "footer": [{"type": "Button", "props": {"ariaLabel": "Go"}}],
                },
            }
        )
        assert isinstance(node.slots["header"], Node)
        assert isinstance(node.slots["footer"], list)

    @pytest.mark.unit
    def test_wire_dump_keeps_explicit_null(self):
        """Unset fields are omitted, explicit nulls are kept."""
        raw = {"type": "Input", "props": {"ariaLabel": "Name", "value": None}}
        assert Node.model_validate(raw).to_dict() == raw


class TestPropsModel:
    """Tests for typed props with passthrough keys."""

    @pytest.mark.unit
    def test_passthrough_keys(self):
        """Unknown keys are kept in extras."""
        props = Props.model_validate({"ariaLabel": "Go", "variant": "primary"})
        assert props.aria_label == "Go"
        assert props.extras == {"variant": "primary"}
        assert props.to_dict() == {"ariaLabel": "Go", "variant": "primary"}

    @pytest.mark.unit
    def test_tab_index_range(self):
        """tabIndex must be an integer between -1 and 32767."""
        Props.model_validate({"tabIndex": -1})
        Props.model_validate({"tabIndex": 32767})
        for bad in (-2, 32768, "0", 1.5, True):
            with pytest.raises(ValidationError):
                Props.model_validate({"tabIndex": bad})

    @pytest.mark.unit
    def test_style_values(self):
        """Style values are scalars."""
        Props.model_validate({"style": {"gap": 4, "color": "red", "x": None}})
        with pytest.raises(ValidationError):
            Props.model_validate({"style": {"nested": {"a": 1}}})

    @pytest.mark.unit
    def test_populate_by_python_name(self):
        props = Props(aria_label="Save", class_name="primary")
        assert props.to_dict() == {"ariaLabel": "Save", "className": "primary"}


class TestDocumentModel:
    """Tests for the Document envelope."""

    @pytest.mark.unit
    def test_round_trip(self, sample_document_dict):
        """parse(serialize(d)) == d for a valid document."""
        doc = Document.model_validate(sample_document_dict)
        again = Document.model_validate(json.loads(doc.to_json()))
        assert again == doc
        assert again.to_dict() == sample_document_dict

    @pytest.mark.unit
    def test_export_json_schema(self):
        """Schema uses wire names and lists the root requirement."""
        schema = export_json_schema()
        assert schema["title"] == "Document"
        assert "root" in schema["required"]
        assert "schemaVersion" in schema["properties"]
