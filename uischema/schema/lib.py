"""Authoritative document model for AI-generated user interfaces.

This module is the single source of truth for the shape of a UI document:
- The core component vocabulary and its metadata registry
- The extension type forms (``x-*`` and ``custom:*``)
- The pydantic models for Document, Node, Props, Binding and Event
- JSON Schema export for prompt injection

The wire format is camelCase JSON. Models keep Python names internally and
map them to the wire keys through field aliases, so ``to_dict()`` always
returns the exact shape a generator emits.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    Tag,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic_core import PydanticCustomError

SCHEMA_VERSION = "0.1.0"

# Validation context flag that turns on the interactive ariaLabel requirement.
REQUIRE_ARIA_LABEL = "require_aria_label"

EXTENSION_PREFIXES = ("x-", "custom:")


class ComponentCategory(str, Enum):
    """High-level component groupings."""

    LAYOUT = "layout"
    CONTENT = "content"
    CONTROL = "control"


class ComponentType(str, Enum):
    """Core component vocabulary (23 kinds).

    Any other kind must be spelled as an extension, see ExtensionType.
    """

    # Layout
    CONTAINER = "Container"
    ROW = "Row"
    COLUMN = "Column"
    GRID = "Grid"
    CARD = "Card"
    LIST = "List"
    LIST_ITEM = "ListItem"
    FORM = "Form"
    DIVIDER = "Divider"
    SPACER = "Spacer"

    # Content
    TEXT = "Text"
    IMAGE = "Image"
    ICON = "Icon"
    BADGE = "Badge"

    # Controls
    BUTTON = "Button"
    LINK = "Link"
    INPUT = "Input"
    TEXTAREA = "Textarea"
    SELECT = "Select"
    CHECKBOX = "Checkbox"
    RADIO_GROUP = "RadioGroup"
    SWITCH = "Switch"
    SLIDER = "Slider"


class BindingType(str, Enum):
    """Declared value type of a data binding."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    DATE = "date"


class EventType(str, Enum):
    """Kind of handler an event dispatches to."""

    ACTION = "action"
    NAVIGATE = "navigate"
    SUBMIT = "submit"
    CUSTOM = "custom"


@dataclass(frozen=True)
class ExtensionType:
    """A component kind outside the core vocabulary.

    Attributes:
        prefix: Either "x-" or "custom:".
        name: Everything after the prefix.
    """

    prefix: str
    name: str

    @property
    def raw(self) -> str:
        """The wire spelling, e.g. "custom:chart"."""
        return f"{self.prefix}{self.name}"


@dataclass(frozen=True)
class ComponentMeta:
    """Metadata for a core component type.

    Attributes:
        type: The component type.
        category: Layout, content or control.
        description: One-line description for prompts and docs.
        shorthand: Abbreviated token used by the shorthand grammar.
        implicit_role: Canonical ARIA role, for types that have one.
    """

    type: ComponentType
    category: ComponentCategory
    description: str
    shorthand: str
    implicit_role: str | None = None

    @property
    def interactive(self) -> bool:
        """Interactive components need an accessible name."""
        return self.category == ComponentCategory.CONTROL

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "category": self.category.value,
            "description": self.description,
            "shorthand": self.shorthand,
            "implicit_role": self.implicit_role,
            "interactive": self.interactive,
        }


_LAYOUT = ComponentCategory.LAYOUT
_CONTENT = ComponentCategory.CONTENT
_CONTROL = ComponentCategory.CONTROL

COMPONENT_REGISTRY: dict[ComponentType, ComponentMeta] = {
    meta.type: meta
    for meta in (
        # Layout
        ComponentMeta(
            ComponentType.CONTAINER, _LAYOUT, "Generic grouping region", "c"
        ),
        ComponentMeta(ComponentType.ROW, _LAYOUT, "Horizontal flow of children", "row"),
        ComponentMeta(
            ComponentType.COLUMN, _LAYOUT, "Vertical flow of children", "col"
        ),
        ComponentMeta(ComponentType.GRID, _LAYOUT, "Two-dimensional grid", "grid"),
        ComponentMeta(
            ComponentType.CARD, _LAYOUT, "Bordered surface with header slot", "card"
        ),
        ComponentMeta(ComponentType.LIST, _LAYOUT, "Ordered collection", "list"),
        ComponentMeta(
            ComponentType.LIST_ITEM, _LAYOUT, "Single entry inside a List", "li"
        ),
        ComponentMeta(
            ComponentType.FORM, _LAYOUT, "Group of inputs submitted together", "form"
        ),
        ComponentMeta(
            ComponentType.DIVIDER, _LAYOUT, "Visual separator line", "div"
        ),
        ComponentMeta(ComponentType.SPACER, _LAYOUT, "Flexible empty space", "sp"),
        # Content
        ComponentMeta(ComponentType.TEXT, _CONTENT, "Run of plain text", "txt"),
        ComponentMeta(ComponentType.IMAGE, _CONTENT, "Raster or vector image", "img"),
        ComponentMeta(ComponentType.ICON, _CONTENT, "Named pictogram", "icon"),
        ComponentMeta(
            ComponentType.BADGE, _CONTENT, "Small status or count label", "badge"
        ),
        # Controls
        ComponentMeta(
            ComponentType.BUTTON, _CONTROL, "Clickable action trigger", "btn", "button"
        ),
        ComponentMeta(
            ComponentType.LINK, _CONTROL, "Navigation to another location", "link", "link"
        ),
        ComponentMeta(
            ComponentType.INPUT, _CONTROL, "Single-line text entry", "in", "textbox"
        ),
        ComponentMeta(
            ComponentType.TEXTAREA, _CONTROL, "Multi-line text entry", "ta", "textbox"
        ),
        ComponentMeta(
            ComponentType.SELECT, _CONTROL, "Choice from a dropdown", "sel", "combobox"
        ),
        ComponentMeta(
            ComponentType.CHECKBOX, _CONTROL, "Boolean tick box", "chk", "checkbox"
        ),
        ComponentMeta(
            ComponentType.RADIO_GROUP,
            _CONTROL,
            "Exclusive choice among options",
            "radio",
            "radiogroup",
        ),
        ComponentMeta(
            ComponentType.SWITCH, _CONTROL, "On/off toggle", "sw", "switch"
        ),
        ComponentMeta(
            ComponentType.SLIDER, _CONTROL, "Value picked along a range", "slider", "slider"
        ),
    )
}

INTERACTIVE_TYPES: frozenset[ComponentType] = frozenset(
    ct for ct, meta in COMPONENT_REGISTRY.items() if meta.interactive
)

IMPLICIT_ROLES: dict[ComponentType, str] = {
    ct: meta.implicit_role
    for ct, meta in COMPONENT_REGISTRY.items()
    if meta.implicit_role is not None
}


def get_component_meta(component_type: ComponentType) -> ComponentMeta:
    """Get metadata for a core component type.

    Raises:
        KeyError: If the type is not registered.
    """
    return COMPONENT_REGISTRY[component_type]


def get_components_by_category(category: ComponentCategory) -> list[ComponentType]:
    """List the core types in a category, in declaration order."""
    return [ct for ct, meta in COMPONENT_REGISTRY.items() if meta.category == category]


def resolve_component_type(value: Any) -> ComponentType | ExtensionType | None:
    """Classify a raw ``type`` value.

    Args:
        value: The raw value found in a node's ``type`` field.

    Returns:
        The core ComponentType for an exact match, an ExtensionType for the
        ``x-`` / ``custom:`` forms, or None for anything else.
    """
    if not isinstance(value, str):
        return None
    try:
        return ComponentType(value)
    except ValueError:
        pass
    for prefix in EXTENSION_PREFIXES:
        if value.startswith(prefix):
            return ExtensionType(prefix=prefix, name=value[len(prefix) :])
    return None


def is_interactive(value: Any) -> bool:
    """Whether a raw ``type`` value names an interactive core component."""
    resolved = resolve_component_type(value)
    if isinstance(resolved, ExtensionType):
        return False
    return resolved in INTERACTIVE_TYPES


def implicit_role(value: Any) -> str | None:
    """Canonical ARIA role for a raw ``type`` value, if it has one."""
    resolved = resolve_component_type(value)
    if isinstance(resolved, ExtensionType) or resolved is None:
        return None
    return IMPLICIT_ROLES.get(resolved)


def has_aria_label(label: Any) -> bool:
    """A usable ariaLabel is a string with non-whitespace content."""
    return isinstance(label, str) and bool(label.strip())


# =============================================================================
# Wire Models
# =============================================================================

Scalar = Union[StrictStr, StrictInt, StrictFloat, StrictBool, None]


class WireModel(BaseModel):
    """Base for models that mirror a JSON wire object."""

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Dump to the wire shape, leaving out fields that were never set."""
        return self.model_dump(by_alias=True, exclude_unset=True)

    def to_json(self, indent: int | None = None) -> str:
        """Serialize to wire JSON."""
        return self.model_dump_json(by_alias=True, exclude_unset=True, indent=indent)


class DocumentMeta(WireModel):
    """Descriptive metadata for a whole document."""

    name: StrictStr | None = None
    description: StrictStr | None = None
    locale: StrictStr | None = None


class Props(WireModel):
    """Component properties.

    The well-known keys are typed. Any other key is kept verbatim in
    ``extras`` and passed through without inspection.
    """

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        use_enum_values=True,
    )

    id: StrictStr | None = None
    class_name: StrictStr | None = Field(None, alias="className")
    style: dict[str, Scalar] | None = None
    aria_label: StrictStr | None = Field(None, alias="ariaLabel")
    role: StrictStr | None = None
    tab_index: Annotated[StrictInt, Field(ge=-1, le=32767)] | None = Field(
        None, alias="tabIndex"
    )
    text: StrictStr | None = None
    value: Scalar = None
    placeholder: StrictStr | None = None
    href: StrictStr | None = None
    src: StrictStr | None = None

    @property
    def extras(self) -> dict[str, Any]:
        """Passthrough keys outside the well-known set."""
        return dict(self.model_extra or {})


class Binding(WireModel):
    """Reference from a component value to application data."""

    path: StrictStr
    type: BindingType | None = None
    default: Any = None
    transform: StrictStr | None = None


class Event(WireModel):
    """Handler declaration for a component event such as onClick."""

    type: EventType
    name: StrictStr
    params: dict[str, Any] | None = None


def _slot_kind(value: Any) -> str | None:
    if isinstance(value, list):
        return "nodes"
    if isinstance(value, (dict, BaseModel)):
        return "node"
    return None


# Tags that pydantic inserts into error locations below a slot name.
SLOT_TAGS = frozenset({"node", "nodes"})

SlotValue = Annotated[
    Union[
        Annotated["Node", Tag("node")],
        Annotated[list["Node"], Tag("nodes")],
    ],
    Discriminator(
        _slot_kind,
        custom_error_type="invalid_slot",
        custom_error_message="Slot must be a node or a list of nodes",
    ),
]


class Node(WireModel):
    """One component instance in the UI tree.

    Attributes:
        id: Stable identity across patch operations.
        key: Reconciliation hint for collections.
        type: Core component name or an ``x-`` / ``custom:`` extension.
        props: Component properties.
        children: Ordinary nested content.
        slots: Named insertion points holding one node or a list of nodes.
        bindings: Data bindings by name.
        events: Event handlers by event name.
        meta: Opaque metadata.
        ext: Opaque extension data.

    Example:
        >>> node = Node(type="Button", props=Props(ariaLabel="Confirm"))
        >>> node.to_dict()
        {'type': 'Button', 'props': {'ariaLabel': 'Confirm'}}
    """

    id: StrictStr | None = None
    key: StrictStr | None = None
    type: StrictStr
    props: Props | None = None
    children: list["Node"] | None = None
    slots: dict[str, SlotValue] | None = None
    bindings: dict[str, Binding] | None = None
    events: dict[str, Event] | None = None
    meta: dict[str, Any] | None = None
    ext: dict[str, Any] | None = None

    @field_validator("type")
    @classmethod
    def _known_type(cls, value: str) -> str:
        if resolve_component_type(value) is None:
            raise ValueError(
                f"Unknown component type '{value}'; expected a core type "
                "or an 'x-' / 'custom:' extension"
            )
        return value

    @model_validator(mode="after")
    def _require_aria_label(self, info: ValidationInfo) -> "Node":
        if not (info.context or {}).get(REQUIRE_ARIA_LABEL):
            return self
        if not is_interactive(self.type):
            return self
        label = self.props.aria_label if self.props is not None else None
        if not has_aria_label(label):
            raise PydanticCustomError(
                "aria_label_required",
                "props.ariaLabel is required for interactive components",
            )
        return self

    @property
    def component(self) -> ComponentType | ExtensionType:
        """The classified component type.

        Raises:
            ValueError: If the node was built without validation and its
                type is neither core nor an extension.
        """
        resolved = resolve_component_type(self.type)
        if resolved is None:
            raise ValueError(f"Unknown component type: {self.type!r}")
        return resolved


Node.model_rebuild()


class Document(WireModel):
    """Top-level envelope holding one root node."""

    schema_version: StrictStr | None = Field(None, alias="schemaVersion")
    root: Node
    meta: DocumentMeta | None = None


def export_json_schema() -> dict[str, Any]:
    """Export the Document JSON Schema for prompt injection or tooling."""
    return Document.model_json_schema(by_alias=True)


def export_component_catalog() -> dict[str, Any]:
    """Export the core vocabulary with shorthand tokens and roles."""
    return {ct.value: COMPONENT_REGISTRY[ct].to_dict() for ct in ComponentType}


__all__ = [
    # Constants
    "SCHEMA_VERSION",
    "REQUIRE_ARIA_LABEL",
    "EXTENSION_PREFIXES",
    "SLOT_TAGS",
    # Enums
    "ComponentCategory",
    "ComponentType",
    "BindingType",
    "EventType",
    # Types
    "ExtensionType",
    "ComponentMeta",
    "COMPONENT_REGISTRY",
    "INTERACTIVE_TYPES",
    "IMPLICIT_ROLES",
    # Lookup functions
    "get_component_meta",
    "get_components_by_category",
    "resolve_component_type",
    "is_interactive",
    "implicit_role",
    "has_aria_label",
    # Models
    "WireModel",
    "DocumentMeta",
    "Props",
    "Binding",
    "Event",
    "Node",
    "Document",
    # Schema generation
    "export_json_schema",
    "export_component_catalog",
]
