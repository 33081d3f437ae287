"""Document model for AI-generated user interfaces.

Example usage:
    >>> from uischema.schema import Document, Node, ComponentType
    >>> doc = Document(root=Node(type=ComponentType.CONTAINER.value))
    >>> doc.to_dict()
    {'root': {'type': 'Container'}}
"""

from .lib import (
    COMPONENT_REGISTRY,
    EXTENSION_PREFIXES,
    IMPLICIT_ROLES,
    INTERACTIVE_TYPES,
    REQUIRE_ARIA_LABEL,
    SCHEMA_VERSION,
    SLOT_TAGS,
    Binding,
    BindingType,
    ComponentCategory,
    ComponentMeta,
    ComponentType,
    Document,
    DocumentMeta,
    Event,
    EventType,
    ExtensionType,
    Node,
    Props,
    WireModel,
    export_component_catalog,
    export_json_schema,
    get_component_meta,
    get_components_by_category,
    has_aria_label,
    implicit_role,
    is_interactive,
    resolve_component_type,
)

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
    # Registry
    "ExtensionType",
    "ComponentMeta",
    "COMPONENT_REGISTRY",
    "INTERACTIVE_TYPES",
    "IMPLICIT_ROLES",
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
