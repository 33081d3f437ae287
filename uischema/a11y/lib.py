"""Accessibility heuristics for UI trees.

These checks are advisory. They run over typed nodes or over raw wire
dicts (for example trees built by the shorthand expander or by patches
that never went through structural validation), so every field access
is defensive and nothing here raises.

Checks applied at every node, children first and then slots:
    - Interactive components carry a non-empty ariaLabel
    - An explicit role matches the component's implicit role
    - tabIndex is not positive
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from uischema.schema import (
    IMPLICIT_ROLES,
    INTERACTIVE_TYPES,
    ComponentType,
    Document,
    ExtensionType,
    WireModel,
    has_aria_label,
    resolve_component_type,
)


@dataclass(frozen=True)
class A11yIssue:
    """An accessibility finding.

    Attributes:
        path: Dot/bracket location, e.g. ``root.slots.header[0].props.role``.
        message: Human-readable description.
    """

    path: str
    message: str


def _check_node(node: Mapping[str, Any], path: str, issues: list[A11yIssue]) -> None:
    props = node.get("props")
    if not isinstance(props, Mapping):
        props = {}

    component = resolve_component_type(node.get("type"))
    if isinstance(component, ExtensionType) or component is None:
        # Extension and unknown types have no known semantics to check.
        return
    _check_core(component, props, path, issues)


def _check_core(
    component: ComponentType,
    props: Mapping[str, Any],
    path: str,
    issues: list[A11yIssue],
) -> None:
    if component in INTERACTIVE_TYPES and not has_aria_label(props.get("ariaLabel")):
        issues.append(
            A11yIssue(
                path=f"{path}.props.ariaLabel",
                message="Interactive components require a non-empty ariaLabel.",
            )
        )

    role = props.get("role")
    expected = IMPLICIT_ROLES.get(component)
    if role and expected and role != expected:
        issues.append(
            A11yIssue(
                path=f"{path}.props.role",
                message=f'Role should be "{expected}" for {component.value}.',
            )
        )

    tab_index = props.get("tabIndex")
    if (
        isinstance(tab_index, (int, float))
        and not isinstance(tab_index, bool)
        and tab_index > 0
    ):
        issues.append(
            A11yIssue(
                path=f"{path}.props.tabIndex",
                message="Positive tabIndex is discouraged; prefer 0 or -1.",
            )
        )


def _walk(root: Any, issues: list[A11yIssue]) -> None:
    stack: list[tuple[Any, str]] = [(root, "root")]
    while stack:
        node, path = stack.pop()
        if not isinstance(node, Mapping):
            continue

        _check_node(node, path, issues)

        pending: list[tuple[Any, str]] = []
        children = node.get("children")
        if isinstance(children, list):
            for index, child in enumerate(children):
                pending.append((child, f"{path}.children[{index}]"))

        slots = node.get("slots")
        if isinstance(slots, Mapping):
            for name, value in slots.items():
                if isinstance(value, list):
                    for index, child in enumerate(value):
                        pending.append((child, f"{path}.slots.{name}[{index}]"))
                elif value:
                    pending.append((value, f"{path}.slots.{name}"))

        # Pushed in reverse so nodes pop in document order.
        stack.extend(reversed(pending))


def validate_a11y(node: WireModel | Mapping[str, Any] | Any) -> list[A11yIssue]:
    """Run the accessibility heuristics over a tree.

    Args:
        node: A typed Node or Document, or a raw node dict. Anything else
            yields no issues.

    Returns:
        Issues in depth-first order; empty when nothing was found.

    Example:
        >>> validate_a11y({"type": "Button"})
        [A11yIssue(path='root.props.ariaLabel', message='Interactive ...')]
    """
    if isinstance(node, Document):
        node = node.root
    if isinstance(node, WireModel):
        node = node.to_dict()
    issues: list[A11yIssue] = []
    _walk(node, issues)
    return issues


__all__ = ["A11yIssue", "validate_a11y"]
