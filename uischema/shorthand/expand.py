"""Shorthand expansion into wire-shaped nodes.

Abbreviated type tokens map to core component names through the
shorthand column of the component registry. Tokens outside the table
become ``custom:<token>`` extensions, so an expanded tree never carries a
raw abbreviation.

The result is a plain wire dict rather than a typed Node: prop values stay
strings exactly as written, and a typed model would coerce or reject them.
Run it through the structural validator when a typed tree is needed.
"""

from typing import Any

from uischema.schema import COMPONENT_REGISTRY, ComponentType

from .lib import ShorthandNode, parse_shorthand

TYPE_MAP: dict[str, ComponentType] = {
    meta.shorthand: ct for ct, meta in COMPONENT_REGISTRY.items()
}

CUSTOM_PREFIX = "custom:"


def expand_type(token: str) -> str:
    """Map a shorthand token to a wire type name.

    Example:
        >>> expand_type("btn"), expand_type("chart")
        ('Button', 'custom:chart')
    """
    component = TYPE_MAP.get(token)
    if component is None:
        return f"{CUSTOM_PREFIX}{token}"
    return component.value


def _expand_node(node: ShorthandNode) -> dict[str, Any]:
    expanded: dict[str, Any] = {"type": expand_type(node.type)}
    # Empty collections are left out rather than emitted as {} or [].
    if node.props:
        expanded["props"] = dict(node.props)
    if node.children:
        expanded["children"] = [_expand_node(child) for child in node.children]
    return expanded


def expand_shorthand(source: str | ShorthandNode) -> dict[str, Any]:
    """Expand shorthand into a node dict.

    Args:
        source: A shorthand string (parsed first) or an already parsed tree.

    Returns:
        Node wire dict with ``type`` and, when non-empty, ``props`` and
        ``children``.

    Raises:
        ShorthandSyntaxError: If ``source`` is a malformed string.

    Example:
        >>> expand_shorthand("c[children:txt[text:Hi]]")
        {'type': 'Container', 'children': [{'type': 'Text', 'props': {'text': 'Hi'}}]}
    """
    parsed = parse_shorthand(source) if isinstance(source, str) else source
    return _expand_node(parsed)


__all__ = ["TYPE_MAP", "expand_type", "expand_shorthand"]
