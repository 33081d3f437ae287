"""Compact shorthand grammar for UI trees.

The shorthand is a single-line notation that a generative model can emit
with far fewer tokens than the equivalent JSON:

    c[ariaLabel:Demo][children:txt[text:Hi]|btn[text:OK;ariaLabel:Confirm]]

Grammar:
    Node      := Identifier Attribute*
    Identifier:= [A-Za-z0-9_-]+
    Attribute := '[' Content ']'
    Content   := 'children:' Node ('|' Node)*
               | key ':' value (';' key ':' value)*

Brackets are matched by depth counting, so a child may itself carry
bracketed attributes and nested children. Sibling children are split on
'|' only at bracket depth zero.
"""

from dataclasses import dataclass, field

CHILDREN_KEY = "children"
CHILD_SEPARATOR = "|"
PROP_SEPARATOR = ";"
QUOTES = ('"', "'")
MAX_DEPTH = 200


class ShorthandSyntaxError(ValueError):
    """Raised when a shorthand string is malformed.

    Attributes:
        position: Offset into the (stripped) input where the problem was found.
    """

    def __init__(self, message: str, position: int | None = None):
        super().__init__(message)
        self.position = position


@dataclass
class ShorthandNode:
    """Intermediate parse tree node.

    Attributes:
        type: Identifier as written, e.g. "btn".
        props: Property values, always strings.
        children: Parsed child nodes in order.
    """

    type: str
    props: dict[str, str] = field(default_factory=dict)
    children: list["ShorthandNode"] = field(default_factory=list)


def _is_ident_char(char: str) -> bool:
    return char.isascii() and (char.isalnum() or char in "_-")


def _parse_identifier(text: str, start: int) -> tuple[str, int]:
    end = start
    while end < len(text) and _is_ident_char(text[end]):
        end += 1
    return text[start:end], end


def _parse_bracket(text: str, start: int) -> tuple[str, int]:
    """Return the content of the bracket opening at ``start`` and the offset after it."""
    depth = 0
    for i in range(start, len(text)):
        char = text[i]
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
            if depth == 0:
                return text[start + 1 : i], i + 1
    raise ShorthandSyntaxError(
        f"Unmatched bracket in shorthand at position {start}", position=start
    )


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in QUOTES:
        return value[1:-1]
    return value


def _parse_props(content: str) -> dict[str, str]:
    props: dict[str, str] = {}
    for segment in content.split(PROP_SEPARATOR):
        segment = segment.strip()
        if not segment:
            continue
        key, _, value = segment.partition(":")
        key = key.strip()
        if not key:
            continue
        props[key] = _unquote(value.strip())
    return props


def split_top_level(content: str, separator: str = CHILD_SEPARATOR) -> list[str]:
    """Split on ``separator`` outside of any brackets, dropping empty parts.

    Example:
        >>> split_top_level("a[children:b|c]|d")
        ['a[children:b|c]', 'd']
    """
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for char in content:
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
        if char == separator and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return [part.strip() for part in parts if part.strip()]


def parse_shorthand(text: str) -> ShorthandNode:
    """Parse a shorthand string into a ShorthandNode tree.

    Attribute brackets that are not ``children`` merge into one props map
    in declaration order, so a repeated key keeps its last value.

    Args:
        text: Shorthand source.

    Returns:
        The root ShorthandNode.

    Raises:
        ShorthandSyntaxError: On empty input, a missing leading identifier,
            an unmatched bracket anywhere in the tree, or children nested
            deeper than MAX_DEPTH.

    Example:
        >>> parse_shorthand("btn[text:OK;ariaLabel:Confirm]")
        ShorthandNode(type='btn', props={'text': 'OK', 'ariaLabel': 'Confirm'}, children=[])
    """
    return _parse_node(text, 0)


def _parse_node(text: str, depth: int) -> ShorthandNode:
    if depth > MAX_DEPTH:
        raise ShorthandSyntaxError(
            f"Shorthand nesting exceeds {MAX_DEPTH} levels", position=0
        )

    source = text.strip()
    if not source:
        raise ShorthandSyntaxError("Shorthand input is empty", position=0)

    node_type, index = _parse_identifier(source, 0)
    if not node_type:
        raise ShorthandSyntaxError(
            f"Expected component identifier at start of shorthand, found {source[0]!r}",
            position=0,
        )

    node = ShorthandNode(type=node_type)
    while index < len(source):
        if source[index] != "[":
            index += 1
            continue
        content, index = _parse_bracket(source, index)

        key, _, value = content.partition(":")
        if key.strip() == CHILDREN_KEY:
            node.children = [
                _parse_node(segment, depth + 1)
                for segment in split_top_level(value.strip())
            ]
        else:
            node.props.update(_parse_props(content))

    return node


__all__ = [
    "MAX_DEPTH",
    "ShorthandSyntaxError",
    "ShorthandNode",
    "parse_shorthand",
    "split_top_level",
]
