"""Shorthand grammar: parse compact strings and expand them to nodes.

Example usage:
    >>> from uischema.shorthand import expand_shorthand
    >>> expand_shorthand("btn[text:OK;ariaLabel:Confirm]")
    {'type': 'Button', 'props': {'text': 'OK', 'ariaLabel': 'Confirm'}}
"""

from .expand import TYPE_MAP, expand_shorthand, expand_type
from .lib import (
    MAX_DEPTH,
    ShorthandNode,
    ShorthandSyntaxError,
    parse_shorthand,
    split_top_level,
)

__all__ = [
    # Parser
    "MAX_DEPTH",
    "ShorthandNode",
    "ShorthandSyntaxError",
    "parse_shorthand",
    "split_top_level",
    # Expander
    "TYPE_MAP",
    "expand_type",
    "expand_shorthand",
]
