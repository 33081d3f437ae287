"""Coarse-to-fine generation helpers.

Generation starts from a fixed, fully labelled skeleton that renders
immediately; a patch stream then refines it. The benchmark compares the
token cost of shorthand against the JSON it expands to.
"""

import json
import math
from collections.abc import Iterable
from dataclasses import asdict, dataclass
from typing import Any

from uischema.shorthand import expand_shorthand

CHARS_PER_TOKEN = 4


@dataclass(frozen=True)
class BenchmarkCase:
    """A named shorthand sample."""

    name: str
    shorthand: str


@dataclass(frozen=True)
class BenchmarkResult:
    """Token estimates for one case.

    Attributes:
        name: Case name.
        shorthand_tokens: Estimated tokens of the shorthand source.
        expanded_tokens: Estimated tokens of the compact expanded JSON.
        ratio: expanded_tokens / shorthand_tokens, two decimals.
    """

    name: str
    shorthand_tokens: int
    expanded_tokens: int
    ratio: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


DEFAULT_CASES: tuple[BenchmarkCase, ...] = (
    BenchmarkCase(
        name="Dashboard",
        shorthand=(
            "c[ariaLabel:Dashboard][children:row[children:txt[text:Metrics]"
            "|btn[text:Refresh;ariaLabel:Refresh metrics]]"
            "|grid[children:card[ariaLabel:Card]|card[ariaLabel:Card]]]"
        ),
    ),
    BenchmarkCase(
        name="Form",
        shorthand=(
            "c[ariaLabel:Signup][children:txt[text:Create account]"
            "|form[children:in[ariaLabel:Email;placeholder:you@site.com]"
            "|in[ariaLabel:Password;placeholder:••••••]"
            "|btn[text:Submit;ariaLabel:Submit form]]]"
        ),
    ),
    BenchmarkCase(
        name="Settings",
        shorthand=(
            "c[ariaLabel:Settings][children:txt[text:Preferences]"
            "|row[children:txt[text:Notifications]|sw[ariaLabel:Notifications toggle]]]"
        ),
    ),
)


def generate_layout_skeleton(description: str) -> dict[str, Any]:
    """Build the initial layout a patch stream refines.

    Every node carries an ariaLabel so the skeleton passes both validators
    before any refinement arrives.

    Args:
        description: Free-text request, kept on the root as a passthrough prop.

    Returns:
        Node wire dict: Container > [Row > [Text, Spacer], Grid > [Card, Card]].
    """
    return {
        "type": "Container",
        "props": {"ariaLabel": "Generated layout container", "description": description},
        "children": [
            {
                "type": "Row",
                "props": {"ariaLabel": "Header row"},
                "children": [
                    {"type": "Text", "props": {"text": "Title", "ariaLabel": "Title text"}},
                    {"type": "Spacer"},
                ],
            },
            {
                "type": "Grid",
                "props": {"ariaLabel": "Content grid"},
                "children": [
                    {"type": "Card", "props": {"ariaLabel": "Card"}},
                    {"type": "Card", "props": {"ariaLabel": "Card"}},
                ],
            },
        ],
    }


def estimate_tokens(text: str) -> int:
    """Heuristic token count: one token per four characters, rounded up."""
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def run_benchmark(cases: Iterable[BenchmarkCase] | None = None) -> list[BenchmarkResult]:
    """Estimate shorthand savings for each case.

    Args:
        cases: Cases to measure. Defaults to DEFAULT_CASES.

    Returns:
        One result per case, in order.

    Raises:
        ShorthandSyntaxError: If a case is malformed.
    """
    results: list[BenchmarkResult] = []
    for case in DEFAULT_CASES if cases is None else cases:
        expanded = json.dumps(
            expand_shorthand(case.shorthand), separators=(",", ":"), ensure_ascii=False
        )
        shorthand_tokens = estimate_tokens(case.shorthand)
        expanded_tokens = estimate_tokens(expanded)
        results.append(
            BenchmarkResult(
                name=case.name,
                shorthand_tokens=shorthand_tokens,
                expanded_tokens=expanded_tokens,
                ratio=round(expanded_tokens / shorthand_tokens, 2),
            )
        )
    return results


__all__ = [
    "CHARS_PER_TOKEN",
    "BenchmarkCase",
    "BenchmarkResult",
    "DEFAULT_CASES",
    "generate_layout_skeleton",
    "estimate_tokens",
    "run_benchmark",
]
