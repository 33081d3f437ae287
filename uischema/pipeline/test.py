"""Unit tests for the generation pipeline helpers."""

import pytest

from uischema.a11y import validate_a11y
from uischema.patch import apply_patches, parse_jsonl_patches
from uischema.shorthand import ShorthandSyntaxError
from uischema.validation import validate_node

from .lib import (
    DEFAULT_CASES,
    BenchmarkCase,
    BenchmarkResult,
    estimate_tokens,
    generate_layout_skeleton,
    run_benchmark,
)


class TestSkeleton:
    """Initial coarse layout."""

    @pytest.mark.unit
    def test_shape(self):
        skeleton = generate_layout_skeleton("A sales dashboard")
        assert skeleton["type"] == "Container"
        assert skeleton["props"]["description"] == "A sales dashboard"
        assert [c["type"] for c in skeleton["children"]] == ["Row", "Grid"]
        assert [c["type"] for c in skeleton["children"][0]["children"]] == ["Text", "Spacer"]
        assert [c["type"] for c in skeleton["children"][1]["children"]] == ["Card", "Card"]

    @pytest.mark.unit
    def test_passes_both_validators(self):
        skeleton = generate_layout_skeleton("anything")
        assert validate_node(skeleton).success
        assert validate_a11y(skeleton) == []

    @pytest.mark.unit
    def test_fresh_tree_per_call(self):
        first = generate_layout_skeleton("x")
        first["children"].clear()
        assert len(generate_layout_skeleton("x")["children"]) == 2

    @pytest.mark.unit
    def test_refined_by_patches(self):
        skeleton = generate_layout_skeleton("Team overview")
        refined = apply_patches(
            skeleton,
            parse_jsonl_patches(
                '{"op":"set","path":"/children/0/children/0/props/text","value":"Team"}\n'
                '{"op":"add","path":"/children/1/children/-","value":{"type":"Card","props":{"ariaLabel":"Members"}}}\n'
                '{"op":"add","path":"/children/0/children","value":{"type":"Button","props":{"ariaLabel":"Invite"}}}'
            ),
        )
        assert refined["children"][0]["children"][0]["props"]["text"] == "Team"
        assert len(refined["children"][1]["children"]) == 3
        assert refined["children"][0]["children"][-1]["type"] == "Button"
        assert validate_node(refined).success
        assert skeleton["children"][0]["children"][0]["props"]["text"] == "Title"


class TestBenchmark:
    """Token estimates."""

    @pytest.mark.unit
    @pytest.mark.parametrize(("text", "tokens"), [("", 0), ("abcd", 1), ("abcde", 2)])
    def test_estimate_tokens(self, text, tokens):
        assert estimate_tokens(text) == tokens

    @pytest.mark.unit
    def test_default_cases(self):
        results = run_benchmark()
        assert [r.name for r in results] == [c.name for c in DEFAULT_CASES]
        for result in results:
            assert result.expanded_tokens > result.shorthand_tokens
            assert result.ratio == round(result.expanded_tokens / result.shorthand_tokens, 2)

    @pytest.mark.unit
    def test_custom_case(self):
        (result,) = run_benchmark([BenchmarkCase(name="tiny", shorthand="sp")])
        # "sp" -> {"type":"Spacer"}
        assert result == BenchmarkResult(
            name="tiny", shorthand_tokens=1, expanded_tokens=5, ratio=5.0
        )
        assert result.to_dict()["shorthand_tokens"] == 1

    @pytest.mark.unit
    def test_malformed_case(self):
        with pytest.raises(ShorthandSyntaxError):
            run_benchmark([BenchmarkCase(name="bad", shorthand="c[children:")])
