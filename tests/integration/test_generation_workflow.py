"""Integration tests for the streaming generation workflow.

Tests the full lifecycle an agent and a UI surface go through:
1. Expand a shorthand draft -> structurally valid node
2. Start from the coarse skeleton and stream JSONL patches in chunks
3. Validate the refined document and audit its accessibility
4. Ship the tree and the audit as protocol events
"""

import pytest

from uischema.a11y import validate_a11y
from uischema.patch import PatchStream, create_add_patch, create_set_patch, serialize_patches_to_jsonl
from uischema.pipeline import generate_layout_skeleton
from uischema.protocol import (
    create_ui_evaluation,
    create_ui_update,
    deserialize_event,
    evaluation_from_a11y,
    is_ui_evaluation,
    serialize_event,
)
from uischema.schema import SCHEMA_VERSION
from uischema.shorthand import expand_shorthand
from uischema.validation import validate_document


@pytest.fixture
def refinement_jsonl() -> str:
    """Patches that turn the skeleton into a small dashboard."""
    return serialize_patches_to_jsonl(
        [
            create_set_patch("/props/ariaLabel", "Sales dashboard"),
            create_set_patch("/children/0/children/0/props/text", "Sales"),
            create_add_patch(
                "/children/0/children/-",
                expand_shorthand("btn[text:Refresh;ariaLabel:Refresh data]"),
            ),
            create_set_patch("/children/1/children/0/slots/header", {"type": "Text", "props": {"text": "Revenue"}}),
            create_add_patch("/children/1/children", {"type": "Switch"}),
        ]
    ) + "\n"


@pytest.mark.integration
class TestGenerationWorkflow:
    """Skeleton -> streamed patches -> validation -> events."""

    def test_stream_in_small_chunks(self, refinement_jsonl):
        skeleton = generate_layout_skeleton("sales dashboard")
        stream = PatchStream(skeleton)
        for start in range(0, len(refinement_jsonl), 7):
            stream.feed(refinement_jsonl[start : start + 7])
        stream.close()

        tree = stream.tree
        assert stream.applied == 5
        assert tree["props"]["ariaLabel"] == "Sales dashboard"
        assert tree["children"][0]["children"][-1]["type"] == "Button"
        assert tree["children"][1]["children"][0]["slots"]["header"]["props"]["text"] == "Revenue"
        # Untouched skeleton subtrees are shared, and the skeleton itself is intact.
        assert tree["children"][0]["children"][1] is skeleton["children"][0]["children"][1]
        assert skeleton["props"]["ariaLabel"] == "Generated layout container"

    def test_unlabelled_control_caught_by_both_validators(self, refinement_jsonl):
        stream = PatchStream(generate_layout_skeleton("sales dashboard"))
        stream.feed(refinement_jsonl)

        document = {"schemaVersion": SCHEMA_VERSION, "root": stream.tree}
        result = validate_document(document)
        assert not result.success
        assert [error.path for error in result.errors] == [
            ("root", "children", 1, "children", 2, "props", "ariaLabel")
        ]

        issues = validate_a11y(stream.tree)
        assert [issue.path for issue in issues] == ["root.children[1].children[2].props.ariaLabel"]

        event = create_ui_evaluation(evaluation_from_a11y(issues))
        decoded = deserialize_event(serialize_event(event))
        assert is_ui_evaluation(decoded)
        assert decoded.payload.report.score == 90

    def test_fixed_tree_ships_as_update(self, refinement_jsonl):
        stream = PatchStream(generate_layout_skeleton("sales dashboard"))
        stream.feed(refinement_jsonl)
        stream.feed('{"op":"set","path":"/children/1/children/2/props","value":{"ariaLabel":"Live mode"}}\n')

        result = validate_document({"schemaVersion": SCHEMA_VERSION, "root": stream.tree})
        assert result.success, result.errors
        assert validate_a11y(result.document) == []

        event = deserialize_event(serialize_event(create_ui_update(result.document.root)))
        assert event.payload.node == result.document.root.to_dict()
