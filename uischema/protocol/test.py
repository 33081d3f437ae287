"""Unit tests for the event protocol."""

import json

import pytest

from uischema.a11y import A11yIssue, validate_a11y
from uischema.schema import Node, Props

from .lib import (
    EvaluationReport,
    ProtocolError,
    UIEvaluationEvent,
    UIInteractionEvent,
    UIUpdateEvent,
    create_ui_evaluation,
    create_ui_interaction,
    create_ui_update,
    deserialize_event,
    evaluation_from_a11y,
    is_ui_evaluation,
    is_ui_interaction,
    is_ui_update,
    serialize_event,
)


class TestFactories:
    """Event construction."""

    @pytest.mark.unit
    def test_update_from_dict(self):
        event = create_ui_update({"type": "Text", "props": {"text": "Hi"}}, path="/children/0")
        assert event.type == "ui.update"
        assert event.payload.node == {"type": "Text", "props": {"text": "Hi"}}
        assert event.payload.path == "/children/0"
        assert isinstance(event.timestamp, int)

    @pytest.mark.unit
    def test_update_from_node(self):
        node = Node(type="Button", props=Props(ariaLabel="Save"))
        event = create_ui_update(node)
        assert event.payload.node == {"type": "Button", "props": {"ariaLabel": "Save"}}
        assert "path" not in event.to_dict()["payload"]

    @pytest.mark.unit
    def test_interaction(self):
        event = create_ui_interaction("Button", "click", {"x": 1}, component_id="save")
        assert event.to_dict()["payload"] == {
            "componentId": "save",
            "componentType": "Button",
            "eventName": "click",
            "params": {"x": 1},
        }

    @pytest.mark.unit
    def test_interaction_optional_fields_omitted(self):
        payload = create_ui_interaction("Switch", "change").to_dict()["payload"]
        assert payload == {"componentType": "Switch", "eventName": "change"}

    @pytest.mark.unit
    def test_evaluation_from_mapping(self):
        event = create_ui_evaluation({"score": 100, "issues": []})
        assert event.payload.report.score == 100

    @pytest.mark.unit
    def test_type_checks(self):
        update = create_ui_update({"type": "Text"})
        interaction = create_ui_interaction("Button", "click")
        evaluation = create_ui_evaluation({"score": 90})
        assert is_ui_update(update) and not is_ui_update(interaction)
        assert is_ui_interaction(interaction) and not is_ui_interaction(evaluation)
        assert is_ui_evaluation(evaluation) and not is_ui_evaluation(update)
        assert not is_ui_update({"type": "ui.update"})


class TestEvaluationFromA11y:
    """Accessibility findings as a scored report."""

    @pytest.mark.unit
    def test_clean_tree_scores_full(self):
        report = evaluation_from_a11y([])
        assert report == EvaluationReport(score=100, issues=[])

    @pytest.mark.unit
    def test_criteria_mapping(self):
        tree = {
            "type": "Row",
            "children": [
                {"type": "Button"},
                {"type": "Link", "props": {"ariaLabel": "Home", "role": "button"}},
                {"type": "Text", "props": {"tabIndex": 2}},
            ],
        }
        report = evaluation_from_a11y(validate_a11y(tree))
        assert [(i.criterion, i.status) for i in report.issues] == [
            ("4.1.2", "FAIL"),
            ("4.1.2", "FAIL"),
            ("2.1.1", "WARNING"),
        ]
        assert report.issues[0].path == "root.children[0].props.ariaLabel"
        assert report.score == 80

    @pytest.mark.unit
    def test_score_floor(self):
        issues = [A11yIssue(path=f"root.children[{i}].props.ariaLabel", message="x") for i in range(15)]
        assert evaluation_from_a11y(issues).score == 0


class TestTransport:
    """Serialization and decoding."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "event",
        [
            create_ui_update({"type": "Text", "props": {"text": None}}, path="/root"),
            create_ui_interaction("Select", "change", {"value": "b"}),
            create_ui_evaluation({"score": 70, "issues": [
                {"criterion": "4.1.2", "level": "A", "status": "FAIL", "message": "m", "path": "root"},
            ]}),
        ],
    )
    def test_serialize_then_deserialize(self, event):
        decoded = deserialize_event(serialize_event(event))
        assert type(decoded) is type(event)
        assert decoded == event

    @pytest.mark.unit
    def test_wire_shape(self):
        text = serialize_event(create_ui_interaction("Button", "click"))
        raw = json.loads(text)
        assert raw["type"] == "ui.interaction"
        assert set(raw) == {"type", "payload", "timestamp"}

    @pytest.mark.unit
    def test_decodes_without_timestamp(self):
        event = deserialize_event('{"type":"ui.update","payload":{"node":{"type":"Text"}}}')
        assert isinstance(event, UIUpdateEvent)
        assert event.timestamp is None

    @pytest.mark.unit
    def test_decodes_each_kind(self):
        interaction = deserialize_event(
            '{"type":"ui.interaction","payload":{"componentType":"Button","eventName":"click"}}'
        )
        evaluation = deserialize_event('{"type":"ui.evaluation","payload":{"report":{"score":5}}}')
        assert isinstance(interaction, UIInteractionEvent)
        assert isinstance(evaluation, UIEvaluationEvent)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("text", "match"),
        [
            ("{not json", "Invalid event JSON"),
            ('{"type":"ui.delete","payload":{}}', "Invalid event type: ui.delete"),
            ('{"payload":{}}', "Invalid event type: None"),
            ("[1, 2]", "Invalid event type"),
            ('{"type":"ui.update","payload":{}}', "Invalid ui.update event"),
            ('{"type":"ui.evaluation","payload":{"report":{"score":101}}}', "Invalid ui.evaluation event"),
            (
                '{"type":"ui.interaction","payload":{"component_type":"Button","event_name":"click"}}',
                "Invalid ui.interaction event",
            ),
        ],
    )
    def test_invalid(self, text, match):
        with pytest.raises(ProtocolError, match=match):
            deserialize_event(text)
