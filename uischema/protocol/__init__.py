"""Event protocol between agents and UI surfaces."""

from .lib import (
    EVENT_TYPES,
    EvaluationIssue,
    EvaluationLevel,
    EvaluationPayload,
    EvaluationReport,
    EvaluationStatus,
    EventKind,
    InteractionPayload,
    ProtocolError,
    UIEvaluationEvent,
    UIEvent,
    UIInteractionEvent,
    UIUpdateEvent,
    UpdatePayload,
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

__all__ = [
    "ProtocolError",
    "EventKind",
    "EvaluationLevel",
    "EvaluationStatus",
    "UpdatePayload",
    "InteractionPayload",
    "EvaluationIssue",
    "EvaluationReport",
    "EvaluationPayload",
    "UIUpdateEvent",
    "UIInteractionEvent",
    "UIEvaluationEvent",
    "UIEvent",
    "EVENT_TYPES",
    "create_ui_update",
    "create_ui_interaction",
    "create_ui_evaluation",
    "evaluation_from_a11y",
    "is_ui_update",
    "is_ui_interaction",
    "is_ui_evaluation",
    "serialize_event",
    "deserialize_event",
]
