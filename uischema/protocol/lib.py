"""Agent and UI event envelopes.

Three events travel between an agent and a rendering surface:

    ui.update       agent -> UI   a new or replaced node, optionally at a path
    ui.interaction  UI -> agent   a component fired a named event
    ui.evaluation   UI -> agent   an accessibility report for the current tree

Events are pydantic models discriminated on ``type``. Wire keys are
camelCase; optional fields left unset are omitted from the JSON.
"""

import json
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import Field, StrictInt, StrictStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from uischema.a11y import A11yIssue
from uischema.schema import WireModel


class ProtocolError(ValueError):
    """Raised when an event cannot be decoded."""


class EventKind(str, Enum):
    """Event type tags."""

    UPDATE = "ui.update"
    INTERACTION = "ui.interaction"
    EVALUATION = "ui.evaluation"


class EvaluationLevel(str, Enum):
    """WCAG conformance level."""

    A = "A"
    AA = "AA"
    AAA = "AAA"


class EvaluationStatus(str, Enum):
    """Outcome of one evaluated criterion."""

    PASS = "PASS"
    FAIL = "FAIL"
    WARNING = "WARNING"
    MANUAL_REQUIRED = "MANUAL_REQUIRED"


# =============================================================================
# Payloads
# =============================================================================


class UpdatePayload(WireModel):
    node: dict[str, Any]
    path: StrictStr | None = None


class InteractionPayload(WireModel):
    component_id: StrictStr | None = Field(default=None, alias="componentId")
    component_type: StrictStr = Field(alias="componentType")
    event_name: StrictStr = Field(alias="eventName")
    params: dict[str, Any] | None = None


class EvaluationIssue(WireModel):
    """One criterion result inside an evaluation report."""

    criterion: StrictStr
    level: EvaluationLevel
    status: EvaluationStatus
    message: StrictStr
    path: StrictStr | None = None


class EvaluationReport(WireModel):
    score: Annotated[StrictInt, Field(ge=0, le=100)]
    issues: list[EvaluationIssue] = Field(default_factory=list)


class EvaluationPayload(WireModel):
    report: EvaluationReport


# =============================================================================
# Events
# =============================================================================


class UIUpdateEvent(WireModel):
    type: Literal["ui.update"]
    payload: UpdatePayload
    timestamp: StrictInt | None = None


class UIInteractionEvent(WireModel):
    type: Literal["ui.interaction"]
    payload: InteractionPayload
    timestamp: StrictInt | None = None


class UIEvaluationEvent(WireModel):
    type: Literal["ui.evaluation"]
    payload: EvaluationPayload
    timestamp: StrictInt | None = None


UIEvent = Annotated[
    Union[UIUpdateEvent, UIInteractionEvent, UIEvaluationEvent],
    Field(discriminator="type"),
]

_EVENT_ADAPTER: TypeAdapter[UIEvent] = TypeAdapter(UIEvent)

EVENT_TYPES = frozenset(kind.value for kind in EventKind)


def _now_ms() -> int:
    return int(datetime.now(UTC).timestamp() * 1000)


def _present(**fields: Any) -> dict[str, Any]:
    """Drop None values so optional fields stay unset."""
    return {key: value for key, value in fields.items() if value is not None}


# =============================================================================
# Factories
# =============================================================================


def create_ui_update(node: WireModel | Mapping[str, Any], path: str | None = None) -> UIUpdateEvent:
    """Create an agent -> UI update carrying a node.

    Args:
        node: Typed Node or node wire dict.
        path: Optional JSON Pointer where the node belongs.
    """
    if isinstance(node, WireModel):
        node = node.to_dict()
    return UIUpdateEvent(
        type=EventKind.UPDATE.value,
        payload=UpdatePayload(**_present(node=dict(node), path=path)),
        timestamp=_now_ms(),
    )


def create_ui_interaction(
    component_type: str,
    event_name: str,
    params: Mapping[str, Any] | None = None,
    component_id: str | None = None,
) -> UIInteractionEvent:
    """Create a UI -> agent interaction event."""
    payload = InteractionPayload(
        **_present(
            component_type=component_type,
            event_name=event_name,
            params=dict(params) if params is not None else None,
            component_id=component_id,
        )
    )
    return UIInteractionEvent(
        type=EventKind.INTERACTION.value,
        payload=payload,
        timestamp=_now_ms(),
    )


def create_ui_evaluation(report: EvaluationReport | Mapping[str, Any]) -> UIEvaluationEvent:
    """Create a UI -> agent evaluation event from a report."""
    if not isinstance(report, EvaluationReport):
        report = EvaluationReport.model_validate(report, by_alias=True, by_name=False)
    return UIEvaluationEvent(
        type=EventKind.EVALUATION.value,
        payload=EvaluationPayload(report=report),
        timestamp=_now_ms(),
    )


# =============================================================================
# Accessibility Reports
# =============================================================================

_CRITERIA: dict[str, tuple[str, EvaluationStatus]] = {
    "ariaLabel": ("4.1.2", EvaluationStatus.FAIL),
    "role": ("4.1.2", EvaluationStatus.FAIL),
    "tabIndex": ("2.1.1", EvaluationStatus.WARNING),
}


def evaluation_from_a11y(issues: Iterable[A11yIssue]) -> EvaluationReport:
    """Convert accessibility findings into a scored report.

    Each failing criterion costs ten points; warnings are reported but
    not scored.

    Example:
        >>> from uischema.a11y import validate_a11y
        >>> evaluation_from_a11y(validate_a11y({"type": "Button"})).score
        90
    """
    converted: list[EvaluationIssue] = []
    for issue in issues:
        prop = issue.path.rsplit(".", 1)[-1]
        criterion, status = _CRITERIA.get(prop, ("4.1.2", EvaluationStatus.FAIL))
        converted.append(
            EvaluationIssue(
                criterion=criterion,
                level=EvaluationLevel.A,
                status=status,
                message=issue.message,
                path=issue.path,
            )
        )
    failed = sum(1 for issue in converted if issue.status == EvaluationStatus.FAIL)
    return EvaluationReport(score=max(0, 100 - failed * 10), issues=converted)


# =============================================================================
# Type Checks
# =============================================================================


def is_ui_update(event: Any) -> bool:
    return isinstance(event, UIUpdateEvent)


def is_ui_interaction(event: Any) -> bool:
    return isinstance(event, UIInteractionEvent)


def is_ui_evaluation(event: Any) -> bool:
    return isinstance(event, UIEvaluationEvent)


# =============================================================================
# Transport
# =============================================================================


def serialize_event(event: UIUpdateEvent | UIInteractionEvent | UIEvaluationEvent) -> str:
    """Encode an event as compact JSON."""
    return event.to_json()


def deserialize_event(text: str | bytes) -> UIUpdateEvent | UIInteractionEvent | UIEvaluationEvent:
    """Decode and validate an event.

    Raises:
        ProtocolError: If the text is not JSON, the ``type`` tag is unknown,
            or the payload does not match its event type.
    """
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ProtocolError(f"Invalid event JSON: {exc}") from exc

    event_type = raw.get("type") if isinstance(raw, dict) else None
    if event_type not in EVENT_TYPES:
        raise ProtocolError(f"Invalid event type: {event_type}")

    try:
        return _EVENT_ADAPTER.validate_python(raw, by_alias=True, by_name=False)
    except PydanticValidationError as exc:
        raise ProtocolError(f"Invalid {event_type} event: {exc}") from exc


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
