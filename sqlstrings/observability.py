from dataclasses import dataclass, field
import json
import logging
from typing import Any, Callable, Mapping

# ==================================================
# Observability Types
# ==================================================

QueryObserveHook = Callable[["QueryObservation"], None]
EventObserveHook = Callable[["LifecycleEvent"], None]


@dataclass(frozen=True)
class ObservabilitySettings:
    """
    Observability settings shared by template compilation and executors.
    """

    query_observer: QueryObserveHook | None = None
    event_observer: EventObserveHook | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class QueryObservation:
    """
    Structured query execution observation payload.
    """

    dialect: str
    operation: str
    sql: str
    param_count: int
    duration_ms: float
    succeeded: bool
    metadata: Mapping[str, Any] = field(default_factory=dict)
    error_type: str | None = None
    error_message: str | None = None


@dataclass(frozen=True)
class LifecycleEvent:
    """
    Structured event emitted while scanning templates or executing queries.
    """

    timestamp: str
    event: str
    component: str
    success: bool
    metadata: Mapping[str, Any] = field(default_factory=dict)
    operation: str | None = None
    query_id: str | None = None
    duration_ms: float | None = None
    part_count: int | None = None
    expression_count: int | None = None
    param_count: int | None = None
    error_type: str | None = None
    error_message: str | None = None


def event_to_dict(event: LifecycleEvent) -> dict[str, Any]:
    """
    Converts a LifecycleEvent dataclass into a JSON-safe dictionary.
    """

    return {
        "timestamp": event.timestamp,
        "event": event.event,
        "component": event.component,
        "success": event.success,
        "metadata": dict(event.metadata),
        "operation": event.operation,
        "query_id": event.query_id,
        "duration_ms": event.duration_ms,
        "part_count": event.part_count,
        "expression_count": event.expression_count,
        "param_count": event.param_count,
        "error_type": event.error_type,
        "error_message": event.error_message,
    }


def make_json_event_logger(
    *,
    logger: logging.Logger,
    level: int = logging.INFO,
) -> EventObserveHook:
    """
    Builds an EventObserveHook that emits one JSON log line per LifecycleEvent.
    """

    def _log_event(event: LifecycleEvent) -> None:
        payload = event_to_dict(event)
        logger.log(level, json.dumps(payload, separators=(",", ":"), sort_keys=True, default=repr))

    return _log_event


def compose_event_observers(*observers: EventObserveHook) -> EventObserveHook:
    """
    Composes multiple event observers into a single observer.
    """

    def _composed(event: LifecycleEvent) -> None:
        for observer in observers:
            observer(event)

    return _composed
