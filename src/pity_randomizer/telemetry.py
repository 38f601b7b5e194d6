"""Telemetry for counter resets, maxed ramps and exhausted partitions."""

from __future__ import annotations

import logging
import random
from contextlib import contextmanager
from typing import Iterable, Optional, Protocol

from .config import TelemetryConfig
from .types import RampKind, RandomFn, TelemetryEvent, TelemetryEventName

LOGGER = logging.getLogger(__name__)


class TelemetrySink(Protocol):
    """Sink that handles telemetry events."""

    def handle(self, event: TelemetryEvent) -> None:  # pragma: no cover - protocol
        ...


class TelemetryPublisher:
    """Fan randomizer events out to sinks, optionally filtered by ramp kind.

    Sampling draws from ``random_fn`` only when ``sample_rate < 1``, so a
    publisher sharing a seeded randomizer's source leaves full-rate runs
    untouched and sampled runs reproducible.
    """

    def __init__(
        self,
        config: TelemetryConfig,
        *,
        random_fn: RandomFn = random.random,
    ) -> None:
        self.config = config
        self._random = random_fn
        self._sinks: list[tuple[TelemetrySink, Optional[frozenset[RampKind]]]] = []

    def subscribe(self, sink: TelemetrySink, *, kinds: Optional[Iterable[RampKind | str]] = None) -> None:
        """Register ``sink``; with ``kinds`` it only sees events about those ramps."""

        selected = None if kinds is None else frozenset(RampKind(kind) for kind in kinds)
        self._sinks.append((sink, selected))

    def unsubscribe(self, sink: TelemetrySink) -> None:
        self._sinks = [(existing, kinds) for existing, kinds in self._sinks if existing is not sink]

    @contextmanager
    def subscribed(self, sink: TelemetrySink, *, kinds: Optional[Iterable[RampKind | str]] = None):
        self.subscribe(sink, kinds=kinds)
        try:
            yield sink
        finally:
            self.unsubscribe(sink)

    def publish(
        self,
        name: TelemetryEventName,
        *,
        kind: Optional[RampKind] = None,
        payload: Optional[dict[str, object]] = None,
    ) -> None:
        self.emit(TelemetryEvent(event=name, kind=kind, payload=payload or {}))

    def emit(self, event: TelemetryEvent) -> None:
        if not self.config.enabled:
            return
        if self.config.sample_rate < 1.0 and self._random() >= self.config.sample_rate:
            return
        for sink, kinds in list(self._sinks):
            if kinds is not None and event.kind not in kinds:
                continue
            try:
                sink.handle(event)
            except Exception:
                LOGGER.exception("Telemetry sink %s failed on %s", sink, event.event.value)


class LoggingTelemetrySink:
    """Logs each event as one line: name, ramp kind and payload."""

    def __init__(self, level: int = logging.INFO) -> None:
        self.level = level

    def handle(self, event: TelemetryEvent) -> None:
        kind = event.kind.value if event.kind is not None else "-"
        LOGGER.log(self.level, "%s [%s] %s", event.event.value, kind, event.payload)


class InMemoryTelemetrySink:
    """Collects events for diagnostics or testing."""

    def __init__(self) -> None:
        self.events: list[TelemetryEvent] = []

    def handle(self, event: TelemetryEvent) -> None:
        self.events.append(event)

    def names(self) -> list[str]:
        return [event.event.value for event in self.events]

    def for_kind(self, kind: RampKind | str) -> list[TelemetryEvent]:
        return [event for event in self.events if event.kind is RampKind(kind)]


__all__ = [
    "InMemoryTelemetrySink",
    "LoggingTelemetrySink",
    "TelemetryPublisher",
    "TelemetrySink",
]
