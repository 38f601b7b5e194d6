"""Randomizer facade owning trial counters, the random source and telemetry."""

from __future__ import annotations

import logging
import random
from numbers import Real
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence, TypeVar, Union

from .config import DrawOptions, RampOptions, RandomizerConfig
from .draw import bounded_draw
from .ramps import exponential_min, linear_min, nearing_min
from .telemetry import TelemetryPublisher, TelemetrySink
from .types import (
    DrawResult,
    PartitionEntry,
    RampKind,
    RandomFn,
    ResetCallback,
    TelemetryEventName,
    TrialCounters,
)
from .utils import clamp, parse_percentage
from .weighting import build_partition, choose, order_weights, to_outcomes

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")
Curve = Callable[[int, float, float, float], float]
TrialsInput = Union[int, Mapping[str, int], TrialCounters, None]

_RAMP_OVERRIDE_FIELDS = {
    "minimum": "min",
    "maximum": "max",
    "success_threshold": "success_threshold",
    "decimal": "decimal",
    "reset_above": "reset_above",
    "trials": "trials",
}


class Randomizer:
    """Bounded draws, pity-timer ramps and weighted picks sharing one random source."""

    def __init__(
        self,
        trials: TrialsInput = None,
        *,
        config: Optional[RandomizerConfig] = None,
        random_fn: Optional[RandomFn] = None,
    ) -> None:
        self.config = config or RandomizerConfig()
        self.counters = TrialCounters.coerce(trials)
        if random_fn is None:
            random_fn = random.random if self.config.seed is None else random.Random(self.config.seed).random
        self._random = random_fn
        self._telemetry: Optional[TelemetryPublisher] = None

    # ------------------------------------------------------------------
    # Bounded draw
    # ------------------------------------------------------------------
    def draw(
        self,
        options: Optional[DrawOptions] = None,
        *,
        minimum: Optional[float] = None,
        maximum: Optional[float] = None,
        success_threshold: Optional[float] = None,
        decimal: Union[bool, int, None] = None,
        reset_above: Optional[float] = None,
        on_reset: Optional[ResetCallback] = None,
    ) -> DrawResult:
        """Uniform draw from ``[min, max)`` returning a number, boolean or string."""

        resolved = self.config.resolve_draw(
            options,
            {
                "min": minimum,
                "max": maximum,
                "success_threshold": success_threshold,
                "decimal": decimal,
                "reset_above": reset_above,
            },
        )
        return bounded_draw(
            resolved,
            random_fn=self._random,
            on_reset=on_reset,
            default_places=self.config.decimal_places,
        )

    # ------------------------------------------------------------------
    # Ramps
    # ------------------------------------------------------------------
    def linear_ramp(
        self,
        rapidity: Optional[float] = None,
        options: Optional[RampOptions] = None,
        **overrides: Any,
    ) -> DrawResult:
        """Floor rises by ``rapidity`` percent of the range per trial; returns ``max`` once it gets there."""

        return self._ramp(RampKind.LINEAR, linear_min, rapidity, options, overrides)

    def nearing_ramp(
        self,
        rapidity: Optional[float] = None,
        options: Optional[RampOptions] = None,
        **overrides: Any,
    ) -> DrawResult:
        """Floor approaches ``max`` asymptotically; keep ``rapidity`` below about 10."""

        return self._ramp(RampKind.NEARING, nearing_min, rapidity, options, overrides)

    def exponential_ramp(
        self,
        rapidity: Optional[float] = None,
        options: Optional[RampOptions] = None,
        **overrides: Any,
    ) -> DrawResult:
        """Floor grows with the square of the trial count; every call counts as a trial."""

        return self._ramp(RampKind.EXPONENTIAL, exponential_min, rapidity, options, overrides)

    def reset_all(self) -> None:
        self._reset(None)

    def reset_linear(self) -> None:
        self._reset(RampKind.LINEAR)

    def reset_nearing(self) -> None:
        self._reset(RampKind.NEARING)

    def reset_exponential(self) -> None:
        self._reset(RampKind.EXPONENTIAL)

    # ------------------------------------------------------------------
    # Choices
    # ------------------------------------------------------------------
    def coin_flip(self, value: T, percentage: Union[str, float, None] = None) -> Optional[T]:
        """Return ``value`` on a fair flip, or with ``percentage`` chance (``"30%"`` or ``30``)."""

        if percentage is None:
            return value if int(self._random() * 2) else None

        if isinstance(percentage, str):
            parsed = parse_percentage(percentage)
            if parsed is None:
                LOGGER.debug("Malformed percentage %r never matches", percentage)
                return None
        elif isinstance(percentage, Real) and not isinstance(percentage, bool):
            parsed = float(percentage)
        else:
            return None

        threshold = clamp(parsed, 0.0, 100.0)
        return value if int(self._random() * 100) < threshold else None

    def partition(self, values: Iterable[Any]) -> list[PartitionEntry]:
        """Probability partition the weighted choice would draw from."""

        return build_partition(to_outcomes(values))

    def weighted_choice(self, values: Iterable[Any]) -> Any:
        """Pick one label from bare labels, ``(label, weight)`` or ``(label, "N%")`` entries.

        Percentages claim their share first; raw weights split what remains.
        ``None`` is returned when the draw falls past the last entry.
        """

        partition = self.partition(values)
        entry = choose(partition, random_fn=self._random)
        if entry is None:
            self._emit_telemetry(TelemetryEventName.PARTITION_EXHAUSTED, payload={"entries": len(partition)})
            return None
        return entry.label

    def from_order(
        self,
        values: Sequence[Any],
        ceiling: Optional[float] = None,
        floor: Optional[float] = None,
    ) -> Any:
        """Weighted choice where earlier entries are likelier than later ones."""

        if ceiling is None:
            ceiling = self.config.order_ceiling
            if floor is None:
                floor = self.config.order_floor
        return self.weighted_choice(order_weights(values, ceiling, floor))

    # ------------------------------------------------------------------
    # Telemetry
    # ------------------------------------------------------------------
    def attach_telemetry(self, telemetry: Optional[TelemetryPublisher]) -> None:
        self._telemetry = telemetry

    def enable_telemetry(self, *sinks: TelemetrySink) -> TelemetryPublisher:
        """Attach a publisher that samples from this randomizer's own random source."""

        publisher = TelemetryPublisher(self.config.telemetry, random_fn=self._random)
        for sink in sinks:
            publisher.subscribe(sink)
        self.attach_telemetry(publisher)
        return publisher

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _ramp(
        self,
        kind: RampKind,
        curve: Curve,
        rapidity: Optional[float],
        options: Optional[RampOptions],
        overrides: Mapping[str, Any],
    ) -> DrawResult:
        resolved = self.config.resolve_draw(options, self._ramp_overrides(overrides), model=RampOptions)
        rapidity = self.config.rapidity if rapidity is None else rapidity
        trials = self.counters.get(kind) if resolved.trials is None else resolved.trials

        effective_min = curve(trials, rapidity, resolved.min, resolved.max)
        if kind is RampKind.LINEAR and effective_min >= resolved.max:
            self._emit_telemetry(TelemetryEventName.RAMP_MAXED, kind=kind, payload={"trials": trials})
            return resolved.max
        if kind is RampKind.EXPONENTIAL:
            self.counters.increment(kind)

        reset_above = resolved.success_threshold if resolved.reset_above is None else resolved.reset_above
        return bounded_draw(
            resolved.model_copy(update={"min": effective_min, "reset_above": reset_above}),
            random_fn=self._random,
            on_reset=lambda: self._reset(kind),
            default_places=self.config.decimal_places,
        )

    @staticmethod
    def _ramp_overrides(overrides: Mapping[str, Any]) -> dict[str, Any]:
        unknown = set(overrides) - set(_RAMP_OVERRIDE_FIELDS)
        if unknown:
            raise TypeError(f"Unexpected ramp option(s): {sorted(unknown)}")
        return {_RAMP_OVERRIDE_FIELDS[key]: value for key, value in overrides.items()}

    def _reset(self, kind: Optional[RampKind]) -> None:
        self.counters.reset(kind)
        LOGGER.debug("Reset %s trial counter(s)", kind.value if kind else "all")
        self._emit_telemetry(
            TelemetryEventName.TRIALS_RESET,
            kind=kind,
            payload={"counters": self.counters.as_dict()},
        )

    def _emit_telemetry(
        self,
        event: TelemetryEventName,
        *,
        kind: Optional[RampKind] = None,
        payload: Optional[dict[str, object]] = None,
    ) -> None:
        if self._telemetry is None or not self.config.telemetry.enabled:
            return
        self._telemetry.publish(event, kind=kind, payload=payload)


__all__ = ["Randomizer"]
