"""Common data types used across the randomizer package."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Literal, Mapping, Optional, Union

from pydantic import BaseModel, Field

RandomFn = Callable[[], float]
ResetCallback = Callable[[], None]
DrawResult = Union[float, bool, str]


class RampKind(str, Enum):
    """Escalation curves that keep their own trial counter."""

    LINEAR = "linear"
    NEARING = "nearing"
    EXPONENTIAL = "exponential"


class TelemetryEventName(str, Enum):
    """Events the randomizer reports to telemetry sinks."""

    TRIALS_RESET = "trials.reset"
    RAMP_MAXED = "ramp.maxed"
    PARTITION_EXHAUSTED = "partition.exhausted"


class ImplicitWeight(BaseModel):
    """A bare label, weighted as if it carried a raw weight of 1."""

    kind: Literal["implicit"] = "implicit"

    @property
    def weight(self) -> float:
        return 1.0


class RawWeight(BaseModel):
    """Relative weight, scaled against the mass left after percentages."""

    kind: Literal["raw"] = "raw"
    weight: float = Field(..., ge=0.0, allow_inf_nan=False)


class PercentWeight(BaseModel):
    """Fixed share of the draw space expressed in percent units (0-100)."""

    kind: Literal["percent"] = "percent"
    percent: float = Field(..., ge=0.0, allow_inf_nan=False)

    @property
    def fraction(self) -> float:
        return self.percent / 100


WeightSpec = Union[ImplicitWeight, RawWeight, PercentWeight]


class Outcome(BaseModel):
    """A caller-supplied label paired with its weight specification."""

    label: Any
    spec: WeightSpec = Field(default_factory=ImplicitWeight, discriminator="kind")

    @property
    def is_percentage(self) -> bool:
        return isinstance(self.spec, PercentWeight)


class PartitionEntry(BaseModel):
    """One slice of the [0, 1) draw space."""

    label: Any
    probability: float


class TelemetryEvent(BaseModel):
    """Structured event emitted by the randomizer."""

    event: TelemetryEventName
    payload: dict[str, object] = Field(default_factory=dict)
    kind: Optional[RampKind] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class TrialCounters:
    """Per-instance trial counts, one per ramp kind."""

    linear: int = 0
    nearing: int = 0
    exponential: int = 0

    @classmethod
    def coerce(cls, trials: "int | Mapping[str, int] | TrialCounters | None") -> "TrialCounters":
        """Build counters from a single starting count or a per-kind mapping."""

        if trials is None:
            return cls()
        if isinstance(trials, TrialCounters):
            return cls(trials.linear, trials.nearing, trials.exponential)
        if isinstance(trials, Mapping):
            unknown = set(trials) - {kind.value for kind in RampKind}
            if unknown:
                raise ValueError(f"Unknown trial counter(s): {sorted(unknown)}")
            return cls(**{key: int(value) for key, value in trials.items()})
        count = int(trials)
        return cls(count, count, count)

    def get(self, kind: RampKind | str) -> int:
        return getattr(self, RampKind(kind).value)

    def increment(self, kind: RampKind | str, amount: int = 1) -> int:
        name = RampKind(kind).value
        value = getattr(self, name) + amount
        setattr(self, name, value)
        return value

    def reset(self, kind: RampKind | str | None = None) -> None:
        if kind is None:
            self.linear = self.nearing = self.exponential = 0
            return
        setattr(self, RampKind(kind).value, 0)

    def as_dict(self) -> dict[str, int]:
        return {kind.value: self.get(kind) for kind in RampKind}


__all__ = [
    "DrawResult",
    "ImplicitWeight",
    "Outcome",
    "PartitionEntry",
    "PercentWeight",
    "RampKind",
    "RandomFn",
    "RawWeight",
    "ResetCallback",
    "TelemetryEvent",
    "TelemetryEventName",
    "TrialCounters",
    "WeightSpec",
]
