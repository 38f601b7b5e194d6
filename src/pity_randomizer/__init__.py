"""Public package interface for pity_randomizer."""

from .config import DrawOptions, RampOptions, RandomizerConfig, TelemetryConfig
from .draw import bounded_draw
from .errors import DivideByZeroError, InvalidRangeError, RandomizerError
from .ramps import exponential_min, linear_min, nearing_min
from .randomizer import Randomizer
from .telemetry import InMemoryTelemetrySink, LoggingTelemetrySink, TelemetryPublisher
from .types import (
    ImplicitWeight,
    Outcome,
    PartitionEntry,
    PercentWeight,
    RampKind,
    RawWeight,
    TelemetryEventName,
    TrialCounters,
)
from .weighting import build_partition, from_order, order_weights, weighted_choice

__all__ = [
    "DivideByZeroError",
    "DrawOptions",
    "ImplicitWeight",
    "InMemoryTelemetrySink",
    "InvalidRangeError",
    "LoggingTelemetrySink",
    "Outcome",
    "PartitionEntry",
    "PercentWeight",
    "RampKind",
    "RampOptions",
    "RandomizerConfig",
    "RandomizerError",
    "Randomizer",
    "RawWeight",
    "TelemetryConfig",
    "TelemetryEventName",
    "TelemetryPublisher",
    "TrialCounters",
    "bounded_draw",
    "build_partition",
    "exponential_min",
    "from_order",
    "linear_min",
    "nearing_min",
    "order_weights",
    "weighted_choice",
]
