"""Weighted selection over labeled outcomes."""

from __future__ import annotations

import logging
import random
from numbers import Real
from typing import Any, Iterable, Optional, Sequence

from .errors import DivideByZeroError, InvalidRangeError
from .types import ImplicitWeight, Outcome, PartitionEntry, PercentWeight, RandomFn, RawWeight
from .utils import parse_percentage, round_half_up

LOGGER = logging.getLogger(__name__)

DEFAULT_ORDER_CEILING = 10
REMAINDER_TOLERANCE = 1e-9


def to_outcome(value: Any) -> Outcome:
    """Resolve one caller-supplied entry into an :class:`Outcome`.

    ``("a", 3)`` is a raw weight, ``("a", "30%")`` a percentage and anything
    else a bare label with weight 1. Malformed percentages resolve to 0%.
    Infinite or NaN weights raise ``ValueError``.
    """

    if isinstance(value, Outcome):
        return value
    if isinstance(value, (tuple, list)) and len(value) == 2:
        label, spec = value
        if isinstance(spec, Real) and not isinstance(spec, bool):
            return Outcome(label=label, spec=RawWeight(weight=float(spec)))
        if isinstance(spec, str):
            percent = parse_percentage(spec)
            if percent is None or percent < 0:
                LOGGER.warning("Ignoring malformed percentage %r for %r", spec, label)
                percent = 0.0
            return Outcome(label=label, spec=PercentWeight(percent=percent))
        LOGGER.warning("Treating %r as a bare label; %r is neither a weight nor a percentage", value, spec)
    return Outcome(label=value, spec=ImplicitWeight())


def to_outcomes(values: Iterable[Any]) -> list[Outcome]:
    return [to_outcome(value) for value in values]


def build_partition(outcomes: Sequence[Outcome]) -> list[PartitionEntry]:
    """Split ``[0, 1)`` between outcomes: percentages first, weights share the rest."""

    if not outcomes:
        raise ValueError("outcomes must be non-empty")

    percentages = [outcome for outcome in outcomes if outcome.is_percentage]
    weighted = [outcome for outcome in outcomes if not outcome.is_percentage]

    remaining = 1.0 - sum(outcome.spec.fraction for outcome in percentages)
    partition = [
        PartitionEntry(label=outcome.label, probability=outcome.spec.fraction)
        for outcome in percentages
    ]
    if not weighted:
        return partition

    weight_total = sum(outcome.spec.weight for outcome in weighted)
    if weight_total <= 0:
        raise DivideByZeroError("weighted outcomes have a total weight of zero")
    if remaining <= REMAINDER_TOLERANCE:
        raise DivideByZeroError(
            f"percentages consume {1.0 - remaining:.0%} of the draw space; "
            "nothing is left for weighted outcomes"
        )

    scale = remaining / weight_total
    partition.extend(
        PartitionEntry(label=outcome.label, probability=outcome.spec.weight * scale)
        for outcome in weighted
    )
    return partition


def choose(
    partition: Sequence[PartitionEntry],
    *,
    random_fn: RandomFn = random.random,
) -> Optional[PartitionEntry]:
    """Walk ``partition`` with one uniform draw; ``None`` when the draw falls through."""

    rand = random_fn()
    for entry in partition:
        if rand < entry.probability:
            return entry
        rand -= entry.probability
    LOGGER.debug("Draw fell through a partition of %d entries (remainder %s)", len(partition), rand)
    return None


def weighted_choice(values: Iterable[Any], *, random_fn: RandomFn = random.random) -> Any:
    """Pick a label from bare labels, ``(label, weight)`` or ``(label, "N%")`` entries."""

    entry = choose(build_partition(to_outcomes(values)), random_fn=random_fn)
    return None if entry is None else entry.label


def default_floor(ceiling: float) -> float:
    return int(ceiling / 3) or 1


def order_weights(
    values: Sequence[Any],
    ceiling: float = DEFAULT_ORDER_CEILING,
    floor: Optional[float] = None,
) -> list[Outcome]:
    """Assign decreasing weights by position; percentage-pinned entries pass through."""

    if floor is None:
        floor = default_floor(ceiling)
    if ceiling <= 1 or ceiling <= floor or floor < 1:
        raise InvalidRangeError(
            f"from_order needs 1 <= floor < ceiling and ceiling > 1 (got floor={floor}, ceiling={ceiling})"
        )

    kept = [value for value in values if value]
    total = len(kept)
    outcomes: list[Outcome] = []
    for index, value in enumerate(kept):
        outcome = to_outcome(value)
        if not outcome.is_percentage:
            weight = round_half_up(((total - index) / total) * (ceiling - floor)) + floor
            outcome = Outcome(label=outcome.label, spec=RawWeight(weight=weight))
        outcomes.append(outcome)
    return outcomes


def from_order(
    values: Sequence[Any],
    ceiling: float = DEFAULT_ORDER_CEILING,
    floor: Optional[float] = None,
    *,
    random_fn: RandomFn = random.random,
) -> Any:
    """Weighted choice biased toward the start of ``values``."""

    return weighted_choice(order_weights(values, ceiling, floor), random_fn=random_fn)


__all__ = [
    "DEFAULT_ORDER_CEILING",
    "REMAINDER_TOLERANCE",
    "build_partition",
    "choose",
    "default_floor",
    "from_order",
    "order_weights",
    "to_outcome",
    "to_outcomes",
    "weighted_choice",
]
