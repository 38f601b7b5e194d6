"""Bounded uniform draw shared by every randomizer operation."""

from __future__ import annotations

import logging
import random
from typing import Optional

from .config import DrawOptions
from .types import DrawResult, RandomFn, ResetCallback

LOGGER = logging.getLogger(__name__)

DEFAULT_DECIMAL_PLACES = 2


def decimal_places(options: DrawOptions, default: int = DEFAULT_DECIMAL_PLACES) -> Optional[int]:
    """Places requested by ``options.decimal``, or ``None`` when no formatting applies."""

    decimal = options.decimal
    if decimal is None or decimal is False:
        return None
    if decimal is True:
        return default
    return decimal


def format_result(
    value: float,
    options: DrawOptions,
    *,
    default_places: int = DEFAULT_DECIMAL_PLACES,
) -> DrawResult:
    """Apply the output mode: threshold boolean, then formatted string, then the raw number."""

    if options.success_threshold is not None:
        return value >= options.success_threshold
    places = decimal_places(options, default_places)
    if places is not None:
        return f"{value:.{places}f}"
    return value


def bounded_draw(
    options: DrawOptions,
    *,
    random_fn: RandomFn = random.random,
    on_reset: Optional[ResetCallback] = None,
    default_places: int = DEFAULT_DECIMAL_PLACES,
) -> DrawResult:
    """Draw uniformly from ``[min, max)`` and shape the result per ``options``.

    ``min <= max`` is the caller's responsibility; a reversed range simply draws
    from ``(max, min]``. When ``reset_above`` is set and the raw draw exceeds it,
    ``on_reset`` runs before the result is returned and its errors propagate.
    """

    raw = random_fn() * (options.max - options.min) + options.min
    LOGGER.debug("Drew %s from [%s, %s)", raw, options.min, options.max)
    if options.reset_above is not None and raw > options.reset_above and on_reset is not None:
        on_reset()
    return format_result(raw, options, default_places=default_places)


__all__ = ["DEFAULT_DECIMAL_PLACES", "bounded_draw", "decimal_places", "format_result"]
