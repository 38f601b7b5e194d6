"""Escalation curves that lift the lower bound of a draw as trials accumulate."""

from __future__ import annotations


def _power_decay(base: float, exponent: float) -> float:
    return base ** (-exponent)


def linear_min(trials: int, rapidity: float, minimum: float, maximum: float) -> float:
    """Raise the floor by ``rapidity`` percent of the range for every trial.

    Callers treat a result ``>= maximum`` as a maxed-out ramp.
    """

    return minimum + (maximum - minimum) * rapidity * trials / 100


def nearing_min(trials: int, rapidity: float, minimum: float, maximum: float) -> float:
    """Move the floor toward ``maximum`` without ever reaching it.

    The remaining gap shrinks as ``(1 + trials) ** -rapidity``: a rapidity of 1
    halves it after the first trial, values around 10 close it almost at once.
    Zero trials leave ``minimum`` untouched.

    This is a chosen curve, not the ``max * trials ** (-50 / (50 * rapidity ** -1000))``
    power recurrence: that form decays toward 0 as trials grow, while this
    ramp must converge on ``maximum`` from below.
    """

    if trials <= 0:
        return minimum
    return maximum - (maximum - minimum) * _power_decay(1 + trials, rapidity)


def exponential_min(trials: int, rapidity: float, minimum: float, maximum: float) -> float:
    """Quadratic growth in ``rapidity * trials``, scaled by the range width."""

    return (maximum - minimum) * (rapidity * trials) ** 2


__all__ = ["exponential_min", "linear_min", "nearing_min"]
