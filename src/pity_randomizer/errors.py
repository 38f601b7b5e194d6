"""Exception hierarchy for the randomizer package."""

from __future__ import annotations


class RandomizerError(Exception):
    """Base class for errors raised by pity_randomizer."""


class InvalidRangeError(RandomizerError, ValueError):
    """Raised when ordered-weight bounds cannot produce a usable weight range."""


class DivideByZeroError(RandomizerError, ZeroDivisionError):
    """Raised when weighted outcomes have no total weight or no mass left to share."""


__all__ = ["RandomizerError", "InvalidRangeError", "DivideByZeroError"]
