"""Exception taxonomy for dealing, verification and reconstruction."""

from __future__ import annotations


class VSSError(Exception):
    """Base class for all fvss errors."""


class ParameterError(VSSError, ValueError):
    """Invalid (t, n, q) combination, or modulus/generator search exhausted."""


class InvalidShare(VSSError, ValueError):
    """Structurally malformed share or commitment set.

    Raised by the strict checker only; the public predicate turns it into
    ``False`` so a bad share is simply not counted toward the threshold.
    """


class InsufficientShares(VSSError):
    """Fewer than t verified shares were available for reconstruction."""

    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            f"Need {required} verified shares, got {available}"
        )
        self.required = required
        self.available = available


class ArithmeticFault(VSSError, ArithmeticError):
    """Internal invariant violation, e.g. a zero interpolation denominator."""
