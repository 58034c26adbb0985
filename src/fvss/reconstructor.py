"""Recover a secret element from verified shares by Lagrange interpolation."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from fvss.errors import ArithmeticFault, InsufficientShares, ParameterError
from fvss.field import FieldContext
from fvss.models import CommitmentSet, Share
from fvss.verifier import Verifier

logger = logging.getLogger(__name__)


def lagrange_at_zero(points: Sequence[Share], ctx: FieldContext) -> int:
    """Lagrange interpolation evaluated at x = 0 over GF(q).

    For points (x_i, y_i), the basis polynomial at x=0 is:
        L_i(0) = prod_{j != i} (-x_j) / (x_i - x_j)

    The interpolated value at 0 is sum_i y_i * L_i(0). Indices must be
    distinct and nonzero mod q; anything else is an ArithmeticFault.
    """
    if not points:
        raise ArithmeticFault("Interpolation needs at least one point")

    xs = [ctx.normalize(s.x) for s in points]
    if 0 in xs:
        raise ArithmeticFault("Interpolation point at x=0")
    if len(set(xs)) != len(xs):
        raise ArithmeticFault("Duplicate interpolation points")

    secret = 0
    for i, share in enumerate(points):
        xi = xs[i]
        numerator = 1
        denominator = 1
        for j, xj in enumerate(xs):
            if i == j:
                continue
            numerator = ctx.mul(numerator, ctx.neg(xj))
            denominator = ctx.mul(denominator, ctx.sub(xi, xj))

        lagrange_coeff = ctx.mul(numerator, ctx.inverse(denominator))
        secret = ctx.add(secret, ctx.mul(share.y, lagrange_coeff))

    return secret


class Reconstructor:
    """Verify-then-interpolate recovery for one element.

    Args:
        ctx: Group parameters.
        commitments: Published commitment set for the element.
        t: Agreed threshold; must equal the number of commitments.
        n: Agreed share count, if known.
    """

    def __init__(
        self,
        ctx: FieldContext,
        commitments: CommitmentSet | Sequence[int],
        t: int,
        n: int | None = None,
    ) -> None:
        if t < 1:
            raise ParameterError(f"Threshold must be >= 1, got {t}")
        self.ctx = ctx
        self.t = t
        self.verifier = Verifier(ctx, commitments, t, n)

    def select(self, shares: Iterable[Share]) -> list[Share]:
        """The first t verified shares by ascending index."""
        candidates = list(shares)
        verified = self.verifier.filter(candidates)
        discarded = len(candidates) - len(verified)
        if discarded:
            logger.warning(
                "Discarded %d of %d shares that failed verification",
                discarded,
                len(candidates),
            )
        if len(verified) < self.t:
            raise InsufficientShares(required=self.t, available=len(verified))
        verified.sort(key=lambda s: s.x)
        return verified[: self.t]

    def reconstruct(self, shares: Iterable[Share]) -> int:
        """Recover the secret element; extra valid shares are ignored."""
        return lagrange_at_zero(self.select(shares), self.ctx)


def reconstruct(
    shares: Iterable[Share],
    commitments: CommitmentSet | Sequence[int],
    t: int,
    ctx: FieldContext,
    n: int | None = None,
) -> int:
    """Convenience: reconstruct a single element."""
    return Reconstructor(ctx, commitments, t, n).reconstruct(shares)
