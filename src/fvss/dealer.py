"""Dealer: split one secret element into verifiable shares."""

from __future__ import annotations

import logging
import random

from fvss.errors import ParameterError
from fvss.field import FieldContext
from fvss.models import CommitmentSet, Share, ShareBundle, SharingParams
from fvss.polynomial import Polynomial

logger = logging.getLogger(__name__)


class Dealer:
    """Feldman dealer over a fixed field context.

    Args:
        ctx: Group parameters for the run.
        rng: Randomness source for coefficients. Defaults to a fresh
            ``secrets.SystemRandom`` per polynomial.
    """

    def __init__(
        self,
        ctx: FieldContext,
        rng: random.Random | None = None,
    ) -> None:
        self.ctx = ctx
        self.rng = rng

    def distribute(self, secret: int, t: int, n: int) -> ShareBundle:
        """Deal ``secret`` into n shares with threshold t, plus t commitments.

        Shares and commitments come from a single polynomial draw; the
        polynomial is wiped before returning, on success or failure.
        """
        params = SharingParams(t=t, n=n)
        params.validate_for(self.ctx)
        if not 0 <= secret < self.ctx.q:
            raise ParameterError(f"Secret must be in [0, q), got {secret}")

        poly = Polynomial.generate(t - 1, secret, self.ctx, rng=self.rng)
        try:
            shares = tuple(Share(x=x, y=poly.evaluate(x)) for x in range(1, n + 1))
            commitments = CommitmentSet(
                tuple(self.ctx.commit(a) for a in poly.coefficients)
            )
        finally:
            poly.wipe()

        logger.debug("Dealt %d shares with threshold %d", n, t)
        return ShareBundle(shares=shares, commitments=commitments)


def distribute(
    secret: int,
    t: int,
    n: int,
    ctx: FieldContext,
    rng: random.Random | None = None,
) -> ShareBundle:
    """Convenience: deal a single element."""
    return Dealer(ctx, rng=rng).distribute(secret, t, n)
