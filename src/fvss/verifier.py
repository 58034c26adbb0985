"""Feldman share verification against published commitments.

A share (x, y) is authentic iff

    g^y == prod_{i=0}^{t-1} C_i^{x^i}   (mod p)

The right-hand side is the committed polynomial evaluated at x in the
exponent, computed here by Horner's rule: acc <- acc^x * C_i.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from fvss.errors import InvalidShare
from fvss.field import FieldContext
from fvss.models import CommitmentSet, Share

logger = logging.getLogger(__name__)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _commitment_values(commitments: CommitmentSet | Sequence[int]) -> tuple[int, ...]:
    if isinstance(commitments, CommitmentSet):
        return commitments.values
    if isinstance(commitments, (str, bytes)) or not isinstance(commitments, Sequence):
        raise InvalidShare("Commitments must be a sequence of integers")
    return tuple(commitments)


def check_share(
    share: Share,
    commitments: CommitmentSet | Sequence[int],
    ctx: FieldContext,
    t: int,
    n: int | None = None,
) -> bool:
    """Strict check: raise InvalidShare on structural defects.

    Returns the outcome of the Feldman equation for well-formed input.
    Without ``n`` the index is only bounded by the subgroup order.
    """
    if not isinstance(share, Share):
        raise InvalidShare(f"Expected a Share, got {type(share).__name__}")
    if not _is_int(t) or t < 1:
        raise InvalidShare(f"Threshold must be a positive integer, got {t!r}")
    if n is not None and (not _is_int(n) or n < t):
        raise InvalidShare(f"Share count must be an integer >= t, got {n!r}")

    x, y = share.x, share.y
    if not _is_int(x) or not _is_int(y):
        raise InvalidShare("Share coordinates must be integers")
    upper = ctx.q - 1 if n is None else min(n, ctx.q - 1)
    if not 1 <= x <= upper:
        raise InvalidShare(f"Share index x={x} outside [1, {upper}]")
    if not 0 <= y < ctx.q:
        raise InvalidShare(f"Share value for x={x} outside [0, q)")

    values = _commitment_values(commitments)
    if len(values) != t:
        raise InvalidShare(f"Expected {t} commitments, got {len(values)}")
    for c in values:
        if not _is_int(c) or not ctx.in_subgroup(c):
            raise InvalidShare("Commitment outside the order-q subgroup")

    p = ctx.p
    acc = values[-1]
    for c in reversed(values[:-1]):
        acc = pow(acc, x, p) * c % p

    return pow(ctx.g, y, p) == acc


def verify(
    share: Share,
    commitments: CommitmentSet | Sequence[int],
    ctx: FieldContext,
    t: int,
    n: int | None = None,
) -> bool:
    """Pure predicate: True iff the share is well-formed and authentic."""
    try:
        ok = check_share(share, commitments, ctx, t, n)
    except InvalidShare as exc:
        logger.debug("Rejected malformed share: %s", exc)
        return False
    if not ok:
        logger.debug("Share x=%s failed commitment check", share.x)
    return ok


class Verifier:
    """Verifier bound to one element's commitments and (t, n).

    Args:
        ctx: Group parameters.
        commitments: Published commitment set for the element.
        t: Agreed threshold.
        n: Agreed share count; None bounds indices by q only.
    """

    def __init__(
        self,
        ctx: FieldContext,
        commitments: CommitmentSet | Sequence[int],
        t: int,
        n: int | None = None,
    ) -> None:
        self.ctx = ctx
        self.commitments = commitments
        self.t = t
        self.n = n

    def __call__(self, share: Share) -> bool:
        return verify(share, self.commitments, self.ctx, self.t, self.n)

    def filter(self, shares: Iterable[Share]) -> list[Share]:
        """Verified shares in input order; later duplicates of an x are dropped."""
        seen: set[int] = set()
        accepted: list[Share] = []
        for share in shares:
            if not self(share):
                continue
            if share.x in seen:
                logger.debug("Dropped duplicate share index x=%s", share.x)
                continue
            seen.add(share.x)
            accepted.append(share)
        return accepted
