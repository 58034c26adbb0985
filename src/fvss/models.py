"""Data models for shares, commitments and sharing parameters."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from fvss.errors import ParameterError
from fvss.field import FieldContext


@dataclass(frozen=True)
class SharingParams:
    """Threshold t and share count n agreed between dealer and holders."""

    t: int
    n: int

    def __post_init__(self) -> None:
        if not 1 <= self.t <= self.n:
            raise ParameterError(f"Need 1 <= t <= n, got t={self.t}, n={self.n}")

    def validate_for(self, ctx: FieldContext) -> None:
        """Share indices 1..n must be distinct nonzero scalars mod q."""
        if self.n >= ctx.q:
            raise ParameterError(
                f"n={self.n} share indices do not fit below subgroup order q={ctx.q}"
            )


@dataclass(frozen=True)
class Share:
    """A single share (x, y) where y = f(x) mod q. x = 0 is never issued."""

    x: int
    y: int

    def __repr__(self) -> str:
        return f"Share(x={self.x}, y=<hidden>)"


@dataclass(frozen=True)
class CommitmentSet:
    """Public commitments C_i = g^{a_i} mod p, one per coefficient."""

    values: tuple[int, ...]

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[int]:
        return iter(self.values)

    def __getitem__(self, i: int) -> int:
        return self.values[i]

    @property
    def secret_commitment(self) -> int:
        """C_0 = g^secret, the public image of the shared element."""
        return self.values[0]


@dataclass(frozen=True)
class ShareBundle:
    """All n shares and the commitment set from a single polynomial draw.

    Attributes:
        shares: Shares for x = 1..n, in index order.
        commitments: Commitments to the t coefficients.
    """

    shares: tuple[Share, ...]
    commitments: CommitmentSet

    @property
    def threshold(self) -> int:
        return len(self.commitments)

    @property
    def n(self) -> int:
        return len(self.shares)

    @property
    def params(self) -> SharingParams:
        return SharingParams(t=self.threshold, n=self.n)

    def share_for(self, x: int) -> Share:
        """The share issued to holder x."""
        if not 1 <= x <= self.n:
            raise KeyError(f"No share issued for x={x}")
        return self.shares[x - 1]
