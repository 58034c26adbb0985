"""Random degree-(t-1) polynomials over GF(q)."""

from __future__ import annotations

import random
import secrets

from fvss.field import FieldContext


class Polynomial:
    """Coefficients a_0..a_{t-1} over GF(q); a_0 is the shared element.

    Instances are ephemeral: the dealer wipes them once shares and
    commitments are derived. The repr never shows coefficients.
    """

    def __init__(self, coefficients: list[int], ctx: FieldContext) -> None:
        """Takes ownership of ``coefficients``: normalized in place, cleared by wipe."""
        if not coefficients:
            raise ValueError("Polynomial needs at least one coefficient")
        for i, c in enumerate(coefficients):
            coefficients[i] = ctx.normalize(c)
        self._coeffs = coefficients
        self._ctx = ctx

    @classmethod
    def generate(
        cls,
        degree: int,
        constant: int,
        ctx: FieldContext,
        rng: random.Random | None = None,
    ) -> Polynomial:
        """Constant term ``constant``; the other ``degree`` terms uniform in [0, q)."""
        if degree < 0:
            raise ValueError(f"degree must be >= 0, got {degree}")
        if rng is None:
            rng = secrets.SystemRandom()
        coeffs = [ctx.normalize(constant)]
        for _ in range(degree):
            coeffs.append(rng.randrange(ctx.q))
        return cls(coeffs, ctx)

    @property
    def degree(self) -> int:
        return len(self._coeffs) - 1

    @property
    def coefficients(self) -> tuple[int, ...]:
        return tuple(self._coeffs)

    def evaluate(self, x: int) -> int:
        """Horner's method mod q."""
        q = self._ctx.q
        result = 0
        for c in reversed(self._coeffs):
            result = (result * x + c) % q
        return result

    def __call__(self, x: int) -> int:
        return self.evaluate(x)

    def wipe(self) -> None:
        """Overwrite and drop the coefficients."""
        for i in range(len(self._coeffs)):
            self._coeffs[i] = 0
        self._coeffs.clear()

    @property
    def wiped(self) -> bool:
        return not self._coeffs

    def __repr__(self) -> str:
        return f"Polynomial(degree={self.degree})"
