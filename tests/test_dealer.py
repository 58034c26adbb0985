"""Tests for fvss.dealer module."""

from __future__ import annotations

import random

import pytest

import fvss.dealer
from fvss.dealer import Dealer, distribute
from fvss.errors import ParameterError
from fvss.field import FieldContext
from fvss.polynomial import Polynomial


class TestDealer:
    def test_bundle_shape(self, small_ctx: FieldContext, rng: random.Random):
        bundle = Dealer(small_ctx, rng=rng).distribute(17, t=2, n=4)
        assert bundle.n == 4
        assert bundle.threshold == 2
        assert [s.x for s in bundle.shares] == [1, 2, 3, 4]
        assert all(0 <= s.y < small_ctx.q for s in bundle.shares)

    def test_secret_commitment(self, small_ctx: FieldContext, rng: random.Random):
        bundle = distribute(17, 3, 5, small_ctx, rng=rng)
        assert bundle.commitments.secret_commitment == pow(small_ctx.g, 17, small_ctx.p)

    def test_commitments_hide_coefficients(self, small_ctx: FieldContext):
        bundle = distribute(17, 2, 4, small_ctx, rng=random.Random(3))
        assert all(small_ctx.in_subgroup(c) for c in bundle.commitments)
        assert bundle.commitments.secret_commitment != 17

    def test_threshold_one(self, small_ctx: FieldContext, rng: random.Random):
        bundle = distribute(99, 1, 5, small_ctx, rng=rng)
        assert all(s.y == 99 for s in bundle.shares)
        assert len(bundle.commitments) == 1

    def test_deterministic_with_seed(self, small_ctx: FieldContext):
        a = distribute(5, 3, 6, small_ctx, rng=random.Random(11))
        b = distribute(5, 3, 6, small_ctx, rng=random.Random(11))
        assert a == b

    def test_zero_and_max_secret(self, small_ctx: FieldContext, rng: random.Random):
        for secret in (0, small_ctx.q - 1):
            bundle = distribute(secret, 2, 3, small_ctx, rng=rng)
            assert bundle.commitments.secret_commitment == small_ctx.commit(secret)

    @pytest.mark.parametrize("t, n", [(0, 3), (5, 3)])
    def test_invalid_threshold(self, small_ctx: FieldContext, t: int, n: int):
        with pytest.raises(ParameterError, match="1 <= t <= n"):
            distribute(1, t, n, small_ctx)

    @pytest.mark.parametrize("secret", [-1, 127, 1000])
    def test_secret_out_of_range(self, small_ctx: FieldContext, secret: int):
        with pytest.raises(ParameterError, match="Secret must be in"):
            distribute(secret, 2, 3, small_ctx)

    def test_too_many_shares_for_field(self, tiny_ctx: FieldContext):
        with pytest.raises(ParameterError, match="subgroup order"):
            distribute(1, 2, 11, tiny_ctx)

    def test_polynomial_is_wiped(
        self,
        small_ctx: FieldContext,
        monkeypatch: pytest.MonkeyPatch,
    ):
        created: list[Polynomial] = []
        original = Polynomial.generate.__func__

        def spy(cls, *args, **kwargs):
            poly = original(cls, *args, **kwargs)
            created.append(poly)
            return poly

        monkeypatch.setattr(fvss.dealer.Polynomial, "generate", classmethod(spy))
        distribute(17, 3, 4, small_ctx)
        assert len(created) == 1
        assert created[0].wiped
