"""Tests for fvss.simulation module."""

from __future__ import annotations

import pytest

from fvss.field import FieldContext
from fvss.simulation import SharingSimulator


class TestSharingSimulator:
    def test_perfect_holders(self, small_ctx: FieldContext):
        sim = SharingSimulator(small_ctx, seed=42)
        result = sim.run(t=3, n=5, n_trials=100)
        assert result.reliability == 1.0
        assert result.predicted_reliability == pytest.approx(1.0)
        assert result.avg_verified_shares == 5.0
        assert result.n_wrong == 0

    def test_single_trial(self, small_ctx: FieldContext):
        sim = SharingSimulator(small_ctx, seed=42)
        outcome = sim.simulate_trial(2, 4, secret=17)
        assert outcome.original_secret == 17
        assert outcome.reconstructed_secret == 17
        assert len(outcome.received_shares) == 4
        assert outcome.dropped_count == 0
        assert outcome.rejected_count == 0

    def test_every_tampered_share_detected(self, small_ctx: FieldContext):
        sim = SharingSimulator(small_ctx, seed=42)
        result = sim.run(t=2, n=5, p_tamper=0.4, n_trials=300)
        assert result.tamper_detection_rate == 1.0
        assert result.false_acceptances == 0
        assert result.n_wrong == 0

    def test_all_tampered(self, small_ctx: FieldContext):
        sim = SharingSimulator(small_ctx, seed=1)
        outcome = sim.simulate_trial(2, 4, p_tamper=1.0, secret=5)
        assert outcome.tampered_count == 4
        assert outcome.rejected_count == 4
        assert outcome.reconstructed_secret is None

    def test_dropping_reduces_reliability(self, small_ctx: FieldContext):
        sim = SharingSimulator(small_ctx, seed=42)
        result = sim.run(t=5, n=6, p_drop=0.2, n_trials=500)
        assert result.reliability < 1.0
        assert result.avg_verified_shares < 6.0

    def test_matches_binomial_prediction(self, small_ctx: FieldContext):
        sim = SharingSimulator(small_ctx, seed=3)
        result = sim.run(t=3, n=5, p_tamper=0.2, p_drop=0.125, n_trials=2000)
        assert result.predicted_reliability == pytest.approx(0.83692, abs=1e-4)
        assert abs(result.reliability - result.predicted_reliability) < 0.05

    def test_reproducibility(self, small_ctx: FieldContext):
        r1 = SharingSimulator(small_ctx, seed=42).run(2, 4, p_tamper=0.3, n_trials=100)
        r2 = SharingSimulator(small_ctx, seed=42).run(2, 4, p_tamper=0.3, n_trials=100)
        assert r1 == r2

    def test_sample_observations_shape(self, tiny_ctx: FieldContext):
        sim = SharingSimulator(tiny_ctx, seed=0)
        obs = sim.sample_observations(t=3, n=4, secret=2, trials=20, xs=[1, 3])
        assert obs.shape == (20, 2)
        assert obs.min() >= 0 and obs.max() < tiny_ctx.q

    def test_sample_observations_large_field(self):
        sim = SharingSimulator(FieldContext.create(), seed=0)
        with pytest.raises(ValueError, match="2\\*\\*63"):
            sim.sample_observations(t=2, n=2, secret=1, trials=1, xs=[1])
