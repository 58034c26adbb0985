"""Monte Carlo simulation of dealing to faulty or malicious holders.

Validates empirical reliability and tamper detection against the
binomial predictions in fvss.probability, and samples coalition views
for the secrecy test.
"""

from __future__ import annotations

import contextlib
import random
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from fvss.dealer import Dealer
from fvss.errors import InsufficientShares
from fvss.field import FieldContext
from fvss.models import Share
from fvss.probability import reconstruction_probability
from fvss.reconstructor import Reconstructor


@dataclass
class SimulationResult:
    """Aggregated results from a Monte Carlo simulation run.

    Attributes:
        n_trials: Number of simulation trials.
        n_reconstructed: Trials where the secret was recovered correctly.
        n_wrong: Trials where reconstruction returned a wrong value.
        reliability: Empirical P[reconstruction success].
        predicted_reliability: Binomial prediction for the same parameters.
        tamper_detection_rate: Fraction of tampered shares rejected.
        false_acceptances: Tampered shares that passed verification.
        avg_verified_shares: Mean number of shares passing verification.
    """

    n_trials: int
    n_reconstructed: int
    n_wrong: int
    reliability: float
    predicted_reliability: float
    tamper_detection_rate: float
    false_acceptances: int
    avg_verified_shares: float


@dataclass
class TrialOutcome:
    """Outcome of a single simulation trial."""

    received_shares: list[Share]
    tampered_count: int
    dropped_count: int
    rejected_count: int
    accepted_tampered: int
    reconstructed_secret: int | None
    original_secret: int


class SharingSimulator:
    """Monte Carlo engine for one dealer and n holders.

    Each share is independently dropped with probability p_drop; a share
    that is not dropped is tampered (y replaced by a different value) with
    probability p_tamper.

    Args:
        ctx: Group parameters.
        seed: RNG seed for reproducibility; it drives both the dealer's
            coefficients and the fault model.
    """

    def __init__(self, ctx: FieldContext, seed: int | None = None) -> None:
        self.ctx = ctx
        self.rng = random.Random(seed)
        self.dealer = Dealer(ctx, rng=self.rng)

    def simulate_trial(
        self,
        t: int,
        n: int,
        p_tamper: float = 0.0,
        p_drop: float = 0.0,
        secret: int | None = None,
    ) -> TrialOutcome:
        """Deal, corrupt in transit, verify and reconstruct once."""
        q = self.ctx.q
        if secret is None:
            secret = self.rng.randrange(q)

        bundle = self.dealer.distribute(secret, t, n)
        reconstructor = Reconstructor(self.ctx, bundle.commitments, t, n)

        received: list[Share] = []
        tampered: set[int] = set()
        dropped_count = 0

        for share in bundle.shares:
            if self.rng.random() < p_drop:
                dropped_count += 1
                continue
            if self.rng.random() < p_tamper:
                forged_y = (share.y + 1 + self.rng.randrange(q - 1)) % q
                received.append(Share(x=share.x, y=forged_y))
                tampered.add(share.x)
            else:
                received.append(share)

        rejected = [s for s in received if not reconstructor.verifier(s)]
        accepted_tampered = len(tampered) - sum(1 for s in rejected if s.x in tampered)

        reconstructed = None
        with contextlib.suppress(InsufficientShares):
            reconstructed = reconstructor.reconstruct(received)

        return TrialOutcome(
            received_shares=received,
            tampered_count=len(tampered),
            dropped_count=dropped_count,
            rejected_count=len(rejected),
            accepted_tampered=accepted_tampered,
            reconstructed_secret=reconstructed,
            original_secret=secret,
        )

    def run(
        self,
        t: int,
        n: int,
        p_tamper: float = 0.0,
        p_drop: float = 0.0,
        n_trials: int = 1000,
    ) -> SimulationResult:
        """Run multiple simulation trials and aggregate results."""
        n_reconstructed = 0
        n_wrong = 0
        total_tampered = 0
        total_rejected_tampered = 0
        false_acceptances = 0
        total_verified = 0

        for _ in range(n_trials):
            outcome = self.simulate_trial(t, n, p_tamper, p_drop)

            if outcome.reconstructed_secret is not None:
                if outcome.reconstructed_secret == outcome.original_secret:
                    n_reconstructed += 1
                else:
                    n_wrong += 1

            total_tampered += outcome.tampered_count
            total_rejected_tampered += outcome.tampered_count - outcome.accepted_tampered
            false_acceptances += outcome.accepted_tampered
            total_verified += len(outcome.received_shares) - outcome.rejected_count

        p_fault = p_drop + (1.0 - p_drop) * p_tamper
        detection = (
            total_rejected_tampered / total_tampered if total_tampered else 1.0
        )

        return SimulationResult(
            n_trials=n_trials,
            n_reconstructed=n_reconstructed,
            n_wrong=n_wrong,
            reliability=n_reconstructed / n_trials,
            predicted_reliability=reconstruction_probability(n, t, p_fault),
            tamper_detection_rate=detection,
            false_acceptances=false_acceptances,
            avg_verified_shares=total_verified / n_trials,
        )

    def sample_observations(
        self,
        t: int,
        n: int,
        secret: int,
        trials: int,
        xs: Sequence[int],
    ) -> np.ndarray:
        """y-values seen by the coalition ``xs`` over repeated dealings of ``secret``.

        Returns:
            Integer array of shape (trials, len(xs)).
        """
        if self.ctx.q >= 1 << 63:
            raise ValueError("Observation sampling needs q < 2**63")
        rows = []
        for _ in range(trials):
            bundle = self.dealer.distribute(secret, t, n)
            rows.append([bundle.share_for(x).y for x in xs])
        return np.array(rows, dtype=np.int64).reshape(trials, len(xs))
