#!/usr/bin/env python3
"""Quick start example: verifiable secret sharing of a 32-byte key.

Demonstrates the core workflow:
  1. Establish the group parameters once
  2. Deal the key as independently shared elements
  3. Each holder verifies its shares against the commitments
  4. Any t holders reconstruct, even with a forged share in the mix
  5. Check reliability against the binomial prediction
"""

import secrets

from fvss.codec import deal_bytes, reconstruct_bytes
from fvss.field import FieldContext
from fvss.models import Share
from fvss.probability import min_shares_for_reliability
from fvss.simulation import SharingSimulator
from fvss.verifier import verify

# --- 1. Group parameters: q = 2^127-1, p = k*q + 1 with at least 256 bits ---
ctx = FieldContext.create(modulus_bits=256)
print(f"p: {ctx.p.bit_length()} bits, q: {ctx.q.bit_length()} bits, g = {ctx.g}")

# --- 2. Deal a key to 5 holders, any 3 of which can recover it ---
t, n = 3, 5
key = secrets.token_bytes(32)
shared = deal_bytes(key, t=t, n=n, ctx=ctx)
print(f"\nDealt {len(key)}-byte key as {len(shared.bundles)} elements (t={t}, n={n})")

# --- 3. Every holder checks every one of its shares ---
for x in range(1, n + 1):
    ok = all(
        verify(share, bundle.commitments, ctx, t, n)
        for share, bundle in zip(shared.shares_for(x), shared.bundles)
    )
    print(f"  holder {x}: {'verified' if ok else 'REJECTED'}")

# --- 4. Holders 1, 2, 4, 5 meet; holder 2 lies about its first share ---
chunks = shared.collect([1, 2, 4, 5])
honest = chunks[0][1]
chunks[0][1] = Share(x=honest.x, y=(honest.y + 1) % ctx.q)
recovered = reconstruct_bytes(chunks, shared.commitments, shared.length, t, ctx, n=n)
print(f"\nRecovered key matches: {recovered == key}")

# --- 5. Reliability when each share is lost or corrupted with prob 0.3 ---
n_needed = min_shares_for_reliability(t, p_fault=0.3, sigma=0.99)
print(f"\nShares needed for 99% reliability at t={t}: {n_needed}")

sim = SharingSimulator(FieldContext.create(q=127), seed=42)
result = sim.run(t=t, n=n, p_tamper=0.2, p_drop=0.125, n_trials=5_000)
print("Monte Carlo (5k trials):")
print(f"  Reliability:       {result.reliability:.4f}  (predicted {result.predicted_reliability:.4f})")
print(f"  Tamper detection:  {result.tamper_detection_rate:.4f}")
print(f"  False acceptances: {result.false_acceptances}")
