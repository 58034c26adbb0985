"""Byte secrets <-> sequences of field elements, one sharing per element.

Each element is dealt, verified and reconstructed independently, so a
holder can verify its share of each chunk but not of the whole secret.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from fvss.dealer import Dealer
from fvss.errors import ParameterError
from fvss.field import FieldContext
from fvss.models import CommitmentSet, Share, ShareBundle
from fvss.reconstructor import Reconstructor

logger = logging.getLogger(__name__)


def element_width(ctx: FieldContext) -> int:
    """Bytes per element such that every chunk value is below q."""
    width = (ctx.q.bit_length() - 1) // 8
    if width <= 0:
        raise ParameterError(f"Subgroup order q={ctx.q} too small for byte-level sharing")
    return width


def encode(data: bytes, ctx: FieldContext) -> list[int]:
    """Split bytes into big-endian chunks, each one field element."""
    width = element_width(ctx)
    return [
        int.from_bytes(data[offset : offset + width], byteorder="big")
        for offset in range(0, len(data), width)
    ]


def decode(elements: Sequence[int], length: int, ctx: FieldContext) -> bytes:
    """Inverse of encode, trimmed to ``length`` bytes."""
    width = element_width(ctx)
    expected = -(-length // width)
    if len(elements) != expected:
        raise ParameterError(
            f"{length} bytes need {expected} elements, got {len(elements)}"
        )

    result = bytearray()
    for value in elements:
        this_chunk = min(width, length - len(result))
        try:
            result.extend(value.to_bytes(this_chunk, byteorder="big"))
        except OverflowError as exc:
            raise ParameterError(
                f"Element does not fit in a {this_chunk}-byte chunk"
            ) from exc
    return bytes(result)


@dataclass(frozen=True)
class SharedSecret:
    """Per-element share bundles for a byte secret.

    Attributes:
        bundles: One ShareBundle per encoded element, in order.
        length: Original secret length in bytes.
    """

    bundles: tuple[ShareBundle, ...]
    length: int

    @property
    def commitments(self) -> list[CommitmentSet]:
        return [b.commitments for b in self.bundles]

    def shares_for(self, x: int) -> list[Share]:
        """Holder x's share of every element."""
        return [b.share_for(x) for b in self.bundles]

    def collect(self, xs: Sequence[int]) -> list[list[Share]]:
        """Per-element share lists held by the coalition ``xs``."""
        return [[b.share_for(x) for x in xs] for b in self.bundles]


def _element_rngs(
    count: int,
    rng: random.Random | None,
    parallel: bool,
) -> list[random.Random | None]:
    if not parallel or rng is None or isinstance(rng, random.SystemRandom):
        return [rng] * count
    # A seeded generator is never shared across workers; derive one per element.
    return [random.Random(rng.getrandbits(128)) for _ in range(count)]


def deal_bytes(
    data: bytes,
    t: int,
    n: int,
    ctx: FieldContext,
    rng: random.Random | None = None,
    max_workers: int | None = None,
) -> SharedSecret:
    """Split bytes into elements and deal each one independently."""
    elements = encode(data, ctx)
    parallel = max_workers is not None and max_workers > 1
    rngs = _element_rngs(len(elements), rng, parallel)

    def deal_one(item: tuple[int, random.Random | None]) -> ShareBundle:
        secret, element_rng = item
        return Dealer(ctx, rng=element_rng).distribute(secret, t, n)

    if parallel:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            bundles = tuple(pool.map(deal_one, zip(elements, rngs, strict=True)))
    else:
        bundles = tuple(deal_one(item) for item in zip(elements, rngs, strict=True))

    logger.info(
        "Dealt %d-byte secret as %d elements (t=%d, n=%d)",
        len(data),
        len(bundles),
        t,
        n,
    )
    return SharedSecret(bundles=bundles, length=len(data))


def reconstruct_bytes(
    share_chunks: Sequence[Sequence[Share]],
    commitments: Sequence[CommitmentSet],
    original_length: int,
    t: int,
    ctx: FieldContext,
    n: int | None = None,
    max_workers: int | None = None,
) -> bytes:
    """Verify and reconstruct every element, then reassemble the bytes."""
    if len(share_chunks) != len(commitments):
        raise ParameterError(
            f"Got {len(share_chunks)} share chunks for {len(commitments)} commitment sets"
        )

    def reconstruct_one(item: tuple[Sequence[Share], CommitmentSet]) -> int:
        shares, element_commitments = item
        return Reconstructor(ctx, element_commitments, t, n).reconstruct(shares)

    items = list(zip(share_chunks, commitments, strict=True))
    if max_workers is not None and max_workers > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            elements = list(pool.map(reconstruct_one, items))
    else:
        elements = [reconstruct_one(item) for item in items]

    return decode(elements, original_length, ctx)
