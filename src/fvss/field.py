"""Prime-order subgroup parameters and scalar-field arithmetic.

Shares and polynomial coefficients live in GF(q). Commitments live in the
order-q subgroup of (Z/pZ)^*, generated by g, where q | p - 1.
Default subgroup order: Mersenne prime 2^127-1.
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass

from fvss.errors import ArithmeticFault, ParameterError

logger = logging.getLogger(__name__)

MERSENNE_127 = (1 << 127) - 1

DEFAULT_MR_ROUNDS = 40
DEFAULT_MODULUS_ATTEMPTS = 100_000
DEFAULT_GENERATOR_ATTEMPTS = 10_000

_SMALL_PRIMES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47, 53, 59, 61, 67, 71)

# Fixed witnesses 2..41 make Miller-Rabin exact below this bound.
_DETERMINISTIC_WITNESSES = _SMALL_PRIMES[:13]
_DETERMINISTIC_LIMIT = 3_317_044_064_679_887_385_961_981


def is_probable_prime(n: int, rounds: int = DEFAULT_MR_ROUNDS) -> bool:
    """Miller-Rabin test with small-prime trial division.

    Exact for n below ~3.3e24; above that, extra random witnesses are drawn
    until ``rounds`` witnesses in total have been tried.
    """
    if n < 2:
        return False
    for sp in _SMALL_PRIMES:
        if n == sp:
            return True
        if n % sp == 0:
            return False

    d = n - 1
    s = 0
    while d % 2 == 0:
        d //= 2
        s += 1

    witnesses = list(_DETERMINISTIC_WITNESSES)
    if n >= _DETERMINISTIC_LIMIT:
        for _ in range(max(0, rounds - len(witnesses))):
            witnesses.append(2 + secrets.randbelow(n - 3))

    for a in witnesses:
        x = pow(a, d, n)
        if x in (1, n - 1):
            continue
        for _ in range(s - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True


def mod_inverse(a: int, m: int) -> int | None:
    """Inverse of a mod m via the extended Euclidean algorithm.

    Returns None iff gcd(a, m) != 1.
    """
    if m < 2:
        return None
    r0, r1 = m, a % m
    t0, t1 = 0, 1
    while r1 > 0:
        quotient = r0 // r1
        r0, r1 = r1, r0 - quotient * r1
        t0, t1 = t1, t0 - quotient * t1
    if r0 != 1:
        return None
    if t0 < 0:
        t0 += m
    return t0


def select_modulus(
    q: int,
    modulus_bits: int | None = None,
    max_attempts: int = DEFAULT_MODULUS_ATTEMPTS,
) -> int:
    """Find a prime p = k*q + 1 (k even), at least ``modulus_bits`` bits long.

    Candidates are walked in increasing k so the result is deterministic.
    """
    if not is_probable_prime(q):
        raise ParameterError(f"Subgroup order must be prime, got {q}")
    if max_attempts < 1:
        raise ParameterError(f"max_attempts must be positive, got {max_attempts}")

    k = 2
    if modulus_bits is not None:
        if modulus_bits < 2:
            raise ParameterError(f"modulus_bits must be >= 2, got {modulus_bits}")
        lower = 1 << (modulus_bits - 1)
        k = max(2, -(-(lower - 1) // q))
    if k % 2:
        k += 1

    for _ in range(max_attempts):
        p = k * q + 1
        if is_probable_prime(p):
            return p
        k += 2

    raise ParameterError(
        f"No prime p = k*q + 1 found for q={q} within {max_attempts} candidates"
    )


def find_generator(
    p: int,
    q: int,
    max_attempts: int = DEFAULT_GENERATOR_ATTEMPTS,
) -> int:
    """Smallest-base element of order exactly q in (Z/pZ)^*.

    For h = 2, 3, ... returns the first g = h^((p-1)/q) mod p with g != 1;
    since q is prime such a g has order q.
    """
    if not is_probable_prime(p):
        raise ParameterError(f"Modulus must be prime, got {p}")
    if not is_probable_prime(q):
        raise ParameterError(f"Subgroup order must be prime, got {q}")
    if (p - 1) % q != 0:
        raise ParameterError(f"q={q} does not divide p-1 for p={p}")

    cofactor = (p - 1) // q
    for h in range(2, min(p, 2 + max_attempts)):
        g = pow(h, cofactor, p)
        if g != 1:
            return g

    raise ParameterError(
        f"No generator of order {q} mod {p} within {max_attempts} candidates"
    )


@dataclass(frozen=True)
class FieldContext:
    """Group parameters (p, q, g) fixed for a run; read-only once built.

    Attributes:
        p: Prime modulus of the commitment group.
        q: Prime subgroup order; shares and coefficients are taken mod q.
        g: Generator of the order-q subgroup of (Z/pZ)^*.
    """

    p: int
    q: int
    g: int

    def __post_init__(self) -> None:
        if not is_probable_prime(self.q):
            raise ParameterError(f"q must be prime, got {self.q}")
        if not is_probable_prime(self.p):
            raise ParameterError(f"p must be prime, got {self.p}")
        if (self.p - 1) % self.q != 0:
            raise ParameterError(f"q={self.q} must divide p-1 for p={self.p}")
        if not 2 <= self.g < self.p:
            raise ParameterError(f"g must be in [2, p), got {self.g}")
        if pow(self.g, self.q, self.p) != 1:
            raise ParameterError(f"g={self.g} does not have order {self.q}")

    @classmethod
    def create(
        cls,
        q: int = MERSENNE_127,
        modulus_bits: int | None = None,
        max_attempts: int = DEFAULT_MODULUS_ATTEMPTS,
    ) -> FieldContext:
        """Select p for subgroup order q and locate a generator."""
        p = select_modulus(q, modulus_bits=modulus_bits, max_attempts=max_attempts)
        g = find_generator(p, q)
        logger.info(
            "Established field context: q=%d bits, p=%d bits, g=%d",
            q.bit_length(),
            p.bit_length(),
            g,
        )
        return cls(p=p, q=q, g=g)

    def normalize(self, a: int) -> int:
        return a % self.q

    def add(self, a: int, b: int) -> int:
        return (a % self.q + b % self.q) % self.q

    def sub(self, a: int, b: int) -> int:
        diff = a % self.q - b % self.q
        if diff < 0:
            diff += self.q
        return diff

    def neg(self, a: int) -> int:
        return self.sub(0, a)

    def mul(self, a: int, b: int) -> int:
        return (a % self.q) * (b % self.q) % self.q

    def inverse(self, a: int) -> int:
        """Scalar inverse mod q; a missing inverse is an internal fault."""
        inv = mod_inverse(a, self.q)
        if inv is None:
            raise ArithmeticFault(f"{a} has no inverse mod q")
        return inv

    def commit(self, a: int) -> int:
        """g^a mod p."""
        return pow(self.g, a % self.q, self.p)

    def in_subgroup(self, c: int) -> bool:
        """True if c is an element of the order-q subgroup."""
        return 1 <= c < self.p and pow(c, self.q, self.p) == 1
