"""Feldman Verifiable Secret Sharing (fvss).

Threshold sharing of field elements over GF(q) with dealer-published
commitments in a prime-order subgroup, so every holder can check its
share without trusting the dealer or learning the secret.
"""

__version__ = "0.1.0"
