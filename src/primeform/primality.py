# -----------------------------------------------------------------------------
#  primality.py
#  Miller-Rabin probable-prime test and the Germain / Safe predicates
# -----------------------------------------------------------------------------

"""
Arbitrary-precision primality engine.

The test is probabilistic: a composite passes all `rounds` trials with
probability at most 4**-rounds (about 9.09e-13 for the default of 20).
Results for the same input are therefore stable in practice but not
guaranteed bit-identical across repeated calls, unless the engine is given
a seeded random.Random.

Each engine owns its random generator; never share one engine between
concurrently running searches.
"""

from __future__ import annotations

import random

import gmpy2

DEFAULT_ROUNDS = 20


def _decompose(m: int) -> tuple[int, int]:
    """Write m = d * 2**s with d odd (m > 0); return (d, s)."""
    s = gmpy2.bit_scan1(m)
    return m >> s, s


def is_prime(value: int, rounds: int = DEFAULT_ROUNDS, rng: random.Random | None = None) -> bool:
    """
    Miller-Rabin probable-prime test.

      - 2 and 3 are prime
      - values < 2 (0, 1, negatives) and even values are not
      - otherwise `rounds` trials with a uniform random base a in [2, value-2]

    Raises ValueError if rounds < 1; never raises otherwise for integer input.
    """
    if int(rounds) < 1:
        raise ValueError(f"rounds must be >= 1, got {rounds}")
    n = int(value)
    if n in (2, 3):
        return True
    if n < 2 or n % 2 == 0:
        return False

    rng = rng or random.Random()
    n_minus_one = n - 1
    d, s = _decompose(n_minus_one)
    nz = gmpy2.mpz(n)

    for _ in range(rounds):
        a = rng.randrange(2, n_minus_one)         # [2, n-2]
        x = gmpy2.powmod(a, d, nz)
        if x == 1 or x == n_minus_one:
            continue
        for _ in range(s - 1):
            x = gmpy2.powmod(x, 2, nz)
            if x == n_minus_one:
                break
        else:
            return False                           # a is a witness: composite
    return True


class PrimalityEngine:
    """
    Primality test with a fixed strength, plus the derived predicates.

    Usage:
        engine = PrimalityEngine()                        # rounds=20, own RNG
        engine = PrimalityEngine(rounds=8, rng=random.Random(1))
        engine.is_prime(1907), engine.is_germain(23), engine.is_safe(23)
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS, rng: random.Random | None = None):
        if int(rounds) < 1:
            raise ValueError(f"rounds must be >= 1, got {rounds}")
        self.rounds = int(rounds)
        self.rng = rng if rng is not None else random.Random()

    def __repr__(self) -> str:
        return f"PrimalityEngine(rounds={self.rounds})"

    @property
    def error_bound(self) -> float:
        """Upper bound on the false-positive probability for one composite input."""
        return 4.0 ** -self.rounds

    def is_prime(self, value: int) -> bool:
        return is_prime(value, self.rounds, self.rng)

    def is_germain(self, p: int) -> bool:
        """True iff 2p+1 is (probably) prime."""
        return self.is_prime(2 * int(p) + 1)

    def is_safe(self, p: int) -> bool:
        """True iff p > 2 and (p-1)/2 is (probably) prime; p <= 2 is simply False."""
        p = int(p)
        if p <= 2:
            return False
        return self.is_prime((p - 1) // 2)
