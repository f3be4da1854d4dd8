# -----------------------------------------------------------------------------
#  prime.py
#  Tag predicates: Germain, Safe, Prime
# -----------------------------------------------------------------------------

from __future__ import annotations

from primeform.primality import PrimalityEngine
from primeform.records import GERMAIN, PRIME, SAFE
from primeform.registry import classifier

"""
Each predicate is evaluated on its own: Germain and Safe look only at the
derived value (2p+1 resp. (p-1)/2) and do not require p itself to be prime.
"""


@classifier(
    label=GERMAIN,
    description="2p+1 is also prime.",
    oeis="A005384",
    order=0,
)
def is_germain_prime(n: int, engine: PrimalityEngine) -> tuple[bool, str | None]:
    q = 2 * n + 1
    if engine.is_prime(q):
        return True, f"2×{n} + 1 = {q} is prime"
    return False, f"2×{n} + 1 = {q} is composite"


@classifier(
    label=SAFE,
    description="(p−1)/2 is also prime.",
    oeis="A005385",
    order=1,
)
def is_safe_prime(n: int, engine: PrimalityEngine) -> tuple[bool, str | None]:
    if n <= 2:
        return False, None
    k = (n - 1) // 2
    if engine.is_safe(n):
        return True, f"({n} − 1)/2 = {k} is prime"
    return False, f"({n} − 1)/2 = {k} is composite"


@classifier(
    label=PRIME,
    description="Probable prime (Miller-Rabin).",
    oeis="A000040",
    order=2,
)
def is_prime_number(n: int, engine: PrimalityEngine) -> tuple[bool, str | None]:
    if engine.is_prime(n):
        return True, f"passed {engine.rounds} Miller-Rabin rounds"
    return False, None
