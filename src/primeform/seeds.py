# -----------------------------------------------------------------------------
#  seeds.py
#  Prime seed lists: the built-in list, text parsing, prime ranges
# -----------------------------------------------------------------------------

from __future__ import annotations

import re

from sympy import primerange

from primeform.utility import UserInputError

# The search's default domain for x, y and z
DEFAULT_SEEDS: tuple[int, ...] = (
    3, 5, 7, 11, 13, 23, 47, 83, 107, 167,
    227, 359, 383, 467, 479, 503, 563, 587, 719, 839,
    863, 887, 983, 1019, 1187, 1283, 1307, 1319, 1367, 1439,
    1487, 1523, 1619, 1823, 1907,
)

_SPLIT_RE = re.compile(r"[,\s]+")


def parse_seeds(text: str, source: str = "<text>") -> tuple[int, ...]:
    """
    Parse integers separated by commas and/or whitespace.
    '#' starts a comment. Order is kept; duplicates are kept.
    Raises UserInputError on a non-integer or negative token.
    """
    out: list[int] = []
    for lineno, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.split("#", 1)[0]
        for tok in _SPLIT_RE.split(line.strip()):
            if not tok:
                continue
            try:
                v = int(tok)
            except ValueError:
                raise UserInputError(f"{source}, line {lineno}: not an integer: {tok!r}") from None
            if v < 0:
                raise UserInputError(f"{source}, line {lineno}: negative seed: {v}")
            out.append(v)
    if not out:
        raise UserInputError(f"{source}: no seeds found")
    return tuple(out)


def seeds_in_range(lo: int, hi: int) -> tuple[int, ...]:
    """All primes p with lo <= p < hi, ascending."""
    if hi <= lo:
        raise UserInputError(f"Empty seed range [{lo}, {hi})")
    seeds = tuple(int(p) for p in primerange(max(lo, 0), hi))
    if not seeds:
        raise UserInputError(f"No primes in [{lo}, {hi})")
    return seeds
