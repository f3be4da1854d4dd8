# tests/test_search.py
"""
Tests for the candidate generator and the search loop.

Run: pytest -v
"""

from __future__ import annotations

from itertools import product

import pytest
from sympy import isprime

from primeform.form import DEFAULT_FORM, QuadraticForm, compute_candidate
from primeform.records import GERMAIN, PRIME, SAFE, SearchRecord, Tags
from primeform.search import iter_records, iter_triples, search
from primeform.seeds import DEFAULT_SEEDS

# ---------- helpers -----------------------------------------------------------


def _reference_n(x: int, y: int, z: int) -> int:
    return 5*x*x + 7*x*y + 11*y*y + 23*x*z + 47*y*z + 83*z*z + 107


def _reference_tags(p: int) -> Tags:
    labels = []
    if isprime(2 * p + 1):
        labels.append(GERMAIN)
    if p > 2 and isprime((p - 1) // 2):
        labels.append(SAFE)
    if isprime(p):
        labels.append(PRIME)
    return Tags.of(labels)


def _reference_records(seeds) -> list[SearchRecord]:
    out = []
    for x, y, z in product(seeds, repeat=3):
        n = _reference_n(x, y, z)
        if isprime(n):
            out.append(SearchRecord(x, y, z, n, _reference_tags(n),
                                    _reference_tags(x), _reference_tags(y), _reference_tags(z)))
    return out


# ---------- candidate generator -----------------------------------------------


CANDIDATES = [
    ((2, 3, 5), 3278),
    ((0, 0, 0), 107),
    ((1, 0, 0), 112),
    ((0, 1, 0), 118),
    ((0, 0, 1), 190),
    ((3, 3, 3), 1691),
]


@pytest.mark.parametrize("xyz,expected", CANDIDATES)
def test_compute_candidate(xyz, expected):
    assert compute_candidate(*xyz) == expected


def test_compute_candidate_is_deterministic():
    big = 2**200 + 235
    first = compute_candidate(big, big + 2, big + 6)
    assert all(compute_candidate(big, big + 2, big + 6) == first for _ in range(10))
    assert first == _reference_n(big, big + 2, big + 6)


def test_form_is_not_symmetric():
    assert compute_candidate(3, 5, 7) != compute_candidate(5, 3, 7)


def test_other_form_can_be_substituted():
    linear = QuadraticForm(xx=0, xy=0, yy=0, xz=0, yz=0, zz=0, const=1)
    assert compute_candidate(11, 13, 17, linear) == 1
    assert DEFAULT_FORM(2, 3, 5) == 3278


# ---------- triples -----------------------------------------------------------


def test_iter_triples_order_and_count():
    triples = list(iter_triples([7, 3, 5]))
    assert len(triples) == 27
    assert triples[0] == (7, 7, 7)
    assert triples[1] == (7, 7, 3)             # z varies fastest, list order
    assert triples[-1] == (5, 5, 5)


def test_iter_triples_restarts():
    seeds = (3, 5)
    assert list(iter_triples(seeds)) == list(iter_triples(seeds))


def test_iter_triples_partition_by_outer_index():
    seeds = (3, 5, 7, 11)
    parts = [list(iter_triples(seeds, outer=[i])) for i in range(len(seeds))]
    assert [t for part in parts for t in part] == list(iter_triples(seeds))
    assert all(t[0] == 5 for t in parts[1])


# ---------- search ------------------------------------------------------------


def test_search_small_seed_list(engine):
    seeds = [3, 5, 7]
    got: list[SearchRecord] = []
    summary = search(seeds, got.append, engine=engine)

    assert summary.evaluated == 27
    assert summary.accepted == len(got)
    assert got == _reference_records(seeds)
    for rec in got:
        assert PRIME in rec.tags_n
        assert rec.n == compute_candidate(rec.x, rec.y, rec.z)


def test_search_reports_symmetric_triples_separately(engine):
    seeds = DEFAULT_SEEDS[:8]
    got: list[SearchRecord] = []
    search(seeds, got.append, engine=engine)
    assert got == _reference_records(seeds)
    assert len({(r.x, r.y, r.z) for r in got}) == len(got)


def test_search_is_repeatable(engine):
    seeds = DEFAULT_SEEDS[:6]
    first: list[SearchRecord] = []
    second: list[SearchRecord] = []
    search(seeds, first.append, engine=engine)
    search(seeds, second.append, engine=engine)
    assert [(r.x, r.y, r.z) for r in first] == [(r.x, r.y, r.z) for r in second]


def test_iter_records_is_lazy(engine):
    gen = iter_records(DEFAULT_SEEDS, engine=engine)
    rec = next(gen)
    assert rec.tags_n.is_prime
    gen.close()


def test_sink_errors_propagate(engine):
    def broken_sink(record):
        raise OSError("disk full")

    with pytest.raises(OSError, match="disk full"):
        search([3, 5, 7], broken_sink, engine=engine)


def test_search_progress_callback(engine):
    class Recorder:
        def __init__(self):
            self.calls = []
            self.finished = False

        def update(self, done, accepted=0):
            self.calls.append((done, accepted))

        def done(self):
            self.finished = True

    prog = Recorder()
    summary = search([3, 5], lambda r: None, engine=engine, progress=prog)
    assert prog.finished
    assert prog.calls[-1] == (8, summary.accepted)
    assert [c[0] for c in prog.calls] == list(range(1, 9))
