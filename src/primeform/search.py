# -----------------------------------------------------------------------------
#  search.py
#  Exhaustive search of the quadratic form over ordered seed triples
# -----------------------------------------------------------------------------

from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
from itertools import product

from primeform.classify import classify
from primeform.form import DEFAULT_FORM, QuadraticForm, compute_candidate
from primeform.primality import PrimalityEngine
from primeform.progress import Progress
from primeform.records import SearchRecord
from primeform.registry import Index, discover

RecordSink = Callable[[SearchRecord], object]


@dataclass(frozen=True)
class SearchSummary:
    evaluated: int      # triples visited
    accepted: int       # records emitted (candidate tagged Prime)
    elapsed: float      # seconds


def iter_triples(
    seeds: Sequence[int],
    outer: Iterable[int] | None = None,
) -> Iterator[tuple[int, int, int]]:
    """
    Ordered triples (x, y, z) of seeds, repetition allowed, in seed-list order
    with z varying fastest. Each call starts over.

    outer: restrict x to these positions of `seeds` (a partition of the
    search by outer index); None means every position.
    """
    seeds = tuple(seeds)
    xs = seeds if outer is None else tuple(seeds[i] for i in outer)
    return product(xs, seeds, seeds)


def iter_records(
    seeds: Sequence[int],
    *,
    engine: PrimalityEngine | None = None,
    form: QuadraticForm = DEFAULT_FORM,
    index: Index | None = None,
    outer: Iterable[int] | None = None,
    on_triple: Callable[[int, int], None] | None = None,
) -> Iterator[SearchRecord]:
    """
    Yield one SearchRecord per triple whose candidate is tagged Prime.
    Seeds are classified only for accepted triples.

    on_triple(evaluated, accepted) is called after every triple.
    """
    engine = engine or PrimalityEngine()
    index = index or discover()

    evaluated = accepted = 0
    for x, y, z in iter_triples(seeds, outer):
        n = compute_candidate(x, y, z, form)
        tags_n = classify(n, engine, index)
        evaluated += 1
        if tags_n.is_prime:
            accepted += 1
            yield SearchRecord(
                x, y, z, n,
                tags_n,
                classify(x, engine, index),
                classify(y, engine, index),
                classify(z, engine, index),
            )
        if on_triple is not None:
            on_triple(evaluated, accepted)


def search(
    seeds: Sequence[int],
    sink: RecordSink,
    *,
    engine: PrimalityEngine | None = None,
    form: QuadraticForm = DEFAULT_FORM,
    progress: Progress | None = None,
) -> SearchSummary:
    """
    Run the full cross-product and hand every accepted record to `sink`.
    Exceptions raised by the sink propagate at once.
    """
    seeds = tuple(seeds)
    counts = [0, 0]

    def _tick(evaluated: int, accepted: int) -> None:
        counts[0], counts[1] = evaluated, accepted
        if progress is not None:
            progress.update(evaluated, accepted)

    t0 = time.perf_counter()
    try:
        for record in iter_records(seeds, engine=engine, form=form, on_triple=_tick):
            sink(record)
    finally:
        if progress is not None:
            progress.done()

    return SearchSummary(evaluated=counts[0], accepted=counts[1], elapsed=time.perf_counter() - t0)
