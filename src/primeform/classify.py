from __future__ import annotations

import sys
import time
from dataclasses import dataclass

from colorama import Fore, Style

from primeform.fmt import abbr_int_fast, get_terminal_width, visible_len
from primeform.primality import PrimalityEngine
from primeform.records import Tags
from primeform.registry import Index, discover

# ---------- Data models -------------------------------------------------------


@dataclass
class Outcome:
    label: str
    ok: bool
    detail: str | None
    oeis: str | None
    ms: float
    description: str = ""


# ---------- Helpers -----------------------------------------------------------

def _fmt_ms(ms: float) -> str:
    return f"{ms:6.2f} ms"


def _print_debug_result(label: str, ok: bool, dt_ms: float, detail: str | None = None) -> None:
    """Emit a single debug line with timing and colored status (to STDERR)."""
    stat = f"{Fore.GREEN}{Style.BRIGHT}OK  {Style.RESET_ALL}" if ok else f"{Style.DIM}NO  {Style.RESET_ALL}"
    tm = f"{Style.DIM}[{_fmt_ms(dt_ms)}]{Style.RESET_ALL}"
    line = f"{tm} {stat}  {label}"

    if detail:
        width = max(60, get_terminal_width())
        max_tail = max(10, width - visible_len(line) - 5)
        d = str(detail)
        if len(d) > max_tail:
            d = d[: max_tail - 1] + "…"
        line += f" — {Style.DIM}{d}{Style.RESET_ALL}"

    sys.stderr.write(line + "\n")
    sys.stderr.flush()


def _coerce_result(res) -> tuple[bool, str | None]:
    """Normalize predicate return into (ok, detail)."""
    if isinstance(res, tuple):
        if not res:
            return False, None
        ok, *rest = res
        return bool(ok), (rest[0] if rest else None)
    return bool(res), None


# ---------- Main API ----------------------------------------------------------

def explain(
    p: int,
    engine: PrimalityEngine,
    index: Index | None = None,
    trace: bool = False,
) -> list[Outcome]:
    """
    Run every tag predicate on p, in tag order, and return one Outcome each.
    trace=True writes one timing line per predicate to stderr.
    """
    index = index or discover()
    if trace:
        sys.stderr.write(f"{Fore.YELLOW}{Style.BRIGHT}{abbr_int_fast(p)}{Style.RESET_ALL}\n")

    outcomes: list[Outcome] = []
    for label, fn in index.funcs.items():
        t0 = time.perf_counter()
        ok, detail = _coerce_result(fn(p, engine))
        dt = (time.perf_counter() - t0) * 1000.0
        if trace:
            _print_debug_result(label, ok, dt, detail)
        outcomes.append(Outcome(label, ok, detail, index.oeis.get(label), dt,
                                index.descriptions.get(label, "")))
    return outcomes


def classify(p: int, engine: PrimalityEngine, index: Index | None = None) -> Tags:
    """
    Tag set of p: every predicate is evaluated independently, so the result
    may hold zero, one, two or all three labels.
    """
    index = index or discover()
    hits = []
    for label, fn in index.funcs.items():
        ok, _ = _coerce_result(fn(int(p), engine))
        if ok:
            hits.append(label)
    return Tags.of(hits)
