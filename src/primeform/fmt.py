# src/primeform/fmt.py
from __future__ import annotations

import re
from collections.abc import Iterable

from colorama import Fore, Style

from primeform.records import GERMAIN, PRIME, SAFE
from primeform.utility import dec_digits, get_terminal_width

__all__ = [
    "abbr_int_fast",
    "format_duration",
    "format_tags",
    "get_terminal_width",
    "strip_ansi",
    "visible_len",
]

# Single source of truth for ANSI stripping
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")

_TAG_COLORS = {
    PRIME: Fore.GREEN,
    GERMAIN: Fore.CYAN,
    SAFE: Fore.MAGENTA,
}


def abbr_int_fast(n: int, head: int = 10, tail: int = 10, threshold: int = 35, ellipsis: str = "…") -> str:
    """Abbreviate very large ints as first<head>…last<tail> without str(n)."""
    if not isinstance(n, int):
        return str(n)
    if n == 0:
        return "0"

    sign = "-" if n < 0 else ""
    a = -n if n < 0 else n

    d = dec_digits(a)
    if d <= threshold or head + tail >= d:
        return sign + str(a)

    first = a // 10 ** (d - head)
    last = a % 10 ** tail
    return f"{sign}{first}{ellipsis}{last:0{tail}d}"


def strip_ansi(s: str | None) -> str:
    """Return s with ANSI escape sequences removed."""
    return "" if s is None else ANSI_RE.sub("", s)


def visible_len(s: str | None) -> int:
    """Printable length (without ANSI)."""
    return len(strip_ansi(s))


def format_tags(labels: Iterable[str], color: bool = True) -> str:
    """'Germain, Prime' (colored per label), or a dim '–' for an empty set."""
    labels = list(labels)
    if not labels:
        return f"{Style.DIM}–{Style.RESET_ALL}" if color else "–"
    if not color:
        return ", ".join(labels)
    return ", ".join(f"{_TAG_COLORS.get(lbl, '')}{lbl}{Style.RESET_ALL}" for lbl in labels)


def format_duration(seconds: float) -> str:
    """ms if <1s; s with millis if <60s; else mm:ss.mmm (and hh:mm:ss.mmm if ≥1h)."""
    MAX_SECONDS = 60
    if seconds < 1:
        ms = round(seconds * 1000)
        return f"{ms} ms"
    if seconds < MAX_SECONDS:
        return f"{seconds:.3f} s"
    m, s = divmod(seconds, MAX_SECONDS)
    if m < MAX_SECONDS:
        return f"{int(m)}:{s:06.3f}"               # mm:ss.mmm
    h, m = divmod(int(m), MAX_SECONDS)
    return f"{h}:{m:02d}:{s:06.3f}"                # hh:mm:ss.mmm
