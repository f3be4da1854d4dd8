# output_manager.py
from __future__ import annotations

import csv
import os
from pathlib import Path

from colorama import Fore, Style

from primeform.fmt import abbr_int_fast, format_tags
from primeform.records import FIELDS, SearchRecord


def resolve_output_path(path: str, workspace_root: str | os.PathLike) -> str:
    """
    Resolve user-provided output path.

    Rules:
    - '~' expanded to user home
    - Absolute paths unchanged
    - Relative paths are relative to workspace_root
    """
    if not path:
        raise ValueError("Output path is empty")

    path = os.path.expanduser(path)
    if os.path.isabs(path):
        return os.path.normpath(path)
    return os.path.normpath(os.path.join(os.fspath(workspace_root), path))


class RecordWriter:
    """
    CSV sink for search records: header row first, then one row per record.

    Usage:
        with RecordWriter("results/index.csv") as out:
            search(seeds, out.write)

    The file is created (or truncated) on open. Each row is flushed as it is
    written, so an interrupted run leaves every emitted record on disk.
    I/O errors are not caught here.
    """

    def __init__(self, path: str | os.PathLike, *, echo: bool = False, quiet: bool = False):
        self.path = Path(path)
        self.echo = echo
        self.quiet = quiet
        self.count = 0
        self._fh = None
        self._writer = None

    def open(self) -> RecordWriter:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = self.path.open("w", encoding="utf-8", newline="")
        self._writer = csv.writer(self._fh)
        self._writer.writerow(FIELDS)
        self._fh.flush()
        return self

    def write(self, record: SearchRecord) -> None:
        if self._writer is None:
            raise RuntimeError("RecordWriter is not open")
        self._writer.writerow(record.as_row())
        self._fh.flush()
        self.count += 1
        if self.echo and not self.quiet:
            self.write_screen(format_record(record))

    __call__ = write

    def write_screen(self, *args, sep: str = " ", end: str = "\n", flush: bool = True) -> None:
        """Write only to the screen, never to the file."""
        if self.quiet:
            return
        print(*args, sep=sep, end=end, flush=flush)

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None
            self._writer = None

    def __enter__(self) -> RecordWriter:
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def format_record(record: SearchRecord) -> str:
    """One colored screen line: (x, y, z) → n [tags] | x [..] y [..] z [..]."""
    seeds = "  ".join(
        f"{v}{Style.DIM}[{Style.RESET_ALL}{format_tags(t)}{Style.DIM}]{Style.RESET_ALL}"
        for v, t in ((record.x, record.tags_x), (record.y, record.tags_y), (record.z, record.tags_z))
    )
    return (
        f"({record.x}, {record.y}, {record.z}) → "
        f"{Fore.YELLOW}{Style.BRIGHT}{abbr_int_fast(record.n)}{Style.RESET_ALL} "
        f"[{format_tags(record.tags_n)}]  {Style.DIM}|{Style.RESET_ALL}  {seeds}"
    )


def read_records(path: str | os.PathLike) -> list[SearchRecord]:
    """Parse a file written by RecordWriter back into SearchRecords."""
    with open(path, encoding="utf-8", newline="") as fh:
        reader = csv.reader(fh)
        header = next(reader, None)
        if header is None or tuple(header) != FIELDS:
            raise ValueError(f"{path}: not a search record file (unexpected header {header!r})")
        return [SearchRecord.from_row(row) for row in reader if row]
