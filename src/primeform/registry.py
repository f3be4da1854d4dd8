# src/primeform/registry.py
from __future__ import annotations

import inspect
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache
from importlib import import_module
from importlib.resources import as_file
from importlib.resources import files as pkg_files
from pathlib import Path

# --------------------- Discovery → Index (immutable) ----------------------


@dataclass
class Index:
    funcs: dict[str, Callable]                 # label -> predicate, in output order
    descriptions: dict[str, str]               # label -> short description
    oeis: dict[str, str | None]                # label -> A-code or None

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(self.funcs)


def _is_classifier(obj) -> bool:
    return callable(obj) and getattr(obj, "__is_classifier__", False)


def _collect_from_module(mod) -> list[Callable]:
    return [o for _, o in inspect.getmembers(mod) if _is_classifier(o)]


# ---------- Decorator (only tags the function; no side effects) ----------


def classifier(*, label: str, description: str = "", oeis: str | None = None, order: int = 0):
    """
    Mark a tag predicate. The function is called as fn(n, engine) and returns
    (ok, detail). `order` fixes the label's position inside a tag set.
    """
    def deco(fn: Callable):
        fn.__is_classifier__ = True
        fn.label = label
        fn.description = description
        fn.oeis = oeis
        fn.order = int(order)
        return fn
    return deco


@lru_cache(maxsize=1)
def discover() -> Index:
    """Collect tag predicates from the packaged primeform.classifiers modules."""
    found: list[Callable] = []

    pkg_dir = pkg_files("primeform") / "classifiers"
    with as_file(pkg_dir) as real:
        for file in sorted(Path(real).glob("*.py")):
            if file.name == "__init__.py":
                continue
            mod = import_module(f"primeform.classifiers.{file.stem}")
            found.extend(_collect_from_module(mod))

    found.sort(key=lambda fn: (fn.order, fn.label))

    funcs: OrderedDict[str, Callable] = OrderedDict()
    desc: dict[str, str] = {}
    refs: dict[str, str | None] = {}
    for fn in found:
        label = fn.label
        if label in funcs:                # first definition wins
            continue
        funcs[label] = fn
        desc[label] = fn.description
        refs[label] = fn.oeis

    return Index(funcs=funcs, descriptions=desc, oeis=refs)
