# src/primeform/dataio.py
from __future__ import annotations

from importlib.resources import as_file
from importlib.resources import files as pkg_files
from pathlib import Path

from primeform.seeds import parse_seeds
from primeform.utility import UserInputError
from primeform.workspace import workspace_dir


def _workspace() -> Path | None:
    try:
        return workspace_dir()
    except Exception:
        return None


def data_path(rel: str) -> Path:
    """
    Resolve a data file path with override semantics:

      1) <Workspace>/data/<rel>  (if present)
      2) Packaged resource: primeform/data/<rel>

    Returns a filesystem Path you can open (it may not exist).
    """
    rel = rel.lstrip("/\\")
    ws = _workspace()
    if ws:
        p = ws / "data" / rel
        if p.exists():
            return p

    ref = pkg_files("primeform") / "data" / rel
    # materialize to a real path (needed for zip/egg resources)
    with as_file(ref) as real:
        return Path(real)


def load_seeds(name: str | Path) -> tuple[int, ...]:
    """
    Read a seed file. `name` is tried as a path first (absolute, or relative
    to the current directory), then as a data file name (see data_path).
    """
    p = Path(name).expanduser()
    if not p.is_file():
        p = data_path(str(name))
    try:
        text = p.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise UserInputError(f"Seed file not found: {name}") from None
    except UnicodeDecodeError:
        raise UserInputError(f"Seed file is not UTF-8 text: {name}") from None
    return parse_seeds(text, source=p.name)
