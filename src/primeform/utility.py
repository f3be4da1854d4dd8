# -----------------------------------------------------------------------------
#  Utility functions
# -----------------------------------------------------------------------------

from __future__ import annotations

import os
import re
import shutil

_INT_RE = re.compile(r"^[+-]?\d+(?:_\d+)*$")


class UserInputError(Exception):
    pass


def parse_int(s: str) -> int | None:
    """
    Parse a plain decimal integer (optional sign, '_' digit separators).
    Returns None if s is not an integer literal; expressions are not evaluated.
    """
    s = (s or "").strip()
    if not _INT_RE.match(s):
        return None
    return int(s)


def get_terminal_width(default: int = 80) -> int:
    try:
        return shutil.get_terminal_size((default, 24)).columns
    except Exception:
        return default


def validate_output_setting(output_file: str | None) -> str | None:
    """
    Validate output setting.
    - None / "" => ok (use the profile's OUTPUT_FILE)
    - path/to/file.csv => must not be a directory, a forbidden base name or extension
    Returns the output_file unchanged, or raises ValueError.
    """
    FORBIDDEN_FILENAMES = {
        ".gitignore",
        "LICENSE",
        "pyproject.toml",
        "seeds.txt",
        # Windows reserved device names (case-insensitive on Windows)
        "con", "prn", "aux", "nul",
        "com1", "com2", "com3", "com4", "com5", "com6", "com7", "com8", "com9",
        "lpt1", "lpt2", "lpt3", "lpt4", "lpt5", "lpt6", "lpt7", "lpt8", "lpt9",
    }

    FORBIDDEN_EXTENSIONS = {".py", ".md", ".toml"}

    if not output_file:
        return output_file

    if output_file in (".", "./") or output_file.endswith(("/", "\\")):
        raise ValueError(f"Output must be a file, not a directory: {output_file}")

    basename = os.path.basename(output_file)
    name_no_ext, ext = os.path.splitext(basename)
    ext = ext.lower()

    # On Windows, device names are forbidden regardless of extension
    if basename.lower() in FORBIDDEN_FILENAMES or name_no_ext.lower() in FORBIDDEN_FILENAMES:
        raise ValueError(f"Forbidden output filename: {basename}")

    if ext in FORBIDDEN_EXTENSIONS:
        raise ValueError(f"Forbidden output file extension: {ext}")

    return output_file


def typename(v: object) -> str:
    return type(v).__name__


def flatten_dotted(d: dict, prefix: str = "") -> dict[str, object]:
    out: dict[str, object] = {}
    for k, v in (d or {}).items():
        key = f"{prefix}.{k}" if prefix else str(k)
        if isinstance(v, dict):
            out.update(flatten_dotted(v, key))
        else:
            out[key] = v
    return out


def dec_digits(n: int) -> int:
    """Exact decimal digit count of |n| without str()."""
    n = abs(n)
    if n == 0:
        return 1
    # floor(log10(n)) ~= floor(bitlen*log10(2)), corrected by at most a step or two
    est = (n.bit_length() * 30103) // 100000
    p10 = 10 ** est
    while n < p10:
        est -= 1
        p10 //= 10
    while n >= p10 * 10:
        est += 1
        p10 *= 10
    return est + 1
