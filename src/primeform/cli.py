# src/primeform/cli.py

"""
Quadratic-form prime search

Description:
    Evaluates n = 5x² + 7xy + 11y² + 23xz + 47yz + 83z² + 107 for every
    ordered triple (x, y, z) of a list of seed primes. Whenever n is a
    (probable) prime, n and its seeds are tagged Germain / Safe / Prime and
    one CSV record is written.

    Given an integer instead, prints that integer's tags. The search options
    (--output, --seeds, --range, --echo) are rejected in that mode.

usage: see primeform -h
"""

from __future__ import annotations

import argparse
import faulthandler
import sys
import textwrap
import traceback
from importlib.resources import files as pkg_files

from colorama import Fore, Style
from colorama import init as colorama_init

from primeform import __version__ as _ver
from primeform import config as CONFIG
from primeform.classify import explain
from primeform.dataio import load_seeds
from primeform.fmt import abbr_int_fast, format_duration, format_tags
from primeform.form import DEFAULT_FORM
from primeform.output_manager import RecordWriter, resolve_output_path
from primeform.primality import DEFAULT_ROUNDS, PrimalityEngine
from primeform.progress import Progress
from primeform.records import Tags
from primeform.runtime import APPLY, CFG, ensure_runtime_deps
from primeform.runtime import reset as _rt_reset
from primeform.search import search
from primeform.seeds import DEFAULT_SEEDS, seeds_in_range
from primeform.utility import (
    UserInputError,
    flatten_dotted,
    parse_int,
    typename,
    validate_output_setting,
)
from primeform.workspace import ensure_workspace_seeded, seed_workspace, workspace_dir

DEFAULT_OUTPUT = "universal_primes_index.csv"
COMMANDS = ("init", "where", "profiles")


def _install_loud_error_handlers(debug: bool) -> None:
    if not debug:
        return
    try:
        faulthandler.enable()
    except (ValueError, OSError):
        pass  # stderr has no real file descriptor (e.g. captured)

    def _excepthook(exc_type, exc, tb):
        sys.stderr.write("\n[UNCAUGHT EXCEPTION]\n")
        traceback.print_exception(exc_type, exc, tb, file=sys.stderr)
        sys.stderr.flush()
    sys.excepthook = _excepthook


def _print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    if not msg.startswith("Error:"):
        msg = f"{Fore.RED}Error:{Style.RESET_ALL} {msg}"
    print(msg, file=sys.stderr)


def _debug(msg: str) -> None:
    print(f"[debug] {msg}", file=sys.stderr)


def _resolve_inputs(items: list[str]) -> tuple[str | None, int | None]:
    """Return (profile_or_command, number) from the positionals.

    Rules:
      - one item: integer -> number; else -> profile/command
      - two items: the first non-integer is the profile, the first integer the number
    """
    profile: str | None = None
    number: int | None = None
    for item in items[:2]:
        n = parse_int(item)
        if n is not None and number is None:
            number = n
        elif n is None and profile is None:
            profile = item
    return profile, number


# ---- argparse ----
def _build_parser() -> argparse.ArgumentParser:

    epilog = textwrap.dedent("""\
    commands:
      init
          Create workspace folders and copy packaged profiles and seed files if missing.

      init overwrite
          Replace the workspace copies with the packaged ones.

      profiles
          List available profiles.

      where
          Show the workspace and package paths.
    """)

    p = argparse.ArgumentParser(
        prog="primeform",
        description="Quadratic-form prime search — Germain, Safe and Prime tags",
        usage=(
            "primeform [profile] [--output OUTPUT] [--seeds FILE | --range LO HI] [--echo] [--quiet] [--debug]\n"
            "       primeform <integer> [--debug]\n"
            "       primeform init | where | profiles\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("items", nargs="*", metavar="[profile | integer | command]",
                   help="profile to run, an integer to tag, or a command")
    p.add_argument("--output", default=None, help="CSV file to write (relative paths are workspace-relative)")
    src = p.add_mutually_exclusive_group()
    src.add_argument("--seeds", default=None, metavar="FILE", help="Read seed primes from FILE")
    src.add_argument("--range", nargs=2, type=int, default=None, metavar=("LO", "HI"),
                     help="Use every prime LO <= p < HI as seeds")
    p.add_argument("--echo", action="store_true", help="Print every accepted record")
    p.add_argument("--quiet", action="store_true", help="Suppress progress, echo and summary output")
    p.add_argument("--debug", action="store_true", help="Show settings, timings and tracebacks")
    p.add_argument("--version", action="version", version=f"%(prog)s {_ver}")
    return p


def main(argv=None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    try:
        return _main_impl(argv)
    except UserInputError as e:
        _print_user_error(str(e))
        return 2
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        if "--debug" in (sys.argv if argv is None else argv):
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


# ---- commands ----

def _run_command(cmd: str, items: list[str]) -> int:
    if cmd == "init":
        if len(items) > 1 and items[1] == "overwrite":
            ws, copied = seed_workspace(overwrite=True)
            print(f"Workspace ready at: {ws} (overwrote existing files)")
        else:
            ws, _, copied = ensure_workspace_seeded()
            print(f"Workspace ready at: {ws}")
        print(f"Copied -> profiles: {copied.get('profiles', 0)}, data: {copied.get('data', 0)}")
        return 0

    if cmd == "where":
        print(f"Workspace: {workspace_dir()}")
        print(f"Package:   {pkg_files('primeform')}")
        return 0

    # profiles
    active = CONFIG.read_current_profile()
    for name, desc in CONFIG.list_profiles_with_descriptions():
        mark = f"{Fore.GREEN}*{Style.RESET_ALL}" if name == active else " "
        print(f"{mark} {Fore.CYAN}{name:<16}{Style.RESET_ALL} {desc}")
    return 0


def _tag_number(n: int, debug: bool) -> int:
    engine = PrimalityEngine(DEFAULT_ROUNDS)
    outcomes = explain(n, engine, trace=debug)

    print(f"{Fore.YELLOW}{Style.BRIGHT}n = {abbr_int_fast(n)}{Style.RESET_ALL}")
    for o in outcomes:
        mark = f"{Fore.GREEN}✓{Style.RESET_ALL}" if o.ok else f"{Style.DIM}✗{Style.RESET_ALL}"
        ref = f"  {Style.DIM}({o.oeis}){Style.RESET_ALL}" if o.oeis else ""
        note = o.detail or o.description
        detail = f"  {note}" if note else ""
        print(f"  {o.label:<8} {mark}{detail}{ref}")
    tags = Tags.of(o.label for o in outcomes if o.ok)
    print(f"Tags: {format_tags(tags)}")
    return 0


def _select_profile_name(explicit: str | None) -> str:
    """explicit → last used (from workspace) → 'default'."""
    if explicit:
        return explicit
    last = CONFIG.read_current_profile()
    if last and CONFIG.has_profile(last):
        return last
    return "default"


def _resolve_seeds(args) -> tuple[tuple[int, ...], str]:
    """CLI --seeds/--range override the profile's [SEEDS] section."""
    if args.range is not None:
        lo, hi = args.range
        return seeds_in_range(lo, hi), f"primes in [{lo}, {hi})"
    if args.seeds:
        return load_seeds(args.seeds), args.seeds

    rng = CFG("SEEDS.RANGE", None)
    if rng:
        lo, hi = rng
        return seeds_in_range(lo, hi), f"primes in [{lo}, {hi})"
    source = CFG("SEEDS.SOURCE", None)
    if source:
        return load_seeds(source), str(source)
    return DEFAULT_SEEDS, "built-in list"


def _resolve_output(args) -> str:
    target = args.output if args.output else CFG("OUTPUT.OUTPUT_FILE", DEFAULT_OUTPUT)
    try:
        validate_output_setting(target)
    except ValueError as e:
        raise UserInputError(f"output: {e}") from None
    return resolve_output_path(target, workspace_dir())


def _debug_settings(selected) -> None:
    _debug(f"active profile: {selected.name}")
    if selected._source:
        _debug(f"profile file: {selected._source}")
    flat = flatten_dotted(selected.as_dict())
    for k in sorted(flat, key=str.lower):
        v = flat[k]
        print(f"        {k:.<40} {v!r} ({typename(v)})", file=sys.stderr)


# ---- main ----
def _main_impl(argv=None) -> int:

    colorama_init(autoreset=True)

    parser = _build_parser()
    args = parser.parse_args(argv)
    rt = _rt_reset()
    rt.debug = bool(args.debug)

    _install_loud_error_handlers(args.debug)

    if not ensure_runtime_deps(strict=True):
        return 1

    # first-run workspace seed, silently
    ensure_workspace_seeded()

    profile, number = _resolve_inputs(args.items)

    if profile in COMMANDS:
        return _run_command(profile, args.items)

    if number is not None:
        stray = [opt for opt, val in (("--output", args.output), ("--seeds", args.seeds),
                                      ("--range", args.range), ("--echo", args.echo)) if val]
        if stray:
            raise UserInputError(f"{', '.join(stray)} only apply to a search run, not to tagging {number}")
        return _tag_number(number, rt.debug)

    if profile and not CONFIG.has_profile(profile):
        print(f"Unknown profile: '{profile}'", file=sys.stderr)
        names = [nm for nm, _ in CONFIG.list_profiles_with_descriptions()]
        print("Available profiles:", ", ".join(names), file=sys.stderr)
        return 2

    profile_name = _select_profile_name(profile)
    if not CONFIG.has_profile(profile_name):
        raise UserInputError(f"Profile '{profile_name}' not found in {workspace_dir() / 'profiles'}")
    selected = CONFIG.load_settings(profile_name)
    APPLY(selected)
    if profile:
        CONFIG.write_current_profile(profile)

    debug = rt.debug
    if debug:
        _debug_settings(selected)

    seeds, seed_source = _resolve_seeds(args)
    out_path = _resolve_output(args)
    echo = bool(args.echo or CFG("OUTPUT.ECHO", False))
    show_progress = bool(CFG("BEHAVIOUR.SHOW_PROGRESS", True)) and not (args.quiet or echo or debug)

    total = len(seeds) ** 3
    if debug:
        _debug(f"form: n = {DEFAULT_FORM}")
        _debug(f"seeds: {len(seeds)} from {seed_source} → {total} triples")
        _debug(f"rounds: {DEFAULT_ROUNDS} (error bound ≤ 4^-{DEFAULT_ROUNDS})")
        _debug(f"output: {out_path}")

    engine = PrimalityEngine(DEFAULT_ROUNDS)
    progress = Progress(total, enabled=show_progress)
    with RecordWriter(out_path, echo=echo, quiet=args.quiet) as out:
        summary = search(seeds, out.write, engine=engine, progress=progress)

    if not args.quiet:
        print(
            f"Evaluated {summary.evaluated} triples over {len(seeds)} seeds, "
            f"{Fore.GREEN}{summary.accepted}{Style.RESET_ALL} prime candidates "
            f"in {format_duration(summary.elapsed)}."
        )
        print(f"Data has been saved to {out_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
