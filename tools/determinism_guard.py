"""
Determinism guard (static check).

Every player must see the same day: weather, prices and quests are pure functions
of the calendar key. This scan keeps hidden nondeterminism out of the simulation
code.

What we flag:
- Wall-clock time: time.time(), time.monotonic(), datetime.now(), date.today(), pygame.time.get_ticks()
- Global RNG: random.random/randint/choice/shuffle/...
- Python's hash() (process-randomized by default)

Not scanned:
- game/sim/** (home of the seeded RNG and the time source)
- game/audio/** and game/engine.py (host side; may read the clock)
"""

from __future__ import annotations

import argparse
import ast
import json
from pathlib import Path
from typing import Iterable

PROJECT_ROOT = Path(__file__).resolve().parents[1]

DEFAULT_SCAN_PATHS = [
    PROJECT_ROOT / "game" / "systems",
    PROJECT_ROOT / "game" / "entities",
    PROJECT_ROOT / "game" / "state.py",
    PROJECT_ROOT / "game" / "content.py",
]

DEFAULT_EXCLUDE_DIRS = [
    PROJECT_ROOT / "game" / "sim",
    PROJECT_ROOT / "game" / "audio",
]

_RANDOM_ATTRS = {"random", "randint", "uniform", "choice", "choices", "shuffle", "seed", "randrange", "sample"}
_TIME_ATTRS = {"time", "monotonic", "perf_counter", "time_ns"}
_CLOCK_ATTRS = {"now", "utcnow", "today"}


def _is_under(path: Path, parent: Path) -> bool:
    try:
        path.resolve().relative_to(parent.resolve())
        return True
    except ValueError:
        return False


def _iter_py_files(roots: Iterable[Path], *, exclude_dirs: list[Path]) -> list[Path]:
    out: list[Path] = []
    for root in roots:
        if not root.exists():
            continue
        if root.is_file():
            if root.suffix.lower() == ".py":
                out.append(root)
            continue
        for p in root.rglob("*.py"):
            if any(_is_under(p, ex) for ex in exclude_dirs):
                continue
            out.append(p)
    return sorted(set(out))


def _attr_chain(node: ast.AST) -> list[str] | None:
    """["pygame", "time", "get_ticks"] for an attribute chain, ["name"] for a Name."""
    if isinstance(node, ast.Name):
        return [node.id]
    if isinstance(node, ast.Attribute):
        base = _attr_chain(node.value)
        if base is None:
            return None
        return [*base, node.attr]
    return None


def _display(file: Path) -> str:
    try:
        return str(file.resolve().relative_to(PROJECT_ROOT))
    except ValueError:
        return str(file)


def _violation(kind: str, file: Path, node: ast.AST, detail: str) -> dict:
    return {
        "kind": kind,
        "file": _display(file),
        "line": int(getattr(node, "lineno", 0) or 0),
        "col": int(getattr(node, "col_offset", 0) or 0),
        "detail": detail,
    }


def _classify(chain: list[str]) -> tuple[str, str] | None:
    if chain == ["pygame", "time", "get_ticks"]:
        return "wall_clock_time", "use game.sim.timebase.now_ms() instead of pygame.time.get_ticks()"
    if len(chain) == 2 and chain[0] == "time" and chain[1] in _TIME_ATTRS:
        return "wall_clock_time", f"use game.sim.timebase.now_ms() instead of time.{chain[1]}()"
    if chain[-1] in _CLOCK_ATTRS and ("datetime" in chain or "date" in chain):
        return "wall_clock_time", "calendar keys come from the host (game.sim.timebase.today_key)"
    if len(chain) == 2 and chain[0] == "random" and chain[1] in _RANDOM_ATTRS:
        return "global_rng", "draw from a seeded stream (game.sim.determinism.sub_generator)"
    if chain == ["hash"]:
        return "unstable_hash", "hash() is randomized per process; use game.sim.determinism.derive_seed"
    return None


def scan_source(src: str, file_path: Path) -> list[dict]:
    try:
        tree = ast.parse(src, filename=str(file_path))
    except SyntaxError as e:
        return [{
            "kind": "parse_error",
            "file": _display(file_path),
            "line": int(getattr(e, "lineno", 0) or 0),
            "col": int(getattr(e, "offset", 0) or 0),
            "detail": f"SyntaxError: {e}",
        }]

    findings: list[dict] = []
    for node in ast.walk(tree):
        if not isinstance(node, ast.Call):
            continue
        chain = _attr_chain(node.func)
        if not chain:
            continue
        hit = _classify(chain)
        if hit is not None:
            findings.append(_violation(hit[0], file_path, node, hit[1]))
    return findings


def scan_file(file_path: Path) -> list[dict]:
    src = file_path.read_text(encoding="utf-8", errors="replace")
    return scan_source(src, file_path)


def scan_paths(roots: Iterable[Path] = (), *, exclude_dirs: Iterable[Path] = ()) -> list[dict]:
    roots = list(roots) or list(DEFAULT_SCAN_PATHS)
    excludes = list(exclude_dirs) or list(DEFAULT_EXCLUDE_DIRS)
    findings: list[dict] = []
    for f in _iter_py_files(roots, exclude_dirs=excludes):
        findings.extend(scan_file(f))
    return findings


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Static determinism guard (simulation code)")
    ap.add_argument("--paths", nargs="*", default=[], help="Files or dirs to scan (default: simulation code).")
    ap.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
    ns = ap.parse_args(argv)

    findings = scan_paths([Path(p) for p in ns.paths])

    if ns.json:
        print(json.dumps({"findings": findings}, indent=2))
    elif not findings:
        print("[determinism_guard] PASS: no violations found")
    else:
        print(f"[determinism_guard] FAIL: {len(findings)} violation(s)")
        for v in findings:
            print(f"- {v['file']}:{v['line']}:{v['col']} [{v['kind']}] {v['detail']}")

    return 0 if not findings else 1


if __name__ == "__main__":
    raise SystemExit(main())
