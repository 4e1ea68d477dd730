"""Tests for the static determinism guard."""

from pathlib import Path

from tools.determinism_guard import main, scan_paths, scan_source


def _kinds(src):
    return [f["kind"] for f in scan_source(src, Path("sample.py"))]


def test_flags_global_random():
    assert _kinds("import random\nx = random.random()\n") == ["global_rng"]
    assert _kinds("import random\nrandom.shuffle(xs)\n") == ["global_rng"]


def test_flags_wall_clock():
    assert _kinds("import time\nt = time.time()\n") == ["wall_clock_time"]
    assert _kinds("from datetime import date\nd = date.today()\n") == ["wall_clock_time"]
    assert _kinds("import datetime\nd = datetime.datetime.now()\n") == ["wall_clock_time"]
    assert _kinds("import pygame\nt = pygame.time.get_ticks()\n") == ["wall_clock_time"]


def test_flags_builtin_hash():
    assert _kinds("seed = hash('2024-01-01')\n") == ["unstable_hash"]


def test_clean_code_passes():
    assert _kinds("from game.sim.timebase import now_ms\nt = now_ms()\n") == []


def test_syntax_error_reported():
    assert _kinds("def broken(:\n") == ["parse_error"]


def test_simulation_code_is_clean():
    assert scan_paths() == []


def test_cli_exit_codes(tmp_path, capsys):
    bad = tmp_path / "bad.py"
    bad.write_text("import random\nrandom.randint(1, 6)\n", encoding="utf-8")
    assert main(["--paths", str(bad)]) == 1
    assert "FAIL" in capsys.readouterr().out
    assert main([]) == 0
