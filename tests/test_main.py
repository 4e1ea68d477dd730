"""Tests for the command line helpers."""

import main
from game.errors import FailureKind


# ── argument parsing ────────────────────────────────────────


def test_seconds_arg():
    assert main._seconds_arg(["2.5"], 0) == 2.5
    assert main._seconds_arg(["abc"], 0) is None
    assert main._seconds_arg([], 0) is None
    assert main._seconds_arg(["-1"], 0) is None
    assert main._seconds_arg(["0"], 0) is None
    assert main._seconds_arg(["inf"], 0) is None
    assert main._seconds_arg(["nan"], 0) is None


def test_int_arg_default():
    assert main._int_arg(["x"], 0, 7) == 7
    assert main._int_arg([], 1, None) is None
    assert main._int_arg(["4"], 0, 1) == 4


# ── dispatch ────────────────────────────────────────────────


def test_dispatch_buy_zero_seeds(engine):
    result = main.dispatch(engine, "buy-seeds", ["corn", "0"])
    assert not result.ok
    assert result.kind is FailureKind.INVALID_QUANTITY
    assert engine.state.coins == 5


def test_dispatch_buy_seeds(engine):
    result = main.dispatch(engine, "buy-seeds", ["potato", "2"])
    assert result.ok
    assert engine.state.coins == 3


# ── status ──────────────────────────────────────────────────


def test_status_hints_when_out_of_seeds(engine, capsys):
    for crop_id in engine.state.seeds:
        engine.state.seeds[crop_id] = 0
    main.print_status(engine)
    assert "NO SEEDS" in capsys.readouterr().out


def test_status_quiet_with_seeds(engine, capsys):
    engine.state.seeds["potato"] = 3
    main.print_status(engine)
    assert "NO SEEDS" not in capsys.readouterr().out
