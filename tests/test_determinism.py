"""Tests for the seeded RNG, seed derivation and rounding helpers."""

from game.sim.determinism import (
    Mulberry32,
    derive_seed,
    make_generator,
    next_float,
    round_half_up,
    sub_generator,
)


# ── Mulberry32 ──────────────────────────────────────────────


def test_same_seed_same_sequence():
    a = make_generator(12345)
    b = make_generator(12345)
    assert [a.next() for _ in range(200)] == [b.next() for _ in range(200)]


def test_different_seeds_diverge():
    a = make_generator(1)
    b = make_generator(2)
    assert [a.next() for _ in range(10)] != [b.next() for _ in range(10)]


def test_draws_in_unit_interval():
    gen = make_generator(0xDEADBEEF)
    for _ in range(1000):
        v = next_float(gen)
        assert 0.0 <= v < 1.0


def test_state_is_visible_and_resumable():
    gen = make_generator(99)
    for _ in range(5):
        gen.next()
    resumed = Mulberry32(state=gen.state)
    assert [gen.next() for _ in range(5)] == [resumed.next() for _ in range(5)]


def test_seed_reduced_to_32_bits():
    assert make_generator(2**32 + 7).state == 7
    assert make_generator(-1).state == 0xFFFFFFFF


# ── derive_seed ─────────────────────────────────────────────


def test_derive_seed_fnv1a_vectors():
    assert derive_seed("") == 0x811C9DC5
    assert derive_seed("a") == 0xE40C292C
    assert derive_seed("foobar") == 0xBF9CF968


def test_derive_seed_stable_per_day():
    assert derive_seed("2024-01-01") == derive_seed("2024-01-01")
    assert derive_seed("2024-01-01") != derive_seed("2024-01-02")
    assert 0 <= derive_seed("2024-01-01") < 2**32


# ── sub_generator ───────────────────────────────────────────


def test_sub_streams_are_independent():
    seed = derive_seed("2024-01-01")
    market = sub_generator(seed, 0xA5A5A5A5)
    weather = sub_generator(seed, 0xC0FFEE)
    assert market.state != weather.state
    assert [market.next() for _ in range(4)] != [weather.next() for _ in range(4)]


def test_sub_stream_reproducible():
    seed = derive_seed("2024-06-15")
    a = sub_generator(seed, 0xBEEF)
    b = sub_generator(seed, 0xBEEF)
    assert [a.next() for _ in range(3)] == [b.next() for _ in range(3)]


# ── round_half_up ───────────────────────────────────────────


def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2
    assert round_half_up(4940.000000000001) == 4940
    assert round_half_up(10.4) == 10


def test_new_year_seed_value():
    assert derive_seed("2024-01-01") == 1395918025
