import math

import pytest

from dominion.rngs import (
    A256,
    CHECK,
    MODULUS,
    MULTIPLIER,
    DEFAULT,
    RandomStreams,
    find_value,
)


def test_self_test_passes():
    assert RandomStreams().self_test() is True


def test_ten_thousand_draws_from_one_reach_check():
    rng = RandomStreams()
    rng.select_stream(0)
    rng.put_seed(1)
    for _ in range(10000):
        rng.random()
    assert rng.get_seed() == CHECK


def test_first_draw_from_one_is_multiplier():
    rng = RandomStreams()
    rng.put_seed(1)
    value = rng.random()
    assert rng.get_seed() == MULTIPLIER
    assert value == MULTIPLIER / MODULUS


def test_plant_seeds_sets_stream_one_to_jump_multiplier():
    rng = RandomStreams()
    rng.select_stream(1)
    rng.plant_seeds(1)
    assert rng.get_seed() == A256
    assert rng.stream == 1


def test_default_state_of_stream_zero():
    assert RandomStreams().get_seed() == DEFAULT


def test_values_are_in_open_unit_interval():
    rng = RandomStreams()
    rng.put_seed(42)
    values = [rng.random() for _ in range(1000)]
    assert all(0.0 < v < 1.0 for v in values)


def test_same_seed_gives_same_sequence():
    a, b = RandomStreams(), RandomStreams()
    for rng in (a, b):
        rng.select_stream(2)
        rng.put_seed(3)
    assert [a.random() for _ in range(50)] == [b.random() for _ in range(50)]


def test_streams_are_independent():
    rng = RandomStreams()
    rng.select_stream(1)
    rng.put_seed(5)
    first = rng.random()
    rng.select_stream(2)
    rng.put_seed(5)
    for _ in range(10):
        rng.random()
    rng.select_stream(1)
    rng.put_seed(5)
    assert rng.random() == first


def test_select_stream_wraps_modulo_stream_count():
    rng = RandomStreams()
    rng.select_stream(257)
    assert rng.stream == 1
    rng.select_stream(-1)
    assert rng.stream == 255


def test_put_seed_reduces_large_values():
    rng = RandomStreams()
    rng.put_seed(MODULUS + 7)
    assert rng.get_seed() == 7


def test_negative_seed_uses_clock():
    rng = RandomStreams()
    rng.put_seed(-1)
    assert 0 < rng.get_seed() < MODULUS


def test_zero_seed_is_read_from_input(monkeypatch, capsys):
    replies = iter(["abc", "0", "12345"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(replies))
    rng = RandomStreams()
    rng.put_seed(0)
    assert rng.get_seed() == 12345
    assert capsys.readouterr().out.count("Input out of range") == 2


def test_find_value_counts_draws():
    rng = RandomStreams()
    rng.select_stream(1)
    rng.put_seed(7)
    values = [math.floor(rng.random() * 1_000_000_000) for _ in range(3)]
    assert find_value(7, values[0]) == 1
    assert find_value(7, values[2]) == values.index(values[2]) + 1


def test_find_value_rejects_unreachable_target():
    with pytest.raises(ValueError):
        find_value(1, -1)
    with pytest.raises(ValueError):
        find_value(1, 1_000_000_000)