"""
Unit tests for lambda_gateway.directory.ids.
"""

import re

import pytest

from lambda_gateway.directory.ids import (
    RandomIdStrategy,
    SequentialIdStrategy,
    UUID4IdStrategy,
    _base36_encode,
    get_id_strategy,
)

BASE36_PATTERN = re.compile(r"^[0-9a-z]+$")


def test_base36_edges():
    assert _base36_encode(0) == "0"
    assert _base36_encode(35) == "z"
    assert _base36_encode(36) == "10"


def test_base36_rejects_negative():
    with pytest.raises(ValueError):
        _base36_encode(-1)


def test_random_strategy_charset_length_and_diversity():
    r = RandomIdStrategy()
    samples = [r.generate() for _ in range(500)]
    # 2^64 - 1 is 13 base36 digits
    assert all(BASE36_PATTERN.match(s) and len(s) <= 13 for s in samples)
    assert len(set(samples)) == len(samples)


def test_uuid4_strategy_is_hex32():
    value = UUID4IdStrategy().generate()
    assert re.match(r"^[0-9a-f]{32}$", value)


def test_sequential_strategy_counts_up_with_prefix():
    s = SequentialIdStrategy(start=35, prefix="u")
    assert [s.generate() for _ in range(3)] == ["uz", "u10", "u11"]


def test_sequential_strategies_have_independent_counters():
    a, b = SequentialIdStrategy(), SequentialIdStrategy()
    a.generate()
    a.generate()
    assert b.generate() == "1"


@pytest.mark.parametrize(
    "name, cls",
    [
        ("random", RandomIdStrategy),
        ("UUID4", UUID4IdStrategy),
        ("sequential", SequentialIdStrategy),
        ("seq", RandomIdStrategy),
        (None, RandomIdStrategy),
        ("nosuch", RandomIdStrategy),
    ],
)
def test_get_id_strategy(name, cls):
    assert isinstance(get_id_strategy(name), cls)


def test_get_id_strategy_passes_prefix_to_sequential():
    assert get_id_strategy("sequential", prefix="ap").generate() == "ap1"
