import sys
from unittest.mock import patch

import pytest

from isotown.prng import Prng


def test_rc4_keystream_key_vector():
    assert Prng(b"Key").next_bytes(10) == bytes.fromhex("eb9f7781b734ca72a719")


def test_rc4_keystream_wiki_vector():
    assert Prng(b"Wiki").next_bytes(6) == bytes.fromhex("6044db6d41b7")


def test_octets_match_bytes():
    a, b = Prng(b"Key"), Prng(b"Key")
    assert [a.next_octet() for _ in range(20)] == list(b.next_bytes(20))


def test_uint_is_big_endian_octets():
    first_four = Prng(b"Key").next_bytes(4)
    assert Prng(b"Key").next_uint() == int.from_bytes(first_four, "big")


def test_ulong_is_big_endian_octets():
    first_eight = Prng(b"Wiki").next_bytes(8)
    assert Prng(b"Wiki").next_ulong() == int.from_bytes(first_eight, "big")


def test_long_and_int_clear_top_bit():
    a, b = Prng(b"abc"), Prng(b"abc")
    for _ in range(50):
        assert a.next_long() == b.next_ulong() & (2**63 - 1)
    c, d = Prng(b"xyz"), Prng(b"xyz")
    for _ in range(50):
        assert c.next_int() == d.next_uint() & (2**31 - 1)


def test_ranges():
    gen = Prng(b"range")
    for _ in range(200):
        assert 0 <= gen.next_int() < 2**31
        assert 0 <= gen.next_uint() < 2**32
        assert 0 <= gen.next_long() < 2**63
        assert 0.0 <= gen.next_double() < 1.0


def test_same_seed_same_sequence():
    a, b = Prng(b"seed"), Prng(b"seed")
    assert [a.next_double() for _ in range(10)] == [b.next_double() for _ in range(10)]


def test_reseeding_restarts_sequence():
    gen = Prng(b"Key")
    first = gen.next_bytes(16)
    gen.seed_bytes(b"Key")
    assert gen.next_bytes(16) == first


def test_long_key_uses_only_first_256_octets():
    key = bytes(range(256))
    assert Prng(key).next_bytes(32) == Prng(key + b"ignored").next_bytes(32)


def test_empty_seed_rejected():
    with pytest.raises(ValueError):
        Prng(b"")


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        Prng(b"k").next_bytes(-1)


def test_seed_time_uses_clock_then_increments():
    gen = Prng()
    with patch("time.time", return_value=1000):
        gen.seed_time()
        first = gen.next_bytes(8)
        gen.seed_time()
        second = gen.next_bytes(8)
    expected_first = Prng((1000).to_bytes(8, sys.byteorder, signed=True)).next_bytes(8)
    expected_second = Prng((1001).to_bytes(8, sys.byteorder, signed=True)).next_bytes(8)
    assert first == expected_first
    assert second == expected_second


def test_unseeded_generator_seeds_itself():
    with patch("time.time", return_value=77):
        value = Prng().next_octet()
    assert value == Prng((77).to_bytes(8, sys.byteorder, signed=True)).next_octet()


def test_normal_distribution_moments():
    gen = Prng(b"normal")
    samples = [gen.next_normal() for _ in range(20000)]
    mean = sum(samples) / len(samples)
    var = sum((s - mean) ** 2 for s in samples) / len(samples)
    assert abs(mean) < 0.05
    assert abs(var - 1.0) < 0.05


def test_normal_is_deterministic():
    a, b = Prng(b"n"), Prng(b"n")
    assert [a.next_normal() for _ in range(7)] == [b.next_normal() for _ in range(7)]