import hashlib

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from beaconverify.beacon.message import build_message
from beaconverify.constants import MAX_ROUND
from beaconverify.scheme import DEFAULT_SCHEME, SHA256_SCHEME

rounds = st.integers(min_value=0, max_value=MAX_ROUND)
prevs = st.binary(max_size=128)


def test_default_layout_is_round_then_previous():
    prev = b"\xaa" * 4
    assert build_message(prev, 1) == bytes.fromhex("0000000000000001aaaaaaaa")
    assert build_message(prev, 1, DEFAULT_SCHEME) == (1).to_bytes(8, "big") + prev
    assert build_message("aabbccdd", 0x0102030405060708) == bytes.fromhex(
        "0102030405060708aabbccdd"
    )


def test_sha256_layout():
    prev = bytes(range(96))
    expected = hashlib.sha256(prev + (1234).to_bytes(8, "big")).digest()
    assert build_message(prev, 1234, SHA256_SCHEME) == expected
    assert len(build_message(prev, 1234, SHA256_SCHEME)) == 32


def test_genesis_round_with_empty_previous():
    a = build_message(b"", 0)
    b = build_message(b"", 0)
    assert a == b == b"\x00" * 8
    assert build_message(b"", 0, SHA256_SCHEME) == hashlib.sha256(b"\x00" * 8).digest()


def test_hex_previous_signature_matches_bytes():
    prev = bytes.fromhex("deadbeef")
    assert build_message("deadbeef", 7) == build_message(prev, 7)
    assert build_message("0xdeadbeef", 7) == build_message(prev, 7)


def test_max_round_is_accepted():
    assert build_message(b"", MAX_ROUND)[:8] == b"\xff" * 8


@pytest.mark.parametrize("bad", [-1, MAX_ROUND + 1])
def test_out_of_range_round_rejected(bad):
    with pytest.raises(ValueError):
        build_message(b"", bad)


@pytest.mark.parametrize("bad", ["1", 1.0, None, True])
def test_non_integer_round_rejected(bad):
    with pytest.raises(TypeError):
        build_message(b"", bad)


def test_bad_hex_previous_rejected():
    with pytest.raises(ValueError):
        build_message("zz", 1)


@settings(max_examples=200, deadline=None)
@given(prev=prevs, rnd=rounds)
def test_build_message_is_pure(prev, rnd):
    for scheme in (DEFAULT_SCHEME, SHA256_SCHEME):
        assert build_message(prev, rnd, scheme) == build_message(bytes(prev), rnd, scheme)


@settings(max_examples=200, deadline=None)
@given(prev=prevs, rnd=st.integers(min_value=1, max_value=MAX_ROUND))
def test_adjacent_rounds_differ(prev, rnd):
    for scheme in (DEFAULT_SCHEME, SHA256_SCHEME):
        assert build_message(prev, rnd, scheme) != build_message(prev, rnd - 1, scheme)
