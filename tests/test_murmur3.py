import pytest

from kiwistore.murmur3 import murmur3_32

FOX = "The quick brown fox jumps over the lazy dog."
DATE = "19 Jan 2038 at 3:14:07 AM"


@pytest.mark.parametrize(
    "data, seed, expected",
    [
        ("", 0, 0),
        ("hello", 0, 0x248BFA47),
        ("hello, world", 0, 0x149BBB7F),
        (DATE, 0, 0xE31E8A70),
        (FOX, 0, 0xD5C48BFC),
        ("", 0x01, 0x514E28B7),
        ("hello", 0x01, 0xBB4ABCAD),
        ("hello, world", 0x01, 0x6F5CB2E9),
        (DATE, 0x01, 0xF50E1F30),
        (FOX, 0x01, 0x846F6A36),
        ("", 0x2A, 0x087FCD5C),
        ("hello", 0x2A, 0xE2DBD2E1),
        ("hello, world", 0x2A, 0x7EC7C6C2),
        (DATE, 0x2A, 0x58F745F6),
        (FOX, 0x2A, 0xC02D1434),
    ],
)
def test_basic_cases(data, seed, expected):
    assert murmur3_32(data, seed) == expected


def test_seed_behavior():
    assert murmur3_32("test", 1) != murmur3_32("test", 2)
    assert murmur3_32("data", 666) == murmur3_32("data", 666)


def test_unicode():
    assert murmur3_32("€", 0) == 0x5B43FCA5


def test_bytes_and_text_hash_alike():
    assert murmur3_32(b"hello", 0) == 0x248BFA47
    assert murmur3_32("€".encode("utf-8"), 0) == murmur3_32("€", 0)


def test_default_seed_is_zero():
    assert murmur3_32("hello") == 0x248BFA47


def test_result_fits_in_32_bits():
    for text in ("a", "ab", "abc", "abcd", "abcde", FOX):
        assert 0 <= murmur3_32(text, 0xFFFFFFFF) <= 0xFFFFFFFF