import pytest
from hypothesis import given, strategies as st

from reel.codec.bencode import byte_string, decode, encode, integer, parse, tagged
from reel.errors import UnexpectedChar, UnexpectedEof, UnexpectedValue


@pytest.mark.parametrize(
    "source,expected",
    [
        (b"i18e", 18),
        (b"i-18e", -18),
        (b"i0e", 0),
        (b"5:hello", b"hello"),
        (b"0:", b""),
        (b"li42elee", [42, []]),
        (b"d1:1i2e1:2i3e1:3i5ee", {b"1": 2, b"2": 3, b"3": 5}),
        (b"d3:str5:helloe", {b"str": b"hello"}),
        (b"l0:d2:ifl0:0:0:eee", [b"", {b"if": [b"", b"", b""]}]),
    ]
)
def test_parse(source, expected):
    assert decode(source) == expected


@pytest.mark.parametrize(
    "source,error",
    [
        (b"", UnexpectedEof),
        (b"i12", UnexpectedEof),
        (b"5:hel", UnexpectedEof),
        (b"l1:a", UnexpectedEof),
        (b"e", UnexpectedChar),
        (b"i03e", UnexpectedChar),
        (b"i-0e", UnexpectedChar),
        (b"i-e", UnexpectedChar),
        (b"ie", UnexpectedChar),
        (b"03:abc", UnexpectedChar),
        (b"x", UnexpectedChar),
        (b"3x", UnexpectedChar),
        (b"di1e1:ae", UnexpectedValue),
        (b"d1:ai1e1:ai2ee", UnexpectedValue),
        (b"d1:ae", UnexpectedChar),
    ]
)
def test_parse_errors(source, error):
    with pytest.raises(error):
        decode(source)


def test_parse_reads_one_value_from_a_stream():
    stream = iter(b"1:a1:b")
    assert parse(stream) == b"a"
    assert parse(stream) == b"b"


def test_unexpected_char_reports_the_byte():
    with pytest.raises(UnexpectedChar) as info:
        decode(b"i1xe")
    assert info.value.byte == ord("x")


def test_byte_string_counts_bytes_not_characters():
    assert byte_string("hello") == b"5:hello"
    assert byte_string(b"") == b"0:"
    assert byte_string("é") == b"2:\xc3\xa9"
    assert byte_string("\udcff") == b"1:\xff"


def test_encode_helpers():
    assert integer(-7) == b"i-7e"
    assert tagged("str", byte_string("x")) == b"d3:str1:xe"
    assert encode([1, b"a", {"b": 2, "a": []}]) == b"li1e1:ad1:ale1:bi2eee"


@given(st.binary(max_size=64))
def test_byte_string_is_length_prefix(data):
    assert byte_string(data) == str(len(data)).encode("ascii") + b":" + data
    assert decode(byte_string(data)) == data


@given(st.integers())
def test_integer_parses_back(n):
    assert decode(integer(n)) == n
