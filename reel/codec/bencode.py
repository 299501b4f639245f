"""
  Bencode encoder and streaming parser

- byte-string: decimal length, ':', raw bytes
- integer:     'i', optional '-', digits, 'e'
- list:        'l', values..., 'e'
- dict:        'd', (byte-string key, value)..., 'e'

Parsed values are plain Python objects:

    - byte-string -> bytes
    - integer     -> int
    - list        -> list
    - dict        -> dict[bytes, value] (insertion order kept)

The parser pulls bytes from any iterator of ints, so it can read straight
off a channel.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from reel import Decoded
from reel.errors import UnexpectedChar, UnexpectedEof, UnexpectedValue

E = ord("e")
COLON = ord(":")
MINUS = ord("-")
ZERO = ord("0")
NINE = ord("9")


def byte_string(data: bytes | str) -> bytes:
    if isinstance(data, str):
        # lone surrogates from undecodable input go back out as their bytes
        data = data.encode("utf-8", "surrogateescape")
    return b"%d:" % len(data) + bytes(data)


def integer(n: int) -> bytes:
    return b"i%de" % n


def tagged(tag: str | bytes, payload: bytes) -> bytes:
    """A single-key dict used as a sum-type carrier."""
    return b"d" + byte_string(tag) + payload + b"e"


def encode(value: Decoded | str) -> bytes:
    if isinstance(value, (bytes, bytearray, str)):
        return byte_string(value)
    if isinstance(value, bool):
        raise TypeError("cannot bencode a bool")
    if isinstance(value, int):
        return integer(value)
    if isinstance(value, list):
        return b"l" + b"".join(encode(v) for v in value) + b"e"
    if isinstance(value, dict):
        keys = sorted(k.encode("utf-8") if isinstance(k, str) else k for k in value)
        items = {k.encode("utf-8") if isinstance(k, str) else k: v for k, v in value.items()}
        return b"d" + b"".join(byte_string(k) + encode(items[k]) for k in keys) + b"e"
    raise TypeError(f"cannot bencode {type(value).__name__}")


class _End:
    """Marks the 'e' that closes a list or dict."""


_END = _End()


class Parser:
    def __init__(self, stream: Iterable[int]):
        self.stream: Iterator[int] = iter(stream)

    def _next(self) -> int:
        b = next(self.stream, None)
        if b is None:
            raise UnexpectedEof()
        return b

    def parse(self) -> Decoded:
        value = self._parse_item()
        if value is _END:
            raise UnexpectedChar(E)
        return value

    def _parse_item(self):
        b = self._next()
        if b == ord("i"):
            return self._parse_integer()
        if b == ord("l"):
            return self._parse_list()
        if b == ord("d"):
            return self._parse_dict()
        if b == E:
            return _END
        return self._parse_byte_string(b)

    def _parse_byte_string(self, first: int) -> bytes:
        if first == ZERO:
            b = self._next()
            if b != COLON:
                raise UnexpectedChar(b)
            return b""
        if not ZERO < first <= NINE:
            raise UnexpectedChar(first)
        length = first - ZERO
        while True:
            b = self._next()
            if b == COLON:
                break
            if not ZERO <= b <= NINE:
                raise UnexpectedChar(b)
            length = length * 10 + (b - ZERO)
        return bytes(self._next() for _ in range(length))

    def _parse_integer(self) -> int:
        b = self._next()
        if b == ZERO:
            b = self._next()
            if b != E:
                raise UnexpectedChar(b)
            return 0
        sign = 1
        if b == MINUS:
            sign = -1
            b = self._next()
            # no "-0" and no empty magnitude
            if not ZERO < b <= NINE:
                raise UnexpectedChar(b)
        elif not ZERO < b <= NINE:
            raise UnexpectedChar(b)
        n = b - ZERO
        while True:
            b = self._next()
            if b == E:
                return sign * n
            if not ZERO <= b <= NINE:
                raise UnexpectedChar(b)
            n = n * 10 + (b - ZERO)

    def _parse_list(self) -> list:
        items = []
        while True:
            v = self._parse_item()
            if v is _END:
                return items
            items.append(v)

    def _parse_dict(self) -> dict:
        items: dict[bytes, Decoded] = {}
        while True:
            k = self._parse_item()
            if k is _END:
                return items
            if not isinstance(k, bytes):
                raise UnexpectedValue(k)
            if k in items:
                raise UnexpectedValue(k)
            items[k] = self.parse()


def parse(stream: Iterable[int]) -> Decoded:
    """Parse exactly one value from the front of ``stream``."""
    return Parser(stream).parse()


def decode(data: bytes) -> Decoded:
    return parse(data)
