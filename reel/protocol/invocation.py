"""Marshalling protocol between the evaluator and a running machine.

Arguments go over the wire as one bencoded list. The result comes back as
exactly one bencoded value. Decoding of that value's contents is lenient
(anything unrecognized becomes Nil) while a malformed outermost value is a
hard error carrying the raw bytes.
"""

from __future__ import annotations

import logging
import threading
from typing import Sequence

from reel import Decoded, Value
from reel.codec import bencode
from reel.errors import DecodeError, MachineError
from reel.machine.contract import Executable
from reel.protocol.channel import Channel
from reel.types.nil import Nil, NilType
from reel.types.value import Call, If, Lambda, Macro, Str
from reel.util import pretty

logger = logging.getLogger(__name__)


def encode_value(node: Value) -> bytes:
    match node:
        case Str(text):
            return bencode.byte_string(text)
        case If(p, t, f):
            return bencode.tagged(
                "if", b"l" + encode_value(p) + encode_value(t) + encode_value(f) + b"e"
            )
        case Lambda(code):
            # the backend's own serialization; opaque here
            return bytes(code)
        case Call(callee, args):
            body = b"".join(encode_value(a) for a in args)
            return bencode.tagged("call", b"l" + encode_value(callee) + body + b"e")
        case Macro(name):
            return bencode.tagged("macro", bencode.byte_string(name))
        case NilType():
            return bencode.byte_string(b"")
    raise TypeError(f"cannot encode {node!r}")


def encode_arguments(args: Sequence[Value]) -> bytes:
    return b"l" + b"".join(encode_value(a) for a in args) + b"e"


def _text_or_nil(raw: bytes) -> Value:
    try:
        return Str(raw.decode("utf-8"))
    except UnicodeDecodeError:
        return Nil


def decode_value(decoded: Decoded) -> Value:
    """Total: any shape that is not a string degrades to Nil."""
    if isinstance(decoded, bytes):
        return _text_or_nil(decoded)
    if isinstance(decoded, dict) and len(decoded) == 1:
        (tag, payload), = decoded.items()
        if tag == b"str" and isinstance(payload, bytes):
            return _text_or_nil(payload)
    return Nil


def invoke(code: Executable, args: Sequence[Value]) -> Value:
    """
    Run ``code`` once on a fresh worker thread and decode its result.

    Blocks until the machine closes its output channel; there is no timeout.
    """
    output, input_ = Channel(), Channel()
    input_.feed(encode_arguments(args))
    input_.close()

    failure: list[Exception] = []

    def worker():
        try:
            code.execute(output, input_)
        except Exception as ex:  # reported on the caller's thread
            failure.append(ex)
        finally:
            output.close()

    thread = threading.Thread(target=worker, name="reel-machine", daemon=True)
    thread.start()
    raw = bytes(output)
    thread.join()
    logger.debug("machine produced %d bytes", len(raw))

    if failure:
        err = failure[0]
        if not isinstance(err, MachineError):
            logger.debug("machine raised %r", err)
        detail = str(err) or type(err).__name__
        raise MachineError(f"failed to start machine: {detail}") from err
    try:
        result = bencode.decode(raw)
    except (DecodeError, RecursionError) as err:
        raise MachineError(f'broken return value "{pretty(raw)}": {err}') from err
    return decode_value(result)
