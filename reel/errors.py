from __future__ import annotations

from reel.util import escape


class ReelError(Exception):
    """ Base class for all reel errors"""
    pass


class ReelSyntaxError(ReelError):
    """ Raised when the reader meets a character it cannot dispatch on"""

    def __init__(self, char: str):
        super().__init__(f"unexpected `{escape(char)}`")
        self.char = char


class IncompleteInput(ReelError):
    """ Raised when the input ends in the middle of an expression"""

    def __init__(self, message: str = "unexpectedly terminated"):
        super().__init__(message)


class CompileFailure(ReelError):
    """ Raised when a backend rejects the source of a lambda literal"""


class EvaluationFailure(ReelError):
    """ Raised when an expression cannot be calculated"""


class MachineError(ReelError):
    """ Raised by a backend when running bytecode fails"""


class DecodeError(ReelError):
    """ Base class for bencode parse errors"""


class UnexpectedChar(DecodeError):
    """ Raised when a byte does not fit the bencode grammar"""

    def __init__(self, byte: int):
        super().__init__(f"unexpected character {byte}")
        self.byte = byte


class UnexpectedValue(DecodeError):
    """ Raised when a well-formed value shows up where it is not allowed"""

    def __init__(self, value):
        super().__init__(f"unexpected value {value!r}")
        self.value = value


class UnexpectedEof(DecodeError):
    """ Raised when the byte stream ends inside a value"""

    def __init__(self):
        super().__init__("unexpected EOF")
