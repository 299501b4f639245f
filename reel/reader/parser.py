"""
  Expression reader

Single-character dispatch, whitespace skipped before every expression:

    'text' "text"   -> Str
    ? p t f         -> If
    `code'          -> Lambda (compiled immediately by the machine)
    ()              -> Nil
    (f a b ...)     -> Call(f, (a, b, ...))
    @name~          -> Macro

Running out of text inside an expression raises IncompleteInput so a
front end can ask for more; running out before anything was read is not an
error and reads as None.
"""

from __future__ import annotations

import logging

from reel import Value
from reel.errors import CompileFailure, IncompleteInput, ReelSyntaxError
from reel.machine.contract import Machine
from reel.types.nil import Nil
from reel.types.value import Call, If, Lambda, Macro, Str

logger = logging.getLogger(__name__)

WHITESPACE = " \t\r\n"

ESCAPES: dict[str, str] = {
    "r": "\r",
    "n": "\n",
    "t": "\t",
    "\\": "\\",
}


class Reader:
    def __init__(self, source: str, machine: Machine):
        self.source = source
        self.pos = 0
        self.machine = machine

    # --- character stream ---
    def _at_end(self) -> bool:
        return self.pos >= len(self.source)

    def _advance(self) -> str:
        if self._at_end():
            raise IncompleteInput()
        c = self.source[self.pos]
        self.pos += 1
        return c

    def _skip_whitespace(self) -> None:
        while not self._at_end() and self.source[self.pos] in WHITESPACE:
            self.pos += 1

    def rest(self) -> str:
        return self.source[self.pos:]

    def trailing(self) -> str | None:
        """First non-whitespace character after the last expression read."""
        for c in self.rest():
            if c not in WHITESPACE:
                return c
        return None

    # --- grammar ---
    def read(self) -> Value | None:
        """Read one top-level expression, or None if only whitespace is left."""
        self._skip_whitespace()
        if self._at_end():
            return None
        return self._read_expr()

    def _read_expr(self) -> Value:
        self._skip_whitespace()
        c = self._advance()
        if c in ("'", '"'):
            return Str(self._read_delimited(c))
        if c == "?":
            # children first: a node is only built from finished sub-trees
            pred = self._read_expr()
            then = self._read_expr()
            orelse = self._read_expr()
            return If(pred, then, orelse)
        if c == "`":
            return Lambda(self._compile(self._read_delimited("'")))
        if c == "(":
            return self._read_call()
        if c == "@":
            return Macro(self._read_delimited("~"))
        raise ReelSyntaxError(c)

    def _read_delimited(self, delim: str) -> str:
        out = []
        while True:
            c = self._advance()
            if c == delim:
                return "".join(out)
            if c == "\\":
                e = self._advance()
                if e == delim:
                    out.append(delim)
                elif e in ESCAPES:
                    out.append(ESCAPES[e])
                else:
                    raise ReelSyntaxError(e)
            else:
                out.append(c)

    def _closes(self) -> bool:
        self._skip_whitespace()
        if not self._at_end() and self.source[self.pos] == ")":
            self.pos += 1
            return True
        return False

    def _read_call(self) -> Value:
        if self._closes():
            return Nil
        callee = self._read_expr()
        args = []
        while not self._closes():
            args.append(self._read_expr())
        return Call(callee, tuple(args))

    def _compile(self, text: str):
        try:
            return self.machine.compile(text)
        except self.machine.CompileFail as err:
            logger.debug("compile failed for %r: %s", text, err)
            if isinstance(err, CompileFailure):
                raise
            raise CompileFailure(str(err)) from err


def read_expression(source: str, machine: Machine) -> Value | None:
    """Read exactly one expression from ``source``; trailing text is an error."""
    reader = Reader(source, machine)
    value = reader.read()
    extra = reader.trailing()
    if extra is not None:
        raise ReelSyntaxError(extra)
    return value
