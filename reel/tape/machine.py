"""Session backend that runs tape programs through the invocation protocol.

Besides compiling and running programs, the backend keeps a log of every
macro it resolved and every call it completed, and exposes it through
built-in macros.
"""

from __future__ import annotations

import logging
import sys
from typing import Sequence, TextIO

from reel import Value
from reel.codec import bencode
from reel.errors import EvaluationFailure
from reel.machine.contract import Machine
from reel.protocol.invocation import invoke
from reel.tape.code import TapeCode, TapeCompileError, TapeSource
from reel.types.signal import Continue, Quit
from reel.util import escape

logger = logging.getLogger(__name__)

GREETING = "++++++++++[>+++++++>++++++++++>+++>+<<<<-]>++.>+.+++++++..+++."

HELP = """\
expressions:
  'text' "text"      string
  ? p t f            if p is neither nil nor '' then t, else f
  `code'             compiled tape program  < > + - . , [ ]
  (f args...)        call f with the raw argument trees; () is nil
  @name~             macro
macros:
  @greeting~ @A~     sample programs
  @log~              session log
  @N~ @#N~           show macro / call log entry N
  @help~ @quit~"""


class TapeMachine(Machine[TapeCode, TapeCompileError, TapeSource]):
    CompileFail = TapeCompileError

    def __init__(self, out: TextIO | None = None):
        self.out = out if out is not None else sys.stdout
        self.log_macros: list[tuple[str, TapeCode]] = []
        self.log_calls: list[tuple[TapeCode, tuple[Value, ...], Value]] = []

    # --- convert / compile ---
    def convert(self, text: str | bytes) -> TapeSource:
        return TapeSource.of(text)

    def resolve(self, source: TapeSource) -> TapeCode:
        return source.resolve()

    # --- introspection ---
    def __str__(self) -> str:
        lines = []
        if not self.log_macros:
            lines.append("no log for macros")
        else:
            lines.append(f"log for macros: ({len(self.log_macros)} entries)")
            for name, code in self.log_macros:
                lines.append(f"!{name}={code}")
        if not self.log_calls:
            lines.append("no log for calls")
        else:
            lines.append(f"log for calls: ({len(self.log_calls)} entries)")
            for code, args, result in self.log_calls:
                lines.append(f"`{code}'")
                for idx, arg in enumerate(args, 1):
                    lines.append(f"arg{idx}: {str(arg)!r}")
                lines.append(f"result: {str(result)!r}")
        return "\n".join(lines) + "\n"

    def _show(self, entries: list, idx: int, label: str, prefix: str = "") -> None:
        if idx < len(entries):
            print(repr(entries[idx]), file=self.out)
        else:
            print(f"no {label} log entry for index {prefix}{idx}", file=self.out)
            print("type `(@log~)` for log overview", file=self.out)

    # --- contract ---
    def macro_expand(self, name: str) -> TapeCode:
        if name == "greeting":
            code = self.compile(GREETING)
        elif name == "A":
            code = TapeCode.print(bencode.byte_string(b"A"))
        elif name == "log":
            code = TapeCode.print(bencode.byte_string(str(self)))
        elif name == "help":
            print(HELP, file=self.out)
            raise Continue()
        elif name == "quit":
            raise Quit()
        elif name.isdecimal():
            self._show(self.log_macros, int(name), "macro access")
            raise Continue()
        elif name.startswith("#") and name[1:].isdecimal():
            self._show(self.log_calls, int(name[1:]), "function call", "#")
            raise Continue()
        else:
            raise EvaluationFailure(f"failed to expand macro `{escape(name)}`")
        self.log_macros.append((name, code))
        logger.debug("%d entries for macro now", len(self.log_macros))
        return code

    def run(self, code: TapeCode, args: Sequence[Value]) -> Value:
        result = invoke(code, args)
        self.log_calls.append((code, tuple(args), result))
        logger.debug("%d entries for function call now", len(self.log_calls))
        return result
