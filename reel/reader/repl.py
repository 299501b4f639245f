"""
Incremental, line-oriented front end.

Lines are buffered while an expression is incomplete; every retry parses the
whole buffer from the start.
"""

from __future__ import annotations

import logging
import sys
from enum import Enum
from typing import TextIO

from reel import config
from reel.errors import (
    CompileFailure,
    EvaluationFailure,
    IncompleteInput,
    ReelSyntaxError,
)
from reel.evaluation.evaluator import calc
from reel.machine.contract import Machine
from reel.reader.parser import Reader
from reel.types.signal import Quit
from reel.util import escape

logger = logging.getLogger(__name__)

TOO_DEEP = "expression nested too deeply"


class ReplState(Enum):
    PROMPTING = "prompting"
    CONTINUING = "continuing"


class Repl:
    def __init__(
        self,
        machine: Machine,
        prompt: str | None = None,
        continuation_prompt: str | None = None,
    ):
        self.machine = machine
        self.state = ReplState.PROMPTING
        self.buffer = ""
        self._prompt = prompt if prompt is not None else config.get_prompt()
        self._continuation = (
            continuation_prompt
            if continuation_prompt is not None
            else config.get_continuation_prompt()
        )

    @property
    def prompt(self) -> str:
        if self.state is ReplState.CONTINUING:
            return self._continuation
        return self._prompt

    def _reset(self) -> None:
        self.state = ReplState.PROMPTING
        self.buffer = ""

    def feed(self, line: str) -> str | None:
        """
        Consume one line of input.

        Returns the result line to print, or None when there is nothing to
        print (blank input, or more input needed). Quit propagates.
        """
        text = self.buffer + line if self.state is ReplState.CONTINUING else line
        reader = Reader(text, self.machine)
        try:
            node = reader.read()
        except IncompleteInput:
            logger.debug("incomplete input, buffering %d chars", len(text))
            self.state = ReplState.CONTINUING
            self.buffer = text
            return None
        except ReelSyntaxError as err:
            self._reset()
            return f"failed to parse expression: {err}"
        except CompileFailure as err:
            self._reset()
            return f"compile error: {err}"
        except RecursionError:
            self._reset()
            return f"failed to parse expression: {TOO_DEEP}"

        self._reset()
        if node is None:
            return None
        extra = reader.trailing()
        if extra is not None:
            return f"error: unexpected `{escape(extra)}`"
        try:
            return str(calc(node, self.machine))
        except EvaluationFailure as err:
            return f"failed to calculate: {err}"
        except RecursionError:
            return f"failed to calculate: {TOO_DEEP}"

    def run(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        """Read-eval-print until Quit or end of input."""
        stdin = stdin if stdin is not None else sys.stdin
        stdout = stdout if stdout is not None else sys.stdout
        while True:
            stdout.write(self.prompt)
            stdout.flush()
            try:
                line = stdin.readline()
            except UnicodeDecodeError as err:
                self._reset()
                stdout.write(f"failed to read input: {err}\n")
                stdout.flush()
                continue
            if not line:
                logger.debug("end of input")
                return
            try:
                result = self.feed(line)
            except Quit:
                return
            if result is not None:
                stdout.write(result + "\n")
                stdout.flush()
