"""Capability interface a backend machine must satisfy.

A backend is parameterized by three types:

- ``ByteCodeT``: its compiled form. Must render with ``str()`` and
  serialize with ``bytes()``; it is treated as an immutable value.
- ``CompileFailT``: the exception type its compile step raises.
- ``ConvertT``: the intermediate value produced from source text before
  compilation. Funnelling both ``str`` and ``bytes`` source through
  ``convert`` keeps a single compile path.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar, Generic, Protocol, Sequence, TypeVar

from reel import Value
from reel.errors import CompileFailure, EvaluationFailure, MachineError

ByteCodeT = TypeVar("ByteCodeT")
CompileFailT = TypeVar("CompileFailT", bound=BaseException)
ConvertT = TypeVar("ConvertT")


class Executable(Protocol):
    """Bytecode that can run against a pair of byte channels."""

    def execute(self, output, input) -> None: ...


class Machine(ABC, Generic[ByteCodeT, CompileFailT, ConvertT]):
    # Exception type raised by resolve(); the reader reports it as a
    # CompileFailure.
    CompileFail: ClassVar[type[BaseException]] = CompileFailure

    @abstractmethod
    def convert(self, text: str | bytes) -> ConvertT:
        """First stage: wrap raw source text."""

    @abstractmethod
    def resolve(self, source: ConvertT) -> ByteCodeT:
        """Second stage: compile converted source or raise ``CompileFail``."""

    def compile(self, text: str | bytes) -> ByteCodeT:
        return self.resolve(self.convert(text))

    def macro_expand(self, name: str) -> ByteCodeT:
        """Resolve a macro name to bytecode.

        May raise EvaluationFailure for unknown names, or a Signal
        (Continue / Quit) for informational and terminating macros.
        """
        raise EvaluationFailure("macro expansion is not implemented")

    def run(self, code: ByteCodeT, args: Sequence[Value]) -> Value:
        """Run bytecode against the raw, unevaluated argument trees.

        Raises MachineError on failure.
        """
        raise MachineError("run is not implemented")
