import io

import pytest

from reel.errors import CompileFailure, EvaluationFailure
from reel.machine.contract import Machine
from reel.tape.machine import TapeMachine
from reel.types.nil import Nil
from reel.types.signal import Continue, Quit
from reel.types.value import Str


# A minimal backend for exercising the reader and evaluator without
# running anything. Bytecode is the source text itself.
class Code(str):
    def __bytes__(self):
        return self.encode("utf-8")


class MockMachine(Machine):
    def __init__(self):
        self.effects: list[str] = []
        self.calls: list[tuple] = []

    def convert(self, text):
        return text.decode("utf-8") if isinstance(text, bytes) else text

    def resolve(self, source):
        if "!" in source:
            raise CompileFailure("unexpected character !")
        return Code(source)

    def macro_expand(self, name):
        if name == "quit":
            raise Quit()
        if name == "help":
            raise Continue()
        if name.startswith("fx-"):
            self.effects.append(name)
            return Code(name)
        raise EvaluationFailure(f"failed to expand macro `{name}`")

    def run(self, code, args):
        # echo the display form of the raw argument trees
        self.calls.append((code, args))
        return Str(" ".join(str(a) for a in args)) if args else Nil


@pytest.fixture
def mock_machine():
    return MockMachine()


@pytest.fixture
def tape_out():
    return io.StringIO()


@pytest.fixture
def tape_machine(tape_out):
    return TapeMachine(out=tape_out)
