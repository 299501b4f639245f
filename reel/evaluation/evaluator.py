"""Tree-walking evaluator.

The only primitive is dispatching into the machine: macros are expanded by
``machine.macro_expand`` and calls are run by ``machine.run``. Call
arguments are handed over unevaluated; interpreting them is entirely the
machine's business.
"""

from __future__ import annotations

import logging

from reel import Value
from reel.errors import EvaluationFailure, MachineError
from reel.machine.contract import Machine
from reel.types.nil import Nil, NilType
from reel.types.signal import Continue
from reel.types.value import Call, If, Lambda, Macro, Str

logger = logging.getLogger(__name__)


def is_truthy(value: Value) -> bool:
    # Only Nil and the empty string are falsy
    if value is Nil:
        return False
    if isinstance(value, Str) and not value.text:
        return False
    return True


def calc(node: Value, machine: Machine) -> Value:
    """
    Evaluate ``node`` against ``machine``.

    Raises EvaluationFailure when the expression cannot be calculated and
    lets Quit propagate to the caller.
    """
    match node:
        case NilType() | Lambda() | Str():
            return node

        case Macro(name):
            logger.debug("expanding macro %r", name)
            try:
                return Lambda(machine.macro_expand(name))
            except Continue:
                return Nil

        case If(pred, then, orelse):
            if is_truthy(calc(pred, machine)):
                return calc(then, machine)
            return calc(orelse, machine)

        case Call(callee, args):
            fn = calc(callee, machine)
            if not isinstance(fn, Lambda):
                raise EvaluationFailure(f"need callable here, found {fn} instead")
            logger.debug("running %s with %d argument(s)", fn, len(args))
            try:
                return machine.run(fn.code, args)
            except MachineError as err:
                raise EvaluationFailure(f"runtime error: {err}") from err

    raise EvaluationFailure(f"not an expression: {node!r}")
