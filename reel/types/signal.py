"""Cooperative control signals raised by macro expansion.

These are not errors: ``Continue`` makes the expression evaluate to Nil,
``Quit`` ends the session.
"""


class Signal(Exception):
    """Base class for control signals."""


class Continue(Signal):
    """Informational macro: the expression yields Nil and evaluation proceeds."""


class Quit(Signal):
    """Terminates the whole session."""
