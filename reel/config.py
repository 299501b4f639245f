from __future__ import annotations
import os


def _env(var: str, default: str) -> str:
    raw = os.environ.get(var)
    return default if raw is None else raw


def get_prompt() -> str:
    return _env('REEL_PROMPT', '> ')


def get_continuation_prompt() -> str:
    return _env('REEL_CONTINUATION_PROMPT', '... ')


def get_log_level() -> str:
    return _env('REEL_LOG_LEVEL', 'WARNING').upper()


def get_tape_size() -> int:
    # initial number of tape cells; the tape grows on demand
    raw = _env('REEL_TAPE_SIZE', '256')
    try:
        size = int(raw)
    except ValueError:
        return 256
    return size if size > 0 else 256
