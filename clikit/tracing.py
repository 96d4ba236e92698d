"""Opt-in diagnostic tracing written to standard error."""

from __future__ import annotations

import inspect
import os
import sys

_TRACING_ENV = "CLIKIT_TRACING"

_enabled = os.environ.get(_TRACING_ENV) == "on"


def set_tracing(enabled):
    """Switch tracing on or off for the running process."""
    global _enabled
    _enabled = bool(enabled)


def tracing_enabled():
    """Return whether trace messages are currently written."""
    return _enabled


def tracef(message, *args):
    """Write a trace line, tagged with the caller's location, to stderr.

    The message is formatted with ``%`` when arguments are given.
    Nothing is written unless tracing is enabled.
    """
    if not _enabled:
        return

    text = message % args if args else message
    if not text.endswith("\n"):
        text += "\n"

    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    try:
        if caller is not None:
            location = f"{caller.f_code.co_filename}:{caller.f_lineno} ({caller.f_code.co_name})"
        else:
            location = "<unknown>"
    finally:
        del frame, caller

    sys.stderr.write(f"## CLIKIT TRACE {location} {text}")