"""Operator-facing console output with distinct outcome prefixes."""

from __future__ import annotations

from rich.console import Console
from rich.text import Text

# Prefix, style, and whether the line goes to stderr.
_PREFIXES: dict[str, tuple[str, str, bool]] = {
    "step": ("==>", "bold cyan", False),
    "ok": ("[ok]", "green", False),
    "skip": ("[skip]", "blue", False),
    "warn": ("[warn]", "yellow", True),
    "error": ("[ERR]", "bold red", True),
}


class Reporter:
    """Prints one prefixed line per outcome.

    Warnings and errors go to stderr; everything else to stdout.  Default
    consoles look up ``sys.stdout``/``sys.stderr`` at print time, so
    redirection (pytest, ``CliRunner``) is honoured.
    """

    def __init__(self, out: Console | None = None, err: Console | None = None) -> None:
        self._out = out or Console(soft_wrap=True, highlight=False, emoji=False)
        self._err = err or Console(stderr=True, soft_wrap=True, highlight=False, emoji=False)

    def _emit(self, kind: str, message: str) -> None:
        prefix, style, to_stderr = _PREFIXES[kind]
        line = Text.assemble((prefix, style), " ", message)
        (self._err if to_stderr else self._out).print(line)

    def step(self, message: str) -> None:
        self._emit("step", message)

    def ok(self, message: str) -> None:
        self._emit("ok", message)

    def skip(self, message: str) -> None:
        self._emit("skip", message)

    def warn(self, message: str) -> None:
        self._emit("warn", message)

    def error(self, message: str) -> None:
        self._emit("error", message)

    def plain(self, message: str = "") -> None:
        self._out.print(Text(message))
