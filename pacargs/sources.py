"""
pacargs input sources for the "-" (read targets from standard input) flag.

A source is chosen once, up front, and handed to the parser. It offers:
- lines(): the raw lines to turn into targets (read until end of stream);
- reattach(): make an interactive input available again once the lines were
  drained, returning it; later prompts read from source.prompt.

StreamSource reads a text stream (standard input by default) and reopens the
controlling terminal; LineSource serves a fixed sequence and is what tests inject.
Neither replaces sys.stdin. StreamSource is a context manager that closes the
reattached terminal on exit.
"""
import logging
import sys

from .faults import *
from .utils import Unset, coalesce

logger = logging.getLogger(__name__)


class StreamSource:
    """
    lines from a text stream, terminal reopened from a device path afterwards.
    """

    def __init__(self, stream=Unset, /, terminal="/dev/tty"):
        self.stream = stream
        self.terminal = terminal
        self.prompt = Unset

    def lines(self):
        stream = coalesce(self.stream, sys.stdin)
        name = getattr(stream, "name", "<stdin>")
        try:
            for line in stream:
                yield line
        except (OSError, UnicodeDecodeError) as error:
            trigger(UnreadableInputError(
                "cannot read targets from %r: %s" % (name, error),
                title="unreadable input",
                code=FaultCode.UNREADABLE_INPUT,
                token="-",
                hint="pipe one target per line into the command when using '-'",
                docs=getdoc(FaultCode.UNREADABLE_INPUT),
            ))

    def reattach(self):
        try:
            self.prompt = open(self.terminal, "r", encoding="utf-8")
        except OSError as error:
            trigger(TerminalUnavailableError(
                "cannot reopen %r for interactive input: %s" % (self.terminal, error),
                title="terminal unavailable",
                code=FaultCode.TERMINAL_UNAVAILABLE,
                token="-",
                hint="run from a terminal, or pass targets as arguments instead of '-'",
                docs=getdoc(FaultCode.TERMINAL_UNAVAILABLE),
            ))
        logger.debug("reattached interactive input to %s", self.terminal)
        return self.prompt

    def close(self):
        """
        close the reattached terminal, if any; the stream itself is left open.
        """
        if self.prompt is not Unset:
            self.prompt.close()
            self.prompt = Unset

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


class LineSource:
    """
    a fixed sequence of lines; reattach() hands back the given prompt stream (if any).
    """

    def __init__(self, lines=(), /, prompt=Unset):
        self._lines = list(lines)
        self.prompt = prompt
        self.drained = False

    def lines(self):
        yield from self._lines
        self.drained = True

    def reattach(self):
        return self.prompt


__all__ = (
    "StreamSource",
    "LineSource",
)
