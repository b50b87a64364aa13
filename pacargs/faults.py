"""
pacargs faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain to keep copy consistent and make logs/searches
  predictable.
- ArgumentsException: base type that carries message + options and knows how to
  render itself in a friendly, lowercased and actionable way.
- trigger(): central entry point to surface any fault (raise it, or print it and
  exit when running as a shell program).
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Token-first messages: every grammar message names the offending token exactly
  as the user typed it, so the typo can be located in the invocation.
- Short titles, one-sentence bodies, a single clear hint.

Integration
- The parser and settings layers raise faults through trigger(fault); the
  command line entry point catches ArgumentsException and re-triggers it with
  shell=True so it is rendered via rich and turned into exit status 1.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the package (stable identifiers).

    grouping (by high-level domain)
    - grammar (2110x)
      • UNKNOWN_OPTION, MULTIPLE_OPERATIONS
    - resources (2120x)
      • UNREADABLE_INPUT, TERMINAL_UNAVAILABLE
    - configuration (2130x)
      • INVALID_CONFIG

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- grammar errors (211xx) ---
    UNKNOWN_OPTION              = 21101
    MULTIPLE_OPERATIONS         = 21102

    # --- resource errors (212xx) ---
    UNREADABLE_INPUT            = 21201
    TERMINAL_UNAVAILABLE        = 21202

    # --- configuration errors (213xx) ---
    INVALID_CONFIG              = 21301

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ArgumentsException(Exception):
    """
    base of every fault raised while classifying or reshaping arguments.

    the message is the one-line, token-naming description; the keyword options
    carry presentation and context (title, code, hint, token, prog, shell,
    fancy, colorful). options are read-only once the fault exists; use
    __replace__ to derive a fault with different options.
    """

    __defaults__ = MappingProxyType({
        "title": "error",
        "code": Unset,
        "hint": "",
        "prog": Unset,
        "shell": False,
        "fancy": False,
        "colorful": True,
    })

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message if message is not Unset else "")
        self.message = message
        self.options = MappingProxyType({**self.__defaults__, **options})

    @property
    def code(self):
        return self.options["code"]

    @property
    def token(self):
        return self.options.get("token", Unset)

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
            "docs": "#6B6F7A",  # muted footer for host-provided docs
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if self.options["colorful"] else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not self.options["colorful"]:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        name = self.options["prog"]
        if name is Unset:
            name = getattr(main, "__prog__", "pacargs")
        code = self.options["code"]

        header = Text.assemble(
            "[ ",
            text(name, styler("prog-name")),
            " — ",
            text(code.normalize() if isinstance(code, FaultCode) else "?", styler("code")),
            " | ",
            text(self.options["title"].title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))

        body = [message]
        if self.options["hint"]:
            body.append(Text.assemble(text(" → ", styler("hint-arrow")), text(self.options["hint"], styler("hint"))))
        if docs := self.options.get("docs"):
            body.append(text(docs, styler("docs")))

        if self.options["fancy"]:
            return Panel(Group(*body), title=header, title_align="left")

        return Group(header, *body)

    def __trigger__(self) -> None:
        if not self.options["shell"]:
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownOptionError(ArgumentsException): ...
class MultipleOperationsError(ArgumentsException): ...
class UnreadableInputError(ArgumentsException): ...
class TerminalUnavailableError(ArgumentsException): ...
class InvalidConfigError(ArgumentsException): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ArgumentsException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - with shell=True the fault is rendered on stderr and the process exits with 1;
      otherwise the (re-optioned) fault is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings. when
    not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "ArgumentsException",
    "UnknownOptionError",
    "MultipleOperationsError",
    "UnreadableInputError",
    "TerminalUnavailableError",
    "InvalidConfigError",
    "FaultCode",
    "console",
    "trigger",
    "getdoc",
)
