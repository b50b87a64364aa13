"""
pacargs parser: turn a pacman-style argument vector into Arguments.

Grammar (pacman compatible)
- "-Syu": a bundle of short switches; "-b/path" glues a value to a short flag;
  "-b /path" takes the next token instead.
- "--dbpath /path" and "--dbpath=/path": long flags, spaced or inline value.
- "--": every later token is a target, even when it starts with "-".
- "-": read further targets from the input source, one per line.
- anything else is a target.

Policy
- no arguments at all behaves like "-Syu";
- no operation after parsing selects "Y", the front end's umbrella
  search-and-install operation.

Which names are operations, globals or value-taking is decided by
pacargs.grammar; this module only walks tokens.
"""
import logging
import sys

from .arguments import Arguments
from .grammar import takes_value
from .settings import Configuration
from .sources import StreamSource
from .utils import Unset, coalesce

logger = logging.getLogger(__name__)

DEFAULT_ARGV = ("-Syu",)
DEFAULT_OPERATION = "Y"
READ_STDIN = "-"
END_OF_OPTIONS = "--"


def _parse_short(arguments, token, lookahead):
    """
    register a short bundle ("-Syu", "-b/path", "-b"); return True when lookahead was consumed.
    """
    if token == READ_STDIN:
        arguments.add_arg(READ_STDIN, token=token)
        return False

    bundle = token[1:]
    for index, char in enumerate(bundle):
        if not takes_value(char):
            arguments.add_arg(char, token=token)
            continue
        # a value-taking flag ends the bundle: the rest of it, or the next token, is its value
        if index < len(bundle) - 1:
            arguments.add_param(char, bundle[index + 1:], token=token)
            return False
        arguments.add_param(char, lookahead, token=token)
        return True

    return False


def _parse_long(arguments, token, lookahead):
    """
    register a long flag ("--sync", "--dbpath=/x", "--dbpath"); return True when lookahead was consumed.
    """
    if token == END_OF_OPTIONS:
        arguments.add_arg(END_OF_OPTIONS, token=token)
        return False

    name = token[2:]
    if "=" in name:
        name, value = name.split("=", 1)
        arguments.add_param(name, value, token=token)
        return False
    if takes_value(name):
        arguments.add_param(name, lookahead, token=token)
        return True

    arguments.add_arg(name, token=token)
    return False


def _read_targets(arguments, source):
    count = len(arguments.targets)
    for line in source.lines():
        if target := line.strip():
            arguments.add_target(target)
    logger.debug("read %d target(s) from input", len(arguments.targets) - count)
    arguments.del_arg(READ_STDIN)
    source.reattach()


def parse(argv=Unset, /, *, source=Unset):
    """
    parse argv (default: sys.argv[1:]) into a new Arguments value.

    parameters
    - argv: iterable of tokens, program name excluded.
    - source: input source used when "-" is present (default: StreamSource()
      over standard input, reattaching /dev/tty). pass a source to keep the
      reattached terminal reachable; parse_command_line() does.

    raises
    - UnknownOptionError: a flag name is not in the grammar.
    - MultipleOperationsError: more than one operation was given.
    - UnreadableInputError / TerminalUnavailableError: "-" could not be served.
    """
    argv = list(coalesce(argv, sys.argv[1:]))
    arguments = Arguments()

    if not argv:
        logger.debug("no arguments given, defaulting to %s", " ".join(DEFAULT_ARGV))
        argv = list(DEFAULT_ARGV)

    used_next = False
    for index, token in enumerate(argv):
        if used_next:
            used_next = False
            continue

        lookahead = argv[index + 1] if index + 1 < len(argv) else ""

        if arguments.exists_arg(END_OF_OPTIONS):
            arguments.add_target(token)
        elif token.startswith("--"):
            used_next = _parse_long(arguments, token, lookahead)
        elif token.startswith("-"):
            used_next = _parse_short(arguments, token, lookahead)
        else:
            arguments.add_target(token)

    if not arguments.op:
        logger.debug("no operation given, defaulting to %r", DEFAULT_OPERATION)
        arguments.op = DEFAULT_OPERATION

    if arguments.exists_arg(READ_STDIN):
        _read_targets(arguments, coalesce(source, StreamSource()))

    return arguments


def parse_command_line(argv=Unset, /, *, config=Unset, source=Unset):
    """
    parse argv and move the front end's own options into config.

    returns (arguments, config); config defaults to a fresh Configuration().
    the input source (default: StreamSource() over standard input) is kept on
    config.runtime.source, so the terminal reattached after "-" stays reachable
    for later prompts through config.runtime.source.prompt.
    """
    config = coalesce(config, Configuration())
    config.runtime.source = coalesce(source, coalesce(config.runtime.source, StreamSource()))
    arguments = parse(argv, source=config.runtime.source)
    config.extract(arguments)
    return arguments, config


__all__ = (
    "DEFAULT_ARGV",
    "DEFAULT_OPERATION",
    "READ_STDIN",
    "END_OF_OPTIONS",
    "parse",
    "parse_command_line",
)
