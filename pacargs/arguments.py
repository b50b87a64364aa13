r"""
pacargs argument state: Option and Arguments.

Overview
- Option: the ordered values recorded for one flag name. Order matters and
  repeats are kept: "-dd" records two values, which is how "asked twice"
  emphasis is detected downstream.
- Arguments: the parse result, split into
  • op: the operation name ("" until one is set; at most one per invocation),
  • options: local flags (name -> Option), forwarded or consumed per operation,
  • globals: global flags (name -> Option), forwarded under every operation,
  • targets: positional strings, in order, duplicates preserved.

Mutation and query
- add_arg / add_param register flags through the grammar table (pacargs.grammar).
- exists_arg / get_arg / exists_double accept every known spelling of a flag at
  once and behave as a logical OR across them.
- del_arg removes names from both maps; add_target / clear_targets edit targets.
- copy() and copy_global() produce snapshots; Option values are shared between
  the snapshot and the source, the target list is not.

Serialization
- format_args(): [operation, *local flags], operation as "" when unset.
- format_globals(): [*global flags].
Each flag is emitted once per recorded value, followed by that value when the
flag takes one. The literal "--" marker is never emitted.

Quick example:
    >>> arguments = Arguments()
    >>> arguments.add_arg("S", "d", "d")
    >>> arguments.add_param("b", "/tmp/db")
    >>> arguments.format_args(), arguments.format_globals()
    (['-S', '-d', '-d'], ['-b', '/tmp/db'])
"""
import logging

from .faults import *
from .grammar import is_global, is_operation, is_valid, spell, takes_value
from .settings import TargetMode
from .utils import Unset, coalesce

logger = logging.getLogger(__name__)


class Option:
    """
    ordered values recorded for one flag name.

    switches record "" once per occurrence; value-taking flags record their value.
    """

    __slots__ = ("args",)

    def __init__(self, *args):
        self.args = list(args)

    def add(self, arg, /):
        self.args.append(arg)

    def first(self):
        """
        return the first recorded value, or "" when nothing was recorded.
        """
        return self.args[0] if self.args else ""

    def set(self, arg, /):
        """
        replace every recorded value with a single one.
        """
        self.args = [arg]

    def __len__(self):
        return len(self.args)

    def __iter__(self):
        return iter(self.args)

    def __eq__(self, other):
        if isinstance(other, Option):
            return self.args == other.args
        return NotImplemented

    def __repr__(self):
        return "Option(%s)" % ", ".join(map(repr, self.args))

    def __rich_repr__(self):
        yield from self.args


class Arguments:
    """
    structured, mutable view of a pacman-style command line.

    invariants
    - a flag name lands in exactly one of op/globals/options, as decided by the
      grammar table; globals and options never share a key.
    - op is set at most once; a second operation is a MultipleOperationsError.
    """

    def __init__(self):
        self.op = ""
        self.options = {}
        self.globals = {}
        self.targets = []

    def __repr__(self):
        return "%s(op=%r, options=%r, globals=%r, targets=%r)" % (
            type(self).__name__, self.op, self.options, self.globals, self.targets
        )

    def __rich_repr__(self):
        yield "op", self.op
        yield "options", self.options
        yield "globals", self.globals
        yield "targets", self.targets

    # --- snapshots -----------------------------------------------------------

    def copy(self):
        """
        return an independent copy: fresh maps and target list, shared Option values.
        """
        cp = type(self)()
        cp.op = self.op
        cp.options = dict(self.options)
        cp.globals = dict(self.globals)
        cp.targets = list(self.targets)
        return cp

    def copy_global(self):
        """
        return a copy that only carries the global flags (no op, options or targets).

        used when the wrapped tool is invoked several times with the same global
        context but different local options.
        """
        cp = type(self)()
        cp.globals = dict(self.globals)
        return cp

    # --- registration --------------------------------------------------------

    def _add_op(self, op, token):
        if self.op:
            trigger(MultipleOperationsError(
                "only one operation may be used at a time: %r conflicts with %r in %r" % (op, self.op, token),
                title="multiple operations",
                code=FaultCode.MULTIPLE_OPERATIONS,
                token=token,
                option=op,
                operation=self.op,
                hint="keep a single operation flag (for example -S or --remove)",
                docs=getdoc(FaultCode.MULTIPLE_OPERATIONS),
            ))
        self.op = op

    def add_param(self, option, arg, /, token=Unset):
        """
        register one occurrence of a flag with its value ("" for switches).

        token is the raw command line token the flag came from and is only used
        to name it in error messages; it defaults to the option's own spelling.
        """
        token = coalesce(token, spell(option) or option)

        if not is_valid(option):
            trigger(UnknownOptionError(
                "invalid option %r in %r" % (option, token),
                title="invalid option",
                code=FaultCode.UNKNOWN_OPTION,
                token=token,
                option=option,
                hint="check the spelling of %r against 'pacman --help'" % token,
                docs=getdoc(FaultCode.UNKNOWN_OPTION),
            ))

        if is_operation(option):
            self._add_op(option, token)
            return

        target = self.globals if is_global(option) else self.options
        target.setdefault(option, Option()).add(arg)
        logger.debug("registered %s %r = %r", "global" if target is self.globals else "option", option, arg)

    def add_arg(self, *options, token=Unset):
        """
        register each name as a switch (value "").
        """
        for option in options:
            self.add_param(option, "", token=token)

    def add_target(self, *targets):
        self.targets.extend(targets)

    def clear_targets(self):
        self.targets = []

    def del_arg(self, *options):
        """
        remove every given name from both options and globals (missing names are ignored).
        """
        for option in options:
            self.options.pop(option, None)
            self.globals.pop(option, None)

    # --- queries -------------------------------------------------------------

    def _lookup(self, options):
        for option in options:
            if option in self.options:
                return self.options[option]
            if option in self.globals:
                return self.globals[option]
        return None

    def exists_arg(self, *options):
        """
        true when any of the given spellings was recorded (logical OR).
        """
        return self._lookup(options) is not None

    def get_arg(self, *options):
        """
        return (first, double, exists) for the first recorded spelling among options.

        - first: the first recorded value ("" for switches or when absent).
        - double: at least two occurrences were recorded.
        - exists: at least one occurrence was recorded.
        """
        if (value := self._lookup(options)) is None:
            return "", False, False
        return value.first(), len(value) >= 2, len(value) >= 1

    def exists_double(self, *options):
        """
        true when the first recorded spelling among options occurred at least twice.
        """
        return (value := self._lookup(options)) is not None and len(value) >= 2

    def need_root(self, mode=TargetMode.ANY):
        """
        decide whether running the wrapped tool for this command line needs root.

        a pure function of the parsed state; mode is the runtime target mode and
        only matters for "-Sc" (cleaning the front end's own cache needs no root).
        """
        if self.exists_arg("h", "help"):
            return False

        match self.op:
            case "D" | "database":
                return not self.exists_arg("k", "check")
            case "F" | "files":
                return self.exists_arg("y", "refresh")
            case "Q" | "query":
                return self.exists_arg("k", "check")
            case "R" | "remove":
                return not self.exists_arg("p", "print", "print-format")
            case "S" | "sync":
                if self.exists_arg("y", "refresh"):
                    return True
                if self.exists_arg("p", "print", "print-format"):
                    return False
                if self.exists_arg("s", "search"):
                    return False
                if self.exists_arg("l", "list"):
                    return False
                if self.exists_arg("g", "groups"):
                    return False
                if self.exists_arg("i", "info"):
                    return False
                if self.exists_arg("c", "clean") and mode is TargetMode.AUR:
                    return False
                return True
            case "U" | "upgrade":
                return True
            case _:
                return False

    # --- serialization -------------------------------------------------------

    @staticmethod
    def _format(options):
        args = []
        for option, value in options.items():
            if option == "--":
                continue
            spelled = spell(option)
            for arg in value:
                args.append(spelled)
                if takes_value(option):
                    args.append(arg)
        return args

    def format_args(self):
        """
        serialize the operation and local options for the wrapped tool.

        the first element is always the operation token, or "" when no operation
        is set; callers treat "" as "no operation" and must not synthesize one.
        """
        return [spell(self.op)] + self._format(self.options)

    def format_globals(self):
        """
        serialize the global options for the wrapped tool.
        """
        return self._format(self.globals)


__all__ = (
    "Option",
    "Arguments",
)
