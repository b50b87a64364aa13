"""
pacargs grammar: the flag classification table.

pacman does not canonicalize its spellings: "-b" and "--dbpath" are the same
semantic flag but are recorded (and forwarded) under their own names. The table
below therefore lists every spelling separately and tags it with:

- kind: OPERATION (the verb, at most one per invocation), GLOBAL (forwarded under
  every operation) or LOCAL (meaningful to the current operation only);
- value: whether the flag consumes an argument (inline, glued or the next token).

The tokenizer never branches on flag names; adding a flag means adding a row.

Predicates
- is_operation(name), is_global(name), takes_value(name): lookups into the table.
- is_valid(name): the superset; anything else is an invalid option.
- spell(name): the command line spelling ("-x" for one character, "--xxx" otherwise).
"""
from enum import IntEnum
from types import MappingProxyType
from typing import NamedTuple


class Kind(IntEnum):
    OPERATION = 1
    GLOBAL = 2
    LOCAL = 3


class Flag(NamedTuple):
    kind: Kind
    value: bool = False


# pacman operations, then the front end's own (Y is the umbrella search-and-install flow)
_OPERATIONS = (
    "V", "version",
    "D", "database",
    "F", "files",
    "Q", "query",
    "R", "remove",
    "S", "sync",
    "T", "deptest",
    "U", "upgrade",
    "Y", "yay",
    "P", "show",
    "G", "getpkgbuild",
)

_GLOBALS = (
    "b", "dbpath",
    "r", "root",
    "v", "verbose",
    "arch",
    "cachedir",
    "color",
    "config",
    "debug",
    "gpgdir",
    "hookdir",
    "logfile",
    "noconfirm",
    "confirm",
)

_LOCALS = (
    # literal markers: read targets from stdin / end of options
    "-", "--",

    # pacman
    "ask",
    "h", "help",
    "disable-download-timeout",
    "sysroot",
    "d", "nodeps",
    "assume-installed",
    "dbonly",
    "absdir",
    "noprogressbar",
    "noscriptlet",
    "p", "print",
    "print-format",
    "asdeps",
    "asexplicit",
    "ignore",
    "ignoregroup",
    "needed",
    "overwrite",
    "f", "force",
    "c", "changelog",
    "deps",
    "e", "explicit",
    "g", "groups",
    "i", "info",
    "k", "check",
    "l", "list",
    "m", "foreign",
    "n", "native",
    "o", "owns",
    "file",
    "q", "quiet",
    "s", "search",
    "t", "unrequired",
    "u", "upgrades",
    "cascade",
    "nosave",
    "recursive",
    "unneeded",
    "clean",
    "sysupgrade",
    "w", "downloadonly",
    "y", "refresh",
    "x", "regex",
    "machinereadable",

    # front end
    "aururl",
    "save",
    "afterclean", "cleanafter",
    "noafterclean", "nocleanafter",
    "devel", "nodevel",
    "timeupdate", "notimeupdate",
    "topdown", "bottomup",
    "completioninterval",
    "sortby",
    "searchby",
    "redownload", "redownloadall", "noredownload",
    "rebuild", "rebuildall", "rebuildtree", "norebuild",
    "batchinstall", "nobatchinstall",
    "answerclean", "noanswerclean",
    "answerdiff", "noanswerdiff",
    "answeredit", "noansweredit",
    "answerupgrade", "noanswerupgrade",
    "gpgflags",
    "mflags",
    "gitflags",
    "builddir",
    "editor",
    "editorflags",
    "makepkg",
    "makepkgconf", "nomakepkgconf",
    "pacman",
    "git",
    "gpg",
    "sudo",
    "sudoflags",
    "requestsplitn",
    "sudoloop", "nosudoloop",
    "provides", "noprovides",
    "pgpfetch", "nopgpfetch",
    "upgrademenu", "noupgrademenu",
    "cleanmenu", "nocleanmenu",
    "diffmenu", "nodiffmenu",
    "editmenu", "noeditmenu",
    "useask", "nouseask",
    "combinedupgrade", "nocombinedupgrade",
    "a", "aur",
    "repo",
    "removemake", "noremovemake", "askremovemake",
    "complete",
    "stats",
    "news",
    "gendb",
    "currentconfig",
)

_VALUES = frozenset((
    # pacman
    "b", "dbpath",
    "r", "root",
    "sysroot",
    "config",
    "ignore",
    "assume-installed",
    "overwrite",
    "ask",
    "cachedir",
    "hookdir",
    "logfile",
    "ignoregroup",
    "arch",
    "print-format",
    "gpgdir",
    "color",

    # front end
    "aururl",
    "mflags",
    "gpgflags",
    "gitflags",
    "builddir",
    "absdir",
    "editor",
    "editorflags",
    "makepkg",
    "makepkgconf",
    "pacman",
    "git",
    "gpg",
    "sudo",
    "sudoflags",
    "requestsplitn",
    "answerclean",
    "answerdiff",
    "answeredit",
    "answerupgrade",
    "completioninterval",
    "sortby",
    "searchby",
))


def _build():
    table = {}
    for kind, names in ((Kind.OPERATION, _OPERATIONS), (Kind.GLOBAL, _GLOBALS), (Kind.LOCAL, _LOCALS)):
        for name in names:
            if name in table:
                raise RuntimeError("flag %r is classified twice" % name)
            table[name] = Flag(kind, name in _VALUES)
    if unknown := _VALUES - table.keys():
        raise RuntimeError("value-taking flags missing from the grammar: %s" % ", ".join(sorted(unknown)))
    return MappingProxyType(table)


GRAMMAR = _build()
"""
Read-only mapping from every valid flag name to its Flag(kind, value) record.
"""


def is_valid(name, /):
    return name in GRAMMAR


def is_operation(name, /):
    return (flag := GRAMMAR.get(name)) is not None and flag.kind is Kind.OPERATION


def is_global(name, /):
    return (flag := GRAMMAR.get(name)) is not None and flag.kind is Kind.GLOBAL


def takes_value(name, /):
    return (flag := GRAMMAR.get(name)) is not None and flag.value


def spell(name, /):
    """
    Return the command line spelling of a flag name.

    One-character names are short options ("S" -> "-S"); every other name is a
    long option ("nodeps" -> "--nodeps"). An empty name stays empty.
    """
    if not name:
        return ""
    return ("-" if len(name) == 1 else "--") + name


__all__ = (
    "Kind",
    "Flag",
    "GRAMMAR",
    "is_valid",
    "is_operation",
    "is_global",
    "takes_value",
    "spell",
)
