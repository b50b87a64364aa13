"""
pacargs utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the grammar, parser and settings layers.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/[].

- truthy(text)
  • Interpret environment-style switches ("1", "true", "yes", "on").

- integer(text)
  • Strict decimal integer conversion that reports failure as None instead of raising.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback")  # None is preserved
    >>> truthy("Yes")
    True
    >>> integer("12"), integer("1_2"), integer("x")
    (12, None, None)
"""
import functools
import re
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    This is used when None is a legitimate user value, but the API needs a way
    to distinguish “not provided” from “provided as None”. A single instance,
    Unset, is exposed for use as the default in internal parameters.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in annotations (e.g., str | UnsetType).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        Support reversed PEP 604 unions when UnsetType appears on the right.
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        """
        Ensure a single instance for this sentinel type.
        """
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        """
        Disallow subclassing to preserve sentinel semantics.
        """
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve an internal Unset sentinel to a concrete default.

    This returns the given object unless it is the Unset sentinel, in which case
    the provided default is returned. Falsey values like None, 0, "" or [] are
    preserved as-is; they are not treated as “unset”.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def truthy(text, /):
    """
    Return True when text spells an enabled switch ("1", "true", "yes", "on").

    Matching ignores case and surrounding whitespace; anything else, including
    None, is False.
    """
    if not isinstance(text, str):
        return False
    return text.strip().lower() in ("1", "true", "yes", "on")


def integer(text, /):
    """
    Convert a plain decimal literal to int, or return None when it is not one.

    Only an optional sign followed by ASCII digits is accepted. Python's own
    int() is more lenient (underscores, surrounding whitespace, unicode digits),
    which the command line grammar does not allow.
    """
    if not isinstance(text, str) or not re.fullmatch(r"[+-]?[0-9]+", text):
        return None
    return int(text)


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Notes
- Singleton: there is only one Unset instance.
- Distinct from None: equality and identity checks must not treat it as None.
- Typical pattern: value = coalesce(user_value, default).
"""


__all__ = (
    # Functions
    "coalesce",
    "truthy",
    "integer",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
