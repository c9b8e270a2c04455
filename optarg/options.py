r"""
optarg entry kinds: headers, flags and value-bearing options.

Overview
- Header: section label shown in the usage listing; never matched by the scanner.
- Flag: presence-only switch (e.g., -v/--verbose). Matching it stores "true".
- Option[_T]: value-bearing switch (e.g., -o/--output FILE). Matching it stores the
  raw token that follows; the converter given as 'type' turns it into a _T.

The kind of a switch is fixed when it is declared; neither the scanner nor the usage
formatter ever looks at the type of a default value to decide how to treat a switch.

Introspection & representation
- OptionType metaclass derives __typename__ from the class name, exposes every name
  listed in __introspectable__ as a read-only property (see utils.mirror) and provides
  stable __repr__/__rich_repr__ implementations.

Metadata (sanitized on construction)
- short: exactly one non-blank character (the "-x" spelling without its prefix).
- name: non-empty, no whitespace (the "--name" spelling without its prefix).
- descr: Unset | str, trimmed; Unset and blank strings become None.
- default: Flag → bool; Option → anything (None means “no default” in help).

Coercion accessors
- get(), boolean(), integer(), floating() read the raw value captured by the last scan
  and never raise: on a missing or unparsable value they fall back to the default.

Quick example:
    >>> verbose = Flag("v", "verbose", "print more")
    >>> count = Option("c", "count", "retries", default=5, type=int)
    >>> count.get()
    5
"""
import functools
import operator
import re

from .utils import *

_TRUTHY = frozenset(("1", "t", "T", "TRUE", "true", "True"))
_FALSY = frozenset(("0", "f", "F", "FALSE", "false", "False"))


class OptionType(type):
    """
    Metaclass giving every entry kind a typename, read-only metadata and stable reprs.

    Conventions
    - __typename__ is the class name split on camel-case humps with hyphens
      ("Header" → "header") and is used in declaration errors.
    - __introspectable__ lists the metadata exposed as read-only properties; each
      one is backed by "_{name}" on the instance.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                field: mirror(field) for field in namespace.get("__introspectable__", ())
            },
            **options
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - flag(short='v', name='verbose', descr='print more', default=False)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for field in type(self).__introspectable__:
                yield field, getattr(self, field)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_descr(cls, descr, /):
    if not isinstance(descr, str | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str):
        # A blank description is the same as none.
        return descr.strip() or None
    return coalesce(descr)


def _sanitize_names(cls, short, name, /):
    """
    Validate the two spellings of a switch (without their prefixes).

    Raises
    - TypeError: when either spelling is not a string.
    - ValueError: when 'short' is not a single non-blank character, or when
      'name' is empty or contains whitespace.
    """
    if not isinstance(short, str):
        raise TypeError(f"{cls.__typename__} 'short' must be a string")
    elif len(short) != 1 or short.isspace():
        raise ValueError(f"{cls.__typename__} 'short' must be a single non-blank character")

    if not isinstance(name, str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not re.fullmatch(r"\S+", name):
        raise ValueError(f"{cls.__typename__} 'name' must be a non-empty word without whitespace")


class Header(metaclass=OptionType):
    """
    Section label for the usage listing.

    A header carries only a title; it has no switches and the registry never
    returns it from a lookup.
    """
    __introspectable__ = ("title",)

    def __new__(cls, title, /):
        if not isinstance(title, str):
            raise TypeError(f"{cls.__typename__} 'title' must be a string")
        elif not (title := title.strip()):
            raise ValueError(f"{cls.__typename__} 'title' cannot be empty")
        self = super().__new__(cls)
        self._title = title
        return self


class Switch(metaclass=OptionType):
    """
    Common state and accessors of Flag and Option.

    A switch remembers the raw string captured by the most recent scan in
    'value' (None until matched). Each match overwrites the previous value.
    """
    __introspectable__ = ("short", "name", "descr", "default")

    def __new__(cls, short, name, descr=Unset, /, default=None):
        _sanitize_names(cls, short, name)
        self = super().__new__(cls)
        self._short = short
        self._name = name
        self._descr = _sanitize_descr(cls, descr)
        self._default = default
        self._value = None
        return self

    @property
    def value(self):
        """
        Raw string captured by the last scan, or None when never matched.
        """
        return self._value

    def _assign(self, value, /):
        self._value = value

    def __str__(self):
        return self._value if self._value is not None else ""

    def get(self):
        raise NotImplementedError("subclasses must implement")

    def boolean(self):
        """
        Interpret the value as a boolean.

        Accepted spellings: 1, t, T, TRUE, true, True and 0, f, F, FALSE, false, False.
        Anything else yields the default when it is a bool, otherwise False.
        """
        if self._value in _TRUTHY:
            return True
        if self._value in _FALSY:
            return False
        return self._default if isinstance(self._default, bool) else False

    def integer(self, bits=Unset, /, *, signed=True):
        """
        Interpret the value as a base-10 integer.

        Parameters
        - bits: Unset | int
          When given, the result wraps to that many bits (two's complement when signed).
        - signed: bool
          When False, negative input is rejected and falls back to the default.

        The default is returned (wrapped as well) when the value is missing or unparsable.
        """
        if not isinstance(bits, int | Unset) or isinstance(bits, bool):
            raise TypeError("integer() 'bits' must be an integer")
        if isinstance(bits, int) and bits < 1:
            raise ValueError("integer() 'bits' must be a positive integer")

        try:
            result = int(self._value, 10)
        except (TypeError, ValueError):
            result = self._default
        else:
            if not signed and result < 0:
                result = self._default

        # Flags default to a bool.
        if isinstance(result, bool):
            result = int(result)
        if bits is Unset or not isinstance(result, int):
            return result
        result &= (1 << bits) - 1
        if signed and result >= 1 << (bits - 1):
            result -= 1 << bits
        return result

    def floating(self):
        """
        Interpret the value as a float; the default is returned on failure.
        """
        try:
            return float(self._value)
        except (TypeError, ValueError):
            return self._default


class Flag(Switch):
    """
    Presence-only switch.

    The scanner emits a flag as soon as its switch is seen and stores "true"
    as its value; a flag never consumes the following token.
    """

    def __new__(cls, short, name, descr=Unset, /, default=False):
        if not isinstance(default, bool):
            raise TypeError(f"{cls.__typename__} 'default' must be a boolean")
        return super().__new__(cls, short, name, descr, default)

    def get(self):
        return self.boolean()


class Option[_T](Switch):
    """
    Value-bearing switch.

    The scanner holds a matched option until the next plain token arrives and
    stores that token as its value. 'type' converts the raw value in get().
    """
    __introspectable__ = ("short", "name", "descr", "default", "type")

    def __new__(cls, short, name, descr=Unset, /, default=None, type=str):
        if not callable(type):
            raise TypeError(f"{cls.__typename__} 'type' must be callable")
        self = super().__new__(cls, short, name, descr, default)
        self._type = type
        return self

    def get(self):
        """
        Convert the value with 'type'; the default is returned when the value
        is missing or the converter rejects it (ValueError/TypeError).
        """
        if self._value is None:
            return self._default
        try:
            return self._type(self._value)
        except (TypeError, ValueError):
            return self._default


__all__ = (
    "Header",
    "Switch",
    "Flag",
    "Option",
)
