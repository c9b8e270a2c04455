"""
Argument scanner: turn an argument vector into matched switches plus a remainder.

Token classes (checked in this order)
- long switch:  starts with the long prefix ("--name"). A bare long prefix ("--")
  goes to the remainder.
- short switch: longer than the short prefix and starts with it ("-x", "-abc").
  Every character after the prefix is a switch of its own (cluster expansion).
- plain token:  anything else, including a lone "-".

State machine
- A flag is emitted as soon as its switch is seen, with value "true".
- An option waits in a single pending slot until the next plain token, which becomes
  its value; the option is emitted then.
- Any switch replaces whatever option is pending. The replaced option is dangling: it
  is never emitted and is reported (DanglingOptionWarning, or the fatal
  OptionValueRequiredError when the registry is strict). The same happens to an
  option still pending when the input ends.
- Plain tokens seen while nothing is pending go to the remainder.
- Unknown switches are fatal (UnknownSwitchError through Registry.trigger).

Delivery
- Scanner is a lazy, finite iterator: matches are produced while the consumer pulls
  them, in input order. It cannot be restarted; build a new one to scan again.
- parse() runs a scanner to completion and returns a Parsed snapshot.

Example
    >>> registry = Registry("Usage: prog [options]:", shell=False)
    >>> name = registry.add("n", "name", "who to greet")
    >>> expand = registry.add("x", "expand", "say more", False)
    >>> parsed = registry.parse(["prog", "--name", "Alice", "-x", "extra", "stray"])
    >>> [str(option) for option in parsed.options]
    ['Alice', 'true']
    >>> parsed.remainder
    ('extra', 'stray')
"""
import difflib
import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .faults import *
from .options import Header, Flag, Switch
from .utils import *


@dataclass(frozen=True)
class Parsed:
    """
    Result of an eager scan.

    - options: matched switches in input order (a switch matched twice appears twice,
      carrying its last value).
    - remainder: tokens that were neither switches nor switch values.
    """
    options: tuple[Switch, ...]
    remainder: tuple[str, ...]


def _sanitized(argv):
    """
    Validate an argument vector and return it as a list of strings.

    Raises
    - TypeError: when argv is a bare string, not iterable, or holds non-strings.
    """
    if isinstance(argv, str) or not isinstance(argv, Iterable):
        raise TypeError("scan() argv must be an iterable of strings")
    tokens = list(argv)
    for token in tokens:
        if not isinstance(token, str):
            raise TypeError("scan() argv must be an iterable of strings")
    return tokens


class Scanner(Iterator):
    """
    Lazy iterator over the switches matched in an argument vector.

    Parameters
    - registry: the Registry holding the declared entries and the scan configuration.
    - argv: Unset | Iterable[str]
      Full argument vector including the program name at index 0 (always skipped).
      Defaults to sys.argv.

    Attributes
    - remainder: copy of the tokens collected so far; complete once the iterator
      is exhausted.
    """
    remainder = mirror("remainder")

    def __init__(self, registry, argv=Unset, /):
        self._registry = registry
        self._remainder = []
        self._generator = self._scan(_sanitized(coalesce(argv, sys.argv)))

    def __iter__(self):
        return self

    def __next__(self):
        return next(self._generator)

    def _resolve(self, name, input):
        """
        Look a switch up by name; unknown names are handed to the registry as faults.
        """
        if (switch := self._registry.find(name)) is not None:
            return switch

        spellings = []
        for entry in self._registry:
            if not isinstance(entry, Header):
                spellings += [self._registry.long + entry.name, self._registry.short + entry.short]

        options = {"code": FaultCode.UNKNOWN_SWITCH, "input": input}
        if suggestions := difflib.get_close_matches(input, spellings, 3):
            options |= {"suggestions": suggestions, "hint": "did you mean %r?" % suggestions[0]}

        return self._registry.trigger(UnknownSwitchError("Unknown option %r specified." % input, **options))

    def _drop(self, pending, successor):
        """
        Report an option that will never receive its value.

        successor is the switch spelling that displaced it, or Unset at the end of input.
        """
        option, input = pending
        if successor is Unset:
            reason = "option %r expects a value but the arguments ended" % input
            hint = "add a value after %r" % input
        else:
            reason = "option %r expects a value but was followed by %r" % (input, successor)
            hint = "put a value between %r and %r" % (input, successor)

        fault = OptionValueRequiredError if self._registry.strict else DanglingOptionWarning
        code = FaultCode.OPTION_VALUE_REQUIRED if self._registry.strict else FaultCode.DANGLING_OPTION
        self._registry.trigger(fault(reason, code=code, input=input, option=option, hint=hint))

    def _scan(self, argv):
        short = self._registry.short
        long = self._registry.long
        pending = None  # (option, spelling) awaiting a value

        for index, token in enumerate(argv):
            if index == 0:
                continue  # program name
            if not (token := token.strip()):
                continue

            if token.startswith(long):
                if not (name := token[len(long):].strip()):
                    self._remainder.append(long)
                    continue
                candidates = [(name, long + name)]
            elif len(token) > len(short) and token.startswith(short):
                candidates = [(char, short + char) for char in token[len(short):].strip()]
            else:
                if pending is None:
                    self._remainder.append(token)
                else:
                    option, _ = pending
                    pending = None
                    option._assign(token)
                    yield option
                continue

            for name, input in candidates:
                if (switch := self._resolve(name, input)) is None:
                    continue
                if pending is not None:
                    self._drop(pending, input)
                    pending = None
                if isinstance(switch, Flag):
                    switch._assign("true")
                    yield switch
                else:
                    pending = (switch, input)

        if pending is not None:
            self._drop(pending, Unset)


def scan(registry, argv=Unset, /):
    """
    Return a lazy Scanner over argv (defaults to sys.argv) for the given registry.
    """
    return Scanner(registry, argv)


def parse(registry, argv=Unset, /):
    """
    Scan argv to completion and return the matches and the remainder.
    """
    scanner = Scanner(registry, argv)
    options = tuple(scanner)
    return Parsed(options, tuple(scanner.remainder))


__all__ = (
    "Parsed",
    "Scanner",
    "scan",
    "parse",
)
