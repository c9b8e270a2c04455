"""
optarg faults (errors and warnings) and rendering.

Scope
- FaultCode: stable numeric identifiers for every user-facing issue the scanner
  can surface, grouped by domain (11xxx errors, 12xxx warnings).
- OptargException / OptargWarning: base types carrying a message plus runtime
  options; they know how to render themselves (rich) and how to surface
  themselves (raise, warn, or print-and-exit).
- trigger(): central entry point to surface any fault.

Runtime options understood by the built-in faults
- shell: bool. When true, faults are printed to stderr through rich instead of
  being raised/warned; exceptions then terminate the process with status 1.
- colorful: bool. Enables the style palette (see __styles__ in __main__).
- usage: callable. Run after printing an exception in shell mode (the registry
  uses it to print the usage listing before exiting).
- hint: str. Optional one-line suggestion printed under the message.
- code: FaultCode attached to the fault.

Integration
- Scanner code builds a fault and hands it to Registry.trigger(), which merges
  the registry configuration into the options and calls trigger().
"""
import inspect
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.text import Text

console = Console(stderr=True, highlight=False)


class FaultCode(IntEnum):
    """
    canonical fault codes used by the scanner (stable identifiers).

    grouping
    - switches (11xxx): UNKNOWN_SWITCH, OPTION_VALUE_REQUIRED
    - warnings (12xxx): DANGLING_OPTION

    the host application can relabel codes through a __codes__ mapping in __main__.
    """
    # --- switch errors (11xxx) ---
    UNKNOWN_SWITCH        = 11112
    OPTION_VALUE_REQUIRED = 11117

    # --- warnings (12xxx) ---
    DANGLING_OPTION       = 12117

    def normalize(self):
        """
        return a host-normalized string for this code.

        when __main__ defines no __codes__ mapping (or has no entry for this
        code), the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette):
    """
    Build the rich renderable shared by exceptions and warnings.

    The message always comes first; an optional hint follows on its own line.
    """
    styles = defaultdict(str, palette | getattr(__import__("__main__"), "__styles__", {}))
    colorful = fault.options.get("colorful", False)

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        return Text(str(fragment), styles[style])

    message = text(fault.message, "message")
    if not (hint := fault.options.get("hint")):
        return message
    return Group(message, Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))


class OptargException(Exception):
    """
    Base type for fatal, user-facing scanner faults.
    """

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError("fault message must be a string")
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    def __rich__(self):
        return _render(self, {
            "message": "bold #FF4DA6",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        })

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        if callable(usage := self.options.get("usage")):
            usage()
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownSwitchError(OptargException): ...
class OptionValueRequiredError(OptargException): ...


class OptargWarning(Warning):
    """
    Base type for recoverable scanner faults.
    """

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError("fault message must be a string")
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    def __rich__(self):
        return _render(self, {
            "message": "bold #FFB400",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        })

    def __trigger__(self):
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DanglingOptionWarning(OptargWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - exceptions raise (shell=False) or print-and-exit (shell=True); warnings warn or print.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "OptargException",
    "UnknownSwitchError",
    "OptionValueRequiredError",
    "OptargWarning",
    "DanglingOptionWarning",
    "trigger",
)
