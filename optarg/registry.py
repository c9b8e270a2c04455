"""
Option registry: declared entries plus the configuration of one command line.

A Registry replaces process-wide state (option list, switch prefixes, usage banner)
with an explicit object owned by the caller:

    registry = Registry()                              # "Usage: <prog> [options]:"
    registry.header("General")
    verbose = registry.add("v", "verbose", "print more output", False)
    count = registry.add("c", "count", "number of retries", 5)

    scanner = registry.scan()
    for option in scanner:
        ...
    leftovers = scanner.remainder

Lifecycle
- Declare every entry first, then scan. Declaring entries while a scan is running is
  not supported.
- Entries keep the value of their last match for as long as the registry lives.

Runtime options
- short/long: switch prefixes ("-" and "--" by default).
- banner: first line of the usage listing.
- shell: print faults to stderr (and exit on errors) instead of raising/warning.
- colorful: style the usage listing and diagnostics.
- strict: treat an option left without a value as a fatal error instead of a warning.
- width: total width of the usage listing.
"""
import builtins
import functools
import os.path
import sys

from .faults import OptargException, trigger
from .options import Header, Flag, Option
from .scanner import scan, parse
from .usage import render_usage, format_usage, print_usage
from .utils import *


def _program():
    return getattr(__import__("__main__"), "__prog__", os.path.basename(sys.argv[0]) if sys.argv else "") or "prog"


class Registry:
    """
    Ordered collection of headers, flags and options.

    Lookup returns the first declared switch whose long or short name matches; the
    registry does not reject duplicate names, so a well-formed registry keeps every
    name and short name unique.
    """
    entries = mirror("entries")
    short = mirror("short")
    long = mirror("long")
    banner = mirror("banner")
    width = mirror("width")

    def __init__(
            self,
            banner=Unset,
            /,
            *,
            short="-",
            long="--",
            shell=True,
            colorful=False,
            strict=False,
            width=80,
    ):
        for field, prefix in (("short", short), ("long", long)):
            if not isinstance(prefix, str):
                raise TypeError(f"registry '{field}' prefix must be a string")
            elif not prefix.strip() or prefix != prefix.strip():
                raise ValueError(f"registry '{field}' prefix must be a non-empty string without surrounding spaces")

        if not isinstance(banner, str | Unset):
            raise TypeError("registry 'banner' must be a string")

        if not isinstance(width, int) or isinstance(width, bool):
            raise TypeError("registry 'width' must be an integer")
        elif width < 1:
            raise ValueError("registry 'width' must be a positive integer")

        self._entries = []
        self._short = short
        self._long = long
        self._banner = coalesce(banner, f"Usage: {_program()} [options]:")
        self._width = width
        self.shell = bool(shell)
        self.colorful = bool(colorful)
        self.strict = bool(strict)

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return f"registry(banner={self._banner!r}, entries={len(self._entries)})"

    def register(self, entry, /):
        """
        Append a pre-built Header, Flag or Option and return it.
        """
        if not isinstance(entry, Header | Flag | Option):
            raise TypeError("register() argument must be a header, a flag or an option")
        self._entries.append(entry)
        return entry

    def header(self, title, /):
        """
        Append a section header; it only affects the usage listing.
        """
        return self.register(Header(title))

    def add(self, short, name, descr=Unset, default=None, /, *, type=Unset):
        """
        Declare a switch and return it.

        The kind is decided here: a bool default declares a Flag, anything else an
        Option converted by 'type' (falling back to the default's own type, or str
        when there is no default).
        """
        if isinstance(default, bool):
            if type is not Unset:
                raise TypeError("a flag cannot specify a 'type'")
            return self.register(Flag(short, name, descr, default))
        converter = coalesce(type, str if default is None else builtins.type(default))
        return self.register(Option(short, name, descr, default, converter))

    def find(self, token, /):
        """
        Return the first switch named 'token' (long or short name), or None.

        Headers never match.
        """
        for entry in self._entries:
            if isinstance(entry, Header):
                continue
            if token == entry.name or token == entry.short:
                return entry
        return None

    def scan(self, argv=Unset, /):
        """
        Lazily scan argv (defaults to sys.argv); see optarg.scanner.Scanner.
        """
        return scan(self, argv)

    def parse(self, argv=Unset, /):
        """
        Scan argv (defaults to sys.argv) to completion; returns a Parsed result.
        """
        return parse(self, argv)

    def render_usage(self):
        return render_usage(self)

    def format_usage(self):
        return format_usage(self)

    def usage(self, *, stderr=False):
        """
        Print the usage listing (stdout by default).
        """
        print_usage(self, stderr=stderr)

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this registry's runtime options.

        In shell mode, errors print their diagnostic, then the usage listing (both on
        stderr), then exit with status 1; outside shell mode they are raised.
        Warnings print to stderr in shell mode and go through warnings.warn otherwise.
        """
        options |= {"shell": self.shell, "colorful": self.colorful}
        if isinstance(fault, OptargException):
            options["usage"] = functools.partial(self.usage, stderr=True)
        trigger(fault, **options)


__all__ = (
    "Registry",
)
