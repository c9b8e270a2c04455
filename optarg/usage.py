"""
Usage listing: aligned switch labels with word-wrapped descriptions.

Layout
- The first line is the registry banner (e.g. "Usage: prog [options]:").
- Every switch is shown as a label "--name, -s: " right-aligned to a shared column
  (one character wider than the widest label), followed by its description.
- Descriptions wrap to the registry width; continuation lines are indented so they
  start under the first description character. Words are never split.
- Options with a printable default get " (defaults to: <value>)"; flags never do.
- Headers print as a blank line followed by "[title]".

Example (width 80)
    Usage: prog [options]:
     --verbose, -v: print more output
       --count, -c: number of retries (defaults to: 5)

    [Output]
      --output, -o: where to write the report

Palette keys (colorful registries only; override through __styles__ in __main__)
- usage-label, group-label, option-name, flag-name, argument-description
"""
import textwrap
from collections import defaultdict

from rich.console import Console
from rich.text import Text

from .options import Header, Flag, Option


def wrap(text, width, margin=0, /):
    """
    Word-wrap text into lines of at most 'width' characters, each prefixed with
    'margin' spaces.

    - Words are never broken; a word longer than the block gets a line of its own.
    - A text that already fits is returned unchanged as a single line.
    - An empty text yields a single line holding only the margin.
    """
    if not isinstance(text, str):
        raise TypeError("wrap() first argument must be a string")
    if not isinstance(width, int) or width < 1:
        raise ValueError("wrap() width must be a positive integer")
    if not isinstance(margin, int) or margin < 0:
        raise ValueError("wrap() margin must be a non-negative integer")

    indent = " " * margin
    return textwrap.wrap(
        text,
        max(width, margin + 1),
        initial_indent=indent,
        subsequent_indent=indent,
        break_long_words=False,
        break_on_hyphens=False,
    ) or [indent]


def _label(registry, switch):
    return f"{registry.long}{switch.name}, {registry.short}{switch.short}: "


def _describe(switch):
    descr = switch.descr or ""
    # Flags are either present or not; their default is never worth showing.
    if isinstance(switch, Option) and switch.default is not None:
        if default := str(switch.default):
            descr = f"{descr} (defaults to: {default})"
    return descr


def render_usage(registry):
    """
    Render the usage listing of a registry as a rich Text.

    Styling is applied only when the registry is colorful; the plain text is
    identical either way.
    """
    styles = defaultdict(str, {
        "usage-label": "bold #00E6FF",
        "group-label": "bold #FFFFFF",
        "option-name": "bold #00E6FF",
        "flag-name": "bold #22C55E",
        "argument-description": "#9CA3AF",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if registry.colorful else ""

    offset = 1 + max((len(_label(registry, entry)) for entry in registry if not isinstance(entry, Header)), default=0)

    usage = Text()
    usage.append(registry.banner, styler("usage-label")).append("\n")

    for entry in registry:
        if isinstance(entry, Header):
            usage.append("\n").append(f"[{entry.title}]", styler("group-label")).append("\n")
            continue

        usage.append(_label(registry, entry).rjust(offset), styler("flag-name" if isinstance(entry, Flag) else "option-name"))

        lines = wrap(_describe(entry), registry.width, offset)
        # The label already fills the margin of the first line.
        usage.append(lines[0].strip(), styler("argument-description")).append("\n")
        for line in lines[1:]:
            usage.append(line, styler("argument-description")).append("\n")

    return usage


def format_usage(registry):
    """
    Return the usage listing as plain text (one trailing newline).
    """
    return render_usage(registry).plain


def print_usage(registry, *, stderr=False):
    """
    Print the usage listing to stdout (or stderr) through a rich console.
    """
    console = Console(stderr=stderr, highlight=False)
    usage = render_usage(registry)
    usage.rstrip()
    console.print(usage, soft_wrap=True)


__all__ = (
    "wrap",
    "render_usage",
    "format_usage",
    "print_usage",
)
