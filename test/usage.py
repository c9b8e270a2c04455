"""
Usage listing behavioral tests (layout, wrapping, defaults, styling, printing).

Scope
- Validate the exact plain-text layout (banner, right-aligned labels, headers).
- Validate word wrapping of long descriptions and the wrap() helper itself.
- Validate when the "(defaults to: ...)" suffix is shown.
- Validate that styling only applies to colorful registries and printing targets.

Conventions
- Test method names follow CamelCase per project convention.
- Layout assertions compare against format_usage(), the plain rendering.
"""

from __future__ import annotations

import io
import unittest
from contextlib import redirect_stdout, redirect_stderr
from unittest import TestCase

from optarg import Registry, wrap, format_usage, render_usage, print_usage


class TestWrap(TestCase):
    """Behavioral tests for the wrap() helper."""

    def testFittingTextIsUnchanged(self):
        self.assertEqual(wrap("short text", 80), ["short text"])

    def testEmptyTextYieldsMargin(self):
        self.assertEqual(wrap("", 10, 4), ["    "])

    def testMarginPrefixesEveryLine(self):
        self.assertEqual(wrap("alpha beta gamma", 12, 2), ["  alpha beta", "  gamma"])

    def testLongWordsAreNotBroken(self):
        self.assertEqual(wrap("supercalifragilistic word", 10), ["supercalifragilistic", "word"])

    def testArgumentValidation(self):
        with self.assertRaises(TypeError):
            wrap(None, 10)
        with self.assertRaises(ValueError):
            wrap("text", 0)
        with self.assertRaises(ValueError):
            wrap("text", 10, -1)


class TestUsageLayout(TestCase):
    """Behavioral tests for the plain usage listing."""

    def setUp(self):
        self.registry = Registry("Usage: prog [options]:", shell=False)

    def testAlignedLabels(self):
        self.registry.add("v", "verbose", "print more output", False)
        self.registry.add("c", "count", "number of retries", 5)
        self.assertEqual(
            format_usage(self.registry),
            "Usage: prog [options]:\n"
            " --verbose, -v: print more output\n"
            "   --count, -c: number of retries (defaults to: 5)\n"
        )

    def testHeaders(self):
        self.registry.add("v", "verbose", "print more output", False)
        self.registry.header("Output")
        self.registry.add("o", "output", "where to write the report")
        self.assertEqual(
            self.registry.format_usage(),
            "Usage: prog [options]:\n"
            " --verbose, -v: print more output\n"
            "\n"
            "[Output]\n"
            "  --output, -o: where to write the report\n"
        )

    def testHeadersDoNotWidenLabelColumn(self):
        self.registry.add("v", "verbose", "print more output", False)
        self.registry.header("A section title wider than every label")
        self.registry.add("c", "count", "number of retries", 5)
        self.assertEqual(
            format_usage(self.registry),
            "Usage: prog [options]:\n"
            " --verbose, -v: print more output\n"
            "\n"
            "[A section title wider than every label]\n"
            "   --count, -c: number of retries (defaults to: 5)\n"
        )

    def testEmptyRegistry(self):
        self.assertEqual(format_usage(self.registry), "Usage: prog [options]:\n")

    def testMissingDescription(self):
        self.registry.add("n", "name")
        self.assertEqual(format_usage(self.registry), "Usage: prog [options]:\n --name, -n: \n")

    def testDefaultSuffixOnlyForPrintableOptionDefaults(self):
        self.registry.add("n", "name", "who to greet")
        self.registry.add("s", "suffix", "appended text", "")
        self.registry.add("q", "quiet", "say less", True)
        self.registry.add("r", "ratio", "mix", 0.5)
        self.assertNotIn("defaults to", "".join(format_usage(self.registry).splitlines(True)[1:4]))
        self.assertIn("--ratio, -r: mix (defaults to: 0.5)", format_usage(self.registry))

    def testLongDescriptionWraps(self):
        self.registry.add("v", "verbose", " ".join(["word"] * 20), False)
        lines = format_usage(self.registry).splitlines()
        self.assertEqual(lines[1], " --verbose, -v: " + " ".join(["word"] * 13))
        self.assertEqual(lines[2], " " * 16 + " ".join(["word"] * 7))
        self.assertEqual(len(lines), 3)
        self.assertTrue(all(len(line) <= 80 for line in lines))

    def testCustomWidthAndPrefixes(self):
        registry = Registry("Usage: prog [options]:", short="/", long="//", width=30)
        registry.add("v", "verbose", "print more output than usual", False)
        self.assertEqual(
            format_usage(registry),
            "Usage: prog [options]:\n"
            " //verbose, /v: print more\n"
            "                output than\n"
            "                usual\n"
        )


class TestUsageStyling(TestCase):
    """Behavioral tests for rich rendering and printing."""

    def setUp(self):
        self.registry = Registry("Usage: prog [options]:", shell=False)
        self.registry.add("v", "verbose", "print more output", False)
        self.registry.add("c", "count", "number of retries", 5)

    def testPlainRegistryHasNoStyles(self):
        self.assertEqual(render_usage(self.registry).spans, [])

    def testColorfulRegistryIsStyled(self):
        self.registry.colorful = True
        rendered = self.registry.render_usage()
        styles = {span.style for span in rendered.spans}
        self.assertIn("bold #22C55E", styles)
        self.assertIn("bold #00E6FF", styles)
        self.assertEqual(rendered.plain, format_usage(self.registry))

    def testHostStylesOverridePalette(self):
        main = __import__("__main__")
        main.__styles__ = {"flag-name": "underline"}
        try:
            self.registry.colorful = True
            styles = {span.style for span in render_usage(self.registry).spans}
        finally:
            del main.__styles__
        self.assertIn("underline", styles)
        self.assertNotIn("bold #22C55E", styles)

    def testPrintUsageToStdout(self):
        stdout = io.StringIO()
        with redirect_stdout(stdout):
            print_usage(self.registry)
        self.assertEqual(stdout.getvalue(), format_usage(self.registry))

    def testUsageToStderr(self):
        stdout, stderr = io.StringIO(), io.StringIO()
        with redirect_stdout(stdout), redirect_stderr(stderr):
            self.registry.usage(stderr=True)
        self.assertEqual(stdout.getvalue(), "")
        self.assertIn("--count, -c: number of retries (defaults to: 5)", stderr.getvalue())


if __name__ == "__main__":
    unittest.main()
