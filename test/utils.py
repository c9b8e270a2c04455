"""
Tests for the internal helpers in optarg.utils.

This module verifies:
- The Unset sentinel: singleton identity, falsy semantics, representation,
  copy/pickle identity, union support and finality.
- coalesce(): only Unset is replaced; other falsey values are preserved.
- rename(): function and decorator forms plus argument validation.
- mirror(): read-only properties returning detached copies of containers.
"""
import copy
import pickle
import unittest
from unittest import TestCase

from optarg.utils import *


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingleton(self) -> None:
        # Identity must be preserved across repeated constructions.
        self.assertIs(Unset, UnsetType())
        self.assertIs(UnsetType(), UnsetType())

    def testFalsely(self) -> None:
        self.assertFalse(bool(Unset))

    def testNotEqualToNoneOrFalse(self) -> None:
        self.assertNotEqual(Unset, None)
        self.assertNotEqual(Unset, False)  # noqa: E712

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testCopyDeepcopyPreserveSingleton(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testPickleRoundTrip(self) -> None:
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testUnionWithTypes(self) -> None:
        # The sentinel can stand in for its type inside isinstance() unions.
        self.assertTrue(isinstance("name", str | Unset))
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertFalse(isinstance(1, str | Unset))

    def testFinalClass(self) -> None:
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})


class TestCoalesce(TestCase):
    """Behavioral tests for coalesce()."""

    def testUnsetIsReplaced(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")

    def testUnsetWithoutDefaultIsNone(self) -> None:
        self.assertIsNone(coalesce(Unset))

    def testFalseyValuesArePreserved(self) -> None:
        for value in (None, 0, "", [], False):
            self.assertIs(coalesce(value, "fallback"), value)


class TestRename(TestCase):
    """Behavioral tests for rename()."""

    def testFunctionForm(self) -> None:
        def f():
            pass

        self.assertIs(rename(f, "do_work"), f)
        self.assertEqual(f.__name__, "do_work")
        self.assertEqual(f.__qualname__, "do_work")

    def testDecoratorForm(self) -> None:
        @rename("do_work")
        def f():
            pass

        self.assertEqual(f.__name__, "do_work")

    def testRejectsNonCallable(self) -> None:
        with self.assertRaises(TypeError):
            rename(1, "name")

    def testRejectsNonStringName(self) -> None:
        with self.assertRaises(TypeError):
            rename(lambda: None, 1)
        with self.assertRaises(TypeError):
            rename(1)

    def testRejectsWrongArity(self) -> None:
        with self.assertRaises(TypeError):
            rename()


class TestMirror(TestCase):
    """Behavioral tests for mirror()."""

    def setUp(self) -> None:
        class Holder:
            items = mirror("items")
            label = mirror("label")

            def __init__(self):
                self._items = [1, [2, 3]]
                self._label = "holder"

        self.holder = Holder()

    def testReadsBackingField(self) -> None:
        self.assertEqual(self.holder.items, [1, [2, 3]])
        self.assertEqual(self.holder.label, "holder")

    def testReturnsDetachedCopies(self) -> None:
        items = self.holder.items
        items.append(4)
        items[1].append(5)
        self.assertEqual(self.holder.items, [1, [2, 3]])

    def testIsReadOnly(self) -> None:
        with self.assertRaises(AttributeError):
            self.holder.label = "other"

    def testRejectsNonStringName(self) -> None:
        with self.assertRaises(TypeError):
            mirror(1)


if __name__ == '__main__':
    unittest.main()
