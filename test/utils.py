"""
Utilities tests (sentinel, coalesce, rename, mirror, disjoin).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from parley.utils import Unset, UnsetType, coalesce, rename, mirror, disjoin


class TestUnset(TestCase):

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsey(self):
        self.assertFalse(Unset)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testNotATypeUnionMember(self):
        with self.assertRaises(TypeError):
            str | Unset

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            type("Other", (UnsetType,), {})

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertEqual(coalesce("", "fallback"), "")
        self.assertIsNone(coalesce(None, "fallback"))


class TestRename(TestCase):

    def testFunctionForm(self):
        function = rename(lambda: None, "named")
        self.assertEqual(function.__name__, "named")
        self.assertEqual(function.__qualname__, "named")

    def testDecoratorForm(self):
        @rename("named")
        def function():
            pass

        self.assertEqual(function.__name__, "named")

    def testNonCallableRejected(self):
        with self.assertRaises(TypeError):
            rename(1, "named")

    def testWrongArity(self):
        with self.assertRaises(TypeError):
            rename()


class TestMirror(TestCase):

    def testReturnsCopies(self):
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = ["a"]

        holder = Holder()
        holder.items.append("b")
        self.assertEqual(holder.items, ["a"])

    def testUnsetReadsAsNone(self):
        class Holder:
            value = mirror("value")
            _value = Unset

        self.assertIsNone(Holder().value)


class TestDisjoin(TestCase):

    def testEmpty(self):
        self.assertEqual(disjoin([]), "")

    def testOne(self):
        self.assertEqual(disjoin(["'a'"]), "'a'")

    def testTwo(self):
        self.assertEqual(disjoin(["'a'", "'b'"]), "'a', or 'b'")

    def testMany(self):
        self.assertEqual(disjoin(["'a'", "'b'", "'c'", "'d'"]), "'a', 'b', 'c', or 'd'")

    def testNonStringRejected(self):
        with self.assertRaises(TypeError):
            disjoin([1, 2])


if __name__ == "__main__":
    unittest.main()
