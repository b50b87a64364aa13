"""
Grammar table tests (classification predicates and spelling).

Scope
- Validate the operation / global / local split, including the front end's own operations.
- Validate value-taking flags and the master validity predicate.
- Validate that every name has exactly one classification.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from pacargs.grammar import GRAMMAR, Flag, Kind, is_global, is_operation, is_valid, spell, takes_value


class TestClassification(TestCase):
    """Behavioral tests for the classification predicates."""

    def testPacmanOperationsInBothSpellings(self):
        for name in ("S", "sync", "R", "remove", "Q", "query", "U", "upgrade", "D", "database",
                     "F", "files", "T", "deptest", "V", "version"):
            with self.subTest(name=name):
                self.assertTrue(is_operation(name))

    def testFrontEndOperations(self):
        for name in ("Y", "yay", "P", "show", "G", "getpkgbuild"):
            with self.subTest(name=name):
                self.assertTrue(is_operation(name))

    def testGlobals(self):
        for name in ("b", "dbpath", "r", "root", "v", "verbose", "config", "color", "noconfirm", "confirm"):
            with self.subTest(name=name):
                self.assertTrue(is_global(name))
                self.assertFalse(is_operation(name))

    def testLocalSwitchesAreNeitherOperationNorGlobal(self):
        for name in ("y", "refresh", "u", "d", "nodeps", "needed", "-", "--", "devel", "sortby"):
            with self.subTest(name=name):
                self.assertTrue(is_valid(name))
                self.assertFalse(is_operation(name))
                self.assertFalse(is_global(name))

    def testTakesValue(self):
        for name in ("b", "dbpath", "r", "root", "ignore", "print-format", "color", "sortby", "requestsplitn"):
            with self.subTest(name=name):
                self.assertTrue(takes_value(name))
        for name in ("S", "y", "d", "nodeps", "devel", "-", "--"):
            with self.subTest(name=name):
                self.assertFalse(takes_value(name))

    def testUnknownNames(self):
        for name in ("notaflag", "z", "", "SYNC", "db-path"):
            with self.subTest(name=name):
                self.assertFalse(is_valid(name))
                self.assertFalse(is_operation(name))
                self.assertFalse(is_global(name))
                self.assertFalse(takes_value(name))

    def testSingleClassificationPerName(self):
        for name, flag in GRAMMAR.items():
            with self.subTest(name=name):
                self.assertIsInstance(flag, Flag)
                self.assertEqual(sum((is_operation(name), is_global(name))), 0 if flag.kind is Kind.LOCAL else 1)

    def testOperationsNeverTakeValues(self):
        for name, flag in GRAMMAR.items():
            if flag.kind is Kind.OPERATION:
                self.assertFalse(flag.value, name)

    def testGrammarIsReadOnly(self):
        with self.assertRaises(TypeError):
            GRAMMAR["bogus"] = Flag(Kind.LOCAL)  # type: ignore[index]


class TestSpell(TestCase):

    def testShortAndLong(self):
        self.assertEqual(spell("S"), "-S")
        self.assertEqual(spell("nodeps"), "--nodeps")
        self.assertEqual(spell("print-format"), "--print-format")

    def testEmpty(self):
        self.assertEqual(spell(""), "")


if __name__ == "__main__":
    unittest.main()
