"""
Parameters module behavioral tests (declarations, coercions, binding targets).

Scope
- Validate Option/Flag/Positionals construction and flag-spelling rules.
- Validate the closed Coercion set and its converters.
- Validate the descriptor protocol: default read-back, assign(), field capture.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from helmsman import (
    Coercion,
    Command,
    Flag,
    InvalidDeclarationError,
    Option,
    Positionals,
    Present,
    UnsupportedTypeError,
)


class TestOption(TestCase):
    """Behavioral tests for Option (valued) declarations."""

    def testOptionShortAndLong(self):
        o = Option("-n", "--name")
        self.assertEqual(o.short, "-n")
        self.assertEqual(o.long, "--name")
        self.assertTrue(o.valued)

    def testOptionNamesOrderDoesNotMatter(self):
        o = Option("--name", "-n")
        self.assertEqual(o.names, ("-n", "--name"))

    def testOptionRequiresAtLeastOneFlag(self):
        with self.assertRaises(InvalidDeclarationError):
            Option()

    def testOptionRejectsTwoShortFlags(self):
        with self.assertRaises(InvalidDeclarationError):
            Option("-a", "-b")

    def testOptionRejectsMalformedFlag(self):
        for name in ("name", "-name", "---name", "--bad_name", "--", "-"):
            with self.subTest(name=name), self.assertRaises(InvalidDeclarationError):
                Option(name)

    def testOptionDefaultCoercionIsText(self):
        self.assertIs(Option("--name").coercion, Coercion.TEXT)

    def testOptionBuiltinTypesMapToCoercions(self):
        self.assertIs(Option("--a", type=int).coercion, Coercion.WIDE_INTEGER)
        self.assertIs(Option("--b", type=float).coercion, Coercion.DOUBLE)
        self.assertIs(Option("--c", type=bool).coercion, Coercion.BOOLEAN)
        self.assertIs(Option("--d", type=Coercion.SINGLE).coercion, Coercion.SINGLE)

    def testOptionUnsupportedTypeRejectedAtDeclaration(self):
        with self.assertRaises(UnsupportedTypeError):
            Option("--items", type=list)

    def testOptionEmptyDescrRejected(self):
        with self.assertRaises(InvalidDeclarationError):
            Option("--name", descr="   ")

    def testOptionMetavarDefaultsToFieldName(self):
        class Tool(Command):
            block_size = Option("--block-size")

            def run(self, context):
                return 0

        self.assertEqual(Tool.block_size.metavar, "BLOCK-SIZE")
        self.assertEqual(Tool.block_size.field, "block_size")


class TestFlag(TestCase):
    """Behavioral tests for Flag (presence) declarations."""

    def testFlagIsPresenceOnly(self):
        f = Flag("-v", "--verbose")
        self.assertFalse(f.valued)
        self.assertIs(f.coercion, Coercion.BOOLEAN)
        self.assertIs(f.default, False)

    def testFlagLabelPrefersLong(self):
        self.assertEqual(Flag("-v", "--verbose").label, "--verbose")
        self.assertEqual(Flag("-v").label, "-v")


class TestCoercion(TestCase):
    """Behavioral tests for the closed coercion set."""

    def testTextPassesThrough(self):
        self.assertEqual(Coercion.TEXT.convert(" spaced "), " spaced ")

    def testIntegerBaseTen(self):
        self.assertEqual(Coercion.INTEGER.convert("-42"), -42)
        self.assertEqual(Coercion.INTEGER.convert("+7"), 7)

    def testIntegerRejectsMalformed(self):
        for raw in ("", "4.2", "0x10", "1_000", "ten", " 1"):
            with self.subTest(raw=raw), self.assertRaises(ValueError):
                Coercion.INTEGER.convert(raw)

    def testIntegerRange(self):
        self.assertEqual(Coercion.INTEGER.convert("2147483647"), 2147483647)
        with self.assertRaises(ValueError):
            Coercion.INTEGER.convert("2147483648")

    def testWideIntegerRange(self):
        self.assertEqual(Coercion.WIDE_INTEGER.convert("2147483648"), 2147483648)
        with self.assertRaises(ValueError):
            Coercion.WIDE_INTEGER.convert("9223372036854775808")

    def testDoubleDecimalSyntax(self):
        self.assertEqual(Coercion.DOUBLE.convert("1.5"), 1.5)
        self.assertEqual(Coercion.DOUBLE.convert("-2e3"), -2000.0)
        self.assertEqual(Coercion.DOUBLE.convert(".5"), 0.5)

    def testDoubleRejectsSpecialsAndGarbage(self):
        for raw in ("nan", "inf", "1.2.3", "abc", "", "1e999"):
            with self.subTest(raw=raw), self.assertRaises(ValueError):
                Coercion.DOUBLE.convert(raw)

    def testSingleRoundsToSinglePrecision(self):
        self.assertNotEqual(Coercion.SINGLE.convert("0.1"), 0.1)
        self.assertAlmostEqual(Coercion.SINGLE.convert("0.1"), 0.1, places=6)

    def testSingleOverflowRejected(self):
        for raw in ("1e39", "3.5e38", "-1e39"):
            with self.subTest(raw=raw), self.assertRaises(ValueError):
                Coercion.SINGLE.convert(raw)

    def testSingleLargestFiniteAccepted(self):
        self.assertAlmostEqual(Coercion.SINGLE.convert("3.4e38"), 3.4e38, delta=1e32)

    def testBooleanPresenceAndEmptyAreTrue(self):
        self.assertIs(Coercion.BOOLEAN.convert(Present), True)
        self.assertIs(Coercion.BOOLEAN.convert(""), True)
        self.assertIs(Coercion.BOOLEAN.convert("  "), True)

    def testBooleanTrueInAnyCase(self):
        for raw in ("true", "TRUE", "True", " true "):
            with self.subTest(raw=raw):
                self.assertIs(Coercion.BOOLEAN.convert(raw), True)

    def testBooleanOtherTextIsFalse(self):
        for raw in ("false", "yes", "on", "1", "maybe"):
            with self.subTest(raw=raw):
                self.assertIs(Coercion.BOOLEAN.convert(raw), False)


class TestBindingTargets(TestCase):
    """Behavioral tests for the descriptor protocol of parameters."""

    def makeTool(self):
        class Tool(Command):
            name = Option("--name", default="world")
            verbose = Flag("-v")
            rest = Positionals()

            def run(self, context):
                return 0

        return Tool

    def testDefaultsReadBack(self):
        tool = self.makeTool()()
        self.assertEqual(tool.name, "world")
        self.assertIs(tool.verbose, False)
        self.assertEqual(tool.rest, ())

    def testAssignWritesPerInstance(self):
        Tool = self.makeTool()
        first, second = Tool(), Tool()
        Tool.name.assign(first, "Ada")
        self.assertEqual(first.name, "Ada")
        self.assertEqual(second.name, "world")

    def testDescriptorIsImmutable(self):
        o = Option("--name")
        with self.assertRaises(AttributeError):
            o.short = "-n"

    def testSameParameterCannotBindTwoFields(self):
        shared = Flag("-x")
        with self.assertRaises(InvalidDeclarationError):
            class Tool(Command):
                first = shared
                second = shared

                def run(self, context):
                    return 0

    def testUnattachedParameterCannotAssign(self):
        with self.assertRaises(InvalidDeclarationError):
            Flag("-x").assign(object(), True)


if __name__ == "__main__":
    unittest.main()
