"""
Option schema and command declaration tests.

Scope
- Command class declarations: derived names, descriptions, field order, errors.
- build_schema(): one entry per spelling, positional acceptance, collisions.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from helmsman import (
    Command,
    Flag,
    FlagCollisionError,
    InvalidDeclarationError,
    Option,
    Positionals,
    Registry,
    build_schema,
    describe,
)


class TestCommandDeclaration(TestCase):
    """Descriptor derivation from command classes."""

    def testNameDerivedFromClassName(self):
        class FreeDiskSpace(Command):
            def run(self, context):
                return 0

        self.assertEqual(describe(FreeDiskSpace).name, "free-disk-space")

    def testNameKeywordDeclaresAndResolves(self):
        class Greet(Command, name="greet", descr="say hello"):
            name = Option("-n", "--name")

            def run(self, context):
                return 0

        descriptor = Registry(Greet).resolve("greet")
        self.assertIs(descriptor.factory, Greet)
        self.assertEqual([p.field for p in descriptor.parameters], ["name"])

    def testExplicitNameAndDescr(self):
        class Tool(Command, name="ls", descr="list entries"):
            def run(self, context):
                return 0

        descriptor = describe(Tool)
        self.assertEqual(descriptor.name, "ls")
        self.assertEqual(descriptor.descr, "list entries")
        self.assertIs(descriptor.factory, Tool)

    def testDescrDefaultsToDocstring(self):
        class Tool(Command, name="tool"):
            """Does tool things."""

            def run(self, context):
                return 0

        self.assertEqual(describe(Tool).descr, "Does tool things.")

    def testInvalidNameRejected(self):
        for name in ("Bad", "has space", "-dash", "", "under_score"):
            with self.subTest(name=name), self.assertRaises(InvalidDeclarationError):
                class Tool(Command, name=name):
                    def run(self, context):
                        return 0

    def testRunIsRequired(self):
        with self.assertRaises(InvalidDeclarationError):
            class Broken(Command):
                pass

    def testAbstractBaseHasNoDescriptor(self):
        class Base(Command, abstract=True):
            verbose = Flag("-v")

        with self.assertRaises(TypeError):
            describe(Base)

    def testInheritedParametersComeFirst(self):
        class Base(Command, abstract=True):
            verbose = Flag("-v")

        class Child(Base, name="child"):
            name = Option("--name")

            def run(self, context):
                return 0

        self.assertEqual([p.field for p in describe(Child).parameters], ["verbose", "name"])

    def testDeclarationOrderKept(self):
        class Tool(Command, name="tool"):
            zeta = Flag("--zeta")
            alpha = Option("--alpha")
            mid = Flag("--mid")

            def run(self, context):
                return 0

        self.assertEqual([p.field for p in describe(Tool).parameters], ["zeta", "alpha", "mid"])

    def testTwoPositionalsRejected(self):
        with self.assertRaises(InvalidDeclarationError):
            class Tool(Command, name="tool"):
                first = Positionals()
                second = Positionals()

                def run(self, context):
                    return 0

    def testUnexpectedClassKeyword(self):
        with self.assertRaises(TypeError):
            class Tool(Command, nmae="tool"):
                def run(self, context):
                    return 0

    def testDescribeRejectsPlainClasses(self):
        with self.assertRaises(TypeError):
            describe(object)


class TestBuildSchema(TestCase):
    """Schema construction and collision detection."""

    def testEntryPerSpelling(self):
        class Tool(Command, name="tool"):
            name = Option("-n", "--name")
            quiet = Flag("--quiet")

            def run(self, context):
                return 0

        schema = build_schema(describe(Tool))
        self.assertEqual(set(schema.flags()), {"-n", "--name", "--quiet"})
        self.assertIs(schema.lookup("-n"), Tool.name)
        self.assertIs(schema.lookup("--name"), Tool.name)
        self.assertIsNone(schema.lookup("--missing"))
        self.assertFalse(schema.accepts_positionals)

    def testPositionalsAccepted(self):
        class Tool(Command, name="tool"):
            rest = Positionals()

            def run(self, context):
                return 0

        self.assertTrue(build_schema(describe(Tool)).accepts_positionals)

    def testSharedSpellingCollides(self):
        class Tool(Command, name="tool"):
            first = Flag("-x", "--first")
            second = Flag("-x", "--second")

            def run(self, context):
                return 0

        with self.assertRaises(FlagCollisionError) as context:
            build_schema(describe(Tool))
        self.assertEqual(context.exception.options["flag"], "-x")

    def testHelpTokenIsReserved(self):
        class Tool(Command, name="tool"):
            helpful = Flag("--help")

            def run(self, context):
                return 0

        with self.assertRaises(FlagCollisionError):
            build_schema(describe(Tool))

    def testHelpRequestDetection(self):
        class Plain(Command, name="plain"):
            def run(self, context):
                return 0

        class Human(Command, name="human"):
            human = Flag("-h", "--human")

            def run(self, context):
                return 0

        plain = build_schema(describe(Plain))
        human = build_schema(describe(Human))
        self.assertTrue(plain.is_help_request(["--help"]))
        self.assertTrue(plain.is_help_request(["-h"]))
        self.assertFalse(plain.is_help_request(["--help", "x"]))
        self.assertFalse(plain.is_help_request([]))
        self.assertTrue(human.is_help_request(["--help"]))
        self.assertFalse(human.is_help_request(["-h"]))


if __name__ == "__main__":
    unittest.main()
