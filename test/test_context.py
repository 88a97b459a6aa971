"""
Execution context, sinks and settings tests.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import io
import logging
import sys
import unittest
from pathlib import Path
from unittest import TestCase, mock

from rich.logging import RichHandler

from helmsman import ExecutionContext, Settings, Sink, configure_logging


class TestSink(TestCase):

    def testWriteAndPrint(self):
        sink = Sink()
        sink.write("a")
        sink.print("b", 1, sep="-")
        self.assertEqual(sink.getvalue(), "ab-1\n")
        self.assertEqual(len(sink), 5)

    def testFlushOnce(self):
        sink = Sink()
        sink.print("done")
        stream = io.StringIO()
        sink.flush_to(stream)
        self.assertTrue(sink.flushed)
        self.assertEqual(stream.getvalue(), "done\n")
        with self.assertRaises(ValueError):
            sink.flush_to(stream)
        with self.assertRaises(ValueError):
            sink.write("late")

    def testEmptySinkWritesNothing(self):
        stream = io.StringIO()
        Sink().flush_to(stream)
        self.assertEqual(stream.getvalue(), "")


class TestExecutionContext(TestCase):

    def testFields(self):
        stdout, stderr = Sink(), Sink()
        context = ExecutionContext("/tmp", stdout, stderr)
        self.assertEqual(context.cwd, Path("/tmp"))
        self.assertIs(context.stdout, stdout)
        self.assertIs(context.stderr, stderr)

    def testReadOnly(self):
        context = ExecutionContext("/tmp", Sink(), Sink())
        with self.assertRaises(AttributeError):
            context.cwd = Path("/")


class TestSettings(TestCase):

    def testDefaults(self):
        settings = Settings()
        self.assertEqual(settings.prog, "helmsman")
        self.assertEqual(settings.version, "0.1.0")
        self.assertFalse(settings.colorful)
        self.assertFalse(settings.fancy)
        self.assertEqual(settings.log_level, "WARNING")

    def testFromEnviron(self):
        settings = Settings.from_environ({
            "NO_COLOR": "1",
            "HELMSMAN_FANCY": "Yes",
            "HELMSMAN_LOG_LEVEL": "debug",
        })
        self.assertFalse(settings.colorful)
        self.assertTrue(settings.fancy)
        self.assertEqual(settings.log_level, "DEBUG")

    def testUnknownEnvironLevelFallsBack(self):
        self.assertEqual(Settings.from_environ({"HELMSMAN_LOG_LEVEL": "loud"}).log_level, "WARNING")

    def testOverridesWin(self):
        settings = Settings.from_environ({"HELMSMAN_FANCY": "1"}, fancy=False, prog="tool")
        self.assertFalse(settings.fancy)
        self.assertEqual(settings.prog, "tool")

    def testInvalidLevelRejected(self):
        with self.assertRaises(ValueError):
            Settings(log_level="loud")

    def testNumericLevel(self):
        self.assertEqual(Settings(log_level=logging.INFO).log_level, "INFO")

    def testHostProgramNameIsTheDefault(self):
        with mock.patch.object(sys.modules["__main__"], "__prog__", "hosted", create=True):
            self.assertEqual(Settings().prog, "hosted")
            self.assertEqual(Settings.from_environ({}).prog, "hosted")

    def testExplicitProgramNameWinsOverHost(self):
        with mock.patch.object(sys.modules["__main__"], "__prog__", "hosted", create=True):
            self.assertEqual(Settings(prog="tool").prog, "tool")
            self.assertEqual(Settings.from_environ({}, prog="tool").prog, "tool")


class TestConfigureLogging(TestCase):

    def testIdempotent(self):
        logger = configure_logging("INFO")
        configure_logging("DEBUG")
        handlers = [handler for handler in logger.handlers if isinstance(handler, RichHandler)]
        self.assertEqual(len(handlers), 1)
        self.assertEqual(logger.level, logging.DEBUG)
        self.assertFalse(logger.propagate)
        configure_logging("WARNING")


if __name__ == "__main__":
    unittest.main()
