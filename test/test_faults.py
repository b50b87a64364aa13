"""
Faults module behavioral tests (codes, trigger contract, rendering).

Scope
- Validate that fault codes are stable and normalized to strings.
- Validate trigger(): option merging, raising vs shell rendering + exit status.
- Validate rich rendering contains the message and hint, plain and fancy.

Conventions
- Test method names follow CamelCase per project convention.
- Rendering is captured with a dedicated rich Console writing to a StringIO.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase
from unittest.mock import patch

from rich.console import Console

from pacargs.faults import (
    ArgumentsException,
    FaultCode,
    InvalidConfigError,
    MultipleOperationsError,
    TerminalUnavailableError,
    UnknownOptionError,
    UnreadableInputError,
    getdoc,
    trigger,
)


def render(fault, width=120):
    console = Console(file=io.StringIO(), width=width, color_system=None, force_terminal=False)
    console.print(fault)
    return console.file.getvalue()


class TestFaultCode(TestCase):

    def testStableValues(self):
        self.assertEqual(FaultCode.UNKNOWN_OPTION, 21101)
        self.assertEqual(FaultCode.MULTIPLE_OPERATIONS, 21102)
        self.assertEqual(FaultCode.UNREADABLE_INPUT, 21201)
        self.assertEqual(FaultCode.TERMINAL_UNAVAILABLE, 21202)
        self.assertEqual(FaultCode.INVALID_CONFIG, 21301)

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.UNKNOWN_OPTION.normalize(), "21101")

    def testGetdoc(self):
        self.assertIsNone(getdoc(FaultCode.UNKNOWN_OPTION))
        with self.assertRaises(TypeError):
            getdoc(21101)


class TestHierarchy(TestCase):

    def testEveryFaultIsAnArgumentsException(self):
        for cls in (UnknownOptionError, MultipleOperationsError, UnreadableInputError,
                    TerminalUnavailableError, InvalidConfigError):
            with self.subTest(cls=cls.__name__):
                self.assertTrue(issubclass(cls, ArgumentsException))
                self.assertTrue(issubclass(cls, Exception))

    def testMessageIsTheExceptionText(self):
        fault = UnknownOptionError("invalid option 'x' in '-x'", token="-x")
        self.assertEqual(str(fault), "invalid option 'x' in '-x'")
        self.assertEqual(fault.token, "-x")

    def testOptionsAreReadOnly(self):
        fault = UnknownOptionError("message")
        with self.assertRaises(TypeError):
            fault.options["hint"] = "changed"  # type: ignore[index]

    def testReplaceKeepsTypeAndMergesOptions(self):
        fault = UnknownOptionError("message", hint="first", token="-x")
        replaced = fault.__replace__(hint="second")
        self.assertIsInstance(replaced, UnknownOptionError)
        self.assertEqual(replaced.options["hint"], "second")
        self.assertEqual(replaced.options["token"], "-x")
        self.assertEqual(fault.options["hint"], "first")


class TestTrigger(TestCase):

    def testRaisesOutsideShell(self):
        with self.assertRaises(UnknownOptionError) as context:
            trigger(UnknownOptionError("message", code=FaultCode.UNKNOWN_OPTION), hint="merged")
        self.assertEqual(context.exception.options["hint"], "merged")
        self.assertEqual(context.exception.code, FaultCode.UNKNOWN_OPTION)

    def testShellPrintsAndExits(self):
        with patch("pacargs.faults.console") as console:
            with self.assertRaises(SystemExit) as context:
                trigger(MultipleOperationsError("message"), shell=True)
        self.assertEqual(context.exception.code, 1)
        console.print.assert_called_once()

    def testRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("nope"))


class TestRendering(TestCase):

    def testPlainRendering(self):
        fault = UnknownOptionError(
            "invalid option 'z' in '-Sz'",
            title="invalid option",
            code=FaultCode.UNKNOWN_OPTION,
            hint="check the spelling",
            prog="yay",
            colorful=False,
        )
        output = render(fault)
        self.assertIn("yay", output)
        self.assertIn("21101", output)
        self.assertIn("Invalid Option", output)
        self.assertIn("invalid option 'z' in '-Sz'", output)
        self.assertIn("check the spelling", output)

    def testFancyRendering(self):
        fault = TerminalUnavailableError("cannot reopen '/dev/tty'", fancy=True, code=FaultCode.TERMINAL_UNAVAILABLE)
        output = render(fault)
        self.assertIn("cannot reopen '/dev/tty'", output)
        self.assertIn("21202", output)

    def testDocsFooter(self):
        fault = InvalidConfigError("bad file", docs="see the settings documentation", colorful=False)
        self.assertIn("see the settings documentation", render(fault))


if __name__ == "__main__":
    unittest.main()
