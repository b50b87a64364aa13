"""
Inspection entry point tests.

Conventions
- Test method names follow CamelCase per project convention.
- The settings file is redirected to a temporary directory through PACARGS_CONFIG.
"""

from __future__ import annotations

import functools
import io
import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import TestCase
from unittest.mock import patch

from pacargs import StreamSource
from pacargs.__main__ import main


class TestMain(TestCase):

    def setUp(self):
        self.directory = tempfile.TemporaryDirectory()
        self.path = Path(self.directory.name) / "config.json"
        self.environ = patch.dict(os.environ, {"PACARGS_CONFIG": str(self.path)})
        self.environ.start()

    def tearDown(self):
        self.environ.stop()
        self.directory.cleanup()

    def testPrintsForwardedCommandLine(self):
        with patch("sys.stdout", new_callable=io.StringIO) as stdout:
            self.assertEqual(main(["-S", "--sortby=name", "--needed", "pkg"]), 0)
        output = stdout.getvalue()
        self.assertIn("--needed", output)
        self.assertIn("pkg", output)
        self.assertNotIn("--sortby", output)
        self.assertFalse(self.path.exists())

    def testSaveWritesSettings(self):
        with patch("sys.stdout", new_callable=io.StringIO):
            self.assertEqual(main(["--save", "--sortby=popularity", "-S"]), 0)
        self.assertEqual(json.loads(self.path.read_text(encoding="utf-8"))["sortby"], "popularity")

    def testFaultExitsWithStatusOne(self):
        with patch("pacargs.faults.console") as console:
            with self.assertRaises(SystemExit) as context:
                main(["-S", "--bogus"])
        self.assertEqual(context.exception.code, 1)
        console.print.assert_called_once()

    def testStandardInputTargetsAndReattachedTerminal(self):
        terminal = Path(self.directory.name) / "tty"
        terminal.write_text("")
        with patch("sys.stdin", io.StringIO("foo\nbar\n")), \
                patch("pacargs.__main__.StreamSource", functools.partial(StreamSource, terminal=str(terminal))), \
                patch("sys.stdout", new_callable=io.StringIO) as stdout:
            self.assertEqual(main(["-S", "-"]), 0)
        output = stdout.getvalue()
        self.assertIn("'bar'", output)
        self.assertIn(str(terminal), output)


class TestPackageMetadata(TestCase):

    def testMetadataNamesThisProject(self):
        import pacargs
        self.assertEqual(pacargs.__title__, "pacargs")
        self.assertEqual(pacargs.__author__, "The pacargs Authors")
        self.assertEqual(pacargs.__license__, "MIT")
        self.assertEqual(pacargs.version_info[:3], (0, 0, 0))


if __name__ == "__main__":
    unittest.main()
