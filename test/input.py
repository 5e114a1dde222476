# python
"""
Interactive input helpers behavioral tests.

Scope
- Validate that the message and prompt are printed before reading.
- Validate read_line/read_all/read_num results, strict UTF-8 decoding and EOF handling.

Conventions
- Test method names follow CamelCase per project convention.
- Consoles and streams are in-memory; stdin is never touched.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console

from libcli import read_line, read_all, read_num


class InputTestCase(TestCase):

    def setUp(self):
        self.console = Console(file=io.StringIO(), width=100, color_system=None)

    @property
    def printed(self):
        return self.console.file.getvalue()


class TestReadLine(InputTestCase):
    """read_line() prompts and returns a single line."""

    def testKeepsNewline(self):
        stream = io.StringIO("first\nsecond\n")
        self.assertEqual(read_line("Name", ": ", console=self.console, stream=stream), "first\n")
        self.assertEqual(stream.read(), "second\n")

    def testPromptIsPrinted(self):
        read_line("Name", ": ", console=self.console, stream=io.StringIO("x\n"))
        self.assertEqual(self.printed, "Name: ")

    def testMarkupIsLiteral(self):
        read_line("[bold]Name[/bold]", "> ", console=self.console, stream=io.StringIO(""))
        self.assertEqual(self.printed, "[bold]Name[/bold]> ")

    def testEndOfInput(self):
        self.assertEqual(read_line("Name", ": ", console=self.console, stream=io.StringIO("")), "")

    def testRejectsNonStrings(self):
        with self.assertRaises(TypeError):
            read_line(1, ": ", console=self.console, stream=io.StringIO(""))


class TestReadAll(InputTestCase):
    """read_all() prompts and returns everything."""

    def testReadsUntilEnd(self):
        stream = io.StringIO("one\ntwo\nthree")
        self.assertEqual(read_all("Text", "> ", console=self.console, stream=stream), "one\ntwo\nthree")
        self.assertEqual(self.printed, "Text> ")


class TestReadNum(InputTestCase):
    """read_num() reads an exact number of bytes as strict UTF-8."""

    def testReadsExactBytes(self):
        stream = io.BytesIO(b"abcdef")
        self.assertEqual(read_num(3, "Code", ": ", console=self.console, stream=stream), "abc")
        self.assertEqual(stream.read(), b"def")
        self.assertEqual(self.printed, "Code: ")

    def testMultibyteCharacters(self):
        stream = io.BytesIO("é!".encode())
        self.assertEqual(read_num(3, "Code", ": ", console=self.console, stream=stream), "é!")

    def testInvalidUtf8(self):
        with self.assertRaises(UnicodeDecodeError):
            read_num(1, "Code", ": ", console=self.console, stream=io.BytesIO("é".encode()))

    def testEndOfInput(self):
        with self.assertRaises(EOFError):
            read_num(4, "Code", ": ", console=self.console, stream=io.BytesIO(b"ab"))

    def testZeroBytes(self):
        self.assertEqual(read_num(0, "Code", ": ", console=self.console, stream=io.BytesIO(b"ab")), "")

    def testCountValidation(self):
        with self.assertRaises(TypeError):
            read_num("3", "Code", ": ", console=self.console, stream=io.BytesIO(b""))
        with self.assertRaises(ValueError):
            read_num(-1, "Code", ": ", console=self.console, stream=io.BytesIO(b""))


if __name__ == "__main__":
    unittest.main()
