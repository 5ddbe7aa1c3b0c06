"""Reader for JavaScript object-literal text.

Turns the argument text of a Prisma call such as::

    { data: { name: 'Ada', admin: true, createdAt: new Date() } }

into Python values (dict, list, str, int, float, bool, None). Only literal
syntax is accepted; identifiers, calls, spreads and template interpolation
raise JsLiteralError, because their value is only known at runtime.

``new Date()`` reads as the SQL expression ``CURRENT_TIMESTAMP``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import NoReturn

from rwsdk_tools.core.source_scan import skip_comment


class JsLiteralError(ValueError):
    """Raised when text is not a plain JavaScript literal."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} (at offset {position})")
        self.position = position


@dataclass(frozen=True)
class SqlExpression:
    """SQL text emitted verbatim instead of as a quoted value."""

    sql: str


CURRENT_TIMESTAMP = SqlExpression("CURRENT_TIMESTAMP")

_IDENT_RE = re.compile(r"[A-Za-z_$][\w$]*")
_NUMBER_RE = re.compile(
    r"-?(?:0[xX][0-9a-fA-F_]+|(?:\d[\d_]*)?\.?\d[\d_]*(?:[eE][-+]?\d+)?)n?"
)
_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}
_KEYWORDS: dict[str, object] = {
    "true": True,
    "false": False,
    "null": None,
    "undefined": None,
}
_SNIPPET_LENGTH = 24


class _Reader:
    """Recursive-descent reader over a single literal."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    # -- low level -------------------------------------------------------

    def _skip_blank(self) -> None:
        while self.pos < len(self.text):
            if self.text[self.pos].isspace():
                self.pos += 1
                continue
            comment_end = skip_comment(self.text, self.pos)
            if comment_end is None:
                return
            self.pos = comment_end

    def peek(self) -> str:
        self._skip_blank()
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def expect(self, char: str) -> None:
        if self.peek() != char:
            self.fail(f"Expected '{char}'")
        self.pos += 1

    def fail(self, message: str) -> NoReturn:
        snippet = self.text[self.pos:self.pos + _SNIPPET_LENGTH]
        raise JsLiteralError(f"{message}, found {snippet!r}", self.pos)

    # -- values ----------------------------------------------------------

    def value(self) -> object:
        char = self.peek()
        if char == "{":
            return self.object()
        if char == "[":
            return self.array()
        if char in ("'", '"', "`"):
            return self.string()
        if char.isdigit() or char in ("-", "."):
            return self.number()

        match = _IDENT_RE.match(self.text, self.pos)
        if match is None:
            self.fail("Unsupported value")
        word = match.group(0)
        if word in _KEYWORDS:
            self.pos = match.end()
            return _KEYWORDS[word]
        if word == "new":
            self.pos = match.end()
            return self.new_expression()
        self.fail("Unsupported expression")

    def object(self) -> dict[str, object]:
        self.expect("{")
        result: dict[str, object] = {}
        while True:
            char = self.peek()
            if char == "}":
                self.pos += 1
                return result
            if self.text.startswith("...", self.pos):
                self.fail("Spread is not a literal")
            key = self.key()
            self.expect(":")
            result[key] = self.value()
            if self.peek() == ",":
                self.pos += 1
            elif self.peek() != "}":
                self.fail("Expected ',' or '}'")

    def key(self) -> str:
        char = self.peek()
        if char in ("'", '"'):
            return self.string()
        if char.isdigit():
            return str(self.number())
        match = _IDENT_RE.match(self.text, self.pos)
        if match is None:
            self.fail("Expected property name")
        self.pos = match.end()
        if self.peek() != ":":
            self.fail(f"Shorthand property '{match.group(0)}' is not a literal")
        return match.group(0)

    def array(self) -> list[object]:
        self.expect("[")
        result: list[object] = []
        while True:
            char = self.peek()
            if char == "]":
                self.pos += 1
                return result
            if self.text.startswith("...", self.pos):
                self.fail("Spread is not a literal")
            result.append(self.value())
            if self.peek() == ",":
                self.pos += 1
            elif self.peek() != "]":
                self.fail("Expected ',' or ']'")

    def string(self) -> str:
        quote = self.text[self.pos]
        self.pos += 1
        chars: list[str] = []
        while self.pos < len(self.text):
            char = self.text[self.pos]
            if char == quote:
                self.pos += 1
                return "".join(chars)
            if char == "\\":
                chars.append(self._escape())
                continue
            if quote == "`" and self.text.startswith("${", self.pos):
                self.fail("Template interpolation is not a literal")
            if char == "\n" and quote != "`":
                break
            chars.append(char)
            self.pos += 1
        self.fail("Unterminated string")

    def _escape(self) -> str:
        # self.pos is on the backslash
        self.pos += 1
        if self.pos >= len(self.text):
            self.fail("Unterminated escape")
        char = self.text[self.pos]
        self.pos += 1
        if char in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[char]
        if char == "\n":
            return ""
        if char == "\r":
            if self.text.startswith("\n", self.pos):
                self.pos += 1
            return ""
        if char == "x":
            return self._code_point(2)
        if char == "u":
            if self.text.startswith("{", self.pos):
                end = self.text.find("}", self.pos)
                if end == -1:
                    self.fail("Unterminated unicode escape")
                digits = self.text[self.pos + 1:end]
                self.pos = end + 1
                return self._from_hex(digits)
            return self._code_point(4)
        return char

    def _code_point(self, length: int) -> str:
        digits = self.text[self.pos:self.pos + length]
        self.pos += length
        return self._from_hex(digits)

    def _from_hex(self, digits: str) -> str:
        try:
            return chr(int(digits, 16))
        except ValueError:
            self.fail(f"Invalid escape digits {digits!r}")

    def number(self) -> int | float:
        match = _NUMBER_RE.match(self.text, self.pos)
        if match is None:
            self.fail("Invalid number")
        self.pos = match.end()
        raw = match.group(0).replace("_", "").rstrip("n")
        negative = raw.startswith("-")
        body = raw.lstrip("-")
        if body[:2].lower() == "0x":
            value: int | float = int(body, 16)
        elif any(c in body for c in ".eE"):
            value = float(body)
        else:
            value = int(body)
        return -value if negative else value

    def new_expression(self) -> object:
        self._skip_blank()
        match = _IDENT_RE.match(self.text, self.pos)
        if match is None or match.group(0) != "Date":
            self.fail("Only 'new Date(...)' is supported")
        self.pos = match.end()
        self.expect("(")
        if self.peek() == ")":
            self.pos += 1
            return CURRENT_TIMESTAMP
        argument = self.value()
        self.expect(")")
        if not isinstance(argument, str):
            self.fail("Only string arguments to 'new Date' are supported")
        return argument


def parse_js_literal(text: str) -> object:
    """Parse *text* as a single JavaScript literal.

    Raises:
        JsLiteralError: If the text holds anything but literal syntax
    """
    reader = _Reader(text)
    result = reader.value()
    if reader.peek() != "":
        reader.fail("Unexpected trailing text")
    return result
