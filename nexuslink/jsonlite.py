"""A small, lenient JSON reader and writer used for component metadata.

Values map onto plain Python types: ``None``, ``bool``, ``int``/``float``,
``str``, ``list`` and ``dict``.  The reader accepts any character after a
backslash (unknown escapes yield the character itself), and when an object
repeats a key, the first occurrence wins.
"""

from __future__ import annotations

import os
import re
from typing import Any, Iterator

__all__ = ["JsonParseError", "parse", "parse_file", "dumps", "write_file"]

_WHITESPACE = " \t\n\v\f\r"
_NUMBER_RE = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_SIMPLE_ESCAPES = {"n": "\n", "r": "\r", "t": "\t"}
_OUTPUT_ESCAPES = {'"': '\\"', "\\": "\\\\", "\n": "\\n", "\r": "\\r", "\t": "\\t"}
_INDENT = 2
_INT_MIN, _INT_MAX = -(2**31), 2**31 - 1


class JsonParseError(ValueError):
    """Raised when text is not a JSON document this reader accepts."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} at position {position}")
        self.position = position


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def _peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def _skip_whitespace(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos] in _WHITESPACE:
            self.pos += 1

    def _fail(self, message: str) -> JsonParseError:
        return JsonParseError(message, self.pos)

    def document(self) -> Any:
        value = self.value()
        self._skip_whitespace()
        if self.pos != len(self.text):
            raise self._fail("unexpected trailing data")
        return value

    def value(self) -> Any:
        self._skip_whitespace()
        ch = self._peek()
        if ch == '"':
            return self.string()
        if ch == "[":
            return self.array()
        if ch == "{":
            return self.object()
        if ch == "-" or ch.isdigit() and ch.isascii():
            return self.number()
        for literal, result in (("null", None), ("true", True), ("false", False)):
            if self.text.startswith(literal, self.pos):
                self.pos += len(literal)
                return result
        raise self._fail("unexpected character" if ch else "unexpected end of input")

    def string(self) -> str:
        if self._peek() != '"':
            raise self._fail("expected string")
        self.pos += 1
        chars: list[str] = []
        while True:
            ch = self._peek()
            if not ch:
                raise self._fail("unterminated string")
            self.pos += 1
            if ch == '"':
                return "".join(chars)
            if ch == "\\":
                escaped = self._peek()
                if not escaped:
                    raise self._fail("unterminated escape")
                self.pos += 1
                chars.append(_SIMPLE_ESCAPES.get(escaped, escaped))
            else:
                chars.append(ch)

    def number(self) -> int | float:
        match = _NUMBER_RE.match(self.text, self.pos)
        if not match:
            raise self._fail("invalid number")
        literal = match.group()
        self.pos = match.end()
        if any(c in literal for c in ".eE"):
            return float(literal)
        return int(literal)

    def array(self) -> list[Any]:
        self.pos += 1
        items: list[Any] = []
        self._skip_whitespace()
        if self._peek() == "]":
            self.pos += 1
            return items
        while True:
            items.append(self.value())
            self._skip_whitespace()
            ch = self._peek()
            self.pos += 1
            if ch == "]":
                return items
            if ch != ",":
                self.pos -= 1
                raise self._fail("expected ',' or ']'")

    def object(self) -> dict[str, Any]:
        self.pos += 1
        members: dict[str, Any] = {}
        self._skip_whitespace()
        if self._peek() == "}":
            self.pos += 1
            return members
        while True:
            self._skip_whitespace()
            key = self.string()
            self._skip_whitespace()
            if self._peek() != ":":
                raise self._fail("expected ':'")
            self.pos += 1
            members.setdefault(key, self.value())
            self._skip_whitespace()
            ch = self._peek()
            self.pos += 1
            if ch == "}":
                return members
            if ch != ",":
                self.pos -= 1
                raise self._fail("expected ',' or '}'")


def parse(text: str) -> Any:
    """Parse a complete JSON document; raise JsonParseError if it is malformed."""
    return _Parser(text).document()


def parse_file(path: str | os.PathLike[str]) -> Any:
    """Read and parse a JSON file."""
    with open(path, encoding="utf-8") as handle:
        return parse(handle.read())


def _format_number(number: int | float) -> str:
    value = float(number)
    if value.is_integer() and _INT_MIN <= value <= _INT_MAX:
        return str(int(value))
    return "%g" % value


def _quote(text: str) -> str:
    return '"' + "".join(_OUTPUT_ESCAPES.get(c, c) for c in text) + '"'


def _emit(value: Any, indent: int, level: int) -> Iterator[str]:
    if indent and level:
        yield " " * level
    if value is None:
        yield "null"
    elif isinstance(value, bool):
        yield "true" if value else "false"
    elif isinstance(value, (int, float)):
        yield _format_number(value)
    elif isinstance(value, str):
        yield _quote(value)
    elif isinstance(value, (list, tuple)):
        yield from _emit_array(value, indent, level)
    elif isinstance(value, dict):
        yield from _emit_object(value, indent, level)
    else:
        raise TypeError(f"cannot serialise value of type {type(value).__name__}")


def _emit_array(items: list[Any] | tuple[Any, ...], indent: int, level: int) -> Iterator[str]:
    if items and indent:
        yield "[\n"
        last = len(items) - 1
        for position, item in enumerate(items):
            yield from _emit(item, indent, level + indent)
            yield ",\n" if position < last else "\n"
        yield " " * level + "]"
        return
    yield "["
    for position, item in enumerate(items):
        if position:
            yield ","
        yield from _emit(item, 0, 0)
    yield "]"


def _emit_object(members: dict[Any, Any], indent: int, level: int) -> Iterator[str]:
    if members and indent:
        yield "{\n"
        last = len(members) - 1
        for position, (key, item) in enumerate(members.items()):
            yield " " * (level + indent) + _quote(str(key)) + ": "
            yield from _emit(item, indent, level + indent)
            yield ",\n" if position < last else "\n"
        yield " " * level + "}"
        return
    yield "{"
    for position, (key, item) in enumerate(members.items()):
        if position:
            yield ","
        yield _quote(str(key)) + ":"
        yield from _emit(item, 0, 0)
    yield "}"


def dumps(value: Any, pretty: bool = False) -> str:
    """Serialise a value, compactly or with two-space indentation."""
    return "".join(_emit(value, _INDENT if pretty else 0, 0))


def write_file(value: Any, path: str | os.PathLike[str], pretty: bool = False) -> None:
    """Serialise a value into a file, replacing its contents."""
    text = dumps(value, pretty)
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(text)