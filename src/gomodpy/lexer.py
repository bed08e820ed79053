from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TypeVar

from .ast import Interpreted, Raw
from .errors import ParseError
from .spans import LineIndex, Location, Range


T = TypeVar("T")

Rule = Callable[["Cursor"], T]


_DELIMS_RE = re.compile(r"[ \t\r]*")
_RAW_STRING_RE = re.compile(r"`([^`\n]+)`")
# A bare token ends at "//", "=>", whitespace, one of "(),[]" or end of input.
_BARE_TOKEN_RE = re.compile(r"(?:(?!//|=>)[^ \t\n\r(),\[\]])+")
_MODULE_PATH_RE = re.compile(r"[A-Za-z0-9\-_.~]+(?:/[A-Za-z0-9\-_.~]+)*")
_GODEBUG_TOKEN_RE = re.compile(r"[^ \t\r\n,\"'`=]+")

# Characters that may not appear unescaped inside an interpreted string.
_INTERPRETED_FORBIDDEN = "\n\r\t\b\f"


class NoMatch(Exception):
    """A rule did not match at ``offset``; the caller may backtrack."""

    def __init__(self, offset: int) -> None:
        super().__init__(offset)
        self.offset = offset


@dataclass(slots=True)
class Cursor:
    """Read position over one source text.

    The cursor also remembers the furthest offset any rule failed at, and what
    was expected there, so a failed parse can point at the first unparseable byte.
    """

    src: str
    i: int = 0
    index: LineIndex = field(init=False)
    furthest: int = 0
    expected: set[str] = field(default_factory=set)

    def __post_init__(self) -> None:
        self.index = LineIndex(self.src)

    def eof(self) -> bool:
        return self.i >= len(self.src)

    def peek(self, n: int = 0) -> str:
        j = self.i + n
        if j >= len(self.src):
            return ""
        return self.src[j]

    def startswith(self, text: str) -> bool:
        return self.src.startswith(text, self.i)

    def advance(self, n: int = 1) -> None:
        self.i = min(self.i + n, len(self.src))

    def location(self) -> Location:
        return self.index.location(self.i)

    def range(self, start: int, end: int) -> Range:
        return self.index.range(start, end)

    def fail(self, *expected: str) -> NoMatch:
        if self.i > self.furthest:
            self.furthest = self.i
            self.expected = set(expected)
        elif self.i == self.furthest:
            self.expected.update(expected)
        return NoMatch(self.i)

    def reset_failures(self) -> None:
        self.furthest = self.i
        self.expected = set()

    def error(self, *, file: str) -> ParseError:
        at = self.furthest
        if at >= len(self.src):
            message = "unexpected end of input"
        else:
            message = f"unexpected character {self.src[at]!r}"
        hint = None
        if len(self.expected) == 1:
            hint = f"expected {next(iter(self.expected))}"
        elif self.expected:
            hint = "expected one of: " + ", ".join(sorted(self.expected))
        return ParseError(location=self.index.location(at), message=message, hint=hint, file=file)


# ---------------------------------------------------------------------------
# Combinators
# ---------------------------------------------------------------------------


def first_of(cur: Cursor, *alternatives: Rule[T]) -> T:
    """Ordered choice: the first alternative that matches wins."""
    start = cur.i
    for parse in alternatives[:-1]:
        try:
            return parse(cur)
        except NoMatch:
            cur.i = start
    return alternatives[-1](cur)


def quoted(inner: Rule[str]) -> Rule[str]:
    """Accept ``inner`` bare, in double quotes, or in backticks.

    The quotes are only delimiters here, no escape processing happens.
    """

    def between(quote: str) -> Rule[str]:
        def parse(cur: Cursor) -> str:
            literal(cur, quote)
            value = inner(cur)
            literal(cur, quote)
            return value

        return parse

    alternatives = (inner, between('"'), between("`"))

    def parse(cur: Cursor) -> str:
        return first_of(cur, *alternatives)

    return parse


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------


def _take(cur: Cursor, pattern: re.Pattern[str], expected: str) -> str:
    m = pattern.match(cur.src, cur.i)
    if m is None:
        raise cur.fail(expected)
    cur.advance(m.end() - m.start())
    return m.group(0)


def delimiters(cur: Cursor, min_count: int = 0) -> str:
    """Skip spaces, tabs and carriage returns, never newlines."""
    m = _DELIMS_RE.match(cur.src, cur.i)
    text = m.group(0) if m else ""
    if len(text) < min_count:
        raise cur.fail("delimiter")
    cur.advance(len(text))
    return text


def literal(cur: Cursor, text: str) -> int:
    """Match ``text`` exactly and return the offset it started at."""
    start = cur.i
    if not cur.startswith(text):
        raise cur.fail(repr(text))
    cur.advance(len(text))
    return start


def raw_string(cur: Cursor) -> Raw:
    m = _RAW_STRING_RE.match(cur.src, cur.i)
    if m is None:
        raise cur.fail("string")
    cur.advance(m.end() - m.start())
    return Raw(m.group(1))


def interpreted_string(cur: Cursor) -> Interpreted:
    # Any backslash escape is replaced by the character after it: \" -> ", \n -> n.
    if cur.peek() != '"':
        raise cur.fail("string")
    cur.advance()
    buf: list[str] = []
    while True:
        c = cur.peek()
        if c == '"':
            cur.advance()
            return Interpreted("".join(buf))
        if c == "" or c in _INTERPRETED_FORBIDDEN:
            raise cur.fail("'\"'")
        if c == "\\":
            cur.advance()
            esc = cur.peek()
            if esc == "":
                raise cur.fail("escaped character")
            buf.append(esc)
            cur.advance()
            continue
        buf.append(c)
        cur.advance()


def bare_token(cur: Cursor) -> Raw:
    return Raw(_take(cur, _BARE_TOKEN_RE, "identifier"))


def identifier(cur: Cursor) -> Raw | Interpreted:
    """Identifiers and strings are interchangeable in the go.mod grammar."""
    return first_of(cur, raw_string, interpreted_string, bare_token)


def module_path(cur: Cursor) -> str:
    return _take(cur, _MODULE_PATH_RE, "module path")


def godebug_token(cur: Cursor) -> str:
    return _take(cur, _GODEBUG_TOKEN_RE, "godebug key or value")


quoted_module_path = quoted(module_path)
quoted_godebug_token = quoted(godebug_token)


# ---------------------------------------------------------------------------
# Comments and line ends
# ---------------------------------------------------------------------------


class SundryKind(str, Enum):
    COMMENT = "comment"
    BLANK = "blank"
    EOF = "eof"


@dataclass(frozen=True, slots=True)
class Sundry:
    """What remains of a physical line once its tokens are consumed."""

    kind: SundryKind
    text: str = ""  # comment text after "//", newline excluded


def line_end(cur: Cursor) -> Sundry:
    """Consume an optional ``//`` comment and the newline ending the line.

    End of input also ends a line. Returns ``EOF`` only when nothing at all was
    consumed at end of input.
    """
    start = cur.i
    delimiters(cur)
    if cur.startswith("//"):
        cur.advance(2)
        body = cur.i
        nl = cur.src.find("\n", body)
        end = len(cur.src) if nl < 0 else nl
        text = cur.src[body:end].removesuffix("\r")
        cur.i = end if nl < 0 else nl + 1
        return Sundry(SundryKind.COMMENT, text)
    if cur.peek() == "\n":
        cur.advance()
        return Sundry(SundryKind.BLANK)
    if cur.eof():
        return Sundry(SundryKind.BLANK if cur.i > start else SundryKind.EOF)
    raise cur.fail("comment", "end of line")


def trailing_comment(cur: Cursor) -> list[str]:
    item = line_end(cur)
    if item.kind is SundryKind.COMMENT:
        return [item.text]
    return []


def leading_comments(cur: Cursor) -> list[str]:
    """Collect stand-alone comment lines, skipping blank lines between them."""
    comments: list[str] = []
    while True:
        start = cur.i
        try:
            item = line_end(cur)
        except NoMatch:
            cur.i = start
            return comments
        if item.kind is SundryKind.EOF:
            return comments
        if item.kind is SundryKind.COMMENT:
            comments.append(item.text)
