from __future__ import annotations

import logging
from dataclasses import dataclass

from .ast import Context, Directive, GoMod
from .directives import DIRECTIVE_PARSERS, DirectiveParser
from .errors import ParseError
from .lexer import Cursor, NoMatch, leading_comments


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Parser:
    """Top-level driver: directives in a fixed order until the input is used up.

    The parser holds no per-call state and can be shared between threads.
    """

    directives: tuple[tuple[str, DirectiveParser], ...] = DIRECTIVE_PARSERS

    def _directive(self, cur: Cursor) -> Context[Directive]:
        start = cur.i
        for _, parse in self.directives:
            try:
                return parse(cur)
            except NoMatch:
                cur.i = start
        raise NoMatch(start)

    def parse(self, src: str, *, file: str = "<memory>") -> GoMod:
        cur = Cursor(src)
        out: list[Context[Directive]] = []

        while True:
            # Only failures past the last complete directive are worth reporting.
            cur.reset_failures()
            start = cur.i
            try:
                ctx = self._directive(cur)
            except NoMatch:
                cur.i = start
                break
            LOGGER.debug(
                "%s: %s directive at line %d",
                file,
                type(ctx.value).__name__.lower(),
                ctx.range.start.line,
            )
            out.append(ctx)

        leading_comments(cur)
        if not cur.eof():
            raise cur.error(file=file)
        if not out and src:
            raise ParseError(
                location=cur.location(),
                message="no directives found",
                hint="a go.mod file starts with: module <path>",
                file=file,
            )
        return GoMod(directives=tuple(out))
