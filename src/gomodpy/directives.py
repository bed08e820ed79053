from __future__ import annotations

"""
go.mod directive grammars in one place.

Every directive shares one shape::

    {leading comments} KEYWORD delimiter SPEC [comment] newline
    {leading comments} KEYWORD "(" [comment] newline
        {leading comments} SPEC [comment] newline
        ...
        {leading comments} ")" [comment] newline

``module``, ``go`` and ``toolchain`` take exactly one value, also in block form;
their comments all land on the directive, in line order. For the other directives each spec
keeps its own leading and trailing comments.

Reference: https://go.dev/ref/mod#go-mod-file-grammar
"""

from collections.abc import Callable
from dataclasses import replace
from typing import TypeVar

from .ast import (
    Context,
    Directive,
    Exclude,
    FilePath,
    Go,
    Godebug,
    GodebugSetting,
    Identifier,
    Module,
    ModuleVersion,
    Replace,
    ReplaceSpec,
    Require,
    Retract,
    RetractRange,
    RetractSpec,
    RetractVersion,
    Toolchain,
)
from .lexer import (
    Cursor,
    NoMatch,
    delimiters,
    first_of,
    identifier,
    leading_comments,
    literal,
    quoted_godebug_token,
    quoted_module_path,
    trailing_comment,
)


T = TypeVar("T")

DirectiveParser = Callable[[Cursor], Context[Directive]]


# ---------------------------------------------------------------------------
# Shared template
# ---------------------------------------------------------------------------


def parse_spec(cur: Cursor, body: Callable[[Cursor], T]) -> Context[T]:
    """Run ``body`` and the line end after it; the range covers both."""
    start = cur.i
    value = body(cur)
    comments = trailing_comment(cur)
    return Context(range=cur.range(start, cur.i), comments=tuple(comments), value=value)


def _with_leading(spec: Context[T], comments: list[str]) -> Context[T]:
    if not comments:
        return spec
    return replace(spec, comments=(*comments, *spec.comments))


def _block_specs(cur: Cursor, body: Callable[[Cursor], T]) -> list[Context[T]]:
    specs: list[Context[T]] = []
    while True:
        start = cur.i
        try:
            comments = leading_comments(cur)
            delimiters(cur)
            spec = parse_spec(cur, body)
        except NoMatch:
            cur.i = start
            return specs
        specs.append(_with_leading(spec, comments))


def _parse_directive(
    cur: Cursor,
    keyword: str,
    body: Callable[[Cursor], T],
    *,
    single: bool,
) -> tuple[int, list[str], list[Context[T]]]:
    """Parse one directive in inline or block form.

    Returns the keyword offset, the comments owned by the directive itself and
    the parsed specs.
    """
    comments = leading_comments(cur)
    delimiters(cur)
    start = literal(cur, keyword)
    after_keyword = cur.i
    try:
        delimiters(cur, 1)
        return start, comments, [parse_spec(cur, body)]
    except NoMatch:
        cur.i = after_keyword

    delimiters(cur)
    literal(cur, "(")
    comments += trailing_comment(cur)
    if single:
        comments += leading_comments(cur)
        delimiters(cur)
        spec = parse_spec(cur, body)
        # The lone value owns no comments; they stay in line order on the directive.
        comments += spec.comments
        specs = [replace(spec, comments=())]
    else:
        specs = _block_specs(cur, body)
    comments += leading_comments(cur)
    delimiters(cur)
    literal(cur, ")")
    comments += trailing_comment(cur)
    return start, comments, specs


def _single(
    cur: Cursor,
    keyword: str,
    body: Callable[[Cursor], T],
    build: Callable[[T], Directive],
) -> Context[Directive]:
    start, comments, (spec,) = _parse_directive(cur, keyword, body, single=True)
    return Context(
        range=cur.range(start, cur.i),
        comments=(*comments, *spec.comments),
        value=build(spec.value),
    )


def _multi(
    cur: Cursor,
    keyword: str,
    body: Callable[[Cursor], T],
    build: Callable[[tuple[Context[T], ...]], Directive],
) -> Context[Directive]:
    start, comments, specs = _parse_directive(cur, keyword, body, single=False)
    return Context(range=cur.range(start, cur.i), comments=tuple(comments), value=build(tuple(specs)))


# ---------------------------------------------------------------------------
# Spec bodies
# ---------------------------------------------------------------------------


def _module_version(cur: Cursor) -> ModuleVersion:
    path = quoted_module_path(cur)
    delimiters(cur, 1)
    return ModuleVersion(module_path=path, version=identifier(cur))


def _godebug_setting(cur: Cursor) -> GodebugSetting:
    key = quoted_godebug_token(cur)
    delimiters(cur)
    literal(cur, "=")
    delimiters(cur)
    return GodebugSetting(key=key, value=quoted_godebug_token(cur))


def _arrow(cur: Cursor) -> None:
    delimiters(cur)
    literal(cur, "=>")
    delimiters(cur)


def _no_version(cur: Cursor) -> None:
    _arrow(cur)
    return None


def _version_then_arrow(cur: Cursor) -> Identifier:
    delimiters(cur, 1)
    version = identifier(cur)
    _arrow(cur)
    return version


def _file_path(cur: Cursor) -> FilePath:
    return FilePath(path=identifier(cur))


def _replace_spec(cur: Cursor) -> ReplaceSpec:
    path = quoted_module_path(cur)
    version = first_of(cur, _no_version, _version_then_arrow)
    # A replacement followed by a version is a module, anything else a file path.
    replacement = first_of(cur, _module_version, _file_path)
    return ReplaceSpec(module_path=path, version=version, replacement=replacement)


def _retract_range(cur: Cursor) -> RetractRange:
    literal(cur, "[")
    delimiters(cur)
    low = identifier(cur)
    delimiters(cur)
    literal(cur, ",")
    delimiters(cur)
    high = identifier(cur)
    delimiters(cur)
    literal(cur, "]")
    return RetractRange(low=low, high=high)


def _retract_version(cur: Cursor) -> RetractVersion:
    return RetractVersion(version=identifier(cur))


def _retract_spec(cur: Cursor) -> RetractSpec:
    return first_of(cur, _retract_range, _retract_version)


# ---------------------------------------------------------------------------
# Directives
# ---------------------------------------------------------------------------


def parse_module_directive(cur: Cursor) -> Context[Directive]:
    return _single(cur, "module", quoted_module_path, lambda path: Module(module_path=path))


def parse_go_directive(cur: Cursor) -> Context[Directive]:
    return _single(cur, "go", identifier, lambda version: Go(version=version))


def parse_toolchain_directive(cur: Cursor) -> Context[Directive]:
    return _single(cur, "toolchain", identifier, lambda name: Toolchain(name=name))


def parse_require_directive(cur: Cursor) -> Context[Directive]:
    return _multi(cur, "require", _module_version, lambda specs: Require(specs=specs))


def parse_exclude_directive(cur: Cursor) -> Context[Directive]:
    return _multi(cur, "exclude", _module_version, lambda specs: Exclude(specs=specs))


def parse_replace_directive(cur: Cursor) -> Context[Directive]:
    return _multi(cur, "replace", _replace_spec, lambda specs: Replace(specs=specs))


def parse_retract_directive(cur: Cursor) -> Context[Directive]:
    return _multi(cur, "retract", _retract_spec, lambda specs: Retract(specs=specs))


def parse_godebug_directive(cur: Cursor) -> Context[Directive]:
    return _multi(cur, "godebug", _godebug_setting, lambda specs: Godebug(specs=specs))


# Fixed dispatch order. Keywords are disjoint once the following delimiter or
# "(" is required, so the order only has to be deterministic.
DIRECTIVE_PARSERS: tuple[tuple[str, DirectiveParser], ...] = (
    ("module", parse_module_directive),
    ("go", parse_go_directive),
    ("toolchain", parse_toolchain_directive),
    ("require", parse_require_directive),
    ("exclude", parse_exclude_directive),
    ("replace", parse_replace_directive),
    ("retract", parse_retract_directive),
    ("godebug", parse_godebug_directive),
)
