from __future__ import annotations

import pytest

from gomodpy import (
    Context,
    Exclude,
    FilePath,
    Go,
    Godebug,
    GodebugSetting,
    Interpreted,
    Location,
    Module,
    ModuleVersion,
    Range,
    Raw,
    Replace,
    ReplaceSpec,
    Require,
    Retract,
    RetractRange,
    RetractVersion,
    Toolchain,
)
from gomodpy.directives import (
    parse_exclude_directive,
    parse_go_directive,
    parse_godebug_directive,
    parse_module_directive,
    parse_replace_directive,
    parse_require_directive,
    parse_retract_directive,
    parse_toolchain_directive,
)
from gomodpy.lexer import Cursor, NoMatch


def _r(l1: int, o1: int, l2: int, o2: int) -> Range:
    return Range(start=Location(line=l1, offset=o1), end=Location(line=l2, offset=o2))


def _parse_all(parse, src: str):
    cur = Cursor(src)
    ret = parse(cur)
    assert cur.src[cur.i :] == ""
    return ret


def test_module() -> None:
    s = "\n".join(
        [
            "",
            "// heheda",
            "// Deprecated: use *** instead.",
            "module ( ",
            "// abc",
            "// def",
            "    `rsdf/sf-f/s8._~` // inline",
            "    // ghi",
            "   ) // trailing",
            "",
        ]
    )
    assert _parse_all(parse_module_directive, s) == Context(
        range=_r(4, 43, 10, 127),
        comments=(
            " heheda",
            " Deprecated: use *** instead.",
            " abc",
            " def",
            " inline",
            " ghi",
            " trailing",
        ),
        value=Module(module_path="rsdf/sf-f/s8._~"),
    )


def test_module_inline() -> None:
    ret = _parse_all(parse_module_directive, 'module "example.com/m" // main\n')
    assert ret == Context(
        range=_r(1, 0, 2, 31),
        comments=(" main",),
        value=Module(module_path="example.com/m"),
    )


def test_module_block_takes_one_path() -> None:
    with pytest.raises(NoMatch):
        parse_module_directive(Cursor("module (\n\ta\n\tb\n)\n"))


def test_go() -> None:
    s = "\n// heheda\n" + r'go "1.4.5\"rc1" // inline' + "\n"
    ret = _parse_all(parse_go_directive, s)
    assert ret == Context(
        range=_r(3, 11, 4, 37),
        comments=(" heheda", " inline"),
        value=Go(version=Interpreted('1.4.5"rc1')),
    )
    assert isinstance(ret.value.version, Interpreted)


def test_go_block_form() -> None:
    ret = _parse_all(parse_go_directive, "go (\n\t1.21 // v\n)\n")
    assert ret == Context(range=_r(1, 0, 4, 18), comments=(" v",), value=Go(version="1.21"))


def test_go_does_not_match_godebug() -> None:
    with pytest.raises(NoMatch):
        parse_go_directive(Cursor("godebug panicnil=1\n"))


def test_toolchain() -> None:
    s = """
// heheda
toolchain go1.21.3+auto // inline
"""
    ret = _parse_all(parse_toolchain_directive, s)
    assert ret == Context(
        range=_r(3, 11, 4, 45),
        comments=(" heheda", " inline"),
        value=Toolchain(name=Raw("go1.21.3+auto")),
    )
    assert isinstance(ret.value.name, Raw)


def test_require() -> None:
    s = """
        // start require
        require ( // start specs
    golang.org/x/crypto v1.4.5 // indirect
    // mm
    golang.org/x/text v1.6.7
    // end specs
 ) // end require
"""
    assert _parse_all(parse_require_directive, s) == Context(
        range=_r(3, 34, 9, 176),
        comments=(" start require", " start specs", " end specs", " end require"),
        value=Require(
            specs=(
                Context(
                    range=_r(4, 63, 5, 102),
                    comments=(" indirect",),
                    value=ModuleVersion(module_path="golang.org/x/crypto", version=Raw("v1.4.5")),
                ),
                Context(
                    range=_r(6, 116, 7, 141),
                    comments=(" mm",),
                    value=ModuleVersion(module_path="golang.org/x/text", version=Raw("v1.6.7")),
                ),
            )
        ),
    )


def test_require_inline_comment_belongs_to_spec() -> None:
    ret = _parse_all(parse_require_directive, "require example.com/a v1.0.0 // c")
    assert ret == Context(
        range=_r(1, 0, 1, 33),
        comments=(),
        value=Require(
            specs=(
                Context(
                    range=_r(1, 8, 1, 33),
                    comments=(" c",),
                    value=ModuleVersion(module_path="example.com/a", version="v1.0.0"),
                ),
            )
        ),
    )


def test_require_quoted_tokens() -> None:
    ret = _parse_all(parse_require_directive, 'require "example.com/a" `v1.0.0`\n')
    (spec,) = ret.value.specs
    assert spec.value == ModuleVersion(module_path="example.com/a", version="v1.0.0")


def test_require_empty_block() -> None:
    ret = _parse_all(parse_require_directive, "require (\n)\n")
    assert ret.value == Require(specs=())
    assert ret.range == _r(1, 0, 3, 12)


def test_require_missing_version() -> None:
    cur = Cursor("require foo\n")
    with pytest.raises(NoMatch):
        parse_require_directive(cur)
    assert cur.furthest == 11
    assert cur.expected == {"delimiter"}


def test_require_rejects_spec_on_paren_line() -> None:
    with pytest.raises(NoMatch):
        parse_require_directive(Cursor("require ( example.com/a v1.0.0\n)\n"))


def test_exclude() -> None:
    s = "exclude (\n\texample.com/old v1.2.3\n\t// why\n\texample.com/older v0.1.0 // gone\n)\n"
    ret = _parse_all(parse_exclude_directive, s)
    assert ret.value == Exclude(
        specs=(
            Context(
                range=_r(2, 11, 3, 34),
                comments=(),
                value=ModuleVersion(module_path="example.com/old", version="v1.2.3"),
            ),
            Context(
                range=_r(4, 43, 5, 76),
                comments=(" why", " gone"),
                value=ModuleVersion(module_path="example.com/older", version="v0.1.0"),
            ),
        )
    )


def test_replace_inline() -> None:
    s = "replace golang.org/x/net v1.2.3 => example.com/fork/net v1.4.5 // sfsdff"
    assert _parse_all(parse_replace_directive, s) == Context(
        range=_r(1, 0, 1, 72),
        comments=(),
        value=Replace(
            specs=(
                Context(
                    range=_r(1, 8, 1, 72),
                    comments=(" sfsdff",),
                    value=ReplaceSpec(
                        module_path="golang.org/x/net",
                        version="v1.2.3",
                        replacement=ModuleVersion(module_path="example.com/fork/net", version="v1.4.5"),
                    ),
                ),
            )
        ),
    )


def test_replace() -> None:
    s = "\n".join(
        [
            "",
            "        // start replace",
            "        replace ( // start specs",
            "    golang.org/x/net v1.2.3 => example.com/fork/net v1.4.5 //aa",
            "    // bb",
            "    golang.org/x/net => example.com/fork/net v1.4.5 // bbb",
            "    ",
            "    golang.org/x/net v1.2.3 => ./fork/net //cc",
            "    golang.org/x/net => ./fork/net //dd",
            "    // trailing comments",
            ") // end specs",
        ]
    )
    fork = ModuleVersion(module_path="example.com/fork/net", version="v1.4.5")
    assert _parse_all(parse_replace_directive, s) == Context(
        range=_r(3, 34, 11, 323),
        comments=(" start replace", " start specs", " trailing comments", " end specs"),
        value=Replace(
            specs=(
                Context(
                    range=_r(4, 63, 5, 123),
                    comments=("aa",),
                    value=ReplaceSpec(module_path="golang.org/x/net", version="v1.2.3", replacement=fork),
                ),
                Context(
                    range=_r(6, 137, 7, 192),
                    comments=(" bb", " bbb"),
                    value=ReplaceSpec(module_path="golang.org/x/net", version=None, replacement=fork),
                ),
                Context(
                    range=_r(8, 201, 9, 244),
                    comments=("cc",),
                    value=ReplaceSpec(
                        module_path="golang.org/x/net",
                        version="v1.2.3",
                        replacement=FilePath(path="./fork/net"),
                    ),
                ),
                Context(
                    range=_r(9, 248, 10, 284),
                    comments=("dd",),
                    value=ReplaceSpec(
                        module_path="golang.org/x/net",
                        version=None,
                        replacement=FilePath(path="./fork/net"),
                    ),
                ),
            )
        ),
    )


def test_replace_with_quoted_file_path() -> None:
    ret = _parse_all(parse_replace_directive, 'replace example.com/a => "../a b"\n')
    (spec,) = ret.value.specs
    assert spec.value.replacement == FilePath(path="../a b")
    assert spec.value.version is None


def test_retract() -> None:
    s = """
        // start retract
        retract ( // start specs
    v1.0.0 // aaa
    // bbb
    [v1.0.0, v1.9.9] // ccc
    // end specs
) // end retract
"""
    assert _parse_all(parse_retract_directive, s) == Context(
        range=_r(3, 34, 9, 150),
        comments=(" start retract", " start specs", " end specs", " end retract"),
        value=Retract(
            specs=(
                Context(
                    range=_r(4, 63, 5, 77),
                    comments=(" aaa",),
                    value=RetractVersion(version="v1.0.0"),
                ),
                Context(
                    range=_r(6, 92, 7, 116),
                    comments=(" bbb", " ccc"),
                    value=RetractRange(low="v1.0.0", high="v1.9.9"),
                ),
            )
        ),
    )


def test_retract_inline_range() -> None:
    ret = _parse_all(parse_retract_directive, "retract [v1.0.0,v1.0.5] // broken\n")
    (spec,) = ret.value.specs
    assert spec.value == RetractRange(low="v1.0.0", high="v1.0.5")
    assert spec.comments == (" broken",)


def test_godebug() -> None:
    s = """
        // hehe
        // start godebug
        godebug ( // start specs
        // abc
    //
    "panicnil"=1 // spec1
    // ghi

    asynctimerchan=`0` // spec2
    // jkl
 ) // end godebug
"""
    assert _parse_all(parse_godebug_directive, s) == Context(
        range=_r(4, 50, 13, 196),
        comments=(" hehe", " start godebug", " start specs", " jkl", " end godebug"),
        value=Godebug(
            specs=(
                Context(
                    range=_r(7, 101, 8, 123),
                    comments=(" abc", "", " spec1"),
                    value=GodebugSetting(key="panicnil", value="1"),
                ),
                Context(
                    range=_r(10, 139, 11, 167),
                    comments=(" ghi", " spec2"),
                    value=GodebugSetting(key="asynctimerchan", value="0"),
                ),
            )
        ),
    )


def test_godebug_inline_with_spaces() -> None:
    ret = _parse_all(parse_godebug_directive, "godebug default = go1.21\n")
    (spec,) = ret.value.specs
    assert spec.value == GodebugSetting(key="default", value="go1.21")


def test_godebug_tokens_are_not_unescaped() -> None:
    ret = _parse_all(parse_godebug_directive, r'godebug "pa\nic"=1' + "\n")
    (spec,) = ret.value.specs
    assert spec.value.key == r"pa\nic"


def test_godebug_requires_equals() -> None:
    with pytest.raises(NoMatch):
        parse_godebug_directive(Cursor("godebug panicnil 1\n"))


def test_toolchain_block_comments_keep_line_order() -> None:
    s = "// a\ntoolchain ( // b\n\t// c\n\tgo1.22.0 // d\n\t// e\n) // f\n"
    assert _parse_all(parse_toolchain_directive, s) == Context(
        range=_r(2, 5, 7, 56),
        comments=(" a", " b", " c", " d", " e", " f"),
        value=Toolchain(name="go1.22.0"),
    )
