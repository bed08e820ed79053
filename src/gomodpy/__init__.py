from __future__ import annotations

from .api import dependencies, parse_bytes, parse_file, parse_source
from .ast import (
    Context,
    Directive,
    Exclude,
    FilePath,
    Go,
    Godebug,
    GodebugSetting,
    GoMod,
    Identifier,
    Interpreted,
    Module,
    ModuleVersion,
    Raw,
    Replace,
    Replacement,
    ReplaceSpec,
    Require,
    Retract,
    RetractRange,
    RetractSpec,
    RetractVersion,
    Toolchain,
)
from .errors import ParseError
from .parser import Parser
from .spans import Location, Range

__all__ = [
    "Context",
    "Directive",
    "Exclude",
    "FilePath",
    "Go",
    "GoMod",
    "Godebug",
    "GodebugSetting",
    "Identifier",
    "Interpreted",
    "Location",
    "Module",
    "ModuleVersion",
    "ParseError",
    "Parser",
    "Range",
    "Raw",
    "Replace",
    "ReplaceSpec",
    "Replacement",
    "Require",
    "Retract",
    "RetractRange",
    "RetractSpec",
    "RetractVersion",
    "Toolchain",
    "dependencies",
    "parse_bytes",
    "parse_file",
    "parse_source",
]
