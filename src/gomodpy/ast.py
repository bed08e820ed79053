from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import ClassVar, Generic, TypeVar

from .spans import Range


T = TypeVar("T")


class Identifier(str):
    """A go.mod identifier or string token.

    Identifiers and strings are interchangeable in the go.mod grammar, so both
    variants behave as plain ``str`` values; only ``interpreted`` tells them apart.
    """

    __slots__ = ()

    interpreted: ClassVar[bool] = False

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str.__repr__(self)})"


class Raw(Identifier):
    """Bare token or backtick string, taken verbatim from the source."""

    __slots__ = ()


class Interpreted(Identifier):
    """Double-quoted string with every ``\\X`` replaced by ``X``."""

    __slots__ = ()

    interpreted = True


@dataclass(frozen=True, slots=True)
class Context(Generic[T]):
    """A value together with its source range and attached comments.

    ``comments`` holds the stand-alone comment lines right before the construct
    followed by its same-line trailing comment, in source order. Leading comments
    are not covered by ``range``.
    """

    range: Range
    comments: tuple[str, ...]
    value: T

    def fragment(self, src: str | bytes) -> str | bytes:
        return self.range.fragment(src)


# ---------------------------------------------------------------------------
# Spec values
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ModuleVersion:
    module_path: str
    version: Identifier


@dataclass(frozen=True, slots=True)
class GodebugSetting:
    key: str  # raw token content, not unescaped
    value: str  # raw token content, not unescaped


@dataclass(frozen=True, slots=True)
class FilePath:
    path: Identifier


Replacement = FilePath | ModuleVersion


@dataclass(frozen=True, slots=True)
class ReplaceSpec:
    module_path: str
    version: Identifier | None
    replacement: Replacement


@dataclass(frozen=True, slots=True)
class RetractVersion:
    version: Identifier


@dataclass(frozen=True, slots=True)
class RetractRange:
    """Inclusive interval written ``[low, high]``."""

    low: Identifier
    high: Identifier


RetractSpec = RetractVersion | RetractRange


# ---------------------------------------------------------------------------
# Directives
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Module:
    module_path: str


@dataclass(frozen=True, slots=True)
class Go:
    version: Identifier


@dataclass(frozen=True, slots=True)
class Toolchain:
    name: Identifier


@dataclass(frozen=True, slots=True)
class Require:
    specs: tuple[Context[ModuleVersion], ...] = ()


@dataclass(frozen=True, slots=True)
class Exclude:
    specs: tuple[Context[ModuleVersion], ...] = ()


@dataclass(frozen=True, slots=True)
class Replace:
    specs: tuple[Context[ReplaceSpec], ...] = ()


@dataclass(frozen=True, slots=True)
class Retract:
    specs: tuple[Context[RetractSpec], ...] = ()


@dataclass(frozen=True, slots=True)
class Godebug:
    specs: tuple[Context[GodebugSetting], ...] = ()


Directive = Module | Go | Toolchain | Require | Exclude | Replace | Retract | Godebug


@dataclass(frozen=True, slots=True)
class GoMod:
    """All directives of one go.mod file, in source order.

    Repeated keywords are kept as separate entries; nothing is merged.
    """

    directives: tuple[Context[Directive], ...] = ()

    def __iter__(self) -> Iterator[Context[Directive]]:
        return iter(self.directives)

    def __len__(self) -> int:
        return len(self.directives)

    def __getitem__(self, index: int) -> Context[Directive]:
        return self.directives[index]

    def _first(self, kind: type) -> object | None:
        return next((d.value for d in self.directives if isinstance(d.value, kind)), None)

    def _specs(self, kind: type) -> tuple:
        return tuple(s for d in self.directives if isinstance(d.value, kind) for s in d.value.specs)

    # convenience indexes
    @property
    def module_path(self) -> str | None:
        m = self._first(Module)
        return m.module_path if m is not None else None

    @property
    def go_version(self) -> Identifier | None:
        g = self._first(Go)
        return g.version if g is not None else None

    @property
    def toolchain(self) -> Identifier | None:
        t = self._first(Toolchain)
        return t.name if t is not None else None

    @property
    def requires(self) -> tuple[Context[ModuleVersion], ...]:
        return self._specs(Require)

    @property
    def excludes(self) -> tuple[Context[ModuleVersion], ...]:
        return self._specs(Exclude)

    @property
    def replaces(self) -> tuple[Context[ReplaceSpec], ...]:
        return self._specs(Replace)

    @property
    def retracts(self) -> tuple[Context[RetractSpec], ...]:
        return self._specs(Retract)

    @property
    def godebugs(self) -> tuple[Context[GodebugSetting], ...]:
        return self._specs(Godebug)
