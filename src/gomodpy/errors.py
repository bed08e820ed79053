from __future__ import annotations

from dataclasses import dataclass

from .spans import Location


@dataclass(slots=True)
class ParseError(Exception):
    location: Location
    message: str
    hint: str | None = None
    file: str = "<memory>"

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def offset(self) -> int:
        return self.location.offset

    def __str__(self) -> str:
        base = f"{self.file}:{self.location.line}: {self.message} (offset {self.location.offset})"
        if self.hint:
            return f"{base}\nhint: {self.hint}"
        return base
