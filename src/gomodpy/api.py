from __future__ import annotations

import logging
from pathlib import Path

from .ast import Context, GoMod, ModuleVersion
from .parser import Parser


LOGGER = logging.getLogger(__name__)

_PARSER = Parser()


def parse_source(src: str, *, file: str = "<memory>") -> GoMod:
    return _PARSER.parse(src, file=file)


def parse_bytes(data: bytes, *, file: str = "<memory>") -> GoMod:
    return parse_source(data.decode("utf-8"), file=file)


def parse_file(path: str | Path) -> GoMod:
    p = Path(path).expanduser().resolve()
    LOGGER.debug("parsing %s", p)
    # Offsets must match the bytes on disk, CRLF included.
    return parse_bytes(p.read_bytes(), file=str(p))


def dependencies(gomod: GoMod) -> list[Context[ModuleVersion]]:
    """Every require spec, in source order."""
    return list(gomod.requires)
