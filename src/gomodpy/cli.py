from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import fields, is_dataclass
from pathlib import Path

from .api import dependencies, parse_bytes
from .errors import ParseError


def _to_jsonable(obj):
    if is_dataclass(obj):
        out = {"type": type(obj).__name__}
        out.update({f.name: _to_jsonable(getattr(obj, f.name)) for f in fields(obj)})
        return out
    if isinstance(obj, tuple):
        return [_to_jsonable(x) for x in obj]
    if isinstance(obj, list):
        return [_to_jsonable(x) for x in obj]
    if isinstance(obj, dict):
        return {str(k): _to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, str):
        return str(obj)
    return obj


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="gomodpy", description="Parse go.mod files")
    ap.add_argument("file", help="Path to a go.mod file")
    ap.add_argument("--json", action="store_true", help="Print the parsed document as JSON")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    path = Path(args.file).expanduser().resolve()
    try:
        data = path.read_bytes()
        gomod = parse_bytes(data, file=str(path))
    except ParseError as e:
        print(str(e), file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print(f"{path}: cannot read go.mod: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(_to_jsonable(gomod), indent=2))
        return 0

    for spec in dependencies(gomod):
        fragment = spec.fragment(data).decode("utf-8")
        print(
            f"Defined a dependency {{name: {spec.value.module_path}, version: {spec.value.version}}}"
            f" at line {spec.range.start.line}, fragment: {fragment}"
        )
    return 0
