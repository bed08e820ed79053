from __future__ import annotations

import argparse
from pathlib import Path

from gomodpy.testing import generate_corpus_files


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="generate_corpus", description="Write a generated go.mod corpus")
    ap.add_argument("--seed", type=int, default=1)
    ap.add_argument("--count", type=int, default=1000)
    ap.add_argument("--out", default="tests/fixtures/generated_corpus")
    ap.add_argument(
        "--crlf",
        action="store_true",
        help="Also write each case with Windows line endings as go.crlf.mod",
    )
    args = ap.parse_args(argv)

    out_dir = Path(args.out).resolve() / f"seed_{args.seed}_count_{args.count}"

    for rel, src in generate_corpus_files(seed=args.seed, count=args.count):
        p = out_dir / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        # Bytes, so the files keep exactly the line endings generated.
        p.write_bytes(src.encode("utf-8"))
        if args.crlf:
            p.with_name("go.crlf.mod").write_bytes(src.replace("\n", "\r\n").encode("utf-8"))

    print(str(out_dir))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
