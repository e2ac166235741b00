#!/usr/bin/env python3
"""Write a configs.json and a placeholder secrets.json for local runs."""
from __future__ import annotations

import argparse
import json
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

# Placeholder only; the servers never read secret values.
_SECRETS = {"api_token": "local-dev-placeholder"}


def write_configs(directory: Path, prefix: str, *, force: bool = False) -> list[Path]:
    """Write both files into `directory` and return their paths.

    Existing files are left alone unless `force` is set.
    """
    directory.mkdir(parents=True, exist_ok=True)
    files = [
        (directory / "configs.json", {"prefix": prefix}),
        (directory / "secrets.json", _SECRETS),
    ]
    written: list[Path] = []
    for path, data in files:
        if path.exists() and not force:
            continue
        path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        written.append(path)
    return written


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--prefix", default="v2")
    parser.add_argument("--dir", default=str(ROOT), dest="directory")
    parser.add_argument("--force", action="store_true", help="overwrite existing files")
    args = parser.parse_args(argv)

    written = write_configs(Path(args.directory), args.prefix, force=args.force)
    if not written:
        print("Nothing written (files exist; pass --force to overwrite)")
    for p in written:
        print(" -", p)


if __name__ == "__main__":
    main()
