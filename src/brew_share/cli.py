"""Command-line interface for brew-share."""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from pydantic import BaseModel

from brew_share import __version__, extract_json_from_text
from brew_share.exceptions import BrewShareError
from brew_share.importer import ImportConfig, import_method
from brew_share.text import to_readable_text


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="brew-share",
        description="Read shared coffee bean, brewing method or brewing note text",
    )
    parser.add_argument("source", help="Path to shared text or JSON, or - for stdin")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )
    parser.add_argument(
        "--method-json",
        action="store_true",
        help="Import the input as a brewing method",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"brew-share {__version__}",
    )

    args = parser.parse_args(argv)
    level_name = os.getenv("BREW_SHARE_LOG_LEVEL", "WARNING").strip().upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.WARNING))

    try:
        text = _read_source(args.source)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.method_json:
        try:
            result = import_method(text, config=ImportConfig.from_env())
        except BrewShareError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
    else:
        result = extract_json_from_text(text)
        if result is None:
            print("Error: unrecognized format", file=sys.stderr)
            return 1

    print(_render(result, as_json=args.json))
    return 0


def _read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _render(result, *, as_json: bool) -> str:
    """Render a parsed record as JSON or shareable text."""
    if not isinstance(result, BaseModel):
        return json.dumps(result, ensure_ascii=False, indent=2)
    if as_json:
        return result.model_dump_json(indent=2, by_alias=True, exclude_none=True)
    return to_readable_text(result)


if __name__ == "__main__":
    sys.exit(main())
