"""ucanspect command-line interface.

Usage:
    python3 -m ucanspect decode TOKEN
    echo TOKEN | python3 -m ucanspect classify
    python3 -m ucanspect unwrap --input header-value.txt
    python3 -m ucanspect capture --url https://api.example --header "Authorization: Bearer ..."
    python3 -m ucanspect version
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional, Tuple

from . import (
    InspectError,
    Inspector,
    __version__,
    capture_from_request,
    classify_value,
    to_dag_json,
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ucanspect",
        description="ucanspect: decode and classify UCAN tokens",
    )
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log decoder fallbacks to stderr")
    sub = parser.add_subparsers(dest="command")

    def token_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("token", nargs="?", help="Token text (default: read stdin)")
        p.add_argument("--input", "-i", metavar="FILE",
                       help="Read the token from FILE instead")

    # ── decode ──
    dec_p = sub.add_parser("decode", help="Decode a token to DAG-JSON")
    token_args(dec_p)
    dec_p.add_argument("--no-cache", action="store_true",
                       help="Decode even if the token was seen before")

    # ── classify ──
    cls_p = sub.add_parser("classify", help="Print the token type and version")
    token_args(cls_p)

    # ── unwrap ──
    unw_p = sub.add_parser("unwrap", help="Split a header value into tokens")
    token_args(unw_p)

    # ── capture ──
    cap_p = sub.add_parser("capture", help="Capture tokens from request headers")
    cap_p.add_argument("--url", default="", help="Request URL to record")
    cap_p.add_argument("--header", "-H", action="append", default=[], metavar="NAME: VALUE",
                       help="Request header; repeat for several")

    # ── version ──
    sub.add_parser("version", help="Print version and exit")

    return parser


def _read_token(args: argparse.Namespace) -> str:
    """Token from the argument, a file, or stdin, stripped of surrounding whitespace."""
    if args.token is not None:
        return args.token.strip()
    if args.input:
        with open(args.input, "r", encoding="latin-1") as f:
            return f.read().strip()
    if sys.stdin.isatty():
        print("ucanspect: reading token from stdin (Ctrl-D to end)...", file=sys.stderr)
    return sys.stdin.read().strip()


def _parse_header(text: str) -> Tuple[str, str]:
    name, sep, value = text.partition(":")
    if not sep:
        raise ValueError("header must look like 'Name: value': {!r}".format(text))
    return name.strip(), value.strip()


def _cmd_decode(inspector: Inspector, args: argparse.Namespace) -> None:
    result = inspector.decode_with_meta(_read_token(args), use_cache=not args.no_cache)
    out = {
        "format": result.format,
        "size": result.size,
        "type": classify_value(result.value).as_dict(),
        "value": to_dag_json(result.value),
    }
    print(json.dumps(out, indent=2, ensure_ascii=False))


def _cmd_classify(inspector: Inspector, args: argparse.Namespace) -> None:
    print(json.dumps(inspector.classify(_read_token(args)).as_dict()))


def _cmd_unwrap(inspector: Inspector, args: argparse.Namespace) -> None:
    for token in inspector.unwrap(_read_token(args)):
        print(token)


def _cmd_capture(inspector: Inspector, args: argparse.Namespace) -> None:
    headers = [_parse_header(h) for h in args.header]
    items = capture_from_request(args.url, headers, inspector=inspector)
    print(json.dumps([item.as_dict() for item in items], indent=2))


_COMMANDS = {
    "decode": _cmd_decode,
    "classify": _cmd_classify,
    "unwrap": _cmd_unwrap,
    "capture": _cmd_capture,
}


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "version":
        print(f"ucanspect {__version__}")
        return

    try:
        _COMMANDS[args.command](Inspector(), args)
    except InspectError as e:
        print(f"ucanspect: error [{e.code}]: {e}", file=sys.stderr)
        sys.exit(2)
    except ValueError as e:
        print(f"ucanspect: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
