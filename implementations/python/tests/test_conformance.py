"""Golden-vector tests for token decoding, classification and unwrapping.

Vectors live in conformance/token_vectors.json: a ``vectors`` list and an
``expected`` map keyed by test id.  Each vector names a mode:

    classify   -> {"type": ..., "version": ...}
    decode     -> {"format": ..., "size": ...} or {"err": code, "format": ...}
    unwrap     -> {"tokens": n, "types": [...]}

Usage:
    python tests/test_conformance.py [--vectors-dir DIR] [--verbose]
    python -m pytest tests/test_conformance.py -v
    UCANSPECT_VECTORS_DIR=/path/to/conformance python -m pytest tests/test_conformance.py
"""

from __future__ import annotations

import argparse
import base64
import json
import os
import sys
import unittest
from typing import Any, Callable, Dict, List, Optional

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from ucanspect import InspectError, Inspector, Token

VECTORS_FILE = "token_vectors.json"
_HERE = os.path.dirname(os.path.abspath(__file__))
_DEFAULT_DIR = os.path.normpath(os.path.join(_HERE, "..", "..", "..", "conformance"))


def vectors_path(directory: Optional[str] = None) -> str:
    directory = directory or os.environ.get("UCANSPECT_VECTORS_DIR") or _DEFAULT_DIR
    return os.path.join(directory, VECTORS_FILE)


def load_vectors(directory: Optional[str] = None) -> Dict[str, Any]:
    with open(vectors_path(directory), "r", encoding="utf-8") as f:
        return json.load(f)


def _token(vec: dict) -> Token:
    if "input_b64" in vec:
        return base64.b64decode(vec["input_b64"])
    return vec["input"]


# ── Modes ─────────────────────────────────────────────────────

def _classify(inspector: Inspector, token: Token) -> Dict[str, Any]:
    return inspector.classify(token).as_dict()


def _decode(inspector: Inspector, token: Token) -> Dict[str, Any]:
    try:
        result = inspector.decode_with_meta(token)
    except InspectError as e:
        return {"err": e.code, "format": e.detected_format}
    return {"format": result.format, "size": result.size}


def _unwrap(inspector: Inspector, token: Token) -> Dict[str, Any]:
    tokens = inspector.unwrap(token)
    return {"tokens": len(tokens), "types": [inspector.classify(t).type for t in tokens]}


MODES: Dict[str, Callable[[Inspector, Token], Dict[str, Any]]] = {
    "classify": _classify,
    "decode": _decode,
    "unwrap": _unwrap,
}


def run_vector(vec: dict) -> Dict[str, Any]:
    """Run one vector against a fresh Inspector, so no cache is shared."""
    return MODES[vec["mode"]](Inspector(), _token(vec))


# ── unittest integration ──────────────────────────────────────

class TokenVectorTests(unittest.TestCase):
    """One test per vector, added below when the vector file is present."""

    def test_vector_file_consistent(self):
        if not os.path.isfile(vectors_path()):
            self.skipTest("no vector file at {}".format(vectors_path()))
        data = load_vectors()
        ids = [v["test_id"] for v in data["vectors"]]
        self.assertEqual(len(ids), len(set(ids)))
        self.assertEqual(set(ids), set(data["expected"]))
        for vec in data["vectors"]:
            self.assertIn(vec["mode"], MODES)


def _add_vector_tests() -> None:
    if not os.path.isfile(vectors_path()):
        return
    data = load_vectors()
    for vec in data["vectors"]:
        expected = data["expected"].get(vec["test_id"])
        if expected is None:
            continue
        name = "test_" + vec["test_id"].lower().replace("-", "_")

        def test(self, vec=vec, expected=expected):
            self.assertEqual(run_vector(vec), expected, vec["test_id"])

        test.__name__ = name
        setattr(TokenVectorTests, name, test)


_add_vector_tests()


# ── Standalone runner ─────────────────────────────────────────

def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="ucanspect token vector runner")
    parser.add_argument("--vectors-dir", default=None,
                        help="Directory holding {}".format(VECTORS_FILE))
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Print every vector, not just failures")
    args = parser.parse_args(argv)

    data = load_vectors(args.vectors_dir)
    failures = 0
    for vec in data["vectors"]:
        tid = vec["test_id"]
        got = run_vector(vec)
        ok = got == data["expected"][tid]
        failures += not ok
        if args.verbose or not ok:
            print("  {} {} [{}] got={}".format("ok  " if ok else "FAIL", tid, vec["mode"], got))

    print("token vectors (UCAN {}): {} run, {} failed".format(
        data.get("version", "?"), len(data["vectors"]), failures))
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
