#!/usr/bin/env python3
# tools/invariants_runner.py
#
# Decode pipeline invariants (property tests).
#
# This runner:
# - generates random decoded-value trees (maps, lists, text, bytes, numbers, links)
# - checks round trip through every token encoding the normalizer accepts
# - checks cache identity and fresh values with the cache disabled
# - checks that every container header row gives back the tokens packed into it
#
# Exit code:
#   0 -> all checks passed
#   1 -> invariant violation

import os, sys, json, base64, random
from typing import Any, Dict, List

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, os.path.join(ROOT, "implementations", "python"))

from ucanspect import (
    Inspector,
    dumps_dag_json,
    encode_structured,
    unwrap_container,
    wrap_container,
)
from ucanspect._constants import CONTAINER_HEADERS
from ucanspect._encoding import bytes_to_base64url, bytes_to_latin1

SEED = int(os.environ.get("UCANSPECT_SEED", "1337"))
TRIALS = int(os.environ.get("UCANSPECT_TRIALS", "2000"))
MAX_GEN_DEPTH = int(os.environ.get("UCANSPECT_GEN_MAX_DEPTH", "6"))
MAX_KEYS = int(os.environ.get("UCANSPECT_GEN_MAX_KEYS", "6"))
MAX_LIST = int(os.environ.get("UCANSPECT_GEN_MAX_LIST", "6"))
MAX_STR = int(os.environ.get("UCANSPECT_GEN_MAX_STR", "24"))
MAX_BYTES = int(os.environ.get("UCANSPECT_GEN_MAX_BYTES", "32"))

# A real CID, used for link nodes.
LINK = {"/": "bafyreidqkrzgmfef5wxfivf7khmji5fta2eo7fccohqglowd5u44lb7v2q"}

random.seed(SEED)

def b64(b: bytes) -> str:
    return base64.b64encode(b).decode("ascii")

# Code point ranges for generated text, weighted toward ASCII.  Surrogates
# are left out since they can't be encoded as UTF-8.
TEXT_RANGES = [(0x20, 0x7E)] * 7 + [(0xA0, 0xFF)] * 2 + [(0x100, 0xD7FF), (0x10000, 0x10FFFF)]

def rand_text() -> str:
    chars = []
    for _ in range(random.randint(0, MAX_STR)):
        lo, hi = random.choice(TEXT_RANGES)
        chars.append(chr(random.randint(lo, hi)))
    return "".join(chars)

def rand_bytes() -> bytes:
    return random.getrandbits(8 * MAX_BYTES).to_bytes(MAX_BYTES, "big")[:random.randint(0, MAX_BYTES)]

SCALARS = [
    (35, rand_text),
    (20, rand_bytes),
    (20, lambda: random.randint(-2**63, 2**64 - 1)),
    (7, lambda: random.choice([True, False, None])),
    (8, lambda: random.uniform(-1e6, 1e6)),
    (10, lambda: dict(LINK)),
]

def rand_scalar() -> Any:
    weights, makers = zip(*SCALARS)
    return random.choices(makers, weights)[0]()

def rand_map(depth: int) -> Dict[str, Any]:
    m = {rand_text(): gen_value(depth + 1) for _ in range(random.randint(0, MAX_KEYS))}
    # A lone "/" key would read back as a link.
    if list(m) == ["/"]:
        m["//"] = None
    return m

def gen_value(depth: int) -> Any:
    if depth >= MAX_GEN_DEPTH:
        return rand_scalar()
    kind = random.choices(["map", "list", "scalar"], [45, 30, 25])[0]
    if kind == "map":
        return rand_map(depth)
    if kind == "list":
        return [gen_value(depth + 1) for _ in range(random.randint(0, MAX_LIST))]
    return rand_scalar()

def fail(label: str, context: Dict[str, Any]) -> None:
    print("INVARIANT FAIL:", label)
    print("CTX:", json.dumps(context, ensure_ascii=False, default=repr)[:2000])
    raise SystemExit(1)

def token_forms(data: bytes) -> List[Any]:
    forms: List[Any] = [b64(data), b64(data).rstrip("="), data]
    # Hex shorter than two bytes is never taken for hex.
    if len(data) >= 2:
        forms += [data.hex(), data.hex().upper()]
    # Raw text is only unambiguous once it holds a character no text codec accepts.
    if any(b < 0x2B or b > 0x7A for b in data):
        forms.append(bytes_to_latin1(data))
    return forms

def main() -> int:
    inspector = Inspector()
    headers = sorted(CONTAINER_HEADERS)

    for t in range(TRIALS):
        v = gen_value(0)
        data = encode_structured(v)

        # (1) Round trip through every accepted token form
        for token in token_forms(data):
            got = inspector.decode(token, use_cache=False)
            if got != v:
                fail("round trip", {"trial": t, "token": repr(token)[:200]})

        # (2) Cache identity; disabled cache gives a fresh equal value
        token = b64(data)
        first = inspector.decode(token)
        if inspector.decode(token) is not first:
            fail("cache identity", {"trial": t})
        fresh = inspector.decode(token, use_cache=False)
        if fresh != first or (isinstance(fresh, (dict, list)) and fresh is first):
            fail("cache bypass", {"trial": t})

        # (3) Rendering never raises
        dumps_dag_json(first)

        # (4) Container coverage: every header row returns what was packed
        tokens = [rand_bytes() or b"\x00" for _ in range(random.randint(1, 4))]
        header = headers[t % len(headers)]
        packed = wrap_container(tokens, header)
        if unwrap_container(packed) != [bytes_to_base64url(x) for x in tokens]:
            fail("container coverage", {"trial": t, "header": hex(header)})

        if t % 500 == 499:
            inspector.clear_cache()

    print(f"OK: invariants passed for TRIALS={TRIALS} seed={SEED}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
