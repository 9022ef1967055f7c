#!/usr/bin/env python3
# tools/fuzz_runner.py
#
# Robustness fuzzing for the decode pipeline.
#
# Generates three fuzz categories:
#   A) mutated real tokens (bit flips, truncation, splices) -> decode / classify
#   B) random text in every token alphabet -> decode / classify / unwrap
#   C) container headers over random or mutated payloads -> unwrap
#
# Every input must either succeed or raise InspectError; classification and
# unwrapping must never raise.  Anything else prints a repro and exits non-zero.

import os, sys, json, base64, random, string
from typing import Any, Dict

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, os.path.join(ROOT, "implementations", "python"))
sys.path.insert(0, os.path.join(ROOT, "implementations", "python", "tests"))

from ucanspect import InspectError, Inspector, wrap_container
from ucanspect._constants import CONTAINER_HEADERS

from mock_tokens import DELEGATION, DELEGATION_ALT, INVOCATION

SEED = int(os.environ.get("UCANSPECT_SEED", "4242"))
ROUNDS = int(os.environ.get("UCANSPECT_FUZZ_ROUNDS", "5000"))

random.seed(SEED)

SEEDS = [base64.b64decode(t) for t in (DELEGATION, DELEGATION_ALT, INVOCATION)]
TYPES = {"delegation", "invocation", "unknown"}

def b64(b: bytes) -> str:
    return base64.b64encode(b).decode("ascii")

def crash(label: str, exc: BaseException, ctx: Dict[str, Any]) -> None:
    print("CRASH:", label)
    print("EXC :", type(exc).__name__, exc)
    print("CTX:", json.dumps(ctx, ensure_ascii=False, default=repr)[:4000])
    raise SystemExit(1)

# --- generators ---

def mutate(data: bytes) -> bytes:
    b = bytearray(data)
    op = random.random()
    if op < 0.4:
        for _ in range(random.randint(1, 4)):
            i = random.randrange(len(b))
            b[i] ^= 1 << random.randrange(8)
    elif op < 0.6:
        b = b[:random.randrange(len(b))]
    elif op < 0.8:
        i = random.randrange(len(b))
        b[i:i] = bytes(random.getrandbits(8) for _ in range(random.randint(1, 8)))
    else:
        other = random.choice(SEEDS)
        i = random.randrange(len(b))
        b = b[:i] + other[random.randrange(len(other)):]
    return bytes(b)

def encode_as(data: bytes) -> Any:
    r = random.random()
    if r < 0.35:
        return b64(data)
    if r < 0.55:
        return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")
    if r < 0.70:
        return data.hex()
    if r < 0.85:
        return data.decode("latin-1")
    return data

def rand_text() -> str:
    alphabet = random.choice([
        string.hexdigits,
        string.ascii_letters + string.digits + "+/=",
        string.ascii_letters + string.digits + "-_",
        string.printable,
        "".join(chr(i) for i in range(256)),
    ])
    return "".join(random.choice(alphabet) for _ in range(random.randint(0, 96)))

def rand_container() -> str:
    header = random.choice(sorted(CONTAINER_HEADERS))
    if random.random() < 0.5:
        tokens = [mutate(random.choice(SEEDS)) for _ in range(random.randint(0, 3))]
        return wrap_container(tokens, header)
    return chr(header) + rand_text()

# --- checks ---

def check_decode(inspector: Inspector, token: Any, ctx: Dict[str, Any]) -> None:
    try:
        inspector.decode(token, use_cache=False)
    except InspectError:
        pass
    except Exception as e:
        crash("decode", e, ctx)
    try:
        info = inspector.classify(token, use_cache=False)
    except Exception as e:
        crash("classify", e, ctx)
    if info.type not in TYPES:
        crash("classify type", ValueError(info.type), ctx)

def check_unwrap(inspector: Inspector, value: str, ctx: Dict[str, Any]) -> None:
    try:
        tokens = inspector.unwrap(value)
    except Exception as e:
        crash("unwrap", e, ctx)
    if not tokens:
        crash("unwrap empty", ValueError(value[:40]), ctx)
    for t in tokens:
        check_decode(inspector, t, ctx)

def main() -> int:
    inspector = Inspector()
    for i in range(ROUNDS):
        r = random.random()

        # A) mutated real tokens
        if r < 0.45:
            data = mutate(random.choice(SEEDS))
            check_decode(inspector, encode_as(data), {"round": i, "input_b64": b64(data)})
            continue

        # B) random text
        if r < 0.75:
            text = rand_text()
            ctx = {"round": i, "text": text}
            check_decode(inspector, text, ctx)
            check_unwrap(inspector, text, ctx)
            continue

        # C) containers
        value = rand_container()
        check_unwrap(inspector, value, {"round": i, "container": value[:4000]})

    print(f"OK: fuzz rounds={ROUNDS} seed={SEED} (no crashes)")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
