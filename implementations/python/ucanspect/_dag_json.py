"""Decoded value → DAG-JSON-style data, for display.

Mapping:
    map      → object (keys stringified if they aren't text)
    array    → array
    bytes    → {"/": {"bytes": "<unpadded base64>"}}
    link     → {"/": "<cid>"}, or {"/": {"bytes": ...}} for an unparsed CID
    set      → array, sorted by its JSON text so output is stable
    float    → number; NaN/Infinity become strings since JSON has none
    others   → as-is
"""

from __future__ import annotations

import json
import math
from typing import Any

from ._values import (
    KIND_ARRAY,
    KIND_BYTES,
    KIND_FLOAT,
    KIND_LINK,
    KIND_MAP,
    KIND_SET,
    LINK_KEY,
    kind_of,
)
from ._encoding import bytes_to_base64


def _bytes_node(data: bytes) -> Any:
    return {LINK_KEY: {"bytes": bytes_to_base64(data).rstrip("=")}}


def to_dag_json(value: Any) -> Any:
    kind = kind_of(value)

    if kind == KIND_BYTES:
        return _bytes_node(value)

    if kind == KIND_LINK:
        target = value[LINK_KEY]
        if isinstance(target, bytes):
            return _bytes_node(target)
        return {LINK_KEY: target}

    if kind == KIND_MAP:
        out = {}
        for k, v in value.items():
            key = k if isinstance(k, str) else json.dumps(to_dag_json(k), sort_keys=True)
            out[key] = to_dag_json(v)
        return out

    if kind == KIND_ARRAY:
        return [to_dag_json(v) for v in value]

    if kind == KIND_SET:
        items = [to_dag_json(v) for v in value]
        return sorted(items, key=lambda x: json.dumps(x, sort_keys=True))

    if kind == KIND_FLOAT and not math.isfinite(value):
        return str(value)

    return value


def dumps_dag_json(value: Any, indent: Any = 2) -> str:
    return json.dumps(to_dag_json(value), indent=indent, ensure_ascii=False)
