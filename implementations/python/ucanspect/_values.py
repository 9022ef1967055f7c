"""Decoded value model.

A decoded token is a tree of plain Python values.  The set of node kinds
is closed:

    map      dict (cbor2 FrozenDict inside sets)
    array    list (tuple inside sets)
    text     str
    bytes    bytes
    integer  int
    float    float
    boolean  bool
    null     None
    link     {"/": cid_string} or {"/": raw_bytes}
    set      set / frozenset

Anything else found in a decoded tree means the decoder let through a
type it should have rejected.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

LINK_KEY = "/"

KIND_MAP = "map"
KIND_ARRAY = "array"
KIND_TEXT = "text"
KIND_BYTES = "bytes"
KIND_INTEGER = "integer"
KIND_FLOAT = "float"
KIND_BOOLEAN = "boolean"
KIND_NULL = "null"
KIND_LINK = "link"
KIND_SET = "set"


def make_link(target: Union[str, bytes]) -> Dict[str, Union[str, bytes]]:
    return {LINK_KEY: target}


def is_link(value: Any) -> bool:
    """True for ``{"/": str}`` or ``{"/": bytes}`` and nothing else."""
    return (isinstance(value, Mapping)
            and len(value) == 1
            and isinstance(value.get(LINK_KEY), (str, bytes)))


def kind_of(value: Any) -> Optional[str]:
    """Name the variant of a decoded node, or None if it is not one."""
    # bool before int: isinstance(True, int) is True.
    if isinstance(value, bool):
        return KIND_BOOLEAN
    if isinstance(value, int):
        return KIND_INTEGER
    if isinstance(value, float):
        return KIND_FLOAT
    if isinstance(value, str):
        return KIND_TEXT
    if isinstance(value, bytes):
        return KIND_BYTES
    if value is None:
        return KIND_NULL
    if is_link(value):
        return KIND_LINK
    if isinstance(value, Mapping):
        return KIND_MAP
    if isinstance(value, (list, tuple)):
        return KIND_ARRAY
    if isinstance(value, (set, frozenset)):
        return KIND_SET
    return None


def is_number(value: Any) -> bool:
    return kind_of(value) in (KIND_INTEGER, KIND_FLOAT)
