"""DAG-CBOR decode/encode for UCAN tokens.

Parsing is done by cbor2; this module adds what DAG-CBOR and token
inspection need on top of it:

    tag 42   CID link      → {"/": "bafy..."}, or {"/": raw_bytes} when the
                             CID does not parse (never an error)
    tag 258  set           → set, deduplicated by value equality
    other tags, simple values, undefined, datetimes, decimals ...
                           → StructuredDecodeError

A token is exactly one CBOR item.  Trailing bytes are an error, which is
what keeps the normalizer's hex detection honest: most short hex strings
decode to *some* CBOR prefix.
"""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Any, List, Tuple

import cbor2
from cbor2 import CBORDecodeError, CBORSimpleValue, CBORTag, FrozenDict
from multiformats import CID

from ._constants import CID_IDENTITY_PREFIX, MAX_DEPTH, MAX_INPUT_BYTES, TAG_LINK, TAG_SET
from ._errors import (
    ERR_LIMIT_DEPTH,
    ERR_LIMIT_SIZE,
    ERR_STRUCTURE,
    ERR_UNSUPPORTED_TAG,
    StructuredDecodeError,
)
from ._values import (
    KIND_ARRAY,
    KIND_LINK,
    KIND_MAP,
    KIND_SET,
    LINK_KEY,
    kind_of,
    make_link,
)

logger = logging.getLogger(__name__)


# ── Tag 42: CID links ─────────────────────────────────────────

def render_cid(raw: bytes) -> Any:
    """Render CID bytes as ``{"/": cid_string}``, or ``{"/": raw}`` on failure.

    DAG-CBOR prefixes the binary CID with the 0x00 identity multibase byte;
    bare CID bytes are accepted too.
    """
    body = raw[1:] if raw[:1] == bytes([CID_IDENTITY_PREFIX]) else raw
    try:
        cid = CID.decode(body)
        text = cid.encode("base32") if cid.version == 1 else cid.encode()
    except Exception as exc:  # any CID parse failure degrades to raw bytes
        logger.debug("tag 42 payload is not a CID (%s); keeping raw bytes", exc)
        return make_link(bytes(raw))
    return make_link(text)


def _tag_hook(decoder: Any, tag: CBORTag) -> Any:
    # Called by cbor2 for tag 42 only; _scan_item has vetted the tag
    # numbers.  A non-bytes payload is returned untouched and rejected by
    # _check_tree, so the hook itself never raises.
    if tag.tag == TAG_LINK and isinstance(tag.value, bytes):
        link = render_cid(tag.value)
        return FrozenDict(link) if decoder.immutable else link
    return tag


# ── Variant check ────────────────────────────────────────────

def _check_tree(value: Any, max_depth: int) -> None:
    """Reject nodes outside the decoded value model and enforce max_depth.

    Depth counts containers only: a root map is depth 1, scalars add
    nothing.  Iterative, so hostile nesting can't blow the Python stack.
    """
    stack: List[Tuple[Any, int]] = [(value, 0)]
    while stack:
        node, depth = stack.pop()

        # Other tag numbers never get this far; _scan_item rejects them.
        if isinstance(node, CBORTag):
            raise StructuredDecodeError(
                "tag {} payload must be a byte string".format(node.tag), code=ERR_STRUCTURE)
        # CBORSimpleValue is tuple-like in some cbor2 builds; check it first.
        if isinstance(node, CBORSimpleValue):
            raise StructuredDecodeError("unsupported CBOR simple value")

        kind = kind_of(node)
        if kind is None:
            raise StructuredDecodeError(
                "unsupported CBOR value of type {}".format(type(node).__name__))
        if kind not in (KIND_MAP, KIND_ARRAY, KIND_SET):
            continue

        if depth + 1 > max_depth:
            raise StructuredDecodeError("nesting exceeds MAX_DEPTH", code=ERR_LIMIT_DEPTH)
        if kind == KIND_MAP:
            for k, v in node.items():
                stack.append((k, depth + 1))
                stack.append((v, depth + 1))
        else:
            for item in node:
                stack.append((item, depth + 1))


# ── Item-head walk ───────────────────────────────────────────

def _read_length(info: int, data: bytes, pos: int) -> Tuple[int, int]:
    if info < 24:
        return info, pos
    if info > 27:
        raise StructuredDecodeError(
            "invalid additional information {} at offset {}".format(info, pos - 1))
    size = 1 << (info - 24)
    if pos + size > len(data):
        raise StructuredDecodeError("truncated length at offset {}".format(pos))
    return int.from_bytes(data[pos:pos + size], "big"), pos + size


def _scan_item(data: bytes) -> int:
    """Walk the item heads of one CBOR item; return the offset after it.

    Runs before cbor2 so that tags are vetted by number before any of
    cbor2's built-in tag semantics (bignums, shared values, string
    references, self-describe) can turn them into plain values.
    """
    pos = 0
    # Items still owed by each open container; None while indefinite.
    pending: List[Any] = [1]
    while pending:
        if pending[-1] == 0:
            pending.pop()
            continue
        if pos >= len(data):
            raise StructuredDecodeError("truncated input")
        initial = data[pos]
        pos += 1
        if initial == 0xFF:
            if pending[-1] is not None:
                raise StructuredDecodeError("unexpected break at offset {}".format(pos - 1))
            pending.pop()
            continue
        if pending[-1] is not None:
            pending[-1] -= 1

        major, info = initial >> 5, initial & 0x1F
        if info == 31:
            if major not in (2, 3, 4, 5):
                raise StructuredDecodeError(
                    "invalid indefinite length at offset {}".format(pos - 1))
            pending.append(None)
            continue

        arg, pos = _read_length(info, data, pos)
        if major in (2, 3):
            if pos + arg > len(data):
                raise StructuredDecodeError("truncated string at offset {}".format(pos))
            pos += arg
        elif major == 4:
            pending.append(arg)
        elif major == 5:
            pending.append(2 * arg)
        elif major == 6:
            if arg not in (TAG_LINK, TAG_SET):
                raise StructuredDecodeError(
                    "unsupported CBOR tag {}".format(arg), code=ERR_UNSUPPORTED_TAG)
            pending.append(1)
    return pos


# ── Decode ───────────────────────────────────────────────────

def decode_structured(data: bytes, max_depth: int = MAX_DEPTH,
                      max_input_bytes: int = MAX_INPUT_BYTES) -> Any:
    """Decode exactly one DAG-CBOR value from ``data``.

    Raises StructuredDecodeError on empty or truncated input, bad length
    prefixes, invalid UTF-8, trailing bytes, unsupported tags or types, and
    on breaching the size or depth limits.
    """
    data = bytes(data)
    if len(data) > max_input_bytes:
        raise StructuredDecodeError("input exceeds MAX_INPUT_BYTES", code=ERR_LIMIT_SIZE)
    if not data:
        raise StructuredDecodeError("empty input")

    end = _scan_item(data)
    if end != len(data):
        raise StructuredDecodeError(
            "{} trailing bytes after the top-level value".format(len(data) - end))

    fp = BytesIO(data)
    try:
        value = cbor2.CBORDecoder(fp, tag_hook=_tag_hook).decode()
    except (CBORDecodeError, ValueError, TypeError, EOFError, OverflowError,
            RecursionError) as exc:
        raise StructuredDecodeError("malformed DAG-CBOR: {}".format(exc)) from exc
    if fp.tell() != len(data):
        raise StructuredDecodeError("expected exactly one top-level value")

    _check_tree(value, max_depth)
    return value


def is_structured(data: bytes, max_depth: int = MAX_DEPTH,
                  max_input_bytes: int = MAX_INPUT_BYTES) -> bool:
    try:
        decode_structured(data, max_depth, max_input_bytes)
    except StructuredDecodeError:
        return False
    return True


# ── Encode ───────────────────────────────────────────────────

def _to_encodable(val: Any) -> Any:
    kind = kind_of(val)
    if kind == KIND_LINK:
        target = val[LINK_KEY]
        if isinstance(target, str):
            target = bytes([CID_IDENTITY_PREFIX]) + bytes(CID.decode(target))
        return CBORTag(TAG_LINK, target)
    if kind == KIND_MAP:
        return {k: _to_encodable(v) for k, v in val.items()}
    if kind == KIND_ARRAY:
        return [_to_encodable(v) for v in val]
    if kind == KIND_SET:
        return CBORTag(TAG_SET, [_to_encodable(v) for v in val])
    if kind is None:
        raise StructuredDecodeError(
            "cannot encode value of type {}".format(type(val).__name__))
    return val


def encode_structured(value: Any) -> bytes:
    """Encode a decoded-value tree back to CBOR bytes.

    Links become tag 42 (text CIDs are re-parsed), sets become tag 258.
    """
    return cbor2.dumps(_to_encodable(value))
