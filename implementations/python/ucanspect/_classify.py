"""Token type classification: delegation, invocation, or unknown.

A UCAN 1.0 token decodes to an envelope

    [signature_bytes, {"h": header_bytes, "ucan/dlg@1.0.0-rc.1": payload}]

The type tag key names the payload kind and UCAN version.  A tag alone is
not enough: the payload under it must also have the right shape, checked
by the ``is_*_payload`` predicates below.  Nothing here verifies
signatures or evaluates policy.

When a token does not decode at all, ``classify_text`` falls back to
searching for a type tag in the token text.  That path trusts the tag
text and does not look at the payload.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Optional, Tuple

from ._constants import (
    ENVELOPE_HEADER_KEY,
    TYPE_ABBREVIATIONS,
    TYPE_UNKNOWN,
)
from ._encoding import base64_to_bytes, bytes_to_latin1, looks_like_base64
from ._values import is_link, is_number

TYPE_TAG_PATTERN = re.compile(r"ucan/(dlg|inv)@([0-9A-Za-z.\-]+)", re.IGNORECASE)


class TokenTypeInfo:
    """Classification result.  ``version`` is None for unknown tokens."""

    __slots__ = ("type", "version")

    def __init__(self, type: str = TYPE_UNKNOWN, version: Optional[str] = None) -> None:
        self.type = type
        self.version = version

    def as_dict(self) -> Dict[str, str]:
        out = {"type": self.type}
        if self.version is not None:
            out["version"] = self.version
        return out

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TokenTypeInfo):
            return (self.type, self.version) == (other.type, other.version)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.type, self.version))

    def __repr__(self) -> str:
        return "TokenTypeInfo({!r}, {!r})".format(self.type, self.version)


UNKNOWN = TokenTypeInfo()


# ── Shape predicates ─────────────────────────────────────────

def _is_map(value: Any) -> bool:
    return isinstance(value, Mapping)


def _is_text(value: Any) -> bool:
    return isinstance(value, str)


def _is_number_or_null(value: Any) -> bool:
    return value is None or is_number(value)


def _optional(payload: Mapping, key: str, check) -> bool:
    return key not in payload or check(payload[key])


def is_envelope(value: Any) -> bool:
    """``[bytes, {"h": bytes, ...}]``: the outer shape of every UCAN 1.0 token."""
    return (isinstance(value, (list, tuple))
            and len(value) == 2
            and isinstance(value[0], bytes)
            and _is_map(value[1])
            and isinstance(value[1].get(ENVELOPE_HEADER_KEY), bytes))


def is_delegation_payload(value: Any) -> bool:
    if not _is_map(value):
        return False
    if "sub" not in value or "exp" not in value or "pol" not in value:
        return False
    return (_is_text(value.get("iss"))
            and _is_text(value.get("aud"))
            and (value["sub"] is None or _is_text(value["sub"]))
            and _is_text(value.get("cmd"))
            and isinstance(value.get("nonce"), bytes)
            and _is_number_or_null(value["exp"])
            and _optional(value, "nbf", is_number)
            and _optional(value, "meta", _is_map))


def is_invocation_payload(value: Any) -> bool:
    if not _is_map(value):
        return False
    if "exp" not in value:
        return False
    prf = value.get("prf")
    return (_is_text(value.get("iss"))
            and _is_text(value.get("sub"))
            and _is_text(value.get("cmd"))
            and _is_map(value.get("args"))
            and isinstance(prf, (list, tuple))
            and all(is_link(p) for p in prf)
            and isinstance(value.get("nonce"), bytes)
            and _is_number_or_null(value["exp"])
            and _optional(value, "aud", _is_text)
            and _optional(value, "iat", is_number)
            and _optional(value, "nbf", is_number)
            and _optional(value, "cause", is_link)
            and _optional(value, "meta", _is_map))


_SHAPES = {
    "dlg": is_delegation_payload,
    "inv": is_invocation_payload,
}


# ── Tag handling ─────────────────────────────────────────────

def extract_type_from_tag(text: str) -> TokenTypeInfo:
    """Map the first ``ucan/{dlg|inv}@{version}`` in ``text`` to a type."""
    m = TYPE_TAG_PATTERN.search(text)
    if not m:
        return UNKNOWN
    return TokenTypeInfo(TYPE_ABBREVIATIONS[m.group(1).lower()], m.group(2))


def find_payload(envelope: Any) -> Optional[Tuple[str, Any]]:
    """Return ``(type_tag, payload)`` for the envelope's type-tag key.

    Keys are scanned in insertion order and the first type tag wins, even
    when a later key carries a different one.  The payload must match the
    tag's shape or the result is None.
    """
    if not is_envelope(envelope):
        return None
    for key, payload in envelope[1].items():
        if not isinstance(key, str):
            continue
        m = TYPE_TAG_PATTERN.fullmatch(key)
        if not m:
            continue
        if _SHAPES[m.group(1).lower()](payload):
            return key, payload
        return None
    return None


def classify_value(value: Any) -> TokenTypeInfo:
    """Classify a decoded token.  Never raises."""
    found = find_payload(value)
    if found is None:
        return UNKNOWN
    return extract_type_from_tag(found[0])


def classify_text(token: str) -> TokenTypeInfo:
    """Degraded classification for tokens that failed to decode.

    Looks for a type tag in the token text, then in the base64-decoded
    bytes (read one character per byte) if the token looks like base64.
    """
    info = extract_type_from_tag(token)
    if info.type != TYPE_UNKNOWN:
        return info
    if looks_like_base64(token):
        try:
            text = bytes_to_latin1(base64_to_bytes(token))
        except ValueError:
            return UNKNOWN
        return extract_type_from_tag(text)
    return UNKNOWN
