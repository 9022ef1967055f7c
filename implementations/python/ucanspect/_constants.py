"""ucanspect constants: container header table, CBOR tags, keys, and limits.

UCAN 1.0 tokens are DAG-CBOR.  Containers follow the UCAN container
format ("ctn-v1"), a one-byte header followed by the encoded payload.
"""

from __future__ import annotations

from typing import Dict, Tuple

# ── Token formats reported by the normalizer ─────────────────
FORMAT_BASE64: str = "base64"
FORMAT_BASE64URL: str = "base64url"
FORMAT_HEX: str = "hex"
FORMAT_RAW: str = "raw"
FORMAT_BYTES: str = "bytes"

# ── DAG-CBOR extension tags ──────────────────────────────────
TAG_LINK: int = 42    # CID, prefixed with the 0x00 identity multibase byte
TAG_SET: int = 258

# Identity multibase prefix carried in front of binary CIDs under tag 42.
CID_IDENTITY_PREFIX: int = 0x00

# ── Container header byte → (text encoding, gzip?) ───────────
# This table is bit-exact.  Other implementations emit these bytes.
ENCODING_RAW: str = "raw"
ENCODING_BASE64: str = "base64"
ENCODING_BASE64URL: str = "base64url"

CONTAINER_HEADERS: Dict[int, Tuple[str, bool]] = {
    0x40: (ENCODING_RAW, False),        # '@'
    0x42: (ENCODING_BASE64, False),     # 'B'
    0x43: (ENCODING_BASE64URL, False),  # 'C'
    0x4D: (ENCODING_RAW, True),         # 'M'
    0x4F: (ENCODING_BASE64, True),      # 'O'
    0x50: (ENCODING_BASE64URL, True),   # 'P'
}

CONTAINER_KEY: str = "ctn-v1"

# ── Envelope layout ──────────────────────────────────────────
# [signature, {"h": varsig header bytes, "ucan/<kind>@<version>": payload}]
ENVELOPE_HEADER_KEY: str = "h"

TYPE_DELEGATION: str = "delegation"
TYPE_INVOCATION: str = "invocation"
TYPE_UNKNOWN: str = "unknown"

TYPE_ABBREVIATIONS: Dict[str, str] = {
    "dlg": TYPE_DELEGATION,
    "inv": TYPE_INVOCATION,
}

# ── Capture headers ──────────────────────────────────────────
HEADER_AUTHORIZATION: str = "Authorization"
HEADER_UCANS: str = "ucans"
BEARER_PREFIX: str = "Bearer "

# ── Safety limits ────────────────────────────────────────────
# Tokens ride in HTTP headers, so anything near these sizes is hostile.
MAX_INPUT_BYTES: int = 1_048_576   # 1 MiB
MAX_DEPTH: int = 64

# Smallest string the hex branch will consider (two bytes).
MIN_HEX_LENGTH: int = 4
