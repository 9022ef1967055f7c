"""Token text/byte normalization.

Tokens show up in headers as base64, base64url, hex, or occasionally as a
raw byte string smuggled through a JS string.  ``token_to_bytes`` picks
the first interpretation that works, in a fixed order:

    1. hex        only if the bytes also parse as DAG-CBOR
    2. base64url  only if the text contains '-' or '_'
    3. base64     standard alphabet, padding optional
    4. raw        one byte per character; always succeeds

Hex goes first because a hex string is usually valid base64 too; the
DAG-CBOR check stops e.g. "deadbeef" being taken for hex when it is
really base64 of something else.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re
from typing import Tuple, Union

from ._constants import (
    FORMAT_BASE64,
    FORMAT_BASE64URL,
    FORMAT_BYTES,
    FORMAT_HEX,
    FORMAT_RAW,
    MAX_DEPTH,
    MAX_INPUT_BYTES,
    MIN_HEX_LENGTH,
)
from ._core import is_structured
from ._errors import InputDecodeError

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]
Token = Union[str, BytesLike]

_HEX = re.compile(r"[0-9a-fA-F]+")
_BASE64_STD = re.compile(r"[A-Za-z0-9+/]+={0,2}")
_URL_TO_STD = str.maketrans("-_", "+/")
_STD_TO_URL = str.maketrans("+/", "-_")


# ── Per-byte text ("latin-1" in JS terms) ────────────────────

def latin1_to_bytes(text: str) -> bytes:
    """One byte per character.  Code points above 0xFF are masked."""
    return bytes(ord(ch) & 0xFF for ch in text)


def bytes_to_latin1(data: bytes) -> str:
    return bytes(data).decode("latin-1")


# ── base64 / base64url ───────────────────────────────────────

def _restore_padding(text: str) -> str:
    rem = len(text) % 4
    if rem == 2:
        return text + "=="
    if rem == 3:
        return text + "="
    if rem == 0:
        return text
    raise ValueError("invalid base64 length")


def base64_to_bytes(text: str) -> bytes:
    """Decode standard base64.  Missing padding is restored, like atob().

    Raises ValueError (binascii.Error) on characters outside the alphabet
    or an impossible length.
    """
    if "=" not in text:
        text = _restore_padding(text)
    return base64.b64decode(text, validate=True)


def bytes_to_base64(data: bytes) -> str:
    return base64.b64encode(bytes(data)).decode("ascii")


def base64url_to_bytes(text: str) -> bytes:
    """Decode unpadded base64url.  A length remainder of 1 is rejected."""
    std = _restore_padding(text.translate(_URL_TO_STD))
    return base64.b64decode(std, validate=True)


def bytes_to_base64url(data: bytes) -> str:
    return bytes_to_base64(data).translate(_STD_TO_URL).rstrip("=")


def looks_like_base64(text: str) -> bool:
    return bool(text) and len(text) % 4 == 0 and _BASE64_STD.fullmatch(text) is not None


# ── Format detection ─────────────────────────────────────────

def _try_hex(token: str, max_depth: int, max_input_bytes: int) -> Union[bytes, None]:
    if len(token) < MIN_HEX_LENGTH or len(token) % 2 or not _HEX.fullmatch(token):
        return None
    data = bytes.fromhex(token)
    if not is_structured(data, max_depth, max_input_bytes):
        logger.debug("hex-shaped token is not DAG-CBOR; trying base64")
        return None
    return data


def token_to_bytes(token: Token, max_depth: int = MAX_DEPTH,
                   max_input_bytes: int = MAX_INPUT_BYTES) -> Tuple[bytes, str]:
    """Return ``(bytes, detected_format)`` for a token string or byte sequence."""
    if isinstance(token, (bytes, bytearray, memoryview)):
        return bytes(token), FORMAT_BYTES
    if not isinstance(token, str):
        raise InputDecodeError(
            "token must be str or bytes, not {}".format(type(token).__name__))

    data = _try_hex(token, max_depth, max_input_bytes)
    if data is not None:
        return data, FORMAT_HEX

    if "-" in token or "_" in token:
        try:
            return base64url_to_bytes(token), FORMAT_BASE64URL
        except (ValueError, binascii.Error):
            logger.debug("token has base64url characters but does not decode as base64url")

    try:
        return base64_to_bytes(token), FORMAT_BASE64
    except (ValueError, binascii.Error):
        pass

    return latin1_to_bytes(token), FORMAT_RAW
