"""UCAN containers: several tokens packed behind a one-byte header.

Layout:

    <header byte><payload>

where the header selects how <payload> is text-encoded and whether it is
gzip-compressed (see CONTAINER_HEADERS).  Once decoded, the payload is a
DAG-CBOR map ``{"ctn-v1": [token_bytes, ...]}``.

Unwrapped tokens are returned as unpadded base64url text, which is how the
rest of the pipeline expects standalone tokens to look.
"""

from __future__ import annotations

import binascii
import gzip
import logging
import zlib
from typing import Any, Iterable, List, Mapping, Union

from ._constants import (
    CONTAINER_HEADERS,
    CONTAINER_KEY,
    ENCODING_BASE64,
    ENCODING_BASE64URL,
    MAX_DEPTH,
    MAX_INPUT_BYTES,
)
from ._core import decode_structured, encode_structured
from ._encoding import (
    base64_to_bytes,
    base64url_to_bytes,
    bytes_to_base64,
    bytes_to_base64url,
    bytes_to_latin1,
)
from ._errors import (
    ERR_CONTAINER_COMPRESSION,
    ERR_CONTAINER_CONTENT,
    ERR_CONTAINER_ENCODING,
    ERR_CONTAINER_HEADER,
    ContainerDecodeError,
    StructuredDecodeError,
)

logger = logging.getLogger(__name__)


def is_container(token: str) -> bool:
    """True if the first character is one of the six container header bytes."""
    return bool(token) and ord(token[0]) in CONTAINER_HEADERS


def _decode_text(encoding: str, payload: str) -> bytes:
    if encoding == ENCODING_BASE64:
        return base64_to_bytes(payload)
    if encoding == ENCODING_BASE64URL:
        return base64url_to_bytes(payload)
    # Raw: each character is exactly one byte; anything wider is corrupt.
    return payload.encode("latin-1")


def _payload_bytes(token: str, max_input_bytes: int) -> bytes:
    header = ord(token[0])
    encoding, compressed = CONTAINER_HEADERS[header]

    try:
        data = _decode_text(encoding, token[1:])
    except (ValueError, binascii.Error) as exc:
        raise ContainerDecodeError(
            "container payload is not valid {} text".format(encoding),
            code=ERR_CONTAINER_ENCODING) from exc

    if compressed:
        # Inflate at most one byte past the input limit so the structured
        # decoder reports the overflow.
        try:
            inflater = zlib.decompressobj(16 + zlib.MAX_WBITS)
            data = inflater.decompress(data, max_input_bytes + 1)
        except zlib.error as exc:
            raise ContainerDecodeError(
                "container payload failed to decompress",
                code=ERR_CONTAINER_COMPRESSION) from exc
        if not inflater.eof and len(data) <= max_input_bytes:
            raise ContainerDecodeError(
                "container payload is a truncated gzip stream",
                code=ERR_CONTAINER_COMPRESSION)
    return data


def _entry_to_token(entry: Any) -> Union[str, None]:
    if isinstance(entry, bytes):
        return bytes_to_base64url(entry)
    if isinstance(entry, (list, tuple)):
        # Some encoders hand us byte strings as arrays of ints.
        if all(isinstance(b, int) and not isinstance(b, bool) and 0 <= b <= 0xFF
               for b in entry):
            return bytes_to_base64url(bytes(entry))
        return None
    if isinstance(entry, str):
        return entry
    return None


def unwrap_container(token: str, max_depth: int = MAX_DEPTH,
                     max_input_bytes: int = MAX_INPUT_BYTES) -> List[str]:
    """Unpack a container into its token strings.

    Returns ``[token]`` unchanged if the container holds no usable entries.
    Raises ContainerDecodeError if the header is not a container header or
    the payload cannot be decoded, decompressed, or parsed.
    """
    if not is_container(token):
        raise ContainerDecodeError("not a container header byte",
                                   code=ERR_CONTAINER_HEADER)

    data = _payload_bytes(token, max_input_bytes)
    try:
        decoded = decode_structured(data, max_depth, max_input_bytes)
    except StructuredDecodeError as exc:
        raise ContainerDecodeError("container payload is not DAG-CBOR: {}".format(exc),
                                   code=ERR_CONTAINER_CONTENT) from exc

    if not isinstance(decoded, Mapping):
        raise ContainerDecodeError("container payload is not a map",
                                   code=ERR_CONTAINER_CONTENT)

    entries = decoded.get(CONTAINER_KEY, [])
    if not isinstance(entries, (list, tuple)):
        raise ContainerDecodeError("{!r} is not an array".format(CONTAINER_KEY),
                                   code=ERR_CONTAINER_CONTENT)

    tokens: List[str] = []
    for entry in entries:
        out = _entry_to_token(entry)
        if out is None:
            logger.debug("skipping container entry of type %s", type(entry).__name__)
            continue
        tokens.append(out)

    return tokens if tokens else [token]


def wrap_container(tokens: Iterable[bytes], header: int = 0x43) -> str:
    """Pack token byte strings into a container string using ``header``."""
    if header not in CONTAINER_HEADERS:
        raise ContainerDecodeError("unknown container header 0x{:02x}".format(header),
                                   code=ERR_CONTAINER_HEADER)
    encoding, compressed = CONTAINER_HEADERS[header]

    data = encode_structured({CONTAINER_KEY: [bytes(t) for t in tokens]})
    if compressed:
        data = gzip.compress(data)

    if encoding == ENCODING_BASE64:
        payload = bytes_to_base64(data)
    elif encoding == ENCODING_BASE64URL:
        payload = bytes_to_base64url(data)
    else:
        payload = bytes_to_latin1(data)
    return chr(header) + payload
