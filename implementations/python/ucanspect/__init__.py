"""ucanspect: decode and classify UCAN 1.0 tokens captured from HTTP traffic.

Tokens arrive as base64, base64url, hex, or raw byte strings, sometimes
several at once inside a UCAN container.  ucanspect finds out which,
decodes the DAG-CBOR underneath, and says whether it is a delegation or
an invocation and which UCAN version it claims.

Quick start:
    >>> from ucanspect import detect_token_type
    >>> detect_token_type(token).as_dict()
    {'type': 'delegation', 'version': '1.0.0-rc.1'}

Signatures are not verified and policies are not evaluated; this is a
structural inspector.
"""

from __future__ import annotations

from typing import Any, List

from ._cache import DecodeCache
from ._capture import TokenItem, capture_from_request, extract_raw_tokens
from ._chain import (
    ContainerDecoder,
    DecoderChain,
    RawTokenDecoder,
    TokenDecoder,
    default_chain,
)
from ._classify import (
    TokenTypeInfo,
    classify_text,
    classify_value,
    extract_type_from_tag,
    find_payload,
    is_delegation_payload,
    is_envelope,
    is_invocation_payload,
)
from ._container import is_container, unwrap_container, wrap_container
from ._core import decode_structured, encode_structured
from ._dag_json import dumps_dag_json, to_dag_json
from ._encoding import Token, token_to_bytes
from ._errors import (
    ERR_CONTAINER_COMPRESSION,
    ERR_CONTAINER_CONTENT,
    ERR_CONTAINER_ENCODING,
    ERR_CONTAINER_HEADER,
    ERR_INPUT,
    ERR_LIMIT_DEPTH,
    ERR_LIMIT_SIZE,
    ERR_STRUCTURE,
    ERR_UNSUPPORTED_TAG,
    ContainerDecodeError,
    InputDecodeError,
    InspectError,
    StructuredDecodeError,
)
from ._inspector import DecodeOutcome, DecodeResult, Inspector
from ._values import is_link, kind_of

__version__ = "0.3.0"

__all__ = [
    # Service
    "Inspector",
    "DecodeCache",
    "DecodeResult",
    "DecodeOutcome",
    "default_inspector",
    # Default-instance API
    "decode_token",
    "decode_token_with_meta",
    "safe_decode_token",
    "detect_token_type",
    "unwrap_header_value",
    "clear_decode_cache",
    # Pipeline stages
    "token_to_bytes",
    "decode_structured",
    "encode_structured",
    "is_container",
    "unwrap_container",
    "wrap_container",
    "TokenDecoder",
    "ContainerDecoder",
    "RawTokenDecoder",
    "DecoderChain",
    "default_chain",
    # Classification
    "TokenTypeInfo",
    "classify_value",
    "classify_text",
    "extract_type_from_tag",
    "find_payload",
    "is_envelope",
    "is_delegation_payload",
    "is_invocation_payload",
    "is_link",
    "kind_of",
    # Capture / display
    "TokenItem",
    "capture_from_request",
    "extract_raw_tokens",
    "to_dag_json",
    "dumps_dag_json",
    # Exceptions
    "InspectError",
    "InputDecodeError",
    "StructuredDecodeError",
    "ContainerDecodeError",
    # Error codes
    "ERR_INPUT",
    "ERR_STRUCTURE",
    "ERR_UNSUPPORTED_TAG",
    "ERR_LIMIT_SIZE",
    "ERR_LIMIT_DEPTH",
    "ERR_CONTAINER_HEADER",
    "ERR_CONTAINER_ENCODING",
    "ERR_CONTAINER_COMPRESSION",
    "ERR_CONTAINER_CONTENT",
]


_default = Inspector()


def default_inspector() -> Inspector:
    """The shared Inspector behind the module-level functions."""
    return _default


# ── Default-instance API ──────────────────────────────────────

def decode_token(token: Token, use_cache: bool = True) -> Any:
    """Decode a token (str or bytes) to its DAG-CBOR value tree.

    Raises StructuredDecodeError, with ``detected_format`` set, if the token
    is not DAG-CBOR in any encoding the normalizer recognizes.
    """
    return _default.decode(token, use_cache)


def decode_token_with_meta(token: Token, use_cache: bool = True) -> DecodeResult:
    """Decode a token and report its detected format and byte size."""
    return _default.decode_with_meta(token, use_cache)


def safe_decode_token(token: Token, use_cache: bool = True) -> DecodeOutcome:
    """Decode without raising; failures carry a message and detected format."""
    return _default.safe_decode(token, use_cache)


def detect_token_type(token: Token) -> TokenTypeInfo:
    """Classify a token as delegation, invocation, or unknown."""
    return _default.classify(token)


def unwrap_header_value(value: str) -> List[str]:
    """Split one header value into tokens, unpacking a container if present."""
    return _default.unwrap(value)


def clear_decode_cache() -> None:
    _default.clear_cache()
