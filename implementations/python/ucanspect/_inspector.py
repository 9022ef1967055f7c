"""The decoding service: normalize → DAG-CBOR decode → cache → classify.

An ``Inspector`` owns its cache and its decoder chain, so two inspectors
never see each other's entries.  The package-level functions in
``ucanspect`` share one default instance.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from ._cache import MISSING, DecodeCache
from ._chain import DecoderChain, TokenDecoder, default_chain
from ._classify import UNKNOWN, TokenTypeInfo, classify_text, classify_value
from ._constants import MAX_DEPTH, MAX_INPUT_BYTES
from ._core import decode_structured
from ._encoding import Token, bytes_to_latin1, token_to_bytes
from ._errors import InspectError, StructuredDecodeError


class DecodeResult:
    """A decoded value plus how it arrived: source ``format`` and byte ``size``."""

    __slots__ = ("value", "format", "size")

    def __init__(self, value: Any, format: str, size: int) -> None:
        self.value = value
        self.format = format
        self.size = size

    def __repr__(self) -> str:
        return "DecodeResult(format={!r}, size={})".format(self.format, self.size)


class DecodeOutcome:
    """Result of safe_decode(): never an exception, always one of these."""

    __slots__ = ("success", "value", "error", "format")

    def __init__(self, success: bool, value: Any = None, error: Optional[str] = None,
                 format: Optional[str] = None) -> None:
        self.success = success
        self.value = value
        self.error = error
        self.format = format

    def __repr__(self) -> str:
        if self.success:
            return "DecodeOutcome(success=True)"
        return "DecodeOutcome(success=False, error={!r}, format={!r})".format(
            self.error, self.format)


class Inspector:
    def __init__(self, cache: Optional[DecodeCache] = None,
                 chain: Optional[DecoderChain] = None,
                 max_depth: int = MAX_DEPTH,
                 max_input_bytes: int = MAX_INPUT_BYTES) -> None:
        self.cache = cache if cache is not None else DecodeCache()
        self.chain = chain if chain is not None else default_chain()
        self.max_depth = max_depth
        self.max_input_bytes = max_input_bytes

    # ── Decoding ─────────────────────────────────────────────

    def normalize(self, token: Token):
        """Return ``(bytes, detected_format)`` for ``token``."""
        return token_to_bytes(token, self.max_depth, self.max_input_bytes)

    def decode(self, token: Token, use_cache: bool = True) -> Any:
        """Decode a token to its value tree.

        With ``use_cache`` a repeated token returns the identical object.
        Raises InputDecodeError for non-token input and StructuredDecodeError
        (with ``detected_format`` set) when the bytes are not DAG-CBOR.
        """
        if use_cache:
            hit = self.cache.get(token)
            if hit is not MISSING:
                return hit

        data, fmt = self.normalize(token)
        try:
            value = decode_structured(data, self.max_depth, self.max_input_bytes)
        except StructuredDecodeError as exc:
            raise StructuredDecodeError(
                "Failed to decode UCAN token (detected format: {})".format(fmt),
                code=exc.code, detected_format=fmt) from exc

        if use_cache:
            value = self.cache.put(token, value)
        return value

    def decode_with_meta(self, token: Token, use_cache: bool = True) -> DecodeResult:
        data, fmt = self.normalize(token)
        return DecodeResult(self.decode(token, use_cache), fmt, len(data))

    def safe_decode(self, token: Token, use_cache: bool = True) -> DecodeOutcome:
        """Like decode(), but failures come back as a DecodeOutcome."""
        try:
            return DecodeOutcome(True, value=self.decode(token, use_cache))
        except InspectError as exc:
            return DecodeOutcome(False, error=str(exc), format=exc.detected_format)

    def clear_cache(self) -> None:
        self.cache.clear()

    # ── Header values and classification ─────────────────────

    def unwrap(self, value: str) -> List[str]:
        """Split a header value into tokens (unpacking containers)."""
        return self.chain.decode(value)

    def resolve(self, value: str) -> Tuple[Optional[TokenDecoder], List[str]]:
        """unwrap(), plus the chain decoder that produced the tokens (or None)."""
        return self.chain.resolve(value)

    def classify(self, token: Token, use_cache: bool = True) -> TokenTypeInfo:
        """Classify a token as delegation, invocation, or unknown.  Never raises."""
        try:
            value = self.decode(token, use_cache)
        except InspectError:
            if isinstance(token, str):
                return classify_text(token)
            if isinstance(token, (bytes, bytearray, memoryview)):
                return classify_text(bytes_to_latin1(bytes(token)))
            return UNKNOWN
        return classify_value(value)
