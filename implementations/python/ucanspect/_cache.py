"""Memoization of decoded tokens.

Entries are keyed by the token as the caller sees it: strings as-is,
byte sequences by their standard base64 text.  A hit returns the very
object stored, so decoded values must be treated as read-only.  There is
no eviction; ``clear()`` is the only way entries leave.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Iterator, Union

from ._encoding import bytes_to_base64
from ._errors import InputDecodeError

logger = logging.getLogger(__name__)

# Returned by DecodeCache.get() on a miss; decoded values can be None.
MISSING = object()


def cache_key(token: Union[str, bytes, bytearray, memoryview]) -> str:
    if isinstance(token, str):
        return token
    if isinstance(token, (bytes, bytearray, memoryview)):
        return bytes_to_base64(bytes(token))
    raise InputDecodeError(
        "token must be str or bytes, not {}".format(type(token).__name__))


class DecodeCache:
    """Thread-safe canonical-key → decoded value map."""

    def __init__(self) -> None:
        self._entries: Dict[str, Any] = {}
        self._lock = threading.Lock()

    def get(self, token: Any, default: Any = MISSING) -> Any:
        key = cache_key(token)
        with self._lock:
            return self._entries.get(key, default)

    def put(self, token: Any, value: Any) -> Any:
        """Store ``value`` unless an entry exists; return the stored object."""
        key = cache_key(token)
        with self._lock:
            return self._entries.setdefault(key, value)

    def clear(self) -> None:
        with self._lock:
            n = len(self._entries)
            self._entries.clear()
        logger.debug("decode cache cleared (%d entries)", n)

    def __contains__(self, token: Any) -> bool:
        key = cache_key(token)
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._entries))

