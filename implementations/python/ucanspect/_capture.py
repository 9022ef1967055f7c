"""Turn observed request headers into captured token records.

Two headers carry UCANs:

    Authorization: Bearer <token-or-container>
    ucans: <token-or-container>, <token-or-container>, ...

Every token found is recorded, classified or not.  ``format`` says
whether it came out of a container or was sent as-is.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ._chain import ContainerDecoder
from ._constants import BEARER_PREFIX, HEADER_AUTHORIZATION, HEADER_UCANS
from ._inspector import Inspector

logger = logging.getLogger(__name__)

FORMAT_CONTAINER = "container"
FORMAT_RAW = "raw"

Header = Union[Tuple[str, str], Mapping[str, str]]


class TokenItem:
    __slots__ = ("token", "url", "header", "captured_at", "format", "token_type", "version")

    def __init__(self, token: str, url: str, header: str, captured_at: int,
                 format: str, token_type: str, version: Optional[str] = None) -> None:
        self.token = token
        self.url = url
        self.header = header
        self.captured_at = captured_at
        self.format = format
        self.token_type = token_type
        self.version = version

    def as_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self.__slots__}

    def __repr__(self) -> str:
        return "TokenItem({}, {}, {!r})".format(self.header, self.format, self.token_type)


def _name_value(header: Header) -> Tuple[str, str]:
    if isinstance(header, Mapping):
        return header.get("name", ""), header.get("value", "")
    name, value = header
    return name, value


def split_ucans_header(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def extract_raw_tokens(headers: Iterable[Header]) -> List[Tuple[str, str]]:
    """Return ``(header_label, raw_token)`` pairs in header order."""
    out: List[Tuple[str, str]] = []
    for header in headers:
        name, value = _name_value(header)
        lname = name.lower()
        if lname == HEADER_AUTHORIZATION.lower() and value.startswith(BEARER_PREFIX):
            out.append((HEADER_AUTHORIZATION, value[len(BEARER_PREFIX):]))
        elif lname == HEADER_UCANS:
            out.extend((HEADER_UCANS, tok) for tok in split_ucans_header(value))
    return out


def capture_from_request(url: str, headers: Iterable[Header],
                         captured_at: Optional[int] = None,
                         inspector: Optional[Inspector] = None) -> List[TokenItem]:
    """Capture every UCAN carried by one request.

    ``captured_at`` is epoch milliseconds; it defaults to now.
    """
    if inspector is None:
        from . import default_inspector
        inspector = default_inspector()
    if captured_at is None:
        captured_at = int(time.time() * 1000)

    items: List[TokenItem] = []
    for label, raw in extract_raw_tokens(headers):
        source, tokens = inspector.resolve(raw)
        fmt = FORMAT_CONTAINER if isinstance(source, ContainerDecoder) else FORMAT_RAW
        for token in tokens:
            info = inspector.classify(token)
            items.append(TokenItem(token, url, label, captured_at, fmt, info.type, info.version))
    logger.debug("captured %d token(s) from %s", len(items), url)
    return items
