"""Ordered token decoders for header values.

A header value is either a container (several tokens behind a one-byte
header) or a single raw token.  Each ``TokenDecoder`` says whether it
wants a value (``can_decode``) and turns it into token strings
(``decode``).  ``DecoderChain`` asks them in order; a decoder that fails
or comes back empty hands the value to the next one.  If nobody produces
anything, the value itself is the one token.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from ._container import is_container, unwrap_container

logger = logging.getLogger(__name__)


class TokenDecoder:
    """Interface: ``can_decode(value) -> bool``, ``decode(value) -> [token]``."""

    name = "decoder"

    def can_decode(self, value: str) -> bool:
        raise NotImplementedError

    def decode(self, value: str) -> List[str]:
        raise NotImplementedError


class ContainerDecoder(TokenDecoder):
    name = "container"

    def can_decode(self, value: str) -> bool:
        return is_container(value)

    def decode(self, value: str) -> List[str]:
        return unwrap_container(value)


class RawTokenDecoder(TokenDecoder):
    """Takes anything without a container header as a single token."""

    name = "raw"

    def can_decode(self, value: str) -> bool:
        return not is_container(value)

    def decode(self, value: str) -> List[str]:
        return [value] if value else []


class DecoderChain(TokenDecoder):
    name = "chain"

    def __init__(self, decoders: Iterable[TokenDecoder]) -> None:
        self.decoders: Sequence[TokenDecoder] = tuple(decoders)

    def can_decode(self, value: str) -> bool:
        return True

    def resolve(self, value: str) -> Tuple[Optional[TokenDecoder], List[str]]:
        """Like decode(), but also return the decoder that produced the tokens.

        The decoder is None when every candidate failed or came back empty
        and the value stands in as its own single token.  Nested chains
        report the innermost decoder.
        """
        for decoder in self.decoders:
            try:
                if not decoder.can_decode(value):
                    continue
                if isinstance(decoder, DecoderChain):
                    source, out = decoder.resolve(value)
                else:
                    source, out = decoder, decoder.decode(value)
            except Exception as exc:
                logger.debug("%s decoder failed (%r); trying next", decoder.name, exc)
                continue
            if out:
                return source, list(out)
            logger.debug("%s decoder produced no tokens; trying next", decoder.name)
        return None, [value]

    def decode(self, value: str) -> List[str]:
        return self.resolve(value)[1]


def default_chain() -> DecoderChain:
    return DecoderChain([ContainerDecoder(), RawTokenDecoder()])
