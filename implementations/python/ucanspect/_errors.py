"""ucanspect error codes and exception classes.

Every failure the decode pipeline reports is an ``InspectError`` carrying
one of the ERR_* codes below.  The three subclasses tell callers which
stage failed; the code tells them why.
"""

from __future__ import annotations

from typing import Optional

# ── Error codes ──────────────────────────────────────────────
# Grep-friendly; the CLI prints them verbatim.

ERR_INPUT: str = "ERR_INPUT"                          # not a str or bytes-like
ERR_STRUCTURE: str = "ERR_STRUCTURE"                  # malformed DAG-CBOR
ERR_UNSUPPORTED_TAG: str = "ERR_UNSUPPORTED_TAG"      # CBOR tag other than 42/258
ERR_LIMIT_SIZE: str = "ERR_LIMIT_SIZE"                # exceeds MAX_INPUT_BYTES
ERR_LIMIT_DEPTH: str = "ERR_LIMIT_DEPTH"              # exceeds MAX_DEPTH
ERR_CONTAINER_HEADER: str = "ERR_CONTAINER_HEADER"    # header byte not in table
ERR_CONTAINER_ENCODING: str = "ERR_CONTAINER_ENCODING"
ERR_CONTAINER_COMPRESSION: str = "ERR_CONTAINER_COMPRESSION"
ERR_CONTAINER_CONTENT: str = "ERR_CONTAINER_CONTENT"  # not a map / bad ctn-v1


class InspectError(Exception):
    """Base exception for token inspection errors.

    ``code`` is one of the ERR_* strings above.  ``detected_format`` is the
    source encoding the normalizer settled on, when it got that far.  The
    underlying library error, if any, is chained as ``__cause__``.
    """

    default_code: str = ERR_INPUT

    def __init__(self, msg: str = "", code: Optional[str] = None,
                 detected_format: Optional[str] = None) -> None:
        self.code = code or self.default_code
        super().__init__(msg or self.code)
        self.detected_format = detected_format


class InputDecodeError(InspectError):
    """The token is not something the normalizer can interpret."""

    default_code = ERR_INPUT


class StructuredDecodeError(InspectError):
    """The bytes are not a single well-formed DAG-CBOR value."""

    default_code = ERR_STRUCTURE


class ContainerDecodeError(InspectError):
    """A container header was recognized but its contents are unusable."""

    default_code = ERR_CONTAINER_CONTENT
