"""
ENCODING RESOLVER
-----------------
Chooses a text decoding for a raw byte buffer. Never raises: in the worst case
the last candidate's text is returned with visible replacement characters and
the result is flagged as degraded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from config.settings import BYTE_ORDER_MARK, ENCODING_CANDIDATES, REPLACEMENT_CHAR
from domain.errors import DecodeDegraded

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodedText:
    text: str
    encoding: str
    degraded: Optional[DecodeDegraded] = None


def _decode(raw: bytes, encoding: str) -> str:
    text = raw.decode(encoding, errors="replace")
    if text.startswith(BYTE_ORDER_MARK):
        text = text[1:]
    return text


def resolve_encoding(raw: bytes, candidates: Sequence[str] = ENCODING_CANDIDATES) -> DecodedText:
    """Decode with the first candidate that yields no replacement characters."""
    if not candidates:
        raise ValueError("At least one encoding candidate is required")

    text = ""
    for encoding in candidates:
        text = _decode(raw, encoding)
        if REPLACEMENT_CHAR not in text:
            logger.info("Decoded %d bytes as %s", len(raw), encoding)
            return DecodedText(text=text, encoding=encoding)
        logger.debug("Encoding %s produced replacement characters, trying next", encoding)

    last = candidates[-1]
    degraded = DecodeDegraded(encoding=last, replacement_count=text.count(REPLACEMENT_CHAR))
    logger.warning(
        "No encoding decoded cleanly; using %s with %d replacement characters",
        last,
        degraded.replacement_count,
    )
    return DecodedText(text=text, encoding=last, degraded=degraded)
