"""
DELIMITER DETECTOR
------------------
Infers the field separator from the first few non-empty lines.

Candidates are ranked by average occurrences per line, ties broken in favour
of a separator whose count is the same on every sampled line.
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from config.settings import DEFAULT_DELIMITER, DELIMITER_CANDIDATES, DELIMITER_SAMPLE_LINES

logger = logging.getLogger(__name__)


def _sample_lines(text: str, limit: int) -> List[str]:
    lines: List[str] = []
    for line in text.splitlines():
        if line.strip():
            lines.append(line)
        if len(lines) >= limit:
            break
    return lines


def score_delimiters(
    text: str,
    candidates: Sequence[str] = DELIMITER_CANDIDATES,
    sample_lines: int = DELIMITER_SAMPLE_LINES,
) -> List[Tuple[str, float, bool]]:
    """Return (delimiter, average count, consistent) sorted best-first."""
    lines = _sample_lines(text, sample_lines)
    if not lines:
        return [(d, 0.0, True) for d in candidates]

    scores = []
    for delimiter in candidates:
        counts = [line.count(delimiter) for line in lines]
        average = sum(counts) / len(counts)
        consistent = all(c == counts[0] for c in counts)
        scores.append((delimiter, average, consistent))

    # Stable sort keeps candidate order for full ties.
    scores.sort(key=lambda s: (-s[1], not s[2]))
    return scores


def detect_delimiter(
    text: str,
    candidates: Sequence[str] = DELIMITER_CANDIDATES,
    sample_lines: int = DELIMITER_SAMPLE_LINES,
    default: str = DEFAULT_DELIMITER,
) -> str:
    scores = score_delimiters(text, candidates, sample_lines)
    best, average, _ = scores[0]
    if average <= 0:
        logger.info("No delimiter candidate found, falling back to %r", default)
        return default

    logger.info("Detected delimiter %r (avg %.2f per line)", best, average)
    return best
