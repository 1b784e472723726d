"""
SKU collision tagging over one batch of NormalizedRecords.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import List, Sequence

import pandas as pd

from domain.canonical import NormalizedRecord

logger = logging.getLogger(__name__)


def mark_duplicates(records: Sequence[NormalizedRecord]) -> List[NormalizedRecord]:
    """
    Return copies of `records` with `is_duplicate` set.

    A record is a duplicate when its (cleaned, non-empty) SKU occurs more than
    once in the batch. Empty SKUs never collide.
    """
    skus = pd.Series([r.sku for r in records], dtype=str)
    counts = skus[skus != ""].value_counts()

    marked = [
        dataclasses.replace(r, is_duplicate=bool(r.sku) and int(counts.get(r.sku, 0)) > 1)
        for r in records
    ]

    n_dupes = sum(r.is_duplicate for r in marked)
    if n_dupes:
        logger.warning("%d records share a SKU with another record", n_dupes)
    return marked
