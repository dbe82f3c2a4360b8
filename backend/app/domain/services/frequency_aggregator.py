"""
Frequency Aggregator
Normalizes indicator collections and ranks the most frequent labels
"""
from collections import Counter
from itertools import chain
from typing import Dict, Iterable, List

from app.domain.models.indicators import IndicatorCollection, IndicatorKind, stringify_label
from app.domain.models.view_model import FrequencyEntry

TOP_K = 5


def normalize_indicators(collection: IndicatorCollection) -> List[str]:
    """
    Flatten one indicator collection into its labels.

    absent   -> []
    label    -> [label]
    sequence -> every element, stringified, in order
    flags    -> the key names (flag values are ignored)
    """
    kind = collection.kind
    if kind == IndicatorKind.ABSENT:
        return []
    if kind == IndicatorKind.LABEL:
        return [collection.label]
    if kind == IndicatorKind.SEQUENCE:
        return [stringify_label(item) for item in collection.items]
    if kind == IndicatorKind.FLAGS:
        return list(collection.flags.keys())
    raise ValueError(f"Unhandled indicator kind: {kind}")


def count_labels(labels: Iterable[str]) -> Dict[str, int]:
    """Occurrences per label, keyed in first-encountered order."""
    return dict(Counter(labels))


def top_indicators(
    collections: Iterable[IndicatorCollection],
    k: int = TOP_K
) -> List[FrequencyEntry]:
    """
    Top-K labels across many collections.

    Sorted by count descending; equal counts keep the order in which the
    labels were first encountered (Counter.most_common is a stable sort
    over insertion order).
    """
    labels = chain.from_iterable(normalize_indicators(c) for c in collections)
    return [
        FrequencyEntry(label=label, count=count)
        for label, count in Counter(labels).most_common(k)
    ]
