"""Letter-based feature extraction.

Every name maps to the same fixed schema of 54 features, in this order:

- ``firstLetter`` and ``lastLetter`` (empty string for an empty name)
- ``has(a)`` .. ``has(z)``: whether the letter occurs in the name
- ``count(a)`` .. ``count(z)``: how many times it occurs
"""

from __future__ import annotations

from collections.abc import Iterable
from string import ascii_lowercase

from .models import ExtractedRecord, Feature, FeatureVector, Record

ALPHABET = ascii_lowercase
FEATURE_COUNT = 2 + 2 * len(ALPHABET)


def extract_features(name: str) -> FeatureVector:
    """Build the feature vector for a name.

    Args:
        name: A normalized (lowercased, stripped) name.

    Returns:
        Tuple of ``FEATURE_COUNT`` features in schema order.
    """
    features = [
        Feature("firstLetter", name[:1]),
        Feature("lastLetter", name[-1:]),
    ]
    features.extend(Feature(f"has({letter})", letter in name) for letter in ALPHABET)
    features.extend(Feature(f"count({letter})", name.count(letter)) for letter in ALPHABET)
    return tuple(features)


def extract_record(record: Record) -> ExtractedRecord:
    return ExtractedRecord(record=record, features=extract_features(record.name))


def extract_records(records: Iterable[Record]) -> list[ExtractedRecord]:
    """Extract features for every record, keeping input order."""
    return [extract_record(r) for r in records]
