"""Data models for name classification."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Union

FeatureValue = Union[bool, str, int]
FeatureKey = tuple[str, FeatureValue]


@dataclass(frozen=True)
class Record:
    """A labeled name, normalized to lowercase with surrounding whitespace removed."""

    name: str
    label: str

    @classmethod
    def create(cls, name: str, label: str) -> "Record":
        return cls(name=name.strip().lower(), label=label.strip().lower())

    def to_dict(self) -> dict:
        return {"name": self.name, "class": self.label}


@dataclass(frozen=True)
class Feature:
    """A single named cue derived from a name."""

    name: str
    value: FeatureValue

    @property
    def key(self) -> FeatureKey:
        return (self.name, self.value)


FeatureVector = tuple[Feature, ...]


@dataclass(frozen=True)
class ExtractedRecord:
    """A record together with its feature vector."""

    record: Record
    features: FeatureVector

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def label(self) -> str:
        return self.record.label


@dataclass(frozen=True)
class ClassFrequencies:
    """Training counts for one class.

    Attributes:
        total_count: Number of training records carrying this class.
        features: Occurrence count per ``(feature name, value)`` pair.
    """

    total_count: int = 0
    features: Mapping[FeatureKey, int] = field(default_factory=dict)

    def count(self, key: FeatureKey) -> int:
        """Return how often a feature was seen, 0 when never seen."""
        return self.features.get(key, 0)


@dataclass(frozen=True)
class Model:
    """Frequency tables learned from a training set.

    ``total_count`` is the training-set size and is used as the extra
    smoothing term in every class denominator.
    """

    classes: tuple[str, ...]
    total_count: int
    tables: Mapping[str, ClassFrequencies]

    def table(self, label: str) -> ClassFrequencies:
        try:
            return self.tables[label]
        except KeyError:
            raise ValueError(f"Unknown class: {label}. Known: {list(self.classes)}") from None

    def to_dict(self) -> dict:
        return {
            "classes": list(self.classes),
            "total_count": self.total_count,
            "class_counts": {c: self.tables[c].total_count for c in self.classes},
            "distinct_features": {c: len(self.tables[c].features) for c in self.classes},
        }
