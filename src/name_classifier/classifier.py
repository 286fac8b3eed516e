"""Frequency-table Naive Bayes over letter features.

Training counts, per class, how often each ``(feature name, value)`` pair
occurs. Scoring multiplies one Laplace-smoothed factor per feature::

    (count + 1) / (class_total + training_set_size)

The second denominator term is the training-set size rather than a
vocabulary size. Keep it that way: predictions and reported scores depend
on it.

Classification is a plain function of an immutable ``Model``, so any number
of threads may classify against the same model.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from types import MappingProxyType
from typing import Optional

from .models import ClassFrequencies, ExtractedRecord, FeatureKey, FeatureVector, Model

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Training
# ---------------------------------------------------------------------------

def train(training_set: Iterable[ExtractedRecord], classes: Sequence[str]) -> Model:
    """Build a model from extracted training records.

    Args:
        training_set: Records with feature vectors.
        classes: Class labels of the run, in their fixed order.

    Returns:
        Model whose tables are read-only.

    Raises:
        ValueError: If a record carries a label outside ``classes``.
    """
    class_order = tuple(classes)
    totals: Counter[str] = Counter()
    counts: dict[str, Counter[FeatureKey]] = {c: Counter() for c in class_order}

    n_records = 0
    for extracted in training_set:
        label = extracted.label
        if label not in counts:
            raise ValueError(f"Unknown class: {label}. Known: {list(class_order)}")
        totals[label] += 1
        table = counts[label]
        for feature in extracted.features:
            table[feature.key] += 1
        n_records += 1

    tables = {
        c: ClassFrequencies(total_count=totals[c], features=MappingProxyType(dict(counts[c])))
        for c in class_order
    }
    logger.info("Trained on %d records across %d classes", n_records, len(class_order))

    return Model(
        classes=class_order,
        total_count=n_records,
        tables=MappingProxyType(tables),
    )


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------

def score_class(model: Model, label: str, features: FeatureVector) -> float:
    """Smoothed likelihood of a feature vector under one class.

    Returns 0.0 when the class denominator is 0, which only happens when the
    model was trained on no records.
    """
    table = model.table(label)
    denominator = table.total_count + model.total_count
    if denominator == 0:
        return 0.0

    score = 1.0
    for feature in features:
        score *= (table.count(feature.key) + 1) / denominator
    return score


def score_classes(model: Model, features: FeatureVector) -> dict[str, float]:
    """Score a feature vector against every class, in ``model.classes`` order."""
    return {c: score_class(model, c, features) for c in model.classes}


def classify(model: Model, features: FeatureVector) -> Optional[str]:
    """Pick the class with the highest score.

    Only a score strictly greater than the best so far (starting at 0) wins,
    so ties keep the earlier class and a vector scoring 0 everywhere gets
    ``None``.
    """
    best_score = 0.0
    best_class: Optional[str] = None
    for label, score in score_classes(model, features).items():
        if score > best_score:
            best_score = score
            best_class = label
    return best_class


def classify_batch(
    model: Model,
    vectors: Sequence[FeatureVector],
    workers: int = 1,
) -> list[Optional[str]]:
    """Classify many vectors, optionally on a thread pool.

    Args:
        model: Trained model, shared read-only by all workers.
        vectors: Feature vectors to classify.
        workers: Number of threads; 1 classifies inline.

    Returns:
        Predicted labels (or None) in input order.
    """
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")
    if workers == 1 or len(vectors) < 2:
        return [classify(model, v) for v in vectors]

    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(lambda v: classify(model, v), vectors))
