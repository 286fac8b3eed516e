"""Confusion matrix and per-class precision, recall and F1.

A test record whose prediction is ``None`` (no class scored above zero) is
counted in an ``unassigned`` bucket for its true class. It is a miss for
recall but is not a prediction of any class, so it never enters a precision
denominator.

Metrics with a zero denominator are ``NaN`` and render as ``undefined``.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Optional

from .classifier import classify_batch
from .models import ExtractedRecord, Model

logger = logging.getLogger(__name__)

UNDEFINED = "undefined"


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator else math.nan


def _round_or_none(value: float, digits: int = 4) -> Optional[float]:
    return None if math.isnan(value) else round(value, digits)


def format_value(value: float) -> str:
    """Render a metric value, ``undefined`` for NaN."""
    return UNDEFINED if math.isnan(value) else repr(value)


# ---------------------------------------------------------------------------
# Confusion matrix
# ---------------------------------------------------------------------------

@dataclass
class ConfusionMatrix:
    """Counts of true class versus predicted class.

    Attributes:
        classes: Class labels; rows and columns follow this order.
        counts: ``counts[true][predicted]`` for every pair of classes.
        unassigned: Per true class, records that received no prediction.
    """

    classes: tuple[str, ...]
    counts: dict[str, dict[str, int]] = field(default_factory=dict)
    unassigned: dict[str, int] = field(default_factory=dict)

    @classmethod
    def empty(cls, classes: Sequence[str]) -> "ConfusionMatrix":
        classes = tuple(classes)
        return cls(
            classes=classes,
            counts={c: {c2: 0 for c2 in classes} for c in classes},
            unassigned={c: 0 for c in classes},
        )

    def record(self, true_class: str, predicted: Optional[str]) -> None:
        """Count one classified test record."""
        if true_class not in self.counts:
            raise ValueError(f"Unknown class: {true_class}. Known: {list(self.classes)}")
        if predicted is None:
            self.unassigned[true_class] += 1
        else:
            self.counts[true_class][predicted] += 1

    def row_total(self, true_class: str) -> int:
        """All test records of ``true_class``, unassigned included."""
        return sum(self.counts[true_class].values()) + self.unassigned[true_class]

    def column_total(self, predicted: str) -> int:
        """All test records predicted as ``predicted``."""
        return sum(self.counts[t][predicted] for t in self.classes)

    @property
    def total(self) -> int:
        return sum(self.row_total(c) for c in self.classes)

    @property
    def correct(self) -> int:
        return sum(self.counts[c][c] for c in self.classes)

    @property
    def total_unassigned(self) -> int:
        return sum(self.unassigned.values())

    def to_dict(self) -> dict:
        return {
            "classes": list(self.classes),
            "counts": {t: dict(row) for t, row in self.counts.items()},
            "unassigned": dict(self.unassigned),
        }


def evaluate(
    model: Model,
    test_set: Sequence[ExtractedRecord],
    workers: int = 1,
) -> ConfusionMatrix:
    """Classify every test record and tally the results.

    Args:
        model: Trained model.
        test_set: Extracted test records.
        workers: Threads used for classification.

    Returns:
        ConfusionMatrix over ``model.classes``.

    Raises:
        ValueError: If a test record's label is not one of ``model.classes``.
    """
    matrix = ConfusionMatrix.empty(model.classes)
    predictions = classify_batch(model, [r.features for r in test_set], workers=workers)
    for extracted, predicted in zip(test_set, predictions):
        matrix.record(extracted.label, predicted)

    if matrix.total_unassigned:
        logger.warning(
            "%d of %d test records received no prediction",
            matrix.total_unassigned, matrix.total,
        )
    return matrix


# ---------------------------------------------------------------------------
# Metrics
# ---------------------------------------------------------------------------

def precision(matrix: ConfusionMatrix, label: str) -> float:
    return _ratio(matrix.counts[label][label], matrix.column_total(label))


def recall(matrix: ConfusionMatrix, label: str) -> float:
    return _ratio(matrix.counts[label][label], matrix.row_total(label))


def f1_score(p: float, r: float) -> float:
    """Harmonic mean of precision and recall; NaN if either is NaN or both are 0."""
    return _ratio(2 * p * r, p + r)


@dataclass
class ClassMetrics:
    """Precision, recall and F1 for a single class."""

    label: str
    precision: float
    recall: float
    f1: float
    support: int

    def to_dict(self) -> dict:
        return {
            "precision": _round_or_none(self.precision),
            "recall": _round_or_none(self.recall),
            "f1": _round_or_none(self.f1),
            "support": self.support,
        }


@dataclass
class EvaluationMetrics:
    """Evaluation results for a whole test set.

    Attributes:
        per_class: Metrics per class, in class order.
        accuracy: Correct predictions over all test records.
        unassigned: Test records that received no prediction.
        macro_precision: Mean precision over classes where it is defined.
        macro_recall: Mean recall over classes where it is defined.
        macro_f1: Mean F1 over classes where it is defined.
        confusion_matrix: The matrix the metrics were derived from.
    """

    per_class: dict[str, ClassMetrics] = field(default_factory=dict)
    accuracy: float = math.nan
    unassigned: int = 0
    macro_precision: float = math.nan
    macro_recall: float = math.nan
    macro_f1: float = math.nan
    confusion_matrix: Optional[ConfusionMatrix] = None

    @property
    def classes(self) -> list[str]:
        return list(self.per_class)

    def to_dict(self) -> dict:
        return {
            "accuracy": _round_or_none(self.accuracy),
            "unassigned": self.unassigned,
            "macro_precision": _round_or_none(self.macro_precision),
            "macro_recall": _round_or_none(self.macro_recall),
            "macro_f1": _round_or_none(self.macro_f1),
            "per_class": {c: m.to_dict() for c, m in self.per_class.items()},
            "confusion_matrix": self.confusion_matrix.to_dict() if self.confusion_matrix else None,
        }


def _defined_mean(values: list[float]) -> float:
    defined = [v for v in values if not math.isnan(v)]
    return sum(defined) / len(defined) if defined else math.nan


def compute_metrics(matrix: ConfusionMatrix) -> EvaluationMetrics:
    """Derive per-class and aggregate metrics from a finished matrix."""
    per_class: dict[str, ClassMetrics] = {}
    for label in matrix.classes:
        p = precision(matrix, label)
        r = recall(matrix, label)
        per_class[label] = ClassMetrics(
            label=label,
            precision=p,
            recall=r,
            f1=f1_score(p, r),
            support=matrix.row_total(label),
        )

    return EvaluationMetrics(
        per_class=per_class,
        accuracy=_ratio(matrix.correct, matrix.total),
        unassigned=matrix.total_unassigned,
        macro_precision=_defined_mean([m.precision for m in per_class.values()]),
        macro_recall=_defined_mean([m.recall for m in per_class.values()]),
        macro_f1=_defined_mean([m.f1 for m in per_class.values()]),
        confusion_matrix=matrix,
    )


def format_report(metrics: EvaluationMetrics) -> list[str]:
    """Report lines: precision, recall and F for each class in class order."""
    lines: list[str] = []
    for label, m in metrics.per_class.items():
        lines.append(f"Precision({label}) => {format_value(m.precision)}")
        lines.append(f"Recall({label}) => {format_value(m.recall)}")
        lines.append(f"F({label}) => {format_value(m.f1)}")
    return lines
