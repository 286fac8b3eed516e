"""End-to-end run: load, prepare, extract, train and evaluate.

``run_pipeline`` is the primary entry point. It reads a record file and
returns a ``PipelineResult`` holding the model, the confusion matrix and
the metrics. Read errors propagate unchanged so a failed load never
produces a partial report.

Example::

    result = run_pipeline("names.csv", seed=7)
    for line in result.report():
        print(line)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .classifier import classify, train
from .evaluation import ConfusionMatrix, EvaluationMetrics, compute_metrics, evaluate, format_report
from .features import extract_features, extract_records
from .models import Model, Record
from .parsers import read_records
from .splitter import DEFAULT_TRAIN_RATIO, deduplicate, derive_classes, prepare

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Everything produced by one training and evaluation run."""

    model: Model
    matrix: ConfusionMatrix
    metrics: EvaluationMetrics
    training_size: int
    test_size: int

    @property
    def classes(self) -> tuple[str, ...]:
        return self.model.classes

    def report(self) -> list[str]:
        return format_report(self.metrics)

    def to_dict(self) -> dict:
        return {
            "training_size": self.training_size,
            "test_size": self.test_size,
            "model": self.model.to_dict(),
            "metrics": self.metrics.to_dict(),
        }


def evaluate_records(
    records: Iterable[Record],
    seed: Optional[int] = None,
    train_ratio: float = DEFAULT_TRAIN_RATIO,
    workers: int = 1,
) -> PipelineResult:
    """Run the pipeline on records that are already loaded.

    Args:
        records: Normalized records; duplicates allowed.
        seed: Shuffle seed.
        train_ratio: Fraction of unique records used for training.
        workers: Threads used while classifying the test set.

    Returns:
        PipelineResult for the run.
    """
    data = prepare(records, seed=seed, train_ratio=train_ratio)
    training = extract_records(data.training)
    test = extract_records(data.test)

    model = train(training, data.classes)
    matrix = evaluate(model, test, workers=workers)
    metrics = compute_metrics(matrix)
    logger.info(
        "Evaluated %d test records: accuracy %s",
        len(test), "undefined" if matrix.total == 0 else f"{metrics.accuracy:.4f}",
    )

    return PipelineResult(
        model=model,
        matrix=matrix,
        metrics=metrics,
        training_size=len(training),
        test_size=len(test),
    )


def run_pipeline(
    path: str | Path,
    seed: Optional[int] = None,
    train_ratio: float = DEFAULT_TRAIN_RATIO,
    workers: int = 1,
) -> PipelineResult:
    """Read a record file and run the full pipeline on it.

    Raises:
        FileNotFoundError: If the file does not exist.
        OSError: If the file cannot be read.
        ValueError: If the file cannot be decoded or ``train_ratio`` is invalid.
    """
    records = read_records(path)
    return evaluate_records(records, seed=seed, train_ratio=train_ratio, workers=workers)


def train_all(records: Iterable[Record]) -> Model:
    """Train on every unique record without holding any back."""
    unique = deduplicate(records)
    return train(extract_records(unique), derive_classes(unique))


def predict_names(model: Model, names: Iterable[str]) -> dict[str, Optional[str]]:
    """Classify raw names, normalizing them the same way records are."""
    predictions: dict[str, Optional[str]] = {}
    for name in names:
        normalized = name.strip().lower()
        predictions[normalized] = classify(model, extract_features(normalized))
    return predictions
