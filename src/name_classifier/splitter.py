"""Dataset preparation: deduplication, shuffling and the train/test split.

The split is not stratified. With very small datasets one side can end up
empty, or a class can be missing from the training side; this is allowed
and only logged.
"""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Optional, TypeVar

from .models import Record

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TRAIN_RATIO = 0.8


@dataclass
class PreparedData:
    """Output of ``prepare``: the two record subsets and the class order of the run."""

    training: list[Record] = field(default_factory=list)
    test: list[Record] = field(default_factory=list)
    classes: tuple[str, ...] = ()

    @property
    def total(self) -> int:
        return len(self.training) + len(self.test)


def deduplicate(records: Iterable[Record]) -> list[Record]:
    """Drop repeated records, keeping the first occurrence of each."""
    return list(dict.fromkeys(records))


def derive_classes(records: Iterable[Record]) -> tuple[str, ...]:
    """Distinct labels in first-seen order."""
    return tuple(dict.fromkeys(r.label for r in records))


def shuffle_records(items: Sequence[T], seed: Optional[int] = None) -> list[T]:
    """Return a uniformly shuffled copy of ``items``.

    Args:
        items: Items to shuffle; left untouched.
        seed: Random seed for reproducibility. ``None`` seeds from the OS.
    """
    rng = random.Random(seed)
    shuffled = list(items)
    rng.shuffle(shuffled)
    return shuffled


def split_index(size: int, train_ratio: float = DEFAULT_TRAIN_RATIO) -> int:
    """Number of items that go to the training side."""
    if not 0.0 <= train_ratio <= 1.0:
        raise ValueError(f"train_ratio must be between 0 and 1, got {train_ratio}")
    return math.floor(size * train_ratio)


def split_records(
    items: Sequence[T],
    train_ratio: float = DEFAULT_TRAIN_RATIO,
) -> tuple[list[T], list[T]]:
    """Split into a leading training part and a trailing test part."""
    n = split_index(len(items), train_ratio)
    return list(items[:n]), list(items[n:])


def prepare(
    records: Iterable[Record],
    seed: Optional[int] = None,
    train_ratio: float = DEFAULT_TRAIN_RATIO,
) -> PreparedData:
    """Deduplicate, shuffle and split records.

    Classes are taken from the deduplicated records before shuffling, so the
    class order depends only on the input order.

    Args:
        records: Normalized records.
        seed: Shuffle seed.
        train_ratio: Fraction of records used for training.

    Returns:
        PreparedData with training records, test records and classes.

    Raises:
        ValueError: If ``train_ratio`` is outside ``[0, 1]``.
    """
    unique = deduplicate(records)
    classes = derive_classes(unique)
    training, test = split_records(shuffle_records(unique, seed), train_ratio)

    logger.info(
        "Prepared %d unique records (%d classes): %d training, %d test",
        len(unique), len(classes), len(training), len(test),
    )
    if unique and not training:
        logger.warning("Training set is empty; every prediction will be unassigned")
    if unique and not test:
        logger.warning("Test set is empty; metrics will be undefined")
    missing = set(classes) - {r.label for r in training}
    if training and missing:
        logger.warning("Classes without training records: %s", ", ".join(sorted(missing)))

    return PreparedData(training=training, test=test, classes=classes)
