"""Edge-case and regression tests for degenerate datasets."""

from __future__ import annotations

import math

import pytest

from name_classifier.classifier import classify, score_classes, train
from name_classifier.evaluation import compute_metrics, evaluate, format_report
from name_classifier.features import extract_features, extract_records
from name_classifier.models import Record
from name_classifier.pipeline import evaluate_records

# ---------------------------------------------------------------------------
# Empty training set
# ---------------------------------------------------------------------------


class TestEmptyTrainingSet:
    """A model trained on nothing predicts nothing."""

    @pytest.fixture
    def unseen_records(self):
        return extract_records([Record("amy", "female"), Record("rob", "male")])

    def test_every_prediction_is_none(self, unseen_records) -> None:
        model = train([], ["female", "male"])
        assert all(classify(model, r.features) is None for r in unseen_records)

    def test_metrics(self, unseen_records) -> None:
        model = train([], ["female", "male"])
        metrics = compute_metrics(evaluate(model, unseen_records))
        for label in ("female", "male"):
            m = metrics.per_class[label]
            assert math.isnan(m.precision)
            assert m.recall == 0.0
            assert math.isnan(m.f1)
        assert metrics.unassigned == 2
        assert metrics.accuracy == 0.0

    def test_report_renders_undefined(self, unseen_records) -> None:
        model = train([], ["female"])
        report = format_report(compute_metrics(evaluate(model, unseen_records[:1])))
        assert report == [
            "Precision(female) => undefined",
            "Recall(female) => 0.0",
            "F(female) => undefined",
        ]


# ---------------------------------------------------------------------------
# Single class
# ---------------------------------------------------------------------------


class TestSingleClass:
    """With one class every prediction is that class."""

    RECORDS = [
        Record("anna", "person"),
        Record("bob", "person"),
        Record("mia", "person"),
        Record("jon", "person"),
        Record("zoe", "person"),
        Record("max", "person"),
        Record("amy", "person"),
        Record("rob", "person"),
        Record("eva", "person"),
        Record("tom", "person"),
    ]

    @pytest.mark.parametrize("seed", [0, 1, 2, 3])
    def test_precision_and_recall_are_one(self, seed: int) -> None:
        result = evaluate_records(self.RECORDS, seed=seed)
        m = result.metrics.per_class["person"]
        assert result.test_size == 2
        assert m.precision == 1.0
        assert m.recall == 1.0
        assert m.f1 == 1.0

    def test_unrelated_name_still_gets_the_class(self) -> None:
        model = train(extract_records(self.RECORDS), ["person"])
        assert classify(model, extract_features("xyzzy")) == "person"


# ---------------------------------------------------------------------------
# Tiny datasets
# ---------------------------------------------------------------------------


class TestTinyDatasets:
    """Small inputs never crash, whatever lands on each side of the split."""

    @pytest.mark.parametrize("size", [0, 1, 2, 3, 4])
    def test_fewer_than_five_records(self, size: int) -> None:
        records = [Record(n, c) for n, c in [
            ("anna", "female"), ("bob", "male"), ("mia", "female"), ("jon", "male"),
        ][:size]]
        result = evaluate_records(records, seed=size)
        assert result.training_size + result.test_size == size
        assert result.matrix.total == result.test_size
        assert len(result.report()) == 3 * len(result.classes)

    def test_fewer_records_than_classes(self) -> None:
        records = [Record("anna", "a"), Record("bob", "b"), Record("cy", "c")]
        result = evaluate_records(records, seed=2)
        assert result.classes == ("a", "b", "c")
        assert result.training_size == 2
        assert result.matrix.total == 1
        # One class has no training records and can still be predicted
        untrained = [c for c in result.classes if result.model.table(c).total_count == 0]
        assert len(untrained) == 1

    def test_class_without_training_records_scores_positive(self) -> None:
        model = train(extract_records([Record("anna", "female")]), ["female", "male"])
        scores = score_classes(model, extract_features("bob"))
        assert scores["male"] > 0
        assert scores["female"] > 0

    def test_empty_name_is_classified(self) -> None:
        model = train(extract_records([Record("anna", "female"), Record("bob", "male")]),
                      ["female", "male"])
        assert classify(model, extract_features("")) in ("female", "male")
