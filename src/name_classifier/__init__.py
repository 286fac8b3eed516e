"""Name Classifier -- letter-feature Naive Bayes for labeled names."""

__version__ = "0.1.0"

from .classifier import classify, classify_batch, score_class, score_classes, train
from .config import Settings, load_settings
from .evaluation import (
    ClassMetrics,
    ConfusionMatrix,
    EvaluationMetrics,
    compute_metrics,
    evaluate,
    format_report,
)
from .features import FEATURE_COUNT, extract_features, extract_record, extract_records
from .models import ClassFrequencies, ExtractedRecord, Feature, Model, Record
from .parsers import parse_records, read_records
from .pipeline import PipelineResult, evaluate_records, predict_names, run_pipeline, train_all
from .splitter import PreparedData, deduplicate, derive_classes, prepare, shuffle_records, split_records

__all__ = [
    # Data model
    "Record",
    "Feature",
    "ExtractedRecord",
    "ClassFrequencies",
    "Model",
    # Features
    "FEATURE_COUNT",
    "extract_features",
    "extract_record",
    "extract_records",
    # Input
    "parse_records",
    "read_records",
    # Preparation
    "PreparedData",
    "prepare",
    "deduplicate",
    "derive_classes",
    "shuffle_records",
    "split_records",
    # Training and classification
    "train",
    "classify",
    "classify_batch",
    "score_class",
    "score_classes",
    # Evaluation
    "ConfusionMatrix",
    "ClassMetrics",
    "EvaluationMetrics",
    "evaluate",
    "compute_metrics",
    "format_report",
    # Pipeline
    "PipelineResult",
    "run_pipeline",
    "evaluate_records",
    "train_all",
    "predict_names",
    # Configuration
    "Settings",
    "load_settings",
]
