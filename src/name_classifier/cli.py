"""Command-line interface for the name classifier.

Provides ``evaluate`` and ``classify`` commands with rich terminal output
using the ``click`` and ``rich`` libraries. Defaults come from
``NAME_CLASSIFIER_*`` environment variables or a ``.env`` file.

Usage::

    name-classifier evaluate names.csv --seed 7
    name-classifier evaluate --output json
    name-classifier classify names.csv anna bob
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .config import Settings, load_settings
from .evaluation import UNDEFINED, EvaluationMetrics, format_value
from .parsers import read_records
from .pipeline import PipelineResult, predict_names, run_pipeline, train_all

console = Console()
err_console = Console(stderr=True)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _fail(error: Exception) -> None:
    err_console.print(f"[bold red]Error:[/] {error}")
    sys.exit(1)


@click.group()
@click.version_option(package_name="name-classifier")
@click.option("--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False), default=None,
              help="Logging verbosity (default: NAME_CLASSIFIER_LOG_LEVEL or WARNING).")
@click.pass_context
def main(ctx: click.Context, log_level: str | None) -> None:
    """Name Classifier: letter-feature Naive Bayes for labeled names.

    Train on a file of ``name,class`` lines and report precision, recall
    and F1 per class.
    """
    try:
        settings = load_settings()
    except ValueError as e:
        _fail(e)
    _configure_logging((log_level or settings.log_level).upper())
    ctx.obj = settings


@main.command()
@click.argument("data_file", required=False, type=click.Path(path_type=Path))
@click.option("--seed", type=int, default=None, help="Shuffle seed for a reproducible split.")
@click.option("--train-ratio", type=click.FloatRange(0.0, 1.0), default=None,
              help="Fraction of records used for training.")
@click.option("--workers", "-w", type=click.IntRange(min=1), default=None,
              help="Threads used to classify the test set.")
@click.option("--output", "-o", type=click.Choice(["text", "rich", "json"]), default="text",
              help="Output format.")
@click.pass_obj
def evaluate(
    settings: Settings,
    data_file: Path | None,
    seed: int | None,
    train_ratio: float | None,
    workers: int | None,
    output: str,
) -> None:
    """Train on 80% of the data and evaluate on the rest.

    Example: name-classifier evaluate names.csv --seed 7
    """
    path = data_file or Path(settings.data_path)
    try:
        result = run_pipeline(
            path,
            seed=seed if seed is not None else settings.seed,
            train_ratio=train_ratio if train_ratio is not None else settings.train_ratio,
            workers=workers or settings.workers,
        )
    except (OSError, ValueError) as e:
        _fail(e)

    if output == "json":
        click.echo(json.dumps(result.to_dict(), indent=2))
    elif output == "rich":
        _render_result(result, path.name)
    else:
        for line in result.report():
            click.echo(line)


@main.command()
@click.argument("data_file", type=click.Path(path_type=Path))
@click.argument("names", nargs=-1, required=True)
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
def classify(data_file: Path, names: tuple[str, ...], output: str) -> None:
    """Train on every record in DATA_FILE and classify NAMES.

    Example: name-classifier classify names.csv anna bob
    """
    try:
        model = train_all(read_records(data_file))
    except (OSError, ValueError) as e:
        _fail(e)

    predictions = predict_names(model, names)

    if output == "json":
        click.echo(json.dumps(predictions, indent=2))
        return

    table = Table(title=f"Predictions: {data_file.name}")
    table.add_column("Name", style="cyan")
    table.add_column("Class", style="white")
    for name, label in predictions.items():
        table.add_row(name, label or "-")
    console.print(table)


# ------------------------------------------------------------------
# Rich rendering helpers
# ------------------------------------------------------------------

def _metric_cell(value: float) -> str:
    text = format_value(value)
    return f"[dim]{text}[/]" if text == UNDEFINED else f"{value:.4f}"


def _render_result(result: PipelineResult, filename: str) -> None:
    """Render a PipelineResult with rich formatting."""
    metrics = result.metrics

    console.print()
    console.print(Panel(
        f"[bold]{filename}[/]\n"
        f"Classes: {len(result.classes)} | "
        f"Training: {result.training_size} | "
        f"Test: {result.test_size} | "
        f"Unassigned: {metrics.unassigned}",
        title="Name Classifier Evaluation",
        border_style="blue",
    ))

    _render_metrics(metrics)
    _render_matrix(result)

    console.print(f"Accuracy: [bold]{_metric_cell(metrics.accuracy)}[/]")
    console.print()


def _render_metrics(metrics: EvaluationMetrics) -> None:
    table = Table(title="Per-class Metrics")
    table.add_column("Class", style="cyan")
    table.add_column("Precision", justify="right")
    table.add_column("Recall", justify="right")
    table.add_column("F1", justify="right")
    table.add_column("Support", justify="right")

    for label, m in metrics.per_class.items():
        table.add_row(
            label,
            _metric_cell(m.precision),
            _metric_cell(m.recall),
            _metric_cell(m.f1),
            str(m.support),
        )

    console.print(table)
    console.print()


def _render_matrix(result: PipelineResult) -> None:
    matrix = result.matrix
    table = Table(title="Confusion Matrix", caption="rows: true class, columns: predicted class")
    table.add_column("", style="cyan")
    for label in matrix.classes:
        table.add_column(label, justify="right")
    table.add_column("unassigned", justify="right", style="dim")

    for true_class in matrix.classes:
        row = matrix.counts[true_class]
        table.add_row(
            true_class,
            *(str(row[p]) for p in matrix.classes),
            str(matrix.unassigned[true_class]),
        )

    console.print(table)
    console.print()


if __name__ == "__main__":
    main()
