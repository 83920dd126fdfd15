"""Dataset statistics and human-readable output."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .types import Annotation, Sample


@dataclass
class DatasetSummary:
    """Aggregate counts over loaded samples."""
    total_samples: int = 0
    total_objects: int = 0
    difficult: int = 0
    truncated: int = 0
    segmented: int = 0
    classes: Dict[str, int] = field(default_factory=dict)


def summarize(samples: Iterable[Sample]) -> DatasetSummary:
    """Count samples, objects and objects per class."""
    summary = DatasetSummary()
    classes: Counter = Counter()

    for sample in samples:
        annotation = sample.annotation
        summary.total_samples += 1
        if annotation.segmented:
            summary.segmented += 1
        for obj in annotation.objects:
            summary.total_objects += 1
            classes[obj.name] += 1
            if obj.difficult:
                summary.difficult += 1
            if obj.truncated:
                summary.truncated += 1

    summary.classes = dict(sorted(classes.items()))
    return summary


def format_summary(summary: DatasetSummary, console: Console) -> None:
    """Print dataset summary tables to console."""
    console.print()
    console.print(Panel.fit(
        "[bold magenta]VOC Dataset Summary[/bold magenta]",
        border_style="magenta"
    ))

    table = Table(title="General Stats", show_header=False, box=None)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Samples", str(summary.total_samples))
    table.add_row("Objects", str(summary.total_objects))
    table.add_row("Difficult", str(summary.difficult))
    table.add_row("Truncated", str(summary.truncated))
    table.add_row("Segmented", str(summary.segmented))
    console.print(table)

    if not summary.classes:
        return

    classes = Table(title="Objects per Class", show_header=True, header_style="bold magenta")
    classes.add_column("Class", style="cyan")
    classes.add_column("Count", style="green", justify="right")
    for name, count in summary.classes.items():
        classes.add_row(name, str(count))
    console.print(classes)


def _flag(value) -> str:
    if value is None:
        return "-"
    return "yes" if value else "no"


def format_annotation(annotation: Annotation, console: Console) -> None:
    """Print one decoded annotation."""
    width, height, depth = annotation.size

    info = Table(title=annotation.filename, show_header=False, box=None)
    info.add_column("Field", style="cyan")
    info.add_column("Value", style="green")
    info.add_row("Folder", annotation.folder)
    info.add_row("Size", f"{width:g}x{height:g}x{depth:g}")
    info.add_row("Database", annotation.source.database)
    info.add_row("Segmented", _flag(annotation.segmented))
    console.print(info)

    objects = Table(show_header=True, header_style="bold magenta")
    objects.add_column("Name", style="cyan")
    objects.add_column("Pose")
    objects.add_column("BndBox")
    objects.add_column("Difficult")
    objects.add_column("Truncated")
    objects.add_column("Parts")
    for obj in annotation.objects:
        box = obj.bndbox
        objects.add_row(
            obj.name,
            obj.pose.value,
            f"({box.xmin:g}, {box.ymin:g}, {box.xmax:g}, {box.ymax:g})",
            _flag(obj.difficult),
            _flag(obj.truncated),
            ", ".join(obj.parts) or "-",
        )
    console.print(objects)
