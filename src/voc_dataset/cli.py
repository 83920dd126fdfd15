"""Command-line interface for voc-dataset."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from .config import generate_default_config, load_config, merge_cli_overrides
from .dataset.loader import load
from .errors import (
    AnnotationParseError,
    AnnotationReadError,
    DatasetNotFoundError,
    DatasetReadError,
    FilenameMismatchError,
    VOCError,
)
from .log import setup_logging
from .parse.decoder import parse_annotation_file
from .summary import format_annotation, format_summary, summarize
from .types import LoaderConfig

app = typer.Typer(
    name="voc-dataset",
    help="Load and validate PASCAL VOC annotation datasets.",
    add_completion=False,
)
console = Console()


@app.command("load")
def load_dataset(
    root: Path = typer.Option(
        ...,
        "--root", "-r",
        help="Dataset root containing JPEGImages/ and Annotations/",
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Path to loader configuration YAML file",
        exists=True,
        file_okay=True,
        readable=True,
        resolve_path=True
    ),
    image_ext: Optional[str] = typer.Option(
        None,
        "--image-ext",
        help="Image file extension, without the dot (default: jpg)"
    ),
    no_sort: bool = typer.Option(
        False,
        "--no-sort",
        help="Keep directory listing order instead of sorting by image name."
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Log every annotation file as it is loaded."
    ),
):
    """Load a dataset, validate every annotation and print a summary."""
    setup_logging(verbose)

    try:
        cfg = load_config(config) if config is not None else LoaderConfig()
        cfg = merge_cli_overrides(
            cfg,
            image_ext=image_ext,
            sort_samples=False if no_sort else None,
        )
    except ValueError as e:
        console.print(f"[red]Config Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"Loading dataset: {root}")

    try:
        samples = load(root, cfg)
    except DatasetNotFoundError as e:
        console.print(f"[red]Dataset Error:[/red] {e}")
        console.print(
            f"[yellow]Suggestion:[/yellow] Expected images in {cfg.image_dir}/ "
            f"and annotations in {cfg.annotation_dir}/ under the root."
        )
        raise typer.Exit(1)
    except DatasetReadError as e:
        console.print(f"[red]Read Error:[/red] {e}")
        console.print("[yellow]Suggestion:[/yellow] Check permissions on the image directory.")
        raise typer.Exit(1)
    except AnnotationReadError as e:
        console.print(f"[red]Read Error:[/red] {e}")
        console.print("[yellow]Suggestion:[/yellow] Every image needs an annotation file with the same name.")
        raise typer.Exit(1)
    except AnnotationParseError as e:
        console.print(f"[red]Annotation Error:[/red] {e}")
        raise typer.Exit(1)
    except FilenameMismatchError as e:
        console.print(f"[red]Mismatch Error:[/red] {e}")
        console.print("[yellow]Suggestion:[/yellow] Fix <filename> in the annotation or rename the image.")
        raise typer.Exit(1)
    except VOCError as e:
        console.print(f"[red]Dataset Error:[/red] {e}")
        raise typer.Exit(1)

    format_summary(summarize(samples), console)
    console.print(f"[green]✓[/green] Loaded {len(samples)} samples.")


@app.command()
def show(
    file: Path = typer.Option(
        ...,
        "--file", "-f",
        help="Path to an annotation XML file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True
    ),
):
    """Decode one annotation file and print its contents."""
    setup_logging(False)

    try:
        annotation = parse_annotation_file(file)
    except (AnnotationReadError, AnnotationParseError) as e:
        console.print(f"[red]Annotation Error:[/red] {e}")
        raise typer.Exit(1)

    format_annotation(annotation, console)


@app.command("init-config")
def init_config(
    out: Path = typer.Option(
        Path("voc_dataset.yaml"),
        "--out", "-o",
        help="Where to write the configuration file",
        dir_okay=False,
        resolve_path=True
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Overwrite an existing file."
    ),
):
    """Write the default loader configuration."""
    if out.exists() and not force:
        console.print(f"[red]Collision Error:[/red] File already exists: {out}")
        console.print("[yellow]Suggestion:[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)

    generate_default_config(out)
    console.print(f"[green]✓[/green] Wrote {out}")


if __name__ == "__main__":
    app()
