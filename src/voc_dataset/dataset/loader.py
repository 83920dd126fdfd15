"""Dataset loader pairing images with their annotations."""

from pathlib import Path
from typing import Iterator, List, Optional, Union

from ..errors import DatasetNotFoundError, DatasetReadError, FilenameMismatchError
from ..log import get_logger
from ..parse.decoder import parse_annotation_file
from ..types import LoaderConfig, Sample

logger = get_logger(__name__)


def _discover_stems(image_dir: Path, image_ext: str, sort: bool) -> List[tuple[str, Path]]:
    """Find (stem, path) of every regular image file in ``image_dir``.

    Symlinks are skipped, even when they point at an image.
    """
    suffix = f".{image_ext}"
    found = []
    try:
        for path in image_dir.iterdir():
            if path.suffix != suffix or path.is_symlink() or not path.is_file():
                continue
            found.append((path.stem, path))
    except OSError as e:
        raise DatasetReadError(image_dir, e) from e

    if sort:
        found.sort(key=lambda item: item[0])
    return found


def iter_samples(
    dataset_dir: Union[str, Path],
    config: Optional[LoaderConfig] = None,
) -> Iterator[Sample]:
    """Yield samples of a VOC dataset directory one at a time.

    Args:
        dataset_dir: Dataset root containing the image and annotation dirs.
        config: Directory layout; defaults to the standard VOC layout.

    Yields:
        Sample for each image whose annotation decodes and matches.

    Raises:
        DatasetNotFoundError: If the image directory does not exist.
        DatasetReadError: If the image directory cannot be listed.
        AnnotationReadError: If an annotation file cannot be read.
        AnnotationParseError: If an annotation file cannot be decoded.
        FilenameMismatchError: If <filename> does not name the paired image.
    """
    config = config or LoaderConfig()
    dataset_dir = Path(dataset_dir)
    image_dir = dataset_dir / config.image_dir
    annotation_dir = dataset_dir / config.annotation_dir

    if not image_dir.exists():
        raise DatasetNotFoundError(image_dir, "image directory not found")
    if not image_dir.is_dir():
        raise DatasetNotFoundError(image_dir, "image path is not a directory")

    for stem, image_path in _discover_stems(image_dir, config.image_ext, config.sort_samples):
        xml_path = annotation_dir / f"{stem}.{config.annotation_ext}"
        logger.info("Loading %s", xml_path)

        annotation = parse_annotation_file(xml_path, encoding=config.encoding)

        expected = f"{stem}.{config.image_ext}"
        if annotation.filename != expected:
            raise FilenameMismatchError(xml_path, expected, annotation.filename)

        yield Sample(image_path=image_path, annotation=annotation)


def load(
    dataset_dir: Union[str, Path],
    config: Optional[LoaderConfig] = None,
) -> List[Sample]:
    """Load every sample of a VOC dataset directory.

    Either all images are paired with a valid annotation, or the first
    failure is raised and nothing is returned.

    Args:
        dataset_dir: Dataset root, e.g. ``VOCdevkit/VOC2012``.
        config: Directory layout; defaults to ``JPEGImages``/``Annotations``.

    Returns:
        List of samples, ordered by image stem unless sorting is disabled.
    """
    samples = list(iter_samples(dataset_dir, config))
    logger.info("Loaded %d samples from %s", len(samples), dataset_dir)
    return samples
