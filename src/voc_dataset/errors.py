"""Exceptions raised while decoding annotations and loading datasets."""

from pathlib import Path
from typing import Iterable, Optional, Sequence


class VOCError(Exception):
    """Base exception for voc_dataset errors."""
    pass


class AnnotationSyntaxError(VOCError):
    """Annotation text is not well-formed XML."""

    def __init__(self, detail: str, position: Optional[tuple[int, int]] = None):
        self.detail = detail
        self.position = position
        super().__init__(f"Failed to parse annotation XML: {detail}")


class AnnotationSchemaError(VOCError):
    """Element tree does not follow the annotation schema."""

    def __init__(self, message: str, tag: str, parent: str):
        self.tag = tag
        self.parent = parent
        super().__init__(message)


class DuplicatedElementError(AnnotationSchemaError):
    """A singleton element appears more than once."""

    def __init__(self, tag: str, parent: str):
        super().__init__(f"<{tag}> is duplicated in <{parent}>", tag, parent)


class MissingElementError(AnnotationSchemaError):
    """One or more mandatory elements never appeared."""

    def __init__(self, tags: Iterable[str], parent: str):
        self.tags = tuple(tags)
        names = ", ".join(f"<{t}>" for t in self.tags)
        super().__init__(f"{names} is missing in <{parent}>", self.tags[0], parent)


class UnexpectedElementError(AnnotationSchemaError):
    """Element name is not part of the schema at this level."""

    def __init__(self, tag: str, parent: str):
        super().__init__(f"Unexpected <{tag}> in <{parent}>", tag, parent)


class InvalidEnumValueError(AnnotationSchemaError):
    """Element text is not one of the allowed literals."""

    def __init__(self, tag: str, parent: str, value: str, allowed: Sequence[str]):
        self.value = value
        self.allowed = tuple(allowed)
        choices = ", ".join(f'"{a}"' for a in self.allowed)
        super().__init__(
            f'Expect {choices} in <{tag}>, but get "{value}"', tag, parent
        )


class InvalidBoolLiteralError(AnnotationSchemaError):
    """Boolean element text is neither "0" nor "1"."""

    def __init__(self, tag: str, parent: str, value: str):
        self.value = value
        super().__init__(f"expect 0 or 1 in <{tag}>, but get {value}", tag, parent)


class NumericParseError(AnnotationSchemaError):
    """Numeric element text cannot be parsed as a float."""

    def __init__(self, tag: str, parent: str, value: str):
        self.value = value
        super().__init__(
            f"cannot parse <{tag}> in <{parent}> as a number: {value!r}", tag, parent
        )


class DatasetError(VOCError):
    """Error tied to a file or directory of a dataset."""

    def __init__(self, message: str, path: Path):
        self.path = Path(path)
        super().__init__(message)


class DatasetNotFoundError(DatasetError):
    """Dataset directory layout not found."""

    def __init__(self, path: Path, reason: str = "directory not found"):
        super().__init__(f"Dataset {reason}: {path}", path)


class DatasetReadError(DatasetError):
    """Dataset directory could not be listed."""

    def __init__(self, path: Path, error: OSError):
        self.error = error
        super().__init__(f"cannot list directory {path}: {error}", path)


class AnnotationReadError(DatasetError):
    """Annotation file could not be read."""

    def __init__(self, path: Path, error: Exception):
        self.error = error
        super().__init__(f"cannot open file {path}: {error}", path)


class AnnotationParseError(DatasetError):
    """Annotation file was read but could not be decoded."""

    def __init__(self, path: Path, error: VOCError):
        self.error = error
        super().__init__(f"Cannot parse file {path}: {error}", path)


class FilenameMismatchError(DatasetError):
    """Decoded <filename> does not match the image it was paired with."""

    def __init__(self, path: Path, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f'{path}: Expect "{expected}" in <filename>, but get "{actual}"', path
        )
