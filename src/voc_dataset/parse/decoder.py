"""PASCAL VOC annotation decoder.

Decodes an annotation document (VOC2007 to VOC2012) into an
:class:`~voc_dataset.types.Annotation`. Every element follows the same rules:
mandatory children appear exactly once, ``<object>`` and ``<part>`` may
repeat, and any other child name is rejected.
"""

from enum import Enum
from pathlib import Path
from typing import Union

from ..errors import AnnotationParseError, AnnotationReadError, UnexpectedElementError, VOCError
from ..log import get_logger
from ..types import Annotation, BndBox, Object, Point, Pose, Size, Source
from .fields import Field, Schema, choice, collect, flag, ignore, nested, number, text
from .tree import Node, node_name, parse_xml_text

logger = get_logger(__name__)

ROOT_TAG = "annotation"


class SizeTag(str, Enum):
    WIDTH = "width"
    HEIGHT = "height"
    DEPTH = "depth"


class SourceTag(str, Enum):
    DATABASE = "database"
    ANNOTATION = "annotation"
    IMAGE = "image"


class BndBoxTag(str, Enum):
    XMIN = "xmin"
    YMIN = "ymin"
    XMAX = "xmax"
    YMAX = "ymax"


class PointTag(str, Enum):
    X = "x"
    Y = "y"


class PartTag(str, Enum):
    NAME = "name"
    BNDBOX = "bndbox"


class ObjectTag(str, Enum):
    NAME = "name"
    POSE = "pose"
    BNDBOX = "bndbox"
    TRUNCATED = "truncated"
    DIFFICULT = "difficult"
    OCCLUDED = "occluded"
    POINT = "point"
    PART = "part"
    ACTIONS = "actions"


class AnnotationTag(str, Enum):
    FOLDER = "folder"
    FILENAME = "filename"
    SIZE = "size"
    SOURCE = "source"
    SEGMENTED = "segmented"
    OBJECT = "object"


_SIZE = Schema("size", SizeTag, {
    SizeTag.WIDTH: Field(number),
    SizeTag.HEIGHT: Field(number),
    SizeTag.DEPTH: Field(number),
})

_SOURCE = Schema("source", SourceTag, {
    SourceTag.DATABASE: Field(text),
    SourceTag.ANNOTATION: Field(text),
    SourceTag.IMAGE: Field(text),
})

_BNDBOX = Schema("bndbox", BndBoxTag, {
    BndBoxTag.XMIN: Field(number),
    BndBoxTag.YMIN: Field(number),
    BndBoxTag.XMAX: Field(number),
    BndBoxTag.YMAX: Field(number),
})

_POINT = Schema("point", PointTag, {
    PointTag.X: Field(number),
    PointTag.Y: Field(number),
})


def decode_size(node: Node) -> Size:
    f = collect(node, _SIZE)
    return Size(f[SizeTag.WIDTH], f[SizeTag.HEIGHT], f[SizeTag.DEPTH])


def decode_source(node: Node) -> Source:
    f = collect(node, _SOURCE)
    return Source(
        database=f[SourceTag.DATABASE],
        annotation=f[SourceTag.ANNOTATION],
        image=f[SourceTag.IMAGE],
    )


def decode_bndbox(node: Node) -> BndBox:
    """Decode <bndbox>. Coordinates are not checked for min <= max."""
    f = collect(node, _BNDBOX)
    return BndBox(
        xmin=f[BndBoxTag.XMIN],
        ymin=f[BndBoxTag.YMIN],
        xmax=f[BndBoxTag.XMAX],
        ymax=f[BndBoxTag.YMAX],
    )


def decode_point(node: Node) -> Point:
    f = collect(node, _POINT)
    return Point(f[PointTag.X], f[PointTag.Y])


_PART = Schema("part", PartTag, {
    PartTag.NAME: Field(text),
    PartTag.BNDBOX: Field(nested(decode_bndbox)),
})


def decode_part(node: Node) -> tuple[str, BndBox]:
    """Decode <part> into a (name, bndbox) pair."""
    f = collect(node, _PART)
    return f[PartTag.NAME], f[PartTag.BNDBOX]


_OBJECT = Schema("object", ObjectTag, {
    ObjectTag.NAME: Field(text),
    ObjectTag.POSE: Field(choice(Pose)),
    ObjectTag.BNDBOX: Field(nested(decode_bndbox)),
    ObjectTag.TRUNCATED: Field(flag, required=False),
    ObjectTag.DIFFICULT: Field(flag, required=False),
    ObjectTag.OCCLUDED: Field(flag, required=False),
    ObjectTag.POINT: Field(nested(decode_point), required=False),
    ObjectTag.PART: Field(nested(decode_part), repeated=True),
    ObjectTag.ACTIONS: Field(ignore, required=False, repeated=True),
})


def decode_object(node: Node) -> Object:
    f = collect(node, _OBJECT)

    parts = {}
    for name, bndbox in f.all(ObjectTag.PART):
        if name in parts:
            # Later <part> wins, matching plain mapping insertion
            logger.warning("<part> %r is repeated in <object>, keeping the last one", name)
        parts[name] = bndbox

    return Object(
        name=f[ObjectTag.NAME],
        pose=f[ObjectTag.POSE],
        bndbox=f[ObjectTag.BNDBOX],
        parts=parts,
        truncated=f.get(ObjectTag.TRUNCATED),
        difficult=f.get(ObjectTag.DIFFICULT),
        occluded=f.get(ObjectTag.OCCLUDED),
        point=f.get(ObjectTag.POINT),
    )


_ANNOTATION = Schema(ROOT_TAG, AnnotationTag, {
    AnnotationTag.FOLDER: Field(text),
    AnnotationTag.FILENAME: Field(text),
    AnnotationTag.SIZE: Field(nested(decode_size)),
    AnnotationTag.SOURCE: Field(nested(decode_source)),
    AnnotationTag.SEGMENTED: Field(flag, required=False),
    AnnotationTag.OBJECT: Field(nested(decode_object), repeated=True),
})


def decode_annotation(root: Node) -> Annotation:
    """Decode an <annotation> element tree.

    Args:
        root: Root element of an annotation document.

    Returns:
        Validated Annotation.

    Raises:
        AnnotationSchemaError: If any element breaks the annotation schema.
    """
    name = node_name(root)
    if name != ROOT_TAG:
        raise UnexpectedElementError(name, "document")

    f = collect(root, _ANNOTATION)
    return Annotation(
        folder=f[AnnotationTag.FOLDER],
        filename=f[AnnotationTag.FILENAME],
        size=f[AnnotationTag.SIZE],
        source=f[AnnotationTag.SOURCE],
        objects=tuple(f.all(AnnotationTag.OBJECT)),
        segmented=f.get(AnnotationTag.SEGMENTED),
    )


def parse_annotation_xml(content: str | bytes) -> Annotation:
    """Parse annotation XML text into an Annotation.

    Raises:
        AnnotationSyntaxError: If the text is not well-formed XML.
        AnnotationSchemaError: If the document breaks the annotation schema.
    """
    return decode_annotation(parse_xml_text(content))


def parse_annotation_file(path: Union[str, Path], encoding: str = "utf-8") -> Annotation:
    """Read and decode one annotation file.

    Args:
        path: Path to the annotation XML file.
        encoding: Text encoding of the file.

    Returns:
        Validated Annotation.

    Raises:
        AnnotationReadError: If the file cannot be read.
        AnnotationParseError: If the file is malformed or breaks the schema.
    """
    path = Path(path)

    try:
        content = path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise AnnotationReadError(path, e) from e

    try:
        return parse_annotation_xml(content)
    except VOCError as e:
        raise AnnotationParseError(path, e) from e
