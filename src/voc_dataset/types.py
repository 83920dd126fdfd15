"""Core types and dataclasses for VOC annotations."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterator, NamedTuple, Optional


class Pose(str, Enum):
    """Viewpoint of an annotated object, as written in <pose>."""
    FRONTAL = "Frontal"
    REAR = "Rear"
    LEFT = "Left"
    RIGHT = "Right"
    UNSPECIFIED = "Unspecified"


class Size(NamedTuple):
    """Image size from <size>."""
    width: float
    height: float
    depth: float


class Point(NamedTuple):
    """Object point from <point>."""
    x: float
    y: float


@dataclass(frozen=True)
class BndBox:
    """Bounding box from <bndbox>.

    Coordinates are kept as written; xmin > xmax is not rejected.
    """
    xmin: float
    ymin: float
    xmax: float
    ymax: float

    @property
    def width(self) -> float:
        return self.xmax - self.xmin

    @property
    def height(self) -> float:
        return self.ymax - self.ymin


class PartMap(Mapping):
    """Read-only mapping of part name to bounding box."""
    __slots__ = ("_items",)

    def __init__(self, items: Mapping[str, "BndBox"] | None = None):
        self._items = dict(items or {})

    def __getitem__(self, name: str) -> "BndBox":
        return self._items[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __hash__(self) -> int:
        return hash(frozenset(self._items.items()))

    def __repr__(self) -> str:
        return f"PartMap({self._items!r})"


@dataclass(frozen=True)
class Source:
    """Provenance from <source>."""
    database: str
    annotation: str
    image: str


@dataclass(frozen=True)
class Object:
    """Labeled object from <object>."""
    name: str
    pose: Pose
    bndbox: BndBox
    parts: Mapping[str, BndBox] = field(default_factory=PartMap)
    truncated: Optional[bool] = None
    difficult: Optional[bool] = None
    occluded: Optional[bool] = None
    point: Optional[Point] = None

    def __post_init__(self):
        object.__setattr__(self, "parts", PartMap(self.parts))


@dataclass(frozen=True)
class Annotation:
    """Decoded annotation document."""
    folder: str
    filename: str
    size: Size
    source: Source
    objects: tuple[Object, ...] = ()
    segmented: Optional[bool] = None

    def __post_init__(self):
        object.__setattr__(self, "objects", tuple(self.objects))


@dataclass(frozen=True)
class Sample:
    """An image along with its annotation."""
    image_path: Path
    annotation: Annotation


@dataclass
class LoaderConfig:
    """Directory layout of a VOC dataset."""
    image_dir: str = "JPEGImages"
    annotation_dir: str = "Annotations"
    image_ext: str = "jpg"
    annotation_ext: str = "xml"
    sort_samples: bool = True
    encoding: str = "utf-8"

    def __post_init__(self):
        for name in ("image_dir", "annotation_dir", "image_ext", "annotation_ext", "encoding"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise ValueError(f"'{name}' must be a non-empty string, got {value!r}")
        if not isinstance(self.sort_samples, bool):
            raise ValueError(
                f"'sort_samples' must be true or false, got {self.sort_samples!r}"
            )
        # Extensions are stored without the dot
        self.image_ext = self.image_ext.lstrip(".")
        self.annotation_ext = self.annotation_ext.lstrip(".")
        if not self.image_ext or not self.annotation_ext:
            raise ValueError("File extensions must not be empty")

    @classmethod
    def from_dict(cls, data: dict | None) -> "LoaderConfig":
        """Create LoaderConfig from a dictionary (e.g., from YAML)."""
        if data is None:
            data = {}
        # None values fall back to defaults
        filtered = {k: v for k, v in data.items() if v is not None}
        return cls(**filtered)

    def to_dict(self) -> dict:
        """Convert config to dictionary for YAML export."""
        return {
            "image_dir": self.image_dir,
            "annotation_dir": self.annotation_dir,
            "image_ext": self.image_ext,
            "annotation_ext": self.annotation_ext,
            "sort_samples": self.sort_samples,
            "encoding": self.encoding,
        }
