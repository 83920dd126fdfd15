"""Schema-driven field accumulation for annotation elements.

Each element of the annotation format is described by a :class:`Schema`: the
closed set of child tags it accepts (an ``Enum``) and, per tag, how the child
is decoded and whether it is mandatory or repeatable. :func:`collect` walks the
children of one element, classifies every child name once against the tag
enum and feeds it into a :class:`FieldSet`, which enforces the
duplicate/missing rules shared by every element.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Type

from ..errors import (
    DuplicatedElementError,
    InvalidBoolLiteralError,
    InvalidEnumValueError,
    MissingElementError,
    NumericParseError,
    UnexpectedElementError,
)
from ..log import get_logger
from .tree import Node, node_children, node_name, node_text

logger = get_logger(__name__)

# (child node, enclosing element name) -> decoded value
Decoder = Callable[[Node, str], Any]

# Decimal or exponent notation, inf, infinity or nan; no whitespace or underscores
_FLOAT = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class Field:
    """How one child tag is decoded."""
    decode: Decoder
    required: bool = True
    repeated: bool = False


@dataclass(frozen=True)
class Schema:
    """Closed set of child tags accepted by one element."""
    element: str
    tags: Type[Enum]
    fields: Mapping[Enum, Field]

    def classify(self, node: Node) -> Enum:
        """Map a child node to its tag variant.

        Raises:
            UnexpectedElementError: If the name is not in the tag enum.
        """
        name = node_name(node)
        try:
            return self.tags(name)
        except ValueError:
            raise UnexpectedElementError(name, self.element) from None


class FieldSet:
    """Accumulator for the children of one element.

    Singleton fields may be set once; repeated fields collect values in
    document order. :meth:`require` is the single validation step run after
    all children have been seen.
    """

    def __init__(self, schema: Schema):
        self.schema = schema
        self._values: Dict[Enum, Any] = {}
        self._repeated: Dict[Enum, List[Any]] = {
            tag: [] for tag, f in schema.fields.items() if f.repeated
        }

    def add(self, tag: Enum, node: Node) -> None:
        field = self.schema.fields[tag]
        if field.repeated:
            self._repeated[tag].append(field.decode(node, self.schema.element))
            return
        if tag in self._values:
            raise DuplicatedElementError(tag.value, self.schema.element)
        self._values[tag] = field.decode(node, self.schema.element)

    def require(self) -> "FieldSet":
        """Fail with every mandatory tag that was never set."""
        missing = [
            tag.value
            for tag, f in self.schema.fields.items()
            if f.required and not f.repeated and tag not in self._values
        ]
        if missing:
            raise MissingElementError(missing, self.schema.element)
        return self

    def __getitem__(self, tag: Enum) -> Any:
        return self._values[tag]

    def get(self, tag: Enum, default: Any = None) -> Any:
        return self._values.get(tag, default)

    def all(self, tag: Enum) -> List[Any]:
        """Values of a repeated tag, in document order."""
        return list(self._repeated[tag])


def collect(node: Node, schema: Schema) -> FieldSet:
    """Decode and validate the children of ``node`` against ``schema``."""
    fields = FieldSet(schema)
    for child in node_children(node):
        fields.add(schema.classify(child), child)
    return fields.require()


def nested(decoder: Callable[[Node], Any]) -> Decoder:
    """Adapt a structured decoder, which carries its own element name."""
    def decode(node: Node, parent: str) -> Any:
        return decoder(node)
    return decode


def text(node: Node, parent: str) -> str:
    return node_text(node)


def number(node: Node, parent: str) -> float:
    value = node_text(node)
    if not _FLOAT.fullmatch(value):
        raise NumericParseError(node_name(node), parent, value)
    return float(value)


def flag(node: Node, parent: str) -> bool:
    """Decode the literal "0" or "1"."""
    value = node_text(node)
    if value == "0":
        return False
    if value == "1":
        return True
    raise InvalidBoolLiteralError(node_name(node), parent, value)


def choice(enum: Type[Enum]) -> Decoder:
    """Decoder matching the node text exactly against the values of ``enum``."""
    def decode(node: Node, parent: str) -> Enum:
        value = node_text(node)
        try:
            return enum(value)
        except ValueError:
            raise InvalidEnumValueError(
                node_name(node), parent, value, [e.value for e in enum]
            ) from None
    return decode


def ignore(node: Node, parent: str) -> None:
    logger.debug("<%s> in <%s> is not supported, skipping", node_name(node), parent)
    return None
