"""
Sanitized tree data models.

A sanitized tree is the bounded, fully owned projection of a runtime value.
Nodes never hold a reference to the value they were built from, so a tree
can be encoded, compared, or discarded independently of its input.

Node kinds:
- Scalar: a primitive with an explicit type prefix, e.g. "(int) 3" or "null"
- Opaque: a handle that cannot be introspected safely (file, socket, generator)
- Summary: a one-line stand-in for a value past the depth budget
- Container: ordered (key, node) entries of a mapping, sequence or iterable
- ObjectShape: class label plus either accessor values or iterated elements
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union


class ShapeCategory(str, Enum):
    """Shape categories assigned by the classifier, in priority order."""

    OPAQUE = "opaque"
    CONTAINER = "container"
    INVOCATION_FAILURE = "invocation_failure"
    ITERABLE_OBJECT = "iterable_object"
    OBJECT = "object"
    PRIMITIVE = "primitive"

    @property
    def is_object(self) -> bool:
        """True for both generic object categories (iterable or not)."""
        return self in (ShapeCategory.ITERABLE_OBJECT, ShapeCategory.OBJECT)


@dataclass(frozen=True)
class Scalar:
    """Primitive rendered with its type tag."""

    text: str


@dataclass(frozen=True)
class Opaque:
    """Non-introspectable handle."""

    label: str


@dataclass(frozen=True)
class Summary:
    """One-line stand-in for a value that exceeded the depth budget."""

    text: str


@dataclass(frozen=True)
class ContainerEntry:
    """
    One walked element.

    key is the mapping key or element index (None for the synthetic
    "... and N more ..." entry, which sets synthetic=True).
    """

    key: Any
    node: "SanitizedNode"
    synthetic: bool = False


@dataclass(frozen=True)
class Container:
    """Walked mapping, sequence or iterable object."""

    type_name: str
    is_mapping: bool
    entries: tuple[ContainerEntry, ...] = ()

    @property
    def truncated(self) -> bool:
        return bool(self.entries) and self.entries[-1].synthetic


@dataclass(frozen=True)
class AccessorEntry:
    """
    One discovered accessor.

    node is None when the accessor takes required parameters and was
    reported by signature only.
    """

    signature: str
    node: Optional["SanitizedNode"] = None

    @property
    def invoked(self) -> bool:
        return self.node is not None


@dataclass(frozen=True)
class AccessorsBody:
    """Object body listing accessor values in discovery order."""

    entries: tuple[AccessorEntry, ...] = ()


@dataclass(frozen=True)
class IterableBody:
    """Object body for objects walked through their own elements."""

    container: Container


ObjectBody = Union[AccessorsBody, IterableBody]


@dataclass(frozen=True)
class ObjectShape:
    """Object expanded within the depth budget."""

    class_name: str
    full_name: str
    body: ObjectBody


SanitizedNode = Union[Scalar, Opaque, Summary, Container, ObjectShape]

NULL = Scalar("null")
