"""Depth-limited value sanitization.

Modules:
- classifier: shape categories of runtime values
- accessors: getter/predicate discovery and fault-isolated invocation
- walker: truncating container walk
- sanitizer: the recursive sanitizer tying them together
- models: the sanitized tree node types
"""

from .accessors import NO_ID, Accessor, InvocationResult, discover, identity_accessor, string_coercion
from .classifier import classify
from .models import (
    AccessorEntry,
    AccessorsBody,
    Container,
    ContainerEntry,
    IterableBody,
    ObjectShape,
    Opaque,
    SanitizedNode,
    Scalar,
    ShapeCategory,
    Summary,
)
from .sanitizer import Sanitizer, sanitize
from .walker import walk_container

__all__ = [
    "NO_ID",
    "Accessor",
    "AccessorEntry",
    "AccessorsBody",
    "Container",
    "ContainerEntry",
    "InvocationResult",
    "IterableBody",
    "ObjectShape",
    "Opaque",
    "SanitizedNode",
    "Sanitizer",
    "Scalar",
    "ShapeCategory",
    "Summary",
    "classify",
    "discover",
    "identity_accessor",
    "sanitize",
    "string_coercion",
    "walk_container",
]
