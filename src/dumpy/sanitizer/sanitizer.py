"""
Depth-limited, cycle-safe value sanitizer.

Walks any runtime value to a bounded depth and produces a sanitized tree
(see models.py). Depth is the single safety valve: every container element
and accessor value is sanitized one level deeper, and objects reached at the
depth budget are reduced to a one-line summary. Self-referential graphs
therefore terminate without any visited-set bookkeeping. A budget deeper
than the interpreter's recursion limit summarizes the value it stopped at.

The sanitizer is total: accessors that raise, objects whose __str__ raises,
and iterables that fail mid-walk are all represented in the tree rather
than propagated. A debug dump must never crash the page it is debugging.
"""

from typing import Any, Optional

from ..config import Config
from . import accessors
from .classifier import classify, full_type_name, int_text, type_name
from .models import (
    NULL,
    AccessorEntry,
    AccessorsBody,
    IterableBody,
    ObjectShape,
    Opaque,
    SanitizedNode,
    Scalar,
    ShapeCategory,
    Summary,
)
from .walker import walk_container


class Sanitizer:
    """
    Converts values into sanitized trees.

    Stateless after construction; one instance can be shared across calls.
    """

    def __init__(self, truncation_cap: Optional[int] = None):
        """
        Initialize sanitizer.

        Args:
            truncation_cap: Maximum entries rendered per container level.
                Defaults to Config.TRUNCATION_CAP.
        """
        self.truncation_cap = Config.TRUNCATION_CAP if truncation_cap is None else truncation_cap

    def sanitize(self, value: Any, max_depth: Optional[int] = None, depth: int = 0) -> SanitizedNode:
        """
        Sanitize a value down to `max_depth` levels.

        Args:
            value: Any runtime value
            max_depth: Depth budget (defaults to Config.MAX_DEPTH)
            depth: Current depth, used by recursive calls

        Returns:
            The sanitized node
        """
        if max_depth is None:
            max_depth = Config.MAX_DEPTH

        category = classify(value)

        if category is ShapeCategory.OPAQUE:
            return Opaque(f"Resource ({type_name(value)})")

        if category is ShapeCategory.CONTAINER:
            return self.walk_container(value, max_depth, depth)

        if category is ShapeCategory.INVOCATION_FAILURE:
            return Scalar(str(value))

        if category.is_object:
            if depth >= max_depth:
                return self.summarize(value)
            return self._expand(value, category, max_depth, depth)

        return tag_primitive(value)

    def walk_container(self, value: Any, max_depth: int, depth: int) -> SanitizedNode:
        """Walk a container or iterable object with this sanitizer's cap."""
        return walk_container(value, max_depth, depth, self._nested, cap=self.truncation_cap)

    def summarize(self, value: Any) -> Summary:
        """
        One-line summary of an object past the depth budget.

        Format: full class name, then " #<id>" or " (no id)" when a get_id
        accessor exists, then " <str(value)>" when the class defines __str__,
        then " : YYYY-MM-DD HH:MM:SS" for dates.
        """
        info = full_type_name(value)

        identity = accessors.identity_accessor(value)
        if identity is accessors.NO_ID:
            info += f" {accessors.NO_ID}"
        elif identity is not None:
            info += f" #{identity}"

        timestamp = accessors.format_timestamp(value)
        if timestamp is None:
            text = accessors.string_coercion(value)
            if text is not None:
                info += f" {text}"
        else:
            info += f" : {timestamp}"

        return Summary(info)

    def _expand(self, value: Any, category: ShapeCategory, max_depth: int, depth: int) -> ObjectShape:
        if category is ShapeCategory.ITERABLE_OBJECT:
            body = IterableBody(self.walk_container(value, max_depth, depth))
        else:
            entries = []
            for accessor in accessors.discover(value):
                if not accessor.invocable:
                    entries.append(AccessorEntry(accessor.signature))
                    continue
                result = accessor.invoke()
                entries.append(
                    AccessorEntry(
                        accessor.signature,
                        self._nested(result.outcome, max_depth, depth + 1),
                    )
                )
            body = AccessorsBody(tuple(entries))

        return ObjectShape(type_name(value), full_type_name(value), body)

    def _nested(self, value: Any, max_depth: int, depth: int) -> SanitizedNode:
        """Sanitize a child value; budgets deeper than the interpreter stack are cut short."""
        try:
            return self.sanitize(value, max_depth, depth)
        except RecursionError:
            return Summary(f"{full_type_name(value)} (recursion limit)")


def tag_primitive(value: Any) -> Scalar:
    """Render a primitive with its explicit type prefix."""
    if value is None:
        return NULL
    if isinstance(value, bool):
        return Scalar("(bool) true" if value else "(bool) false")
    if isinstance(value, int):
        return Scalar(f"(int) {int_text(value)}")
    if isinstance(value, float):
        return Scalar(f"(float) {float(value)!r}")
    if isinstance(value, str):
        return Scalar(f"(string) {str.__str__(value)}")
    return Scalar(f"(bytes) {bytes(value)!r}")


def sanitize(value: Any, max_depth: Optional[int] = None, depth: int = 0) -> SanitizedNode:
    """Sanitize with a default Sanitizer (see Sanitizer.sanitize)."""
    return Sanitizer().sanitize(value, max_depth, depth)
