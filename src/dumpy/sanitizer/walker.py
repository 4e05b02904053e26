"""Truncating walker for containers and iterable objects."""

from collections.abc import Mapping, Sized
from itertools import islice
from typing import Any, Callable, Optional

from loguru import logger

from .classifier import int_text, type_name
from .models import Container, ContainerEntry, SanitizedNode, Scalar, Summary

SanitizeFn = Callable[[Any, int, int], SanitizedNode]

PRIMITIVE_KEY_TYPES = (bool, int, float, str)

_END = object()


def walk_container(
    value: Any,
    max_depth: int,
    depth: int,
    sanitize: SanitizeFn,
    cap: int = 20,
) -> SanitizedNode:
    """
    Sanitize the elements of a container, capped at `cap` entries.

    Within budget (depth < max_depth) every element is sanitized one level
    deeper. Past `cap` entries the walk stops and a synthetic trailing entry
    "... and N more ..." reports how many were left out. When the budget is
    spent the container collapses to "<count> of <type>" or "empty <type>".

    Args:
        value: Mapping, sequence, set or iterable object
        max_depth: Depth budget
        depth: Current depth
        sanitize: Callback used to sanitize each element
        cap: Maximum number of entries emitted

    Returns:
        Container node, or Summary when the budget is spent
    """
    count = _count(value)

    if depth >= max_depth:
        if count is None:
            return Summary(f"iterable {type_name(value)}")
        return Summary(f"{count} of {type_name(value)}" if count else f"empty {type_name(value)}")

    is_mapping = isinstance(value, Mapping)
    entries = []
    more = False
    pairs = _guarded_pairs(value, is_mapping)
    for pair in islice(pairs, cap):
        if isinstance(pair, Exception):
            entries.append(_iteration_failure(value, pair))
            return Container(type_name(value), is_mapping, tuple(entries))
        key, element = pair
        entries.append(ContainerEntry(_safe_key(key), sanitize(element, max_depth, depth + 1)))

    if count is None:
        tail = next(pairs, _END)
        if isinstance(tail, Exception):
            entries.append(_iteration_failure(value, tail))
            return Container(type_name(value), is_mapping, tuple(entries))
        more = tail is not _END

    if count is not None and count > len(entries):
        entries.append(
            ContainerEntry(None, Scalar(f"... and {count - len(entries)} more ..."), synthetic=True)
        )
    elif more:
        entries.append(ContainerEntry(None, Scalar("... and more ..."), synthetic=True))

    return Container(type_name(value), is_mapping, tuple(entries))


def _count(value: Any) -> Optional[int]:
    """Element count taken once up front, None when the value is not sized."""
    if not isinstance(value, Sized):
        return None
    try:
        return len(value)
    except Exception:
        return None


def _guarded_pairs(value: Any, is_mapping: bool):
    """
    Yield (key, element) pairs of a container.

    A failure raised by the container while iterating is yielded as the
    exception itself and ends the stream. Failures raised by the consumer
    while handling a pair never reach this generator.
    """
    try:
        pairs = iter(value.items()) if is_mapping else enumerate(value)
        for pair in pairs:
            yield pair
    except Exception as e:
        logger.debug(f"Iteration of {type_name(value)} stopped: {type(e).__name__}: {e!r}")
        yield e


def _iteration_failure(value: Any, error: Exception) -> ContainerEntry:
    return ContainerEntry(
        None,
        Scalar(f"Couldn't iterate {type_name(value)}: {type(error).__name__}"),
        synthetic=True,
    )


def _safe_key(key: Any) -> Any:
    """Mapping keys are kept when primitive, rendered as text otherwise."""
    if key is None:
        return None
    # Subclasses (enums, numpy scalars, Markup) are narrowed to the builtin.
    for primitive in PRIMITIVE_KEY_TYPES:
        if isinstance(key, primitive):
            if primitive is str:
                return str.__str__(key)
            if primitive is int:
                return _int_key(key)
            return primitive(key)
    try:
        return repr(key)
    except Exception:
        return f"<{type(key).__name__}>"


def _int_key(key: int) -> Any:
    """Ints too long for str() are keyed by their text description."""
    text = int_text(key)
    return int(key) if text[-1].isdigit() else text
