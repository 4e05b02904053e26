"""Shape classification for arbitrary runtime values."""

import io
import socket
import types
from collections.abc import AsyncIterator, Awaitable, Iterable, Iterator, Mapping, Sequence, Set
from typing import Any

from ..errors import InvocationError
from .models import ShapeCategory

PRIMITIVE_TYPES = (type(None), bool, int, float, str, bytes, bytearray)

# Handles that would be consumed, mutated or blocked on by walking them.
OPAQUE_TYPES = (
    io.IOBase,
    socket.socket,
    types.ModuleType,
    types.FrameType,
    types.TracebackType,
    types.CodeType,
    Iterator,
    AsyncIterator,
    Awaitable,
)

_TEXT_TYPES = (str, bytes, bytearray, memoryview)


def classify(value: Any) -> ShapeCategory:
    """
    Determine the shape category of a value.

    Priority:
    1. Opaque handle (files, sockets, modules, iterators, awaitables)
    2. Container (mappings, non-text sequences and sets)
    3. Invocation failure wrapper
    4. Generic object, tagged ITERABLE_OBJECT when it can enumerate its elements
    5. Primitive (None, bool, int, float, str, bytes)

    Never raises: a value whose type cannot even be probed is treated as opaque.

    Args:
        value: Any runtime value

    Returns:
        The value's ShapeCategory
    """
    try:
        return _classify(value)
    except Exception:
        return ShapeCategory.OPAQUE


def _classify(value: Any) -> ShapeCategory:
    if isinstance(value, PRIMITIVE_TYPES):
        # Primitives are disjoint from every other category; checking them
        # first keeps str/bytes out of the Sequence test below.
        return ShapeCategory.PRIMITIVE

    if isinstance(value, OPAQUE_TYPES):
        return ShapeCategory.OPAQUE

    if is_container(value):
        return ShapeCategory.CONTAINER

    if isinstance(value, InvocationError):
        return ShapeCategory.INVOCATION_FAILURE

    if isinstance(value, Iterable):
        return ShapeCategory.ITERABLE_OBJECT

    return ShapeCategory.OBJECT


def is_container(value: Any) -> bool:
    """True for mappings, and for sequences and sets that are not text."""
    if isinstance(value, Mapping):
        return True
    return isinstance(value, (Sequence, Set)) and not isinstance(value, _TEXT_TYPES)


def type_name(value: Any) -> str:
    """Short type name, as shown in container summaries."""
    return type(value).__name__


def full_type_name(value: Any) -> str:
    """Fully qualified type name (builtins are left unqualified)."""
    cls = type(value)
    module = getattr(cls, "__module__", None)
    qualname = getattr(cls, "__qualname__", cls.__name__)
    if module and module != "builtins":
        return f"{module}.{qualname}"
    return qualname


def int_text(value: int) -> str:
    """
    Decimal text of an integer.

    Integers past the interpreter's str conversion limit (4300 digits by
    default) are described by their bit length instead.
    """
    number = int(value)
    try:
        return str(number)
    except ValueError:
        sign = "-" if number < 0 else ""
        return f"{sign}<{number.bit_length()}-bit int>"
