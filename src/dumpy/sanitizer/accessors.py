"""
Accessor discovery for object-shaped values.

An accessor is a public method whose name starts with get, has or is
(case-insensitive). Accessors without required parameters can be invoked
safely and have their result sanitized; the others are reported by signature
only.

Discovery walks the class hierarchy subclass-first and each class body in
declaration order, so a dump lists accessors in the order they were written.
"""

import datetime
import inspect
import re
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from loguru import logger

from ..config import Config
from ..errors import InvocationError

ACCESSOR_REGEX = re.compile(Config.ACCESSOR_PATTERN, re.IGNORECASE)

# Returned by identity_accessor() when the id accessor yields None.
NO_ID = "(no id)"

_REQUIRED_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.KEYWORD_ONLY,
)


@dataclass(frozen=True)
class InvocationResult:
    """Outcome of a fault-isolated accessor call."""

    ok: bool
    value: Any = None
    error: Optional[InvocationError] = None

    @property
    def outcome(self) -> Any:
        """The returned value on success, the InvocationError otherwise."""
        return self.value if self.ok else self.error


@dataclass(frozen=True)
class Accessor:
    """A discovered accessor bound to the object it was found on."""

    name: str
    signature: str
    invocable: bool
    target: Any = field(repr=False, compare=False, default=None)

    def invoke(self) -> InvocationResult:
        """
        Call the accessor without arguments, capturing any failure.

        Returns:
            InvocationResult holding either the value or an InvocationError
        """
        if not self.invocable:
            return InvocationResult(
                ok=False,
                error=InvocationError(self.signature, TypeError("accessor requires arguments")),
            )
        return invoke_isolated(self.target, self.name, self.signature)


def invoke_isolated(target: Any, name: str, signature: Optional[str] = None) -> InvocationResult:
    """Look up and call target.name() so that no Exception escapes."""
    signature = signature or f"{name}()"
    try:
        return InvocationResult(ok=True, value=getattr(target, name)())
    except Exception as e:
        logger.debug(f"Accessor {signature} raised {type(e).__name__}")
        return InvocationResult(ok=False, error=InvocationError(signature, e))


def discover(value: Any) -> list[Accessor]:
    """
    Enumerate the accessors of an object.

    Args:
        value: Object to introspect

    Returns:
        Accessors in declaration order, subclass first
    """
    accessors = []
    for name, attr in _iter_public_routines(type(value)):
        if not ACCESSOR_REGEX.match(name):
            continue
        params = _parameters(attr)
        if params is None:
            # Signature not introspectable (some C methods): never call blindly.
            accessors.append(Accessor(name, f"{name}(...)", False, value))
            continue
        required = [p for p in params if p.default is p.empty and p.kind in _REQUIRED_KINDS]
        accessors.append(
            Accessor(name, _format_signature(name, params), not required, value)
        )
    return accessors


def identity_accessor(value: Any) -> Optional[str]:
    """
    Render an object's id through its zero-argument get_id/getId accessor.

    Returns:
        The id as text, NO_ID when the accessor returned None, or None when the
        object has no usable id accessor or calling it failed
    """
    for name, attr in _iter_public_routines(type(value)):
        if name not in Config.IDENTITY_ACCESSORS:
            continue
        params = _parameters(attr)
        if params is None or any(
            p.default is p.empty and p.kind in _REQUIRED_KINDS for p in params
        ):
            continue
        result = invoke_isolated(value, name)
        if not result.ok:
            return None
        if result.value is None:
            return NO_ID
        try:
            return str(result.value)
        except Exception as e:
            logger.debug(f"Could not render id of {type(value).__name__}: {e!r}")
            return None
    return None


def string_coercion(value: Any) -> Optional[str]:
    """
    Coerce an object to text when its class defines its own __str__.

    Returns:
        None when the class keeps object.__str__; otherwise the text, or a
        diagnostic note when coercion raised
    """
    try:
        has_str = type(value).__str__ is not object.__str__
    except Exception:
        return None
    if not has_str:
        return None
    try:
        return str(value)
    except Exception as e:
        logger.debug(f"str() of {type(value).__name__} raised {type(e).__name__}")
        return f"(string) casting raised {type(e).__name__}, please report or fix"


def format_timestamp(value: Any) -> Optional[str]:
    """YYYY-MM-DD HH:MM:SS for date and datetime values, None otherwise."""
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    return None


def _iter_public_routines(cls: type) -> Iterator[tuple[str, Any]]:
    seen = set()
    for klass in getattr(cls, "__mro__", (cls,)):
        if klass is object:
            continue
        for name, attr in list(vars(klass).items()):
            if name in seen:
                continue
            seen.add(name)
            if name.startswith("_"):
                continue
            if isinstance(attr, (staticmethod, classmethod)) or inspect.isroutine(attr):
                yield name, attr


def _parameters(attr: Any) -> Optional[list[inspect.Parameter]]:
    """Parameters callers must supply, minus the bound self/cls."""
    try:
        if isinstance(attr, staticmethod):
            return list(inspect.signature(attr.__func__).parameters.values())
        func = attr.__func__ if isinstance(attr, classmethod) else attr
        return list(inspect.signature(func).parameters.values())[1:]
    except (TypeError, ValueError):
        return None


def _format_signature(name: str, params: list[inspect.Parameter]) -> str:
    rendered = []
    for param in params:
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            rendered.append(f"*{param.name}")
        elif param.kind is inspect.Parameter.VAR_KEYWORD:
            rendered.append(f"**{param.name}")
        else:
            rendered.append(param.name)
    return f"{name}({', '.join(rendered)})"
