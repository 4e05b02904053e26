"""Jinja2 extension registering the dumpy filters."""

from jinja2 import Environment
from jinja2.ext import Extension

from .filters import Dumpy


class DumpyExtension(Extension):
    """
    Registers pre, dump, dumpy and ydump on the environment.

    Usage:
        env = Environment(extensions=[DumpyExtension])
        env.from_string("{{ user | dumpy(2) }}").render(user=user)

    The Dumpy instance is exposed as environment.dumpy so callers can swap
    the encoder or sanitizer after construction.
    """

    def __init__(self, environment: Environment):
        super().__init__(environment)
        dumpy = Dumpy()
        environment.extend(dumpy=dumpy)
        environment.filters.update(dumpy.filters())
