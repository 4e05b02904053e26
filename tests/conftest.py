"""Pytest fixtures and sample objects for the dumpy test suite."""

from typing import Optional

import pytest

from dumpy.encoder import YamlEncoder
from dumpy.filters import Dumpy
from dumpy.sanitizer import Sanitizer


# ============================================================================
# SAMPLE OBJECTS
# ============================================================================


class User:
    """Accessor-style object with an id, a __str__ and a nested list."""

    def __init__(self, user_id: Optional[int] = 42, name: str = "alice", friends=None):
        self._id = user_id
        self._name = name
        self._friends = friends if friends is not None else []

    def get_id(self):
        return self._id

    def get_name(self):
        return self._name

    def is_active(self):
        return True

    def has_role(self, role):
        return role == "admin"

    def get_friends(self):
        return self._friends

    def compute(self):
        raise AssertionError("non-accessor methods must never be invoked")

    def _get_secret(self):
        raise AssertionError("private methods must never be invoked")

    @property
    def display_name(self):
        raise AssertionError("properties must never be read")

    def __str__(self):
        return f"User {self._name}"


class Faulty:
    """Object whose accessors fail in every possible way."""

    def get_id(self):
        raise LookupError("no id here")

    def get_broken(self):
        raise ValueError("boom")

    def get_ok(self):
        return 1

    def __str__(self):
        raise RuntimeError("cannot render")


class Bag:
    """Iterable object that also exposes an accessor."""

    def __init__(self, items):
        self._items = list(items)

    def get_size(self):
        raise AssertionError("iterable objects are walked, not introspected")

    def __iter__(self):
        return iter(self._items)

    def __len__(self):
        return len(self._items)


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def user():
    """User with two friends."""
    return User(friends=[User(1, "bob"), User(2, "carol")])


@pytest.fixture
def sanitizer():
    """Sanitizer with the default truncation cap."""
    return Sanitizer()


@pytest.fixture
def plain_encoder():
    """Encoder producing plain text labels, no HTML escaping."""
    return YamlEncoder(html=False)


@pytest.fixture
def html_encoder():
    """Encoder producing HTML-escaped output with span labels."""
    return YamlEncoder(html=True)


@pytest.fixture
def plain_dumpy(plain_encoder):
    """Filter facade without HTML escaping."""
    return Dumpy(encoder=plain_encoder)
