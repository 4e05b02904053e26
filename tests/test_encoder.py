"""Tests for YAML encoding of sanitized trees."""

import sys

import pytest
import yaml
from markupsafe import Markup

from dumpy.config import Config
from dumpy.encoder import YamlEncoder
from dumpy.sanitizer import (
    AccessorEntry,
    AccessorsBody,
    Container,
    ContainerEntry,
    ObjectShape,
    Opaque,
    Scalar,
    Summary,
    sanitize,
)

from conftest import User


def shape(*entries):
    return ObjectShape("User", "app.models.User", AccessorsBody(tuple(entries)))


@pytest.mark.unit
class TestScalars:
    """Top-level scalars render as bare text."""

    def test_scalar(self, plain_encoder):
        assert plain_encoder.encode(Scalar("(int) 3")) == "(int) 3"

    def test_summary(self, plain_encoder):
        assert plain_encoder.encode(Summary("3 of list")) == "3 of list"

    def test_opaque(self, plain_encoder):
        assert plain_encoder.encode(Opaque("Resource (StringIO)")) == "Resource (StringIO)"


@pytest.mark.unit
class TestStructure:
    """Block structure of containers and objects."""

    def test_mapping_and_sequence(self, plain_encoder):
        """Mappings and sequences round-trip through a YAML parser."""
        text = plain_encoder.encode(sanitize({"a": 1, "b": [1, 2]}, 2), 5)
        assert yaml.safe_load(text) == {"a": "(int) 1", "b": ["(int) 1", "(int) 2"]}

    def test_block_form_below_threshold(self, plain_encoder):
        """Levels below the threshold use block form."""
        text = plain_encoder.encode(sanitize({"a": {"b": 1}}, 3), 5)
        assert text == "a:\n  b: (int) 1"

    def test_inline_form_from_threshold(self, plain_encoder):
        """Levels at the threshold collapse to flow form."""
        text = plain_encoder.encode(sanitize({"a": {"b": 1}}, 3), 1)
        assert text == "a: {b: (int) 1}"

    def test_zero_threshold_is_fully_inline(self, plain_encoder):
        """Threshold 0 renders the root inline."""
        text = plain_encoder.encode(sanitize({"a": [1]}, 3), 0)
        assert text.startswith("{")
        assert "\n" not in text
        assert yaml.safe_load(text) == {"a": ["(int) 1"]}

    def test_truncated_sequence(self, plain_encoder):
        """The truncation message is the last sequence item."""
        items = yaml.safe_load(plain_encoder.encode(sanitize(list(range(25)), 1)))
        assert len(items) == 21
        assert items[-1] == "... and 5 more ..."

    def test_truncated_mapping(self, plain_encoder):
        """The truncation message sits under the '...' key in mappings."""
        data = {f"k{i}": i for i in range(22)}
        loaded = yaml.safe_load(plain_encoder.encode(sanitize(data, 1)))
        assert loaded["..."] == "... and 2 more ..."
        assert len(loaded) == 21

    def test_real_ellipsis_key_survives_truncation(self, plain_encoder):
        """A real '...' key is not overwritten by the truncation message."""
        data = {"...": "real"}
        data.update({f"k{i}": i for i in range(21)})
        loaded = yaml.safe_load(plain_encoder.encode(sanitize(data, 1)))
        assert loaded["..."] == "(string) real"
        assert loaded["... (2)"] == "... and 2 more ..."

    def test_colliding_keys_get_a_suffix(self, plain_encoder):
        """A tuple key whose repr matches a string key keeps both entries."""
        loaded = yaml.safe_load(plain_encoder.encode(sanitize({"(1, 2)": "a", (1, 2): "b"}, 1)))
        assert loaded == {"(1, 2)": "(string) a", "(1, 2) (2)": "(string) b"}

    def test_empty_containers(self, plain_encoder):
        """Empty containers render as flow collections."""
        assert plain_encoder.encode(Container("list", False, ())) == "[]"
        assert plain_encoder.encode(Container("dict", True, ())) == "{}"


@pytest.mark.unit
class TestObjects:
    """Object shapes."""

    def test_object_layout(self, plain_encoder):
        """Objects render a class label and their accessors."""
        node = shape(
            AccessorEntry("get_id()", Scalar("(int) 42")),
            AccessorEntry("has_role(role)"),
            AccessorEntry("is_active()", Scalar("(bool) true")),
            AccessorEntry("get_by(key)"),
        )
        loaded = yaml.safe_load(plain_encoder.encode(node, 3))

        assert loaded["class"] == "User (app.models.User)"
        assert loaded["accessors"] == {
            "get_id()": "(int) 42",
            0: "has_role(role)",
            "is_active()": "(bool) true",
            1: "get_by(key)",
        }

    def test_accessor_order_is_preserved(self, plain_encoder):
        """Accessors are emitted in discovery order, not sorted."""
        text = plain_encoder.encode(
            shape(
                AccessorEntry("is_z()", Scalar("(bool) true")),
                AccessorEntry("get_a()", Scalar("(int) 1")),
            ),
            3,
        )
        assert text.index("is_z()") < text.index("get_a()")

    def test_real_object(self, plain_encoder, user):
        """A sanitized object encodes to the expected mapping."""
        loaded = yaml.safe_load(plain_encoder.encode(sanitize(user, 1), 3))
        assert loaded["accessors"]["get_name()"] == "(string) alice"
        assert loaded["accessors"]["get_friends()"] == "2 of list"
        assert loaded["accessors"][0] == "has_role(role)"


@pytest.mark.unit
class TestHtmlMode:
    """HTML escaping and labels."""

    def test_returns_markup(self, html_encoder):
        """Output is marked safe."""
        assert isinstance(html_encoder.encode(sanitize({"a": 1}, 1)), Markup)

    def test_class_label_span(self, html_encoder):
        """Class labels carry the full name as a title."""
        text = html_encoder.encode(shape(), 3)
        assert '<span title="app.models.User">User</span>' in text

    def test_values_are_escaped(self, html_encoder):
        """Strings from the dumped value are escaped."""
        text = html_encoder.encode(sanitize({"<b>": "<script>alert(1)</script>"}, 1))
        assert "<script>" not in text
        assert "<b>" not in text
        assert "&lt;script&gt;" in text
        assert "&lt;b&gt;" in text

    def test_markup_input_is_escaped_too(self, html_encoder):
        """Markup values inside dumped data are not trusted."""
        text = html_encoder.encode(sanitize([Markup("<i>x</i>")], 1))
        assert "<i>" not in text

    def test_plain_dump_is_escaped(self, html_encoder):
        """Plain data passed straight to dump() is escaped as well."""
        assert html_encoder.dump("<x>") == Markup("&lt;x&gt;")


@pytest.mark.unit
class TestEncoderContract:
    """Determinism and plain data."""

    def test_idempotent(self, plain_encoder, user):
        """Encoding the same tree twice gives the same text."""
        node = sanitize(user, 2)
        assert plain_encoder.encode(node, 5) == plain_encoder.encode(node, 5)

    def test_dump_plain_data(self, plain_encoder):
        """Plain data uses the same inline policy."""
        assert plain_encoder.dump({"a": [1, 2]}, 1) == "a: [1, 2]"

    def test_nested_container_entry_keys(self, plain_encoder):
        """Mapping keys of any primitive type survive encoding."""
        node = Container(
            "dict",
            True,
            (
                ContainerEntry(1, Scalar("(string) one")),
                ContainerEntry("two", Scalar("(int) 2")),
            ),
        )
        assert yaml.safe_load(plain_encoder.encode(node)) == {1: "(string) one", "two": "(int) 2"}

    def test_explicit_zero_width_is_kept(self):
        """Width 0 is not replaced by the configured default."""
        assert YamlEncoder(html=False, width=0).width == 0
        assert YamlEncoder(html=False).width == Config.ENCODER_WIDTH

    @pytest.mark.skipif(
        not hasattr(sys, "set_int_max_str_digits"), reason="no int str conversion limit"
    )
    def test_huge_int_key(self, plain_dumpy):
        """A mapping keyed by a huge int still dumps."""
        key = 10**5000
        loaded = yaml.safe_load(plain_dumpy.yaml_dump({key: 1}, 1))
        assert loaded == {f"<{key.bit_length()}-bit int>": "(int) 1"}
