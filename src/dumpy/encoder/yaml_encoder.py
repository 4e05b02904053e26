"""
YAML encoder for sanitized trees.

Renders a sanitized tree as block YAML. Nesting levels below the inline
threshold are expanded as block mappings/sequences; from the threshold on,
structures collapse to single-line flow style. A threshold of 0 renders the
whole tree inline.

In HTML mode every string coming from the dumped value is escaped, and
object class labels become <span title="full.Name">Short</span> so that the
full name shows up as a tooltip. The result is then safe to embed raw.
"""

from typing import Any, Optional

import yaml
from markupsafe import Markup, escape

from ..config import Config
from ..sanitizer.models import (
    AccessorsBody,
    Container,
    ObjectShape,
    Opaque,
    SanitizedNode,
    Scalar,
    Summary,
)

TRUNCATION_KEY = "..."


class _FlowMapping(dict):
    """Mapping rendered in flow style."""


class _FlowSequence(list):
    """Sequence rendered in flow style."""


class _Dumper(yaml.SafeDumper):
    """SafeDumper that honours the flow markers above."""


def _represent_flow_mapping(dumper: yaml.SafeDumper, data: _FlowMapping) -> yaml.Node:
    return dumper.represent_mapping("tag:yaml.org,2002:map", data, flow_style=True)


def _represent_flow_sequence(dumper: yaml.SafeDumper, data: _FlowSequence) -> yaml.Node:
    return dumper.represent_sequence("tag:yaml.org,2002:seq", data, flow_style=True)


_Dumper.add_representer(_FlowMapping, _represent_flow_mapping)
_Dumper.add_representer(_FlowSequence, _represent_flow_sequence)


class YamlEncoder:
    """
    Serializes sanitized trees to YAML text.

    Immutable after construction; build one and share it.
    """

    def __init__(self, html: Optional[bool] = None, width: Optional[int] = None):
        """
        Initialize encoder.

        Args:
            html: Escape strings and render class labels as HTML spans.
                Defaults to Config.HTML_LABELS.
            width: Preferred line width before YAML folds long flow lines.
                Defaults to Config.ENCODER_WIDTH.
        """
        self._html = Config.HTML_LABELS if html is None else html
        self._width = Config.ENCODER_WIDTH if width is None else width

    @property
    def html(self) -> bool:
        return self._html

    @property
    def width(self) -> int:
        return self._width

    def encode(self, node: SanitizedNode, inline: Optional[int] = None) -> str:
        """
        Encode a sanitized tree.

        Args:
            node: Root of the sanitized tree
            inline: Nesting level from which structures render inline
                (defaults to Config.INLINE)

        Returns:
            YAML text without trailing newline; a Markup instance in HTML mode
        """
        if inline is None:
            inline = Config.INLINE
        return self.dump(self.to_plain(node), inline)

    def dump(self, data: Any, inline: Optional[int] = None) -> str:
        """
        Encode already-plain data (dicts, lists, strings, numbers).

        Top-level scalars are returned as text rather than as a YAML document.
        """
        if inline is None:
            inline = Config.INLINE

        prepared = self._prepare(data, inline, 0)
        if not isinstance(prepared, (dict, list)):
            text = str(prepared)
        else:
            text = yaml.dump(
                prepared,
                Dumper=_Dumper,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
                width=self._width,
            ).rstrip("\n")

        return Markup(text) if self._html else text

    def to_plain(self, node: SanitizedNode) -> Any:
        """
        Project a sanitized tree onto YAML-friendly builtins.

        Objects become {"class": label, "accessors": {...}} or
        {"class": label, "iterable": [...]}; accessors reported by signature
        only are listed under positional keys 0, 1, ...
        """
        if isinstance(node, (Scalar, Opaque, Summary)):
            return _node_text(node)

        if isinstance(node, Container):
            return self._container(node)

        if isinstance(node, ObjectShape):
            data = {"class": self._label(node)}
            if isinstance(node.body, AccessorsBody):
                accessors = {}
                position = 0
                for entry in node.body.entries:
                    if entry.invoked:
                        accessors[entry.signature] = self.to_plain(entry.node)
                    else:
                        accessors[position] = entry.signature
                        position += 1
                data["accessors"] = accessors
            else:
                data["iterable"] = self.to_plain(node.body.container)
            return data

        return str(node)

    def _container(self, node: Container) -> Any:
        if not node.is_mapping:
            return [self.to_plain(entry.node) for entry in node.entries]

        data = {}
        for entry in node.entries:
            key = TRUNCATION_KEY if entry.synthetic else entry.key
            data[_unique_key(data, key)] = self.to_plain(entry.node)
        return data

    def _label(self, node: ObjectShape) -> str:
        if self._html:
            return Markup('<span title="{}">{}</span>').format(node.full_name, node.class_name)
        return f"{node.class_name} ({node.full_name})"

    def _prepare(self, data: Any, inline: int, level: int) -> Any:
        """Escape strings in HTML mode and mark collections at level >= inline as flow."""
        if isinstance(data, dict):
            items = {
                self._prepare(key, inline, level): self._prepare(value, inline, level + 1)
                for key, value in data.items()
            }
            return _FlowMapping(items) if level >= inline or not items else items
        if isinstance(data, (list, tuple)):
            items = [self._prepare(value, inline, level + 1) for value in data]
            return _FlowSequence(items) if level >= inline or not items else items
        if isinstance(data, str):
            # Plain str: the YAML dumper has no representer for Markup.
            return str(escape(data)) if self._html else str(data)
        return data


def _node_text(node: Any) -> str:
    return node.label if isinstance(node, Opaque) else node.text



def _unique_key(data: dict, key: Any) -> Any:
    """Suffix a key already present in `data` with " (2)", " (3)", ..."""
    if key not in data:
        return key
    suffix = 2
    while f"{key} ({suffix})" in data:
        suffix += 1
    return f"{key} ({suffix})"
