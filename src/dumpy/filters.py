"""
Template filters for dumping values while debugging templates.

Usage in a template:
    {{ "my string, whatever" | pre }}   --> wrapped in <pre>
    {{ my_big_var | dump }}              --> pprint-style dump, wrapped
    {{ my_big_var | dumpy }}             --> sanitized YAML dump, wrapped
    {{ my_big_var | ydump }}             --> same as dumpy

The recursion depth of dumpy is controlled by its parameter. With
foo = {"a": {"b": ["c", "d"]}}:

    {{ foo | dumpy(0) }} --> 1 of dict
    {{ foo | dumpy(2) }} -->
                              a:
                                b: 2 of list
    {{ foo | dumpy(3) }} -->
                              a:
                                b:
                                - (string) c
                                - (string) d

The default depth is Config.MAX_DEPTH (1).
"""

from typing import Any, Callable, Optional

from loguru import logger

from .config import Config, inline_threshold
from .encoder import YamlEncoder
from .presentation import pre_dump, wrap
from .sanitizer import SanitizedNode, Sanitizer


class Dumpy:
    """
    Filter facade: sanitize, encode and wrap.

    Holds one encoder and one sanitizer, both built once at construction and
    shared by every call.
    """

    def __init__(
        self,
        encoder: Optional[YamlEncoder] = None,
        sanitizer: Optional[Sanitizer] = None,
    ):
        self.encoder = encoder or YamlEncoder()
        self.sanitizer = sanitizer or Sanitizer()

    def filters(self) -> dict[str, Callable[..., Any]]:
        """Filters to register on a template environment, keyed by name."""
        return {
            "pre": self.pre,
            "dump": self.pre_dump,
            "dumpy": self.pre_yaml_dump,
            "ydump": self.pre_yaml_dump,
        }

    def pre(self, text: Any) -> str:
        """Wrap text in a <pre> block."""
        return wrap(text)

    def pre_dump(self, value: Any) -> str:
        """Raw, unbounded structural print of a value, wrapped."""
        return pre_dump(value)

    def pre_yaml_dump(self, value: Any, depth: Optional[int] = None) -> str:
        """
        Sanitized YAML dump of a value, wrapped.

        Falls back to the raw dump if encoding fails, so a broken value never
        breaks the page being debugged.
        """
        try:
            return wrap(self.yaml_dump(value, depth))
        except Exception as e:
            logger.warning(f"dumpy encoding failed: {e}, falling back to raw dump")
            return self.pre_dump(value)

    def yaml_dump(self, value: Any, depth: Optional[int] = None) -> str:
        """
        Sanitize a value to `depth` levels and encode it as YAML.

        Args:
            value: What to dump
            depth: Depth budget (defaults to Config.MAX_DEPTH)

        Returns:
            YAML text (Markup when the encoder is in HTML mode)
        """
        if depth is None:
            depth = Config.MAX_DEPTH
        depth = int(depth)
        return self.encode_node(self.sanitize(value, depth), inline_threshold(depth))

    def encode(self, data: Any, inline: Optional[int] = None) -> str:
        """Encode plain data (dicts, lists, scalars) as YAML."""
        return self.encoder.dump(data, inline)

    def encode_node(self, node: SanitizedNode, inline: Optional[int] = None) -> str:
        """Encode a sanitized tree as YAML."""
        return self.encoder.encode(node, inline)

    def sanitize(self, value: Any, max_depth: Optional[int] = None, depth: int = 0) -> SanitizedNode:
        """Sanitize a value (see Sanitizer.sanitize)."""
        return self.sanitizer.sanitize(value, max_depth, depth)
