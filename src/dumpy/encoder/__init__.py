"""YAML encoding of sanitized trees."""

from .yaml_encoder import YamlEncoder

__all__ = ["YamlEncoder"]
