"""Centralized configuration for dumpy."""

import os


class Config:
    """
    dumpy configuration with environment variable overrides.

    All presentation tuning values are centralized here with sensible defaults.
    Values can be overridden via environment variables.
    """

    @staticmethod
    def _parse_int(name: str, default: str) -> int:
        """Parse an integer environment variable."""
        raw = os.getenv(name, default)
        try:
            return int(raw)
        except ValueError as e:
            raise ValueError(f"Invalid {name} environment variable: {e}")

    @staticmethod
    def _parse_bool(name: str, default: str) -> bool:
        """Parse a boolean environment variable (1/true/yes/on)."""
        return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")

    # ========================================================================
    # Sanitizer
    # ========================================================================
    MAX_DEPTH: int = _parse_int.__func__("DUMPY_MAX_DEPTH", "1")
    TRUNCATION_CAP: int = _parse_int.__func__("DUMPY_TRUNCATION_CAP", "20")
    ACCESSOR_PATTERN: str = r"^(get|has|is)"
    IDENTITY_ACCESSORS: tuple[str, ...] = ("get_id", "getId")

    # ========================================================================
    # Encoder
    # ========================================================================
    INLINE: int = _parse_int.__func__("DUMPY_INLINE", "3")
    ENCODER_WIDTH: int = _parse_int.__func__("DUMPY_ENCODER_WIDTH", "4096")
    HTML_LABELS: bool = _parse_bool.__func__("DUMPY_HTML_LABELS", "true")

    @classmethod
    def validate(cls) -> bool:
        """
        Validate configuration consistency.

        Returns:
            True if validation passes

        Raises:
            ValueError: If validation fails
        """
        errors = []

        if cls.MAX_DEPTH < 0:
            errors.append(f"MAX_DEPTH must be >= 0, got {cls.MAX_DEPTH}")

        if cls.TRUNCATION_CAP <= 0:
            errors.append(f"TRUNCATION_CAP must be > 0, got {cls.TRUNCATION_CAP}")

        if cls.ENCODER_WIDTH <= 0:
            errors.append(f"ENCODER_WIDTH must be > 0, got {cls.ENCODER_WIDTH}")

        if errors:
            raise ValueError(f"Config validation failed: {'; '.join(errors)}")

        return True


def inline_threshold(depth: int) -> int:
    """Encoder inline level matching a depth budget, so dumps stay readable."""
    return depth * 2 + 1
