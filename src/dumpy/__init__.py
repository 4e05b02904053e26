"""dumpy - depth-limited debug dumps for templates."""

__version__ = "0.1.0"

from .filters import Dumpy
from .sanitizer import sanitize

__all__ = ["Dumpy", "sanitize", "__version__"]
