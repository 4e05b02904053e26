"""
Presentation helpers wrapping dumps in preformatted HTML blocks.

Output is always Markup. Plain strings are HTML-escaped before wrapping, so
`pre` is safe on untrusted text; this differs from raw-output dump filters
that mark their input safe unchanged. Pass Markup to embed text as-is.
"""

from pprint import pformat
from typing import Any

from markupsafe import Markup

PRE_TEMPLATE = Markup("<pre>{}</pre>")


def wrap(text: Any) -> Markup:
    """
    Wrap text in a <pre> block.

    Plain strings are HTML-escaped; Markup (such as encoder output in HTML
    mode) is embedded as-is.
    """
    return PRE_TEMPLATE.format(text)


def pre_dump(value: Any) -> Markup:
    """Wrap an unbounded, untyped structural print of a value."""
    return wrap(pformat(value))
