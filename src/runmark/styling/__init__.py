"""Style resolution for runmark.

Exports the StyleResolver protocol, the built-in DefaultStyleResolver and
the pieces it is assembled from.
"""

from runmark.styling.merge import apply_link_style_to_span, merge_text_styles
from runmark.styling.options import StyleOptions, effective_style, effective_value
from runmark.styling.protocol import StyleResolver
from runmark.styling.resolver import DefaultStyleResolver
from runmark.styling.theme import Brightness, Theme

__all__ = [
    "Brightness",
    "DefaultStyleResolver",
    "StyleOptions",
    "StyleResolver",
    "Theme",
    "apply_link_style_to_span",
    "effective_style",
    "effective_value",
    "merge_text_styles",
]
