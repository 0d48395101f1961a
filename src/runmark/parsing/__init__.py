"""Parsing pipeline for runmark.

tokenize -> identify_pairs -> validate_pairs -> span generation. The span
generator is split into mixins combined by runmark.parser.Parser:

- FormatHandlingMixin: format stack, style folding, flushing
- LinkParsingMixin: link windows and recursive link text
- PlaceholderMixin: placeholder substitution
"""

from runmark.parsing.formats import FormatHandlingMixin, FormatStackEntry
from runmark.parsing.links import LinkParsingMixin, normalize_url
from runmark.parsing.nesting import validate_pairs
from runmark.parsing.pairing import identify_pairs
from runmark.parsing.placeholders import Placeholders, PlaceholderMixin, lookup_placeholder
from runmark.parsing.tokenizer import has_formatting, has_formatting_markers, tokenize

__all__ = [
    "FormatHandlingMixin",
    "FormatStackEntry",
    "LinkParsingMixin",
    "PlaceholderMixin",
    "Placeholders",
    "has_formatting",
    "has_formatting_markers",
    "identify_pairs",
    "lookup_placeholder",
    "normalize_url",
    "tokenize",
    "validate_pairs",
]
