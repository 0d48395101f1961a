"""Character sets for O(1) classification.

All sets are frozensets: immutable, thread-safe, and allocated once at
import time.

Usage:
    from runmark.parsing.charsets import TRIGGER_CHARS

    if char in TRIGGER_CHARS:
        ...
"""

from string import ascii_letters, digits

# Any of these may start markup. Text without them takes the fast path.
TRIGGER_CHARS: frozenset[str] = frozenset("*_~`+=^\\[{")

# Characters a backslash can escape
ESCAPABLE_CHARS: frozenset[str] = frozenset("*_~`+=^\\[](){}")

# Run-length markers: repeated characters select the marker kind
EMPHASIS_CHARS: frozenset[str] = frozenset("*_")

PLACEHOLDER_KEY_CHARS: frozenset[str] = frozenset(ascii_letters + digits + "_")

# Styling markers only; link and placeholder syntax excluded
STYLE_MARKER_CHARS: frozenset[str] = frozenset("*_~`+=^\\")
