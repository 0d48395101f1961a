"""Plain-text extraction from run lists.

Useful for accessibility labels, search indexing and tests. Placeholder
content is opaque and contributes nothing.
"""

from __future__ import annotations

from collections.abc import Iterable

from runmark.runs import EmbeddedRun, Link, Run, ScriptSpan, TextRun
from runmark.stringbuilder import StringBuilder


def extract_text(runs: Iterable[Run]) -> str:
    """Concatenate the visible text of runs.

    Recurses into links and script spans.

    Example:
        >>> extract_text(parse("Hello **bold** [link](x.com)"))
        'Hello bold link'

    """
    sb = StringBuilder()
    _extract(runs, sb)
    return sb.build()


def _extract(runs: Iterable[Run], sb: StringBuilder) -> None:
    for run in runs:
        match run:
            case TextRun():
                sb.append(run.text)
            case EmbeddedRun(content=Link() as link):
                if link.text is not None:
                    sb.append(link.text)
                else:
                    _extract(link.children, sb)
            case EmbeddedRun(content=ScriptSpan() as span):
                sb.append(span.text)
