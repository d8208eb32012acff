"""
Line-pattern tag extraction, used when a file does not parse cleanly.

Only declarations whose keyword starts in column 0 are found, which follows
standard Go formatting for globals.  Names inside grouped declaration lists
and second names on a line are missed; that is what the syntax tree
extraction is for.
"""

import logging
from typing import Iterator, List

from gotags.config import (
    FALLBACK_DECLARATION_RE,
    FALLBACK_EXPLICIT_NAMES,
    FALLBACK_LINE_BASE,
)
from gotags.models import SourceView, Tag

logger = logging.getLogger(__name__)


def iter_fallback_tags(
    source: SourceView,
    explicit_names: bool = FALLBACK_EXPLICIT_NAMES,
) -> Iterator[Tag]:
    """Yield at most one tag per line that starts with a declaration keyword.

    Fallback tags never carry a byte offset.

    Args:
        source: View of the file's bytes.
        explicit_names: Whether tags carry the matched name separately.

    Yields:
        Tags in line order.
    """
    text = source.data.decode("utf-8", errors="surrogateescape")
    for lineno, line in enumerate(text.split("\n")):
        match = FALLBACK_DECLARATION_RE.match(line.rstrip("\r"))
        if match is None:
            continue
        pattern = match.group("pattern").encode("utf-8", errors="surrogateescape")
        name = match.group("name").encode("utf-8", errors="surrogateescape")
        yield Tag(
            pattern=pattern,
            name=name if explicit_names else None,
            line=lineno + FALLBACK_LINE_BASE,
        )


def extract_fallback_tags(source: SourceView) -> List[Tag]:
    """Extract all fallback tags of a file as a list."""
    tags = list(iter_fallback_tags(source))
    logger.debug(f"Extracted {len(tags)} tags by line patterns")
    return tags
