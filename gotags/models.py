"""
Data models for extracted Go tags.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union

from tree_sitter import Tree

from gotags.config import TREE_LINE_BASE


@dataclass(frozen=True)
class Tag:
    """A single jump target in a tag section.

    Attributes:
        pattern: Source text from the start of the defining line up to and
            including the defining identifier.
        line: Line number of the defining identifier.
        name: The defining identifier for explicit tags, None for implicit ones.
        offset: 0-based byte offset of the start of the defining line, if known.
    """

    pattern: bytes
    line: int
    name: Optional[bytes] = None
    offset: Optional[int] = None

    def __post_init__(self) -> None:
        if self.name is not None and not self.pattern.endswith(self.name):
            raise ValueError(
                f"Tag pattern {self.pattern!r} does not end with name {self.name!r}"
            )

    @property
    def is_explicit(self) -> bool:
        return self.name is not None


@dataclass
class Section:
    """The tags of one input file, in source order."""

    filename: str
    tags: List[Tag] = field(default_factory=list)


class SourceView:
    """Read-only view of one file's bytes.

    Built when a file's extraction starts and dropped when it ends, so line
    positions are never shared between files.
    """

    def __init__(self, data: bytes):
        if not isinstance(data, bytes):
            raise TypeError(f"Source must be bytes, got {type(data).__name__}")
        self.data = data

    def line_start(self, offset: int) -> int:
        """Return the byte offset of the start of the line containing ``offset``."""
        return self.data.rfind(b"\n", 0, offset) + 1

    def tag_for_span(self, start: int, end: int, row: int) -> Tag:
        """Build an explicit tag for the identifier at ``data[start:end]``.

        Args:
            start: Byte offset of the identifier.
            end: Byte offset just past the identifier.
            row: 0-based row of the identifier.

        Returns:
            A Tag whose pattern is the left context from the line start.
        """
        line_start = self.line_start(start)
        return Tag(
            pattern=self.data[line_start:end],
            name=self.data[start:end],
            line=row + TREE_LINE_BASE,
            offset=line_start,
        )


@dataclass(frozen=True)
class Parsed:
    """The file parsed cleanly; tags come from the syntax tree."""

    source: SourceView
    tree: Tree


@dataclass(frozen=True)
class FallbackNeeded:
    """The file has syntax errors; tags come from line patterns."""

    source: SourceView
    reason: str


@dataclass(frozen=True)
class Unreadable:
    """The file could not be read; its section stays empty."""

    reason: str


@dataclass(frozen=True)
class NotNative:
    """The file belongs to the delegate tool."""


ExtractionOutcome = Union[Parsed, FallbackNeeded, Unreadable, NotNative]
