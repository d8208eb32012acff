"""
High-level orchestrator for tag generation.

This module classifies each input file, resolves how its tags are produced
(syntax tree, line-pattern fallback, or the delegate program) and streams
the resulting sections to the output.
"""

import logging
from typing import BinaryIO, Dict, Iterable, Iterator, List, Optional

from gotags.delegate import delegate_tags
from gotags.encoder import write_section
from gotags.fallback import iter_fallback_tags
from gotags.models import (
    ExtractionOutcome,
    FallbackNeeded,
    NotNative,
    Parsed,
    SourceView,
    Tag,
    Unreadable,
)
from gotags.parser import describe_first_error, describe_structure_error, parse_bytes
from gotags.traversal import iter_tags_from_tree
from shared.settings import DEFAULT_MEMBERS, GO_EXTENSIONS, TagSettings
from shared.structured_logging import phase_scope, source_scope

logger = logging.getLogger(__name__)


class TagRunStats:
    """Statistics for a tag generation run."""

    def __init__(self):
        self.files_parsed = 0
        self.files_fallback = 0
        self.files_skipped = 0
        self.files_delegated = 0
        self.files_dropped = 0
        self.tags_written = 0

    def to_dict(self) -> Dict[str, int]:
        """Convert stats to dictionary."""
        return {
            "files_parsed": self.files_parsed,
            "files_fallback": self.files_fallback,
            "files_skipped": self.files_skipped,
            "files_delegated": self.files_delegated,
            "files_dropped": self.files_dropped,
            "tags_written": self.tags_written,
        }

    def __str__(self) -> str:
        """String representation of stats."""
        return (
            f"TagRunStats(parsed={self.files_parsed}, "
            f"fallback={self.files_fallback}, skipped={self.files_skipped}, "
            f"delegated={self.files_delegated}, dropped={self.files_dropped}, "
            f"tags={self.tags_written})"
        )


def is_native(filename: str, extensions: Iterable[str] = GO_EXTENSIONS) -> bool:
    """Check whether a file is handled by the Go extractors, by suffix."""
    return any(filename.endswith(ext) for ext in extensions)


def resolve_outcome(
    filename: str,
    extensions: Iterable[str] = GO_EXTENSIONS,
) -> ExtractionOutcome:
    """Decide how the tags of one file are produced.

    Args:
        filename: Input file name.
        extensions: Native file suffixes.

    Returns:
        NotNative for foreign files, Unreadable if the file cannot be read,
        Parsed for a clean parse, FallbackNeeded when the tree has errors or
        its file scope is not that of a Go file.
    """
    if not is_native(filename, extensions):
        return NotNative()

    try:
        with open(filename, "rb") as f:
            data = f.read()
    except OSError as e:
        return Unreadable(reason=str(e))

    source = SourceView(data)
    tree = parse_bytes(data)
    if tree.root_node.has_error:
        reason = describe_first_error(tree) or "syntax errors"
        return FallbackNeeded(source=source, reason=reason)
    reason = describe_structure_error(tree)
    if reason is not None:
        return FallbackNeeded(source=source, reason=reason)
    return Parsed(source=source, tree=tree)


def iter_outcome_tags(
    outcome: ExtractionOutcome,
    members: bool = DEFAULT_MEMBERS,
) -> Iterator[Tag]:
    """Yield the tags of a resolved native outcome; other outcomes yield none."""
    if isinstance(outcome, Parsed):
        yield from iter_tags_from_tree(outcome.tree, outcome.source, members=members)
    elif isinstance(outcome, FallbackNeeded):
        yield from iter_fallback_tags(outcome.source)


def generate_tags(
    inputs: Iterable[str],
    sink: BinaryIO,
    settings: Optional[TagSettings] = None,
    quiet: bool = False,
) -> TagRunStats:
    """Write a tag file for the given inputs.

    Native files are written in input order as they are met; foreign files
    are collected and handed to the delegate in one batch at the end.

    Args:
        inputs: Input file names, in order.
        sink: Binary output; sections are streamed to it.
        settings: Run settings; defaults when None.
        quiet: Demote per-file warnings to debug messages.

    Returns:
        TagRunStats for the run.

    Raises:
        DelegateError: If the delegate fails.  Sections already written stay
            in the sink.
    """
    settings = settings or TagSettings()
    report = logger.debug if quiet else logger.warning
    stats = TagRunStats()
    foreign: List[str] = []

    for filename in inputs:
        outcome = resolve_outcome(filename, settings.native_extensions)
        if isinstance(outcome, NotNative):
            foreign.append(filename)
            continue

        with source_scope(filename):
            if isinstance(outcome, Unreadable):
                report("Skipping %s: %s", filename, outcome.reason)
                stats.files_skipped += 1
                phase = "native"
            elif isinstance(outcome, FallbackNeeded):
                report("Reverting to line-pattern tagging for %s: %s", filename, outcome.reason)
                stats.files_fallback += 1
                phase = "fallback"
            else:
                stats.files_parsed += 1
                phase = "native"

            with phase_scope(phase):
                count = write_section(
                    sink, filename, iter_outcome_tags(outcome, members=settings.members)
                )
            stats.tags_written += count
            logger.debug("Wrote %d tags for %s", count, filename)

    if foreign:
        if settings.delegation_enabled:
            with phase_scope("delegate"):
                delegate_tags(
                    settings.delegate_program,
                    foreign,
                    sink,
                    members=settings.members,
                    timeout_s=settings.delegate_timeout,
                )
            stats.files_delegated += len(foreign)
        else:
            report(
                "Delegation disabled; dropping %d non-Go file(s), first is %s",
                len(foreign),
                foreign[0],
            )
            stats.files_dropped += len(foreign)

    logger.info(f"Tag generation complete: {stats}")
    return stats
