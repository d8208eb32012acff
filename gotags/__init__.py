"""
Go tag generation engine.

Tree-sitter-based Go declaration extractor that writes Emacs-style TAGS
files, with a line-pattern fallback for files that do not parse and an
external etags-compatible delegate for everything that is not Go.
"""

__version__ = "0.3.0"

from gotags.models import (
    ExtractionOutcome,
    FallbackNeeded,
    NotNative,
    Parsed,
    Section,
    SourceView,
    Tag,
    Unreadable,
)
from gotags.parser import create_parser, parse_bytes, count_error_nodes, describe_first_error
from gotags.traversal import iter_tags_from_tree, extract_tags_from_tree
from gotags.fallback import iter_fallback_tags, extract_fallback_tags
from gotags.encoder import encode_section, encode_tag, write_section
from gotags.delegate import DelegateError, DelegateResult, delegate_tags, run_delegate
from gotags.dispatcher import (
    TagRunStats,
    generate_tags,
    is_native,
    iter_outcome_tags,
    resolve_outcome,
)
from gotags.inputs import iter_input_names

__all__ = [
    "__version__",
    # Data models
    "Tag",
    "Section",
    "SourceView",
    "ExtractionOutcome",
    "Parsed",
    "FallbackNeeded",
    "Unreadable",
    "NotNative",
    # Low-level parsing
    "create_parser",
    "parse_bytes",
    "count_error_nodes",
    "describe_first_error",
    # Extractors
    "iter_tags_from_tree",
    "extract_tags_from_tree",
    "iter_fallback_tags",
    "extract_fallback_tags",
    # Output
    "encode_section",
    "encode_tag",
    "write_section",
    # Delegation
    "DelegateError",
    "DelegateResult",
    "delegate_tags",
    "run_delegate",
    # High-level orchestration
    "TagRunStats",
    "generate_tags",
    "is_native",
    "iter_outcome_tags",
    "resolve_outcome",
    "iter_input_names",
]
