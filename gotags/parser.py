"""
Tree-sitter parser initialization and Go source parsing utilities.

This module provides functions to initialize the Go parser, parse source
bytes, and summarize the syntax and file structure errors of a parse.
"""

import logging
from typing import Optional

import tree_sitter_go as tsgo
from tree_sitter import Language, Node, Parser, Tree

from gotags.config import (
    COMMENT,
    PACKAGE_CLAUSE,
    PACKAGE_IDENTIFIER,
    TOP_LEVEL_NODE_TYPES,
)

# Configure logging
logger = logging.getLogger(__name__)

# Module-level language constant
GO_LANGUAGE = Language(tsgo.language())


def create_parser() -> Parser:
    """Create and configure a tree-sitter parser for Go.

    Returns:
        A Parser instance configured with the Go language.

    Example:
        >>> parser = create_parser()
        >>> tree = parser.parse(b"package main")
    """
    parser = Parser(GO_LANGUAGE)
    logger.debug("Created tree-sitter Go parser")
    return parser


def parse_bytes(source: bytes) -> Tree:
    """Parse raw bytes of Go source code.

    Args:
        source: UTF-8 encoded bytes of Go source code.

    Returns:
        A Tree object representing the parsed syntax tree.  Syntax errors do
        not raise; they show up as ERROR or missing nodes in the tree.

    Raises:
        TypeError: If source is not bytes.

    Example:
        >>> tree = parse_bytes(b"package main\\nfunc f() {}\\n")
        >>> tree.root_node.type
        'source_file'
    """
    if not isinstance(source, bytes):
        raise TypeError(f"Source must be bytes, got {type(source).__name__}")

    parser = create_parser()
    tree = parser.parse(source)

    logger.debug("Parsed %d bytes of Go code", len(source))
    return tree


def _iter_error_nodes(root: Node):
    """Yield ERROR and missing nodes in source order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            yield node
            continue
        if not node.has_error:
            continue
        stack.extend(reversed(node.children))


def count_error_nodes(tree: Tree) -> int:
    """Count ERROR and missing nodes in a parsed tree.

    Args:
        tree: The parsed syntax tree.

    Returns:
        Number of error nodes; 0 for a clean parse.
    """
    return sum(1 for _ in _iter_error_nodes(tree.root_node))


def describe_first_error(tree: Tree) -> Optional[str]:
    """Describe the syntax errors of a tree for diagnostics.

    Returns:
        A message naming the error count and the 1-based line:column of the
        first error, or None if the tree is clean.
    """
    errors = list(_iter_error_nodes(tree.root_node))
    if not errors:
        return None
    first = errors[0]
    kind = f"missing {first.type}" if first.is_missing else "syntax error"
    return (
        f"{len(errors)} syntax error(s), first is {kind} at "
        f"{first.start_point.row + 1}:{first.start_point.column + 1}"
    )


def describe_structure_error(tree: Tree) -> Optional[str]:
    """Describe why an error-free tree is still not a valid Go file.

    The grammar is more lenient than the compiler at file scope: it accepts
    a file without a package clause and bare statements such as ``x := 1``
    between declarations.  A Go file must open with exactly one named
    package clause (comments aside) and hold only declarations after it.

    Returns:
        A message naming the first offending node, or None if the file
        scope is well formed.
    """
    seen_package = False
    for child in tree.root_node.named_children:
        if child.type == COMMENT:
            continue
        line = child.start_point.row + 1
        if child.type == PACKAGE_CLAUSE:
            if seen_package:
                return f"second package clause at line {line}"
            if not any(part.type == PACKAGE_IDENTIFIER for part in child.named_children):
                return f"package clause without a name at line {line}"
            seen_package = True
            continue
        if not seen_package:
            return f"{child.type} before the package clause at line {line}"
        if child.type not in TOP_LEVEL_NODE_TYPES:
            return f"unexpected {child.type} at file scope, line {line}"
    if not seen_package:
        return "no package clause"
    return None
