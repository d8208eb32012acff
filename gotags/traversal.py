"""
Syntax tree traversal and tag extraction logic.

This module walks the file-scope declarations of a parsed Go file and yields
one tag per declared name: the package, functions and methods, types,
interface methods, struct fields, variables and constants.
"""

import logging
from typing import Iterator, List, Optional, Tuple

from tree_sitter import Node, Tree

from gotags.config import (
    CONST_DECLARATION,
    FIELD_DECLARATION,
    FIELD_DECLARATION_LIST,
    FUNCTION_DECLARATION,
    INTERFACE_METHOD_TYPES,
    INTERFACE_TYPE,
    MAX_STRUCT_DEPTH,
    METHOD_DECLARATION,
    NAME_NODE_TYPES,
    PACKAGE_CLAUSE,
    PACKAGE_IDENTIFIER,
    SPEC_LIST_TYPES,
    STRUCT_TYPE,
    STRUCT_WRAPPER_TYPES,
    TYPE_DECLARATION,
    TYPE_SPEC_TYPES,
    VALUE_SPEC_TYPES,
    VAR_DECLARATION,
)
from gotags.models import SourceView, Tag
from shared.settings import DEFAULT_MEMBERS

logger = logging.getLogger(__name__)


def make_tag(source: SourceView, name_node: Node) -> Tag:
    """Build the tag for a defining identifier node.

    The pattern runs from the start of the identifier's line to its end, so
    several names on one line share line and offset but not pattern.

    Args:
        source: View of the file's bytes.
        name_node: Identifier node of the declared name.

    Returns:
        An explicit Tag with line number and line-start offset.
    """
    return source.tag_for_span(
        name_node.start_byte,
        name_node.end_byte,
        name_node.start_point.row,
    )


def field_names(node: Node) -> List[Node]:
    """Return the identifier nodes under a node's ``name`` field.

    Multi-name specs such as ``var a, b int`` put every identifier (and the
    separating commas) under the same field; only identifiers are kept.
    """
    return [
        child
        for child in node.children_by_field_name("name")
        if child.type in NAME_NODE_TYPES
    ]


def find_package_name(root: Node) -> Optional[Node]:
    """Find the package identifier of a source file."""
    for child in root.named_children:
        if child.type != PACKAGE_CLAUSE:
            continue
        for part in child.named_children:
            if part.type == PACKAGE_IDENTIFIER:
                return part
        logger.debug(f"Package clause at line {child.start_point.row + 1} has no name")
        return None
    return None


def iter_type_specs(declaration: Node) -> Iterator[Node]:
    """Yield the type specs of a single or grouped type declaration."""
    for child in declaration.named_children:
        if child.type in TYPE_SPEC_TYPES:
            yield child


def iter_value_specs(declaration: Node) -> Iterator[Node]:
    """Yield the var/const specs of a declaration, through any spec list."""
    for child in declaration.named_children:
        if child.type in VALUE_SPEC_TYPES:
            yield child
        elif child.type in SPEC_LIST_TYPES:
            yield from iter_value_specs(child)


def unwrap_struct_type(type_node: Optional[Node]) -> Optional[Node]:
    """Return the struct type a declared type denotes, looking through wrappers.

    ``struct {...}``, ``*struct {...}``, ``[]struct {...}``,
    ``map[K]struct {...}`` and ``chan struct {...}`` all declare fields whose
    names are tagged; named and generic types do not.  Map keys are not
    looked at.
    """
    node = type_node
    while node is not None:
        if node.type == STRUCT_TYPE:
            return node
        if node.type not in STRUCT_WRAPPER_TYPES:
            return None
        inner = node.child_by_field_name("element")
        if inner is None:
            inner = node.child_by_field_name("value")
        if inner is None:
            named = node.named_children
            inner = named[-1] if named else None
        node = inner
    return None


def _field_declarations(struct_node: Node) -> List[Node]:
    declarations: List[Node] = []
    for child in struct_node.named_children:
        if child.type == FIELD_DECLARATION_LIST:
            declarations.extend(
                grandchild
                for grandchild in child.named_children
                if grandchild.type == FIELD_DECLARATION
            )
    return declarations


def iter_struct_fields(struct_node: Node) -> Iterator[Node]:
    """Yield field name nodes of a struct type in source order.

    Anonymous nested struct types are descended into with an explicit stack;
    nesting deeper than MAX_STRUCT_DEPTH is logged and skipped.  Embedded
    fields declare no name and yield nothing.

    Args:
        struct_node: A struct_type node.

    Yields:
        field_identifier nodes.
    """
    stack: List[Tuple[Node, int]] = [
        (decl, 1) for decl in reversed(_field_declarations(struct_node))
    ]
    while stack:
        declaration, depth = stack.pop()
        yield from field_names(declaration)

        nested = unwrap_struct_type(declaration.child_by_field_name("type"))
        if nested is None:
            continue
        if depth >= MAX_STRUCT_DEPTH:
            logger.warning(
                "Struct nesting deeper than %d at line %d; skipping nested fields",
                MAX_STRUCT_DEPTH,
                nested.start_point.row + 1,
            )
            continue
        stack.extend(
            (decl, depth + 1) for decl in reversed(_field_declarations(nested))
        )


def iter_interface_methods(interface_node: Node) -> Iterator[Node]:
    """Yield the method name nodes declared directly in an interface type."""
    for child in interface_node.named_children:
        if child.type not in INTERFACE_METHOD_TYPES:
            continue
        name = child.child_by_field_name("name")
        if name is not None:
            yield name


def iter_member_names(type_node: Optional[Node], members: bool) -> Iterator[Node]:
    """Yield member names of a declared type: interface methods, struct fields."""
    if type_node is None:
        return
    if type_node.type == INTERFACE_TYPE:
        yield from iter_interface_methods(type_node)
        return
    if not members:
        return
    struct_node = unwrap_struct_type(type_node)
    if struct_node is not None:
        yield from iter_struct_fields(struct_node)


def iter_declaration_names(declaration: Node, members: bool) -> Iterator[Node]:
    """Yield every defining identifier of one top-level declaration.

    Args:
        declaration: A direct child of the source_file node.
        members: Whether struct field names are included.

    Yields:
        Identifier nodes in source order.
    """
    if declaration.type in (FUNCTION_DECLARATION, METHOD_DECLARATION):
        name = declaration.child_by_field_name("name")
        if name is not None:
            yield name
        return

    if declaration.type == TYPE_DECLARATION:
        for spec in iter_type_specs(declaration):
            name = spec.child_by_field_name("name")
            if name is not None:
                yield name
            yield from iter_member_names(spec.child_by_field_name("type"), members)
        return

    if declaration.type in (VAR_DECLARATION, CONST_DECLARATION):
        for spec in iter_value_specs(declaration):
            yield from field_names(spec)
            if not members or declaration.type != VAR_DECLARATION:
                continue
            struct_node = unwrap_struct_type(spec.child_by_field_name("type"))
            if struct_node is not None:
                yield from iter_struct_fields(struct_node)


def iter_tags_from_tree(
    tree: Tree,
    source: SourceView,
    members: bool = DEFAULT_MEMBERS,
) -> Iterator[Tag]:
    """Yield tags for all file-scope declarations of a parsed Go file.

    This is the main entry point for syntax tree extraction.  Only direct
    children of the source_file node are visited, so declarations local to
    function bodies are never tagged.

    Args:
        tree: The parsed syntax tree.
        source: View of the bytes the tree was parsed from.
        members: Whether struct field names are tagged.

    Yields:
        Tags in the order their identifiers occur in the source.
    """
    root = tree.root_node
    package_name = find_package_name(root)
    if package_name is not None:
        yield make_tag(source, package_name)

    for declaration in root.named_children:
        for name_node in iter_declaration_names(declaration, members):
            yield make_tag(source, name_node)


def extract_tags_from_tree(
    tree: Tree,
    source: SourceView,
    members: bool = DEFAULT_MEMBERS,
) -> List[Tag]:
    """Extract all tags of a parsed Go file as a list.

    See iter_tags_from_tree.
    """
    tags = list(iter_tags_from_tree(tree, source, members=members))
    logger.debug(f"Extracted {len(tags)} tags from syntax tree")
    return tags
