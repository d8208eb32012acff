"""
Configuration constants for Go tag extraction.

Defines the tag file control bytes, the tree-sitter node type strings the
extractor walks, and the per-mode emission constants.
"""

import re
from typing import Set

# Tag file control bytes
FORM_FEED: bytes = b"\x0c"
LINE_FEED: bytes = b"\x0a"
DEL: bytes = b"\x7f"
SOH: bytes = b"\x01"

# Section size field; a real byte count is allowed but never computed
SECTION_SIZE: bytes = b"0"

PACKAGE_CLAUSE: str = "package_clause"
PACKAGE_IDENTIFIER: str = "package_identifier"

FUNCTION_DECLARATION: str = "function_declaration"
METHOD_DECLARATION: str = "method_declaration"

TYPE_DECLARATION: str = "type_declaration"
# type_alias only exists in newer grammars; older ones use type_spec for both
TYPE_SPEC_TYPES: Set[str] = {
    "type_spec",
    "type_alias",
}

VAR_DECLARATION: str = "var_declaration"
CONST_DECLARATION: str = "const_declaration"
VALUE_SPEC_TYPES: Set[str] = {
    "var_spec",
    "const_spec",
}
# Parenthesized spec lists, present as a node in some grammar versions
SPEC_LIST_TYPES: Set[str] = {
    "var_spec_list",
    "const_spec_list",
}

# Identifier node types that carry a declared name
NAME_NODE_TYPES: Set[str] = {
    "identifier",
    "type_identifier",
    "field_identifier",
    "package_identifier",
}

COMMENT: str = "comment"

INTERFACE_TYPE: str = "interface_type"
# method_spec is the pre-generics spelling of method_elem
INTERFACE_METHOD_TYPES: Set[str] = {
    "method_elem",
    "method_spec",
}

# Node types go/parser accepts at file scope; anything else forces the fallback
TOP_LEVEL_NODE_TYPES: Set[str] = {
    "package_clause",
    "import_declaration",
    "function_declaration",
    "method_declaration",
    "type_declaration",
    "var_declaration",
    "const_declaration",
    "comment",
}

STRUCT_TYPE: str = "struct_type"
FIELD_DECLARATION_LIST: str = "field_declaration_list"
FIELD_DECLARATION: str = "field_declaration"

# Type wrappers looked through when searching for an anonymous struct
STRUCT_WRAPPER_TYPES: Set[str] = {
    "pointer_type",
    "slice_type",
    "array_type",
    "parenthesized_type",
    "map_type",
    "channel_type",
}

# Nesting bound for anonymous struct fields
MAX_STRUCT_DEPTH: int = 64

# Tree mode: explicit names, 1-based lines, line-start offsets
TREE_LINE_BASE: int = 1

# Fallback mode: no offsets
FALLBACK_LINE_BASE: int = 1
FALLBACK_EXPLICIT_NAMES: bool = True

# Column-0 declaration keyword, optional method receiver, then the name.
# Like etags it is confused by declarations inside multi-line strings.
FALLBACK_DECLARATION_RE = re.compile(
    r"^(?P<pattern>(?:package|type|var|const|func(?:\s*\([^)\n]*\))?)\s+(?P<name>\w+))"
)

# Delegate invocation
DELEGATE_NO_MEMBERS_FLAG: str = "--no-members"
DELEGATE_FAILURE_STATUS: int = 1

# Output file used when none is given
DEFAULT_OUTPUT: str = "TAGS"
