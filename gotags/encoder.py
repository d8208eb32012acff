"""
Tag file encoder.

The full tag file syntax is described by etc/ETAGS.EBNF in the Emacs
sources.  The output here uses no include sections or file properties, and
the simplified grammar is:

    tagfile    ::= section*
    section    ::= FF LF filename "," "0" tagdef* LF
    tagdef     ::= LF pattern DEL [ name SOH ] line "," [ offset ]

with FF=0x0C, LF=0x0A, DEL=0x7F and SOH=0x01.  A pattern is the literal
left context of the defining name from the start of its line, so "func main"
for the main function, or "\tv4, v5" for the second name of a list entry.
"""

import os
from typing import BinaryIO, Iterable

from gotags.config import DEL, FORM_FEED, LINE_FEED, SECTION_SIZE, SOH
from gotags.models import Section, Tag

SECTION_FOOTER: bytes = LINE_FEED


def encode_section_header(filename: str) -> bytes:
    """Encode the form feed header that opens a file's section."""
    return FORM_FEED + LINE_FEED + os.fsencode(filename) + b"," + SECTION_SIZE


def encode_tag(tag: Tag) -> bytes:
    """Encode one tag definition, including its leading line feed."""
    parts = [LINE_FEED, tag.pattern, DEL]
    if tag.name is not None:
        parts += [tag.name, SOH]
    parts += [str(tag.line).encode("ascii"), b","]
    if tag.offset is not None:
        parts.append(str(tag.offset).encode("ascii"))
    return b"".join(parts)


def write_section(sink: BinaryIO, filename: str, tags: Iterable[Tag]) -> int:
    """Stream one section to a sink.

    The header is written before the first tag is pulled, so a section is
    framed even when ``tags`` is empty.

    Args:
        sink: Binary output.
        filename: Input name, written verbatim.
        tags: Tags in source order.

    Returns:
        Number of tags written.
    """
    sink.write(encode_section_header(filename))
    count = 0
    for tag in tags:
        sink.write(encode_tag(tag))
        count += 1
    sink.write(SECTION_FOOTER)
    return count


def encode_section(section: Section) -> bytes:
    """Encode a complete section to bytes."""
    return (
        encode_section_header(section.filename)
        + b"".join(encode_tag(tag) for tag in section.tags)
        + SECTION_FOOTER
    )
