"""
XML Processing Utilities
========================

Parsing, serialization and doctype helpers shared by the engine and the
validator.
"""

from jats_core.xml.utils import (
    Document,
    as_document,
    parse_document,
    parse_html,
    serialize,
    reformat,
    doctype_public_id,
    doctype_system_url,
)

__all__ = [
    "Document",
    "as_document",
    "parse_document",
    "parse_html",
    "serialize",
    "reformat",
    "doctype_public_id",
    "doctype_system_url",
]
