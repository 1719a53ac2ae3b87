"""
XML Utility Functions
=====================

Helpers for getting documents in and out of lxml trees. Every function
here works with ``etree._ElementTree`` as the in-memory document type; a
bare ``_Element`` is accepted wherever a document is expected and wrapped
into a tree.
"""

from pathlib import Path
from typing import Any, Optional, Union
import logging

from lxml import etree

logger = logging.getLogger(__name__)

Document = etree._ElementTree
DocumentSource = Union[Path, str, bytes]


def _xml_parser() -> 'etree.XMLParser':
    # External DTDs are never fetched while parsing; grammar loading is the
    # validator's job.
    return etree.XMLParser(load_dtd=False, resolve_entities=False, no_network=True)


def as_document(node: Any) -> Document:
    """
    Normalize an lxml element or tree into a document tree.

    Raises:
        TypeError: If ``node`` is not an lxml element or tree
    """
    if isinstance(node, etree._ElementTree):
        return node
    if isinstance(node, etree._Element):
        return node.getroottree()
    raise TypeError(f"Expected lxml ElementTree or Element, got {type(node).__name__}")


def parse_document(source: DocumentSource, base_url: Optional[str] = None) -> Document:
    """
    Parse an XML document.

    Args:
        source: Path to an XML file, or the XML content as str/bytes
        base_url: Base URL used to resolve relative references (system ids)

    Returns:
        Parsed document tree
    """
    parser = _xml_parser()

    if isinstance(source, Path):
        logger.debug(f"Parsing XML file: {source}")
        return etree.parse(str(source), parser)

    if isinstance(source, str):
        source = source.encode('utf-8')

    root = etree.fromstring(source, parser, base_url=base_url)
    return root.getroottree()


def parse_html(source: DocumentSource) -> Document:
    """Parse an HTML page (lenient) into a document tree."""
    parser = etree.HTMLParser()

    if isinstance(source, Path):
        return etree.parse(str(source), parser)

    if isinstance(source, str):
        source = source.encode('utf-8')

    return etree.fromstring(source, parser).getroottree()


def serialize(doc: Any, pretty_print: bool = True) -> bytes:
    """Serialize a document, keeping its doctype declaration."""
    return etree.tostring(
        as_document(doc),
        encoding="UTF-8",
        xml_declaration=True,
        pretty_print=pretty_print,
    )


def reformat(doc: Any, base_url: Optional[str] = None) -> Document:
    """
    Return a fresh, pretty-printed copy of a document.

    The copy is serialized as XML regardless of any xsl:output settings on
    an XSLT result. Whitespace-only text is dropped before re-serializing
    so indentation is applied consistently.
    """
    parser = etree.XMLParser(
        load_dtd=False,
        resolve_entities=False,
        no_network=True,
        remove_blank_text=True,
    )
    data = etree.tostring(as_document(doc), encoding="UTF-8", xml_declaration=True)
    root = etree.fromstring(data, parser, base_url=base_url)
    pretty = etree.tostring(root.getroottree(), encoding="UTF-8",
                            xml_declaration=True, pretty_print=True)
    return etree.fromstring(pretty, _xml_parser(), base_url=base_url).getroottree()


def doctype_public_id(doc: Any) -> Optional[str]:
    """Return the public identifier of the document's doctype, if any."""
    return as_document(doc).docinfo.public_id or None


def doctype_system_url(doc: Any) -> Optional[str]:
    """Return the system identifier of the document's doctype, if any."""
    return as_document(doc).docinfo.system_url or None
