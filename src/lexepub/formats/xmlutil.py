# ABOUTME: Small lxml helpers shared by the container and package parsers.
# ABOUTME: Builds hardened parsers and matches elements by local name regardless of namespace.

from collections.abc import Iterator

from lxml import etree


def parse_xml(data: bytes) -> etree._Element:
    """Parse an XML document from raw bytes and return its root element.

    External entities are never resolved and no network access is made.

    Raises:
        etree.XMLSyntaxError: If the document is not well-formed.
    """
    parser = etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        remove_comments=True,
        remove_pis=True,
    )
    return etree.fromstring(data, parser)


def local_name(element: etree._Element) -> str:
    """Tag name without its namespace."""
    return etree.QName(element).localname


def children_named(element: etree._Element, name: str) -> Iterator[etree._Element]:
    """Yield the direct child elements whose local name is ``name``."""
    for child in element:
        if isinstance(child.tag, str) and local_name(child) == name:
            yield child


def first_child_named(element: etree._Element, name: str) -> etree._Element | None:
    """Return the first direct child with the given local name, or None."""
    return next(children_named(element, name), None)


def text_of(element: etree._Element) -> str:
    """All text inside an element, with surrounding whitespace removed."""
    return "".join(element.itertext()).strip()
