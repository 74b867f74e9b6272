# ABOUTME: OPF package document parsing into manifest, spine, and title/author.
# ABOUTME: Uses lxml with namespace awareness; structural problems raise MalformedPackageError.

import logging
import posixpath
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from urllib.parse import unquote

from ebooklib.epub import NAMESPACES
from lxml import etree

from lexepub.errors import MalformedPackageError, MissingEntryError
from lexepub.formats.container import Archive
from lexepub.formats.xmlutil import (
    children_named,
    first_child_named,
    local_name,
    parse_xml,
    text_of,
)
from lexepub.metadata.types import EpubInfo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ManifestEntry:
    """One ``<item>`` of the manifest.

    ``href`` is the attribute as written; ``path`` is the archive entry it
    resolves to.
    """

    id: str
    href: str
    media_type: str
    path: str


@dataclass(frozen=True)
class SpineItem:
    """One ``<itemref>`` of the spine, in reading order."""

    idref: str
    linear: bool = True


@dataclass(frozen=True)
class PackageDocument:
    """A parsed package document.

    Every itemref is part of ``spine``, including those marked
    ``linear="no"``: counts cover all textual content of the book, not only
    the primary reading path.
    """

    path: str
    manifest: Mapping[str, ManifestEntry]
    spine: tuple[SpineItem, ...]
    info: EpubInfo

    def entry_for(self, item: SpineItem) -> ManifestEntry:
        """Manifest entry referenced by a spine item."""
        return self.manifest[item.idref]


def resolve_href(package_path: str, href: str) -> str:
    """Resolve a manifest href against the package document's directory.

    The fragment is dropped, percent-escapes are decoded and ``..`` segments
    are collapsed.
    """
    target = unquote(href.split("#", 1)[0])
    base = posixpath.dirname(package_path)
    return posixpath.normpath(posixpath.join(base, target))


def _first_dc_text(root: etree._Element, name: str) -> str | None:
    """Text of the first non-blank Dublin Core element in document order, or None.

    Packages that forget the DC namespace are still read: failing a DC
    match, any element inside ``<metadata>`` with the same local name is
    used.
    """
    for element in root.iter(f"{{{NAMESPACES['DC']}}}{name}"):
        text = text_of(element)
        if text:
            return text

    metadata = first_child_named(root, "metadata")
    if metadata is None:
        return None
    for element in metadata.iter():
        if isinstance(element.tag, str) and local_name(element) == name:
            text = text_of(element)
            if text:
                return text
    return None


def _parse_manifest(manifest: etree._Element, package_path: str) -> dict[str, ManifestEntry]:
    entries: dict[str, ManifestEntry] = {}
    for item in children_named(manifest, "item"):
        item_id = item.get("id")
        href = item.get("href")
        if not item_id or not href:
            raise MalformedPackageError(
                f"Manifest item without id or href in {package_path} (line {item.sourceline})"
            )
        if item_id in entries:
            logger.warning("Duplicate manifest id %r in %s, keeping the first", item_id, package_path)
            continue
        entries[item_id] = ManifestEntry(
            id=item_id,
            href=href,
            media_type=(item.get("media-type") or "").strip(),
            path=resolve_href(package_path, href),
        )
    return entries


def _parse_spine(
    spine: etree._Element, manifest: Mapping[str, ManifestEntry], package_path: str
) -> tuple[SpineItem, ...]:
    items: list[SpineItem] = []
    for itemref in children_named(spine, "itemref"):
        idref = itemref.get("idref")
        if not idref:
            raise MalformedPackageError(
                f"Spine itemref without idref in {package_path} (line {itemref.sourceline})"
            )
        if idref not in manifest:
            raise MalformedPackageError(f"Spine references unknown manifest id {idref!r}")
        linear = (itemref.get("linear") or "yes").strip().lower() != "no"
        items.append(SpineItem(idref=idref, linear=linear))
    return tuple(items)


def parse_package_bytes(data: bytes, package_path: str) -> PackageDocument:
    """Parse OPF bytes already read from the archive.

    Raises:
        MalformedPackageError: If the XML is not well-formed or lacks the
            manifest/spine structure.
    """
    try:
        root = parse_xml(data)
    except etree.XMLSyntaxError as exc:
        raise MalformedPackageError(f"Package {package_path} is not well-formed: {exc}") from exc

    manifest_el = first_child_named(root, "manifest")
    if manifest_el is None:
        raise MalformedPackageError(f"Package {package_path} has no manifest")
    spine_el = first_child_named(root, "spine")
    if spine_el is None:
        raise MalformedPackageError(f"Package {package_path} has no spine")

    manifest = _parse_manifest(manifest_el, package_path)
    spine = _parse_spine(spine_el, manifest, package_path)

    info = EpubInfo(
        title=_first_dc_text(root, "title"),
        author=_first_dc_text(root, "creator"),
    )

    logger.debug(
        "Parsed %s: %d manifest items, %d spine items", package_path, len(manifest), len(spine)
    )
    return PackageDocument(
        path=package_path,
        manifest=MappingProxyType(manifest),
        spine=spine,
        info=info,
    )


def parse_package(archive: Archive, package_path: str) -> PackageDocument:
    """Read and parse the package document named by container.xml.

    Args:
        archive: The open EPUB archive.
        package_path: Archive path of the OPF file.

    Returns:
        The parsed PackageDocument.

    Raises:
        MalformedPackageError: If the package is missing or structurally invalid.
        ArchiveCorruptError: If the package entry cannot be decompressed.
    """
    try:
        data = archive.read(package_path)
    except MissingEntryError as exc:
        raise MalformedPackageError(f"Package document {package_path} missing from archive") from exc
    return parse_package_bytes(data, package_path)
