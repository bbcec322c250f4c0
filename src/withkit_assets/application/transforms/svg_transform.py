from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from io import BytesIO
from typing import ClassVar, final
from typing_extensions import override

from withkit_assets.domain.errors import TransformError
from withkit_assets.domain.protocols.transform_protocol import TransformProtocol

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"

# Authoring-tool data with no effect on rendering.
EDITOR_NAMESPACES = frozenset(
    {
        "http://www.inkscape.org/namespaces/inkscape",
        "http://sodipodi.sourceforge.net/DTD/sodipodi-0.dtd",
        "http://www.bohemiancoding.com/sketch/ns",
        "http://ns.adobe.com/AdobeIllustrator/10.0/",
        "http://ns.adobe.com/Graphs/1.0/",
        "http://ns.adobe.com/Variables/1.0/",
        "http://ns.adobe.com/SaveForWeb/1.0/",
        "http://ns.adobe.com/Extensibility/1.0/",
        "http://ns.adobe.com/Flows/1.0/",
        "http://ns.adobe.com/ImageReplacement/1.0/",
        "http://ns.adobe.com/GenericCustomNamespace/1.0/",
        "http://ns.adobe.com/XPath/1.0/",
        "http://creativecommons.org/ns#",
        "http://purl.org/dc/elements/1.1/",
        "http://www.w3.org/1999/02/22-rdf-syntax-ns#",
    }
)
_GENERATED_PREFIX = re.compile(r"ns\d+$")

ET.register_namespace("xlink", XLINK_NS)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1] if tag.startswith("{") else tag


def _namespace(name: str) -> str | None:
    return name[1:].split("}", 1)[0] if name.startswith("{") else None


def _register_prefixes(content: bytes) -> None:
    """Keep the document's own prefixes so ElementTree does not emit ``ns0:``."""
    for _event, (prefix, uri) in ET.iterparse(BytesIO(content), events=("start-ns",)):
        if not prefix or uri in (SVG_NS, XLINK_NS) or uri in EDITOR_NAMESPACES:
            continue
        if _GENERATED_PREFIX.match(prefix):
            continue
        ET.register_namespace(prefix, uri)


@final
class SvgMinifyTransform(TransformProtocol):
    """Minify an SVG document.

    Drops root width/height (deriving a viewBox from them when missing),
    keeps viewBox, removes <title>, <desc>, comments, editor metadata,
    useless <defs> content and the root xmlns declaration.

    Inside <defs> only elements carrying an id and <style> blocks survive.
    An id-less wrapper is replaced by those descendants so gradients nested
    in a <g> stay referenceable.
    """

    _METADATA_TAGS: ClassVar[frozenset[str]] = frozenset({"title", "desc", "metadata"})
    _LENGTH: ClassVar[re.Pattern[str]] = re.compile(r"^\s*([0-9]*\.?[0-9]+)\s*(px)?\s*$")

    @classmethod
    def _numeric_length(cls, value: str | None) -> str | None:
        if value is None:
            return None
        match = cls._LENGTH.match(value)
        if match is None:
            return None
        return match.group(1)

    @classmethod
    def _remove_dimensions(cls, root: ET.Element) -> None:
        width = root.attrib.pop("width", None)
        height = root.attrib.pop("height", None)
        if "viewBox" in root.attrib:
            return
        numeric_width = cls._numeric_length(width)
        numeric_height = cls._numeric_length(height)
        if numeric_width is not None and numeric_height is not None:
            root.set("viewBox", f"0 0 {numeric_width} {numeric_height}")

    @staticmethod
    def _remove_editor_attributes(root: ET.Element) -> None:
        for element in root.iter():
            for name in [key for key in element.attrib if _namespace(key) in EDITOR_NAMESPACES]:
                del element.attrib[name]

    @classmethod
    def _useful_definitions(cls, element: ET.Element) -> list[ET.Element]:
        if not isinstance(element.tag, str) or _namespace(element.tag) in EDITOR_NAMESPACES:
            return []
        if "id" in element.attrib or _local_name(element.tag) == "style":
            return [element]
        found: list[ET.Element] = []
        for child in element:
            found.extend(cls._useful_definitions(child))
        return found

    @classmethod
    def _reduce_defs(cls, defs: ET.Element) -> None:
        kept = [found for child in defs for found in cls._useful_definitions(child)]
        for child in list(defs):
            defs.remove(child)
        defs.extend(kept)

    @classmethod
    def _strip(cls, parent: ET.Element) -> None:
        for child in list(parent):
            if not isinstance(child.tag, str) or _namespace(child.tag) in EDITOR_NAMESPACES:
                parent.remove(child)
                continue
            name = _local_name(child.tag)
            if name in cls._METADATA_TAGS:
                parent.remove(child)
                continue
            if name == "defs":
                cls._reduce_defs(child)
            cls._strip(child)
            if name == "defs" and len(child) == 0:
                parent.remove(child)

    @staticmethod
    def _unqualify(root: ET.Element) -> None:
        # Dropping the SVG namespace from tags makes ElementTree omit xmlns.
        for element in root.iter():
            if isinstance(element.tag, str) and element.tag.startswith(f"{{{SVG_NS}}}"):
                element.tag = element.tag[len(SVG_NS) + 2 :]

    @staticmethod
    def _collapse_whitespace(root: ET.Element) -> None:
        for element in root.iter():
            if element.text is not None and not element.text.strip():
                element.text = None
            if element.tail is not None and not element.tail.strip():
                element.tail = None

    @override
    def apply(self, content: bytes) -> bytes:
        try:
            root = ET.fromstring(content)
            _register_prefixes(content)
        except ET.ParseError as exc:
            raise TransformError(f"SVG parse failed: {exc}") from exc
        if _local_name(root.tag) != "svg":
            raise TransformError(f"Root element is <{_local_name(root.tag)}>, expected <svg>")

        self._remove_dimensions(root)
        self._remove_editor_attributes(root)
        self._strip(root)
        self._unqualify(root)
        self._collapse_whitespace(root)
        return ET.tostring(root, encoding="unicode").encode("utf-8")
