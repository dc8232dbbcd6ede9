from pathlib import Path
from typing import List, Mapping, Optional, Union

from lxml import etree

from opensearchgeo import namespaces

XmlSource = Union[str, bytes, Path, etree._Element, etree._ElementTree]


def parse_xml(source: XmlSource) -> etree._Element:
    """
    Get document element from a file path, XML string/bytes
    or an already parsed lxml document/element.
    """
    if isinstance(source, etree._ElementTree):
        return source.getroot()
    if isinstance(source, etree._Element):
        return source
    if isinstance(source, bytes):
        return etree.fromstring(source)
    if isinstance(source, str) and source.lstrip().startswith("<"):
        return etree.fromstring(source.encode("utf-8"))
    return etree.parse(str(source)).getroot()


def find_nodes(
    source: XmlSource, xpath: str, bindings: Optional[Mapping[str, str]] = None
) -> List[Union[etree._Element, str]]:
    """Evaluate XPath 1.0 expression (standard prefixes are bound unless overridden)."""
    nsmap = dict(namespaces.DEFAULT_BINDINGS)
    nsmap.update(bindings or {})
    result = parse_xml(source).xpath(xpath, namespaces=nsmap)
    if not isinstance(result, list):
        return [result]
    return result


def text_content(element: etree._Element) -> str:
    return "".join(element.itertext()).strip()
