"""
Bounding box representations found in catalogue responses
and their normalization to `Envelope` objects.

Supported representations:

- ows:BoundingBox (OWS 2.0 and 1.1): CRS from the "crs" attribute, axis order as defined by that CRS
- ows:WGS84BoundingBox: always CRS84, longitude first
- georss:box (GeoRSS Simple): always EPSG:4326, latitude first
- gml:Envelope (GML 3.2 and legacy GML 3.1): CRS from the "srsName" attribute
"""
import enum
import logging
import math
from typing import Callable, ClassVar, Dict, List, Optional, Tuple, Union

import attrs
from lxml import etree

from opensearchgeo import namespaces
from opensearchgeo.errors import InvalidCoordinate, MalformedEnvelope
from opensearchgeo.spatial.crs import EPSG_4326
from opensearchgeo.spatial.envelope import Envelope
from opensearchgeo.util.xml import XmlSource, find_nodes, text_content

_log = logging.getLogger(__name__)

WGS84_CRS = "urn:ogc:def:crs:OGC:1.3:CRS84"
GEORSS_CRS = EPSG_4326


class BoxKind(enum.Enum):
    GENERIC = "ows:BoundingBox"
    WGS84 = "ows:WGS84BoundingBox"
    GEORSS = "georss:box"
    GML = "gml:Envelope"


@attrs.frozen
class GenericBoundingBox:
    kind: ClassVar[BoxKind] = BoxKind.GENERIC

    lower_corner: str
    upper_corner: str
    crs: Optional[str] = None


@attrs.frozen
class WGS84BoundingBox:
    kind: ClassVar[BoxKind] = BoxKind.WGS84

    lower_corner: str
    upper_corner: str


@attrs.frozen
class GeoRSSBox:
    kind: ClassVar[BoxKind] = BoxKind.GEORSS

    # "lat lon lat lon" (lower and upper corner)
    text: str


@attrs.frozen
class GMLEnvelope:
    kind: ClassVar[BoxKind] = BoxKind.GML

    # coordinate tuples as text (lowerCorner/upperCorner or pos elements)
    corners: Tuple[str, ...] = attrs.field(converter=tuple)
    srs_name: Optional[str] = None


BoundingBoxSource = Union[GenericBoundingBox, WGS84BoundingBox, GeoRSSBox, GMLEnvelope]


def _parse_numbers(text: str, source: str) -> List[float]:
    values = []
    for token in text.split():
        try:
            value = float(token)
        except ValueError:
            raise InvalidCoordinate(token, source=source) from None
        if not math.isfinite(value):
            raise InvalidCoordinate(token, source=source)
        values.append(value)
    return values


def _parse_position(text: str, source: str) -> Tuple[float, float]:
    values = _parse_numbers(text, source=source)
    if len(values) != 2:
        raise MalformedEnvelope(f"Expected 2 coordinates in {source}, but got {len(values)}: {text!r}")
    return values[0], values[1]


def _from_generic(box: GenericBoundingBox) -> Envelope:
    return Envelope(
        lower=_parse_position(box.lower_corner, source="ows:LowerCorner"),
        upper=_parse_position(box.upper_corner, source="ows:UpperCorner"),
        crs=box.crs,
    )


def _from_wgs84(box: WGS84BoundingBox) -> Envelope:
    return Envelope(
        lower=_parse_position(box.lower_corner, source="ows:LowerCorner"),
        upper=_parse_position(box.upper_corner, source="ows:UpperCorner"),
        crs=WGS84_CRS,
    )


def _from_georss(box: GeoRSSBox) -> Envelope:
    values = _parse_numbers(box.text, source="georss:box")
    if len(values) != 4:
        raise MalformedEnvelope(
            f"Expected two coordinate tuples (lower and upper corners) in georss:box, but got {box.text!r}"
        )
    return Envelope.from_bounds(values, crs=GEORSS_CRS)


def _from_gml(envelope: GMLEnvelope) -> Envelope:
    if len(envelope.corners) != 2:
        raise MalformedEnvelope(
            f"Expected two coordinate tuples (lower and upper corners) in gml:Envelope, but got {len(envelope.corners)}"
        )
    lower, upper = envelope.corners
    return Envelope(
        lower=_parse_position(lower, source="gml:lowerCorner"),
        upper=_parse_position(upper, source="gml:upperCorner"),
        crs=envelope.srs_name,
    )


_NORMALIZERS: Dict[BoxKind, Callable[[BoundingBoxSource], Envelope]] = {
    BoxKind.GENERIC: _from_generic,
    BoxKind.WGS84: _from_wgs84,
    BoxKind.GEORSS: _from_georss,
    BoxKind.GML: _from_gml,
}


def normalize_bounding_box(source: BoundingBoxSource) -> Envelope:
    """
    Convert a bounding box representation to an Envelope.

    :raises InvalidCoordinate: for non-numeric coordinate values
    :raises MalformedEnvelope: for wrong number of corners/coordinates, or lower > upper
    :raises UnsupportedCRS: for missing or unknown CRS references
    """
    return _NORMALIZERS[source.kind](source)


def _child_text(element: etree._Element, namespace: str, local_name: str) -> str:
    child = element.find(f"{{{namespace}}}{local_name}")
    if child is None:
        raise MalformedEnvelope(f"Missing {local_name} in {etree.QName(element).localname}")
    return text_content(child)


def read_bounding_box(element: etree._Element) -> BoundingBoxSource:
    """
    Build bounding box representation from an XML element
    (ows:BoundingBox, ows:WGS84BoundingBox, georss:box or gml:Envelope).
    """
    qname = etree.QName(element)
    ns, local_name = qname.namespace, qname.localname
    if ns in {namespaces.OWS, namespaces.OWS11} and local_name == "BoundingBox":
        return GenericBoundingBox(
            lower_corner=_child_text(element, ns, "LowerCorner"),
            upper_corner=_child_text(element, ns, "UpperCorner"),
            crs=element.get("crs"),
        )
    if ns in {namespaces.OWS, namespaces.OWS11} and local_name == "WGS84BoundingBox":
        return WGS84BoundingBox(
            lower_corner=_child_text(element, ns, "LowerCorner"),
            upper_corner=_child_text(element, ns, "UpperCorner"),
        )
    if ns in {namespaces.GEORSS, namespaces.GEORSS_LEGACY} and local_name == "box":
        return GeoRSSBox(text=text_content(element))
    if ns in {namespaces.GML, namespaces.GML31} and local_name == "Envelope":
        lower = element.find(f"{{{ns}}}lowerCorner")
        upper = element.find(f"{{{ns}}}upperCorner")
        if lower is not None or upper is not None:
            corners = [text_content(c) for c in [lower, upper] if c is not None]
        else:
            corners = [text_content(p) for p in element.iterfind(f"{{{ns}}}pos")]
        return GMLEnvelope(corners=corners, srs_name=element.get("srsName"))
    raise ValueError(f"Not a supported bounding box element: {element.tag}")


def create_gml32_envelope(element: etree._Element) -> Optional[etree._Element]:
    """
    Create a GML 3.2 gml:Envelope element from a legacy GML 3.1 one.

    :return: new element, or None if given element is not a GML 3.1 envelope.
    """
    if etree.QName(element).namespace != namespaces.GML31:
        return None
    envelope = etree.Element(f"{{{namespaces.GML}}}Envelope", nsmap={"gml": namespaces.GML})
    envelope.set("srsName", element.get("srsName", ""))
    for corner in ["lowerCorner", "upperCorner"]:
        etree.SubElement(envelope, f"{{{namespaces.GML}}}{corner}").text = _child_text(
            element, namespaces.GML31, corner
        )
    return envelope


# Bounding boxes in search responses (Atom, RSS or csw:GetRecordsResponse)
BOUNDING_BOX_XPATH = " | ".join(
    [
        "//ows:BoundingBox",
        "//ows:WGS84BoundingBox",
        "//ows11:BoundingBox",
        "//ows11:WGS84BoundingBox",
        "//georss:box",
        "//gml:Envelope",
        "//gml31:Envelope",
    ]
)


def find_bounding_boxes(document: XmlSource, xpath: str = BOUNDING_BOX_XPATH) -> List[BoundingBoxSource]:
    """Collect all bounding box representations (document order)."""
    boxes = [read_bounding_box(e) for e in find_nodes(document, xpath)]
    _log.debug(f"Found {len(boxes)} bounding boxes")
    return boxes
