from opensearchgeo.spatial.boxes import (
    BoxKind,
    GenericBoundingBox,
    GeoRSSBox,
    GMLEnvelope,
    WGS84BoundingBox,
    find_bounding_boxes,
    normalize_bounding_box,
    read_bounding_box,
)
from opensearchgeo.spatial.envelope import Envelope, envelope_to_box_param
from opensearchgeo.spatial.extent import (
    EnvelopeMerger,
    check_intersections,
    coalesce_envelopes,
    intersects,
)
