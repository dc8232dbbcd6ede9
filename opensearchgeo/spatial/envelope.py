import math
from typing import Optional, Tuple

import attrs
import pyproj.exceptions
import shapely.geometry
from shapely.geometry.base import BaseGeometry

from opensearchgeo.config import get_config
from opensearchgeo.errors import MalformedEnvelope, TransformFailure
from opensearchgeo.spatial.crs import get_crs, get_transformer, normalize_crs_identifier, same_crs

Coordinate = Tuple[float, float]


def _as_coordinate(value) -> Coordinate:
    x, y = value
    return float(x), float(y)


@attrs.frozen
class Envelope:
    """
    Axis-aligned 2D bounding box in a given CRS.

    Coordinates follow the axis order defined by the CRS authority,
    e.g. (lat, lon) for EPSG:4326 and (lon, lat) for CRS84.
    """

    lower: Coordinate = attrs.field(converter=_as_coordinate)
    upper: Coordinate = attrs.field(converter=_as_coordinate)
    crs: str = attrs.field(converter=normalize_crs_identifier)

    def __attrs_post_init__(self):
        if not all(math.isfinite(v) for v in self.lower + self.upper):
            raise MalformedEnvelope(f"Non-finite envelope coordinates: {self.lower} {self.upper}")
        if self.lower[0] > self.upper[0] or self.lower[1] > self.upper[1]:
            raise MalformedEnvelope(f"Lower corner {self.lower} exceeds upper corner {self.upper} ({self.crs})")

    @classmethod
    def from_bounds(cls, bounds: Tuple[float, float, float, float], crs: str) -> "Envelope":
        """Build from (min axis 1, min axis 2, max axis 1, max axis 2)."""
        a1, b1, a2, b2 = bounds
        return cls(lower=(a1, b1), upper=(a2, b2), crs=crs)

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        return self.lower + self.upper

    @property
    def is_degenerate(self) -> bool:
        """Zero width or height."""
        return self.lower[0] == self.upper[0] or self.lower[1] == self.upper[1]

    def as_geometry(self) -> BaseGeometry:
        """
        Shapely geometry in (axis 1, axis 2) space:
        a point or line for degenerate envelopes, a polygon otherwise.
        """
        (a1, b1), (a2, b2) = self.lower, self.upper
        if a1 == a2 and b1 == b2:
            return shapely.geometry.Point(a1, b1)
        if self.is_degenerate:
            return shapely.geometry.LineString([(a1, b1), (a2, b2)])
        return shapely.geometry.box(a1, b1, a2, b2)

    def to_crs(self, crs: str, densify_pts: int = 21) -> "Envelope":
        """
        Transform to another CRS: the result is the bounding envelope
        of the (densified) boundary in the target CRS.

        :raises TransformFailure:
        """
        if same_crs(self.crs, crs):
            return Envelope(lower=self.lower, upper=self.upper, crs=crs)
        transformer = get_transformer(self.crs, crs)
        try:
            bounds = transformer.transform_bounds(*self.bounds, densify_pts=densify_pts, errcheck=True)
        except pyproj.exceptions.ProjError as e:
            raise TransformFailure(self.crs, crs, info=str(e)) from e
        if not all(math.isfinite(v) for v in bounds):
            raise TransformFailure(self.crs, crs, info=f"non-finite result {bounds}")
        a1, b1, a2, b2 = bounds
        if a1 > a2 or b1 > b2:
            # Split envelopes are not supported: a result crossing the antimeridian is a failure
            reason = "crosses the antimeridian" if get_crs(crs).is_geographic else "is inverted"
            raise TransformFailure(self.crs, crs, info=f"result {reason}: {bounds}")
        return Envelope.from_bounds(bounds, crs=crs)

    def union(self, other: "Envelope") -> "Envelope":
        """Smallest envelope containing both (other is transformed to this CRS if necessary)."""
        other = other.to_crs(self.crs)
        return Envelope(
            lower=(min(self.lower[0], other.lower[0]), min(self.lower[1], other.lower[1])),
            upper=(max(self.upper[0], other.upper[0]), max(self.upper[1], other.upper[1])),
            crs=self.crs,
        )

    def __str__(self):
        return f"Envelope({self.lower} {self.upper}, {self.crs})"


def envelope_to_box_param(envelope: Envelope, crs: Optional[str] = None) -> str:
    """
    Render envelope as OpenSearch `{geo:box}` value: the envelope bounds in given CRS
    or the configured `box_param_crs` (CRS84 by default, giving "west,south,east,north").
    """
    bounds = envelope.to_crs(crs or get_config().box_param_crs).bounds
    return ",".join(str(round(v, 6)) for v in bounds)
