import logging
from typing import Iterable, List, Optional, Tuple

from opensearchgeo.config import get_config
from opensearchgeo.errors import NoExtentData
from opensearchgeo.spatial.boxes import BoundingBoxSource, normalize_bounding_box
from opensearchgeo.spatial.crs import same_crs
from opensearchgeo.spatial.envelope import Envelope

_log = logging.getLogger(__name__)


class EnvelopeMerger:
    """
    Helper to build union of multiple envelopes, in a single target CRS
    (the configured canonical CRS by default).
    """

    def __init__(self, *, crs: Optional[str] = None):
        self._crs = crs or get_config().canonical_crs
        self._envelope: Optional[Envelope] = None

    def add(self, envelope: Envelope) -> "EnvelopeMerger":
        envelope = envelope.to_crs(self._crs)
        if self._envelope is None:
            self._envelope = envelope
        else:
            self._envelope = self._envelope.union(envelope)
        return self

    def get(self) -> Optional[Envelope]:
        """Get the merged envelope (or None if nothing was added)."""
        return self._envelope


def coalesce_envelopes(envelopes: Iterable[Envelope], crs: Optional[str] = None) -> Envelope:
    """
    Get the minimum envelope covering all given envelopes,
    in given CRS or the configured canonical CRS.

    :raises NoExtentData: if there are no envelopes
    :raises TransformFailure: if any envelope can not be transformed (no partial result)
    """
    merger = EnvelopeMerger(crs=crs)
    for envelope in envelopes:
        merger.add(envelope)
    extent = merger.get()
    if extent is None:
        raise NoExtentData()
    return extent


def coalesce_bounding_boxes(boxes: Iterable[BoundingBoxSource], crs: Optional[str] = None) -> Envelope:
    return coalesce_envelopes((normalize_bounding_box(b) for b in boxes), crs=crs)


def intersects(reference: Envelope, candidate: Envelope) -> bool:
    """
    Does candidate envelope intersect the reference envelope?
    The candidate is transformed to the CRS of the reference first, if necessary.
    Boundaries are included: envelopes that only touch intersect.
    """
    if not same_crs(reference.crs, candidate.crs):
        candidate = candidate.to_crs(reference.crs)
    return reference.as_geometry().intersects(candidate.as_geometry())


def check_intersections(reference: Envelope, candidates: Iterable[Envelope]) -> List[Tuple[Envelope, bool]]:
    """Intersection test result for each candidate."""
    results = []
    for candidate in candidates:
        result = intersects(reference, candidate)
        if not result:
            _log.info(f"{candidate} does not intersect {reference}")
        results.append((candidate, result))
    return results
