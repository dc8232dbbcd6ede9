"""
CRS identifiers and coordinate transformation (backed by pyproj).

CRS references in catalogue documents come in several forms, e.g.:

- "urn:ogc:def:crs:EPSG::4326" (or with a version: "urn:ogc:def:crs:EPSG:6.6:4326")
- "http://www.opengis.net/def/crs/EPSG/0/4326"
- "http://www.opengis.net/gml/srs/epsg.xml#4326"
- "EPSG:4326"
- "urn:ogc:def:crs:OGC:1.3:CRS84" / "http://www.opengis.net/def/crs/OGC/1.3/CRS84"

All of them are normalized to a short "AUTHORITY:CODE" form.
"""
import functools
import logging
import re
import threading
from typing import Optional, Tuple

import pyproj
import pyproj.exceptions

from opensearchgeo.errors import UnsupportedCRS

_log = logging.getLogger(__name__)

EPSG_4326 = "EPSG:4326"
CRS84 = "OGC:CRS84"

_URN = re.compile(r"^urn:(?:x-)?ogc:def:crs:(?P<authority>[A-Za-z]+):(?P<version>[^:]*):(?P<code>[^:]+)$", re.I)
_OGC_URL = re.compile(r"^https?://www\.opengis\.net/def/crs/(?P<authority>[A-Za-z]+)/(?P<version>[^/]+)/(?P<code>[^/]+)$", re.I)
_GML_SRS_URL = re.compile(r"^https?://www\.opengis\.net/gml/srs/epsg\.xml#(?P<code>\d+)$", re.I)
_SHORT = re.compile(r"^(?P<authority>[A-Za-z]+):(?P<code>[A-Za-z0-9.]+)$")


def normalize_crs_identifier(crs: Optional[str]) -> str:
    """
    Normalize a CRS reference to "AUTHORITY:CODE" (e.g. "EPSG:4326" or "OGC:CRS84").

    :raises UnsupportedCRS: for missing or unrecognized references
    """
    if crs is None or not crs.strip():
        raise UnsupportedCRS(crs, info="no CRS reference given")
    value = crs.strip()
    for pattern in [_URN, _OGC_URL, _SHORT]:
        match = pattern.match(value)
        if match:
            authority, code = match.group("authority").upper(), match.group("code")
            if authority == "OGC":
                code = code.upper()
            return f"{authority}:{code}"
    match = _GML_SRS_URL.match(value)
    if match:
        return f"EPSG:{match.group('code')}"
    raise UnsupportedCRS(crs, info="unrecognized CRS reference")


@functools.lru_cache(maxsize=128)
def get_crs(crs: str) -> pyproj.CRS:
    """Get pyproj CRS object for a CRS reference (in any supported form)."""
    identifier = normalize_crs_identifier(crs)
    try:
        return pyproj.CRS.from_user_input(identifier)
    except pyproj.exceptions.CRSError as e:
        raise UnsupportedCRS(crs, info=str(e)) from e


def same_crs(crs1: str, crs2: str) -> bool:
    """Do both references denote the same CRS (including axis order)?"""
    if normalize_crs_identifier(crs1) == normalize_crs_identifier(crs2):
        return True
    return get_crs(crs1) == get_crs(crs2)


def axis_order(crs: str) -> Tuple[str, str]:
    """Get the directions of the first two axes, e.g. ("north", "east") for EPSG:4326."""
    axes = get_crs(crs).axis_info
    if len(axes) < 2:
        raise UnsupportedCRS(crs, info=f"expected at least 2 axes, got {len(axes)}")
    return axes[0].direction.lower(), axes[1].direction.lower()


def is_lat_lon(crs: str) -> bool:
    """Is the axis order of this (geographic) CRS latitude first?"""
    return axis_order(crs)[0] in {"north", "south"}


class TransformerCache:
    """
    Thread-safe cache of pyproj Transformers, keyed on (source, target) CRS identifiers.

    Transformers follow the authority-defined axis order of both CRSs (no `always_xy`).
    """

    def __init__(self, max_size: int = 64):
        self._max_size = max_size
        self._cache = {}
        self._lock = threading.Lock()

    def get(self, source: str, target: str) -> pyproj.Transformer:
        key = (normalize_crs_identifier(source), normalize_crs_identifier(target))
        with self._lock:
            if key not in self._cache:
                if len(self._cache) >= self._max_size:
                    # Drop oldest entry
                    self._cache.pop(next(iter(self._cache)))
                _log.debug(f"Creating transformer {key[0]} -> {key[1]}")
                self._cache[key] = pyproj.Transformer.from_crs(get_crs(source), get_crs(target))
            return self._cache[key]

    def clear(self):
        with self._lock:
            self._cache.clear()

    def __len__(self):
        return len(self._cache)


_transformers: Optional[TransformerCache] = None


def get_transformer(source: str, target: str) -> pyproj.Transformer:
    global _transformers
    if _transformers is None:
        from opensearchgeo.config import get_config

        _transformers = TransformerCache(max_size=get_config().transformer_cache_size)
    return _transformers.get(source, target)
