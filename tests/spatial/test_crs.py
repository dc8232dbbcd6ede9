import pytest

from opensearchgeo.errors import UnsupportedCRS
from opensearchgeo.spatial.crs import (
    TransformerCache,
    axis_order,
    get_crs,
    is_lat_lon,
    normalize_crs_identifier,
    same_crs,
)


@pytest.mark.parametrize(
    ["crs", "expected"],
    [
        ("EPSG:4326", "EPSG:4326"),
        ("epsg:4326", "EPSG:4326"),
        ("urn:ogc:def:crs:EPSG::4326", "EPSG:4326"),
        ("urn:ogc:def:crs:EPSG:6.6:4326", "EPSG:4326"),
        ("urn:x-ogc:def:crs:EPSG::32610", "EPSG:32610"),
        ("http://www.opengis.net/def/crs/EPSG/0/4326", "EPSG:4326"),
        ("https://www.opengis.net/def/crs/EPSG/0/3857", "EPSG:3857"),
        ("http://www.opengis.net/gml/srs/epsg.xml#4326", "EPSG:4326"),
        ("urn:ogc:def:crs:OGC:1.3:CRS84", "OGC:CRS84"),
        ("http://www.opengis.net/def/crs/OGC/1.3/CRS84", "OGC:CRS84"),
        ("OGC:CRS84", "OGC:CRS84"),
        ("  EPSG:32631 ", "EPSG:32631"),
    ],
)
def test_normalize_crs_identifier(crs, expected):
    assert normalize_crs_identifier(crs) == expected


@pytest.mark.parametrize("crs", [None, "", "WGS 84", "http://example.org/crs/4326", "urn:foo:bar"])
def test_normalize_crs_identifier_unsupported(crs):
    with pytest.raises(UnsupportedCRS):
        normalize_crs_identifier(crs)


def test_get_crs_unknown_code():
    with pytest.raises(UnsupportedCRS, match="EPSG:999999"):
        get_crs("EPSG:999999")


def test_axis_order():
    assert axis_order("EPSG:4326") == ("north", "east")
    assert axis_order("urn:ogc:def:crs:OGC:1.3:CRS84") == ("east", "north")
    assert is_lat_lon("urn:ogc:def:crs:EPSG::4326") is True
    assert is_lat_lon("OGC:CRS84") is False


def test_same_crs():
    assert same_crs("urn:ogc:def:crs:EPSG::4326", "http://www.opengis.net/def/crs/EPSG/0/4326")
    assert not same_crs("EPSG:4326", "OGC:CRS84")
    assert not same_crs("EPSG:4326", "EPSG:32631")


class TestTransformerCache:
    def test_reuse(self):
        cache = TransformerCache(max_size=4)
        t1 = cache.get("EPSG:4326", "EPSG:32631")
        t2 = cache.get("urn:ogc:def:crs:EPSG::4326", "http://www.opengis.net/def/crs/EPSG/0/32631")
        assert t1 is t2
        assert len(cache) == 1

    def test_max_size(self):
        cache = TransformerCache(max_size=2)
        first = cache.get("EPSG:4326", "EPSG:32631")
        cache.get("EPSG:4326", "EPSG:32632")
        cache.get("EPSG:4326", "EPSG:32633")
        assert len(cache) == 2
        assert cache.get("EPSG:4326", "EPSG:32631") is not first

    def test_clear(self):
        cache = TransformerCache()
        cache.get("EPSG:4326", "OGC:CRS84")
        cache.clear()
        assert len(cache) == 0
