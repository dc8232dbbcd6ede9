"""
XML namespace names used in OpenSearch descriptions and catalogue responses.
"""

# OpenSearch 1.1 description (also the default namespace of template parameters)
OSD11 = "http://a9.com/-/spec/opensearch/1.1/"

# OpenSearch Geo extension (OGC 10-032r8)
OS_GEO = "http://a9.com/-/opensearch/extensions/geo/1.0/"

# OpenSearch Time extension (OGC 10-032r8)
OS_TIME = "http://a9.com/-/opensearch/extensions/time/1.0/"

GEORSS = "http://www.georss.org/georss/10"
# Older GeoRSS namespace, still used by some feeds
GEORSS_LEGACY = "http://www.georss.org/georss"

# OWS 2.0 (OGC 06-121r9) and 1.1 (OGC 06-121r3)
OWS = "http://www.opengis.net/ows/2.0"
OWS11 = "http://www.opengis.net/ows/1.1"

# GML 3.2 (ISO 19136) and legacy GML 3.1
GML = "http://www.opengis.net/gml/3.2"
GML31 = "http://www.opengis.net/gml"

CSW = "http://www.opengis.net/cat/csw/3.0"
FES = "http://www.opengis.net/fes/2.0"
ATOM = "http://www.w3.org/2005/Atom"
XLINK = "http://www.w3.org/1999/xlink"

# Dublin Core terms and legacy element set
DCMI = "http://purl.org/dc/terms/"
DCMES = "http://purl.org/dc/elements/1.1/"

# Prefix bindings for XPath evaluation over catalogue documents.
DEFAULT_BINDINGS = {
    "os": OSD11,
    "geo": OS_GEO,
    "time": OS_TIME,
    "georss": GEORSS,
    "ows": OWS,
    "ows11": OWS11,
    "gml": GML,
    "gml31": GML31,
    "csw": CSW,
    "fes": FES,
    "atom": ATOM,
    "dc": DCMES,
    "dct": DCMI,
}
