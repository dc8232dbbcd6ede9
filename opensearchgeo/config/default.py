"""
Default OpenSearchGeoConfig
"""
from opensearchgeo.config import OpenSearchGeoConfig

config = OpenSearchGeoConfig(
    id="default",
)
