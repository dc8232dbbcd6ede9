from typing import Optional

import attrs


class ConfigException(ValueError):
    pass


def _positive(instance, attribute, value):
    if value <= 0:
        raise ValueError(f"{attribute.name} must be positive, got {value!r}")


@attrs.frozen(kw_only=True)
class OpenSearchGeoConfig:
    """
    Configuration for template resolution, extent handling and the OpenSearch client.
    """

    # identifier for this config
    id: Optional[str] = None

    # CRS of coalesced extents (authority axis order, so EPSG:4326 is lat/lon)
    canonical_crs: str = "EPSG:4326"
    # CRS of the {geo:box} parameter value (west,south,east,north)
    box_param_crs: str = "urn:ogc:def:crs:OGC:1.3:CRS84"

    http_timeout: float = attrs.field(default=30.0, validator=_positive)
    http_retries: int = attrs.field(default=3, validator=attrs.validators.ge(0))

    transformer_cache_size: int = attrs.field(default=64, validator=_positive)

    log_level: str = attrs.field(
        default="INFO",
        converter=str.upper,
        validator=attrs.validators.in_({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}),
    )
    log_json: bool = False
