from opensearchgeo.config.config import ConfigException, OpenSearchGeoConfig
from opensearchgeo.config.load import flush_config, get_config
