import contextlib

import attrs

import opensearchgeo.config.load


@contextlib.contextmanager
def config_overrides(**kwargs):
    """
    *Only to be used in unit tests*

    Override config fields in the config returned by `get_config()` at run time

    Can be used as context manager

        >>> with config_overrides(canonical_crs="OGC:CRS84"):
        ...     ...

    or as test function decorator

        >>> @config_overrides(canonical_crs="OGC:CRS84")
        ... def test_stuff():
    """
    original = opensearchgeo.config.load.get_config()
    opensearchgeo.config.load._config = attrs.evolve(original, **kwargs)
    try:
        yield opensearchgeo.config.load._config
    finally:
        opensearchgeo.config.load._config = original
