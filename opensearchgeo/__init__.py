from opensearchgeo._version import __version__


def get_version() -> str:
    try:
        import importlib.metadata

        return importlib.metadata.version("opensearch-geo-ets")
    except Exception:
        # Fallback
        return __version__
