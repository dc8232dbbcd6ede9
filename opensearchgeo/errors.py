from typing import Optional


class OpenSearchGeoException(Exception):
    """Base exception for template resolution and extent handling failures."""

    code = "OpenSearchGeoError"
    message = "Failed to process OpenSearch or spatial data."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)

    def __str__(self):
        return f"[{self.code}] {self.args[0]}"


class UnresolvedPrefix(OpenSearchGeoException):
    code = "UnresolvedPrefix"

    def __init__(self, prefix: str, token: Optional[str] = None):
        super().__init__(f"Namespace prefix {prefix!r} is not bound (in parameter {token or prefix!r}).")
        self.prefix = prefix
        self.token = token


class UndeclaredParameter(OpenSearchGeoException):
    """URL template string and its declared parameter list have diverged."""

    code = "UndeclaredParameter"

    def __init__(self, name, template: str):
        super().__init__(f"No parameter descriptor for {name} in URL template {template!r}.")
        self.name = name
        self.template = template


class MalformedRequestURI(OpenSearchGeoException):
    code = "MalformedRequestURI"

    def __init__(self, uri: str, reason: str = "n/a"):
        super().__init__(f"Request URI is not a valid URI: {uri!r} ({reason}).")
        self.uri = uri
        self.reason = reason


class MalformedEnvelope(OpenSearchGeoException):
    code = "MalformedEnvelope"


class InvalidCoordinate(OpenSearchGeoException):
    code = "InvalidCoordinate"

    def __init__(self, value: str, source: str = "n/a"):
        super().__init__(f"Invalid coordinate value {value!r} in {source}.")
        self.value = value
        self.source = source


class NoExtentData(OpenSearchGeoException):
    code = "NoExtentData"
    message = "There is no extent data to coalesce."


class TransformFailure(OpenSearchGeoException):
    code = "TransformFailure"

    def __init__(self, source_crs: str, target_crs: str, info: str = "n/a"):
        super().__init__(f"Failed to transform envelope from {source_crs!r} to {target_crs!r}: {info}")
        self.source_crs = source_crs
        self.target_crs = target_crs


class UnsupportedCRS(OpenSearchGeoException):
    code = "UnsupportedCRS"

    def __init__(self, crs: Optional[str], info: str = "n/a"):
        super().__init__(f"Unsupported coordinate reference system {crs!r}: {info}")
        self.crs = crs
