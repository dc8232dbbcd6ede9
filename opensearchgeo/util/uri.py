import re
import urllib.parse

from opensearchgeo.errors import MalformedRequestURI

# RFC 3986: unreserved / gen-delims / sub-delims, plus "%" for percent-encoded octets
_URI_CHARS = re.compile(r"^[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]*$")
_BAD_PERCENT_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")


def percent_encode(value: str) -> str:
    """Percent-encode all reserved characters (spaces become "%20")."""
    return urllib.parse.quote(value, safe="")


def check_request_uri(uri: str) -> str:
    """
    Check that given string is an absolute URI (RFC 3986 syntax).

    :raises MalformedRequestURI: when it is not.
    :return: the URI, unchanged
    """
    if not _URI_CHARS.match(uri):
        bad = sorted(set(c for c in uri if not _URI_CHARS.match(c)))
        raise MalformedRequestURI(uri, reason=f"illegal characters {''.join(bad)!r}")
    if _BAD_PERCENT_ESCAPE.search(uri):
        raise MalformedRequestURI(uri, reason="invalid percent-encoding")
    try:
        parts = urllib.parse.urlsplit(uri)
        # Accessing port validates the authority component.
        parts.port
    except ValueError as e:
        raise MalformedRequestURI(uri, reason=str(e)) from e
    if not parts.scheme or not _SCHEME.match(parts.scheme):
        raise MalformedRequestURI(uri, reason="missing scheme")
    if parts.scheme in {"http", "https"} and not parts.netloc:
        raise MalformedRequestURI(uri, reason="missing host")
    return uri
