import logging
from typing import Mapping, Optional

import requests
from lxml import etree
from requests.adapters import HTTPAdapter, Retry

from opensearchgeo.config import get_config
from opensearchgeo.opensearch.description import OpenSearchDescription, parse_description
from opensearchgeo.opensearch.names import QName
from opensearchgeo.opensearch.templates import URLTemplate, build_request_uri

_log = logging.getLogger(__name__)

OPENSEARCH_DESCRIPTION_TYPE = "application/opensearchdescription+xml"


class OpenSearchClient:
    """
    Minimal client for an OpenSearch endpoint: fetch the description
    and run searches based on its URL templates.
    """

    def __init__(self, description_url: str, session: Optional[requests.Session] = None):
        self.description_url = description_url
        self._description: Optional[OpenSearchDescription] = None
        if session is None:
            config = get_config()
            session = requests.Session()
            retry = Retry(total=config.http_retries, backoff_factor=0.1)
            session.mount("http://", HTTPAdapter(max_retries=retry))
            session.mount("https://", HTTPAdapter(max_retries=retry))
        self._session = session

    def _get(self, url: str, accept: str) -> requests.Response:
        try:
            resp = self._session.get(url, headers={"Accept": accept}, timeout=get_config().http_timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            _log.error(f"OpenSearch request failed: {url!r}: {e}")
            raise
        return resp

    def get_description(self, force_reload: bool = False) -> OpenSearchDescription:
        if self._description is None or force_reload:
            _log.debug(f"Getting OpenSearch description from {self.description_url}")
            resp = self._get(self.description_url, accept=OPENSEARCH_DESCRIPTION_TYPE)
            self._description = parse_description(resp.content)
        return self._description

    def search(self, template: URLTemplate, values: Mapping[QName, str]) -> etree._Element:
        """
        Run search request built from given URL template (of this endpoint's description)
        and return the parsed response document.
        """
        registry = self.get_description().registry
        uri = build_request_uri(template, values, registry)
        _log.info(f"OpenSearch request: {uri}")
        resp = self._get(uri, accept=template.media_type or "application/xml")
        return etree.fromstring(resp.content)

    def __repr__(self):
        return "%s(%r)" % (self.__class__.__name__, self.description_url)

    def __str__(self):
        return self.description_url
