"""
In-memory model of an OpenSearch description document.
"""
import logging
from typing import Dict, List, Optional

from lxml import etree

from opensearchgeo import namespaces
from opensearchgeo.opensearch.names import QName, resolve_parameter_name
from opensearchgeo.opensearch.templates import TemplateRegistry, URLTemplate
from opensearchgeo.util.xml import XmlSource, parse_xml

_log = logging.getLogger(__name__)

# os:Query attributes that describe the query itself, not search parameters.
_QUERY_METADATA_ATTRIBUTES = {"role", "title", "totalResults"}


def url_template_from_element(url: etree._Element) -> URLTemplate:
    return URLTemplate(
        template=url.get("template", ""),
        media_type=url.get("type", ""),
        rel=url.get("rel", "results"),
        index_offset=url.get("indexOffset"),
        page_offset=url.get("pageOffset"),
        namespaces={k: v for k, v in url.nsmap.items()},
    )


def get_query_parameters(query: etree._Element) -> Dict[QName, str]:
    """
    Extract the actual parameters from an OpenSearch query (os:Query) element.

    :return: mapping of (qualified) parameter name to value.
    """
    params = {}
    for attribute, value in query.attrib.items():
        qname = etree.QName(attribute)
        if qname.namespace is None and qname.localname in _QUERY_METADATA_ATTRIBUTES:
            continue
        if qname.namespace is None:
            name = resolve_parameter_name(qname.localname, query)
        else:
            name = QName(qname.namespace, qname.localname)
        params[name] = value
    return params


class OpenSearchDescription:
    """
    OpenSearch description (os:OpenSearchDescription) with its URL templates.
    """

    def __init__(self, root: etree._Element):
        if etree.QName(root).text != f"{{{namespaces.OSD11}}}OpenSearchDescription":
            _log.warning(f"Unexpected document element {root.tag!r}, expected os:OpenSearchDescription")
        self.root = root
        self.registry = TemplateRegistry()
        for url in root.iterfind(f".//{{{namespaces.OSD11}}}Url"):
            self.registry.register(url_template_from_element(url))
        _log.debug(f"Found {len(self.registry)} URL templates in OpenSearch description")

    def _text(self, local_name: str) -> Optional[str]:
        return self.root.findtext(f"{{{namespaces.OSD11}}}{local_name}")

    @property
    def short_name(self) -> Optional[str]:
        return self._text("ShortName")

    @property
    def description(self) -> Optional[str]:
        return self._text("Description")

    @property
    def url_templates(self) -> List[URLTemplate]:
        return self.registry.templates

    def url_templates_for_type(self, media_type: str) -> List[URLTemplate]:
        """Templates with given response media type (media type parameters like charset are ignored)."""
        return [t for t in self.url_templates if t.media_type.split(";")[0].strip() == media_type]

    def queries_by_role(self, role: QName) -> List[etree._Element]:
        """Get os:Query elements with given (qualified) role, e.g. QName(OSD11, "example")."""
        return [
            query
            for query in self.root.iterfind(f".//{{{namespaces.OSD11}}}Query")
            if resolve_parameter_name(query.get("role", ""), query) == role
        ]

    def __repr__(self):
        return f"<OpenSearchDescription {self.short_name!r} templates={len(self.registry)}>"


def parse_description(source: XmlSource) -> OpenSearchDescription:
    """
    Parse an OpenSearch description document.

    :param source: file path, XML string/bytes or already parsed lxml document/element.
    """
    return OpenSearchDescription(parse_xml(source))
