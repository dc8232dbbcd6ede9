from opensearchgeo.opensearch.description import OpenSearchDescription, get_query_parameters, parse_description
from opensearchgeo.opensearch.names import QName, resolve_parameter_name
from opensearchgeo.opensearch.parameters import TemplateParameter, ValueType
from opensearchgeo.opensearch.templates import (
    TemplateRegistry,
    URLTemplate,
    build_request_uri,
    filter_url_templates_by_param,
)
