import logging
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

import attrs

from opensearchgeo.errors import UndeclaredParameter
from opensearchgeo.opensearch.names import QName, resolve_parameter_name
from opensearchgeo.opensearch.parameters import (
    TEMPLATE_PARAM_PATTERN,
    TemplateParameter,
    default_param_value,
    parse_template_parameters,
)
from opensearchgeo.util.uri import check_request_uri

_log = logging.getLogger(__name__)


@attrs.frozen(eq=False)
class URLTemplate:
    """
    URL template declared by an OpenSearch description (os:Url element).

    Compares by identity: two Url elements with the same attributes are still distinct endpoints.
    """

    template: str
    media_type: str = ""
    rel: str = "results"
    # Raw indexOffset/pageOffset attributes (None when not declared)
    index_offset: Optional[str] = None
    page_offset: Optional[str] = None
    # In-scope namespace bindings (prefix -> URI) of the declaring element
    namespaces: Mapping[Optional[str], str] = attrs.field(factory=dict, converter=dict)

    def __repr__(self):
        return f"URLTemplate({self.template!r}, media_type={self.media_type!r})"


class TemplateRegistry:
    """
    Registry of URL templates and their (ordered) parameter descriptors.
    """

    def __init__(self):
        self._parameters: Dict[URLTemplate, Tuple[TemplateParameter, ...]] = {}

    def register(
        self, template: URLTemplate, parameters: Optional[Iterable[TemplateParameter]] = None
    ) -> URLTemplate:
        """
        Add a template. Descriptors are extracted from the template string
        unless they are given explicitly.
        """
        if parameters is None:
            parameters = extract_template_parameters(template)
        self._parameters[template] = tuple(parameters)
        return template

    @property
    def templates(self) -> List[URLTemplate]:
        return list(self._parameters.keys())

    def parameters(self, template: URLTemplate) -> Tuple[TemplateParameter, ...]:
        return self._parameters.get(template, ())

    def __contains__(self, template) -> bool:
        return template in self._parameters

    def __len__(self):
        return len(self._parameters)

    def filter_by_param(self, name: QName, templates: Optional[Iterable[URLTemplate]] = None) -> List[URLTemplate]:
        """Get registered templates (or the given subset) that declare given parameter."""
        return filter_url_templates_by_param(self.templates if templates is None else templates, name, self)

    def build_request_uri(self, template: URLTemplate, values: Mapping[QName, str]) -> str:
        return build_request_uri(template, values, self)


def extract_template_parameters(template: URLTemplate) -> List[TemplateParameter]:
    return parse_template_parameters(
        template.template,
        template.namespaces,
        index_offset=template.index_offset,
        page_offset=template.page_offset,
    )


def filter_url_templates_by_param(
    templates: Iterable[URLTemplate], name: QName, registry: TemplateRegistry
) -> List[URLTemplate]:
    """
    Filter URL templates to the ones containing given parameter
    (only the qualified name is considered, not the required flag or type).

    :return: matching templates, in input order (possibly empty)
    """
    return [t for t in templates if any(p.name == name for p in registry.parameters(t))]


def build_request_uri(template: URLTemplate, values: Mapping[QName, str], registry: TemplateRegistry) -> str:
    """
    Build request URI from URL template, substituting the given values.
    Parameters without value get their default value
    (from the first declared descriptor in case of duplicates).

    Values are substituted as-is: no percent-encoding is applied.

    :raises UndeclaredParameter: if a placeholder has no descriptor.
    :raises MalformedRequestURI: if the result is not a valid URI.
    """
    parameters = list(registry.parameters(template))

    def substitute(match) -> str:
        name = resolve_parameter_name(match.group(1), template.namespaces)
        if name in values:
            return values[name]
        default = default_param_value(parameters, name)
        if default is None:
            raise UndeclaredParameter(name=name, template=template.template)
        return default

    uri = TEMPLATE_PARAM_PATTERN.sub(substitute, template.template)
    _log.debug(f"Built request URI {uri!r} from {template.template!r}")
    return check_request_uri(uri)
