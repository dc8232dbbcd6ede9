from typing import Mapping, NamedTuple, Optional, Union

from lxml import etree

from opensearchgeo import namespaces
from opensearchgeo.errors import UnresolvedPrefix


class QName(NamedTuple):
    """Namespace-qualified name of a template parameter."""

    namespace: str
    local_name: str

    def __str__(self):
        return f"{{{self.namespace}}}{self.local_name}"


NamespaceContext = Union[etree._Element, Mapping[Optional[str], str]]


def _in_scope_namespaces(context: NamespaceContext) -> Mapping[Optional[str], str]:
    if isinstance(context, etree._Element):
        return context.nsmap
    return context


def is_optional_token(token: str) -> bool:
    """Does the template token carry the optional marker (e.g. "geo:box?")?"""
    return token.strip().endswith("?")


def resolve_parameter_name(token: str, context: NamespaceContext) -> QName:
    """
    Get the qualified name of an OpenSearch URL template parameter.

    :param token: parameter token as it appears in a template (e.g. "searchTerms", "geo:box?")
    :param context: element declaring the template (its in-scope namespaces are used)
        or a plain prefix to namespace mapping.
    :return: qualified name. Unprefixed names are in the OpenSearch 1.1 namespace,
        regardless of the default namespace of the document.
    """
    name = token.strip()
    if name.endswith("?"):
        name = name[:-1]
    if ":" in name:
        prefix, local_name = name.split(":", 1)
        namespace = _in_scope_namespaces(context).get(prefix)
        if not namespace:
            raise UnresolvedPrefix(prefix=prefix, token=token)
        return QName(namespace, local_name)
    return QName(namespaces.OSD11, name)
