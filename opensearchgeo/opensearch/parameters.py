"""
Descriptors of OpenSearch URL template parameters.

See http://www.opensearch.org/Specifications/OpenSearch/1.1#OpenSearch_URL_template_syntax
"""
import enum
import logging
import re
from typing import Callable, Dict, List, Optional, Union

import attrs

from opensearchgeo import namespaces
from opensearchgeo.opensearch.names import NamespaceContext, QName, is_optional_token, resolve_parameter_name

_log = logging.getLogger(__name__)

# A parameter placeholder in a URL template, e.g. "{geo:box?}"
TEMPLATE_PARAM_PATTERN = re.compile(r"\{([^}]+)\}")


class ValueType(enum.Enum):
    STRING = "string"
    INTEGER = "integer"
    CHARSET = "charset"


@attrs.frozen
class TemplateParameter:
    """
    Information about a URL template parameter.

    Equality and hashing only consider the qualified name:
    two descriptors differing in `required` (or type/default) compare equal,
    but can still both be listed for one template.
    """

    name: QName
    required: bool = attrs.field(default=True, eq=False)
    value_type: ValueType = attrs.field(default=ValueType.STRING, eq=False)
    default_value: Union[str, int] = attrs.field(default="", eq=False)

    def default_as_string(self) -> str:
        return str(self.default_value)


def _offset(value: Optional[str], attribute: str) -> int:
    if value is None or not value.strip():
        return 1
    try:
        return int(value.strip())
    except ValueError:
        _log.warning(f"Ignoring invalid {attribute} value {value!r}, using 1")
        return 1


# Type and default value of the standard OpenSearch 1.1 parameters, keyed on local name.
# Each entry takes the (raw) indexOffset and pageOffset attributes of the declaring Url element.
# http://www.opensearch.org/Specifications/OpenSearch/1.1#OpenSearch_1.1_parameters
_WELL_KNOWN: Dict[str, Callable[[Optional[str], Optional[str]], tuple]] = {
    "count": lambda index_offset, page_offset: (ValueType.INTEGER, ""),
    "startIndex": lambda index_offset, page_offset: (ValueType.INTEGER, _offset(index_offset, "indexOffset")),
    "startPage": lambda index_offset, page_offset: (ValueType.INTEGER, _offset(page_offset, "pageOffset")),
    "language": lambda index_offset, page_offset: (ValueType.STRING, "*"),
    "inputEncoding": lambda index_offset, page_offset: (ValueType.CHARSET, "UTF-8"),
    "outputEncoding": lambda index_offset, page_offset: (ValueType.CHARSET, "UTF-8"),
}


def describe_parameter(
    token: str,
    context: NamespaceContext,
    *,
    index_offset: Optional[str] = None,
    page_offset: Optional[str] = None,
) -> TemplateParameter:
    """Build descriptor for a single template token (without braces)."""
    name = resolve_parameter_name(token, context)
    value_type, default_value = ValueType.STRING, ""
    if name.namespace == namespaces.OSD11 and name.local_name in _WELL_KNOWN:
        value_type, default_value = _WELL_KNOWN[name.local_name](index_offset, page_offset)
    return TemplateParameter(
        name=name,
        required=not is_optional_token(token),
        value_type=value_type,
        default_value=default_value,
    )


def parse_template_parameters(
    template: str,
    context: NamespaceContext,
    *,
    index_offset: Optional[str] = None,
    page_offset: Optional[str] = None,
) -> List[TemplateParameter]:
    """
    Extract parameter descriptors from a URL template string,
    in order of appearance (duplicate placeholders are kept).
    """
    return [
        describe_parameter(m.group(1), context, index_offset=index_offset, page_offset=page_offset)
        for m in TEMPLATE_PARAM_PATTERN.finditer(template)
    ]


def default_param_value(parameters: List[TemplateParameter], name: QName) -> Optional[str]:
    """
    Get the default value (as string) of a template parameter.
    The first declared descriptor with the given name wins.

    :return: default value, or None if there is no descriptor with that name.
    """
    for parameter in parameters:
        if parameter.name == name:
            return parameter.default_as_string()
    return None
