import logging

import pytest

from opensearchgeo import namespaces
from opensearchgeo.opensearch.description import get_query_parameters, parse_description
from opensearchgeo.opensearch.names import QName

from ..data import get_test_data_file


@pytest.fixture
def description():
    return parse_description(get_test_data_file("opensearch/OpenSearchDescription-valid.xml"))


def test_basic_metadata(description):
    assert description.short_name == "CSW-Geo"
    assert description.description == "OpenSearch interface of a CSW 3.0 catalogue"


def test_url_templates(description):
    templates = description.url_templates
    assert [t.media_type for t in templates] == [
        "application/atom+xml",
        "application/rss+xml",
        "application/xml",
        "text/html",
    ]
    assert templates[1].index_offset == "0"
    assert templates[0].index_offset is None
    assert all(t.rel == "results" for t in templates)


def test_template_namespaces(description):
    template = description.url_templates[0]
    assert template.namespaces["geo"] == namespaces.OS_GEO
    assert template.namespaces[None] == namespaces.OSD11


def test_registry_parameters(description):
    template = description.url_templates[2]
    names = [p.name for p in description.registry.parameters(template)]
    assert names == [
        QName(namespaces.OS_GEO, "uid"),
        QName(namespaces.OS_TIME, "start"),
        QName(namespaces.OS_TIME, "end"),
        QName(namespaces.OSD11, "inputEncoding"),
    ]


def test_url_templates_for_type(description):
    assert description.url_templates_for_type("application/atom+xml") == [description.url_templates[0]]
    assert description.url_templates_for_type("application/json") == []


def test_url_templates_for_type_with_charset():
    description = parse_description(
        f"""<OpenSearchDescription xmlns="{namespaces.OSD11}">
            <Url type="application/atom+xml; charset=UTF-8" template="http://example.org/?q={{searchTerms}}"/>
        </OpenSearchDescription>"""
    )
    assert len(description.url_templates_for_type("application/atom+xml")) == 1


def test_prefixed_description():
    description = parse_description(get_test_data_file("opensearch/OpenSearchDescription-id.xml"))
    assert description.short_name == "CSW-Id"
    [template] = description.url_templates
    assert template.page_offset == "1"
    uid_templates = description.registry.filter_by_param(QName(namespaces.OS_GEO, "uid"))
    assert uid_templates == [template]


def test_queries_by_role(description):
    [example] = description.queries_by_role(QName(namespaces.OSD11, "example"))
    assert example.get("searchTerms") == "Vancouver"
    assert len(description.queries_by_role(QName(namespaces.OSD11, "request"))) == 1
    assert description.queries_by_role(QName(namespaces.OSD11, "superset")) == []


def test_get_query_parameters(description):
    [example] = description.queries_by_role(QName(namespaces.OSD11, "example"))
    assert get_query_parameters(example) == {
        QName(namespaces.OSD11, "searchTerms"): "Vancouver",
        QName(namespaces.OS_GEO, "box"): "-123.45,48.99,-122.45,49.49",
    }


def test_unexpected_document_element(caplog):
    caplog.set_level(logging.WARNING)
    description = parse_description(b"<foo/>")
    assert description.url_templates == []
    assert "Unexpected document element 'foo'" in caplog.text
