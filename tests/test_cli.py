import json
import logging

import pytest

from opensearchgeo import namespaces
from opensearchgeo.cli import handle_cli, main

from .data import get_test_data_file

DESCRIPTION = str(get_test_data_file("opensearch/OpenSearchDescription-valid.xml"))


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    root_logger.handlers = handlers
    root_logger.setLevel(level)


def run_main(argv, capsys):
    exit_code = main(argv)
    captured = capsys.readouterr()
    return exit_code, captured


def test_handle_cli_build_uri():
    args = handle_cli(["-vv", "build-uri", DESCRIPTION, "--param", "q=1", "--param", "geo:box=1,2,3,4"])
    assert args.command == "build-uri"
    assert args.verbose == 2
    assert args.param == ["q=1", "geo:box=1,2,3,4"]
    assert args.with_param is None
    assert args.json_logs is None


def test_handle_cli_intersects_default_crs():
    args = handle_cli(["intersects", "response.xml", "--bbox", "-118", "32", "-115", "34"])
    assert args.bbox == [-118.0, 32.0, -115.0, 34.0]
    assert args.crs == "urn:ogc:def:crs:OGC:1.3:CRS84"


def test_handle_cli_intersects_bbox_count():
    with pytest.raises(SystemExit):
        handle_cli(["intersects", "response.xml", "--bbox", "-118", "32", "-115"])


def test_handle_cli_missing_command():
    with pytest.raises(SystemExit):
        handle_cli([])


def test_templates(capsys):
    exit_code, captured = run_main(["templates", DESCRIPTION], capsys)
    assert exit_code == 0
    result = json.loads(captured.out)
    assert len(result) == 4
    assert result[0]["type"] == "application/atom+xml"
    assert result[0]["parameters"] == [
        {"name": f"{{{namespaces.OSD11}}}searchTerms", "required": True, "type": "string", "default": ""},
        {"name": f"{{{namespaces.OSD11}}}startPage", "required": False, "type": "integer", "default": 1},
        {"name": f"{{{namespaces.OS_GEO}}}box", "required": False, "type": "string", "default": ""},
    ]


def test_build_uri_with_param(capsys):
    exit_code, captured = run_main(
        [
            "build-uri",
            DESCRIPTION,
            "--with-param",
            "geo:box",
            "--param",
            "searchTerms=alpha",
            "--param",
            "geo:box=-10,40,10,50",
        ],
        capsys,
    )
    assert exit_code == 0
    assert json.loads(captured.out) == ["http://csw.example.org/opensearch?q=alpha&pw=1&box=-10,40,10,50&format=atom"]


def test_build_uri_media_type(capsys):
    exit_code, captured = run_main(["build-uri", DESCRIPTION, "--type", "text/html"], capsys)
    assert exit_code == 0
    assert json.loads(captured.out) == ["http://csw.example.org/search.html?q="]


def test_build_uri_no_match(capsys):
    exit_code, captured = run_main(["build-uri", DESCRIPTION, "--with-param", "time:relation"], capsys)
    assert exit_code == 0
    assert json.loads(captured.out) == []


def test_build_uri_invalid_param(capsys):
    exit_code, captured = run_main(["build-uri", DESCRIPTION, "--param", "searchTerms"], capsys)
    assert exit_code == 1
    assert "expected NAME=VALUE" in captured.err


def test_build_uri_unresolved_prefix(capsys):
    exit_code, captured = run_main(["build-uri", DESCRIPTION, "--param", "eo:orbit=1"], capsys)
    assert exit_code == 1
    assert "[UnresolvedPrefix]" in captured.err


def test_build_uri_malformed(capsys):
    exit_code, captured = run_main(["build-uri", DESCRIPTION, "--param", "searchTerms=a b"], capsys)
    assert exit_code == 1
    assert "[MalformedRequestURI]" in captured.err


def test_templates_from_url(capsys, requests_mock):
    url = "https://csw.example.org/opensearch/description"
    requests_mock.get(url, content=get_test_data_file("opensearch/OpenSearchDescription-id.xml").read_bytes())
    exit_code, captured = run_main(["templates", url], capsys)
    assert exit_code == 0
    [template] = json.loads(captured.out)
    assert template["template"] == "http://csw.example.org/opensearch?q={searchTerms?}&pw={startPage?}&id={geo:uid}"


def test_extent(capsys):
    exit_code, captured = run_main(["extent", str(get_test_data_file("rsp/GetRecordsResponse-full.xml"))], capsys)
    assert exit_code == 0
    result = json.loads(captured.out)
    assert result["crs"] == "EPSG:4326"
    assert result["lower"] == pytest.approx([32.0, -117.6])
    assert result["upper"] == pytest.approx([33.63, -116.0])


def test_extent_empty(capsys):
    exit_code, captured = run_main(["extent", str(get_test_data_file("rsp/GetRecordsResponse-empty.xml"))], capsys)
    assert exit_code == 0
    assert json.loads(captured.out) is None


def test_intersects(capsys):
    exit_code, captured = run_main(
        ["intersects", str(get_test_data_file("rsp/feed-atom.xml")), "--bbox", "-118", "32", "-115", "34"], capsys
    )
    assert exit_code == 0
    result = json.loads(captured.out)
    assert [r["intersects"] for r in result] == [True, True, False]
    assert [r["crs"] for r in result] == ["EPSG:4326", "EPSG:4326", "OGC:CRS84"]


def test_intersects_bad_bbox(capsys):
    exit_code, captured = run_main(
        ["intersects", str(get_test_data_file("rsp/feed-atom.xml")), "--bbox", "-115", "32", "-118", "34"], capsys
    )
    assert exit_code == 1
    assert "[MalformedEnvelope]" in captured.err
