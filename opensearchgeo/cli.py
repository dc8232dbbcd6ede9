"""
Command line interface for quick inspection of OpenSearch descriptions
and catalogue responses, without a full test run.

Usage examples:

    $ opensearchgeo templates description.xml
    $ opensearchgeo build-uri description.xml --with-param geo:box --param geo:box=-10,40,10,50
    $ opensearchgeo extent GetRecordsResponse.xml
    $ opensearchgeo intersects response.xml --bbox -118 32 -115 34 --crs urn:ogc:def:crs:OGC:1.3:CRS84

"""
import argparse
import json
import logging
import sys
from typing import Dict, List, Optional

from opensearchgeo import namespaces
from opensearchgeo.dataset import DatasetInfo
from opensearchgeo.errors import OpenSearchGeoException
from opensearchgeo.logs import setup_logging
from opensearchgeo.opensearch.client import OpenSearchClient
from opensearchgeo.opensearch.description import OpenSearchDescription, parse_description
from opensearchgeo.opensearch.names import QName, resolve_parameter_name
from opensearchgeo.opensearch.templates import URLTemplate
from opensearchgeo.spatial.boxes import find_bounding_boxes, normalize_bounding_box
from opensearchgeo.spatial.envelope import Envelope
from opensearchgeo.spatial.extent import check_intersections

_log = logging.getLogger(__name__)


def handle_cli(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="opensearchgeo", description="OpenSearch Geo template and extent tools")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Verbosity level")
    parser.add_argument("--json-logs", action="store_true", default=None, help="Log in JSON format")
    subparsers = parser.add_subparsers(dest="command", required=True)

    templates = subparsers.add_parser("templates", help="List URL templates and their parameters")
    templates.add_argument("description", help="OpenSearch description (path or URL)")

    build = subparsers.add_parser("build-uri", help="Build request URI(s) from URL templates")
    build.add_argument("description", help="OpenSearch description (path or URL)")
    build.add_argument(
        "--param", action="append", default=[], metavar="NAME=VALUE",
        help="Parameter value, e.g. 'geo:box=-10,40,10,50' (used as-is, no encoding)",
    )
    build.add_argument("--with-param", metavar="NAME", help="Only use templates declaring this parameter")
    build.add_argument("--type", dest="media_type", help="Only use templates with this response media type")

    extent = subparsers.add_parser("extent", help="Total geographic extent of sample data (csw:GetRecordsResponse)")
    extent.add_argument("data_file")

    intersect = subparsers.add_parser("intersects", help="Check bounding boxes in a response against a bbox")
    intersect.add_argument("response", help="Response document (path)")
    intersect.add_argument(
        "--bbox", required=True, nargs=4, type=float, metavar=("MIN1", "MIN2", "MAX1", "MAX2"),
        help="Reference bbox in CRS axis order",
    )
    intersect.add_argument("--crs", default="urn:ogc:def:crs:OGC:1.3:CRS84", help="CRS of reference bbox")

    return parser.parse_args(argv)


def _load_description(source: str) -> OpenSearchDescription:
    if source.startswith("http://") or source.startswith("https://"):
        return OpenSearchClient(source).get_description()
    return parse_description(source)


def _bindings(template: URLTemplate) -> Dict[Optional[str], str]:
    bindings = dict(namespaces.DEFAULT_BINDINGS)
    bindings.update(template.namespaces)
    return bindings


def _parse_values(params: List[str], template: URLTemplate) -> Dict[QName, str]:
    values = {}
    for param in params:
        name, sep, value = param.partition("=")
        if not sep:
            raise ValueError(f"Invalid parameter {param!r}, expected NAME=VALUE")
        values[resolve_parameter_name(name, _bindings(template))] = value
    return values


def cmd_templates(args) -> list:
    description = _load_description(args.description)
    return [
        {
            "template": t.template,
            "type": t.media_type,
            "rel": t.rel,
            "parameters": [
                {
                    "name": str(p.name),
                    "required": p.required,
                    "type": p.value_type.value,
                    "default": p.default_value,
                }
                for p in description.registry.parameters(t)
            ],
        }
        for t in description.url_templates
    ]


def cmd_build_uri(args) -> list:
    description = _load_description(args.description)
    templates = description.url_templates
    if args.media_type:
        templates = [t for t in templates if t in description.url_templates_for_type(args.media_type)]
    uris = []
    for template in templates:
        if args.with_param:
            name = resolve_parameter_name(args.with_param, _bindings(template))
            if not description.registry.filter_by_param(name, templates=[template]):
                continue
        uris.append(description.registry.build_request_uri(template, _parse_values(args.param, template)))
    if not uris:
        _log.warning("No matching URL templates")
    return uris


def _envelope_dict(envelope: Envelope) -> dict:
    return {"lower": list(envelope.lower), "upper": list(envelope.upper), "crs": envelope.crs}


def cmd_extent(args) -> Optional[dict]:
    extent = DatasetInfo(args.data_file).geographic_extent
    return _envelope_dict(extent) if extent else None


def cmd_intersects(args) -> list:
    reference = Envelope.from_bounds(args.bbox, crs=args.crs)
    candidates = [normalize_bounding_box(b) for b in find_bounding_boxes(args.response)]
    return [
        dict(_envelope_dict(envelope), intersects=result)
        for envelope, result in check_intersections(reference, candidates)
    ]


_COMMANDS = {
    "templates": cmd_templates,
    "build-uri": cmd_build_uri,
    "extent": cmd_extent,
    "intersects": cmd_intersects,
}


def main(argv=None) -> int:
    args = handle_cli(argv)
    level = {0: None, 1: "INFO"}.get(args.verbose, "DEBUG")
    setup_logging(level=level, json=args.json_logs)
    try:
        result = _COMMANDS[args.command](args)
    except (OpenSearchGeoException, ValueError) as e:
        _log.error(f"{args.command} failed: {e}")
        print(str(e), file=sys.stderr)
        return 1
    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
