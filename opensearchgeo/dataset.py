import logging
from pathlib import Path
from typing import List, Mapping, Optional, Union

from lxml import etree

from opensearchgeo.spatial.boxes import find_bounding_boxes, normalize_bounding_box
from opensearchgeo.spatial.envelope import Envelope
from opensearchgeo.spatial.extent import EnvelopeMerger
from opensearchgeo.util.xml import find_nodes

_log = logging.getLogger(__name__)

# First bounding box of each record
RECORD_BOUNDING_BOX_XPATH = "//csw:Record/ows:BoundingBox[1] | //csw:Record/ows:WGS84BoundingBox[1]"


class DatasetInfo:
    """
    Information about the sample data held by the catalogue under test
    (a csw:GetRecordsResponse document).
    """

    def __init__(self, data_file: Union[str, Path]):
        data_file = Path(data_file)
        if not data_file.is_file():
            raise ValueError(f"Data file does not exist at {data_file.absolute()}")
        self.data_file = data_file
        self._document = etree.parse(str(data_file))
        root_name = etree.QName(self._document.getroot()).localname
        if root_name != "GetRecordsResponse":
            _log.warning(f"File does not contain a GetRecords response: {root_name}")
        self._geographic_extent: Optional[Envelope] = None
        self._extent_calculated = False

    @property
    def geographic_extent(self) -> Optional[Envelope]:
        """
        Total geographic extent of the sample data: the union of the first
        bounding box (ows:BoundingBox or ows:WGS84BoundingBox) of each record.

        :return: envelope in the canonical CRS, or None if there are no bounding boxes.
        """
        if not self._extent_calculated:
            merger = EnvelopeMerger()
            for box in find_bounding_boxes(self._document, xpath=RECORD_BOUNDING_BOX_XPATH):
                merger.add(normalize_bounding_box(box))
            self._geographic_extent = merger.get()
            self._extent_calculated = True
        return self._geographic_extent

    def _values(self, xpath: str) -> List[str]:
        return [str(v).strip() if isinstance(v, str) else (v.text or "").strip() for v in self.find_items(xpath)]

    @property
    def record_identifiers(self) -> List[str]:
        return self._values("//dc:identifier")

    @property
    def record_titles(self) -> List[str]:
        return self._values("//dc:title")

    @property
    def record_topics(self) -> List[str]:
        """Topics (dc:subject) of all records: keywords, key phrases, classification codes, ..."""
        return self._values("//dc:subject")

    def find_items(self, xpath: str, namespaces: Optional[Mapping[str, str]] = None) -> list:
        """
        Evaluate XPath expression over the sample data.
        Standard prefixes (csw, ows, dc, dct, ...) are bound unless overridden.
        """
        return find_nodes(self._document, xpath, bindings=namespaces)
