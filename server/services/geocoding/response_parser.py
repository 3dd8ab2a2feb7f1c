"""Parse Nominatim /reverse replies (json, jsonv2 or xml) into a NominatimPlace."""

import json
import logging
from typing import Any, Dict, Optional, Union
from xml.etree import ElementTree

from .exceptions import ProviderResponseError
from .models import NominatimPlace

logger = logging.getLogger(__name__)

Body = Union[str, bytes]


def _clean_address(raw: Any) -> Dict[str, str]:
    """Keep non-empty address parts, stringified and trimmed."""
    if not isinstance(raw, dict):
        return {}
    out: Dict[str, str] = {}
    for key, value in raw.items():
        if value is None:
            continue
        text = str(value).strip()
        if text:
            out[str(key)] = text
    return out


def is_xml(body: Body, content_type: Optional[str] = None) -> bool:
    """Guess the wire format from the content type, then from the body."""
    if content_type and "xml" in content_type.lower():
        return True
    marker = b"<" if isinstance(body, bytes) else "<"
    return body.lstrip().startswith(marker)


def parse_json_place(body: Body) -> Optional[NominatimPlace]:
    """Parse a json/jsonv2 reply. A list reply uses its first element."""
    try:
        data = json.loads(body)
    except ValueError as e:
        raise ProviderResponseError("json", str(e)) from e

    if isinstance(data, list):
        data = data[0] if data else None
    if not data:
        return None
    if not isinstance(data, dict):
        raise ProviderResponseError("json", f"expected an object, got {type(data).__name__}")

    error = data.get("error")
    if isinstance(error, dict):
        error = error.get("message") or json.dumps(error)

    return NominatimPlace(
        place_id=data.get("place_id"),
        lat=_as_text(data.get("lat")),
        lon=_as_text(data.get("lon")),
        display_name=data.get("display_name"),
        place_rank=data.get("place_rank"),
        error=_as_text(error),
        address=_clean_address(data.get("address")),
    )


def parse_xml_place(body: Body) -> Optional[NominatimPlace]:
    """
    Parse an xml reply. Raw bytes are decoded per the XML declaration.

    Expected shape::

        <reversegeocode>
          <result place_id=".." lat=".." lon=".." place_rank="30">display name</result>
          <addressparts><road>..</road><country>..</country></addressparts>
        </reversegeocode>

    or ``<reversegeocode><error>message</error></reversegeocode>``.
    """
    try:
        root = ElementTree.fromstring(body.strip())
    except ElementTree.ParseError as e:
        raise ProviderResponseError("xml", str(e)) from e

    error_el = root.find("error")
    if error_el is not None:
        return NominatimPlace(error=(error_el.text or "").strip() or "Unknown error")

    result_el = root.find("result")
    parts_el = root.find("addressparts")
    if result_el is None and parts_el is None:
        return None

    attrs = {}
    display_name = None
    if result_el is not None:
        attrs = result_el.attrib
        display_name = (result_el.text or "").strip() or None
    address = {}
    if parts_el is not None:
        address = _clean_address({child.tag: child.text for child in parts_el})

    return NominatimPlace(
        place_id=attrs.get("place_id"),
        lat=attrs.get("lat"),
        lon=attrs.get("lon"),
        display_name=display_name,
        place_rank=attrs.get("place_rank"),
        address=address,
    )


def parse_place(body: Optional[Body], content_type: Optional[str] = None) -> Optional[NominatimPlace]:
    """
    Parse a provider reply body.

    Returns None for an empty reply. Raises ProviderResponseError when the
    body is not valid JSON/XML.
    """
    if not body or not body.strip():
        return None
    if is_xml(body, content_type):
        logger.debug("Parsing provider reply as XML")
        return parse_xml_place(body)
    return parse_json_place(body)


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)
