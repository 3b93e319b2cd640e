"""Response body parsing into a plain tree of dicts, lists and scalars.

XML documents are shaped like Perl's XML::Simple output, which is what the
path expressions were written against:

- the root element itself is dropped,
- attributes and child elements become keys of the same mapping,
- repeated child elements become a list,
- text of an element that also has attributes is stored under ``content``,
- elements with only text become plain strings.

Two XML::Simple defaults are not reproduced. There is no KeyAttr folding:
repeated elements with a ``name``, ``id`` or ``key`` attribute stay a list
addressed by index, not a mapping keyed by that attribute. Empty child
elements become ``None`` rather than an empty mapping; only an empty root
element becomes ``{}``.

JSON documents are used as decoded.
"""

import json
from typing import Any
from xml.parsers.expat import ExpatError

import xmltodict

from ..utils.errors import DocumentParseError

TEXT_KEY = "content"


def parse_document(body: bytes, content_type: str = "") -> Any:
    """
    Parse a response body.

    Args:
        body: Raw response body
        content_type: Response Content-Type header, selects JSON or XML

    Returns:
        Parsed document tree

    Raises:
        DocumentParseError: If the body is not well-formed
    """
    if "json" in content_type.lower():
        return parse_json(body)
    return parse_xml(body)


def parse_xml(body: bytes) -> Any:
    """Parse an XML body, dropping the root element."""
    try:
        tree = xmltodict.parse(
            body,
            attr_prefix="",
            cdata_key=TEXT_KEY,
            disable_entities=True
        )
    except (ExpatError, ValueError) as e:
        raise DocumentParseError(f"Invalid XML document: {e}") from e

    root = next(iter(tree.values()))
    return {} if root is None else root


def parse_json(body: bytes) -> Any:
    """Parse a JSON body."""
    try:
        return json.loads(body)
    except ValueError as e:
        raise DocumentParseError(f"Invalid JSON document: {e}") from e
