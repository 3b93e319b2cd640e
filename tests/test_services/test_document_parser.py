"""Tests for response body parsing."""

import pytest

from check_http_xml.engine.paths import NOT_FOUND, parse_path, resolve
from check_http_xml.services.document_parser import parse_document, parse_json, parse_xml
from check_http_xml.utils.errors import DocumentParseError
from check_http_xml.utils.status import Status


class TestParseXml:
    """Test suite for XML parsing."""

    def test_root_element_dropped(self, stats_xml):
        document = parse_xml(stats_xml)
        assert document["shares"] == {"dead": "2", "live": "12"}
        assert document["total"] == "14"

    def test_namespaced_elements_keep_prefix(self, stats_xml):
        document = parse_xml(stats_xml)
        assert resolve(document, parse_path('{ping}->{"ns2:elapsedMs"}')) == "37.5"

    def test_attributes_become_keys(self):
        document = parse_xml(b'<stats><disk name="sda" free="42">ok</disk></stats>')
        assert document["disk"] == {"name": "sda", "free": "42", "content": "ok"}

    def test_repeated_elements_become_list(self):
        document = parse_xml(b"<stats><server>1</server><server>2</server></stats>")
        assert document["server"] == ["1", "2"]
        assert resolve(document, parse_path("{server}->[1]")) == "2"

    def test_repeated_elements_with_name_stay_list(self):
        document = parse_xml(b'<stats><server name="a">1</server><server name="b">2</server></stats>')
        assert document["server"][0]["name"] == "a"
        assert resolve(document, parse_path("{server}->[1]->{content}")) == "2"
        assert resolve(document, parse_path("{server}->{b}")) is NOT_FOUND

    def test_empty_child_is_none(self):
        assert parse_xml(b"<stats><empty/></stats>") == {"empty": None}

    def test_empty_root(self):
        assert parse_xml(b"<stats/>") == {}

    def test_text_root(self):
        assert parse_xml(b"<value>12</value>") == "12"

    @pytest.mark.parametrize("body", [b"", b"<stats>", b"not xml", b"<a></b>"])
    def test_malformed(self, body):
        with pytest.raises(DocumentParseError) as exc_info:
            parse_xml(body)
        assert exc_info.value.status == Status.UNKNOWN


class TestParseJson:
    """Test suite for JSON parsing."""

    def test_object(self):
        assert parse_json(b'{"shares": {"dead": 2}}') == {"shares": {"dead": 2}}

    def test_malformed(self):
        with pytest.raises(DocumentParseError, match="JSON"):
            parse_json(b"{nope")


class TestParseDocument:
    """Test suite for content-type based dispatch."""

    def test_xml_by_default(self, stats_xml):
        assert parse_document(stats_xml)["clients"] == {"connected": "234"}

    def test_json_content_type(self):
        body = b'{"load": 0.5}'
        assert parse_document(body, "application/json; charset=utf-8") == {"load": 0.5}

    def test_xml_content_type(self, stats_xml):
        assert "shares" in parse_document(stats_xml, "application/xml")
