"""Tests for ConfigLoader."""

import pytest

from check_http_xml.config.loader import ConfigLoader
from check_http_xml.engine.thresholds import parse_range
from check_http_xml.utils.errors import ConfigError


@pytest.fixture
def config_file(tmp_path):
    """Write a YAML configuration file and return its path."""
    def _write(content):
        path = tmp_path / "check.yaml"
        path.write_text(content)
        return str(path)
    return _write


def test_load_from_options_only():
    config = ConfigLoader.load({
        "url": "https://example.com/stats",
        "attributes": "{load}",
        "warning": "5",
        "critical": None,
    })

    assert config.url == "https://example.com/stats"
    assert config.attribute_specs()[0].warning == parse_range("5")
    assert config.attribute_specs()[0].critical is None


def test_load_from_yaml(config_file):
    path = config_file(
        "url: https://example.com/stats\n"
        "attributes:\n"
        "  - '{shares}->{dead}'\n"
        "  - '{clients}->{connected}'\n"
        "warning: [':5', 300]\n"
        "critical: [':10', 400]\n"
        "timeout: 5\n"
        "ignoressl: true\n"
    )

    config = ConfigLoader.load({}, path)

    assert len(config.attribute_specs()) == 2
    assert config.timeout == 5
    assert config.ignoressl is True


def test_cli_overrides_yaml(config_file):
    path = config_file("url: https://example.com/a\nattributes: '{a}'\nwarning: '5'\n")

    config = ConfigLoader.load({"url": "https://example.com/b", "warning": None}, path)

    assert config.url == "https://example.com/b"
    assert config.warning == "5"


def test_env_substitution(config_file, monkeypatch):
    monkeypatch.setenv("STATS_HOST", "stats.internal")
    path = config_file("url: https://${STATS_HOST}/local_stats\nattributes: '{a}'\n")

    config = ConfigLoader.load({}, path)

    assert config.url == "https://stats.internal/local_stats"


def test_missing_file():
    with pytest.raises(ConfigError, match="not found"):
        ConfigLoader.load({}, "/nonexistent/check.yaml")


def test_invalid_yaml(config_file):
    path = config_file("url: [unclosed\n")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        ConfigLoader.load({}, path)


def test_yaml_must_be_mapping(config_file):
    path = config_file("- just\n- a list\n")
    with pytest.raises(ConfigError, match="mapping"):
        ConfigLoader.load({}, path)


def test_empty_yaml(config_file):
    path = config_file("")
    config = ConfigLoader.load({"url": "http://example.com", "attributes": "{a}"}, path)
    assert config.url == "http://example.com"


def test_validation_error_becomes_config_error():
    with pytest.raises(ConfigError) as exc_info:
        ConfigLoader.load({"url": "http://example.com", "attributes": "{a}", "divisor": "0"})

    assert "zero" in str(exc_info.value)
    assert "Value error" not in str(exc_info.value)


def test_missing_url_is_config_error():
    with pytest.raises(ConfigError, match="url"):
        ConfigLoader.load({"attributes": "{a}"})
