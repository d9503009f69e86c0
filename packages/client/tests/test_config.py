"""Tests for client configuration loading."""

import pytest
import yaml
from pydantic import ValidationError

from forum_client.config import ClientConfig, load_config


def test_load_config_from_yaml(tmp_path):
    config_data = {
        "api": {"url": "https://forum.example.com/", "request_timeout_seconds": 3},
        "logging": {"level": "debug", "format": "json"},
    }
    path = tmp_path / "client.yaml"
    path.write_text(yaml.dump(config_data))

    cfg = load_config(path)
    assert cfg.api.url == "https://forum.example.com"
    assert cfg.api.request_timeout_seconds == 3
    assert cfg.logging.level == "debug"
    assert cfg.logging.format == "json"


def test_load_config_defaults():
    cfg = load_config()
    assert cfg == ClientConfig()
    assert cfg.api.url == "http://localhost:8000"
    assert cfg.api.verify_tls is True
    assert cfg.logging.format == "text"


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == ClientConfig()


def test_load_config_file_not_found():
    with pytest.raises(FileNotFoundError):
        load_config("/nonexistent/path.yaml")


def test_invalid_log_format_rejected(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text(yaml.dump({"logging": {"format": "xml"}}))
    with pytest.raises(ValidationError):
        load_config(path)
