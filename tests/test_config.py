from pathlib import Path

import pytest
from pydantic import ValidationError

from interfacery.config import Settings, load_settings
from interfacery.errors import ConfigurationError


def test_defaults():
    s = Settings(_env_file=None)
    assert s.dest_dir == Path("./pkg/handlers")
    assert s.default_http_method == "GET"
    assert s.output_suffix == "_handlers.go"

    cfg = s.inference_config()
    assert cfg.route_prefix == ""
    assert cfg.error_types == frozenset({"error"})
    assert "ctx" in cfg.reserved_names


def test_default_http_method_is_normalized():
    assert Settings(_env_file=None, default_http_method=" post ").default_http_method == "POST"
    with pytest.raises(ValidationError):
        Settings(_env_file=None, default_http_method="PATCH")


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("INTERFACERY_ROUTE_PREFIX", "/api")
    monkeypatch.setenv("INTERFACERY_ERROR_TYPES", '["error", "*AppError"]')
    monkeypatch.setenv("INTERFACERY_LOG_LEVEL", "debug")

    s = Settings(_env_file=None)
    assert s.route_prefix == "/api"
    assert s.error_types == ["error", "*AppError"]
    assert s.log_level == "DEBUG"


def test_route_prefix_argument_wins():
    s = Settings(_env_file=None, route_prefix="/api")
    assert s.inference_config().route_prefix == "/api"
    assert s.inference_config(route_prefix="/v2").route_prefix == "/v2"
    assert s.inference_config(route_prefix="").route_prefix == ""


def test_load_settings_reports_invalid_env(monkeypatch):
    monkeypatch.setenv("INTERFACERY_DEFAULT_HTTP_METHOD", "PATCH")
    with pytest.raises(ConfigurationError) as exc:
        load_settings(_env_file=None)
    assert "default_http_method" in str(exc.value)
