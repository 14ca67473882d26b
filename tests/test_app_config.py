import pytest

import app_config.loader
from app_config import CONFIG_PATH_ENV, AppConfig, get_config, load_config, resolve_config_path, set_config


@pytest.fixture(autouse=True)
def reset_config(monkeypatch):
    monkeypatch.setattr(app_config.loader, "_config", None)


def test_defaults():
    config = AppConfig()
    assert config.prices.default_data_source == "borsaitaliana"
    assert config.prices.request_timeout_seconds == 30
    assert config.cache.ttl_hours == 24
    assert config.valuation.equity_category == "stocks"
    assert config.display.palette == []


def test_load_config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "prices:\n"
        "  default_data_source: justetf\n"
        "  justetf_base_url: https://example.test/\n"
        "cache:\n"
        "  ttl_hours: 6\n"
        "logging:\n"
        "  level: debug\n",
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.prices.default_data_source == "justetf"
    assert config.prices.justetf_base_url == "https://example.test"
    assert config.cache.ttl_hours == 6
    assert config.logging.level == "DEBUG"
    assert get_config() is config


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == AppConfig()


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


@pytest.mark.parametrize("content", [
    "cache:\n  ttl_hours: 0\n",
    "prices:\n  default_data_source: yahoo\n",
    "prices:\n  justetf_base_url: ftp://example.test\n",
])
def test_invalid_values(tmp_path, content):
    path = tmp_path / "config.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid configuration"):
        load_config(path)


def test_get_config_before_load():
    with pytest.raises(RuntimeError):
        get_config()


def test_set_config():
    config = AppConfig()
    assert set_config(config) is config
    assert get_config() is config


def test_invalid_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("cache: [unclosed\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid configuration"):
        load_config(path)


def test_resolve_config_path(monkeypatch, tmp_path):
    monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)
    assert resolve_config_path() is None
    assert resolve_config_path("config.yaml").name == "config.yaml"

    monkeypatch.setenv(CONFIG_PATH_ENV, str(tmp_path / "env.yaml"))
    assert resolve_config_path() == tmp_path / "env.yaml"
    assert resolve_config_path("explicit.yaml").name == "explicit.yaml"
