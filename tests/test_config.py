"""Tests for configuration and the command line launcher."""

from pathlib import Path

from core.config import Config
from interfaces.mimeproxy.__main__ import build_parser, resolve_settings


def test_defaults_without_file(tmp_path: Path) -> None:
    config = Config(str(tmp_path / "absent.toml"))
    assert config.get_config_value_by_path("proxy.port") == 8080
    assert config.get_config_value_by_path("api.port") == 8443
    assert config.get_config_value_by_path("mime.search_url") == "https://www.google.com/search?q={query}"


def test_file_values_merge_over_defaults(tmp_path: Path) -> None:
    config_file = tmp_path / "mimeproxy.toml"
    config_file.write_text("""
[proxy]
port = 9090

[MIME]
search_url = "https://duckduckgo.com/?q={query}"
""")
    config = Config(str(config_file))
    assert config.get_config_value_by_path("proxy.port") == 9090
    assert config.get_config_value_by_path("proxy.host") == "127.0.0.1"
    assert config.get_config_value_by_path("mime.search_url") == "https://duckduckgo.com/?q={query}"
    assert config.get_config_value_by_path("mime.extension_name") == "MIME Type Generator"


def test_invalid_file_keeps_defaults(tmp_path: Path, capsys) -> None:
    config_file = tmp_path / "mimeproxy.toml"
    config_file.write_text("[proxy\nport = ")
    config = Config(str(config_file))
    assert config.get_config_value_by_path("proxy.port") == 8080
    assert "[~] Failed to load configuration" in capsys.readouterr().out


def test_config_file_lookup(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "mimeproxy.toml").write_text("[api]\nport = 9443\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)
    assert Config().get_config_value_by_path("api.port") == 9443


def test_command_line_overrides_config(tmp_path: Path) -> None:
    config = Config(str(tmp_path / "absent.toml"))
    args = build_parser().parse_args(["--proxy-port", "8181", "--api-host", "0.0.0.0"])
    settings = resolve_settings(args, config)
    assert settings["proxy_port"] == 8181
    assert settings["api_host"] == "0.0.0.0"
    assert settings["api_port"] == 8443
    assert settings["proxy_host"] == "127.0.0.1"
