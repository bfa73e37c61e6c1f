"""
Tests for configuration loading
"""
import stat

import pytest
import yaml

from cloudflare_dyndns.lib import config as config_module
from cloudflare_dyndns.lib.config import Config, ConfigError, DEFAULT_BASE_URL, DEFAULT_IPIFY_URL


def write_config(path, data):
    path.write_text(yaml.safe_dump(data))
    return path


@pytest.fixture
def config_file(tmp_path):
    """Complete config file"""
    return write_config(tmp_path / ".cloudflare-dyndns", {
        'main': {
            'user_agent': "my-agent/2.0",
            'log_file_path': str(tmp_path),
            'home_gateway': "192.168.1.1",
        },
        'cloudflare': {
            'api_token': "file-token",
            'zone_id': "file-zone",
            'update_records': ["home.example.com", "vpn.example.com"],
        },
        'ipify': {
            'url': "https://ip.example.net",
        },
    })


def test_load_from_file(config_file, tmp_path):
    """Test loading every section of a config file"""
    config = Config.load(config_file)

    assert config.api_token == "file-token"
    assert config.zone_id == "file-zone"
    assert config.update_records == ["home.example.com", "vpn.example.com"]
    assert config.base_url == DEFAULT_BASE_URL
    assert config.user_agent == "my-agent/2.0"
    assert config.log_file_path == str(tmp_path)
    assert config.home_gateway == "192.168.1.1"
    assert config.ipify_url == "https://ip.example.net"
    assert config.source == config_file


def test_defaults_for_optional_values(tmp_path):
    """Test optional values fall back to defaults"""
    path = write_config(tmp_path / "minimal.yaml", {
        'cloudflare': {'api_token': "t", 'zone_id': "z", 'update_records': "a.example.com, b.example.com"},
    })

    config = Config.load(path)

    assert config.update_records == ["a.example.com", "b.example.com"]
    assert config.ipify_url == DEFAULT_IPIFY_URL
    assert config.log_file_path == "./"
    assert config.home_gateway == ""


def test_search_uses_first_existing_candidate(tmp_path, config_file, monkeypatch):
    """Test the candidate paths are searched in order"""
    missing = tmp_path / "missing"
    monkeypatch.setattr(config_module, "candidate_paths", lambda: [missing, config_file])

    assert Config.load().source == config_file


def test_no_config_file_found(tmp_path, monkeypatch):
    """Test a helpful error when no candidate exists"""
    monkeypatch.setattr(config_module, "candidate_paths", lambda: [tmp_path / "nope"])

    with pytest.raises(ConfigError, match="Config file not found in paths"):
        Config.load()


def test_unreadable_explicit_path(tmp_path):
    """Test an explicit path that does not exist"""
    with pytest.raises(ConfigError, match="cannot be loaded"):
        Config.load(tmp_path / "does-not-exist")


@pytest.mark.parametrize("content, message", [
    ("cloudflare: [unclosed", "not valid YAML"),
    ("- just\n- a list\n", "must contain a YAML mapping"),
    ("cloudflare: foo\n", "section .cloudflare. must be a mapping"),
    ("main: [1]\n", "section .main. must be a mapping"),
    ("ipify: 3\n", "section .ipify. must be a mapping"),
    ("cloudflare:\n  update_records: 5\n", "update_records must be a list"),
    ("cloudflare:\n  update_records: {a: b}\n", "update_records must be a list"),
])
def test_invalid_file_content(tmp_path, content, message):
    """Test malformed config files"""
    path = tmp_path / "bad.yaml"
    path.write_text(content)

    with pytest.raises(ConfigError, match=message):
        Config.load(path)


def test_toml_config_file_is_explained(tmp_path):
    """Test a TOML config file fails with a pointer to the YAML layout"""
    path = tmp_path / ".cloudflare-dyndns"
    path.write_text(
        '[main]\n'
        'user_agent = "cloudflare-dyndns/1.0.0"\n'
        '\n'
        '[cloudflare]\n'
        'api_token = "token"\n'
        'zone_id = "zone"\n'
        'update_records = ["home.example.com"]\n'
    )

    with pytest.raises(ConfigError, match="convert TOML files"):
        Config.load(path)


def test_missing_required_values(tmp_path):
    """Test every missing required value is named"""
    path = write_config(tmp_path / "empty.yaml", {'main': {'user_agent': "x"}})

    with pytest.raises(ConfigError) as exc_info:
        Config.load(path)

    message = str(exc_info.value)
    assert "cloudflare.api_token" in message
    assert "cloudflare.zone_id" in message
    assert "cloudflare.update_records" in message


def test_environment_overrides_file(config_file, monkeypatch):
    """Test environment variables take precedence over the file"""
    monkeypatch.setenv("CLOUDFLARE_API_TOKEN", "env-token")
    monkeypatch.setenv("CLOUDFLARE_ZONE_ID", "env-zone")
    monkeypatch.setenv("CLOUDFLARE_UPDATE_RECORDS", "x.example.com,y.example.com")
    monkeypatch.setenv("CLOUDFLARE_BASE_URL", "https://mockserver.com/client/v4")
    monkeypatch.setenv("DYNDNS_USER_AGENT", "env-agent")
    monkeypatch.setenv("DYNDNS_HOME_GATEWAY", "10.0.0.1")
    monkeypatch.setenv("IPIFY_URL", "https://env.example.net")

    config = Config.load(config_file)

    assert config.api_token == "env-token"
    assert config.zone_id == "env-zone"
    assert config.update_records == ["x.example.com", "y.example.com"]
    assert config.base_url == "https://mockserver.com/client/v4"
    assert config.user_agent == "env-agent"
    assert config.home_gateway == "10.0.0.1"
    assert config.ipify_url == "https://env.example.net"


def test_empty_log_path_from_environment(config_file, monkeypatch):
    """Test an empty log path in the environment disables the log file"""
    monkeypatch.setenv("DYNDNS_LOG_FILE_PATH", "")

    assert Config.load(config_file).log_file_path == ""


def test_environment_supplies_required_values(tmp_path, monkeypatch):
    """Test required values may come from the environment alone"""
    path = write_config(tmp_path / "partial.yaml", {'cloudflare': {'update_records': ["a.example.com"]}})
    monkeypatch.setenv("CLOUDFLARE_API_TOKEN", "env-token")
    monkeypatch.setenv("CLOUDFLARE_ZONE_ID", "env-zone")

    config = Config.load(path)

    assert config.api_token == "env-token"


def test_save_and_load(tmp_path, config):
    """Test a saved config loads back unchanged and is private"""
    path = config.save(tmp_path / "nested" / "config.yaml")

    assert stat.S_IMODE(path.stat().st_mode) == 0o600
    assert config.source == path
    assert Config.load(path) == config


def test_initialize_interactive(tmp_path, monkeypatch):
    """Test interactive setup writes a valid config"""
    answers = iter([
        "prompt-token",
        "prompt-zone",
        "home.example.com, vpn.example.com",
        "",
        str(tmp_path),
    ])
    monkeypatch.setattr(config_module.Prompt, "ask", lambda *args, **kwargs: next(answers))
    path = tmp_path / "init.yaml"

    config = Config.initialize_interactive(path)

    assert config.source == path
    loaded = Config.load(path)
    assert loaded.api_token == "prompt-token"
    assert loaded.update_records == ["home.example.com", "vpn.example.com"]
