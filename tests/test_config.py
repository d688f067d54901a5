"""Configuration module unit tests"""

import pytest

from quire.config import Config
from quire.errors import ConfigException


@pytest.fixture
def config_file(tmp_path):
    return tmp_path / "config.toml"


def test_load_from_file(config_file):
    config_file.write_text(
        """
language = "nl"
languages = ["en"]
timezone = "Europe/Amsterdam"

[web]
port = 9000
allow_cors = true

[[projects]]
name = "demo"
environments = ["live", "staging"]
""",
        encoding="utf-8",
    )

    config = Config.load_from_file(str(config_file))

    assert config.languages == ["nl", "en"]
    assert config.web.port == 9000
    assert config.web.allow_cors
    assert config.web.token_cookie == "token"
    assert config.get_project("demo").default_environment == "live"
    assert config.get_project("other") is None
    assert str(config.get_timezone()) == "Europe/Amsterdam"


def test_defaults(config_file):
    config_file.write_text("", encoding="utf-8")

    config = Config.load_from_file(str(config_file))

    assert config.language == "en"
    assert config.projects == []
    assert config.database_path == "data/quire.db"


def test_missing_file_raises():
    with pytest.raises(ConfigException, match="not found"):
        Config.load_from_file("/nonexistent/config.toml")


def test_invalid_timezone_raises(config_file):
    config_file.write_text('timezone = "Mars/Olympus"\n', encoding="utf-8")

    with pytest.raises(ConfigException, match="timezone"):
        Config.load_from_file(str(config_file))


def test_duplicate_projects_raise(config_file):
    config_file.write_text(
        """
[[projects]]
name = "demo"

[[projects]]
name = "demo"
""",
        encoding="utf-8",
    )

    with pytest.raises(ConfigException, match="Duplicate"):
        Config.load_from_file(str(config_file))


def test_invalid_project_name_raises(config_file):
    config_file.write_text('[[projects]]\nname = "has space"\n', encoding="utf-8")

    with pytest.raises(ConfigException, match="projects"):
        Config.load_from_file(str(config_file))


def test_env_overrides_file(config_file, monkeypatch):
    config_file.write_text("[web]\nport = 9000\n", encoding="utf-8")
    monkeypatch.setenv("QUIRE_WEB__PORT", "9100")

    config = Config.load_from_file(str(config_file))

    assert config.web.port == 9100
