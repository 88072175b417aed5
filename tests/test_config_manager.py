import configparser

import pytest

from spotify_insights.exceptions import ConfigurationError
from spotify_insights.models.config import AppConfig
from spotify_insights.models.stats import Statistic
from spotify_insights.storage.config_manager import ConfigManager


@pytest.fixture
def config_file(tmp_path):
    return tmp_path / "config" / "config.ini"


def test_missing_file_raises(config_file):
    with pytest.raises(ConfigurationError, match="init"):
        ConfigManager(config_file).load_config()


def test_save_then_load_uses_preset_defaults(config_file):
    ConfigManager(config_file).save_new_config({"client_id": "abc123"})

    config = ConfigManager(config_file).load_config()

    assert config.client_id == "abc123"
    assert config.preset == "top-favorites"
    assert config.request_timeout is None
    options = config.playlist_options()
    assert options.name == "My Top Favorite Songs"
    assert options.metrics == [
        Statistic.AVERAGE_POPULARITY,
        Statistic.AVERAGE_RELEASE_YEAR,
        Statistic.UNIQUE_ARTISTS,
        Statistic.AVERAGE_DURATION,
    ]
    assert options.require_population is False


def test_explicit_settings_override_preset(config_file):
    ConfigManager(config_file).save_new_config(
        {
            "client_id": "abc123",
            "preset": "discover",
            "playlist_name": "Mine",
            "metrics": ["unique_artists"],
            "metrics_require_population": True,
            "request_timeout": 15,
        }
    )

    config = ConfigManager(config_file).load_config()
    options = config.playlist_options()

    assert options.name == "Mine"
    assert options.description == "A custom playlist built from your top tracks"
    assert options.metrics == [Statistic.UNIQUE_ARTISTS]
    assert options.require_population is True
    assert config.request_timeout == 15.0


def test_env_client_id_overrides_file(config_file, monkeypatch):
    ConfigManager(config_file).save_new_config({"client_id": "fromfile"})
    monkeypatch.setenv("SPOTIFY_CLIENT_ID", "fromenv")

    assert ConfigManager(config_file).load_config().client_id == "fromenv"


def test_cli_options_override_everything(config_file, monkeypatch):
    ConfigManager(config_file).save_new_config({"client_id": "fromfile"})
    monkeypatch.setenv("SPOTIFY_CLIENT_ID", "fromenv")

    config = ConfigManager(config_file).load_config({"preset": "discover"})
    assert config.preset == "discover"
    assert config.playlist_options().metrics == [
        Statistic.AVERAGE_POPULARITY,
        Statistic.GENRE_DIVERSITY,
    ]


def test_missing_keys_are_migrated(config_file):
    config_file.parent.mkdir(parents=True)
    config_file.write_text("[DEFAULT]\nclient_id = abc123\n", encoding="utf-8")

    config = ConfigManager(config_file).load_config()

    assert config.redirect_uri == "http://127.0.0.1:8888/callback"
    parser = configparser.ConfigParser()
    parser.read(config_file)
    assert parser["DEFAULT"]["preset"] == "top-favorites"
    assert "metrics_require_population" in parser["DEFAULT"]


@pytest.mark.parametrize(
    "line",
    [
        "preset = nope",
        "metrics = average_popularity,bogus",
        "metrics = unique_artists,unique_artists",
        "request_timeout = -1",
        "request_timeout = soon",
        "redirect_uri = ftp://example.com",
        "client_id = not valid!",
    ],
)
def test_invalid_values_raise(config_file, line):
    config_file.parent.mkdir(parents=True)
    config_file.write_text(f"[DEFAULT]\n{line}\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        ConfigManager(config_file).load_config()


def test_empty_client_id_is_allowed(tmp_path):
    config = AppConfig(config_path=str(tmp_path))
    assert config.client_id == ""
