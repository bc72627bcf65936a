"""Unit tests for careerdesk.engine.config — CareerDeskConfig and loading."""

import pytest

import careerdesk.engine.config as cfg_mod
from careerdesk.engine.config import (
    BackendConfig,
    CareerDeskConfig,
    UIConfig,
    get_config,
    get_environment,
    load_config,
)
from careerdesk.engine.errors import CareerDeskConfigError


class TestCareerDeskConfig:
    """Test the pydantic models behind careerdesk.yaml."""

    def test_defaults(self):
        cfg = CareerDeskConfig()
        assert cfg.name == "CareerDesk"
        assert cfg.environment == "dev"
        assert cfg.ui.default_page_size == 10
        assert cfg.ui.pagination_window == 1
        assert cfg.backend.tables["mentors"] == "career_mentors"
        assert cfg.logging.retention.security_days == 365

    def test_invalid_environment(self):
        with pytest.raises(ValueError, match="dev/staging/prod"):
            CareerDeskConfig(environment="test")

    def test_invalid_theme(self):
        with pytest.raises(ValueError, match="default_theme"):
            UIConfig(default_theme="neon")

    def test_invalid_page_size(self):
        with pytest.raises(ValueError, match="default_page_size"):
            UIConfig(default_page_size=0)

    def test_zero_window_allowed(self):
        assert UIConfig(pagination_window=0).pagination_window == 0

    def test_api_key_from_env(self, monkeypatch):
        monkeypatch.setenv("MY_KEY", "secret")
        assert BackendConfig(api_key_env="MY_KEY").api_key == "secret"
        monkeypatch.delenv("MY_KEY")
        assert BackendConfig(api_key_env="MY_KEY").api_key is None


class TestLoadConfig:
    def test_load_from_file(self, project_root):
        cfg = load_config(str(project_root / "careerdesk.yaml"))
        assert cfg.name == "TestDesk"
        assert cfg.version == "2.0.0"
        assert cfg.environment == "staging"
        assert cfg.backend.url == "https://db.example.com"
        assert cfg.ui.default_page_size == 5
        assert cfg.ui.default_theme == "primary"

    def test_missing_file_gives_defaults(self, tmp_path):
        cfg = load_config(str(tmp_path / "nope.yaml"))
        assert cfg == CareerDeskConfig()

    def test_auto_discovery(self, project_root, monkeypatch):
        monkeypatch.chdir(project_root)
        assert load_config().name == "TestDesk"

    def test_unparseable_yaml(self, tmp_path):
        path = tmp_path / "careerdesk.yaml"
        path.write_text("platform: [unclosed\n", encoding="utf-8")
        with pytest.raises(CareerDeskConfigError) as exc_info:
            load_config(str(path))
        assert exc_info.value.config_path == str(path)

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "careerdesk.yaml"
        path.write_text("ui:\n  default_theme: neon\n", encoding="utf-8")
        with pytest.raises(CareerDeskConfigError, match="default_theme"):
            load_config(str(path))

    def test_get_config_caches(self, project_root, monkeypatch):
        monkeypatch.chdir(project_root)
        first = get_config()
        assert get_config() is first
        assert cfg_mod._config is first
        assert get_environment() == "staging"
