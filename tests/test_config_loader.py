"""Tests for the unified config loader."""

from pathlib import Path
from unittest.mock import patch

import pytest

from ytcaptions.cache.store import CacheConfig
from ytcaptions.config.loader import (
    ConfigSource,
    YtCaptionsConfig,
    _coerce,
    _find_project_config,
    _flatten_yaml,
    _get_root_dir,
    _get_user_config_path,
    _load_yaml_config,
    _resolve_config,
    clear_config_cache,
    get_config,
    get_root_dir,
)


@pytest.fixture
def no_user_config(tmp_path):
    with patch("ytcaptions.config.loader._get_user_config_path") as mock_user:
        mock_user.return_value = tmp_path / "nonexistent" / "config.yaml"
        yield


class TestYtCaptionsConfig:
    """Tests for YtCaptionsConfig dataclass."""

    def test_defaults(self):
        config = YtCaptionsConfig(root_dir=Path("/tmp/root"))
        assert config.cache == CacheConfig()
        assert config.default_language == "en"
        assert config.client_timeout == 30
        assert config.source == ConfigSource.DEFAULT

    def test_repr(self):
        config = YtCaptionsConfig(root_dir=Path("/tmp/root"), source=ConfigSource.USER)
        assert "source='user'" in repr(config)

    def test_is_frozen(self):
        config = YtCaptionsConfig(root_dir=Path("/tmp/root"))
        with pytest.raises(AttributeError):
            config.default_language = "ja"  # type: ignore


class TestLoadYamlConfig:
    """Tests for _load_yaml_config."""

    def test_nonexistent_file(self, tmp_path):
        assert _load_yaml_config(tmp_path / "nonexistent.yaml") is None

    def test_valid_yaml(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("default_language: ja\ncache:\n  max_keys: 5\n")
        assert _load_yaml_config(config_file) == {
            "default_language": "ja",
            "cache": {"max_keys": 5},
        }

    def test_empty_yaml(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")
        assert _load_yaml_config(config_file) == {}

    def test_not_a_dict(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- item1\n- item2\n")
        assert _load_yaml_config(config_file) is None

    def test_malformed_yaml(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("cache: [unclosed\n")
        assert _load_yaml_config(config_file) is None


class TestFlattenAndCoerce:
    """Tests for _flatten_yaml and _coerce."""

    def test_flatten(self):
        flat = _flatten_yaml(
            {"client_timeout": 10, "cache": {"enabled": False, "unknown": 1}, "other": 2}
        )
        assert flat == {"client_timeout": 10, "cache.enabled": False}

    def test_flatten_ignores_non_dict_section(self):
        assert _flatten_yaml({"cache": "nope"}) == {}

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("true", True), ("1", True), ("YES", True), ("off", False), ("0", False), (False, False)],
    )
    def test_coerce_bool(self, value, expected):
        assert _coerce(value, bool) is expected

    def test_coerce_int(self):
        assert _coerce("42", int) == 42
        assert _coerce(7, int) == 7

    @pytest.mark.parametrize(("value", "kind"), [("maybe", bool), ("abc", int), ("-1", int), (True, int), ("  ", str)])
    def test_coerce_invalid(self, value, kind):
        with pytest.raises(ValueError):
            _coerce(value, kind)


class TestFindProjectConfig:
    """Tests for _find_project_config."""

    def test_finds_config_in_parent(self, tmp_path, monkeypatch):
        config_dir = tmp_path / ".ytcaptions"
        config_dir.mkdir()
        config_file = config_dir / "config.yaml"
        config_file.write_text("default_language: ja\n")

        subdir = tmp_path / "src" / "module"
        subdir.mkdir(parents=True)
        monkeypatch.chdir(subdir)

        assert _find_project_config() == config_file

    def test_no_config_found(self, tmp_path, monkeypatch):
        subdir = tmp_path / "project"
        subdir.mkdir()
        monkeypatch.chdir(subdir)
        assert _find_project_config() is None


class TestRootDir:
    """Tests for root directory resolution."""

    def test_env_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv("YTCAPTIONS_ROOT", str(tmp_path / "custom"))
        assert _get_root_dir() == (tmp_path / "custom").resolve()
        assert _get_user_config_path() == (tmp_path / "custom").resolve() / "config.yaml"

    def test_default(self, monkeypatch):
        monkeypatch.delenv("YTCAPTIONS_ROOT", raising=False)
        with patch("ytcaptions.config.loader.sys.platform", "linux"):
            assert _get_root_dir() == Path.home() / ".ytcaptions"

    def test_get_root_dir_creates_directory(self, tmp_path, monkeypatch):
        root = tmp_path / "created"
        monkeypatch.setenv("YTCAPTIONS_ROOT", str(root))
        clear_config_cache()
        assert get_root_dir() == root.resolve()
        assert root.is_dir()

    def test_get_root_dir_without_create(self, tmp_path, monkeypatch):
        root = tmp_path / "lazy"
        monkeypatch.setenv("YTCAPTIONS_ROOT", str(root))
        clear_config_cache()
        assert get_root_dir(ensure_exists=False) == root.resolve()
        assert not root.exists()


class TestResolveConfig:
    """Tests for _resolve_config."""

    def test_default_fallback(self, tmp_path, monkeypatch, no_user_config):
        monkeypatch.chdir(tmp_path)
        config = _resolve_config()
        assert config.cache == CacheConfig()
        assert config.default_language == "en"
        assert config.source == ConfigSource.DEFAULT

    def test_env_takes_priority(self, tmp_path, monkeypatch, no_user_config):
        monkeypatch.setenv("YTCAPTIONS_CACHE_MAX_KEYS", "5")
        monkeypatch.setenv("YTCAPTIONS_CACHE_ENABLED", "false")

        config_dir = tmp_path / ".ytcaptions"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("cache:\n  max_keys: 50\n")
        monkeypatch.chdir(tmp_path)

        config = _resolve_config()
        assert config.cache.max_keys == 5
        assert config.cache.enabled is False
        assert config.source == ConfigSource.ENV

    def test_project_config(self, tmp_path, monkeypatch, no_user_config):
        config_dir = tmp_path / ".ytcaptions"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text(
            "default_language: ja\ncache:\n  default_ttl: 120\n"
        )
        monkeypatch.chdir(tmp_path)

        config = _resolve_config()
        assert config.default_language == "ja"
        assert config.cache.default_ttl == 120
        assert config.cache.max_keys == 1000
        assert config.source == ConfigSource.PROJECT

    def test_settings_merge_across_sources(self, tmp_path, monkeypatch):
        """Each setting comes from the highest source that defines it."""
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".ytcaptions").mkdir()
        (tmp_path / ".ytcaptions" / "config.yaml").write_text("client_timeout: 60\n")

        user_config = tmp_path / "user.yaml"
        user_config.write_text("client_timeout: 10\ndefault_language: fr\n")

        with patch("ytcaptions.config.loader._get_user_config_path", return_value=user_config):
            config = _resolve_config()

        assert config.client_timeout == 60
        assert config.default_language == "fr"
        assert config.source == ConfigSource.PROJECT

    def test_user_config(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        user_config = tmp_path / "user.yaml"
        user_config.write_text("cache:\n  check_period: 30\n")

        with patch("ytcaptions.config.loader._get_user_config_path", return_value=user_config):
            config = _resolve_config()

        assert config.cache.check_period == 30
        assert config.source == ConfigSource.USER

    def test_invalid_value_falls_through(self, tmp_path, monkeypatch, no_user_config, caplog):
        monkeypatch.setenv("YTCAPTIONS_CLIENT_TIMEOUT", "soon")
        monkeypatch.chdir(tmp_path)

        config = _resolve_config()

        assert config.client_timeout == 30
        assert config.source == ConfigSource.DEFAULT
        assert "Ignoring invalid client_timeout" in caplog.text


class TestGetConfig:
    """Tests for get_config."""

    def test_caches_result(self):
        clear_config_cache()
        with patch("ytcaptions.config.loader._resolve_config") as mock_resolve:
            mock_resolve.return_value = YtCaptionsConfig(root_dir=Path("/cached"))
            config1 = get_config()
            config2 = get_config()

        assert config1 is config2
        mock_resolve.assert_called_once()

    def test_clear_cache(self):
        clear_config_cache()
        with patch("ytcaptions.config.loader._resolve_config") as mock_resolve:
            mock_resolve.return_value = YtCaptionsConfig(root_dir=Path("/cached"))
            get_config()
            clear_config_cache()
            get_config()

        assert mock_resolve.call_count == 2
