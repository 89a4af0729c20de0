"""Test configuration management."""

from pathlib import Path

import pytest

from gitnova.config.config import Config, ConfigParseError, ConfigValidationError
from gitnova.config.paths import default_config_path


@pytest.fixture(autouse=True)
def _isolated_singleton(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test without a cached configuration instance."""
    monkeypatch.setattr(Config, "_instance", None)
    monkeypatch.setattr(Config, "_loaded_from", None)


def test_default_config(portable_repo_root: Path) -> None:
    """Test default configuration creation at portable repo location."""
    _ = portable_repo_root
    config = Config()
    assert config.default_cache_ttl_seconds == 60.0
    assert config.status_view_ttl_seconds == 0.5
    assert config.refresh_debounce_seconds == 0.15
    assert config.auto_refresh is True
    assert config.git_executable == "git"
    assert config.log_file is None

    written = config.save()
    assert written == default_config_path()
    assert default_config_path().exists()


def test_save_load_toml(portable_repo_root: Path) -> None:
    """Test saving and loading configuration in TOML format at repo path."""
    _ = portable_repo_root
    original_config = Config(
        status_view_ttl_seconds=1.25,
        auto_refresh=False,
        git_executable="/usr/local/bin/git",
        log_file=Path("/test/logs/gitnova.log"),
    )
    _ = original_config.save()

    loaded_config = Config.load()

    assert loaded_config.status_view_ttl_seconds == 1.25
    assert loaded_config.auto_refresh is False
    assert loaded_config.git_executable == "/usr/local/bin/git"
    assert loaded_config.log_file == Path("/test/logs/gitnova.log")


def test_missing_file_loads_defaults(tmp_path: Path) -> None:
    loaded = Config.load(tmp_path / "absent.toml")

    assert loaded == Config()


def test_load_is_cached_per_source(tmp_path: Path) -> None:
    source = tmp_path / "config.toml"
    _ = source.write_text("refresh_debounce_seconds = 0.3\n", encoding="utf-8")

    first = Config.load(source)
    second = Config.load(source)

    assert first is second
    assert first.refresh_debounce_seconds == 0.3


def test_integer_values_become_floats(tmp_path: Path) -> None:
    source = tmp_path / "config.toml"
    _ = source.write_text("default_cache_ttl_seconds = 30\n", encoding="utf-8")

    loaded = Config.load(source)

    assert loaded.default_cache_ttl_seconds == 30.0
    assert isinstance(loaded.default_cache_ttl_seconds, float)


def test_unknown_keys_are_ignored(tmp_path: Path) -> None:
    source = tmp_path / "config.toml"
    _ = source.write_text('theme = "dark"\nauto_refresh = false\n', encoding="utf-8")

    loaded = Config.load(source)

    assert loaded.auto_refresh is False


def test_blank_log_file_reads_as_none(tmp_path: Path) -> None:
    source = tmp_path / "config.toml"
    _ = source.write_text('log_file = "  "\n', encoding="utf-8")

    assert Config.load(source).log_file is None


def test_invalid_toml_raises_parse_error(tmp_path: Path) -> None:
    source = tmp_path / "config.toml"
    _ = source.write_text("auto_refresh = = true\n", encoding="utf-8")

    with pytest.raises(ConfigParseError):
        _ = Config.load(source)


@pytest.mark.parametrize(
    "content",
    [
        'status_view_ttl_seconds = "fast"\n',
        "default_cache_ttl_seconds = true\n",
        'auto_refresh = "yes"\n',
        'git_executable = ""\n',
    ],
)
def test_wrong_types_raise_validation_error(tmp_path: Path, content: str) -> None:
    source = tmp_path / "config.toml"
    _ = source.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigValidationError):
        _ = Config.load(source)


def test_rendered_file_documents_every_setting(portable_repo_root: Path) -> None:
    _ = portable_repo_root
    text = Config().save().read_text(encoding="utf-8")

    for key in (
        "default_cache_ttl_seconds",
        "status_view_ttl_seconds",
        "refresh_debounce_seconds",
        "auto_refresh",
        "git_executable",
        "git_timeout_seconds",
    ):
        assert f"{key} = " in text
    assert "\nlog_file = " not in text
