"""Tests for tessera.config module."""

from pathlib import Path

import pytest

from tessera.browser import SortBy, SortOrder
from tessera.config import Config, FilerConfig, NavigationConfig, get_default_data_dir
from tessera.entries import IMAGE_EXTENSIONS


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Point the config location at a temp directory."""
    config_dir = tmp_path / ".config" / "tessera"
    data_dir = tmp_path / ".local" / "share" / "tessera"
    monkeypatch.setattr("tessera.config.get_config_dir", lambda: config_dir)
    monkeypatch.setattr("tessera.config.get_config_path", lambda: config_dir / "config.toml")
    monkeypatch.setattr("tessera.config.get_default_data_dir", lambda: data_dir)
    return config_dir


class TestConfigDefaults:
    def test_default_start_directory(self):
        assert Config().start_directory == Path.home()

    def test_default_data_directory(self):
        assert Config().data_directory == get_default_data_dir()

    def test_get_tag_index_path(self):
        config = Config()
        assert config.get_tag_index_path() == config.data_directory / "tags.json"

    def test_default_navigation_config(self):
        nav = Config().navigation
        assert nav.enter_threshold == 5
        assert nav.wrap_navigation is False
        assert nav.skip_empty_siblings is True
        assert nav.history_limit == 0

    def test_default_filer_config(self):
        filer = Config().filer
        assert filer.show_hidden_files is False
        assert filer.sort_by == "name"
        assert filer.sort_order == "ascending"


class TestListOptions:
    def test_defaults(self):
        options = Config().list_options()
        assert options.show_hidden is False
        assert options.sort_by == SortBy.NAME
        assert options.sort_order == SortOrder.ASCENDING
        assert options.filter_extensions is None

    def test_images_only(self):
        config = Config(filer=FilerConfig(images_only=True, sort_by="size"))
        options = config.list_options()
        assert options.filter_extensions == IMAGE_EXTENSIONS
        assert options.sort_by == SortBy.SIZE


class TestConfigSaveLoad:
    def test_save_creates_file(self, tmp_path, config_dir):
        Config(start_directory=tmp_path, data_directory=tmp_path / "data").save()
        assert (config_dir / "config.toml").exists()

    def test_round_trip(self, tmp_path, config_dir):
        saved = Config(
            start_directory=tmp_path / "photos",
            data_directory=tmp_path / "data",
            navigation=NavigationConfig(
                enter_threshold=12,
                wrap_navigation=True,
                skip_empty_siblings=False,
                history_limit=50,
            ),
            filer=FilerConfig(
                show_hidden_files=True,
                sort_by="modified",
                sort_order="descending",
                images_only=True,
            ),
        )
        saved.save()

        loaded = Config.load()
        assert loaded.start_directory == saved.start_directory
        assert loaded.data_directory == saved.data_directory
        assert loaded.navigation == saved.navigation
        assert loaded.filer == saved.filer

    def test_load_creates_defaults_when_missing(self, config_dir):
        config = Config.load()
        assert (config_dir / "config.toml").exists()
        assert config.navigation.enter_threshold == 5

    def test_load_partial_config(self, tmp_path, config_dir):
        config_dir.mkdir(parents=True)
        (config_dir / "config.toml").write_text(
            f'start_directory = "{tmp_path}"\n[navigation]\nwrap_navigation = true\n'
        )

        config = Config.load()
        assert config.start_directory == tmp_path
        assert config.navigation.wrap_navigation is True
        # Defaults for missing fields
        assert config.navigation.enter_threshold == 5
        assert config.filer.sort_by == "name"

    def test_invalid_values_fall_back(self, config_dir):
        config_dir.mkdir(parents=True)
        (config_dir / "config.toml").write_text(
            '[navigation]\nenter_threshold = -3\n[filer]\nsort_by = "colour"\nsort_order = 7\n'
        )

        config = Config.load()
        assert config.navigation.enter_threshold == 0
        assert config.filer.sort_by == "name"
        assert config.filer.sort_order == "ascending"
