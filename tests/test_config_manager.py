"""Config manager tests using real files in a temporary directory."""

import pytest

from wish_gallery.core.config_manager import GalleryConfig, load_config, save_config


class TestConfigManager:
    """Load/save round trips and fallback behaviour."""

    @pytest.fixture(autouse=True)
    def setup_config_env(self, tmp_path, monkeypatch):
        """Point CONFIG_FILE at a temporary file for every test."""
        config_dir = tmp_path / '.wish_gallery'
        config_dir.mkdir()
        config_file = config_dir / 'config.ini'

        monkeypatch.setattr('wish_gallery.core.config_manager.CONFIG_FILE', str(config_file))

        yield config_file

    def test_load_config_nonexistent_file(self, setup_config_env):
        assert not setup_config_env.exists()

        config = load_config()

        assert config == GalleryConfig()
        assert config.max_images == 5
        assert config.max_size_mb == 2
        assert config.auto_advance_ms == 5000
        assert config.reduce_motion == "system"
        # load_config never creates the file
        assert not setup_config_env.exists()

    def test_save_and_load_config(self, setup_config_env):
        test_config = GalleryConfig(
            max_images=8,
            max_size_mb=4,
            auto_advance_ms=3000,
            transition_ms=250,
            motion_delay_ms=50,
            motion_duration_ms=6000,
            reduce_motion="on",
            last_open_dir="/home/user/Pictures",
        )

        save_config(test_config)
        assert setup_config_env.exists()

        assert load_config() == test_config

    def test_save_writes_settings_section(self, setup_config_env):
        save_config(GalleryConfig())

        content = setup_config_env.read_text()
        assert "[Settings]" in content
        assert "max_images = 5" in content
        assert "reduce_motion = system" in content

    @pytest.mark.parametrize("bad_value", ["0", "-3", "lots"])
    def test_invalid_integer_falls_back_to_default(self, setup_config_env, bad_value):
        setup_config_env.write_text(f"[Settings]\nmax_images = {bad_value}\nmax_size_mb = 3\n")

        config = load_config()

        assert config.max_images == 5
        assert config.max_size_mb == 3

    def test_invalid_reduce_motion_mode(self, setup_config_env):
        setup_config_env.write_text("[Settings]\nreduce_motion = sometimes\n")
        assert load_config().reduce_motion == "system"

    def test_reduce_motion_is_case_insensitive(self, setup_config_env):
        setup_config_env.write_text("[Settings]\nreduce_motion = OFF\n")
        assert load_config().reduce_motion == "off"

    def test_missing_section_uses_defaults(self, setup_config_env):
        setup_config_env.write_text("[Other]\nkey = value\n")
        assert load_config() == GalleryConfig()

    def test_corrupted_file_returns_defaults(self, setup_config_env):
        setup_config_env.write_text("this is not an ini file\n[[[")
        assert load_config() == GalleryConfig()

    def test_unicode_directory(self, setup_config_env):
        save_config(GalleryConfig(last_open_dir="/home/user/Bilder/Geburtstag 🎂"))
        assert load_config().last_open_dir == "/home/user/Bilder/Geburtstag 🎂"
