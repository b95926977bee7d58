"""Tests for INI-backed settings, version stamping and validation."""

from pathlib import Path

import pytest


class TestAppSettings:
    """Test settings persistence."""

    def test_new_file_is_stamped_with_version(self, config_file: Path) -> None:
        from kingmaker_save.settings import CONFIG_VERSION, AppSettings

        AppSettings(config_file)
        assert "version=1" in config_file.read_text(encoding="utf-8")
        assert AppSettings(config_file).version == CONFIG_VERSION

    def test_value_helpers_come_from_settings_group(self) -> None:
        from kingmaker_save.settings import AppSettings
        from kingmaker_save.settings.base import SettingsGroup

        assert issubclass(AppSettings, SettingsGroup)
        assert "_get_str" not in vars(AppSettings)
        assert "_get_bool" not in vars(AppSettings)
        assert not hasattr(AppSettings, "is_first_run")
        assert not hasattr(AppSettings, "get_settings_file_path")

    def test_defaults(self, config_file: Path) -> None:
        from kingmaker_save.settings import AppSettings

        settings = AppSettings(config_file)
        assert settings.paths.save_path is None
        assert settings.paths.output_dir == Path("Output")
        assert settings.paths.catalog_path is None
        assert settings.console_logging
        assert settings.console_log_level == "INFO"
        assert not settings.file_logging
        assert settings.log_file_path == "logs/kingmaker_save.csv"
        assert settings.warnings_max_lines == 1000

    def test_paths_round_trip_through_file(self, config_file: Path, tmp_path: Path) -> None:
        from kingmaker_save.settings import AppSettings

        settings = AppSettings(config_file)
        settings.paths.save_path = tmp_path / "Saved Games"
        settings.paths.output_dir = tmp_path / "reports"

        reloaded = AppSettings(config_file)
        assert reloaded.paths.save_path == tmp_path / "Saved Games"
        assert reloaded.paths.output_dir == tmp_path / "reports"

    def test_profiles_are_separate(self, config_file: Path) -> None:
        from kingmaker_save.settings import AppSettings

        AppSettings(config_file, profile="second").paths.output_dir = Path("elsewhere")
        assert AppSettings(config_file).paths.output_dir == Path("Output")
        assert AppSettings(config_file, profile="second").paths.output_dir == Path("elsewhere")

    def test_logging_level_validation(self, config_file: Path) -> None:
        from kingmaker_save.settings import AppSettings

        settings = AppSettings(config_file)
        settings.logging.console_log_level = "debug"
        assert settings.console_log_level == "DEBUG"
        settings.logging.console_log_level = "chatty"
        assert settings.console_log_level == "DEBUG"
        settings.logging.warnings_max_lines = 0
        assert settings.warnings_max_lines == 1000


class TestReportSettings:
    """Test report toggles and character lists."""

    def test_toggle_names_follow_report_options(self) -> None:
        from kingmaker_save.settings import ReportSettings

        names = ReportSettings.toggle_names()
        assert "include_kingdom_advisors" in names
        assert "show_feat_parameters" in names
        assert "character_order" not in names

    def test_toggles_round_trip(self, config_file: Path) -> None:
        from kingmaker_save.settings import AppSettings

        settings = AppSettings(config_file)
        settings.report.set_toggle("include_unclaimed_settlements", True)
        settings.report.set_toggle("include_inventory", False)

        options = AppSettings(config_file).to_options()
        assert options.include_unclaimed_settlements
        assert not options.include_inventory
        assert options.include_stats

    def test_unknown_toggle(self, config_file: Path) -> None:
        from kingmaker_save.settings import AppSettings

        settings = AppSettings(config_file)
        with pytest.raises(KeyError):
            settings.report.set_toggle("include_dragons", True)
        with pytest.raises(KeyError):
            settings.report.get_toggle("include_dragons")

    def test_character_lists(self, config_file: Path) -> None:
        from kingmaker_save.settings import AppSettings

        settings = AppSettings(config_file)
        settings.report.character_order = ["Valerie", "Linzi"]
        settings.report.excluded_characters = ["Harrim"]

        options = AppSettings(config_file).to_options()
        assert options.character_order == ["Valerie", "Linzi"]
        assert options.excluded_characters == ["Harrim"]


class TestConfigVersion:
    """Test configuration version stamping."""

    def test_unknown_version_is_restamped(self, config_file: Path) -> None:
        from kingmaker_save.settings import CONFIG_VERSION, AppSettings

        old = AppSettings(config_file)
        old.settings.setValue("app/version", "0.3")
        old.sync()

        assert AppSettings(config_file).version == CONFIG_VERSION

    def test_stored_values_survive_restamp(self, config_file: Path) -> None:
        from kingmaker_save.settings import CONFIG_VERSION, AppSettings

        old = AppSettings(config_file)
        old.paths.save_path = Path("D:/Saves")
        old.settings.setValue("app/version", "0.3")
        old.sync()

        reloaded = AppSettings(config_file)
        assert reloaded.version == CONFIG_VERSION
        assert reloaded.paths.save_path == Path("D:/Saves")


class TestValidation:
    """Test configuration validation."""

    def test_missing_save_path_is_a_warning(self, config_file: Path) -> None:
        from kingmaker_save.settings import AppSettings

        result = AppSettings(config_file).validate()
        assert result.is_valid
        assert "Save path not set" in result.warnings

    def test_missing_catalog_is_an_error(self, config_file: Path, tmp_path: Path) -> None:
        from kingmaker_save.settings import AppSettings

        settings = AppSettings(config_file)
        settings.paths.catalog_path = tmp_path / "missing.json"
        result = settings.validate()
        assert not result.is_valid
        assert result.errors[0].startswith("Catalog file does not exist")

    def test_output_path_must_be_a_directory(self, config_file: Path, tmp_path: Path) -> None:
        from kingmaker_save.settings import AppSettings

        blocker = tmp_path / "blocker.txt"
        blocker.write_text("x", encoding="utf-8")
        settings = AppSettings(config_file)
        settings.paths.output_dir = blocker
        assert not settings.validate().is_valid

    def test_ordered_and_excluded_character(self, config_file: Path) -> None:
        from kingmaker_save.settings import AppSettings

        settings = AppSettings(config_file)
        settings.report.character_order = ["Linzi"]
        settings.report.excluded_characters = ["linzi"]
        result = settings.validate()
        assert "Character is both ordered and excluded: linzi" in result.warnings
