"""Tests for the command line front end and logging setup."""

import logging
from pathlib import Path

from typer.testing import CliRunner

runner = CliRunner()


class TestParseCommand:
    """Test the parse command end to end."""

    def test_parse_writes_reports(self, save_dir: Path, catalog_file: Path, config_file: Path, tmp_path: Path) -> None:
        from kingmaker_save.cli import app

        output = tmp_path / "Output"
        result = runner.invoke(
            app,
            ["parse", str(save_dir), "-o", str(output), "--catalog", str(catalog_file), "--config", str(config_file)],
        )

        assert result.exit_code == 0, result.output
        assert "wrote 12 reports" in result.output
        assert (output / "CurrentState.json").is_file()
        assert (output / "CurrentState.txt").is_file()
        text = (output / "all_characters.txt").read_text(encoding="utf-8")
        assert "Character Name: Ekun (Human Fighter)" in text

    def test_parse_json_only(self, save_dir: Path, catalog_file: Path, config_file: Path, tmp_path: Path) -> None:
        from kingmaker_save.cli import app

        output = tmp_path / "Output"
        result = runner.invoke(
            app,
            [
                "parse", str(save_dir), "-o", str(output),
                "--catalog", str(catalog_file), "--config", str(config_file), "--no-text",
            ],
        )

        assert result.exit_code == 0, result.output
        assert not list(output.glob("*.txt"))

    def test_parse_missing_save_exits_with_error(self, config_file: Path, tmp_path: Path) -> None:
        from kingmaker_save.cli import app

        empty = tmp_path / "nothing"
        empty.mkdir()
        result = runner.invoke(app, ["parse", str(empty), "--config", str(config_file)])

        assert result.exit_code == 1

    def test_parse_uses_configured_save_path(self, save_dir: Path, catalog_file: Path, config_file: Path, tmp_path: Path) -> None:
        from kingmaker_save.cli import app
        from kingmaker_save.settings import AppSettings

        settings = AppSettings(config_file)
        settings.paths.save_path = save_dir
        settings.paths.output_dir = tmp_path / "configured"
        settings.paths.catalog_path = catalog_file

        result = runner.invoke(app, ["parse", "--config", str(config_file)])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "configured" / "kingdom_stats.json").is_file()

    def test_parse_defaults_to_saved_game_folder(
        self, save_dir: Path, catalog_file: Path, config_file: Path, tmp_path: Path, monkeypatch
    ) -> None:
        import shutil

        from kingmaker_save.cli import app
        from kingmaker_save.settings.paths import DEFAULT_SAVE_DIR

        work = tmp_path / "work"
        shutil.copytree(save_dir, work / DEFAULT_SAVE_DIR)
        monkeypatch.chdir(work)

        result = runner.invoke(app, ["parse", "--catalog", str(catalog_file), "--config", str(config_file)])

        assert result.exit_code == 0, result.output
        assert (work / "Output" / "CurrentState.json").is_file()

    def test_unresolved_items_produce_warnings_file(self, save_dir: Path, config_file: Path, tmp_path: Path) -> None:
        from kingmaker_save.cli import app

        output = tmp_path / "Output"
        # No catalog: every name is generic and the loader warns
        result = runner.invoke(
            app,
            [
                "parse", str(save_dir), "-o", str(output),
                "--catalog", str(tmp_path / "missing.json"), "--config", str(config_file),
            ],
        )

        assert result.exit_code == 0, result.output
        warnings = (output / "warnings.txt").read_text(encoding="utf-8")
        assert "Blueprint catalog not found" in warnings


class TestInspectCommand:
    """Test the inspect command."""

    def test_inspect(self, save_dir: Path) -> None:
        from kingmaker_save.cli import app

        result = runner.invoke(app, ["inspect", str(save_dir / "player.json"), "--depth", "1"])

        assert result.exit_code == 0, result.output
        assert "Root: Object" in result.output
        assert "Properties: 6 ($id, Money, GameTime, SharedStash, m_GlobalMap, Kingdom)" in result.output
        assert "  - Kingdom (Object)" in result.output

    def test_inspect_missing_file(self, tmp_path: Path) -> None:
        from kingmaker_save.cli import app

        result = runner.invoke(app, ["inspect", str(tmp_path / "nope.json")])
        assert result.exit_code == 1


class TestBuildCatalogCommand:
    """Test the build-catalog command."""

    def test_missing_directory(self, tmp_path: Path) -> None:
        from kingmaker_save.cli import app

        result = runner.invoke(app, ["build-catalog", str(tmp_path / "dump")])
        assert result.exit_code == 1

    def test_missing_index(self, tmp_path: Path) -> None:
        from kingmaker_save.cli import app

        result = runner.invoke(app, ["build-catalog", str(tmp_path), "-o", str(tmp_path / "out.json")])
        assert result.exit_code == 1

    def test_build(self, tmp_path: Path) -> None:
        from kingmaker_save.cli import app

        dump = tmp_path / "dump"
        dump.mkdir()
        (dump / "Blueprints.txt").write_text(f"Name\tGuid\nPowerAttack\t{'a' * 32}\n", encoding="utf-8")
        output = tmp_path / "blueprint_database.json"

        result = runner.invoke(app, ["build-catalog", str(dump), "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert "wrote 1 names" in result.output
        assert output.is_file()


class TestWarningCollector:
    """Test the warnings.txt buffer."""

    def test_collects_warnings_only(self) -> None:
        from kingmaker_save.utils import WarningCollector

        collector = WarningCollector(max_lines=2)
        logger = logging.getLogger("kingmaker_save.tests.collector")
        logger.addHandler(collector)
        try:
            logger.warning("first")
            logger.info("ignored")
            logger.error("second")
            logger.warning("third")
        finally:
            logger.removeHandler(collector)

        assert collector.messages() == ["ERROR: second", "WARNING: third"]
        collector.clear_buffer()
        assert collector.get_buffer() == []

    def test_file_logging_writes_csv(self, config_file: Path, tmp_path: Path) -> None:
        from kingmaker_save.settings import AppSettings
        from kingmaker_save.utils import setup_logging

        settings = AppSettings(config_file)
        settings.logging.file_logging = True
        settings.logging.log_file_path = str(tmp_path / "logs" / "run.csv")
        setup_logging(settings)
        logging.getLogger("kingmaker_save.tests").info('say "hi"')

        for handler in logging.getLogger().handlers:
            handler.flush()
        content = (tmp_path / "logs" / "run.csv").read_text(encoding="utf-8")
        assert '"say ""hi"""' in content
