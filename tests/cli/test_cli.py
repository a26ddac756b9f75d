"""Tests for optionfields CLI."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

from typer.testing import CliRunner

# Stderr is part of result.output; assertions on error text use it
runner = CliRunner()


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_version_flag(self) -> None:
        """--version shows version info."""
        from optionfields.cli import app

        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "optionfields version" in result.output

    def test_help_flag(self) -> None:
        """--help shows available commands."""
        from optionfields.cli import app

        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("validate", "schema", "ddl", "plugins"):
            assert command in result.output


class TestValidateCommand:
    """Tests for validate command."""

    def test_valid_schema(
        self,
        write_schema: Callable[[dict[str, Any]], Path],
        sample_definition: dict[str, Any],
    ) -> None:
        from optionfields.cli import app

        path = write_schema(sample_definition)
        result = runner.invoke(app, ["validate", "-s", str(path)])

        assert result.exit_code == 0
        assert "Schema valid: schema.yaml" in result.output
        assert "Backend: relational" in result.output
        assert "Sample: 1 field(s)" in result.output
        assert "Fingerprint: " in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        from optionfields.cli import app

        result = runner.invoke(app, ["validate", "-s", str(tmp_path / "nope.yaml")])

        assert result.exit_code == 1
        assert "Schema file not found" in result.output

    def test_invalid_settings(self, write_schema: Callable[[dict[str, Any]], Path]) -> None:
        from optionfields.cli import app

        path = write_schema({"backend": "graph", "lists": {"Sample": {}}})
        result = runner.invoke(app, ["validate", "-s", str(path)])

        assert result.exit_code == 1
        assert "Configuration errors:" in result.output
        assert "backend" in result.output

    def test_field_configuration_error(
        self,
        write_schema: Callable[[dict[str, Any]], Path],
        sample_definition: dict[str, Any],
    ) -> None:
        from optionfields.cli import app

        sample_definition["lists"]["Sample"]["fields"]["colors"]["is_indexed"] = True
        path = write_schema(sample_definition)
        result = runner.invoke(app, ["validate", "-s", str(path)])

        assert result.exit_code == 1
        assert "Configuration error: Sample.colors:" in result.output
        assert "unique or indexed" in result.output

    def test_same_definition_same_fingerprint(
        self,
        write_schema: Callable[[dict[str, Any]], Path],
        sample_definition: dict[str, Any],
    ) -> None:
        from optionfields.cli import app

        path = write_schema(sample_definition)
        first = runner.invoke(app, ["validate", "-s", str(path)])
        second = runner.invoke(app, ["validate", "-s", str(path)])

        assert first.output == second.output


class TestSchemaCommand:
    def test_prints_sdl(
        self,
        write_schema: Callable[[dict[str, Any]], Path],
        sample_definition: dict[str, Any],
    ) -> None:
        from optionfields.cli import app

        path = write_schema(sample_definition)
        result = runner.invoke(app, ["schema", "-s", str(path)])

        assert result.exit_code == 0
        assert "type OptionsSample_colors {" in result.output
        assert "input OptionsSampleInput_colors {" in result.output
        assert "input SampleWhereInput {" in result.output


class TestDdlCommand:
    def test_prints_create_table(
        self,
        write_schema: Callable[[dict[str, Any]], Path],
        sample_definition: dict[str, Any],
    ) -> None:
        from optionfields.cli import app

        path = write_schema(sample_definition)
        result = runner.invoke(app, ["ddl", "-s", str(path)])

        assert result.exit_code == 0
        assert 'CREATE TABLE "Sample"' in result.output
        assert "colors TEXT" in result.output
        assert result.output.rstrip().endswith(";")

    def test_create_tables(
        self,
        tmp_path: Path,
        write_schema: Callable[[dict[str, Any]], Path],
        sample_definition: dict[str, Any],
    ) -> None:
        from sqlalchemy import create_engine, inspect

        from optionfields.cli import app

        db_file = tmp_path / "items.db"
        path = write_schema(sample_definition)
        result = runner.invoke(
            app, ["ddl", "-s", str(path), "--create", "--url", f"sqlite:///{db_file}"]
        )

        assert result.exit_code == 0
        assert "Created 1 table(s)" in result.output
        engine = create_engine(f"sqlite:///{db_file}")
        assert inspect(engine).get_table_names() == ["Sample"]
        engine.dispose()

    def test_document_backend_rejected(
        self,
        write_schema: Callable[[dict[str, Any]], Path],
        sample_definition: dict[str, Any],
    ) -> None:
        from optionfields.cli import app

        sample_definition["backend"] = "document"
        path = write_schema(sample_definition)
        result = runner.invoke(app, ["ddl", "-s", str(path)])

        assert result.exit_code == 1
        assert "requires the relational backend" in result.output


class TestPluginsCommand:
    def test_lists_options(self) -> None:
        from optionfields.cli import app

        result = runner.invoke(app, ["plugins"])

        assert result.exit_code == 0
        assert "FIELD TYPES:" in result.output
        assert "Options" in result.output
        assert "[document, relational]" in result.output


class TestLoggingFlags:
    def test_verbose_logs_assembly(
        self,
        write_schema: Callable[[dict[str, Any]], Path],
        sample_definition: dict[str, Any],
    ) -> None:
        from optionfields.cli import app

        path = write_schema(sample_definition)
        result = runner.invoke(app, ["--verbose", "validate", "-s", str(path)])

        assert result.exit_code == 0
        assert "Schema assembled" in result.output
