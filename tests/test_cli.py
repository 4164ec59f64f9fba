"""Tests for the command-line interface."""

import json
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

from typer.testing import CliRunner

from paysurvey.cli import app

runner = CliRunner()


class TestReportCommand:
    """Tests for `paysurvey report`."""

    def test_chart_mode(self, survey_file: Path, tmp_path: Path) -> None:
        """Test that chart mode writes both images."""
        out = tmp_path / "out"
        result = runner.invoke(
            app,
            ["report", "--input", str(survey_file), "--output-dir", str(out)],
        )

        assert result.exit_code == 0, result.output
        assert (out / "income_by_industry.png").exists()
        assert (out / "income_by_experience.png").exists()

    def test_json_mode(self, survey_file: Path, tmp_path: Path) -> None:
        """Test that json mode writes aggregate exports."""
        out = tmp_path / "out"
        result = runner.invoke(
            app,
            [
                "report",
                "-i",
                str(survey_file),
                "-o",
                str(out),
                "--mode",
                "json",
            ],
        )

        assert result.exit_code == 0, result.output
        payload = json.loads((out / "income_by_industry.json").read_text())
        assert payload["rows"][0]["industry"] == "Computing or Tech"

    def test_table_mode(self, survey_file: Path, tmp_path: Path) -> None:
        """Test that table mode prints summaries and writes nothing."""
        out = tmp_path / "out"
        result = runner.invoke(
            app,
            ["report", "-i", str(survey_file), "-o", str(out), "-m", "table"],
        )

        assert result.exit_code == 0, result.output
        assert "Computing or Tech" in result.output
        assert not out.exists()

    def test_invalid_mode(self, survey_file: Path) -> None:
        """Test that an unknown mode exits with an error."""
        result = runner.invoke(
            app, ["report", "-i", str(survey_file), "--mode", "pdf"]
        )
        assert result.exit_code == 1
        assert "Invalid mode" in result.output

    def test_missing_input(self, tmp_path: Path) -> None:
        """Test that a missing export exits with an error."""
        result = runner.invoke(
            app,
            ["report", "-i", str(tmp_path / "missing.csv"), "-o", str(tmp_path)],
        )
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_no_input_or_config(self) -> None:
        """Test that either --input or --config is required."""
        result = runner.invoke(app, ["report"])
        assert result.exit_code == 1
        assert "--input or --config" in result.output

    def test_config_file(self, survey_file: Path, tmp_path: Path) -> None:
        """Test running from a YAML config."""
        out = tmp_path / "from-config"
        config_path = tmp_path / "report.yaml"
        config_path.write_text(
            f"input:\n  path: {survey_file}\n"
            f"report:\n  output_dir: {out}\n  image_format: svg\n"
        )

        result = runner.invoke(app, ["report", "--config", str(config_path)])

        assert result.exit_code == 0, result.output
        assert (out / "income_by_industry.svg").exists()

    def test_schema_error(self, tmp_path: Path) -> None:
        """Test that a malformed export exits with a schema error."""
        path = tmp_path / "short.csv"
        path.write_text("Timestamp,How old are you?\n2021,25-34\n")

        result = runner.invoke(app, ["report", "-i", str(path), "-o", str(tmp_path)])

        assert result.exit_code == 1
        assert "Schema error" in result.output


class TestCheckCommand:
    """Tests for `paysurvey check`."""

    def test_check(self, survey_file: Path) -> None:
        """Test that check prints normalization counts."""
        result = runner.invoke(app, ["check", "--input", str(survey_file)])

        assert result.exit_code == 0, result.output
        assert "Retained records" in result.output
        assert "usable" in result.output

    def test_check_lenient_header(self, tmp_path: Path) -> None:
        """Test that --lenient-header accepts any 18-column header."""
        path = tmp_path / "renamed.csv"
        header = ",".join(f"q{i}" for i in range(18))
        path.write_text(header + "\n" + "," * 17 + "\n")

        strict = runner.invoke(app, ["check", "-i", str(path)])
        lenient = runner.invoke(app, ["check", "-i", str(path), "--lenient-header"])

        assert strict.exit_code == 1
        assert lenient.exit_code == 0, lenient.output
