"""Integration tests for CLI commands using CliRunner."""

import json
from typer.testing import CliRunner

# Import the app directly
from recordlite.cli.main import app
from recordlite.compiler import compile_view_def
from recordlite.loader import load_view_def

runner = CliRunner()

EVENTS = {
    "Name": "events",
    "Columns": [{"Name": "ts", "Expr": "json_extract(raw,'$.ts')", "with_index": True}],
}


class TestCLIIntegration:
    """CLI integration tests using CliRunner."""

    def test_compile_from_stdin(self):
        """The script is printed to stdout."""
        payload = json.dumps(EVENTS)
        result = runner.invoke(app, ["compile"], input=payload)

        assert result.exit_code == 0
        assert result.stdout == compile_view_def(load_view_def(payload)) + "\n"
        assert "_col_expr_ts_bd893ed513bf00ae717d29fd81766926ae268d0c" in result.stdout

    def test_compile_from_dash(self):
        """A '-' path reads stdin."""
        result = runner.invoke(app, ["compile", "-"], input=json.dumps(EVENTS))
        assert result.exit_code == 0
        assert result.stdout.startswith("BEGIN EXCLUSIVE;")

    def test_compile_from_file(self, tmp_path):
        """Descriptions can be read from a path argument."""
        path = tmp_path / "events.json"
        path.write_text(json.dumps(EVENTS))

        result = runner.invoke(app, ["compile", str(path)])
        assert result.exit_code == 0
        assert "CREATE TABLE IF NOT EXISTS events_raw" in result.stdout
        assert result.stdout.endswith("COMMIT;\n")

    def test_compile_to_output_file(self, tmp_path):
        """--output writes the script to a file."""
        output = tmp_path / "events.sql"
        result = runner.invoke(
            app, ["compile", "--output", str(output)], input=json.dumps(EVENTS)
        )

        assert result.exit_code == 0
        assert output.read_text().startswith("BEGIN EXCLUSIVE;")
        assert "BEGIN EXCLUSIVE;" not in result.stdout

    def test_switch_options(self):
        """Command line switches override the description."""
        result = runner.invoke(
            app,
            ["compile", "--skip-triggers", "--unsafe-drop-orphan-indices"],
            input=json.dumps(EVENTS),
        )

        assert result.exit_code == 0
        assert "CREATE TRIGGER" not in result.stdout
        assert "DELETE FROM sqlite_master" in result.stdout

    def test_skip_indices_option(self):
        """--skip-indices drops the index block."""
        result = runner.invoke(
            app, ["compile", "--skip-indices"], input=json.dumps(EVENTS)
        )
        assert result.exit_code == 0
        assert "CREATE INDEX" not in result.stdout

    def test_missing_file(self, tmp_path):
        """An unreadable path exits with an error."""
        result = runner.invoke(app, ["compile", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "Failed opening path" in result.output

    def test_invalid_json(self):
        """Malformed input exits with an error."""
        result = runner.invoke(app, ["compile"], input="{not json")
        assert result.exit_code == 1
        assert "Failed reading stdin" in result.output

    def test_invalid_utf8_stdin(self):
        """Undecodable stdin exits with an error."""
        result = runner.invoke(app, ["compile"], input=b'{"name": "ev\xff"}')
        assert result.exit_code == 1
        assert "Failed reading stdin" in result.output

    def test_null_columns(self):
        """A null column list compiles like an empty one."""
        result = runner.invoke(
            app, ["compile"], input='{"name": "events", "columns": null}'
        )
        assert result.exit_code == 0
        assert "  id,\n  raw\nFROM events_raw;" in result.stdout

    def test_empty_view_name(self):
        """A description without a name fails to compile."""
        result = runner.invoke(app, ["compile"], input='{"columns": []}')
        assert result.exit_code == 1
        assert "Failed compiling table" in result.output

    def test_strict_option(self):
        """--strict rejects names that are not plain identifiers."""
        payload = json.dumps({"name": "my-events"})

        assert runner.invoke(app, ["compile"], input=payload).exit_code == 0
        result = runner.invoke(app, ["compile", "--strict"], input=payload)
        assert result.exit_code == 1

    def test_config_file(self, tmp_path):
        """recordlite.toml in the working directory is applied."""
        (tmp_path / "recordlite.toml").write_text("skip_triggers = true\n")

        result = runner.invoke(app, ["compile"], input=json.dumps(EVENTS))
        assert result.exit_code == 0
        assert "CREATE TRIGGER" not in result.stdout

    def test_explicit_missing_config(self, tmp_path):
        """A missing --config file exits with an error."""
        result = runner.invoke(
            app,
            ["compile", "--config", str(tmp_path / "nope.toml")],
            input=json.dumps(EVENTS),
        )
        assert result.exit_code == 1
        assert "Config file not found" in result.output

    def test_verbose(self):
        """--verbose still compiles."""
        result = runner.invoke(app, ["-v", "compile"], input=json.dumps(EVENTS))
        assert result.exit_code == 0
        assert "COMMIT;" in result.stdout

    def test_indices_command(self):
        """The indices command lists indexed columns."""
        result = runner.invoke(app, ["indices"], input=json.dumps(EVENTS))

        assert result.exit_code == 0
        assert "Indices on events_raw" in result.stdout
        assert "ts" in result.stdout

    def test_indices_command_empty_name(self):
        """The indices command rejects descriptions that cannot compile."""
        result = runner.invoke(app, ["indices"], input='{"columns": []}')
        assert result.exit_code == 1
        assert "Invalid view description" in result.output
        assert "Indices on" not in result.output

    def test_indices_command_without_indices(self):
        """The indices command reports when nothing is indexed."""
        result = runner.invoke(app, ["indices"], input='{"name": "events"}')
        assert result.exit_code == 0
        assert "No indexed columns" in result.stdout

    def test_version(self):
        """The version command prints the version."""
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "recordlite version" in result.stdout

    def test_no_command_shows_help(self):
        """Invoking without a command prints help."""
        result = runner.invoke(app, [])
        assert result.exit_code == 0
        assert "compile" in result.stdout
