# tests/test_cli.py - Command line tests
"""
Tests for the pipecomp command line.
"""
import io
import json
import logging

import pytest

from pipecomp.cli import main


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Run each command away from local config files and restore logging."""
    monkeypatch.chdir(tmp_path)
    yield
    logger = logging.getLogger("pipecomp")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def typing_file(tmp_path):
    path = tmp_path / "pipeline.js"
    path.write_text("[{$search: {}}, {$li}]")
    return path


class TestCompleteCommand:
    """Tests for `pipecomp complete`."""

    def test_text_output(self, typing_file, capsys):
        assert main(["complete", str(typing_file), "-l", "1", "-c", "21"]) == 0

        out = capsys.readouterr().out
        assert "$limit  - limit num of docs" in out
        assert "$search" not in out
        assert "(1 suggestion)" in out

    def test_json_output(self, typing_file, capsys):
        assert main(["complete", str(typing_file), "-l", "1", "-c", "21", "-o", "json"]) == 0

        items = json.loads(capsys.readouterr().out)
        assert [i["label"]["label"] for i in items] == ["$limit"]
        assert items[0]["range"] == {
            "start_line": 1,
            "end_line": 1,
            "start_column": 18,
            "end_column": 21,
        }

    def test_no_suggestions(self, typing_file, capsys):
        assert main(["complete", str(typing_file), "-l", "1", "-c", "1"]) == 0
        assert "No suggestions." in capsys.readouterr().out

    def test_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("[{$search: {te}}]"))

        assert main(["complete", "-", "-l", "1", "-c", "15", "-o", "json"]) == 0
        items = json.loads(capsys.readouterr().out)
        assert [i["label"]["label"] for i in items] == ["text", "compound"]

    def test_missing_file(self, tmp_path, capsys):
        assert main(["complete", str(tmp_path / "nope.js"), "-l", "1", "-c", "1"]) == 1
        assert "File not found" in capsys.readouterr().err


class TestStagesCommand:
    """Tests for `pipecomp stages`."""

    def test_text_output(self, search_pipeline, capsys):
        assert main(["stages", str(search_pipeline)]) == 0
        assert capsys.readouterr().out.split() == ["$search", "$limit"]

    def test_json_output(self, search_pipeline, capsys):
        assert main(["stages", str(search_pipeline), "-o", "json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data == {"count": 2, "stages": ["$search", "$limit"]}

    def test_utf8_file(self, tmp_path, capsys):
        """Test a pipeline file with non-ASCII text."""
        path = tmp_path / "pipeline.js"
        path.write_text('// café ✖\n[{$limit: 1}]', encoding="utf-8")

        assert main(["stages", str(path)]) == 0
        assert capsys.readouterr().out.split() == ["$limit"]

    def test_no_stages(self, tmp_path, capsys):
        path = tmp_path / "empty.js"
        path.write_text("[]")

        assert main(["stages", str(path)]) == 0
        assert "No recognized stages." in capsys.readouterr().out


class TestContextCommand:
    """Tests for `pipecomp context`."""

    def test_stage_context(self, fixtures_dir, capsys):
        path = fixtures_dir / "typing_stage_body.js"
        assert main(["context", str(path), "-l", "4", "-c", "9"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["context"] == "stage $search"
        assert data["provider"] == "$search"
        assert data["cursor_node"]["name"] == "te"
        assert data["path"][:3] == ["Identifier", "Property", "ObjectExpression"]

    def test_config_disables_provider(self, tmp_path, fixtures_dir, capsys):
        config = tmp_path / "config.toml"
        config.write_text("[completion]\nstage_providers = []\n")
        path = fixtures_dir / "typing_stage_body.js"

        assert main(["--config", str(config), "context", str(path), "-l", "4", "-c", "9"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["context"] == "stage $search"
        assert data["provider"] is None


class TestGlobalOptions:
    """Tests for options shared by every command."""

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--version"])

        assert exc.value.code == 0
        assert "pipecomp" in capsys.readouterr().out

    def test_log_file(self, tmp_path, search_pipeline, capsys):
        log_file = tmp_path / "logs" / "pipecomp.log"

        assert main(["--debug", "--log-file", str(log_file), "stages", str(search_pipeline)]) == 0
        for handler in logging.getLogger("pipecomp").handlers:
            handler.flush()
        assert "Logging initialized" in log_file.read_text()
