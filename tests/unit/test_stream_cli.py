"""
Tests for scripts/stream_cli.py
"""
import importlib.util
from pathlib import Path

import pytest
from core.stream import Container

CLI_PATH = Path(__file__).parent.parent.parent / "scripts" / "stream_cli.py"


@pytest.fixture(scope="module")
def cli():
    spec = importlib.util.spec_from_file_location("stream_cli", CLI_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def stream_file(tmp_path, builder, bold_font):
    builder.add_text("Title", container=Container.HEADER_CENTER)
    builder.set_font(bold_font)
    builder.add_text("Body")
    builder.enable_columns(2)
    path = tmp_path / "stream.json"
    path.write_text(builder.finish().to_json(), encoding="utf-8")
    return path


class TestStreamCli:

    def test_no_command(self, cli, capsys):
        assert cli.main([]) == 1

    def test_summary(self, cli, stream_file, capsys):
        assert cli.main(["summary", str(stream_file)]) == 0
        out = capsys.readouterr().out
        assert "Entries: 4" in out
        assert "header_center" in out

    def test_check_reports(self, cli, stream_file, capsys):
        assert cli.main(["check", str(stream_file)]) == 0
        assert "still open" in capsys.readouterr().out

    def test_check_strict(self, cli, stream_file):
        assert cli.main(["check", str(stream_file), "--strict"]) == 1

    def test_replay(self, cli, stream_file, capsys):
        assert cli.main(["replay", str(stream_file), "--container", "content_left"]) == 0
        out = capsys.readouterr().out
        assert "'Body'" in out
        assert "Helvetica-Bold 14pt bold" in out
        assert "Title" not in out
        assert "closed at end of content: content_left" in out

    def test_missing_file(self, cli, tmp_path, capsys):
        assert cli.main(["summary", str(tmp_path / "missing.json")]) == 1
        assert "Error" in capsys.readouterr().out

    def test_bad_json(self, cli, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("[]", encoding="utf-8")
        assert cli.main(["replay", str(path)]) == 1

    def test_null_payload(self, cli, tmp_path, capsys):
        path = tmp_path / "null.json"
        path.write_text(
            '{"entries": [{"container": "content_left",'
            ' "instruction": {"kind": "line_separator", "style": null}}]}',
            encoding="utf-8",
        )
        assert cli.main(["summary", str(path)]) == 1
        assert "Malformed line_separator" in capsys.readouterr().out

    def test_null_metadata_color(self, cli, tmp_path):
        path = tmp_path / "color.json"
        path.write_text(
            '{"metadata": null, "entries": [{"container": "content_left",'
            ' "instruction": {"kind": "text_color", "color": {"hex": null}}}]}',
            encoding="utf-8",
        )
        assert cli.main(["replay", str(path)]) == 1

    def test_not_utf8(self, cli, tmp_path, capsys):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"entries": [], "name": "\xe9t\xe9"}')
        assert cli.main(["check", str(path)]) == 1
        assert "not UTF-8" in capsys.readouterr().out
