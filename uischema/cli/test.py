"""Unit tests for the command line interface."""

import json
import logging

import pytest

from .lib import main


@pytest.fixture
def write_json(tmp_path):
    """Write a value to a JSON file under tmp_path."""

    def _write(name, data):
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


class TestDispatch:
    """Top-level command routing."""

    @pytest.mark.unit
    def test_no_args_shows_help(self, capsys):
        assert main([]) == 1
        assert "Usage: uischema" in capsys.readouterr().out

    @pytest.mark.unit
    def test_help(self, capsys):
        assert main(["--help"]) == 0
        assert "validate" in capsys.readouterr().out

    @pytest.mark.unit
    def test_unknown_command(self, caplog):
        with caplog.at_level(logging.ERROR):
            assert main(["render"]) == 1
        assert "Unknown command: render" in caplog.text


class TestValidate:
    """validate command."""

    @pytest.mark.unit
    def test_valid_document(self, write_json, sample_document_dict, capsys):
        path = write_json("doc.json", sample_document_dict)
        assert main(["validate", str(path)]) == 0
        out = capsys.readouterr().out
        assert "Schema validation passed" in out
        assert "Basic accessibility checks passed" in out

    @pytest.mark.unit
    def test_structural_failure(self, write_json, sample_document_dict, caplog):
        del sample_document_dict["root"]["children"][1]["props"]["ariaLabel"]
        path = write_json("doc.json", sample_document_dict)
        with caplog.at_level(logging.ERROR):
            assert main(["validate", str(path)]) == 1
        assert "root.children.1.props.ariaLabel" in caplog.text

    @pytest.mark.unit
    def test_invalid_json(self, tmp_path, caplog):
        path = tmp_path / "broken.json"
        path.write_text("{oops", encoding="utf-8")
        with caplog.at_level(logging.ERROR):
            assert main(["validate", str(path)]) == 1
        assert "Invalid JSON" in caplog.text

    @pytest.mark.unit
    def test_missing_file(self, tmp_path, caplog):
        with caplog.at_level(logging.ERROR):
            assert main(["validate", str(tmp_path / "nope.json")]) == 1
        assert "Cannot read" in caplog.text

    @pytest.mark.unit
    def test_a11y_warning_only(self, write_json, sample_document_dict, caplog, monkeypatch):
        monkeypatch.delenv("UISCHEMA_A11Y_STRICT", raising=False)
        sample_document_dict["root"]["children"][0]["props"]["tabIndex"] = 3
        path = write_json("doc.json", sample_document_dict)
        with caplog.at_level(logging.WARNING):
            assert main(["validate", str(path)]) == 0
        assert "root.children[0].props.tabIndex" in caplog.text

    @pytest.mark.unit
    def test_a11y_strict_from_env(self, write_json, sample_document_dict, monkeypatch):
        monkeypatch.setenv("UISCHEMA_A11Y_STRICT", "true")
        sample_document_dict["root"]["children"][0]["props"]["tabIndex"] = 3
        path = write_json("doc.json", sample_document_dict)
        assert main(["validate", str(path)]) == 1

    @pytest.mark.unit
    def test_a11y_strict_flag(self, write_json, sample_document_dict, monkeypatch):
        monkeypatch.delenv("UISCHEMA_A11Y_STRICT", raising=False)
        sample_document_dict["root"]["children"][0]["props"]["tabIndex"] = 3
        path = write_json("doc.json", sample_document_dict)
        assert main(["validate", "--strict", str(path)]) == 1


class TestExpand:
    """expand and skeleton commands."""

    @pytest.mark.unit
    def test_expand(self, capsys):
        assert main(["expand", "c[ariaLabel:Demo][children:txt[text:Hi]]"]) == 0
        assert json.loads(capsys.readouterr().out) == {
            "type": "Container",
            "props": {"ariaLabel": "Demo"},
            "children": [{"type": "Text", "props": {"text": "Hi"}}],
        }

    @pytest.mark.unit
    def test_expand_document(self, capsys, monkeypatch):
        monkeypatch.setenv("UISCHEMA_SCHEMA_VERSION", "0.2.0")
        assert main(["expand", "--document", "sp"]) == 0
        assert json.loads(capsys.readouterr().out) == {
            "schemaVersion": "0.2.0",
            "root": {"type": "Spacer"},
        }

    @pytest.mark.unit
    def test_expand_indent_from_env(self, capsys, monkeypatch):
        monkeypatch.setenv("UISCHEMA_JSON_INDENT", "0")
        assert main(["expand", "sp"]) == 0
        assert capsys.readouterr().out == '{"type": "Spacer"}\n'

    @pytest.mark.unit
    def test_expand_syntax_error(self, caplog):
        with caplog.at_level(logging.ERROR):
            assert main(["expand", "c[children:txt"]) == 1
        assert "Unmatched bracket" in caplog.text

    @pytest.mark.unit
    def test_skeleton(self, capsys):
        assert main(["skeleton", "sales", "dashboard"]) == 0
        skeleton = json.loads(capsys.readouterr().out)
        assert skeleton["props"]["description"] == "sales dashboard"


class TestPatch:
    """patch command."""

    @pytest.mark.unit
    def test_apply(self, write_json, tmp_path, capsys):
        tree = write_json("tree.json", {"type": "Container", "props": {"ariaLabel": "Loading..."}})
        patches = tmp_path / "patches.jsonl"
        patches.write_text(
            '{"op":"set","path":"/props/ariaLabel","value":"Dashboard"}\n'
            '{"op":"add","path":"/children","value":{"type":"Text","props":{"text":"Hello"}}}\n',
            encoding="utf-8",
        )
        assert main(["patch", str(tree), str(patches)]) == 0
        result = json.loads(capsys.readouterr().out)
        assert result["props"]["ariaLabel"] == "Dashboard"
        assert result["children"] == [{"type": "Text", "props": {"text": "Hello"}}]

    @pytest.mark.unit
    def test_bad_line(self, write_json, tmp_path, caplog):
        tree = write_json("tree.json", {})
        patches = tmp_path / "patches.jsonl"
        patches.write_text('{"op":"remove","path":"/a"}\nnot json\n', encoding="utf-8")
        with caplog.at_level(logging.ERROR):
            assert main(["patch", str(tree), str(patches)]) == 1
        assert "Line 2" in caplog.text

    @pytest.mark.unit
    def test_failing_operation(self, write_json, tmp_path, caplog):
        tree = write_json("tree.json", {"props": {"text": "a"}})
        patches = tmp_path / "patches.jsonl"
        patches.write_text('{"op":"add","path":"/props/text","value":"b"}', encoding="utf-8")
        with caplog.at_level(logging.ERROR):
            assert main(["patch", str(tree), str(patches)]) == 1
        assert "Patch 0 failed" in caplog.text

    @pytest.mark.unit
    def test_missing_patch_file(self, write_json, tmp_path):
        tree = write_json("tree.json", {})
        assert main(["patch", str(tree), str(tmp_path / "missing.jsonl")]) == 1


class TestSchemaAndBenchmark:
    """schema and benchmark commands."""

    @pytest.mark.unit
    def test_schema(self, capsys):
        assert main(["schema"]) == 0
        schema = json.loads(capsys.readouterr().out)
        assert "root" in schema["properties"]

    @pytest.mark.unit
    def test_benchmark_text(self, capsys):
        assert main(["benchmark"]) == 0
        out = capsys.readouterr().out
        assert "Dashboard: shorthand=" in out
        assert "Settings:" in out

    @pytest.mark.unit
    def test_benchmark_json(self, capsys):
        assert main(["benchmark", "--json"]) == 0
        rows = json.loads(capsys.readouterr().out)
        assert [row["name"] for row in rows] == ["Dashboard", "Form", "Settings"]
