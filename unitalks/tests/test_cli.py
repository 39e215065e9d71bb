"""End-to-end CLI tests — exit codes and printed output."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from unitalks.cli import main


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for var in ("UNITALKS_STORE_DIR", "UNITALKS_EXPORT_DIR", "UNITALKS_STRICT_STORE", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)


def _run(capsys, *args: str):
    with pytest.raises(SystemExit) as excinfo:
        main(list(args))
    out = capsys.readouterr().out
    return excinfo.value.code, out


def _store(tmp_path: Path) -> str:
    return str(tmp_path / "store")


def _new(capsys, tmp_path: Path, *extra: str) -> str:
    code, out = _run(capsys, "--store", _store(tmp_path), "new", "--guest", "Anna", *extra)
    assert code == 0
    assert out.startswith("OK: created ut-")
    return out.strip().split()[-1]


class TestNewListShow:

    def test_new_then_list(self, capsys, tmp_path: Path):
        script_id = _new(capsys, tmp_path, "--role", "Founder")
        code, out = _run(capsys, "--store", _store(tmp_path), "list")
        assert code == 0
        line = out.strip()
        assert line.startswith(f"{script_id}\tAnna — UniTalks\t")
        assert "1 sections\t1 questions\t5 min" in line

    def test_list_empty(self, capsys, tmp_path: Path):
        code, out = _run(capsys, "--store", _store(tmp_path), "list")
        assert code == 0
        assert out.strip() == "No saved scripts"

    def test_show_prints_json(self, capsys, tmp_path: Path):
        script_id = _new(capsys, tmp_path, "--title", "Pilot")
        code, out = _run(capsys, "--store", _store(tmp_path), "show", "--id", script_id)
        assert code == 0
        data = json.loads(out)
        assert data["title"] == "Pilot"
        assert data["guest"]["name"] == "Anna"

    def test_show_unknown_id(self, capsys, tmp_path: Path):
        code, out = _run(capsys, "--store", _store(tmp_path), "show", "--id", "ut-0")
        assert code == 1
        assert out.strip() == "ERROR: script 'ut-0' not found"

    def test_store_dir_from_environment(self, capsys, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("UNITALKS_STORE_DIR", str(tmp_path / "env-store"))
        code, _ = _run(capsys, "new", "--guest", "Env")
        assert code == 0
        assert (tmp_path / "env-store" / "unitalks_manifest.json").exists()


class TestExportImportDelete:

    def test_export_import_round_trip(self, capsys, tmp_path: Path):
        script_id = _new(capsys, tmp_path, "--title", "Hello, World!! / test")
        out_dir = tmp_path / "exports"

        code, out = _run(capsys, "--store", _store(tmp_path), "export",
                         "--id", script_id, "--output-dir", str(out_dir))
        assert code == 0
        exported = out_dir / "Hello-World-test.json"
        assert out.strip() == f"OK: exported {exported}"

        other_store = str(tmp_path / "other")
        code, out = _run(capsys, "--store", other_store, "import", "--file", str(exported))
        assert code == 0
        assert out.strip() == f"OK: imported {script_id}"

        code, out = _run(capsys, "--store", other_store, "show", "--id", script_id)
        assert json.loads(out) == json.loads(exported.read_text(encoding="utf-8"))

    def test_import_wrong_extension(self, capsys, tmp_path: Path):
        notes = tmp_path / "notes.txt"
        notes.write_text("{}", encoding="utf-8")
        code, out = _run(capsys, "--store", _store(tmp_path), "import", "--file", str(notes))
        assert code == 1
        assert out.strip() == "ERROR: Not a .json file"

    def test_import_invalid_json(self, capsys, tmp_path: Path):
        bad = tmp_path / "bad.json"
        bad.write_text("{oops", encoding="utf-8")
        code, out = _run(capsys, "--store", _store(tmp_path), "import", "--file", str(bad))
        assert code == 1
        assert out.strip() == "ERROR: Invalid JSON"

    def test_import_not_a_script(self, capsys, tmp_path: Path):
        p = tmp_path / "notes.json"
        p.write_text(json.dumps({"notes": "x"}), encoding="utf-8")
        code, out = _run(capsys, "--store", _store(tmp_path), "import", "--file", str(p))
        assert code == 1
        assert out.strip() == "ERROR: Not a valid UniTalks script"

    def test_import_unknown_version_rejected(self, capsys, tmp_path: Path):
        p = tmp_path / "future.json"
        p.write_text(json.dumps({"sections": [], "version": 2}), encoding="utf-8")
        code, out = _run(capsys, "--store", _store(tmp_path), "import", "--file", str(p))
        assert code == 1
        assert out.startswith("ERROR: Not a valid UniTalks script")

    def test_list_after_import_with_free_text_date(self, capsys, tmp_path: Path):
        p = tmp_path / "legacy.json"
        p.write_text(json.dumps({"id": "ut-5", "sections": [], "savedAt": "last Tuesday"}),
                     encoding="utf-8")
        code, _ = _run(capsys, "--store", _store(tmp_path), "import", "--file", str(p))
        assert code == 0
        code, out = _run(capsys, "--store", _store(tmp_path), "list")
        assert code == 0
        assert out.startswith("ut-5\t")
        assert "last Tuesday" in out

    def test_delete(self, capsys, tmp_path: Path):
        script_id = _new(capsys, tmp_path)
        code, out = _run(capsys, "--store", _store(tmp_path), "delete", "--id", script_id)
        assert code == 0
        assert out.strip() == f"OK: deleted {script_id}"

        code, out = _run(capsys, "--store", _store(tmp_path), "list")
        assert out.strip() == "No saved scripts"

    def test_delete_unknown(self, capsys, tmp_path: Path):
        code, out = _run(capsys, "--store", _store(tmp_path), "delete", "--id", "ut-404")
        assert code == 1
        assert out.strip() == "ERROR: script 'ut-404' not found"


class TestValidateScript:

    def test_valid_export_passes(self, capsys, tmp_path: Path):
        script_id = _new(capsys, tmp_path)
        _run(capsys, "--store", _store(tmp_path), "export", "--id", script_id,
             "--output-dir", str(tmp_path))
        code, out = _run(capsys, "validate-script", "--script", str(tmp_path / "Anna-UniTalks.json"))
        assert code == 0
        assert out.strip() == "OK: Script is valid"

    def test_invalid_script_fails(self, capsys, tmp_path: Path):
        p = tmp_path / "bad.json"
        p.write_text(json.dumps({"notes": "x"}), encoding="utf-8")
        code, out = _run(capsys, "validate-script", "--script", str(p))
        assert code == 1
        assert out.startswith("ERROR: invalid Script:")

    def test_missing_file_fails(self, capsys, tmp_path: Path):
        code, out = _run(capsys, "validate-script", "--script", str(tmp_path / "ghost.json"))
        assert code == 1
        assert out.startswith("ERROR: ")


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 1
