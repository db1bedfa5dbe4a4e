import sys

from groveengine.cli import launcher, main
from groveengine.instance import ProgramLock

WRITE_MARKER = "open('ran.txt', 'w').write('ok')"


def test_main_exits_when_another_instance_runs(tmp_path, capsys):
    with ProgramLock("main", tmp_path):
        rc = main(["--lock-dir", str(tmp_path)])
    assert rc == 0
    assert "program is running" in capsys.readouterr().out


def test_launcher_runs_command_inside_bin(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "bin").mkdir()
    rc = launcher(["--lock-dir", str(tmp_path), "--", sys.executable, "-c", WRITE_MARKER])
    assert rc == 0
    assert (tmp_path / "bin" / "ran.txt").read_text() == "ok"
    assert "dir changed" in capsys.readouterr().out


def test_launcher_reports_missing_folder_and_still_runs(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    rc = launcher(["--lock-dir", str(tmp_path), "--", sys.executable, "-c", WRITE_MARKER])
    captured = capsys.readouterr()
    assert rc == 0
    assert "dir bad change" in captured.err
    assert (tmp_path / "ran.txt").read_text() == "ok"


def test_launcher_exits_when_already_running(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "bin").mkdir()
    with ProgramLock("start", tmp_path):
        rc = launcher(["--lock-dir", str(tmp_path), "--", sys.executable, "-c", WRITE_MARKER])
    assert rc == 0
    assert not (tmp_path / "bin" / "ran.txt").exists()
    assert "program is running" in capsys.readouterr().out


def test_launcher_uses_named_folder(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "game").mkdir()
    launcher(["--dir", "game", "--lock-dir", str(tmp_path), "--",
              sys.executable, "-c", WRITE_MARKER])
    assert (tmp_path / "game" / "ran.txt").read_text() == "ok"