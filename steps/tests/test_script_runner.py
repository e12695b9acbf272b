import os
from pathlib import Path

from conftest import write_script
from steps import DryRunRunner, ScriptRunner
from steps.script_runner import NOT_EXECUTABLE, NOT_FOUND


def test_exit_status_is_returned(tmp_path: Path):
    script = write_script(tmp_path / "fail.sh", "exit 7\n")
    assert ScriptRunner().run([str(script)], os.environ) == 7


def test_arguments_and_environment_are_passed(tmp_path: Path):
    out = tmp_path / "out"
    script = write_script(tmp_path / "echo.sh", 'echo "$1|$2|$GREETING" > "$OUT"\n')
    env = {"PATH": os.environ.get("PATH", "/usr/bin:/bin"), "GREETING": "hello", "OUT": str(out)}
    assert ScriptRunner().run([str(script), "config.json", "my-tree"], env) == 0
    assert out.read_text().strip() == "config.json|my-tree|hello"


def test_environment_is_exactly_what_was_given(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("LEAKY", "1")
    out = tmp_path / "out"
    script = write_script(tmp_path / "env.sh", 'echo "${LEAKY:-unset}" > "$OUT"\n')
    ScriptRunner().run([str(script)], {"OUT": str(out)})
    assert out.read_text().strip() == "unset"


def test_missing_program(tmp_path: Path):
    assert ScriptRunner().run([str(tmp_path / "nope.sh")], os.environ) == NOT_FOUND


def test_program_without_execute_bit(tmp_path: Path):
    script = tmp_path / "plain.sh"
    script.write_text("#!/bin/sh\nexit 0\n")
    script.chmod(0o644)
    assert ScriptRunner().run([str(script)], os.environ) == NOT_EXECUTABLE


def test_killed_by_signal_maps_to_shell_status(tmp_path: Path):
    script = write_script(tmp_path / "die.sh", "kill -TERM $$\n")
    assert ScriptRunner().run([str(script)], os.environ) == 128 + 15


def test_dry_run_records_without_running(tmp_path: Path):
    marker = tmp_path / "ran"
    script = write_script(tmp_path / "touch.sh", f'touch "{marker}"\n')
    runner = DryRunRunner()
    assert runner.run([str(script), "a"], os.environ) == 0
    assert runner.commands == [[str(script), "a"]]
    assert not marker.exists()
