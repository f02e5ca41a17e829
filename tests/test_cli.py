import shlex
from pathlib import Path

import pytest

from forcekit.cli import main, run_ls, run_up
from forcekit.config import ConfigError
from forcekit.env import build_env

WITH_DOWN = """[meta]
category = "setup"

[up]
run = "echo 'up'"

[down]
run = "echo 'down'"
"""

UP_ONLY = """[meta]
category = "setup"

[up]
run = "echo 'up only'"
"""


@pytest.fixture(autouse=True)
def state_home(tmp_path: Path, monkeypatch) -> Path:
    state = tmp_path / "state"
    monkeypatch.setenv("XDG_STATE_HOME", str(state))
    return state


@pytest.fixture
def project(tmp_path: Path, monkeypatch) -> Path:
    root = tmp_path / "project"
    (root / ".force").mkdir(parents=True)
    monkeypatch.chdir(root)
    return root


@pytest.fixture
def empty_dir(tmp_path: Path, monkeypatch) -> Path:
    root = tmp_path / "empty"
    root.mkdir()
    monkeypatch.chdir(root)
    return root


def _write(project: Path, name: str, content: str) -> None:
    (project / ".force" / f"{name}.toml").write_text(content, encoding="utf-8")


def _tracking_down(category: str, priority, name: str, output: Path) -> str:
    priority_line = f"priority = {priority}" if priority is not None else ""
    return (
        f'[meta]\ncategory = "{category}"\n{priority_line}\n\n'
        f"[up]\nrun = \"echo 'up'\"\n\n"
        f'[down]\ndescription = "Tear down: {name}"\n'
        f"run = '''echo '{name}' >> {shlex.quote(str(output))}'''\n"
    )


# Discovery


def test_finds_force_dir_in_current(project: Path, capsys):
    _write(project, "test", UP_ONLY)
    assert main(["up", "feature"]) == 0
    assert "Found .force/" in capsys.readouterr().out


@pytest.mark.parametrize("subdir", ["src", "src/components"])
def test_finds_force_dir_in_ancestor(project: Path, monkeypatch, capsys, subdir):
    _write(project, "test", UP_ONLY)
    (project / subdir).mkdir(parents=True)
    monkeypatch.chdir(project / subdir)
    assert main(["up", "feature"]) == 0
    assert "Found .force/" in capsys.readouterr().out


def test_uses_closest_force_dir(project: Path, monkeypatch):
    outer_output = project / "outer.txt"
    _write(
        project,
        "outer",
        f"[meta]\ncategory = \"setup\"\n\n[up]\nrun = '''echo outer >> {shlex.quote(str(outer_output))}'''\n",
    )
    inner = project / "inner"
    (inner / ".force").mkdir(parents=True)
    inner_output = inner / "inner.txt"
    _write(
        inner,
        "inner",
        f"[meta]\ncategory = \"setup\"\n\n[up]\nrun = '''echo inner >> {shlex.quote(str(inner_output))}'''\n",
    )
    monkeypatch.chdir(inner)
    assert main(["up", "feature"]) == 0
    assert inner_output.exists()
    assert not outer_output.exists()


# Up


def test_up_with_single_script(project: Path, capsys):
    _write(project, "hello", UP_ONLY)
    assert main(["up", "test-feature"]) == 0
    assert "Session 'test-feature' is ready!" in capsys.readouterr().out


def test_up_with_alias(project: Path, capsys):
    _write(project, "hello", UP_ONLY)
    assert main(["u", "my-feature"]) == 0
    assert "Session 'my-feature' is ready!" in capsys.readouterr().out


@pytest.mark.parametrize("command", [["up", "test-feature"], ["ls"], ["down", "x"]])
def test_fails_without_force_dir(empty_dir: Path, capsys, command):
    assert main(command) == 1
    assert ".force/ directory not found" in capsys.readouterr().err


def test_run_up_raises_without_force_dir(empty_dir: Path):
    with pytest.raises(ConfigError, match="directory not found"):
        run_up("feature")


def test_up_fails_on_invalid_toml(project: Path, capsys):
    (project / ".force" / "invalid.toml").write_text("this is not valid toml [[[", encoding="utf-8")
    assert main(["up", "test-feature"]) == 1
    assert "Failed to parse" in capsys.readouterr().err


def test_up_fails_on_missing_category(project: Path, capsys):
    _write(project, "nocategory", '\n[meta]\n\n[up]\nrun = "echo hello"\n')
    assert main(["up", "test-feature"]) == 1
    assert "Failed to parse" in capsys.readouterr().err


def test_up_fails_on_script_error(project: Path, capsys):
    _write(project, "failing", '[meta]\ncategory = "setup"\n\n[up]\nrun = "exit 1"\n')
    assert main(["up", "test-feature"]) == 1
    assert "failed" in capsys.readouterr().err


def test_up_shows_script_description(project: Path, capsys):
    _write(
        project,
        "described",
        '[meta]\ncategory = "setup"\n\n[up]\ndescription = "My custom description"\nrun = "echo hello"\n',
    )
    assert main(["up", "test-feature"]) == 0
    assert "My custom description" in capsys.readouterr().out


def test_up_sets_all_env_vars(project: Path):
    output = shlex.quote(str(project / "env_output.txt"))
    names = ["FORCE_FEATURE", "FORCE_FEATURE_SLUG", "FORCE_PORT", "FORCE_PORT_OFFSET", "FORCE_DB_NAME", "FORCE_DIR"]
    command = " && ".join(f'echo "{name}=${name}" >> {output}' for name in names)
    _write(project, "capture", f"[meta]\ncategory = \"setup\"\n\n[up]\nrun = '''{command}'''\n")
    assert main(["up", "my-feature"]) == 0
    content = (project / "env_output.txt").read_text(encoding="utf-8")
    assert "FORCE_FEATURE=my-feature" in content
    assert "FORCE_FEATURE_SLUG=my_feature" in content
    assert "FORCE_PORT=" in content
    assert "FORCE_PORT_OFFSET=" in content
    assert "FORCE_DB_NAME=project_my_feature" in content
    assert "FORCE_DIR=" in content


# Down


def test_down_with_single_script(project: Path, capsys):
    _write(project, "hello", WITH_DOWN)
    assert main(["down", "test-feature"]) == 0
    assert "Session 'test-feature' torn down." in capsys.readouterr().out


def test_down_with_alias(project: Path, capsys):
    _write(project, "hello", WITH_DOWN)
    assert main(["d", "my-feature"]) == 0
    assert "Session 'my-feature' torn down." in capsys.readouterr().out


def test_down_skips_scripts_without_down_section(project: Path, capsys):
    _write(project, "with_down", WITH_DOWN)
    _write(project, "without_down", UP_ONLY)
    assert main(["down", "feature"]) == 0
    assert "(no down script, skipping)" in capsys.readouterr().out


def test_down_runs_scripts_in_reverse_order(project: Path):
    output = project / "order.txt"
    _write(project, "zebra", _tracking_down("services", None, "zebra", output))
    _write(project, "alpha", _tracking_down("setup", None, "alpha", output))
    assert main(["down", "feature"]) == 0
    assert output.read_text(encoding="utf-8").splitlines() == ["alpha", "zebra"]


def test_down_reverses_priority_order(project: Path):
    output = project / "order.txt"
    for priority, name in enumerate(["first", "second", "third"], start=1):
        _write(project, name, _tracking_down("setup", priority, name, output))
    assert main(["down", "feature"]) == 0
    assert output.read_text(encoding="utf-8").splitlines() == ["third", "second", "first"]


def test_down_fails_on_script_error(project: Path, capsys):
    _write(project, "failing", '[meta]\ncategory = "setup"\n\n[up]\nrun = "echo up"\n\n[down]\nrun = "exit 1"\n')
    assert main(["down", "feature"]) == 1
    assert "failed" in capsys.readouterr().err


def test_down_sets_env_vars(project: Path):
    output = shlex.quote(str(project / "env_output.txt"))
    _write(
        project,
        "env_check",
        f"[meta]\ncategory = \"setup\"\n\n[up]\nrun = \"echo up\"\n\n"
        f"[down]\nrun = '''echo \"FORCE_FEATURE=$FORCE_FEATURE\" >> {output}'''\n",
    )
    assert main(["down", "my-feature"]) == 0
    assert "FORCE_FEATURE=my-feature" in (project / "env_output.txt").read_text(encoding="utf-8")


# Ls


def test_ls_shows_no_sessions_initially(project: Path, capsys):
    _write(project, "test", WITH_DOWN)
    assert main(["ls"]) == 0
    assert "No active sessions" in capsys.readouterr().out


def test_ls_shows_session_after_up(project: Path, capsys):
    _write(project, "test", WITH_DOWN)
    assert main(["up", "my-feature"]) == 0
    capsys.readouterr()
    assert main(["ls"]) == 0
    out = capsys.readouterr().out
    port = build_env("my-feature", project / ".force").port
    assert "Active sessions:" in out
    assert f"  my-feature  port {port}" in out


def test_ls_removes_session_after_down(project: Path, capsys):
    _write(project, "test", WITH_DOWN)
    assert main(["up", "my-feature"]) == 0
    assert main(["down", "my-feature"]) == 0
    capsys.readouterr()
    run_ls()
    assert "No active sessions" in capsys.readouterr().out


def test_ls_shows_multiple_sessions(project: Path, capsys):
    _write(project, "test", WITH_DOWN)
    assert main(["up", "feature-a"]) == 0
    assert main(["up", "feature-b"]) == 0
    capsys.readouterr()
    assert main(["ls"]) == 0
    out = capsys.readouterr().out
    assert out.index("feature-a") < out.index("feature-b")


# Init


def test_init_command_creates_directory(empty_dir: Path, capsys):
    assert main(["init"]) == 0
    assert "Created .force/ directory" in capsys.readouterr().out
    assert (empty_dir / ".force" / "worktree.toml").is_file()


def test_init_command_fails_if_exists(project: Path, capsys):
    assert main(["init"]) == 1
    assert "already exists" in capsys.readouterr().err


def test_missing_subcommand_is_usage_error(project: Path):
    with pytest.raises(SystemExit) as info:
        main([])
    assert info.value.code == 2