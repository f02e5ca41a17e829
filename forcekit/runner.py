"""Execution of script commands through the shell."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Sequence

from forcekit.config import LoadedScript, ScriptCommand
from forcekit.env import ForceEnv


class ScriptError(Exception):
    """Raised when a script command exits unsuccessfully."""


def _execute(command: ScriptCommand, env: ForceEnv) -> int:
    environment = {**os.environ, **dict(env.to_env_vars())}
    completed = subprocess.run(["sh", "-c", command.run], env=environment, check=False)
    # A negative return code means the shell was killed by a signal.
    return completed.returncode if completed.returncode >= 0 else -1


def _header(script: LoadedScript, text: str) -> None:
    print(f"\n[{script.script.meta.category}/{script.name}] {text}", flush=True)


def run_script(script: LoadedScript, env: ForceEnv) -> None:
    """Run the up command of ``script`` with the force environment."""
    up = script.script.up
    _header(script, up.description if up.description is not None else script.name)

    code = _execute(up, env)
    if code != 0:
        raise ScriptError(f"Script '{script.name}' failed with exit code {code}")


def run_down(scripts: Sequence[LoadedScript], env: ForceEnv) -> None:
    """Run the down commands of ``scripts`` in reverse order, skipping those without one."""
    for script in reversed(scripts):
        down = script.script.down
        if down is None:
            _header(script, "(no down script, skipping)")
            continue

        _header(script, down.description if down.description is not None else script.name)
        code = _execute(down, env)
        if code != 0:
            raise ScriptError(f"Script '{script.name}' down failed with exit code {code}")