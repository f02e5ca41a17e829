# forcekit

Run several features of one project side by side. Each feature gets its own
session. A session has its own port and database name, plus whatever your
setup scripts create for it, such as a git worktree.

## Install

```
pip install forcekit
```

This installs the `force` command. Scripts run through `sh`, so you need a
POSIX shell.

## Getting started

From the root of your project, run:

```
force init
```

This creates a `.force/` directory that holds one example script,
`.force/worktree.toml`. The example adds a git worktree for each feature and
removes it again. Edit it to fit your project, and add more scripts next to it
if you need them. If `.force/` already exists, `force init` fails.

Start a session for a feature:

```
force up add-login      # or: force u add-login
```

List the active sessions and their ports:

```
force ls
```

Tear a session down:

```
force down add-login    # or: force d add-login
```

You can run `force` from any subdirectory. It uses the nearest `.force/`
directory, looking in the current directory first and then in each parent.
`force --version` prints the version.

## Scripts

Every `*.toml` file in `.force/` is one script. The file name, without
`.toml`, is the script's name.

```toml
[meta]
category = "setup"   # required
priority = 1         # optional integer, default 0; lower runs first

[up]
description = "Create git worktree for feature"   # optional
run = "git worktree add ../worktrees/$FORCE_FEATURE_SLUG -b $FORCE_FEATURE_SLUG"

[down]               # optional
description = "Remove git worktree"
run = "git worktree remove ../worktrees/$FORCE_FEATURE_SLUG --force"
```

`force up` sorts the scripts by category in alphabetical order, then by
priority, then by name. It runs each `up` command in that order with
`sh -c`. Before each command it prints a line like `[setup/worktree]
<description>`. If a script has no description, the line shows the script's
name instead.

`force down` runs the `down` commands in the reverse order. It skips scripts
that have no `[down]` section.

`force` stops and exits with status 1 in these cases:

- a command exits with a non-zero status;
- a script is not valid TOML;
- a script lacks a required field.

## Environment

Every command receives these environment variables:

| Variable             | Meaning                                                    |
|----------------------|------------------------------------------------------------|
| `FORCE_FEATURE`      | Feature name as given, e.g. `add-login`                    |
| `FORCE_FEATURE_SLUG` | ASCII letters and digits lower-cased, anything else `_`    |
| `FORCE_PORT_OFFSET`  | Number from 0 to 999, derived from the feature name        |
| `FORCE_PORT`         | `4000 + FORCE_PORT_OFFSET`                                 |
| `FORCE_DB_NAME`      | `<project dir slug>_<feature slug>`, e.g. `shop_add_login` |
| `FORCE_DIR`          | Path to the `.force/` directory                            |

The same feature name always gets the same port.

## Session state

`force up` records each session it starts successfully. `force down` removes
the record.

Each project keeps its records in its own file:
`$XDG_STATE_HOME/force/<hash of the .force path>/sessions`. If
`XDG_STATE_HOME` is not set, the file is under `~/.local/state` instead.

These records are only a list of names. `force` does not check whether the
resources a session's scripts created still exist.

## Using it from Python

```python
from forcekit.config import find_force_dir, load_scripts
from forcekit.env import build_env
from forcekit.runner import ScriptError, run_script
from forcekit.state import add_session

force_dir = find_force_dir()            # or find_force_dir("some/path")
env = build_env("add-login", force_dir)
try:
    for script in load_scripts(force_dir):
        run_script(script, env)
except ScriptError as exc:
    print(exc)
else:
    add_session(force_dir, "add-login")
```

The public modules are:

- `forcekit.config`:
  - `parse_script`, `find_force_dir` and `load_scripts`;
  - the script dataclasses;
  - `ConfigError`.
- `forcekit.env`:
  - `slugify`, `hash_to_offset` and `build_env`;
  - `ForceEnv`, whose `to_env_vars()` returns the variables above as pairs.
- `forcekit.state`:
  - `add_session`, `remove_session` and `list_sessions`;
  - `get_state_dir` and `simple_hash`.
- `forcekit.runner`:
  - `run_script` and `run_down`;
  - `ScriptError`.
- `forcekit.initialize`:
  - `run_init(directory=None)`, which returns the created `.force/` path.
- `forcekit.cli`:
  - `main(argv=None)`, `run_up`, `run_down` and `run_ls`.