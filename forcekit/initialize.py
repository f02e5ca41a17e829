"""Creation of a fresh .force/ directory with an example script."""

from __future__ import annotations

from pathlib import Path

from forcekit.config import FORCE_DIR_NAME

EXAMPLE_SCRIPT_NAME = "worktree.toml"

_VARIABLES = (
    ("FORCE_FEATURE", 'the feature name exactly as given, such as "add-login"'),
    ("FORCE_FEATURE_SLUG", 'the name made safe for identifiers, such as "add_login"'),
    ("FORCE_PORT", "the port reserved for this feature, such as 4427"),
    ("FORCE_PORT_OFFSET", "offset of that port from the base, 0 to 999"),
    ("FORCE_DB_NAME", 'a database name for the feature, such as "shop_add_login"'),
    ("FORCE_DIR", "location of the .force/ directory"),
)

_WORKTREE = "../worktrees/$FORCE_FEATURE_SLUG"


def _example_script() -> str:
    lines = [
        f"# Example script: {EXAMPLE_SCRIPT_NAME}",
        "#",
        "# Execution order: by category name, then by priority (smallest first),",
        "# then by file name. Teardown runs the same list backwards.",
        "#",
        "# Every script can read these variables:",
    ]
    width = max(len(name) for name, _ in _VARIABLES) + 2
    lines += [f"#   {name.ljust(width)}{text}" for name, text in _VARIABLES]
    lines += [
        "",
        "[meta]",
        'category = "setup"  # categories are run in alphabetical order',
        "priority = 1        # smaller values go first inside a category",
        "",
        "[up]",
        'description = "Add a git worktree for the feature"',
        f"run = '''git worktree add {_WORKTREE} -b $FORCE_FEATURE_SLUG 2>/dev/null"
        " || echo 'worktree is already there''''",
        "",
        "[down]",
        'description = "Drop the git worktree of the feature"',
        f"run = '''git worktree remove {_WORKTREE} --force 2>/dev/null"
        " || echo 'worktree is already gone''''",
    ]
    return "\n".join(lines) + "\n"


def run_init(directory: str | Path | None = None) -> Path:
    """Create ``.force/`` with an example script inside ``directory`` (default: cwd).

    Returns the path of the created directory; raises FileExistsError if it exists.
    """
    base = Path.cwd() if directory is None else Path(directory)
    force_dir = base / FORCE_DIR_NAME

    if force_dir.exists():
        raise FileExistsError(f"{FORCE_DIR_NAME}/ directory already exists")

    force_dir.mkdir()
    (force_dir / EXAMPLE_SCRIPT_NAME).write_text(_example_script(), encoding="utf-8")

    print(f"Created {FORCE_DIR_NAME}/ directory with example script")
    print(f"  {FORCE_DIR_NAME}/{EXAMPLE_SCRIPT_NAME}")
    print("\nAdapt the scripts to your project, then start a session with:")
    print("  force up <feature-name>")
    return force_dir