"""Command-line entry point: up, down, init and ls."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from forcekit import runner
from forcekit.config import ConfigError, find_force_dir, load_scripts
from forcekit.env import build_env
from forcekit.initialize import run_init
from forcekit.runner import ScriptError
from forcekit.state import add_session, list_sessions, remove_session

VERSION = "0.1.0"


def run_up(feature: str) -> None:
    """Run every up script for ``feature`` and record the session."""
    force_dir = find_force_dir()
    print(f"Found .force/ at: {force_dir}")

    env = build_env(feature, force_dir)
    print(f"Feature: {env.feature} (slug: {env.feature_slug})")
    print(f"Port: {env.port} (offset: {env.port_offset})")

    scripts = load_scripts(force_dir)
    print(f"Found {len(scripts)} script(s)")

    for script in scripts:
        runner.run_script(script, env)

    add_session(force_dir, feature)
    print(f"\nSession '{feature}' is ready!")


def run_down(feature: str) -> None:
    """Run the down scripts for ``feature`` in reverse order and forget the session."""
    force_dir = find_force_dir()
    print(f"Found .force/ at: {force_dir}")

    env = build_env(feature, force_dir)
    print(f"Feature: {env.feature} (slug: {env.feature_slug})")

    scripts = load_scripts(force_dir)
    print(f"Found {len(scripts)} script(s)")

    runner.run_down(scripts, env)

    remove_session(force_dir, feature)
    print(f"\nSession '{feature}' torn down.")


def run_ls() -> None:
    """Print the active sessions of the current project with their ports."""
    force_dir = find_force_dir()
    sessions = list_sessions(force_dir)

    if not sessions:
        print("No active sessions")
        return

    print("Active sessions:")
    for name in sessions:
        print(f"  {name}  port {build_env(name, force_dir).port}")


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="force", description="A force multiplier for parallel AI development"
    )
    parser.add_argument("--version", action="version", version=f"force {VERSION}")
    commands = parser.add_subparsers(dest="command", required=True)

    up = commands.add_parser("up", aliases=["u"], help="Spin up a new session (alias: u)")
    up.add_argument("feature", help="Feature name for the session")
    up.set_defaults(handler=lambda args: run_up(args.feature))

    down = commands.add_parser("down", aliases=["d"], help="Tear down a session (alias: d)")
    down.add_argument("feature", help="Feature name for the session")
    down.set_defaults(handler=lambda args: run_down(args.feature))

    init = commands.add_parser("init", help="Initialize a .force/ directory with example scripts")
    init.set_defaults(handler=lambda args: run_init())

    ls = commands.add_parser("ls", help="List active sessions")
    ls.set_defaults(handler=lambda args: run_ls())

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Parse ``argv`` and run the chosen command; return the exit status."""
    args = _parser().parse_args(argv)
    try:
        args.handler(args)
    except (ConfigError, ScriptError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())