"""Record of active sessions, kept per project in the user's state directory."""

from __future__ import annotations

import os
from pathlib import Path

_MASK64 = 0xFFFFFFFFFFFFFFFF


def simple_hash(s: str) -> str:
    """Hash a string to 16 lowercase hex digits, for project identifiers."""
    value = 0
    for byte in s.encode("utf-8", "surrogateescape"):
        value = (value * 31 + byte) & _MASK64
    return f"{value:016x}"


def _lossy(path: Path) -> str:
    raw = os.fsencode(path)
    return raw.decode("utf-8", "replace")


def _state_home() -> Path:
    configured = os.environ.get("XDG_STATE_HOME")
    if configured and Path(configured).is_absolute():
        return Path(configured)
    return Path.home() / ".local" / "state"


def get_state_dir(force_dir: str | Path) -> Path:
    """Return the state directory belonging to the project of ``force_dir``."""
    force_dir = Path(force_dir)
    try:
        canonical = force_dir.resolve(strict=True)
    except OSError:
        canonical = force_dir
    return _state_home() / "force" / simple_hash(_lossy(canonical))


def _sessions_file(force_dir: str | Path) -> Path:
    return get_state_dir(force_dir) / "sessions"


def _load_sessions(force_dir: str | Path) -> set[str]:
    path = _sessions_file(force_dir)
    if not path.exists():
        return set()
    content = path.read_text(encoding="utf-8")
    return {line.strip() for line in content.splitlines() if line.strip()}


def _save_sessions(force_dir: str | Path, sessions: set[str]) -> None:
    path = _sessions_file(force_dir)
    if not sessions:
        path.unlink(missing_ok=True)
        return
    path.write_text("\n".join(sorted(sessions)), encoding="utf-8")


def add_session(force_dir: str | Path, feature: str) -> None:
    """Record ``feature`` as an active session."""
    get_state_dir(force_dir).mkdir(parents=True, exist_ok=True)
    sessions = _load_sessions(force_dir)
    sessions.add(feature)
    _save_sessions(force_dir, sessions)


def remove_session(force_dir: str | Path, feature: str) -> None:
    """Forget ``feature``; the sessions file is removed once none remain."""
    sessions = _load_sessions(force_dir)
    sessions.discard(feature)
    _save_sessions(force_dir, sessions)


def list_sessions(force_dir: str | Path) -> list[str]:
    """Return the active sessions of the project, sorted."""
    return sorted(_load_sessions(force_dir))