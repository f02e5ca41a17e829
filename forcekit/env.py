"""Per-feature environment given to every script."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

BASE_PORT = 4000
PORT_RANGE = 1000


@dataclass(frozen=True)
class ForceEnv:
    """Values derived from a feature name and exported to scripts."""

    feature: str
    feature_slug: str
    port_offset: int
    port: int
    db_name: str
    force_dir: Path

    def to_env_vars(self) -> list[tuple[str, str]]:
        """Return the environment variables as (name, value) pairs."""
        return [
            ("FORCE_FEATURE", self.feature),
            ("FORCE_FEATURE_SLUG", self.feature_slug),
            ("FORCE_PORT_OFFSET", str(self.port_offset)),
            ("FORCE_PORT", str(self.port)),
            ("FORCE_DB_NAME", self.db_name),
            ("FORCE_DIR", str(self.force_dir)),
        ]


def slugify(name: str) -> str:
    """Lowercase ASCII letters and digits; every other character becomes '_'."""
    return "".join(c.lower() if c.isascii() and c.isalnum() else "_" for c in name)


def hash_to_offset(feature: str) -> int:
    """Map a feature name to a number in the range 0-999."""
    value = 0
    for byte in feature.encode("utf-8"):
        value = (value * 31 + byte) & 0xFFFFFFFF
    return value % PORT_RANGE


def _project_name(force_dir: Path) -> str:
    name = force_dir.parent.name
    return name if name not in ("", "..") else "app"


def build_env(feature: str, force_dir: str | Path) -> ForceEnv:
    """Build the environment for ``feature`` in the project owning ``force_dir``."""
    force_dir = Path(force_dir)
    feature_slug = slugify(feature)
    port_offset = hash_to_offset(feature)
    return ForceEnv(
        feature=feature,
        feature_slug=feature_slug,
        port_offset=port_offset,
        port=BASE_PORT + port_offset,
        db_name=f"{slugify(_project_name(force_dir))}_{feature_slug}",
        force_dir=force_dir,
    )