"""Spin up and tear down per-feature development sessions driven by TOML scripts."""

__version__ = "0.1.0"