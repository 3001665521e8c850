"""Composition root for wiring CLI dependencies."""

from __future__ import annotations

from .cli import CliDependencies, create_app
from .config import RankerConfig
from .infrastructure import LocalFileSystem


def build_cli_dependencies(*, config: RankerConfig) -> CliDependencies:
    """Build concrete dependencies for CLI commands.

    Args:
        config: Ranker configuration. Local files are the only backing store, so
            it does not change the wiring today.
    """
    _ = config
    return CliDependencies(fs=LocalFileSystem())


app = create_app(build_cli_dependencies)
