"""Settings shared by the parser, the renderer and lowering."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from dotgraph.errors import ConfigurationError

DEFAULT_MAX_DEPTH = 128

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(slots=True, frozen=True)
class Config:
    # Subgraph nesting allowed before TooDeepError is raised.
    max_depth: int = DEFAULT_MAX_DEPTH
    # Drop the trailing attribute separator and render assignments with "=".
    minimal: bool = False
    # Edge endpoints declare vertices on their own when lowering.
    implicit_nodes: bool = True

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ConfigurationError(f"max_depth must be positive, got {self.max_depth}")

    @classmethod
    def from_env(cls, *, environ: Mapping[str, str] | None = None) -> Config:
        """Build a config from DOTGRAPH_* environment variables."""
        env = os.environ if environ is None else environ
        defaults = cls()

        max_depth = defaults.max_depth
        raw_depth = env.get("DOTGRAPH_MAX_DEPTH")
        if raw_depth:
            try:
                max_depth = int(raw_depth)
            except ValueError as exc:
                raise ConfigurationError(
                    f"DOTGRAPH_MAX_DEPTH must be an integer, got {raw_depth!r}", cause=exc
                ) from exc

        return cls(
            max_depth=max_depth,
            minimal=_env_flag(env, "DOTGRAPH_MINIMAL", defaults.minimal),
            implicit_nodes=_env_flag(env, "DOTGRAPH_IMPLICIT_NODES", defaults.implicit_nodes),
        )


def _env_flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean flag, got {raw!r}")
