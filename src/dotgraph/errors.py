"""Error hierarchy for dotgraph."""

from __future__ import annotations

from typing import Any


class DotGraphError(Exception):
    """Base error for all dotgraph errors."""

    def __init__(self, message: str, *, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class ConfigurationError(DotGraphError):
    """Invalid configuration value."""


class DotSyntaxError(DotGraphError, ValueError):
    """Source text is not valid DOT."""

    def __init__(
        self, message: str, *, position: int | None = None, cause: Exception | None = None
    ):
        if position is not None:
            message = f"{message} at {position}"
        super().__init__(message, cause=cause)
        self.position = position


class TooDeepError(DotGraphError):
    """Subgraph nesting exceeded the configured depth limit."""

    def __init__(self, limit: int):
        super().__init__(f"subgraph nesting exceeds depth limit of {limit}")
        self.limit = limit


# --- Lowering errors ---


class LoweringError(DotGraphError):
    """A graph could not be lowered into a library graph."""


class UndeclaredEndpointError(LoweringError):
    """An edge endpoint was never declared by a node statement."""

    def __init__(self, endpoint: Any):
        super().__init__(f"edge endpoint was never declared: {endpoint!r}")
        self.endpoint = endpoint


class EmptyChainError(LoweringError):
    """An edge statement has no usable endpoints after its start."""
