"""Run context for CLI command injection."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from config import CompilerConfig


@dataclass(frozen=True)
class RunContext:
    """Injected run context for CLI commands.

    Parameters
    ----------
    log_level
        Logging level applied to the invocation.
    config
        Effective compiler configuration (file plus environment overrides).
    config_path
        File the configuration was read from, when there was one.
    """

    log_level: str
    config: CompilerConfig = field(default_factory=CompilerConfig)
    config_path: Path | None = None


__all__ = ["RunContext"]
