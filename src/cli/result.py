"""CLI result contract for structured command returns."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from cli.exit_codes import ExitCode

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True)
class CliResult:
    """Structured result from CLI command execution.

    Parameters
    ----------
    exit_code
        Integer exit code for the command.
    summary
        Optional human-readable summary of the result.
    artifacts
        Mapping of artifact names to file paths written.
    counts
        Mapping of count names (blocks, repairs, warnings) to values.
    details
        Extra lines printed after the summary, e.g. per-block warnings.
    """

    exit_code: int
    summary: str | None = None
    artifacts: Mapping[str, Path] = field(default_factory=dict)
    counts: Mapping[str, int] = field(default_factory=dict)
    details: tuple[str, ...] = ()

    @classmethod
    def success(
        cls,
        *,
        summary: str | None = None,
        artifacts: Mapping[str, Path] | None = None,
        counts: Mapping[str, int] | None = None,
        details: tuple[str, ...] = (),
    ) -> CliResult:
        """Create a successful result.

        Returns:
        -------
        CliResult
            Success result with exit code 0.
        """
        return cls(
            exit_code=ExitCode.SUCCESS,
            summary=summary,
            artifacts=artifacts or {},
            counts=counts or {},
            details=details,
        )

    @classmethod
    def error(
        cls,
        exit_code: ExitCode | int,
        *,
        summary: str | None = None,
        counts: Mapping[str, int] | None = None,
        details: tuple[str, ...] = (),
    ) -> CliResult:
        """Create an error result.

        Parameters
        ----------
        exit_code
            Exit code for the error.
        summary
            Optional error summary.
        counts
            Optional counts gathered before the failure.
        details
            Optional detail lines.

        Returns:
        -------
        CliResult
            Error result with the specified exit code.
        """
        code = int(exit_code) if isinstance(exit_code, ExitCode) else exit_code
        return cls(
            exit_code=code,
            summary=summary,
            counts=counts or {},
            details=details,
        )

    @classmethod
    def from_exception(cls, exc: BaseException) -> CliResult:
        """Create an error result whose exit code follows the exception type.

        Returns:
        -------
        CliResult
            Error result summarizing ``exc``.
        """
        return cls.error(ExitCode.from_exception(exc), summary=str(exc))

    @property
    def ok(self) -> bool:
        """Check if the result indicates success.

        Returns:
        -------
        bool
            True if exit_code is 0.
        """
        return self.exit_code == ExitCode.SUCCESS


__all__ = ["CliResult"]
