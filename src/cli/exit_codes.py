"""Exit code taxonomy for the blockwright CLI."""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Standard exit codes for CLI commands.

    Exit codes follow Unix conventions with domain-specific extensions:
    - 0: Success
    - 1-9: General errors (parse, validation, config)
    - 10-19: Workspace and generation errors
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    PARSE_ERROR = 2
    VALIDATION_ERROR = 3
    CONFIG_ERROR = 4

    # Workspace and generation errors (10-19)
    DOCUMENT_ERROR = 10
    GENERATION_ERROR = 11
    SYNC_WARNINGS = 12

    @classmethod
    def from_exception(cls, exc: BaseException) -> ExitCode:
        """Map an exception to an appropriate exit code.

        Parameters
        ----------
        exc
            Exception to classify.

        Returns
        -------
        ExitCode
            Exit code appropriate for the exception type.
        """
        cyclopts_code = _exit_code_for_cyclopts(exc)
        if cyclopts_code is not None:
            return cyclopts_code

        name_code = _exit_code_for_exception_name(exc)
        if name_code is not None:
            return name_code

        type_code = _exit_code_for_exception_type(exc)
        if type_code is not None:
            return type_code

        return cls.GENERAL_ERROR


def _exit_code_for_cyclopts(exc: BaseException) -> ExitCode | None:
    module = exc.__class__.__module__
    if not module.startswith("cyclopts"):
        return None
    if exc.__class__.__name__ == "ValidationError":
        return ExitCode.VALIDATION_ERROR
    return ExitCode.PARSE_ERROR


def _exit_code_for_exception_name(exc: BaseException) -> ExitCode | None:
    name = exc.__class__.__name__
    if name in {"ConfigError", "DeviceProfileError"}:
        return ExitCode.CONFIG_ERROR
    if name in {"WorkspaceDocumentError", "ExtraStateError", "UnknownBlockTypeError"}:
        return ExitCode.DOCUMENT_ERROR
    if name in {"CodeGenerationError", "UnknownCallKindError"}:
        return ExitCode.GENERATION_ERROR
    return None


def _exit_code_for_exception_type(exc: BaseException) -> ExitCode | None:
    if isinstance(exc, FileExistsError):
        return ExitCode.CONFIG_ERROR
    if isinstance(exc, (FileNotFoundError, IsADirectoryError, PermissionError)):
        return ExitCode.DOCUMENT_ERROR
    if isinstance(exc, (ValueError, TypeError)):
        return ExitCode.VALIDATION_ERROR
    return None


__all__ = ["ExitCode"]
