"""Command dispatch with run-context injection and timing."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from cyclopts import App
from cyclopts.exceptions import CycloptsError

from cli.context import RunContext
from cli.exit_codes import ExitCode
from cli.result_action import cli_result_action

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CliInvokeEvent:
    """Structured record of one CLI invocation."""

    ok: bool
    command: str | None
    parse_ms: float
    exec_ms: float
    exit_code: int
    error_class: str | None = None
    error_stage: str | None = None
    error_message: str | None = None


@dataclass
class _InvokeState:
    t0: float
    command_name: str
    parse_ms: float | None = None
    exec_ms: float | None = None


def _command_name_from_tokens(tokens: list[str] | None) -> str:
    if not tokens:
        return "<unknown>"
    return tokens[0]


def _finalize_parse_ms(state: _InvokeState) -> None:
    if state.parse_ms is None:
        state.parse_ms = (time.perf_counter() - state.t0) * 1000.0


def _run(
    app: App,
    tokens: list[str] | None,
    *,
    run_context: RunContext | None,
    state: _InvokeState,
) -> int:
    command, bound, ignored = app.parse_args(
        tokens,
        exit_on_error=False,
        print_error=True,
    )
    state.parse_ms = (time.perf_counter() - state.t0) * 1000.0
    state.command_name = getattr(command, "__qualname__", repr(command))

    if run_context is not None and ignored:
        for name, hint in ignored.items():
            if hint is RunContext or name == "run_context":
                bound.arguments[name] = run_context

    t1 = time.perf_counter()
    result = command(*bound.args, **bound.kwargs)
    state.exec_ms = (time.perf_counter() - t1) * 1000.0
    return cli_result_action(result)


def invoke(
    app: App,
    tokens: list[str] | None,
    *,
    run_context: RunContext | None,
) -> tuple[int, CliInvokeEvent]:
    """Parse ``tokens``, run the selected command and map its outcome to an exit code.

    Args:
        app: CLI app instance.
        tokens: Command tokens to execute.
        run_context: Context injected into commands that declare it.

    Returns:
        tuple[int, CliInvokeEvent]: Exit code and invocation record.
    """
    state = _InvokeState(time.perf_counter(), _command_name_from_tokens(tokens))
    try:
        exit_code = _run(app, tokens, run_context=run_context, state=state)
        event = CliInvokeEvent(
            ok=exit_code == ExitCode.SUCCESS,
            command=state.command_name,
            parse_ms=state.parse_ms or 0.0,
            exec_ms=state.exec_ms or 0.0,
            exit_code=exit_code,
        )
    except CycloptsError as exc:
        _finalize_parse_ms(state)
        exit_code = ExitCode.from_exception(exc)
        event = CliInvokeEvent(
            ok=False,
            command=state.command_name,
            parse_ms=state.parse_ms or 0.0,
            exec_ms=0.0,
            exit_code=exit_code,
            error_class=f"cyclopts.{exc.__class__.__name__}",
            error_stage=_classify_error_stage(exc),
            error_message=str(exc),
        )
    except Exception as exc:
        _finalize_parse_ms(state)
        if state.exec_ms is None:
            state.exec_ms = (time.perf_counter() - state.t0) * 1000.0
        exit_code = ExitCode.from_exception(exc)
        if exit_code == ExitCode.GENERAL_ERROR:
            _LOGGER.exception("Command execution failed.")
        else:
            _LOGGER.error("%s", exc)  # noqa: TRY400
        event = CliInvokeEvent(
            ok=False,
            command=state.command_name,
            parse_ms=state.parse_ms or 0.0,
            exec_ms=state.exec_ms or 0.0,
            exit_code=exit_code,
            error_class=f"{exc.__class__.__module__}.{exc.__class__.__name__}",
            error_stage="execution",
            error_message=str(exc),
        )
    _LOGGER.debug(
        "Command %s finished with exit code %d (parse %.1fms, exec %.1fms)",
        event.command,
        event.exit_code,
        event.parse_ms,
        event.exec_ms,
    )
    return int(exit_code), event


def _classify_error_stage(exc: CycloptsError) -> str:
    """Classify Cyclopts errors into CLI pipeline stages.

    Returns:
    -------
    str
        Error stage label.
    """
    name = exc.__class__.__name__
    if name == "UnknownCommandError":
        return "command_resolve"
    if name in {"UnknownOptionError", "MissingArgumentError", "RepeatArgumentError"}:
        return "binding"
    if name == "CoercionError":
        return "coercion"
    if name == "ValidationError":
        return "validation"
    return "unknown"


__all__ = ["CliInvokeEvent", "invoke"]
