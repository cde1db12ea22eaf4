"""
Pipeline executor - runs the lifecycle phases for one boot.

Order:
    register → run → on_complete      (success path)
        └─ any failure → on_error     (failure path)
    on_finally                        (always)
    exit(code)                        (failure path, when exit-on-error is set)

Each phase is awaited before the next one starts. A register failure skips
run and on_complete. on_finally runs exactly once whatever happened before
it; exit is deferred until after on_finally so the process never terminates
before the finalizer ran.
"""

from __future__ import annotations

import inspect
from typing import Any, Awaitable, Callable, Optional

from ..models.enums import Phase, PipelineOutcome, LogCategory
from ..models.options import HookSet, PipelineResult
from ..utils.exit_codes import exit_code_for, exit_code_hint
from ..utils.logger import get_logger

log = get_logger().for_category(LogCategory.PIPELINE)

ExitFn = Callable[[int], Awaitable[None]]


async def invoke_hook(fn: Callable[..., Any], *args: Any) -> Any:
    """Call a hook and await its result if it is awaitable (sync or async hooks)."""
    result = fn(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


class PipelineExecutor:
    """
    Executes a HookSet once.

    Example:
        executor = PipelineExecutor(hooks, exit_fn=controller.exit)
        result = await executor.execute()
    """

    def __init__(self, hooks: HookSet, exit_fn: ExitFn):
        """
        Args:
            hooks: Resolved hooks for this boot cycle (frozen)
            exit_fn: Coroutine function called with the exit code on the
                failure path when hooks.should_exit_on_error is set
        """
        self._hooks = hooks
        self._exit = exit_fn
        self.result = PipelineResult()

    async def _phase(self, phase: Phase, *args: Any) -> Any:
        self.result.last_phase = phase
        self.result.phases.append(phase)
        log.debug(f"→ {phase.name}")
        return await invoke_hook(self._hooks.get(phase), *args)

    async def execute(self) -> PipelineResult:
        """
        Run all phases once.

        Returns:
            PipelineResult describing the run

        Raises:
            Whatever on_finally or on_error raise; phase failures from
            register/run/on_complete are routed to on_error instead.
        """
        result = self.result
        exit_code: Optional[int] = None

        try:
            await self._phase(Phase.REGISTER)

            hint = exit_code_hint(await self._phase(Phase.RUN))
            if hint is not None:
                result.exit_code_hint = hint

            hint = exit_code_hint(await self._phase(Phase.ON_COMPLETE))
            if hint is not None:
                result.exit_code_hint = hint

            result.outcome = PipelineOutcome.COMPLETED
            log.debug("Pipeline completed", exit_code_hint=result.exit_code_hint)

        except Exception as error:
            failed_phase = result.last_phase
            result.outcome = PipelineOutcome.FAILED
            result.error = error
            if self._hooks.should_exit_on_error:
                exit_code = exit_code_for(error)
                result.exit_code = exit_code

            log.debug(
                "Phase failed",
                phase=failed_phase.name if failed_phase else None,
                error=repr(error)
            )
            await self._phase(Phase.ON_ERROR, error)

        finally:
            try:
                await self._phase(Phase.ON_FINALLY)
            finally:
                if exit_code is not None:
                    log.debug(f"Exiting after failure (code={exit_code})")
                    await self._exit(exit_code)

        return result
