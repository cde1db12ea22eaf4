"""
Options and hook set models

BootstrapOptions is what callers supply (every field optional, `run` is
checked at resolution time). HookSet is the resolved, frozen form the
pipeline executes: every field populated.
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, List, Optional, Union

from .enums import Phase, PipelineOutcome

HookResult = Union[None, int, Awaitable[Optional[int]]]
Hook = Callable[[], HookResult]
ErrorHook = Callable[[BaseException], Union[None, Awaitable[None]]]


@dataclass
class BootstrapOptions:
    """
    Options for bootstrapping

    Attributes:
        register: Runs before the entrypoint; set up services etc.
        run: Entrypoint (required before boot)
        on_complete: Runs after a successful run
        on_finally: Runs after the success or the failure path
        teardown: Cleanup run once when the process exits
        should_exit_on_error: Terminate the process after a failure
        error_handler: Receives failures from register/run/on_complete
    """
    register: Optional[Hook] = None
    run: Optional[Hook] = None
    on_complete: Optional[Hook] = None
    on_finally: Optional[Hook] = None
    teardown: Optional[Hook] = None
    should_exit_on_error: Optional[bool] = None
    error_handler: Optional[ErrorHook] = None

    def get_hook(self, phase: Phase) -> Optional[Callable[..., Any]]:
        """Return the hook supplied for a phase, or None"""
        if phase is Phase.ON_ERROR:
            return self.error_handler
        return getattr(self, phase.hook_name)

    def set_hook(self, phase: Phase, fn: Optional[Callable[..., Any]]) -> None:
        if phase is Phase.ON_ERROR:
            self.error_handler = fn
        else:
            setattr(self, phase.hook_name, fn)


@dataclass(frozen=True)
class HookSet:
    """Fully resolved hooks for one boot cycle"""
    register: Hook
    run: Hook
    on_complete: Hook
    on_error: ErrorHook
    on_finally: Hook
    teardown: Hook
    should_exit_on_error: bool = True

    def get(self, phase: Phase) -> Callable[..., Any]:
        return getattr(self, phase.hook_name)


@dataclass
class PipelineResult:
    """Outcome of one pipeline run, returned by the boot task"""
    outcome: Optional[PipelineOutcome] = None
    last_phase: Optional[Phase] = None
    error: Optional[BaseException] = None
    exit_code_hint: Optional[int] = None
    exit_code: Optional[int] = None    # requested on the failure path
    phases: List[Phase] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.outcome is PipelineOutcome.COMPLETED
