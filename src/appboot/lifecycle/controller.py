"""
Lifecycle controller
--------------------

Owns the hooks and the boot flag for one application. Hooks may only be
changed while not booted; boot() freezes them into a HookSet for the
cycle, exit() runs teardown once and terminates the process.

    app = Bootstrap({"register": connect_db, "teardown": close_db})
    app.start(serve)          # blocking entrypoint from synchronous code

    # or, inside a running event loop:
    task = app.boot(serve)
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Set, Union

from ..models.config import RuntimeSettings
from ..models.enums import Phase, LogCategory
from ..models.errors import AlreadyBootedError, ConfigurationError
from ..models.options import BootstrapOptions, HookSet, Hook, PipelineResult
from ..utils.enum_helper import EnumHelper
from ..utils.exit_codes import EXIT_SUCCESS, EXIT_FAILURE, normalize_exit_code
from ..utils.logger import get_logger, configure_logger
from .options import coerce_options, merge_options, resolve_options, validate_hook
from .pipeline import PipelineExecutor, invoke_hook
from .signal_adapter import SignalAdapter

log = get_logger().for_category(LogCategory.LIFECYCLE)

Terminate = Callable[[int], Any]


class Bootstrap:
    """
    Process-lifecycle controller.

    Hooks come from, in order of precedence:
    1. configure(phase, fn) / the options passed to __init__
    2. methods declared on a subclass, named after the phase:

        class AppBootstrap(Bootstrap):
            def register(self):
                print("Registering...")

            def teardown(self):
                print("Teardown...")

    Termination goes through `terminate` (default sys.exit), injected so
    tests can observe the exit code without ending the interpreter.
    """

    def __init__(
        self,
        options: Union[BootstrapOptions, Mapping[str, Any], None] = None,
        *,
        terminate: Optional[Terminate] = None,
        settings: Optional[RuntimeSettings] = None,
    ):
        """
        Args:
            options: BootstrapOptions or mapping with the same keys
            terminate: Called with the final exit code (default: sys.exit)
            settings: Runtime settings (default exit-on-error, signals)
        """
        self._settings = settings or RuntimeSettings()
        self._options = merge_options(self._declared_hooks(), coerce_options(options))
        self._terminate: Terminate = terminate or sys.exit
        self._is_booted = False
        self._hooks: Optional[HookSet] = None
        self._task: Optional[asyncio.Task] = None
        self._adapter: Optional[SignalAdapter] = None
        self._exit_code: Optional[int] = None
        self._stopping: Optional[asyncio.Future] = None
        self._exit_tasks: Set[asyncio.Task] = set()

    @classmethod
    def from_config(
        cls,
        options: Union[BootstrapOptions, Mapping[str, Any], None] = None,
        config_path: Optional[Union[str, Path]] = None,
        **kwargs,
    ) -> "Bootstrap":
        """
        Build a controller from a YAML settings file and apply its logging section.

        Args:
            options: Hook options
            config_path: YAML file (default: $APPBOOT_CONFIG or factory defaults)
        """
        from ..managers.config_manager import ConfigManager

        settings = ConfigManager(config_path).load()
        configure_logger(settings.logging.level, settings.logging.colors)
        return cls(options, settings=settings, **kwargs)

    def _declared_hooks(self) -> BootstrapOptions:
        """Collect hook methods declared on a subclass."""
        declared = BootstrapOptions()
        for phase in Phase:
            if callable(getattr(type(self), phase.hook_name, None)):
                declared.set_hook(phase, getattr(self, phase.hook_name))
        return declared

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def is_booted(self) -> bool:
        return self._is_booted

    @property
    def hooks(self) -> Optional[HookSet]:
        """HookSet frozen by the last boot() (None before the first boot)"""
        return self._hooks

    @property
    def task(self) -> Optional[asyncio.Task]:
        """Pipeline task of the current cycle"""
        return self._task

    @property
    def exit_code(self) -> Optional[int]:
        """Code passed to terminate by the last exit(), if any"""
        return self._exit_code

    @property
    def settings(self) -> RuntimeSettings:
        return self._settings

    @property
    def should_exit_on_error(self) -> bool:
        value = self._options.should_exit_on_error
        if value is None:
            return self._settings.lifecycle.should_exit_on_error
        return value

    @should_exit_on_error.setter
    def should_exit_on_error(self, value: bool) -> None:
        self._ensure_not_booted("should_exit_on_error")
        self._options.should_exit_on_error = bool(value)

    def _ensure_not_booted(self, what: str) -> None:
        if self._is_booted:
            raise AlreadyBootedError(f"Cannot change {what} while booted")

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def configure(self, phase: Union[Phase, str], fn: Optional[Callable[..., Any]]) -> "Bootstrap":
        """
        Replace the hook of a phase.

        Args:
            phase: Phase member or its name ("register", "on_error", ...)
            fn: Hook; None restores the default (not allowed for RUN)

        Raises:
            AlreadyBootedError: Called while booted
            ConfigurationError: Unknown phase, non-callable hook, or RUN cleared
        """
        try:
            phase = EnumHelper.coerce(Phase, phase)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(str(e)) from e

        self._ensure_not_booted(f"the {phase.name} hook")
        validate_hook(phase, fn)
        if phase is Phase.RUN and fn is None:
            raise ConfigurationError("The run phase cannot be cleared")

        self._options.set_hook(phase, fn)
        log.debug("Hook configured", phase=phase.name, hook=getattr(fn, "__qualname__", repr(fn)))
        return self

    # ------------------------------------------------------------------
    # Boot
    # ------------------------------------------------------------------

    def boot(self, run: Optional[Hook] = None, *, handle_signals: bool = True) -> asyncio.Task:
        """
        Start the pipeline on the running event loop and return immediately.

        Unless `handle_signals` is False, the configured signals and the
        interpreter-shutdown hook are bound to exit()/release() for the
        duration of the cycle (see bind_signals()).

        Args:
            run: Entrypoint, used when no run hook was configured
            handle_signals: Install a SignalAdapter if none is installed yet

        Returns:
            The pipeline task (resolves to a PipelineResult)

        Raises:
            AlreadyBootedError: Already booted
            MissingRunPhaseError: No run phase anywhere
            RuntimeError: No running event loop (use start())
        """
        if self._is_booted:
            raise AlreadyBootedError("Already booted")

        options = self._options
        if run is not None:
            if options.run is not None:
                log.warn("Run phase passed to boot() ignored; the configured run hook is used")
            else:
                validate_hook(Phase.RUN, run)
                options = merge_options(options, BootstrapOptions(run=run))

        hooks = resolve_options(options, self._settings.lifecycle.should_exit_on_error)

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            raise RuntimeError("boot() needs a running event loop; call start() from synchronous code") from None

        if handle_signals and (self._adapter is None or not self._adapter.installed):
            self.bind_signals(loop)

        self._hooks = hooks
        self._is_booted = True
        self._exit_code = None
        log.info("Booting...", should_exit_on_error=hooks.should_exit_on_error)

        executor = PipelineExecutor(hooks, self.exit)
        self._task = loop.create_task(executor.execute(), name=f"{type(self).__name__}.pipeline")
        return self._task

    def boot_async(self, *, handle_signals: bool = True) -> "asyncio.Future[None]":
        """
        Boot with a completion signal instead of a run phase.

        Disables exit-on-error, routes failures into the returned future and
        resolves it once register succeeded. The caller drives its own
        entrypoint afterwards.

        Raises:
            ConfigurationError: A run hook is already configured
        """
        if self._options.run is not None:
            raise ConfigurationError("boot_async() provides its own run phase; leave run unset")

        loop = asyncio.get_running_loop()
        completion: asyncio.Future = loop.create_future()

        def accept() -> None:
            if not completion.done():
                completion.set_result(None)

        def reject(error: BaseException) -> None:
            if not completion.done():
                completion.set_exception(error)

        self.configure(Phase.ON_ERROR, reject)
        self.should_exit_on_error = False
        self.boot(accept, handle_signals=handle_signals)
        return completion

    # ------------------------------------------------------------------
    # Exit
    # ------------------------------------------------------------------

    async def release(self) -> bool:
        """
        Clear the boot flag and run teardown, without terminating.

        The SignalAdapter installed by boot() is removed once teardown has
        finished; a signal arriving during teardown still reaches exit().

        Returns:
            True if teardown ran, False if not booted (nothing to release)
        """
        if not self._is_booted:
            return False
        self._is_booted = False

        try:
            teardown = self._hooks.teardown if self._hooks else None
            if teardown is not None:
                log.with_category(LogCategory.SHUTDOWN).info("Running teardown...")
                try:
                    await invoke_hook(teardown)
                except Exception as e:
                    log.with_category(LogCategory.SHUTDOWN).error(f"Teardown failed: {e!r}", exception=e)
        finally:
            self._unbind_signals()
        return True

    async def exit(self, code: int = EXIT_FAILURE) -> None:
        """
        Run teardown (once per boot cycle) and terminate the process.

        When not booted (never booted, or exit already in progress) the
        process is terminated immediately. A failing teardown is logged and
        does not change `code`.

        Under start() the code is handed back to start(), which terminates
        once the event loop has shut down. From synchronous callbacks use
        request_exit() instead, since this is a coroutine.
        """
        code = normalize_exit_code(code)
        if not await self.release():
            log.with_category(LogCategory.SHUTDOWN).debug("Not booted, skipping teardown")

        if self._stopping is not None:
            if not self._stopping.done():
                self._exit_code = code
                self._stopping.set_result(code)
            return

        self._exit_code = code
        log.with_category(LogCategory.SHUTDOWN).info(f"Terminating (code={code})")
        self._terminate(code)

    def request_exit(self, code: int = EXIT_FAILURE) -> asyncio.Task:
        """
        Schedule exit(code) on the running loop from synchronous code.

            loop.call_later(5, app.request_exit, 0)
        """
        task = asyncio.get_running_loop().create_task(self.exit(code))
        self._exit_tasks.add(task)
        task.add_done_callback(self._exit_tasks.discard)
        return task

    # ------------------------------------------------------------------
    # Signals and the blocking entrypoint
    # ------------------------------------------------------------------

    @property
    def signal_adapter(self) -> Optional[SignalAdapter]:
        """Adapter bound to this controller, if any"""
        return self._adapter

    def bind_signals(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> SignalAdapter:
        """Install a SignalAdapter for this controller using the configured signals."""
        lifecycle = self._settings.lifecycle
        adapter = SignalAdapter(
            self,
            signals=lifecycle.signals,
            exit_on_interpreter_shutdown=lifecycle.exit_on_interpreter_shutdown,
        )
        self._adapter = adapter.install(loop)
        return adapter

    def _unbind_signals(self) -> None:
        if self._adapter is not None:
            self._adapter.uninstall()
            self._adapter = None

    def start(self, run: Optional[Hook] = None) -> Optional[int]:
        """
        Blocking entrypoint: run an event loop until the lifecycle ends.

        Installs signal handlers, boots, waits for the pipeline and for any
        task the phases left running (servers, timers). When everything has
        finished without an exit() call, exits with the run phase's exit-code
        hint (or 0).

        exit() calls made while the loop runs only record the code; the
        loop is shut down and terminate is called from here.

        Returns:
            The exit code passed to terminate (only reached when terminate
            does not end the interpreter)
        """
        code = asyncio.run(self._serve(run))
        if code is not None:
            log.with_category(LogCategory.SHUTDOWN).info(f"Terminating (code={code})")
            self._terminate(code)
        return code

    async def _serve(self, run: Optional[Hook]) -> Optional[int]:
        loop = asyncio.get_running_loop()
        self._stopping = stopping = loop.create_future()
        adapter = self.bind_signals(loop)
        try:
            task = self.boot(run)
            await asyncio.wait({task, stopping}, return_when=asyncio.FIRST_COMPLETED)

            if task.done():
                result: PipelineResult = task.result()
                if not stopping.done():
                    await self._wait_for_background_tasks()
                    if self._is_booted:
                        code = result.exit_code_hint if result.exit_code_hint is not None else EXIT_SUCCESS
                        await self.exit(code)

            return stopping.result() if stopping.done() else None
        finally:
            self._stopping = None
            adapter.remove_signal_handlers()
            if not self._is_booted:
                adapter.uninstall()

    async def _wait_for_background_tasks(self) -> None:
        """Wait until exit() finished or no other task is left on the loop."""
        current = asyncio.current_task()
        stopping = self._stopping
        while not stopping.done():
            pending = {t for t in asyncio.all_tasks() if t is not current and not t.done()}
            if not pending:
                return
            await asyncio.wait(pending | {stopping}, return_when=asyncio.FIRST_COMPLETED)
