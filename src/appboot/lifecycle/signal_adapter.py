"""
Signal adapter - routes termination requests to Bootstrap.exit().

Sources:
- OS signals (SIGINT / SIGTERM by default, configurable)
- interpreter shutdown (atexit), for processes that end without exit()

Re-entrancy is handled by the controller: exit() clears the boot flag
before teardown, so a second trigger terminates without a second teardown.
"""

from __future__ import annotations

import asyncio
import atexit
import signal
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

from ..models.enums import LogCategory
from ..utils.logger import get_logger

if TYPE_CHECKING:
    from .controller import Bootstrap

log = get_logger().for_category(LogCategory.SIGNAL)

DEFAULT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def signal_exit_code(sig: signal.Signals) -> int:
    """Conventional status for a process ended by a signal (130 for SIGINT, 143 for SIGTERM)."""
    return 128 + int(sig)


class SignalAdapter:
    """
    Binds termination-request events to a controller.

    The controller is injected, so several controllers (e.g. in tests) each
    get their own adapter and never share handler state.

    Example:
        adapter = SignalAdapter(app)
        adapter.install(asyncio.get_running_loop())
        ...
        adapter.uninstall()
    """

    def __init__(
        self,
        controller: "Bootstrap",
        signals: Optional[Iterable[signal.Signals]] = None,
        exit_on_interpreter_shutdown: bool = True,
    ):
        self._controller = controller
        self._signals: List[signal.Signals] = list(DEFAULT_SIGNALS if signals is None else signals)
        self._exit_on_interpreter_shutdown = exit_on_interpreter_shutdown
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._loop_handlers: List[signal.Signals] = []
        self._previous_handlers: Dict[signal.Signals, object] = {}
        self._atexit_registered = False
        self._pending: List[asyncio.Task] = []
        self.last_signal: Optional[signal.Signals] = None

    @property
    def signals(self) -> List[signal.Signals]:
        return list(self._signals)

    @property
    def installed(self) -> bool:
        return self._loop is not None or self._atexit_registered

    def install(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> "SignalAdapter":
        """
        Install OS signal handlers and the interpreter-shutdown hook.

        Args:
            loop: Event loop that runs the controller (default: running loop)
        """
        if loop is None:
            loop = asyncio.get_running_loop()
        self._loop = loop

        for sig in self._signals:
            try:
                loop.add_signal_handler(sig, self._on_signal, sig)
                self._loop_handlers.append(sig)
            except (NotImplementedError, RuntimeError):
                # Loops without add_signal_handler (Windows, non-main threads)
                try:
                    self._previous_handlers[sig] = signal.signal(sig, self._on_raw_signal)
                except ValueError:
                    log.warn(f"Cannot handle {sig.name} outside the main thread")

        if self._exit_on_interpreter_shutdown and not self._atexit_registered:
            atexit.register(self._on_interpreter_exit)
            self._atexit_registered = True

        names = ", ".join(s.name for s in self._signals) or "none"
        log.info(f"Signal handlers installed ({names})")
        return self

    def remove_signal_handlers(self) -> None:
        """Remove OS signal handlers; the interpreter-shutdown hook stays."""
        if self._loop is not None and not self._loop.is_closed():
            for sig in self._loop_handlers:
                self._loop.remove_signal_handler(sig)
        self._loop_handlers.clear()

        for sig, previous in self._previous_handlers.items():
            signal.signal(sig, previous)
        self._previous_handlers.clear()
        self._loop = None

    def uninstall(self) -> None:
        """Remove every handler installed by install()."""
        self.remove_signal_handlers()
        if self._atexit_registered:
            atexit.unregister(self._on_interpreter_exit)
            self._atexit_registered = False
        log.debug("Signal handlers removed")

    def _on_signal(self, sig: signal.Signals) -> None:
        """Handle OS signal by scheduling exit() on the loop."""
        self.last_signal = sig
        code = signal_exit_code(sig)
        log.info(f"Signal {sig.name} received → exiting (code={code})")
        task = self._loop.create_task(self._controller.exit(code))
        self._pending.append(task)
        task.add_done_callback(self._pending.remove)

    def _on_raw_signal(self, signum: int, frame) -> None:
        sig = signal.Signals(signum)
        self._loop.call_soon_threadsafe(self._on_signal, sig)

    def _on_interpreter_exit(self) -> None:
        """atexit hook: the interpreter is already terminating, so only teardown runs."""
        if not self._controller.is_booted:
            return
        log.info("Interpreter shutting down → running teardown")
        asyncio.run(self._controller.release())
