"""
Lifecycle subsystem
-------------------

Exports the public API for:
- the lifecycle controller (boot / exit)
- option resolution
- phase execution
- signal binding

External code should import from:
    from appboot.lifecycle import Bootstrap, bootstrap, bootstrap_promise
"""

from .controller import Bootstrap
from .facade import bootstrap, bootstrap_promise
from .options import resolve_options, coerce_options, report_error
from .pipeline import PipelineExecutor, invoke_hook
from .signal_adapter import SignalAdapter, signal_exit_code

__all__ = [
    "Bootstrap",
    "bootstrap",
    "bootstrap_promise",
    "resolve_options",
    "coerce_options",
    "report_error",
    "PipelineExecutor",
    "invoke_hook",
    "SignalAdapter",
    "signal_exit_code",
]
