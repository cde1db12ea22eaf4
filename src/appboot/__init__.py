"""appboot - process lifecycle orchestration (register, run, teardown on exit)"""

__version__ = "1.0.0"

from .lifecycle import Bootstrap, bootstrap, bootstrap_promise, SignalAdapter
from .models import (
    BootstrapOptions,
    HookSet,
    Phase,
    PipelineResult,
    BootstrapError,
    ConfigurationError,
    MissingRunPhaseError,
    AlreadyBootedError,
    PhaseFailure,
)

__all__ = [
    "Bootstrap",
    "bootstrap",
    "bootstrap_promise",
    "SignalAdapter",
    "BootstrapOptions",
    "HookSet",
    "Phase",
    "PipelineResult",
    "BootstrapError",
    "ConfigurationError",
    "MissingRunPhaseError",
    "AlreadyBootedError",
    "PhaseFailure",
]
