"""
Enums for the lifecycle state machine
"""

from enum import Enum, auto


class Phase(Enum):
    """
    Lifecycle phases, in pipeline order.

    REGISTER:    setup before the entrypoint (services, connections)
    RUN:         entrypoint
    ON_COMPLETE: after a successful run
    ON_ERROR:    receives the failure of register/run/on_complete
    ON_FINALLY:  always, after the success or failure path
    TEARDOWN:    cleanup on exit, once per boot cycle
    """
    REGISTER = auto()
    RUN = auto()
    ON_COMPLETE = auto()
    ON_ERROR = auto()
    ON_FINALLY = auto()
    TEARDOWN = auto()

    @property
    def hook_name(self) -> str:
        """Attribute name of the hook bound to this phase (e.g. 'on_complete')"""
        return self.name.lower()


class PipelineOutcome(Enum):
    """How a pipeline run ended"""
    COMPLETED = auto()   # register, run and on_complete succeeded
    FAILED = auto()      # a failure was routed to on_error


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    LIFECYCLE = auto()   # Boot state changes, hook configuration
    PIPELINE = auto()    # Phase execution
    SIGNAL = auto()      # OS signals, interpreter shutdown
    SHUTDOWN = auto()    # Teardown and process termination
    SYSTEM = auto()      # Startup, errors

    GENERAL = auto()    # Default general category
