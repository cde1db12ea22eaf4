"""
Models package - Data models for the lifecycle controller
"""

from .enums import Phase, PipelineOutcome, LogLevel, LogCategory
from .errors import (
    BootstrapError,
    ConfigurationError,
    MissingRunPhaseError,
    AlreadyBootedError,
    PhaseFailure,
)
from .options import BootstrapOptions, HookSet, PipelineResult
from .config import RuntimeSettings, LoggingSettings, LifecycleSettings

__all__ = [
    'Phase',
    'PipelineOutcome',
    'LogLevel',
    'LogCategory',
    'BootstrapError',
    'ConfigurationError',
    'MissingRunPhaseError',
    'AlreadyBootedError',
    'PhaseFailure',
    'BootstrapOptions',
    'HookSet',
    'PipelineResult',
    'RuntimeSettings',
    'LoggingSettings',
    'LifecycleSettings',
]
