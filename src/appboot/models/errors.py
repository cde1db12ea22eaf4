"""
Error types raised by the lifecycle controller

All errors derive from BootstrapError, which carries an optional exit code.
The pipeline consults `exit_code` when deriving the process status after a
failure; any other exception terminates with status 1.
"""

from typing import Optional


class BootstrapError(Exception):
    """Base class for lifecycle errors"""

    def __init__(self, message: str = "", exit_code: Optional[int] = None):
        super().__init__(message)
        self.exit_code = exit_code


class ConfigurationError(BootstrapError):
    """Invalid options, settings or hook assignment. Raised synchronously."""


class MissingRunPhaseError(ConfigurationError):
    """No run phase was configured before boot"""

    def __init__(self, message: str = "A run phase is required to boot"):
        super().__init__(message)


class AlreadyBootedError(ConfigurationError):
    """A hook or option was changed (or boot called) while booted"""

    def __init__(self, message: str = "Cannot reconfigure while booted"):
        super().__init__(message)


class PhaseFailure(BootstrapError):
    """
    Failure raised from a hook to request a specific exit code.

    Example:
        async def register():
            if not await db.ping():
                raise PhaseFailure("database unreachable", exit_code=3)
    """
