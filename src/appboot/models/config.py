"""
Runtime settings - Pydantic models for the YAML configuration file

Example (config/factory_defaults.yaml):

    logging:
      level: INFO
      colors: true
    lifecycle:
      should_exit_on_error: true
      signals: [SIGINT, SIGTERM]
      exit_on_interpreter_shutdown: true
"""

import signal
from typing import List

from pydantic import BaseModel, Field, field_validator

from .enums import LogLevel
from ..utils.enum_helper import EnumHelper


class LoggingSettings(BaseModel):
    """Logger configuration"""
    level: LogLevel = Field(LogLevel.INFO, description="Minimum level to print")
    colors: bool = Field(True, description="ANSI colors on terminal output")

    @field_validator("level", mode="before")
    @classmethod
    def _parse_level(cls, value):
        if isinstance(value, str):
            return EnumHelper.from_string(LogLevel, value)
        return value


class LifecycleSettings(BaseModel):
    """Defaults applied to every controller built with these settings"""
    should_exit_on_error: bool = True
    signals: List[signal.Signals] = Field(
        default_factory=lambda: [signal.SIGINT, signal.SIGTERM],
        description="Termination-request signals routed to exit()"
    )
    exit_on_interpreter_shutdown: bool = Field(
        True, description="Run teardown from an atexit hook if still booted"
    )

    @field_validator("signals", mode="before")
    @classmethod
    def _parse_signals(cls, value):
        if value is None:
            return []
        parsed = []
        for item in value:
            if isinstance(item, str):
                name = item.upper()
                if not name.startswith("SIG"):
                    name = "SIG" + name
                parsed.append(EnumHelper.from_string(signal.Signals, name))
            else:
                parsed.append(signal.Signals(item))
        return parsed


class RuntimeSettings(BaseModel):
    """Root of the configuration file"""
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    lifecycle: LifecycleSettings = Field(default_factory=LifecycleSettings)
