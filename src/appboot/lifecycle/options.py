"""
Configuration resolver
----------------------

Turns caller-supplied BootstrapOptions (any field may be missing) into a
frozen HookSet (every field populated). Pure: no side effects, no I/O.
"""

from __future__ import annotations

from dataclasses import fields
from typing import Any, Mapping, Optional, Union

from ..models.enums import Phase, LogCategory
from ..models.errors import ConfigurationError, MissingRunPhaseError
from ..models.options import BootstrapOptions, HookSet
from ..utils.logger import get_logger

log = get_logger().for_category(LogCategory.PIPELINE)

OPTION_FIELDS = tuple(f.name for f in fields(BootstrapOptions))


def noop(*_args: Any) -> None:
    """Default for register, on_complete, on_finally and teardown."""
    return None


def report_error(error: BaseException) -> None:
    """Default error hook: write the failure and its traceback to stderr."""
    log.error(f"Unhandled failure: {error!r}", exception=error)


def coerce_options(value: Union[BootstrapOptions, Mapping[str, Any], None]) -> BootstrapOptions:
    """
    Accept BootstrapOptions, a plain mapping or None.

    Raises:
        ConfigurationError: Unknown option names or wrong type
    """
    if value is None:
        return BootstrapOptions()
    if isinstance(value, BootstrapOptions):
        return value
    if isinstance(value, Mapping):
        unknown = sorted(set(value) - set(OPTION_FIELDS))
        if unknown:
            raise ConfigurationError(
                f"Unknown bootstrap option(s): {', '.join(unknown)} "
                f"(expected: {', '.join(OPTION_FIELDS)})"
            )
        return BootstrapOptions(**value)
    raise ConfigurationError(
        f"Expected BootstrapOptions or a mapping, got {type(value).__name__}"
    )


def validate_hook(phase: Phase, fn: Any) -> None:
    if fn is not None and not callable(fn):
        raise ConfigurationError(f"Hook for {phase.name} must be callable, got {type(fn).__name__}")


def resolve_options(
    options: Union[BootstrapOptions, Mapping[str, Any], None],
    default_should_exit_on_error: bool = True,
) -> HookSet:
    """
    Merge options with defaults into a HookSet.

    Args:
        options: Caller options; `run` must be set
        default_should_exit_on_error: Used when the option is left as None

    Returns:
        HookSet with every hook populated

    Raises:
        MissingRunPhaseError: `run` is absent
        ConfigurationError: A supplied hook is not callable
    """
    options = coerce_options(options)

    for phase in Phase:
        validate_hook(phase, options.get_hook(phase))

    if options.run is None:
        raise MissingRunPhaseError()

    should_exit = options.should_exit_on_error
    if should_exit is None:
        should_exit = default_should_exit_on_error

    return HookSet(
        register=options.register or noop,
        run=options.run,
        on_complete=options.on_complete or noop,
        on_error=options.error_handler or report_error,
        on_finally=options.on_finally or noop,
        teardown=options.teardown or noop,
        should_exit_on_error=bool(should_exit),
    )


def merge_options(base: BootstrapOptions, override: Optional[BootstrapOptions]) -> BootstrapOptions:
    """Field-wise merge: values set on `override` win over `base`."""
    merged = BootstrapOptions(**{name: getattr(base, name) for name in OPTION_FIELDS})
    if override is None:
        return merged
    for name in OPTION_FIELDS:
        value = getattr(override, name)
        if value is not None:
            setattr(merged, name, value)
    return merged
