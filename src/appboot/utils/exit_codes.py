"""Exit code derivation"""

from typing import Any, Optional

from ..models.errors import BootstrapError

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def normalize_exit_code(code: int) -> int:
    """Reduce an exit code into 0..255, the range the OS reports."""
    return int(code) % 256


def exit_code_hint(value: Any) -> Optional[int]:
    """
    Return the exit-code hint carried by a hook's return value.

    Only real integers count; bools and other values are ignored.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return normalize_exit_code(value)


def exit_code_for(error: BaseException) -> int:
    """Exit code for a failure: its explicit `exit_code` if tagged, else 1."""
    if isinstance(error, BootstrapError) and error.exit_code is not None:
        return normalize_exit_code(error.exit_code)
    return EXIT_FAILURE
