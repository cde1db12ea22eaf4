"""
Utility functions for the lifecycle controller
"""

from .enum_helper import EnumHelper
from .exit_codes import normalize_exit_code, exit_code_for, exit_code_hint

__all__ = [
    'EnumHelper',
    'normalize_exit_code',
    'exit_code_for',
    'exit_code_hint',
]
