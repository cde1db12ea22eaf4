"""Enum conversion utilities"""

from enum import Enum
from typing import TypeVar, Type, Optional, List, Union

# Generic type for any Enum subclass
E = TypeVar("E", bound=Enum)


class EnumHelper:
    """
    Utility class for working with Enums:
    - Parse names from config or call sites back to enum members (case-insensitive)
    - Accept members or names interchangeably
    - List all member names (for error messages)
    """

    @staticmethod
    def from_string(enum_class: Type[E], name: str, case_insensitive: bool = True,
                    default: Optional[E] = None) -> E:
        """
        Parse string to Enum member.

        Args:
            enum_class: Enum class to parse into
            name: String name (case-insensitive by default)
            case_insensitive: If True, matches ignoring case
            default: Return value if not found (None = raise)

        Returns:
            Enum member or default if provided

        Raises:
            ValueError: Unknown name and no default
        """
        if not issubclass(enum_class, Enum):
            raise TypeError(f"{enum_class} is not an Enum class")

        wanted = name.strip()
        if case_insensitive:
            wanted = wanted.upper()

        for member in enum_class:
            if (member.name.upper() if case_insensitive else member.name) == wanted:
                return member

        if default is not None:
            return default
        valid = ", ".join(EnumHelper.list_names(enum_class))
        raise ValueError(f"Invalid {enum_class.__name__} name: {name} (expected one of: {valid})")

    @staticmethod
    def coerce(enum_class: Type[E], value: Union[E, str]) -> E:
        """Return `value` if it already is a member, otherwise parse it by name"""
        if isinstance(value, enum_class):
            return value
        if isinstance(value, str):
            return EnumHelper.from_string(enum_class, value)
        raise TypeError(f"Expected {enum_class.__name__} or str, got {type(value).__name__}")

    @staticmethod
    def list_names(enum_class: Type[E], lowercase: bool = False) -> List[str]:
        """
        List all Enum member names.

        Args:
            enum_class: Enum class to inspect
            lowercase: Return lowercase names

        Returns:
            List of member names (strings)
        """
        if not issubclass(enum_class, Enum):
            raise TypeError(f"{enum_class} is not an Enum class")

        if lowercase:
            return [member.name.lower() for member in enum_class]
        return [member.name for member in enum_class]
