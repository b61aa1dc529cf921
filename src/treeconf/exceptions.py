"""Custom exceptions for TreeConf."""

from typing import Any


def format_type(type_spec: Any) -> str:
    """Format a type specification for error messages.

    Args:
        type_spec: Tag, class, or list of either

    Returns:
        Formatted type string  # (e.g. "int", "Decimal", "[int, str]")
    """
    if isinstance(type_spec, (list, tuple)):
        return f"[{', '.join(format_type(item) for item in type_spec)}]"

    # Handle classes
    if isinstance(type_spec, type):
        return type_spec.__name__

    # Tags and anything else are shown verbatim
    return str(type_spec)


class TreeConfError(Exception):
    """Base exception for TreeConf errors."""

    pass


class TypeDefinitionError(TreeConfError):
    """Raised when a type specification names a type unknown to the registry."""

    def __init__(self, type_spec: Any):
        self.type_spec = type_spec
        super().__init__(f"No type Definition for: <{format_type(type_spec)}> type")


class SettingTypeError(TreeConfError, TypeError):
    """Raised when a setting value does not match its type specification."""

    def __init__(self, expected_type: Any, value: Any):
        self.expected_type = expected_type
        self.value = value
        super().__init__(
            f"Expected: <{format_type(expected_type)}>. "
            f"Given: {value!r} which is <{type(value).__name__}> class."
        )


class ImmutableSettingError(TreeConfError):
    """Raised when a locked setting is overwritten without an explicit lock."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"<{name}> setting is immutable")


class LoadDataError(TreeConfError):
    """Raised when configuration data cannot be loaded from its source."""

    pass
