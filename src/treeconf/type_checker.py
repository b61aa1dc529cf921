"""Type validation against tags, classes, and lists of either."""

from typing import Any, Sequence

from .exceptions import TypeDefinitionError
from .type_map import TypeMap


class TypeChecker:
    """Validate values against type specifications resolved through ``TypeMap``."""

    DEFAULT_TYPE = "any"

    @classmethod
    def call(cls, value: Any, type: Any = None) -> bool:
        """Check whether a value matches a type specification.

        Args:
            value: Value to check
            type: Tag, class, or list/tuple of either  # (None or [] means "any")

        Returns:
            True if the value matches

        Raises:
            TypeDefinitionError: If the specification names an unknown type
        """
        if type is None or (isinstance(type, (list, tuple)) and not type):
            type = cls.DEFAULT_TYPE

        if isinstance(type, str):
            return cls.base_type(value, cls.fetch_type(type))
        elif isinstance(type, (list, tuple)):
            return cls.one_of(value, type)
        else:
            return cls.custom_type(value, type)

    @classmethod
    def base_type(cls, value: Any, type_: Any) -> bool:
        """Match a value against a tag or an already resolved tag entry."""
        if isinstance(type_, str):
            type_ = cls.fetch_type(type_)

        if isinstance(type_, (list, tuple)):
            return cls.one_of(value, type_)
        return cls.custom_type(value, type_)

    @classmethod
    def one_of(cls, value: Any, types: Sequence[Any]) -> bool:
        """Match a value against any member of a list specification."""
        # Unknown tags fail even when an earlier member would match
        for type_ in types:
            if isinstance(type_, str):
                cls.fetch_type(type_)

        return any(cls.base_type(value, type_) for type_ in types)

    @classmethod
    def custom_type(cls, value: Any, type_: Any) -> bool:
        """Match a value against a concrete class."""
        if not isinstance(type_, type):
            raise TypeDefinitionError(type_)

        # bool subclasses int, but True is not an integer setting
        if isinstance(value, bool) and type_ is int:
            return False
        return isinstance(value, type_)

    @classmethod
    def fetch_type(cls, tag: str) -> Any:
        """Resolve a tag via the registry.

        Raises:
            TypeDefinitionError: If the tag is unknown
        """
        resolved = TypeMap.get(tag)
        if resolved is None:
            raise TypeDefinitionError(tag)
        return resolved
