"""Type registry mapping short type tags to concrete Python types."""

import datetime
import decimal
import enum
import fractions
from types import MappingProxyType
from typing import Any, List, Optional, Union


class _ConstantMeta(type):
    """Metaclass making ``isinstance`` match a single constant by identity."""

    constant: Any

    def __instancecheck__(cls, instance: Any) -> bool:
        return instance is cls.constant


class TrueType(metaclass=_ConstantMeta):
    """Type identity matching only ``True``."""

    constant = True


class FalseType(metaclass=_ConstantMeta):
    """Type identity matching only ``False``."""

    constant = False


class TypeMap:
    """Fixed catalog of type tags.

    A tag resolves either to a class or to a list of other tags (a composite).
    """

    TYPE_MAP = MappingProxyType(
        {
            "int": int,
            "str": str,
            "sym": enum.Enum,
            "null": type(None),
            "true_class": TrueType,
            "false_class": FalseType,
            "dict": dict,
            "list": list,
            "decimal": decimal.Decimal,
            "float": float,
            "complex": complex,
            "fraction": fractions.Fraction,
            "date": datetime.date,
            "datetime": datetime.datetime,
            "time": datetime.time,
            "any": object,
            "bool": ["true_class", "false_class"],
            "numeric": ["int", "float", "decimal"],
            "kernel_num": ["int", "float", "decimal", "complex", "fraction"],
            "chrono": ["date", "datetime", "time"],
        }
    )

    @classmethod
    def get(cls, tag: str) -> Optional[Union[type, List[str]]]:
        """Resolve a tag.

        Args:
            tag: Type tag to look up

        Returns:
            Concrete type, list of base tags, or None for unknown tags
        """
        return cls.TYPE_MAP.get(tag)

    @classmethod
    def list_types(cls) -> List[str]:
        """Return every known tag in catalog order."""
        return list(cls.TYPE_MAP.keys())
