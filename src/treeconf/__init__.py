"""TreeConf - Hierarchical Typed Configuration Trees.

Declare nested trees of named settings, validate each value against a
declared or inferred type, lock settings against overwrites, and convert
trees to and from mappings, JSON, and YAML.
"""
# ruff: noqa: F401

import logging

from .configuration import Configurable, build_settings
from .exceptions import (
    ImmutableSettingError,
    LoadDataError,
    SettingTypeError,
    TreeConfError,
    TypeDefinitionError,
)
from .loader import load_data
from .setting import Setting
from .type_checker import TypeChecker
from .type_map import FalseType, TrueType, TypeMap

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
