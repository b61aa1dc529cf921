"""Binding named setting trees to modules and classes."""

import logging
from typing import Any, Dict, Mapping, Optional

from .loader import load_data
from .setting import Block, Setting

logger = logging.getLogger(__name__)


def build_settings(
    block: Optional[Block] = None,
    hash: Optional[Mapping[str, Any]] = None,
    json: Optional[str] = None,
    yaml: Optional[str] = None,
    schema: Optional[Mapping[str, Any]] = None,
    lock_schema: Optional[Mapping[str, Any]] = None,
) -> Setting:
    """Build a root setting tree.

    The block runs first; loaded data is imported on top of it. Passing any
    option requires a data source.

    Args:
        block: Optional callback declaring settings on the root
        hash: Plain mapping to import
        json: JSON text to import
        yaml: Path to a YAML file to import
        schema: Nested type overlay for the imported data
        lock_schema: Nested lock overlay for the imported data

    Returns:
        Root setting node

    Raises:
        LoadDataError: If options are given without a usable data source
    """
    settings = Setting(block)

    options = (hash, json, yaml, schema, lock_schema)
    if any(option is not None for option in options):
        data = load_data(hash=hash, json=json, yaml=yaml)
        settings.load_from_hash(data, schema=schema, lock_schema=lock_schema)

    return settings


class Configurable:
    """Mixin attaching named setting trees to a class.

    ``Cls.configure("app", block)`` exposes the tree as ``Cls.app``; calling
    ``Cls.app(block)`` runs a block against it. Subclasses get their own
    copies of every tree, derived at class creation time.
    """

    _setting_trees: Dict[str, Setting] = {}

    def __init_subclass__(cls, **kwargs: Any):
        super().__init_subclass__(**kwargs)

        # Collect trees from all bases, nearest base last so it wins
        inherited = {}  # Dict[str, Setting] (tree name -> parent tree)
        for base in reversed(cls.__mro__[1:]):
            inherited.update(vars(base).get("_setting_trees", {}))

        cls._setting_trees = {}
        for name, tree in inherited.items():
            cls._bind_tree(name, tree.derive())
        if inherited:
            logger.debug("Derived setting trees %s for %s", list(inherited), cls.__name__)

    @classmethod
    def configure(cls, name: str, block: Optional[Block] = None, **options: Any):
        """Attach a setting tree named ``name`` to this class.

        Args:
            name: Accessor name for the tree
            block: Optional callback declaring settings on the root
            **options: ``hash``, ``json``, ``yaml``, ``schema``, ``lock_schema``

        Returns:
            This class

        Raises:
            ValueError: If ``name`` collides with the mixin's own attributes
        """
        cls._bind_tree(name, build_settings(block, **options))
        return cls

    @classmethod
    def _bind_tree(cls, name: str, settings: Setting) -> None:
        if hasattr(Configurable, name):
            raise ValueError(f"'{name}' is reserved and cannot name a setting tree")
        cls._setting_trees = {**cls._setting_trees, name: settings}
        setattr(cls, name, settings)
