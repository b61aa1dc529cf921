"""Loading raw configuration data from mappings, JSON text, and YAML files."""

import json
import logging
from typing import Any, Dict, Mapping, Optional

import yaml

from .exceptions import LoadDataError
from .utils import load_yaml

logger = logging.getLogger(__name__)


def _parse_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise LoadDataError("Invalid JSON format") from e


def _load_yaml_file(path: str) -> Any:
    try:
        with open(path, "r") as f:
            data = load_yaml(f)
    except FileNotFoundError as e:
        raise LoadDataError("YAML file not found") from e
    except yaml.YAMLError as e:
        raise LoadDataError("Invalid YAML format") from e

    # Empty file
    return {} if data is None else data


def load_data(
    hash: Optional[Mapping[str, Any]] = None,
    json: Optional[str] = None,
    yaml: Optional[str] = None,
) -> Dict[str, Any]:
    """Load configuration data from the given source.

    When several sources are given the later one wins: ``yaml`` over ``json``
    over ``hash``.

    Args:
        hash: Plain mapping
        json: JSON text
        yaml: Path to a YAML file

    Returns:
        Loaded mapping

    Raises:
        LoadDataError: If the source is missing, unreadable, or malformed
    """
    data = None
    if hash is not None:
        data = hash
    if json is not None:
        data = _parse_json(json)
    if yaml is not None:
        data = _load_yaml_file(yaml)

    if data is None:
        raise LoadDataError("Invalid load source type")
    if not isinstance(data, Mapping):
        raise LoadDataError("Loaded data must be a mapping")

    logger.debug("Loaded %d top-level settings", len(data))
    return dict(data)
