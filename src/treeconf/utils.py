"""Utility functions for TreeConf."""

import datetime
import json
import re
from typing import Any, Dict

import yaml


class _ConfigLoader(yaml.SafeLoader):
    """Safe YAML loader that also reads exponent floats such as ``1e-4``."""


# Custom loader to handle scientific notation correctly
_ConfigLoader.add_implicit_resolver(
    tag="tag:yaml.org,2002:float",
    regexp=re.compile(r"-? [1-9] ( \. [0-9]* [1-9] )? ( e [-+] [1-9] [0-9]* )?", re.X),
    first=list("-+0123456789."),
)


def load_yaml(stream: Any) -> Any:
    """Load YAML content from a stream.

    Args:
        stream: Stream to read YAML from  # (file-like object or string)
    Returns:
        Parsed YAML content  # (nested dict structure for config files)
    """
    return yaml.load(stream, Loader=_ConfigLoader)


def dump_yaml(data: Dict[str, Any]) -> str:
    """Dump a mapping as block-style YAML, keeping key order."""
    return yaml.dump(data, default_flow_style=False, sort_keys=False)


def _json_default(value: Any) -> Any:
    """Encode scalars the json module does not know."""
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    return str(value)


def dump_json(data: Dict[str, Any], **kwargs: Any) -> str:
    """Dump a mapping as JSON text.

    Args:
        data: Data to encode  # (plain nested dict)
        **kwargs: Extra ``json.dumps`` options  # (e.g. indent)
    """
    kwargs.setdefault("default", _json_default)
    return json.dumps(data, **kwargs)
