"""Pytest configuration and shared fixtures for TreeConf tests."""

import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, Iterator

import pytest
import yaml
from treeconf import Setting


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def settings() -> Setting:
    """Create a flat setting tree with declared and typed slots."""

    def declare(node: Setting) -> None:
        node.config("opt")
        node.config().int("t_opt")
        node.config("type_opt", type="int")
        node.config("cstm_type_opt", type=int)

    return Setting(declare)


@pytest.fixture
def nested_settings() -> Setting:
    """Create a three-level setting tree with a typed string at each level."""

    def declare(node: Setting) -> None:
        node.config(param_a=1)
        node.str(param_b="2")
        nested = node.configure("nested")
        nested.config(param_a=1)
        nested.str(param_b="2")
        nested.configure("deep_nested", lambda deep: deep.config(param_a=1).str(param_b="2"))

    return Setting(declare)


def write_yaml_file(file_path: Path, data: Dict[str, Any]) -> None:
    """Write data to YAML file.

    Args:
        file_path: Path to write file
        data: Data to write
    """
    with open(file_path, "w") as f:
        yaml.dump(data, f, default_flow_style=False)


@pytest.fixture
def yaml_writer() -> Callable[[Path, Dict[str, Any]], None]:
    """Provide the YAML file writer to tests."""
    return write_yaml_file
