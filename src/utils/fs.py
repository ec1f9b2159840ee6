"""YAML I/O for configs and reports.

Provides:
    - load_yaml: read a config file whose top level must be a mapping
    - atomic_yaml_dump: write a report so readers never see a partial file

Every error names the offending path. Malformed YAML and a non-mapping
top level both surface as ValueError, the same type the pydantic loaders
in validators raise, so entrypoints need a single except clause.

Usage:
    from src.utils import fs
    cfg = fs.load_yaml("configs/arc_length.v1.yaml")
    fs.atomic_yaml_dump(report, "outputs/lengths.yaml")
"""

import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml


def atomic_write_text(path: Union[str, Path], text: str) -> None:
    """Replace ``path`` with ``text`` in one rename.

    The data goes to a uniquely named sibling first, so two reports
    written to the same directory at once never share a temp file.

    Raises
    ------
    RuntimeError
        If the write or the rename fails; the temp file is removed
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except OSError as e:
        Path(tmp_name).unlink(missing_ok=True)
        raise RuntimeError(f"Failed to write {path} atomically: {e}") from e


def atomic_yaml_dump(obj: Mapping[str, Any], path: Union[str, Path]) -> None:
    """Write a mapping as block-style YAML, keeping insertion order."""
    atomic_write_text(
        path,
        yaml.safe_dump(dict(obj), default_flow_style=False, sort_keys=False, allow_unicode=True),
    )


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a YAML config file.

    Parameters
    ----------
    path : Union[str, Path]
        YAML file path

    Returns
    -------
    Dict[str, Any]
        Top-level mapping ({} for an empty file)

    Raises
    ------
    FileNotFoundError
        If the file doesn't exist
    ValueError
        If the YAML is malformed or its top level is not a mapping
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"YAML file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding='utf-8'))
    except yaml.YAMLError as e:
        raise ValueError(f"Malformed YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(
            f"Expected a mapping at the top level of {path}, got {type(data).__name__}"
        )
    return data
