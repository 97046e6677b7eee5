"""Reading YAML/JSON input files."""

import json
from pathlib import Path
from typing import Any

import yaml

from routedoc.errors import SchemaDefinitionError


def load_document(file_path: Path) -> Any:
    """Parse a YAML or JSON file.

    JSON is tried on its own when YAML rejects the text (tab-indented JSON is
    not valid YAML).
    """
    text = file_path.read_text(encoding="utf-8")
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        try:
            return json.loads(text)
        except (json.JSONDecodeError, ValueError):
            raise SchemaDefinitionError(f"{file_path}: {e}") from e


def load_responses(file_path: Path | None) -> dict[str, Any]:
    """Load per-path response overrides keyed by ``"200"`` or a full path."""
    if file_path is None:
        return {}
    data = load_document(file_path) or {}
    if not isinstance(data, dict):
        raise SchemaDefinitionError(f"{file_path}: responses must be a mapping")
    return {str(key): value for key, value in data.items()}
