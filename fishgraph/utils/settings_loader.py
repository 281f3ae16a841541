"""
Settings loader for FishGraph.

Loads EngineSettings from a YAML file.
"""

from pathlib import Path

import yaml

from fishgraph.schemas import EngineSettings


DEFAULT_SETTINGS_NAME = "fishgraph.yaml"


def load_settings(path: Path | None = None) -> EngineSettings:
    """
    Load engine settings.

    Args:
        path: YAML file with EngineSettings fields. None returns defaults.

    Returns:
        Validated EngineSettings

    Raises:
        FileNotFoundError: If an explicit path doesn't exist
        yaml.YAMLError: If YAML parsing fails
        pydantic.ValidationError: If a value is out of range
    """
    if path is None:
        return EngineSettings()

    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Settings file not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    return EngineSettings.model_validate(raw)


def find_settings(search_dir: Path) -> Path | None:
    """Return search_dir/fishgraph.yaml if present."""
    candidate = search_dir / DEFAULT_SETTINGS_NAME
    return candidate if candidate.exists() else None
