"""
Configuration loader
"""
import os
from pathlib import Path
from typing import Optional

import yaml

from quiz_engine.models import EngineSettings


DEFAULT_CONFIG_PATH = "config/engine.yaml"
CONFIG_ENV_VAR = "QUIZ_ENGINE_CONFIG"


def load_settings(config_path: Optional[str] = None) -> EngineSettings:
    """
    Load engine settings from YAML file

    Lookup order: explicit argument, then $QUIZ_ENGINE_CONFIG, then
    config/engine.yaml. Only the default location may be absent, in which
    case built-in defaults are used.

    Args:
        config_path: Path to config file

    Returns:
        EngineSettings object

    Raises:
        FileNotFoundError: If an explicitly requested file does not exist
    """
    explicit = config_path or os.environ.get(CONFIG_ENV_VAR)
    path = Path(explicit or DEFAULT_CONFIG_PATH)

    if not path.exists():
        if explicit:
            raise FileNotFoundError(f"Config file not found: {path}")
        return EngineSettings()

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    return EngineSettings(**data)
