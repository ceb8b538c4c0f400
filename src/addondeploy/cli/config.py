"""Configuration loading for the CLI."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from addondeploy.exceptions import ConfigurationError
from addondeploy.models.addon import AddonConfig
from addondeploy.models.config import AddonDeployConfig


logger = logging.getLogger(__name__)


class ConfigManager:
    """Loads client settings (``config.yaml``) and the addon tree (``addon.yaml``)."""

    def __init__(self, config_dir: Path):
        """Initialize configuration manager."""
        self.config_dir = Path(config_dir)
        self.yaml = YAML(typ="safe")
        self.config: Optional[AddonDeployConfig] = None

    def load(self) -> AddonDeployConfig:
        """Load main configuration; defaults apply when ``config.yaml`` is absent."""
        config_file = self.config_dir / "config.yaml"
        if not config_file.exists():
            logger.debug(f"No config file at {config_file}, using defaults")
            self.config = AddonDeployConfig()
            return self.config

        data = self._read_yaml(config_file)
        try:
            self.config = AddonDeployConfig(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid main config {config_file}", context=str(e)) from e
        logger.debug(f"Loaded main config: {config_file}")
        return self.config

    def load_addon(self, file_name: str = "addon.yaml") -> AddonConfig:
        """Load the root addon with any caller-specified dependency overrides."""
        addon_file = self.config_dir / file_name
        if not addon_file.exists():
            raise ConfigurationError(f"Addon definition not found: {addon_file}")

        data = self._read_yaml(addon_file)
        try:
            addon = AddonConfig(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid addon definition {addon_file}", context=str(e)) from e
        if addon.enabled is None:
            addon.enabled = True
        logger.debug(f"Loaded addon {addon.offering_name} from {addon_file}")
        return addon

    def api_key(self) -> str:
        """Read the API key from the environment variable named in the config."""
        config = self.config or self.load()
        api_key = os.environ.get(config.catalog.api_key_env, "")
        if not api_key:
            raise ConfigurationError(
                f"API key not set; export {config.catalog.api_key_env}"
            )
        return api_key

    def _read_yaml(self, file_path: Path) -> Dict[str, Any]:
        """Read and parse YAML file."""
        try:
            data = self.yaml.load(file_path.read_text())
        except YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {file_path}", context=str(e)) from e
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Expected a mapping at the top of {file_path}")
        return data
