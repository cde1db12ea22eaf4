"""
Config Manager

Loads runtime settings from YAML (with include support) and validates them
into RuntimeSettings.
"""

import os
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml
from pydantic import ValidationError

from ..models.config import RuntimeSettings
from ..models.enums import LogCategory
from ..models.errors import ConfigurationError
from ..utils.logger import get_logger

log = get_logger().for_category(LogCategory.CONFIG)

CONFIG_ENV_VAR = "APPBOOT_CONFIG"
FACTORY_DEFAULTS_PATH = Path(__file__).resolve().parent.parent / "config" / "factory_defaults.yaml"


class ConfigManager:
    """
    Runtime settings loader

    Resolution order for the settings file:
    1. config_path argument
    2. $APPBOOT_CONFIG
    3. packaged factory_defaults.yaml

    A missing file falls back to the factory defaults. A file that exists
    but cannot be parsed or validated raises ConfigurationError.

    Example:
        settings = ConfigManager("config/app.yaml").load()
        settings.lifecycle.signals  # [Signals.SIGINT, Signals.SIGTERM]

    A file may split its sections across other files:

        include:
          - logging.yaml
          - lifecycle.yaml
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None,
                 defaults_path: Union[str, Path] = FACTORY_DEFAULTS_PATH):
        """
        Args:
            config_path: Settings file (default: $APPBOOT_CONFIG)
            defaults_path: Factory defaults fallback
        """
        if config_path is None:
            config_path = os.environ.get(CONFIG_ENV_VAR) or defaults_path
        self.config_path = Path(config_path)
        self.factory_defaults_path = Path(defaults_path)
        self.data: Dict = {}
        self.settings: Optional[RuntimeSettings] = None

    def load(self) -> RuntimeSettings:
        """
        Load and validate the settings file.

        Returns:
            RuntimeSettings

        Raises:
            ConfigurationError: Unparseable YAML or invalid values
        """
        path = self.config_path
        if not path.is_file():
            log.warn(f"Config file not found: {path}")
            log.warn("Falling back to factory defaults")
            path = self.factory_defaults_path

        main_config = self._read_yaml(path)

        if "include" in main_config:
            log.info("Using include-based configuration")
            includes = main_config.pop("include") or []
            self.data = self._load_with_includes(includes, path.parent)
            self.data.update(main_config)
        else:
            self.data = main_config

        try:
            self.settings = RuntimeSettings.model_validate(self.data)
        except ValidationError as ex:
            log.error("Invalid configuration", file=str(path), errors=ex.error_count())
            raise ConfigurationError(f"Invalid configuration in {path}: {ex}") from ex

        log.info(
            f"Loaded {path.name}",
            level=self.settings.logging.level.name,
            signals=", ".join(s.name for s in self.settings.lifecycle.signals) or "none"
        )
        return self.settings

    def _read_yaml(self, path: Path) -> Dict:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as ex:
            raise ConfigurationError(f"Cannot parse {path}: {ex}") from ex
        except OSError as ex:
            raise ConfigurationError(f"Cannot read {path}: {ex}") from ex

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"{path} must contain a mapping, got {type(data).__name__}")
        return data

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict:
        """
        Load and merge multiple YAML files from include list

        Args:
            include_list: List of filenames to load (e.g., ["logging.yaml"])
            config_dir: Directory containing config files

        Returns:
            Merged config dict (later files win)
        """
        merged: Dict = {}

        for filename in include_list:
            filepath = config_dir / filename
            if not filepath.is_file():
                log.error(f"File not found: {filename}")
                raise ConfigurationError(f"Included config file not found: {filepath}")
            file_data = self._read_yaml(filepath)
            merged.update(file_data)
            log.debug(f"Loaded {filename}", keys=str(list(file_data.keys())))

        return merged
