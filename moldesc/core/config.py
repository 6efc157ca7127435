"""Configuration management for MolDesc library."""

import yaml
import json
from typing import Dict, Any, List, Optional
from pathlib import Path
from .exceptions import ConfigurationError


class Config:
    """Configuration manager for molecular descriptors."""

    # Preset configurations
    PRESETS = {
        'hbond_acceptors': {
            'descriptor_name': 'hbond_acceptors',
            'handle_errors': 'skip'
        },
        'whim_unity': {
            'descriptor_name': 'whim',
            'scheme': 'unity',
            'handle_errors': 'warn'
        },
        'whim_mass': {
            'descriptor_name': 'whim',
            'scheme': 'mass',
            'handle_errors': 'warn'
        },
    }

    def __init__(self, config_dict: Optional[Dict[str, Any]] = None) -> None:
        """
        Initialize configuration.

        Args:
            config_dict: Dictionary containing configuration parameters
        """
        self._config: Dict[str, Any] = config_dict if config_dict is not None else {}
        self._validate_config()

    def _validate_config(self) -> None:
        """
        Validate the configuration parameters.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if not isinstance(self._config, dict):
            raise ConfigurationError("Configuration must be a dictionary")

        if 'descriptor_name' not in self._config:
            raise ConfigurationError("'descriptor_name' is required in configuration")

        handle_errors = self._config.get('handle_errors', 'raise')
        if handle_errors not in ['raise', 'skip', 'warn']:
            raise ConfigurationError(
                "'handle_errors' must be one of: 'raise', 'skip', 'warn'",
                'handle_errors'
            )

    @classmethod
    def from_file(cls, file_path: str) -> 'Config':
        """
        Load configuration from file.

        Args:
            file_path: Path to configuration file (YAML or JSON)

        Returns:
            Config instance

        Raises:
            ConfigurationError: If file cannot be loaded or parsed
        """
        file_path_obj: Path = Path(file_path)

        if not file_path_obj.exists():
            raise ConfigurationError(f"Configuration file not found: {file_path}")

        suffix = file_path_obj.suffix.lower()
        if suffix not in ['.yml', '.yaml', '.json']:
            raise ConfigurationError(
                f"Unsupported file format: {file_path_obj.suffix}. "
                "Supported formats: .yml, .yaml, .json"
            )

        try:
            with open(file_path_obj, 'r', encoding='utf-8') as f:
                if suffix == '.json':
                    config_dict = json.load(f)
                else:
                    config_dict = yaml.safe_load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to parse configuration file: {e}")

        return cls(config_dict)

    @classmethod
    def from_preset(cls, preset_name: str) -> 'Config':
        """
        Load configuration from preset.

        Raises:
            ConfigurationError: If preset is not found
        """
        if preset_name not in cls.PRESETS:
            available_presets = list(cls.PRESETS.keys())
            raise ConfigurationError(
                f"Preset '{preset_name}' not found. "
                f"Available presets: {', '.join(available_presets)}"
            )

        return cls(dict(cls.PRESETS[preset_name]))

    def get(self, key: str, default: Any = None) -> Any:
        return self._config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._config[key] = value
        self._validate_config()

    def update(self, config_dict: Dict[str, Any]) -> None:
        self._config.update(config_dict)
        self._validate_config()

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._config)

    def save(self, file_path: str, format: str = 'yaml') -> None:
        """
        Save configuration to file.

        Args:
            file_path: Path to save configuration
            format: File format ('yaml' or 'json')

        Raises:
            ConfigurationError: If format is unsupported or save fails
        """
        if format not in ['yaml', 'json']:
            raise ConfigurationError(f"Unsupported format: {format}")

        file_path_obj: Path = Path(file_path)
        file_path_obj.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(file_path_obj, 'w', encoding='utf-8') as f:
                if format == 'yaml':
                    yaml.safe_dump(self._config, f, default_flow_style=False, indent=2)
                else:  # json
                    json.dump(self._config, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigurationError(f"Failed to save configuration: {e}")

    @staticmethod
    def list_presets() -> List[str]:
        return list(Config.PRESETS.keys())

    def __repr__(self) -> str:
        return f"Config({self._config})"

    def __str__(self) -> str:
        return yaml.safe_dump(self._config, default_flow_style=False, indent=2)
