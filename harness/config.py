"""
Configuration loader for benchmark runs.

Loads YAML configuration files, supports environment variable substitution
and dot-notation overrides, and validates the result into a HarnessConfig.
"""

import copy
import os
import yaml
from dataclasses import dataclass, field
from typing import Dict, Any, Optional
from pathlib import Path

from .errors import ConfigError
from .selection import compile_filter

DEFAULT_CONFIG_FILE = Path(__file__).parent / 'default.yaml'


@dataclass(frozen=True)
class HarnessConfig:
    """Validated settings for one comparison run."""
    duration: float
    parallelism: int
    filter_pattern: str = '.*'
    cpuprofile: Optional[str] = None
    metrics_output: Optional[str] = None
    log_level: str = 'INFO'
    fixtures: Dict[str, Any] = field(default_factory=dict)


class ConfigLoader:
    """Load YAML configuration with environment variable support."""

    def __init__(self, config_file: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None):
        """
        Initialize configuration loader.

        Args:
            config_file: Path to YAML configuration file. If None, uses default.yaml
            overrides: Dictionary of configuration overrides
        """
        self.config_file = config_file
        self.overrides = overrides or {}
        self.config = {}

    def load(self) -> Dict[str, Any]:
        """
        Load configuration from file and apply overrides.

        Returns:
            Dictionary containing complete configuration

        Raises:
            ConfigError: If the file is missing or is not valid YAML
        """
        config_path = Path(self.config_file) if self.config_file else DEFAULT_CONFIG_FILE

        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, 'r') as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError(f"Configuration root must be a mapping: {config_path}")

        self.config = self._substitute_env_vars(loaded)
        self.config = self._apply_overrides(self.config, self.overrides)

        return self.config

    def _substitute_env_vars(self, config: Any) -> Any:
        """
        Recursively substitute environment variables in configuration.

        Supports ${VAR_NAME} or $VAR_NAME syntax. Unset variables are left as-is.
        """
        if isinstance(config, dict):
            return {k: self._substitute_env_vars(v) for k, v in config.items()}
        elif isinstance(config, list):
            return [self._substitute_env_vars(item) for item in config]
        elif isinstance(config, str):
            if '$' in config:
                import re
                pattern = r'\$\{([^}]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)'

                def replace_env(match):
                    var_name = match.group(1) or match.group(2)
                    return os.getenv(var_name, match.group(0))

                return re.sub(pattern, replace_env, config)
        return config

    def _apply_overrides(self, config: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply configuration overrides using dot notation.

        Args:
            config: Base configuration
            overrides: Override values (supports dot notation keys like 'benchmark.duration')

        Returns:
            Configuration with overrides applied
        """
        result = copy.deepcopy(config)

        for key, value in overrides.items():
            if '.' in key:
                parts = key.split('.')
                current = result
                for part in parts[:-1]:
                    if not isinstance(current.get(part), dict):
                        current[part] = {}
                    current = current[part]
                current[parts[-1]] = value
            else:
                result[key] = value

        return result


def resolve_parallelism(requested: Any, cpu_count: Optional[int] = None) -> int:
    """
    Turn a parallelism request into a worker count.

    Negative values are clamped to 0, and 0 means every logical CPU.

    Raises:
        ConfigError: If the request is not an integer
    """
    if isinstance(requested, bool) or not isinstance(requested, int):
        raise ConfigError(f"parallelism must be an integer, got {requested!r}")

    if requested < 0:
        requested = 0
    if requested == 0:
        available = cpu_count if cpu_count is not None else os.cpu_count()
        requested = available or 1

    return requested


class ConfigValidator:
    """Validate a configuration mapping into a HarnessConfig."""

    REQUIRED_FIELDS = {
        'benchmark': ['duration', 'parallelism', 'filter'],
    }

    @staticmethod
    def validate(config: Dict[str, Any], cpu_count: Optional[int] = None) -> HarnessConfig:
        """
        Validate configuration and resolve derived values.

        Args:
            config: Configuration dictionary
            cpu_count: Logical CPU count used when parallelism is 0 (defaults to os.cpu_count())

        Returns:
            HarnessConfig with parallelism resolved and the filter pattern checked

        Raises:
            ConfigError: If required fields are missing or values are invalid
        """
        for section, fields in ConfigValidator.REQUIRED_FIELDS.items():
            if not isinstance(config.get(section), dict):
                raise ConfigError(f"Missing required configuration section: {section}")

            for name in fields:
                if name not in config[section]:
                    raise ConfigError(f"Missing required field: {section}.{name}")

        benchmark = config['benchmark']
        output = config.get('output') or {}
        fixtures = config.get('fixtures') or {}
        logging_config = config.get('logging') or {}

        duration = benchmark['duration']
        if isinstance(duration, bool) or not isinstance(duration, (int, float)):
            raise ConfigError(f"duration must be a number of seconds, got {duration!r}")
        if duration <= 0:
            raise ConfigError(f"duration must be positive, got {duration}")

        parallelism = resolve_parallelism(benchmark['parallelism'], cpu_count)

        pattern = benchmark['filter']
        if not isinstance(pattern, str):
            raise ConfigError(f"filter must be a string, got {pattern!r}")
        compile_filter(pattern)

        if not isinstance(fixtures, dict):
            raise ConfigError("fixtures must be a mapping")

        return HarnessConfig(
            duration=duration,
            parallelism=parallelism,
            filter_pattern=pattern,
            cpuprofile=output.get('cpuprofile') or None,
            metrics_output=output.get('metrics') or None,
            log_level=str(logging_config.get('level', 'INFO')),
            fixtures=dict(fixtures),
        )
