# Path: ixbrl_instance/core/config_loader.py
"""
Configuration Loader for ixbrl_instance

Loads configuration from .env file and environment variables.
Singleton pattern ensures consistent configuration across all components.

NO hardcoded paths, NO magic numbers.
All configuration comes from environment variables with defaults below.
"""

import os
from typing import Optional, Any
from pathlib import Path
from dotenv import load_dotenv

from ..constants import DEFAULT_DESCRIPTION, PHASE_INSTANCE_GENERATION


# ==============================================================================
# DEFAULT CONFIGURATION VALUES
# ==============================================================================

# Logging Defaults
DEFAULT_LOG_LEVEL: str = 'INFO'

# Output Defaults
DEFAULT_OUTPUT_EXTENSION: str = '.xbrl'
DEFAULT_PRETTY_PRINT: bool = True

# Performance Defaults
DEFAULT_MAX_WORKERS: int = 4

ENV_PREFIX: str = 'IXBRL_INSTANCE_'


class ConfigLoader:
    """
    Singleton configuration loader for ixbrl_instance.

    Loads configuration from environment variables with type conversion
    and sensible defaults. Nothing is required: every key has a default.

    Example:
        config = ConfigLoader()
        output_dir = config.get('output_dir')  # Path or None
        workers = config.get('max_workers')  # int
    """

    _instance: Optional['ConfigLoader'] = None
    _initialized: bool = False

    def __new__(cls) -> 'ConfigLoader':
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """
        Initialize configuration loader.

        Only runs once due to singleton pattern. Loads the .env file
        from the project root (or the working directory) on first use.
        """
        if ConfigLoader._initialized:
            return

        # ixbrl_instance/core/config_loader.py -> project root is two levels up
        project_root = Path(__file__).resolve().parent.parent.parent
        for env_path in (project_root / '.env', Path.cwd() / '.env'):
            if env_path.exists():
                load_dotenv(dotenv_path=env_path, interpolate=True)
                break

        self._config = self._load_configuration()
        ConfigLoader._initialized = True

    def _load_configuration(self) -> dict[str, Any]:
        """
        Load all configuration from environment.

        Returns:
            Dictionary of configuration values with proper types
        """
        config = {
            # ================================================================
            # ENVIRONMENT
            # ================================================================
            'environment': self._get_env('ENVIRONMENT', 'development'),

            # ================================================================
            # OUTPUT
            # ================================================================
            'output_dir': self._get_path('OUTPUT_DIR'),
            'output_extension': self._get_env('OUTPUT_EXTENSION', DEFAULT_OUTPUT_EXTENSION),
            'pretty_print': self._get_bool('PRETTY_PRINT', DEFAULT_PRETTY_PRINT),
            'description': self._get_env('DESCRIPTION', DEFAULT_DESCRIPTION),
            'phase_label': self._get_env('PHASE_LABEL', PHASE_INSTANCE_GENERATION),

            # ================================================================
            # LOGGING
            # ================================================================
            'log_dir': self._get_path('LOG_DIR'),
            'log_level': self._get_env('LOG_LEVEL', DEFAULT_LOG_LEVEL),
            'log_console': self._get_bool('LOG_CONSOLE', True),

            # ================================================================
            # PERFORMANCE
            # ================================================================
            'enable_parallel': self._get_bool('ENABLE_PARALLEL', False),
            'max_workers': self._get_int('MAX_WORKERS', DEFAULT_MAX_WORKERS),
        }

        return config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value = self._config.get(key)
        return default if value is None else value

    def override(self, key: str, value: Any) -> None:
        """Replace a configuration value (command-line flags win over .env)."""
        if value is not None:
            self._config[key] = value

    def _get_path(self, key: str) -> Optional[Path]:
        """Get path from environment variable (None when unset)."""
        value = os.getenv(ENV_PREFIX + key)
        if not value:
            return None

        if '${' in value:
            value = os.path.expandvars(value)

        return Path(value)

    def _get_env(self, key: str, default: str = '') -> str:
        """Get string environment variable."""
        return os.getenv(ENV_PREFIX + key, default)

    def _get_int(self, key: str, default: int) -> int:
        """Get integer environment variable."""
        value = os.getenv(ENV_PREFIX + key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default

    def _get_bool(self, key: str, default: bool) -> bool:
        """Get boolean environment variable."""
        value = os.getenv(ENV_PREFIX + key)
        if value is None:
            return default
        return value.lower() in ('true', '1', 'yes', 'on')

    def __repr__(self) -> str:
        """String representation showing key settings."""
        return (
            f"ConfigLoader("
            f"output_dir={self._config.get('output_dir')}, "
            f"environment={self._config.get('environment')})"
        )


__all__ = ['ConfigLoader']
