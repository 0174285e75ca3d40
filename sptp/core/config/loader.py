"""Configuration loader with multi-level hierarchy."""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

ENV_PREFIX = "SPTP_"
ENV_NESTING = "__"


class ConfigLoader:
    """Load and merge configuration from multiple sources.

    Hierarchy (later overrides earlier):
    1. Default config (config/default.yaml)
    2. Environment config (config/environments/{env}.yaml)
    3. Company config (config/companies/{company_id}.yaml) [optional]
    4. Programmatic overrides [optional]
    5. Environment variables (SPTP_SECTION__KEY)
    """

    def __init__(self, config_dir: Path | str | None = None):
        """Initialize config loader.

        Args:
            config_dir: Configuration directory (defaults to ./config)
        """
        if config_dir is None:
            # Default to config directory in project root
            config_dir = Path(__file__).parent.parent.parent.parent / "config"
        self.config_dir = Path(config_dir)

    def load(
        self,
        company_id: str | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Load configuration with full hierarchy.

        Args:
            company_id: Company identifier (for company-specific config)
            overrides: Configuration dict provided programmatically

        Returns:
            Merged configuration dictionary
        """
        # 1. Load default config
        config = self._load_yaml(self.config_dir / "default.yaml")

        # 2. Merge environment-specific config
        env = os.getenv("SPTP_ENV", "development")
        env_config_path = self.config_dir / f"environments/{env}.yaml"
        if env_config_path.exists():
            config = self._deep_merge(config, self._load_yaml(env_config_path))

        # 3. Merge company config (if applicable)
        if company_id:
            company_config_path = self.config_dir / f"companies/{company_id}.yaml"
            if company_config_path.exists():
                config = self._deep_merge(config, self._load_yaml(company_config_path))

        # 4. Merge programmatic overrides
        if overrides:
            config = self._deep_merge(config, overrides)

        # 5. Override with environment variables
        return self._apply_env_overrides(config)

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        if not path.exists():
            return {}

        with open(path) as f:
            content = yaml.safe_load(f)
            return content if content else {}

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries.

        Args:
            base: Base dictionary
            override: Override dictionary

        Returns:
            Merged dictionary (base is not modified)
        """
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def _apply_env_overrides(self, config: dict[str, Any]) -> dict[str, Any]:
        """Override config with environment variables.

        Sections are separated by a double underscore so keys may keep their
        own underscores. Example: SPTP_CONCURRENCY__MAX_ATTEMPTS overrides
        config["concurrency"]["max_attempts"]. Variables without a double
        underscore (SPTP_ENV) are not treated as overrides.
        """
        for key, value in os.environ.items():
            if key.startswith(ENV_PREFIX) and ENV_NESTING in key:
                path = key[len(ENV_PREFIX):].lower().split(ENV_NESTING)
                self._set_nested(config, path, value)

        return config

    def _set_nested(self, config: dict[str, Any], path: list[str], value: str) -> None:
        current = config
        for key in path[:-1]:
            if key not in current:
                current[key] = {}
            elif not isinstance(current[key], dict):
                # Can't traverse non-dict
                return
            current = current[key]

        current[path[-1]] = self._convert_value(value)

    def _convert_value(self, value: str) -> Any:
        """Convert string value to bool, int, float, or leave it a string."""
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        return value


# Global config loader instance
_config_loader: ConfigLoader | None = None


def get_config_loader() -> ConfigLoader:
    """Get global configuration loader instance."""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader


def load_config(
    company_id: str | None = None,
    overrides: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Load configuration (convenience function).

    Args:
        company_id: Company identifier
        overrides: Configuration provided programmatically

    Returns:
        Merged configuration dictionary
    """
    loader = get_config_loader()
    return loader.load(company_id=company_id, overrides=overrides)
