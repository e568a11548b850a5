"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from .defaults import (
    ChainParams,
    DefaultConfig,
    FormatParams,
    LoggingParams,
    RelayParams,
    get_default_config,
)


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_network_config(self, prefix: int) -> dict[str, Any]:
        """Load network-specific configuration overrides for an SS58 prefix."""
        networks_file = self.config_dir / "networks.yaml"

        if not networks_file.exists():
            return {}

        with open(networks_file) as f:
            networks_config = yaml.safe_load(f) or {}

        networks = networks_config.get("networks", {}) or {}
        # YAML keys may be written as ints or strings
        return networks.get(prefix, networks.get(str(prefix), {})) or {}  # type: ignore[no-any-return]

    def merge_config(
        self,
        prefix: int,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Explicit overrides (highest priority)
        2. Network-specific overrides
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        network_config = self.load_network_config(prefix)
        config = self._deep_merge(config, network_config)

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def build_config(
        self,
        prefix: int,
        overrides: Optional[dict[str, Any]] = None
    ) -> DefaultConfig:
        """Merge configuration and rebuild the typed configuration object."""
        config = self.merge_config(prefix, overrides)

        relay = dict(config.get("relay", {}))
        relay["endpoints"] = {int(k): v for k, v in relay.get("endpoints", {}).items()}

        return DefaultConfig(
            relay=RelayParams(**relay),
            chain=ChainParams(**config.get("chain", {})),
            format=FormatParams(**config.get("format", {})),
            logging=LoggingParams(**config.get("logging", {})),
        )

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name, _field in obj.__dataclass_fields__.items():
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                elif isinstance(value, dict):
                    result[field_name] = dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
