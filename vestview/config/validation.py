"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

VALID_ENDPOINT_SCHEMES = ("ws://", "wss://")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _is_endpoint(value: Any) -> bool:
    return isinstance(value, str) and value.startswith(VALID_ENDPOINT_SCHEMES)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_relay_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate relay chain parameters."""
        errors = []

        # Validate cache_ttl_ms
        if "cache_ttl_ms" in params:
            value = params["cache_ttl_ms"]
            if not _is_positive_int(value):
                errors.append(ValidationError(
                    field="cache_ttl_ms",
                    message="Must be a positive integer",
                    value=value
                ))

        # Validate block_time_ms
        if "block_time_ms" in params:
            value = params["block_time_ms"]
            if not _is_positive_int(value):
                errors.append(ValidationError(
                    field="block_time_ms",
                    message="Must be a positive integer",
                    value=value
                ))

        # Validate fetch_retries
        if "fetch_retries" in params:
            value = params["fetch_retries"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                errors.append(ValidationError(
                    field="fetch_retries",
                    message="Must be a non-negative integer",
                    value=value
                ))

        # Validate retry_delay_seconds
        if "retry_delay_seconds" in params:
            value = params["retry_delay_seconds"]
            if not isinstance(value, (int, float)) or isinstance(value, bool) or value < 0:
                errors.append(ValidationError(
                    field="retry_delay_seconds",
                    message="Must be a non-negative number",
                    value=value
                ))

        # Validate retry_backoff
        if "retry_backoff" in params:
            value = params["retry_backoff"]
            if not isinstance(value, (int, float)) or isinstance(value, bool) or value < 1:
                errors.append(ValidationError(
                    field="retry_backoff",
                    message="Must be a number of at least 1",
                    value=value
                ))

        # Validate endpoints
        if "endpoints" in params:
            endpoints = params["endpoints"]
            if not isinstance(endpoints, dict):
                errors.append(ValidationError(
                    field="endpoints",
                    message="Must be a mapping of network prefix to endpoint URI",
                    value=endpoints
                ))
            else:
                for prefix, uri in endpoints.items():
                    if not str(prefix).isdigit():
                        errors.append(ValidationError(
                            field="endpoints",
                            message="Network prefix must be a non-negative integer",
                            value=prefix
                        ))
                    if not _is_endpoint(uri):
                        errors.append(ValidationError(
                            field=f"endpoints.{prefix}",
                            message="Must be a ws:// or wss:// URI",
                            value=uri
                        ))

        return errors

    @staticmethod
    def validate_chain_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate chain connection parameters."""
        errors = []

        # Validate default_endpoint
        if "default_endpoint" in params:
            value = params["default_endpoint"]
            if not _is_endpoint(value):
                errors.append(ValidationError(
                    field="default_endpoint",
                    message="Must be a ws:// or wss:// URI",
                    value=value
                ))

        # Validate providers
        if "providers" in params:
            providers = params["providers"]
            if not isinstance(providers, dict):
                errors.append(ValidationError(
                    field="providers",
                    message="Must be a mapping of preset name to endpoint URI",
                    value=providers
                ))
            else:
                for name, uri in providers.items():
                    if not _is_endpoint(uri):
                        errors.append(ValidationError(
                            field=f"providers.{name}",
                            message="Must be a ws:// or wss:// URI",
                            value=uri
                        ))

        # Validate fallback_decimals
        if "fallback_decimals" in params:
            value = params["fallback_decimals"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                errors.append(ValidationError(
                    field="fallback_decimals",
                    message="Must be a non-negative integer",
                    value=value
                ))

        # Validate fallback_prefix
        if "fallback_prefix" in params:
            value = params["fallback_prefix"]
            if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= 16383:
                errors.append(ValidationError(
                    field="fallback_prefix",
                    message="Must be an SS58 prefix between 0 and 16383",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "relay" in config:
            errors.extend(ConfigValidator.validate_relay_params(config["relay"]))

        if "chain" in config:
            errors.extend(ConfigValidator.validate_chain_params(config["chain"]))

        return errors
