"""Default configuration parameters for the balance and schedule lookup client."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RelayParams:
    """Relay chain block height lookup parameters."""
    # Network prefix -> relay chain RPC endpoint
    endpoints: dict[int, str] = field(default_factory=lambda: {
        42: "wss://rococo-rpc.polkadot.io",
        90: "wss://rpc.polkadot.io",
    })

    cache_ttl_ms: int = 60_000                      # Relay block height cache lifetime
    block_time_ms: int = 6_000                      # Average relay block time (modelling assumption)

    # Fetch retry policy
    fetch_retries: int = 2                          # Extra attempts after the first failure
    retry_delay_seconds: float = 1.0                # Delay before the first retry
    retry_backoff: float = 2.0                      # Delay multiplier per retry


@dataclass(frozen=True)
class ChainParams:
    """Chain connection parameters."""
    default_endpoint: str = "ws://127.0.0.1:9944"

    # Named provider presets offered next to custom URIs
    providers: dict[str, str] = field(default_factory=lambda: {
        "localhost": "ws://127.0.0.1:9944",
        "rococo": "wss://rpc.rococo.frequency.xyz",
        "mainnet": "wss://1.rpc.frequency.xyz",
    })

    # Network parameters used until the node reports its own
    fallback_prefix: int = 42
    fallback_unit: str = "UNIT"
    fallback_decimals: int = 8

    # Storage location of time-release schedules
    vesting_pallet: str = "TimeRelease"
    vesting_storage: str = "ReleaseSchedules"


@dataclass(frozen=True)
class FormatParams:
    """Number rendering parameters."""
    group_separator: str = ","
    decimal_point: str = "."


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    relay: RelayParams
    chain: ChainParams
    format: FormatParams
    logging: LoggingParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        relay=RelayParams(),
        chain=ChainParams(),
        format=FormatParams(),
        logging=LoggingParams(),
    )
