"""Configuration loading.

Settings come from a KEY=VALUE file (``market.config`` by default). Environment
variables with the same key win over the file.
"""
import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_CONFIG_FILE = "market.config"

KEYS = (
    "MARKET_DATA_FILE",
    "MARKET_LOG_LEVEL",
    "MARKET_LOG_FILE",
    "MARKET_LOW_STOCK_THRESHOLD",
)


@dataclass
class MarketConfig:
    data_file: str = "market.json"
    log_level: str = "INFO"
    log_file: str | None = None
    low_stock_threshold: int = 5


def load_key_values(config_path: Path) -> dict[str, str]:
    """Parse KEY=VALUE lines from a config file."""
    config: dict[str, str] = {}
    if not config_path.exists():
        return config
    for line in config_path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" in line:
            key, _, value = line.partition("=")
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key.isidentifier():
                config[key] = value
    return config


def get_config_int(config: dict[str, str], key: str, default: int) -> int:
    try:
        return int(config.get(key, str(default)))
    except ValueError:
        return default


def load_config(path: str | Path | None = None, environ=None) -> MarketConfig:
    environ = os.environ if environ is None else environ
    raw = load_key_values(Path(path or DEFAULT_CONFIG_FILE))
    for key in KEYS:
        if key in environ:
            raw[key] = environ[key]

    defaults = MarketConfig()
    return MarketConfig(
        data_file=raw.get("MARKET_DATA_FILE") or defaults.data_file,
        log_level=raw.get("MARKET_LOG_LEVEL", defaults.log_level).upper(),
        log_file=raw.get("MARKET_LOG_FILE") or None,
        low_stock_threshold=get_config_int(raw, "MARKET_LOW_STOCK_THRESHOLD",
                                           defaults.low_stock_threshold),
    )
