"""
tokenlock Configuration

Supports testnet and mainnet with separate configurations.

The principal addresses (administrative owner, token contract and the three
presale contracts) are read from environment variables. On mainnet every
principal is required; on testnet missing principals are left unset so a
host can assign them later through the owner-gated setters.
"""

from __future__ import annotations

import logging
import os
from enum import Enum

logger = logging.getLogger(__name__)


class NetworkType(Enum):
    TESTNET = "testnet"
    MAINNET = "mainnet"


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


# Environment variable per principal, keyed by the access_control.Principal value
PRINCIPAL_ENV_VARS = {
    "owner": "TOKENLOCK_OWNER_ADDRESS",
    "token_contract": "TOKENLOCK_TOKEN_CONTRACT",
    "presale1": "TOKENLOCK_PRESALE1_CONTRACT",
    "presale2": "TOKENLOCK_PRESALE2_CONTRACT",
    "presale3": "TOKENLOCK_PRESALE3_CONTRACT",
}


def _get_required_principal(env_var: str, network: str) -> str:
    """Get a principal address from environment, with mainnet enforcement.

    On mainnet, missing principals raise ConfigurationError.
    On testnet, missing principals are returned empty with a warning.
    """
    value = os.getenv(env_var, "").strip()
    if value:
        return value

    if network.lower() == NetworkType.MAINNET.value:
        raise ConfigurationError(
            f"CRITICAL: {env_var} environment variable required for mainnet."
        )

    logger.warning(
        "Principal %s not set, leaving it unassigned on testnet",
        env_var,
        extra={"event": "config.principal_unset", "env_var": env_var},
    )
    return ""


def load_principal_addresses(network: str | None = None) -> dict[str, str]:
    """Read all principal addresses from the environment.

    Args:
        network: Network name; defaults to TOKENLOCK_NETWORK

    Returns:
        Mapping of principal name to address (empty string when unset)
    """
    network = network or os.getenv("TOKENLOCK_NETWORK", "testnet")
    return {
        name: _get_required_principal(env_var, network)
        for name, env_var in PRINCIPAL_ENV_VARS.items()
    }


# Get network type from environment variable
NETWORK = os.getenv("TOKENLOCK_NETWORK", "testnet")  # Default to testnet for safety

LOG_LEVEL = os.getenv("TOKENLOCK_LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("TOKENLOCK_LOG_FILE", "").strip()

MONTH_IN_SECONDS = 30 * 24 * 3600


class TestnetConfig:
    """Testnet Configuration (for local testing before mainnet)"""

    NETWORK_TYPE = NetworkType.TESTNET

    # Vesting defaults
    MONTH_IN_SECONDS = MONTH_IN_SECONDS
    DEFAULT_PERIOD_LENGTH = MONTH_IN_SECONDS
    REQUIRE_ALL_PRINCIPALS = False

    # Logging
    LOG_LEVEL = os.getenv("TOKENLOCK_LOG_LEVEL", "DEBUG").upper()
    LOG_FILE = LOG_FILE
    LOG_ENVIRONMENT = "testnet"


class MainnetConfig:
    """Mainnet Configuration (production deployment)"""

    NETWORK_TYPE = NetworkType.MAINNET

    # Vesting defaults
    MONTH_IN_SECONDS = MONTH_IN_SECONDS
    DEFAULT_PERIOD_LENGTH = MONTH_IN_SECONDS
    REQUIRE_ALL_PRINCIPALS = True

    # Logging
    LOG_LEVEL = LOG_LEVEL
    LOG_FILE = LOG_FILE
    LOG_ENVIRONMENT = "production"


# Select config based on network
if NETWORK.lower() == NetworkType.MAINNET.value:
    Config = MainnetConfig
else:
    if NETWORK.lower() != NetworkType.TESTNET.value:
        logger.warning(
            "Unknown TOKENLOCK_NETWORK %r, using testnet configuration",
            NETWORK,
            extra={"event": "config.unknown_network", "network": NETWORK},
        )
    Config = TestnetConfig


__all__ = [
    "Config",
    "ConfigurationError",
    "NetworkType",
    "TestnetConfig",
    "MainnetConfig",
    "MONTH_IN_SECONDS",
    "PRINCIPAL_ENV_VARS",
    "load_principal_addresses",
]
