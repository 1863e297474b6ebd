"""
Configuration module for environment variable validation and type-safe config.

Every setting has a localnet-friendly default, so the faucet can run with no
environment at all. Values are validated once, when the config is first built.
"""
import os
from dataclasses import dataclass
from typing import Optional


VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class Config:
    """Type-safe configuration object with validated environment variables."""

    near_network: str = "localnet"
    near_node_url: str = "http://localhost:3030"
    master_account_id_param: str = "/near-localnet/master-account-id"
    master_account_key_param: str = "/near-localnet/master-account-key"
    default_master_account_id: str = "node0"
    transfer_delay_ms: int = 500
    aws_region: str = "us-east-1"
    log_level: str = "INFO"

    @property
    def transfer_delay_seconds(self) -> float:
        return self.transfer_delay_ms / 1000.0

    @classmethod
    def from_env(cls) -> "Config":
        """
        Create Config instance from environment variables.

        Raises:
            ValueError: If an environment variable holds an invalid value.
        """
        near_network = os.environ.get("NEAR_NETWORK") or "localnet"

        near_node_url = os.environ.get("NEAR_NODE_URL") or "http://localhost:3030"
        if not near_node_url.startswith(("http://", "https://")):
            raise ValueError(
                f"NEAR_NODE_URL must be an http(s) URL, got: {near_node_url}"
            )

        master_account_id_param = os.environ.get(
            "SSM_MASTER_ACCOUNT_ID_PARAM", "/near-localnet/master-account-id"
        )
        master_account_key_param = os.environ.get(
            "SSM_MASTER_ACCOUNT_KEY_PARAM", "/near-localnet/master-account-key"
        )
        default_master_account_id = os.environ.get(
            "DEFAULT_MASTER_ACCOUNT_ID", "node0"
        )

        raw_delay = os.environ.get("FAUCET_TRANSFER_DELAY_MS", "500")
        try:
            transfer_delay_ms = int(raw_delay)
        except ValueError:
            raise ValueError(
                f"FAUCET_TRANSFER_DELAY_MS must be an integer, got: {raw_delay}"
            )
        if transfer_delay_ms < 0:
            raise ValueError(
                f"FAUCET_TRANSFER_DELAY_MS must not be negative, got: {transfer_delay_ms}"
            )

        aws_region = os.environ.get("AWS_REGION", "us-east-1")
        log_level = os.environ.get("LOG_LEVEL", "INFO").upper()

        if log_level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"LOG_LEVEL must be one of {VALID_LOG_LEVELS}, got: {log_level}"
            )

        return cls(
            near_network=near_network,
            near_node_url=near_node_url,
            master_account_id_param=master_account_id_param,
            master_account_key_param=master_account_key_param,
            default_master_account_id=default_master_account_id,
            transfer_delay_ms=transfer_delay_ms,
            aws_region=aws_region,
            log_level=log_level,
        )


# Built on first use so tests can adjust the environment beforehand
_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        Config: The validated configuration object

    Raises:
        ValueError: If an environment variable holds an invalid value.
    """
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config
