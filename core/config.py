"""
Settings for the precompile harness, read from config.yaml and the environment
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import yaml
from dotenv import load_dotenv

from core.constants import (
    DEFAULT_CONFIRMATIONS,
    DEFAULT_POST_SUBMIT_DELAY,
    DEFAULT_ROLES,
    ERC20_PRECOMPILE_ADDRESS,
    TIMEOUTS,
)

load_dotenv()

logger = logging.getLogger(__name__)


@dataclass
class ExecutionSettings:
    """Confirmation policy applied to every mutating call"""
    post_submit_delay: float = DEFAULT_POST_SUBMIT_DELAY
    confirmations: int = DEFAULT_CONFIRMATIONS
    tx_timeout: float = TIMEOUTS['WAIT']
    poll_interval: float = 1.0


@dataclass
class Settings:
    rpc_url: str
    chain_id: Optional[int] = None
    precompile_address: str = ERC20_PRECOMPILE_ADDRESS
    private_keys: List[str] = field(default_factory=list)
    roles: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_ROLES))
    execution: ExecutionSettings = field(default_factory=ExecutionSettings)


def _read_config_file(path: Optional[str]) -> dict:
    if not path:
        return {}
    if not os.path.exists(path):
        logger.info(f"Config file {path} not found, using environment only")
        return {}
    with open(path) as f:
        return yaml.safe_load(f) or {}


def _split_keys(value) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        value = value.split(',')
    return [k.strip() for k in value if k and k.strip()]


def _setting(env_var, section: dict, key: str, default):
    """Environment value, else config value, else default; empty or null keys fall through"""
    value = os.getenv(env_var) if env_var else None
    if value:
        return value
    value = section.get(key)
    return default if value is None or value == "" else value


def load_settings(path: Optional[str] = "config.yaml") -> Settings:
    """
    Load settings from a YAML config file, with environment overrides

    Args:
        path: Path to config.yaml (may be missing if the environment is complete)

    Returns:
        Settings instance
    """
    cfg = _read_config_file(path)
    node = cfg.get("node", {}) or {}
    signers = cfg.get("signers", {}) or {}
    execution = cfg.get("execution", {}) or {}
    precompile = cfg.get("precompile", {}) or {}

    rpc_url = os.getenv('EVM_RPC_URL') or node.get("rpc_url")
    if not rpc_url:
        raise ValueError("Missing required setting: EVM_RPC_URL (or node.rpc_url in config)")

    chain_id = os.getenv('EVM_CHAIN_ID') or node.get("chain_id")
    if isinstance(chain_id, str):
        chain_id = int(chain_id, 0)

    roles = dict(DEFAULT_ROLES)
    roles.update(signers.get("roles", {}) or {})

    exec_settings = ExecutionSettings(
        post_submit_delay=float(_setting('POST_SUBMIT_DELAY', execution, "post_submit_delay", DEFAULT_POST_SUBMIT_DELAY)),
        confirmations=int(_setting('CONFIRMATIONS', execution, "confirmations", DEFAULT_CONFIRMATIONS)),
        tx_timeout=float(_setting('TX_TIMEOUT', execution, "tx_timeout", TIMEOUTS['WAIT'])),
        poll_interval=float(_setting(None, execution, "poll_interval", 1.0)),
    )
    if exec_settings.confirmations < 1:
        raise ValueError(f"confirmations must be at least 1, got {exec_settings.confirmations}")

    settings = Settings(
        rpc_url=rpc_url,
        chain_id=chain_id,
        precompile_address=os.getenv('ERC20_PRECOMPILE_ADDRESS') or precompile.get("address", ERC20_PRECOMPILE_ADDRESS),
        private_keys=_split_keys(os.getenv('SIGNER_PRIVATE_KEYS') or signers.get("private_keys")),
        roles=roles,
        execution=exec_settings,
    )
    logger.debug(f"Loaded settings for node {settings.rpc_url}")
    return settings
