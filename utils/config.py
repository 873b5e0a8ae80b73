"""
Settings
Loads configuration from an optional JSON file and the environment (.env)
"""

import os
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
from loguru import logger
from dotenv import load_dotenv


DEFAULT_CONFIG_PATH = Path('config/bindings_config.json')


@dataclass(frozen=True)
class Settings:
    """Runtime settings for deploying and talking to contracts"""

    rpc_url: Optional[str] = None
    fallback_rpc_urls: List[str] = field(default_factory=list)
    private_key: Optional[str] = None
    chain_id: Optional[int] = None
    receipt_timeout: int = 120
    gas_limit_multiplier: float = 1.2
    log_level: str = 'INFO'
    log_file: Optional[str] = None
    artifacts_dir: str = 'artifacts'
    bindings_dir: str = 'contracts'

    @property
    def rpc_urls(self) -> List[str]:
        """Primary RPC first, then fallbacks"""
        urls = [self.rpc_url] if self.rpc_url else []
        return urls + [url for url in self.fallback_rpc_urls if url not in urls]


def _split_urls(value) -> List[str]:
    if not value:
        return []
    if isinstance(value, list):
        return [url.strip() for url in value if url.strip()]
    return [url.strip() for url in value.split(',') if url.strip()]


def load_settings(config_path: Optional[str] = None) -> Settings:
    """
    Load settings

    JSON file values are defaults; environment variables override them.

    Args:
        config_path: JSON config file (default: config/bindings_config.json, if present)

    Returns:
        Settings
    """
    load_dotenv()

    file_config = {}
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    if path.exists():
        with open(path, 'r') as f:
            file_config = json.load(f)
        logger.debug(f"Loaded config file {path}")
    elif config_path:
        raise FileNotFoundError(f"Config file not found: {config_path}")

    def pick(env_name: str, key: str, default=None):
        value = os.getenv(env_name)
        if value is not None and value != '':
            return value
        return file_config.get(key, default)

    chain_id = pick('CHAIN_ID', 'chain_id')

    settings = Settings(
        rpc_url=pick('RPC_URL', 'rpc_url'),
        fallback_rpc_urls=_split_urls(pick('FALLBACK_RPC_URLS', 'fallback_rpc_urls')),
        private_key=os.getenv('PRIVATE_KEY') or None,
        chain_id=int(chain_id) if chain_id is not None else None,
        receipt_timeout=int(pick('RECEIPT_TIMEOUT', 'receipt_timeout', 120)),
        gas_limit_multiplier=float(pick('GAS_LIMIT_MULTIPLIER', 'gas_limit_multiplier', 1.2)),
        log_level=str(pick('LOG_LEVEL', 'log_level', 'INFO')).upper(),
        log_file=pick('LOG_FILE', 'log_file'),
        artifacts_dir=pick('ARTIFACTS_DIR', 'artifacts_dir', 'artifacts'),
        bindings_dir=pick('BINDINGS_DIR', 'bindings_dir', 'contracts'),
    )

    if not settings.private_key:
        logger.debug("PRIVATE_KEY not set - deployments and transactions disabled")

    return settings
