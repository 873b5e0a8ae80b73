"""
RPC Manager
Builds Web3 connections from the configured endpoints, primary first,
falling back to the next endpoint when one is unreachable
"""

from typing import Callable, Dict, List, Optional
from web3 import Web3
from loguru import logger


def _http_web3(url: str) -> Web3:
    return Web3(Web3.HTTPProvider(url))


class RPCManager:
    """
    Ordered RPC endpoint selection

    Only chooses an endpoint; individual calls are never retried here.
    """

    def __init__(self, rpc_urls: List[str], web3_factory: Callable[[str], Web3] = _http_web3):
        """
        Initialize RPC Manager

        Args:
            rpc_urls: Endpoints in priority order
            web3_factory: Builds a Web3 instance for a URL
        """
        if not rpc_urls:
            raise ValueError("At least one RPC URL must be configured (RPC_URL)")

        self.rpc_urls = list(rpc_urls)
        self.web3_factory = web3_factory
        self.current_url: Optional[str] = None
        self.w3: Optional[Web3] = None

        self.status: Dict[str, Dict] = {
            url: {'connected': False, 'failures': 0}
            for url in self.rpc_urls
        }

        logger.info(f"RPC Manager initialized with {len(self.rpc_urls)} endpoints")

    @classmethod
    def from_settings(cls, settings, **kwargs) -> 'RPCManager':
        return cls(settings.rpc_urls, **kwargs)

    def get_web3(self) -> Web3:
        """
        Get a connected Web3 instance

        Returns:
            Web3 for the first reachable endpoint

        Raises:
            ConnectionError: No endpoint reachable
        """
        if self.w3 is not None and self.w3.is_connected():
            return self.w3

        for url in self.rpc_urls:
            w3 = self.web3_factory(url)

            if w3.is_connected():
                self.status[url]['connected'] = True
                self.current_url = url
                self.w3 = w3
                logger.success(f"Connected to {url}")
                return w3

            self.status[url]['connected'] = False
            self.status[url]['failures'] += 1
            logger.warning(f"Failed to connect to {url}")

        logger.critical("All RPC endpoints unreachable!")
        raise ConnectionError(f"No reachable RPC endpoint among {len(self.rpc_urls)} configured")

    def is_healthy(self) -> bool:
        """Check if the current endpoint still answers"""
        return self.w3 is not None and self.w3.is_connected()

    def get_status(self) -> Dict:
        """Per-endpoint connection status"""
        return {
            'current_url': self.current_url,
            'endpoints': {url: dict(stats) for url, stats in self.status.items()},
        }
