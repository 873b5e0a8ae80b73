"""
Nonce Manager
Hands out sequential nonces for one signing account so concurrent
submissions through a shared signer do not collide
"""

import asyncio
from typing import Optional, Set
from web3 import Web3
from loguru import logger


class NonceManager:
    """
    Tracks the next nonce of a single account

    The first allocation syncs with the chain ('pending' transaction count);
    later allocations are served locally under a lock.
    """

    def __init__(self, w3: Web3, address: str):
        """
        Initialize Nonce Manager

        Args:
            w3: Web3 instance
            address: Account whose nonces are managed
        """
        self.w3 = w3
        self.address = Web3.to_checksum_address(address)

        self.current_nonce: Optional[int] = None
        self.pending_nonces: Set[int] = set()
        self.lock = asyncio.Lock()

    def _sync_nonce(self):
        """Sync nonce with blockchain"""
        # Confirmed + pending transactions
        self.current_nonce = self.w3.eth.get_transaction_count(self.address, 'pending')
        logger.debug(f"Nonce synced for {self.address}: {self.current_nonce}")

    async def get_nonce(self) -> int:
        """
        Get next available nonce

        Returns:
            Next nonce to use
        """
        async with self.lock:
            if self.current_nonce is None:
                self._sync_nonce()

            nonce = self.current_nonce
            self.current_nonce += 1
            self.pending_nonces.add(nonce)

            logger.debug(f"Allocated nonce: {nonce}")
            return nonce

    async def confirm_nonce(self, nonce: int):
        """
        Mark a nonce as confirmed

        Args:
            nonce: Nonce that was confirmed
        """
        async with self.lock:
            if nonce in self.pending_nonces:
                self.pending_nonces.discard(nonce)
                logger.debug(f"Confirmed nonce: {nonce}")

    async def reset_nonce(self):
        """Drop local state; the next allocation re-reads the chain"""
        async with self.lock:
            self.current_nonce = None
            self.pending_nonces.clear()
            logger.warning(f"Nonce reset for {self.address}")

    def get_pending_count(self) -> int:
        """Get count of allocated but unconfirmed nonces"""
        return len(self.pending_nonces)
