"""
Execution Contexts
Signer (signs and submits transactions) and ReadOnlyProvider (queries only)
"""

from typing import Dict, Optional, Union
from hexbytes import HexBytes
from web3 import Web3
from web3.exceptions import ContractLogicError
from eth_account import Account
from eth_account.signers.local import LocalAccount
from loguru import logger

from .errors import CallExecutionError, ReadOnlyContextError, SubmissionError
from .nonce_manager import NonceManager


TX_OPTION_KEYS = (
    'from',
    'gas',
    'gasPrice',
    'maxFeePerGas',
    'maxPriorityFeePerGas',
    'value',
    'nonce',
    'chainId',
)

DYNAMIC_FEE_KEYS = ('maxFeePerGas', 'maxPriorityFeePerGas')

# Sent transactions whose receipt was never awaited are forgotten past this
MAX_TRACKED_NONCES = 1024


def validate_options(options: Optional[Dict]) -> Dict:
    """
    Check transaction options and return a copy

    Raises:
        ValueError: Unknown option key
    """
    if not options:
        return {}

    unknown = set(options) - set(TX_OPTION_KEYS)
    if unknown:
        raise ValueError(f"Unknown transaction options: {', '.join(sorted(unknown))}")

    if 'gasPrice' in options and set(options) & set(DYNAMIC_FEE_KEYS):
        raise ValueError("gasPrice cannot be combined with maxFeePerGas / maxPriorityFeePerGas")

    return dict(options)


def is_revert(error: Exception) -> bool:
    """
    True when a provider error reports an EVM revert

    JSON-RPC nodes surface as ContractLogicError; in-process backends
    raise their own error carrying the same 'execution reverted' message.
    """
    return isinstance(error, ContractLogicError) or 'execution reverted' in str(error)


class ReadOnlyProvider:
    """
    Read-only execution context

    Can run eth_call and read chain state; cannot authorize transactions.
    """

    can_sign = False

    def __init__(self, w3: Web3):
        """
        Initialize Read-Only Provider

        Args:
            w3: Web3 instance
        """
        self.w3 = w3

    def __repr__(self):
        return f"ReadOnlyProvider(provider={self.w3.provider!r})"


class Signer:
    """
    Signing execution context backed by a local key

    Fills nonce, gas, fee and chain id, signs locally and submits the raw
    transaction. Nonces are sequenced per signer, so one signer can be shared
    by several handles.

    Nonces stay pending until the receipt is awaited through a handle or a
    PendingDeployment; at most MAX_TRACKED_NONCES unawaited sends are kept.
    """

    can_sign = True

    def __init__(
        self,
        w3: Web3,
        account: Union[str, LocalAccount],
        gas_multiplier: float = 1.2
    ):
        """
        Initialize Signer

        Args:
            w3: Web3 instance
            account: Private key (hex) or eth-account LocalAccount
            gas_multiplier: Buffer applied to gas estimates
        """
        self.w3 = w3
        self.account = Account.from_key(account) if isinstance(account, str) else account
        self.gas_multiplier = gas_multiplier
        self.nonce_manager = NonceManager(w3, self.account.address)
        self._sent_nonces: Dict[bytes, int] = {}

        logger.info(f"Signer ready: {self.address}")

    @classmethod
    def from_settings(cls, w3: Web3, settings) -> 'Signer':
        """Build a signer from loaded settings (PRIVATE_KEY)"""
        if not settings.private_key:
            raise ValueError("PRIVATE_KEY must be set in .env to sign transactions")
        return cls(w3, settings.private_key, gas_multiplier=settings.gas_limit_multiplier)

    @property
    def address(self) -> str:
        return self.account.address

    def connect(self, w3: Web3) -> 'Signer':
        """Same account on another Web3 instance"""
        return Signer(w3, self.account, gas_multiplier=self.gas_multiplier)

    def _fill_dynamic_fee(self, tx: Dict):
        """Complete a half-specified EIP-1559 fee pair"""
        if 'maxPriorityFeePerGas' not in tx:
            tx['maxPriorityFeePerGas'] = min(self.w3.eth.max_priority_fee, tx['maxFeePerGas'])

        if 'maxFeePerGas' not in tx:
            base_fee = self.w3.eth.get_block('latest').get('baseFeePerGas')
            if base_fee is None:
                base_fee = self.w3.eth.gas_price
            tx['maxFeePerGas'] = 2 * base_fee + tx['maxPriorityFeePerGas']

    async def fill_transaction(self, transaction: Dict) -> Dict:
        """
        Complete a transaction with sender-dependent fields

        Args:
            transaction: Partial transaction (data/to plus options)

        Returns:
            Transaction ready for signing
        """
        tx = dict(transaction)

        sender = tx.pop('from', None)
        if sender is not None and Web3.to_checksum_address(sender) != self.address:
            raise ValueError(f"Sender override {sender} does not match signer {self.address}")

        tx.setdefault('value', 0)

        if 'chainId' not in tx:
            tx['chainId'] = self.w3.eth.chain_id

        if any(key in tx for key in DYNAMIC_FEE_KEYS):
            self._fill_dynamic_fee(tx)
        elif 'gasPrice' not in tx:
            gas_price = self.w3.eth.gas_price
            base_fee = self.w3.eth.get_block('latest').get('baseFeePerGas')
            # Legacy price must clear the next block's base fee
            if base_fee is not None:
                gas_price = max(gas_price, 2 * base_fee)
            tx['gasPrice'] = gas_price

        if 'gas' not in tx:
            try:
                estimate_params = {key: tx[key] for key in ('to', 'data', 'value') if key in tx}
                gas_estimate = self.w3.eth.estimate_gas({**estimate_params, 'from': self.address})
            except Exception as e:
                if not is_revert(e):
                    raise
                logger.error(f"Gas estimation reverted: {e}")
                raise CallExecutionError(f"Transaction would revert: {e}") from e
            tx['gas'] = int(gas_estimate * self.gas_multiplier)

        if 'nonce' not in tx:
            tx['nonce'] = await self.nonce_manager.get_nonce()

        return tx

    async def send_transaction(self, transaction: Dict) -> HexBytes:
        """
        Fill, sign and submit a transaction

        Args:
            transaction: Partial transaction dict

        Returns:
            Transaction hash

        Raises:
            CallExecutionError: Gas estimation reverted
            SubmissionError: Transport, funding, nonce or signature failure
        """
        try:
            tx = await self.fill_transaction(transaction)
        except (CallExecutionError, ValueError):
            raise
        except Exception as e:
            logger.error(f"Error preparing transaction: {e}")
            raise SubmissionError(str(e), e) from e

        logger.debug(f"Sending transaction from {self.address} with nonce {tx['nonce']}")

        try:
            signed_tx = self.account.sign_transaction(tx)
            tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
        except Exception as e:
            logger.error(f"Error sending transaction: {e}")
            # Local nonce may now be ahead of the chain
            await self.nonce_manager.reset_nonce()
            raise SubmissionError(str(e), e) from e

        self._sent_nonces[bytes(HexBytes(tx_hash))] = tx['nonce']
        while len(self._sent_nonces) > MAX_TRACKED_NONCES:
            oldest = next(iter(self._sent_nonces))
            await self.nonce_manager.confirm_nonce(self._sent_nonces.pop(oldest))

        logger.info(f"Transaction sent: {HexBytes(tx_hash).hex()}")
        return HexBytes(tx_hash)

    async def confirm(self, tx_hash):
        """Release the nonce of a mined transaction sent by this signer"""
        nonce = self._sent_nonces.pop(bytes(HexBytes(tx_hash)), None)
        if nonce is not None:
            await self.nonce_manager.confirm_nonce(nonce)

    def __repr__(self):
        return f"Signer(address={self.address})"


def as_context(signer_or_provider) -> Union[Signer, ReadOnlyProvider]:
    """Accept a Signer, a ReadOnlyProvider or a bare Web3 instance"""
    if isinstance(signer_or_provider, (Signer, ReadOnlyProvider)):
        return signer_or_provider
    if isinstance(signer_or_provider, Web3):
        return ReadOnlyProvider(signer_or_provider)
    raise TypeError(
        f"Expected Signer, ReadOnlyProvider or Web3, got {type(signer_or_provider).__name__}"
    )


def require_signer(context, action: str) -> Signer:
    """
    Return the context if it can sign

    Raises:
        ReadOnlyContextError: No context, or a read-only one
    """
    if context is None or not getattr(context, 'can_sign', False):
        logger.error(f"Cannot {action}: execution context is read-only")
        raise ReadOnlyContextError(f"Cannot {action} through a read-only context ({context!r})")
    return context
