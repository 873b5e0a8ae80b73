"""
Contract Handle
Runtime binding of an interface to an address and an execution context
"""

from typing import Any, Dict, List, Optional, Union
from hexbytes import HexBytes
from web3 import Web3
from web3.exceptions import (
    BadFunctionCallOutput,
    TimeExhausted,
)
from loguru import logger

from .errors import CallExecutionError, SubmissionError
from .interface import ContractInterface
from .signer import ReadOnlyProvider, Signer, is_revert, require_signer, validate_options


DEFAULT_RECEIPT_TIMEOUT = 120


def to_address(address: str) -> str:
    """
    Checksum an address string

    Raises:
        ValueError: Not a 20-byte hex address
    """
    if not isinstance(address, str) or not Web3.is_address(address):
        raise ValueError(f"Invalid address: {address!r}")
    return Web3.to_checksum_address(address)


async def wait_for_receipt(w3: Web3, tx_hash, timeout: int = DEFAULT_RECEIPT_TIMEOUT) -> Dict:
    """
    Wait for a transaction receipt

    Raises:
        SubmissionError: Receipt not available within timeout, or transport failure
        CallExecutionError: Transaction mined with status 0
    """
    try:
        receipt = w3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout)
    except TimeExhausted as e:
        logger.error(f"Transaction {HexBytes(tx_hash).hex()} not mined within {timeout}s")
        raise SubmissionError(str(e), e) from e
    except Exception as e:
        logger.error(f"Error waiting for {HexBytes(tx_hash).hex()}: {e}")
        raise SubmissionError(str(e), e) from e

    if receipt['status'] != 1:
        logger.error(f"Transaction {HexBytes(tx_hash).hex()} reverted")
        raise CallExecutionError(f"Transaction {HexBytes(tx_hash).hex()} reverted")

    return receipt


class ContractHandle:
    """
    Client handle for one deployed (or assumed) contract instance

    No check is made that code exists at the address; mismatches surface as
    CallExecutionError on the first call.
    """

    def __init__(
        self,
        address: str,
        interface: ContractInterface,
        context: Optional[Union[Signer, ReadOnlyProvider]] = None
    ):
        self._address = to_address(address)
        self._interface = interface
        self._context = context

        logger.debug(f"{interface.name} handle at {self._address} ({context!r})")

    @property
    def address(self) -> str:
        return self._address

    @property
    def interface(self) -> ContractInterface:
        return self._interface

    @property
    def context(self):
        return self._context

    def create_interface(self) -> ContractInterface:
        return self._interface

    def connect(self, context: Union[Signer, ReadOnlyProvider]) -> 'ContractHandle':
        """New handle on the same address, bound to another context"""
        return ContractHandle(self._address, self._interface, context)

    def _w3(self) -> Web3:
        if self._context is None:
            raise CallExecutionError(
                f"{self._interface.name} at {self._address} has no provider; use connect() first"
            )
        return self._context.w3

    def _web3_contract(self):
        return self._w3().eth.contract(address=self._address, abi=self._interface.abi)

    def encode_call(self, fn_name: str, *args) -> str:
        """Calldata for a function call; no network access"""
        return self._interface.encode_function_data(fn_name, args)

    async def call(self, fn_name: str, *args, block: Union[str, int] = 'latest') -> Any:
        """
        Execute a read-only call (eth_call)

        Args:
            fn_name: Function name or signature
            *args: Function arguments
            block: Block identifier

        Returns:
            Decoded return value(s)

        Raises:
            CallExecutionError: Revert, or no contract code at the address
            SubmissionError: Transport failure
        """
        signature = self._interface.function_signature(fn_name)
        contract = self._web3_contract()
        function = contract.get_function_by_signature(signature)(*args)

        transaction = {}
        if isinstance(self._context, Signer):
            transaction['from'] = self._context.address

        try:
            result = function.call(transaction, block_identifier=block)
        except BadFunctionCallOutput as e:
            logger.warning(f"{self._interface.name}.{signature} at {self._address} failed: {e}")
            raise CallExecutionError(f"{signature} at {self._address} failed: {e}") from e
        except Exception as e:
            if is_revert(e):
                logger.warning(f"{self._interface.name}.{signature} reverted: {e}")
                raise CallExecutionError(f"{signature} reverted: {e}") from e
            logger.error(f"Error calling {signature}: {e}")
            raise SubmissionError(str(e), e) from e

        return result

    async def estimate_gas(self, fn_name: str, *args, options: Optional[Dict] = None) -> int:
        """
        Gas estimate for a state-changing call

        Raises:
            CallExecutionError: Call would revert
            SubmissionError: Transport failure
        """
        options = validate_options(options)
        tx = {**options, 'to': self._address, 'data': self.encode_call(fn_name, *args)}
        if isinstance(self._context, Signer):
            tx.setdefault('from', self._context.address)

        w3 = self._w3()
        try:
            return w3.eth.estimate_gas(tx)
        except Exception as e:
            if is_revert(e):
                logger.warning(f"{self._interface.name}.{fn_name} would revert: {e}")
                raise CallExecutionError(f"{fn_name} would revert: {e}") from e
            logger.error(f"Error estimating gas for {fn_name}: {e}")
            raise SubmissionError(str(e), e) from e

    async def transact(self, fn_name: str, *args, options: Optional[Dict] = None) -> HexBytes:
        """
        Submit a state-changing call

        Returns:
            Transaction hash

        Raises:
            ReadOnlyContextError: Handle is not bound to a signer (nothing is sent)
            CallExecutionError: Call would revert
            SubmissionError: Transport failure
        """
        signature = self._interface.function_signature(fn_name)
        signer = require_signer(self._context, f"send {self._interface.name}.{signature}")
        options = validate_options(options)

        tx = {**options, 'to': self._address, 'data': self.encode_call(signature, *args)}

        logger.info(f"Sending {self._interface.name}.{signature} to {self._address}")
        return await signer.send_transaction(tx)

    async def wait_for_receipt(self, tx_hash, timeout: int = DEFAULT_RECEIPT_TIMEOUT) -> Dict:
        """Wait for a transaction sent through this handle"""
        receipt = await wait_for_receipt(self._w3(), tx_hash, timeout)
        if isinstance(self._context, Signer):
            await self._context.confirm(tx_hash)
        return receipt

    def get_events(self, event_name: str, receipt: Dict) -> List[Dict]:
        """
        Decode the logs of a receipt emitted by this contract for one event

        Args:
            event_name: Event name or signature
            receipt: Transaction receipt

        Returns:
            List of decoded events, in log order
        """
        topic = HexBytes(self._interface.event_topic(event_name))
        events = []

        for log in receipt.get('logs', []):
            if to_address(log['address']) != self._address:
                continue
            if not log['topics'] or HexBytes(log['topics'][0]) != topic:
                continue
            events.append(self._interface.decode_event_log(log))

        return events

    def __eq__(self, other):
        if not isinstance(other, ContractHandle):
            return NotImplemented
        return (
            self._address == other._address
            and self._interface == other._interface
            and self._context is other._context
        )

    def __hash__(self):
        return hash((self._address, self._interface))

    def __repr__(self):
        return f"{self._interface.name}(address={self._address})"


class PendingDeployment:
    """
    A submitted but not yet confirmed deployment

    ``await deployed()`` waits for the receipt and returns the ContractHandle
    at the address reported by the receipt.
    """

    def __init__(
        self,
        tx_hash: HexBytes,
        interface: ContractInterface,
        signer: Signer,
        transaction: Dict
    ):
        self.tx_hash = HexBytes(tx_hash)
        self.interface = interface
        self.signer = signer
        self.transaction = transaction
        self.receipt: Optional[Dict] = None

    async def deployed(self, timeout: int = DEFAULT_RECEIPT_TIMEOUT) -> ContractHandle:
        """
        Wait for the deployment to be mined

        Raises:
            SubmissionError: Not mined within timeout
            CallExecutionError: Constructor reverted
        """
        if self.receipt is None:
            logger.info(f"Waiting for {self.interface.name} deployment {self.tx_hash.hex()}...")
            self.receipt = await wait_for_receipt(self.signer.w3, self.tx_hash, timeout)
            await self.signer.confirm(self.tx_hash)

        contract_address = self.receipt['contractAddress']

        logger.success(f"{self.interface.name} deployed at {contract_address}")
        logger.debug(f"Gas used: {self.receipt['gasUsed']}")

        return ContractHandle(contract_address, self.interface, self.signer)

    def __repr__(self):
        return f"PendingDeployment({self.interface.name}, tx={self.tx_hash.hex()})"
