"""
Contract Factory
Pairs a static ABI with its deployment bytecode and offers deploy / attach /
connect over an explicitly passed execution context
"""

from typing import Dict, Optional, Sequence, Union
from loguru import logger

from .contract import ContractHandle, PendingDeployment
from .errors import InterfaceError
from .interface import ContractInterface
from .signer import ReadOnlyProvider, Signer, as_context, require_signer, validate_options


def _check_bytecode(bytecode: Optional[str], name: str) -> Optional[str]:
    if bytecode is None:
        return None
    if not isinstance(bytecode, str) or not bytecode.startswith('0x'):
        raise ValueError(f"{name}: bytecode must be a 0x-prefixed hex string")
    try:
        bytes.fromhex(bytecode[2:])
    except ValueError as e:
        raise ValueError(f"{name}: bytecode is not valid hex: {e}") from e
    return bytecode


class ContractFactory:
    """
    Deployment and attachment helper for one contract

    A factory is a value: ``connect`` returns a new factory and never touches
    the original. The bytecode is deployed exactly as given.
    """

    def __init__(
        self,
        abi: Sequence[Dict],
        bytecode: Optional[str] = None,
        context: Optional[Union[Signer, ReadOnlyProvider]] = None,
        name: str = 'Contract'
    ):
        """
        Initialize Contract Factory

        Args:
            abi: Contract ABI
            bytecode: 0x-prefixed creation bytecode (None = attach only)
            context: Signer for deployments, or a read-only provider
            name: Contract name
        """
        self._interface = abi if isinstance(abi, ContractInterface) else ContractInterface(abi, name)
        self._bytecode = _check_bytecode(bytecode, name)
        self._context = as_context(context) if context is not None else None
        self.name = name

    @property
    def interface(self) -> ContractInterface:
        return self._interface

    @property
    def abi(self):
        return self._interface.abi

    @property
    def bytecode(self) -> Optional[str]:
        return self._bytecode

    @property
    def context(self):
        return self._context

    def create_interface(self) -> ContractInterface:
        """Interface descriptor, usable without any deployed instance"""
        return self._interface

    def get_deploy_transaction(self, *constructor_args, options: Optional[Dict] = None) -> Dict:
        """
        Build the unsigned deployment transaction

        Pure: no nonce, gas or fee lookup and nothing is sent.

        Args:
            *constructor_args: Constructor arguments, if the contract has a constructor
            options: Transaction options (gas, gasPrice, value, from, ...)

        Returns:
            Transaction dict with ``data`` = bytecode + encoded constructor args
        """
        if self._bytecode is None:
            raise InterfaceError(f"{self.name}: no bytecode available, cannot deploy")

        options = validate_options(options)
        data = self._interface.encode_deploy(self._bytecode, constructor_args)

        return {**options, 'data': data}

    async def deploy(self, *constructor_args, options: Optional[Dict] = None) -> PendingDeployment:
        """
        Submit the deployment through the factory's signer

        Args:
            *constructor_args: Constructor arguments
            options: Transaction options

        Returns:
            PendingDeployment; ``await pending.deployed()`` yields the handle

        Raises:
            ReadOnlyContextError: Factory has no signer
            SubmissionError: Transport failure (original exception chained)
        """
        signer = require_signer(self._context, f"deploy {self.name}")
        transaction = self.get_deploy_transaction(*constructor_args, options=options)

        logger.info(f"Deploying {self.name} from {signer.address}...")
        tx_hash = await signer.send_transaction(transaction)

        return PendingDeployment(tx_hash, self._interface, signer, transaction)

    def attach(self, address: str) -> ContractHandle:
        """
        Bind the interface to an address

        Nothing is checked on chain; a wrong address shows up on the first call.
        """
        return ContractHandle(address, self._interface, self._context)

    def connect(self, context: Union[Signer, ReadOnlyProvider]) -> 'ContractFactory':
        """New factory with the same ABI and bytecode and another context"""
        return ContractFactory(self._interface, self._bytecode, as_context(context), self.name)

    def __repr__(self):
        return f"ContractFactory(name={self.name!r}, context={self._context!r})"


def contract_at(
    address: str,
    abi: Sequence[Dict],
    signer_or_provider,
    name: str = 'Contract'
) -> ContractHandle:
    """
    Handle for a contract at ``address``

    With a Signer the handle can send transactions; with a ReadOnlyProvider
    (or a bare Web3) state-changing calls raise ReadOnlyContextError.
    """
    interface = abi if isinstance(abi, ContractInterface) else ContractInterface(abi, name)
    return ContractHandle(address, interface, as_context(signer_or_provider))
