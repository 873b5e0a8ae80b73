"""
Contract Bindings Package
Interface descriptors, factories, client handles and execution contexts
"""

from .errors import (
    BindingError,
    CallExecutionError,
    InterfaceError,
    ReadOnlyContextError,
    SubmissionError,
)
from .interface import ContractInterface
from .signer import ReadOnlyProvider, Signer
from .contract import ContractHandle, PendingDeployment
from .factory import ContractFactory, contract_at

__all__ = [
    'BindingError',
    'CallExecutionError',
    'InterfaceError',
    'ReadOnlyContextError',
    'SubmissionError',
    'ContractInterface',
    'ReadOnlyProvider',
    'Signer',
    'ContractHandle',
    'PendingDeployment',
    'ContractFactory',
    'contract_at',
]
