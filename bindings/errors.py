"""
Binding Errors
Error kinds raised by contract factories and client handles
"""


class BindingError(Exception):
    """Base class for all binding errors"""


class SubmissionError(BindingError):
    """
    Transport or submission failure (network down, insufficient funds,
    nonce conflict, rejected signature)

    The original exception is kept as ``__cause__`` and ``original``.
    """

    def __init__(self, message: str, original: Exception = None):
        super().__init__(message)
        self.original = original


class CallExecutionError(BindingError):
    """Call reverted, returned no data, or targeted an address without code"""


class ReadOnlyContextError(BindingError):
    """State-changing operation attempted through a read-only context"""


class InterfaceError(BindingError):
    """ABI lookup or validation failure"""
