"""
Utilities Package
Settings loading and RPC endpoint management
"""

from .config import Settings, load_settings
from .rpc_manager import RPCManager

__all__ = [
    'Settings',
    'load_settings',
    'RPCManager'
]
