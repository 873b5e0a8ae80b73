"""
Shared fixtures
In-process chain (eth-tester / py-evm), a funded signer and a deployed MockCore
"""

import pytest
import pytest_asyncio
from unittest.mock import Mock
from web3 import Web3, EthereumTesterProvider
from eth_account import Account

from bindings import ReadOnlyProvider, Signer
from contracts import mock_core


@pytest.fixture
def w3():
    """Fresh in-memory chain per test"""
    return Web3(EthereumTesterProvider())


@pytest.fixture
def signer(w3):
    """Signer for a new key, funded from the first test account"""
    account = Account.create()
    tx_hash = w3.eth.send_transaction({
        'from': w3.eth.accounts[0],
        'to': account.address,
        'value': Web3.to_wei(10, 'ether'),
    })
    w3.eth.wait_for_transaction_receipt(tx_hash)
    return Signer(w3, account)


@pytest.fixture
def provider(w3):
    return ReadOnlyProvider(w3)


@pytest.fixture
def offline_w3():
    """Web3 stand-in that records every access"""
    return Mock()


@pytest_asyncio.fixture
async def deployed(signer):
    """MockCore deployed through the signer"""
    pending = await mock_core.factory(signer).deploy()
    return await pending.deployed()
