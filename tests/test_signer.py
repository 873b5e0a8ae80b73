"""
Execution Context Tests
Signer transaction filling, nonce sequencing and context checks
"""

import asyncio
import pytest
from unittest.mock import Mock
from eth_account import Account
from web3.exceptions import ContractLogicError

from bindings import CallExecutionError, ReadOnlyContextError, ReadOnlyProvider, Signer, SubmissionError
from bindings.nonce_manager import NonceManager
from bindings.signer import as_context, require_signer, validate_options


@pytest.fixture
def chain():
    w3 = Mock()
    w3.eth.chain_id = 31337
    w3.eth.gas_price = 2 * 10 ** 9
    w3.eth.estimate_gas.return_value = 100_000
    w3.eth.get_transaction_count.return_value = 7
    w3.eth.get_block.return_value = {'baseFeePerGas': 5 * 10 ** 8}
    return w3


class TestNonceManager:

    @pytest.mark.asyncio
    async def test_sequential_from_pending_count(self, chain):
        manager = NonceManager(chain, '0x' + 'ab' * 20)

        nonces = [await manager.get_nonce() for _ in range(3)]

        assert nonces == [7, 8, 9]
        chain.eth.get_transaction_count.assert_called_once_with(manager.address, 'pending')

    @pytest.mark.asyncio
    async def test_concurrent_allocations_unique(self, chain):
        manager = NonceManager(chain, '0x' + 'ab' * 20)

        nonces = await asyncio.gather(*(manager.get_nonce() for _ in range(10)))

        assert sorted(nonces) == list(range(7, 17))
        assert manager.get_pending_count() == 10

    @pytest.mark.asyncio
    async def test_confirm(self, chain):
        manager = NonceManager(chain, '0x' + 'ab' * 20)
        nonce = await manager.get_nonce()

        await manager.confirm_nonce(nonce)

        assert manager.get_pending_count() == 0

    @pytest.mark.asyncio
    async def test_reset_resyncs(self, chain):
        manager = NonceManager(chain, '0x' + 'ab' * 20)
        await manager.get_nonce()

        await manager.reset_nonce()
        chain.eth.get_transaction_count.return_value = 12

        assert await manager.get_nonce() == 12


class TestFillTransaction:

    @pytest.mark.asyncio
    async def test_defaults(self, chain):
        signer = Signer(chain, Account.create())

        tx = await signer.fill_transaction({'to': '0x' + '00' * 20, 'data': '0x06661abd'})

        assert tx['chainId'] == 31337
        assert tx['gasPrice'] == 2 * 10 ** 9
        assert tx['gas'] == 120_000
        assert tx['nonce'] == 7
        assert tx['value'] == 0
        assert 'from' not in tx

    @pytest.mark.asyncio
    async def test_gas_price_clears_base_fee(self, chain):
        chain.eth.gas_price = 1
        signer = Signer(chain, Account.create())

        tx = await signer.fill_transaction({'data': '0x00'})

        assert tx['gasPrice'] == 10 ** 9

    @pytest.mark.asyncio
    async def test_explicit_options_kept(self, chain):
        signer = Signer(chain, Account.create())

        tx = await signer.fill_transaction({
            'data': '0x00',
            'gas': 50_000,
            'maxFeePerGas': 3 * 10 ** 9,
            'maxPriorityFeePerGas': 10 ** 9,
            'nonce': 42,
        })

        assert tx['gas'] == 50_000
        assert tx['nonce'] == 42
        assert 'gasPrice' not in tx
        chain.eth.estimate_gas.assert_not_called()
        chain.eth.get_transaction_count.assert_not_called()

    @pytest.mark.asyncio
    async def test_priority_fee_only(self, chain):
        chain.eth.max_priority_fee = 2 * 10 ** 9
        signer = Signer(chain, Account.create())

        tx = await signer.fill_transaction({'data': '0x00', 'maxPriorityFeePerGas': 10 ** 9})

        assert tx['maxPriorityFeePerGas'] == 10 ** 9
        assert tx['maxFeePerGas'] == 2 * 10 ** 9
        assert 'gasPrice' not in tx

    @pytest.mark.asyncio
    async def test_max_fee_only(self, chain):
        chain.eth.max_priority_fee = 10 ** 9
        signer = Signer(chain, Account.create())

        tx = await signer.fill_transaction({'data': '0x00', 'maxFeePerGas': 3 * 10 ** 9})

        assert tx['maxFeePerGas'] == 3 * 10 ** 9
        assert tx['maxPriorityFeePerGas'] == 10 ** 9
        assert 'gasPrice' not in tx

    @pytest.mark.asyncio
    async def test_priority_fee_capped_by_max_fee(self, chain):
        chain.eth.max_priority_fee = 5 * 10 ** 9
        signer = Signer(chain, Account.create())

        tx = await signer.fill_transaction({'data': '0x00', 'maxFeePerGas': 10 ** 9})

        assert tx['maxPriorityFeePerGas'] == 10 ** 9

    @pytest.mark.asyncio
    async def test_priority_fee_only_signs(self, chain):
        chain.eth.send_raw_transaction.return_value = b'\x01' * 32
        signer = Signer(chain, Account.create())

        tx_hash = await signer.send_transaction({'data': '0x00', 'maxPriorityFeePerGas': 10 ** 9})

        assert tx_hash == b'\x01' * 32

    @pytest.mark.asyncio
    async def test_transport_error_during_estimate(self, chain):
        chain.eth.estimate_gas.side_effect = ConnectionError("connection refused")
        signer = Signer(chain, Account.create())

        with pytest.raises(SubmissionError) as exc_info:
            await signer.send_transaction({'to': '0x' + '00' * 20, 'data': '0x06661abd'})
        assert isinstance(exc_info.value.original, ConnectionError)

    @pytest.mark.asyncio
    async def test_estimate_only_sends_call_fields(self, chain):
        signer = Signer(chain, Account.create())

        await signer.fill_transaction({'to': '0x' + '00' * 20, 'data': '0x06661abd'})

        params = chain.eth.estimate_gas.call_args[0][0]
        assert set(params) == {'to', 'data', 'value', 'from'}
        assert params['from'] == signer.address

    @pytest.mark.asyncio
    async def test_matching_sender_accepted(self, chain):
        signer = Signer(chain, Account.create())
        tx = await signer.fill_transaction({'data': '0x00', 'from': signer.address.lower()})
        assert 'from' not in tx

    @pytest.mark.asyncio
    async def test_revert_during_estimate(self, chain):
        chain.eth.estimate_gas.side_effect = ContractLogicError("execution reverted: !too big")
        signer = Signer(chain, Account.create())

        with pytest.raises(CallExecutionError):
            await signer.send_transaction({'to': '0x' + '00' * 20, 'data': '0xfa31de01'})
        chain.eth.send_raw_transaction.assert_not_called()

    @pytest.mark.asyncio
    async def test_send_returns_hash(self, chain):
        chain.eth.send_raw_transaction.return_value = b'\x01' * 32
        signer = Signer(chain, Account.create())

        tx_hash = await signer.send_transaction({'data': '0x00'})

        assert tx_hash == b'\x01' * 32
        chain.eth.send_raw_transaction.assert_called_once()

    @pytest.mark.asyncio
    async def test_unawaited_sends_are_bounded(self, chain, monkeypatch):
        monkeypatch.setattr('bindings.signer.MAX_TRACKED_NONCES', 2)
        chain.eth.send_raw_transaction.side_effect = [bytes([i]) * 32 for i in range(1, 4)]
        signer = Signer(chain, Account.create())

        for _ in range(3):
            await signer.send_transaction({'data': '0x00'})

        assert len(signer._sent_nonces) == 2
        assert bytes([1]) * 32 not in signer._sent_nonces
        assert signer.nonce_manager.get_pending_count() == 2

    @pytest.mark.asyncio
    async def test_confirm_releases_nonce(self, chain):
        chain.eth.send_raw_transaction.return_value = b'\x01' * 32
        signer = Signer(chain, Account.create())

        tx_hash = await signer.send_transaction({'data': '0x00'})
        await signer.confirm(tx_hash)

        assert signer.nonce_manager.get_pending_count() == 0
        assert not signer._sent_nonces


class TestContexts:

    def test_from_private_key(self, chain):
        account = Account.create()
        signer = Signer(chain, account.key.hex())
        assert signer.address == account.address

    def test_from_settings_requires_key(self, chain):
        settings = Mock(private_key=None)
        with pytest.raises(ValueError):
            Signer.from_settings(chain, settings)

    def test_connect_same_account(self, chain):
        signer = Signer(chain, Account.create())
        other = Mock()

        moved = signer.connect(other)

        assert moved.address == signer.address
        assert moved.w3 is other

    def test_as_context(self, w3, chain):
        signer = Signer(chain, Account.create())
        provider = ReadOnlyProvider(chain)

        assert as_context(signer) is signer
        assert as_context(provider) is provider
        assert isinstance(as_context(w3), ReadOnlyProvider)
        with pytest.raises(TypeError):
            as_context(None)

    def test_require_signer(self, chain):
        signer = Signer(chain, Account.create())

        assert require_signer(signer, 'send') is signer
        with pytest.raises(ReadOnlyContextError):
            require_signer(ReadOnlyProvider(chain), 'send')
        with pytest.raises(ReadOnlyContextError):
            require_signer(None, 'send')

    def test_validate_options(self):
        assert validate_options(None) == {}
        assert validate_options({'gas': 1}) == {'gas': 1}
        with pytest.raises(ValueError):
            validate_options({'to': '0x' + '00' * 20})
        with pytest.raises(ValueError):
            validate_options({'gasPrice': 1, 'maxFeePerGas': 2})
