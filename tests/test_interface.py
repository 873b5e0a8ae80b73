"""
Unit Tests for the Interface Descriptor
"""

import pytest
from eth_abi import encode
from web3 import Web3

from bindings import CallExecutionError, ContractFactory, ContractInterface, InterfaceError
from contracts import mock_core


MOCK_CORE_SELECTORS = {
    '0x06661abd': 'count()',
    '0x2bef2892': 'queueContains(bytes32)',
    '0x5190bc53': 'isReplica(address)',
    '0x522ae002': 'MAX_MESSAGE_BODY_BYTES()',
    '0x8d3638f4': 'localDomain()',
    '0x9fa92f9d': 'home()',
    '0xab91c7b0': 'queueLength()',
    '0xb95a2001': 'nonces(uint32)',
    '0xebf0c717': 'root()',
    '0xf6d16102': 'queueEnd()',
    '0xfa31de01': 'dispatch(uint32,bytes32,bytes)',
    '0xfd54b228': 'tree()',
}


@pytest.fixture
def interface():
    return mock_core.create_interface()


class TestMockCoreInterface:
    """Selectors and metadata of the MockCore ABI"""

    def test_selectors_match_deployed_dispatch_table(self, interface):
        assert interface.selectors == MOCK_CORE_SELECTORS

    def test_function_and_event_names(self, interface):
        assert len(interface.function_names) == 12
        assert set(interface.event_names) == {'Dispatch', 'Enqueue'}

    def test_no_constructor(self, interface):
        assert interface.constructor is None

    def test_state_changing(self, interface):
        assert interface.is_state_changing('dispatch')
        assert not interface.is_state_changing('count')
        assert not interface.is_state_changing('isReplica')

    def test_lookup_by_signature(self, interface):
        assert interface.get_function('nonces(uint32)')['name'] == 'nonces'
        assert interface.function_signature('dispatch') == 'dispatch(uint32,bytes32,bytes)'

    def test_unknown_function(self, interface):
        assert not interface.has_function('withdraw')
        with pytest.raises(InterfaceError):
            interface.get_function('withdraw')

    def test_interfaces_are_equal_values(self, interface):
        assert interface == mock_core.create_interface()
        assert hash(interface) == hash(mock_core.create_interface())

    def test_abi_copy_is_detached(self, interface):
        abi = interface.abi
        abi[0]['name'] = 'Tampered'
        assert interface.abi == mock_core.ABI


class TestEncoding:
    """Calldata and return data"""

    def test_encode_no_args(self, interface):
        assert interface.encode_function_data('count') == '0x06661abd'

    def test_encode_with_args(self, interface):
        item = b'\x11' * 32
        data = interface.encode_function_data('queueContains', [item])
        assert data == '0x2bef2892' + item.hex()

    def test_encode_dynamic_args(self, interface):
        recipient = b'\x22' * 32
        data = interface.encode_function_data('dispatch', [7, recipient, b'hello'])
        expected = encode(['uint32', 'bytes32', 'bytes'], [7, recipient, b'hello'])
        assert data == '0xfa31de01' + expected.hex()

    def test_wrong_arity(self, interface):
        with pytest.raises(InterfaceError):
            interface.encode_function_data('nonces', [])

    def test_decode_single_output(self, interface):
        data = encode(['uint32'], [5])
        assert interface.decode_function_result('localDomain', data) == 5

    def test_decode_empty_return_data(self, interface):
        with pytest.raises(CallExecutionError):
            interface.decode_function_result('count', b'')

    def test_decode_no_outputs(self, interface):
        assert interface.decode_function_result('dispatch', b'') is None


class TestEventDecoding:
    """Raw log decoding"""

    def test_decode_enqueue(self, interface):
        recipient = b'\x33' * 32
        log = {
            'address': '0x' + '00' * 20,
            'topics': [
                interface.event_topic('Enqueue'),
                encode(['uint32'], [9]),
                recipient,
            ],
            'data': encode(['bytes'], [b'body']),
            'logIndex': 0,
            'transactionHash': b'\x00' * 32,
        }

        event = interface.decode_event_log(log)

        assert event['event'] == 'Enqueue'
        assert event['args'] == {'_destination': 9, '_recipient': recipient, '_body': b'body'}

    def test_unknown_topic(self, interface):
        log = {'topics': [b'\xff' * 32], 'data': b''}
        assert interface.decode_event_log(log) is None

    def test_topic_count_mismatch(self, interface):
        log = {'topics': [interface.event_topic('Enqueue')], 'data': encode(['bytes'], [b''])}
        with pytest.raises(InterfaceError):
            interface.decode_event_log(log)


class TestValidation:
    """Malformed ABIs are rejected up front"""

    def test_duplicate_selector(self):
        entry = {'type': 'function', 'name': 'count', 'inputs': [], 'outputs': [], 'stateMutability': 'view'}
        with pytest.raises(InterfaceError):
            ContractInterface([entry, dict(entry)], name='Broken')

    def test_unknown_entry_type(self):
        with pytest.raises(InterfaceError):
            ContractInterface([{'type': 'modifier', 'name': 'onlyOwner'}])

    def test_not_a_list(self):
        with pytest.raises(InterfaceError):
            ContractInterface({'abi': []})

    def test_constructor_args(self):
        abi = [{
            'type': 'constructor',
            'inputs': [{'name': 'domain', 'type': 'uint32'}],
            'stateMutability': 'nonpayable',
        }]
        interface = ContractInterface(abi, name='WithCtor')

        assert interface.encode_deploy('0x6000', [5]) == '0x6000' + encode(['uint32'], [5]).hex()
        with pytest.raises(InterfaceError):
            interface.encode_deploy('0x6000', [1, 2])

    def test_constructor_args_without_constructor(self):
        with pytest.raises(InterfaceError):
            mock_core.create_interface().encode_deploy(mock_core.BYTECODE, [1])

    def test_missing_constructor_args(self):
        abi = [{
            'type': 'constructor',
            'inputs': [{'name': 'domain', 'type': 'uint32'}],
            'stateMutability': 'nonpayable',
        }]
        factory = ContractFactory(abi, '0x6000', name='WithCtor')

        with pytest.raises(InterfaceError):
            factory.get_deploy_transaction()

    def test_constructor_without_inputs(self):
        abi = [{'type': 'constructor', 'inputs': [], 'stateMutability': 'nonpayable'}]
        assert ContractInterface(abi).encode_deploy('0x6000') == '0x6000'

    def test_duplicate_event(self):
        event = {
            'type': 'event',
            'name': 'Enqueue',
            'inputs': [{'name': '_destination', 'type': 'uint32', 'indexed': True}],
            'anonymous': False,
        }
        with pytest.raises(InterfaceError):
            ContractInterface([event, dict(event)], name='Broken')


class TestAnonymousEvents:
    """Anonymous events have no signature topic"""

    ABI = [{
        'type': 'event',
        'name': 'Ping',
        'inputs': [{'name': 'value', 'type': 'uint256', 'indexed': False}],
        'anonymous': True,
    }]

    def test_no_topic(self):
        interface = ContractInterface(self.ABI, name='Pinger')

        assert interface.event_names == ['Ping']
        with pytest.raises(InterfaceError):
            interface.event_topic('Ping')

    def test_signature_topic_not_matched(self):
        interface = ContractInterface(self.ABI, name='Pinger')
        log = {
            'topics': [Web3.keccak(text='Ping(uint256)')],
            'data': encode(['uint256'], [1]),
        }

        assert interface.decode_event_log(log) is None
